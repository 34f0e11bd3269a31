"""Wall paint visualizer: pick a wall by clicking it, then repaint it with a shade."""

__version__ = "1.0.0"
