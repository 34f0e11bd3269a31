class WallPaintError(Exception):
    """Base class for recoverable wall-painting errors."""


class OutOfBounds(WallPaintError, IndexError):
    """A seed or pixel coordinate lies outside the raster."""


class NoRegionSelected(WallPaintError, LookupError):
    """Recolor was requested before any wall region was detected."""

    def __init__(self, message: str = "Please select a wall region first."):
        super().__init__(message)


class InvalidChannelCount(WallPaintError, ValueError):
    """Pixel buffers carry either RGB (3) or RGBA (4) channels."""
