import numpy as np
import pytest

from wallpaint.models.pixel_buffer import PixelBuffer


@pytest.fixture
def make_buffer():
    """Factory: uniform (h, w) buffer of one RGB color, optional alpha channel."""
    def _make(width=4, height=4, rgb=(200, 200, 200), alpha=None):
        channels = 3 if alpha is None else 4
        pixels = np.zeros((height, width, channels), dtype=np.uint8)
        pixels[..., :3] = rgb
        if alpha is not None:
            pixels[..., 3] = alpha
        return PixelBuffer(pixels)
    return _make


@pytest.fixture
def rgba_grey(make_buffer):
    return make_buffer(4, 4, (200, 200, 200), alpha=255)
