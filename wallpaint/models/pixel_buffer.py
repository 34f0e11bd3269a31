from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple
import numpy as np

from ..errors import InvalidChannelCount, OutOfBounds


@dataclass
class PixelBuffer:
    """
    Simple data object: RGB(A) pixels (+ optional source path for bookkeeping).
    The channel count is fixed once the buffer exists.
    """
    pixels: np.ndarray  # Shape (H, W, 3|4), dtype uint8, RGB(A) order.
    path: Path | None = None  # Source of the image.

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] not in (3, 4):
            raise InvalidChannelCount(
                f"Expected an (H, W, 3|4) raster, got shape {self.pixels.shape}"
            )
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixels, got {self.pixels.dtype}")

    # ── Flat byte layout ─────────────────────────────────────────────
    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes, channels: int = 4) -> "PixelBuffer":
        """Build a buffer from a flat row-major byte array (W×H×channels)."""
        if channels not in (3, 4):
            raise InvalidChannelCount(f"Channel count must be 3 or 4, got {channels}")
        expected = width * height * channels
        if len(data) != expected:
            raise ValueError(f"Expected {expected} bytes for {width}x{height}x{channels}, got {len(data)}")
        arr = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, channels)
        return cls(pixels=arr.copy())

    def to_bytes(self) -> bytes:
        return np.ascontiguousarray(self.pixels).tobytes()

    # ── Geometry ─────────────────────────────────────────────────────
    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def channels(self) -> int:
        return self.pixels.shape[2]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBounds(f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} buffer")

    def index(self, x: int, y: int) -> int:
        """Offset of pixel (x, y) in the flat byte layout."""
        self.check_bounds(x, y)
        return (y * self.width + x) * self.channels

    # ── Pixel access ─────────────────────────────────────────────────
    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        self.check_bounds(x, y)
        r, g, b = self.pixels[y, x, :3]
        return int(r), int(g), int(b)

    def set_pixel(self, x: int, y: int, rgb: Tuple[int, int, int]) -> None:
        """Overwrite the RGB channels of one pixel; alpha is left alone."""
        self.check_bounds(x, y)
        self.pixels[y, x, :3] = rgb
