from pathlib import Path
from typing import List, Sequence, Tuple, Union
import base64
import os
import cv2
import numpy as np
from dotenv import load_dotenv

from ..models.color import Color
from ..models.pixel_buffer import PixelBuffer
from ..models.region import Region
from ..repositories.image_repository import ImageRepository

# Load environment variables
load_dotenv()


def _parse_rgb(raw: str) -> Tuple[int, int, int]:
    r, g, b = (int(v) for v in raw.split(","))
    return r, g, b


class ImageService:
    """I/O and display helpers.  No segmentation or recolor logic."""
    def __init__(self):
        self.OUTLINE_COLOR = _parse_rgb(os.getenv("OUTLINE_COLOR", "255,255,255"))
        self.OUTLINE_ALPHA = float(os.getenv("OUTLINE_ALPHA", "0.5"))
        self.OUTLINE_THICKNESS = int(os.getenv("OUTLINE_THICKNESS", "2"))
        self.image_repository = ImageRepository()

    def create_buffer(self, pixels: np.ndarray, path: Union[str, Path] = None) -> PixelBuffer:
        return self.image_repository.create_buffer(pixels, path)

    def load(self, path: Union[str, Path]) -> PixelBuffer:
        """Load a single image from disk into a PixelBuffer."""
        return self.image_repository.load(path)

    def decode(self, data: bytes) -> PixelBuffer:
        return self.image_repository.decode(data)

    def save(self, buffer: PixelBuffer, path: Union[str, Path] = None) -> Path:
        return self.image_repository.save(buffer, path)

    def to_png_bytes(self, pixels: np.ndarray) -> bytes:
        return self.image_repository.encode_png(pixels)

    def to_base64(self, pixels: np.ndarray) -> str:
        """PNG data URL for JSON responses."""
        encoded = base64.b64encode(self.to_png_bytes(pixels)).decode("utf-8")
        return f"data:image/png;base64,{encoded}"

    # ─── display helpers ──────────────────────────────────────────────
    def outline_region(self, buffer: PixelBuffer, region: Region) -> np.ndarray:
        """
        Return a copy of the pixels with a translucent stroke around `region`.
        The buffer itself is not touched.
        """
        out = buffer.pixels.copy()
        rgb = np.ascontiguousarray(out[..., :3])
        stroked = rgb.copy()
        cv2.rectangle(stroked, (region.left, region.top), (region.right, region.bottom),
                      self.OUTLINE_COLOR, self.OUTLINE_THICKNESS)
        out[..., :3] = cv2.addWeighted(stroked, self.OUTLINE_ALPHA, rgb, 1.0 - self.OUTLINE_ALPHA, 0)
        return out

    @staticmethod
    def render_swatches(rows: Sequence[Sequence[Color]], swatch_size: int = 32,
                        gap: int = 2) -> np.ndarray:
        """
        Draw each color sequence as a row of square swatches.

        Args:
            rows: e.g. palette gradients, or a single shade grid.
            swatch_size: Side of one swatch in pixels.
            gap: Dark border between swatches.

        Returns:
            (H, W, 3) uint8 RGB strip.
        """
        rows: List[Sequence[Color]] = [r for r in rows if len(r)]
        if not rows:
            raise ValueError("Nothing to render")
        cols = max(len(r) for r in rows)
        cell = swatch_size + gap
        canvas = np.full((len(rows) * cell + gap, cols * cell + gap, 3), 40, dtype=np.uint8)

        for i, row in enumerate(rows):
            for j, color in enumerate(row):
                x1, y1 = gap + j * cell, gap + i * cell
                cv2.rectangle(canvas, (x1, y1), (x1 + swatch_size - 1, y1 + swatch_size - 1),
                              color.as_tuple(), -1)
        return canvas
