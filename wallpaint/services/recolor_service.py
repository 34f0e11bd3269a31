from __future__ import annotations
from typing import Optional
import logging

from ..errors import NoRegionSelected, OutOfBounds
from ..models.color import Color
from ..models.pixel_buffer import PixelBuffer
from ..models.region import Region

logger = logging.getLogger(__name__)


class RecolorService:
    """Flat repaint of a wall region. No blending, no texture preservation."""

    @staticmethod
    def apply(buffer: PixelBuffer, region: Optional[Region], color: Color) -> None:
        """
        Overwrite R, G, B of every pixel inside `region` (bounds inclusive)
        with `color`. Alpha, when present, is kept. Mutates `buffer` in place.
        """
        if region is None:
            raise NoRegionSelected()
        if not (buffer.in_bounds(region.left, region.top) and buffer.in_bounds(region.right, region.bottom)):
            raise OutOfBounds(
                f"Region {region.as_dict()} exceeds the {buffer.width}x{buffer.height} buffer"
            )

        buffer.pixels[region.top:region.bottom + 1, region.left:region.right + 1, :3] = color.as_tuple()
        logger.info(f"Painted {region.width}x{region.height} region with {color.to_hex()}")
