# pipeline/wall_painter.py
from __future__ import annotations
from pathlib import Path
from typing import List
import logging

from ..errors import NoRegionSelected
from ..models.color import Color
from ..models.paint_session import PaintSession
from ..models.region import Region
from ..services.image_service import ImageService
from ..services.recolor_service import RecolorService
from ..services.region_service import RegionService
from ..services.shade_service import ShadeService

logger = logging.getLogger(__name__)


def load_session(
    path: str | Path,
    *,
    image_service: ImageService | None = None,
    region_service: RegionService | None = None,
) -> PaintSession:
    """Open an image and start a fresh session with no wall selected."""
    image_service = image_service or ImageService()
    region_service = region_service or RegionService()
    buffer = image_service.load(path)
    return PaintSession(buffer=buffer, threshold=region_service.WALL_THRESHOLD)


def select_wall(
    session: PaintSession,
    x: int,
    y: int,
    threshold: int | None = None,
    *,
    region_service: RegionService | None = None,
) -> Region:
    """
    Detect the wall under (x, y). The new region replaces any previous one;
    regions are never merged. A `threshold` given here becomes the session
    threshold only once detection succeeds.
    """
    region_service = region_service or RegionService()
    if threshold is None:
        threshold = session.threshold
    region = region_service.detect(session.buffer, x, y, threshold)
    session.threshold = threshold
    session.region = region
    return region


def choose_base_color(
    session: PaintSession,
    color: Color,
    *,
    shade_service: ShadeService | None = None,
) -> List[Color]:
    """Regenerate the shade grid for a newly picked palette color."""
    shade_service = shade_service or ShadeService()
    session.base_color = color
    session.shades = shade_service.generate(color)
    return session.shades


def apply_shade(
    session: PaintSession,
    shade: int | Color,
    *,
    recolor_service: RecolorService | None = None,
) -> None:
    """
    Paint the selected wall with a shade, given either its index in the
    current shade grid or a Color directly.
    """
    recolor_service = recolor_service or RecolorService()
    if session.region is None:
        raise NoRegionSelected()

    if isinstance(shade, Color):
        color = shade
    else:
        if not session.shades:
            raise ValueError("No shades generated yet; choose a base color first")
        if not 0 <= shade < len(session.shades):
            raise IndexError(f"Shade index {shade} outside 0..{len(session.shades) - 1}")
        color = session.shades[shade]

    recolor_service.apply(session.buffer, session.region, color)
    logger.info(f"Applied {color.to_hex()} to wall {session.region.as_dict()}")
