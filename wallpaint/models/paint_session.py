from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .color import Color
from .pixel_buffer import PixelBuffer
from .region import Region


@dataclass
class PaintSession:
    """
    State of one user's painting workflow.
    *   `buffer` is owned here; services only borrow it per call.
    *   `region` is the last detected wall (None until a click lands).
    *   `shades` is the shade grid of the last chosen base color.
    """
    buffer: PixelBuffer
    threshold: int = 50
    region: Optional[Region] = None
    base_color: Optional[Color] = None
    shades: List[Color] = field(default_factory=list)
