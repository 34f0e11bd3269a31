from __future__ import annotations
from typing import List
import os
from dotenv import load_dotenv

from .color import Color

# Load environment variables
load_dotenv()

# Fixed paint colors, in display order.
DEFAULT_PALETTE_HEX: List[str] = [
    "#F44336",  # Red
    "#FF9800",  # Orange
    "#FFEB3B",  # Yellow
    "#4CAF50",  # Green
    "#2196F3",  # Blue
    "#9C27B0",  # Purple
    "#E91E63",  # Pink
    "#607D8B",  # Grey
    "#00BCD4",  # Cyan
]


def load_palette() -> List[Color]:
    """
    Return the base paint colors, honouring WALLPAINT_PALETTE
    (comma-separated hex) when it is set.
    """
    raw = os.getenv("WALLPAINT_PALETTE", "")
    entries = [e.strip() for e in raw.split(",") if e.strip()] or DEFAULT_PALETTE_HEX
    return [Color.from_hex(e) for e in entries]
