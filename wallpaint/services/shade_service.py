from __future__ import annotations
from typing import Iterable, List
import logging
import os
from dotenv import load_dotenv

from ..models.color import Color, LAB_WHITE
from ..models.palette import load_palette
from .color_space_service import ColorSpaceService

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


class ShadeService:
    """
    Lighter variants of a paint color, evenly spaced in Lab between the
    base color and white.  The same ramp feeds both the palette preview
    gradients and the selectable shade grid.
    """
    def __init__(self, color_space_service: ColorSpaceService | None = None):
        self.color_space_service = color_space_service or ColorSpaceService()
        self.SHADE_STEPS = int(os.getenv("SHADE_STEPS", "10"))

    def generate(self, base: Color, steps: int | None = None) -> List[Color]:
        """
        Args:
            base: First color of the ramp.
            steps: Number of shades (>= 2). Defaults to SHADE_STEPS.

        Returns:
            List of `steps` colors; the first is `base`, the last is white.
        """
        if steps is None:
            steps = self.SHADE_STEPS
        if steps < 2:
            raise ValueError(f"A shade ramp needs at least 2 steps, got {steps}")

        base_lab = self.color_space_service.to_lab(base)
        shades = []
        for i in range(steps):
            t = i / (steps - 1)
            lab = self.color_space_service.interpolate_lab(base_lab, LAB_WHITE, t)
            shades.append(self.color_space_service.to_rgb(lab))

        if logger.isEnabledFor(logging.DEBUG):
            spacing = [self.color_space_service.delta_e(a, b) for a, b in zip(shades, shades[1:])]
            logger.debug(f"Generated {steps} shades for {base.to_hex()}, "
                         f"delta E {min(spacing):.2f}..{max(spacing):.2f}")
        return shades

    def palette_gradients(self, palette: Iterable[Color] | None = None,
                          steps: int | None = None) -> List[List[Color]]:
        """One shade ramp per palette color, in palette order."""
        if palette is None:
            palette = load_palette()
        return [self.generate(color, steps) for color in palette]
