from __future__ import annotations
import numpy as np

from ..models.color import Color, LabColor

# D65 reference white
_XN, _YN, _ZN = 0.950470, 1.0, 1.088830

_T0 = 4 / 29
_T1 = 6 / 29
_T2 = 3 * _T1 ** 2
_T3 = _T1 ** 3

_RGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
])
_XYZ_TO_RGB = np.array([
    [3.2404542, -1.5371385, -0.4985314],
    [-0.9692660, 1.8760108, 0.0415560],
    [0.0556434, -0.2040259, 1.0572252],
])


class ColorSpaceService:
    """
    sRGB <-> CIELAB conversions.  Pure functions, no state.

    The array variants take (..., 3) arrays so whole rasters or shade
    ramps convert in one call; the Color/LabColor variants wrap them.
    """

    # ── Array math ───────────────────────────────────────────────────
    @staticmethod
    def rgb_array_to_lab(rgb: np.ndarray) -> np.ndarray:
        """(..., 3) RGB in [0, 255] → (..., 3) float64 Lab."""
        c = np.asarray(rgb, dtype=np.float64) / 255.0
        linear = np.where(c <= 0.04045, c / 12.92, ((c + 0.055) / 1.055) ** 2.4)

        xyz = linear @ _RGB_TO_XYZ.T
        xyz = xyz / np.array([_XN, _YN, _ZN])
        f = np.where(xyz > _T3, np.cbrt(xyz), xyz / _T2 + _T0)

        fx, fy, fz = f[..., 0], f[..., 1], f[..., 2]
        L = 116.0 * fy - 16.0
        a = 500.0 * (fx - fy)
        b = 200.0 * (fy - fz)
        return np.stack([L, a, b], axis=-1)

    @staticmethod
    def lab_array_to_rgb(lab: np.ndarray) -> np.ndarray:
        """(..., 3) Lab → (..., 3) uint8 RGB, clamped to [0, 255] before rounding."""
        lab = np.asarray(lab, dtype=np.float64)
        fy = (lab[..., 0] + 16.0) / 116.0
        fx = fy + lab[..., 1] / 500.0
        fz = fy - lab[..., 2] / 200.0
        f = np.stack([fx, fy, fz], axis=-1)

        xyz = np.where(f > _T1, f ** 3, _T2 * (f - _T0))
        xyz = xyz * np.array([_XN, _YN, _ZN])

        linear = xyz @ _XYZ_TO_RGB.T
        # out-of-gamut Lab can push linear RGB below zero
        safe = np.clip(linear, 0.0, None)
        c = np.where(linear <= 0.0031308, 12.92 * linear, 1.055 * safe ** (1 / 2.4) - 0.055)

        return np.rint(np.clip(c * 255.0, 0.0, 255.0)).astype(np.uint8)

    # ── Value-object API ─────────────────────────────────────────────
    def to_lab(self, color: Color) -> LabColor:
        L, a, b = self.rgb_array_to_lab(np.array(color.as_tuple()))
        return LabColor(float(L), float(a), float(b))

    def to_rgb(self, lab: LabColor) -> Color:
        r, g, b = self.lab_array_to_rgb(np.array(lab.as_tuple()))
        return Color(int(r), int(g), int(b))

    @staticmethod
    def interpolate_lab(c1: LabColor, c2: LabColor, t: float) -> LabColor:
        """
        Linear interpolation on each Lab channel independently.

        Args:
            c1: Start color (t = 0).
            c2: End color (t = 1).
            t: Mix parameter in [0, 1].
        """
        if not 0.0 <= t <= 1.0:
            raise ValueError(f"Interpolation parameter must be in [0, 1], got {t}")
        return LabColor(
            c1.L + t * (c2.L - c1.L),
            c1.a + t * (c2.a - c1.a),
            c1.b + t * (c2.b - c1.b),
        )

    def delta_e(self, c1: Color, c2: Color) -> float:
        """CIE76 distance: Euclidean norm in Lab."""
        lab1 = np.array(self.to_lab(c1).as_tuple())
        lab2 = np.array(self.to_lab(c2).as_tuple())
        return float(np.linalg.norm(lab1 - lab2))
