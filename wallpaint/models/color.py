from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Color:
    """8-bit device RGB value object."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name}={value} outside [0, 255]")

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse '#RRGGBB' or '#RGB' (leading '#' optional)."""
        digits = value.strip().lstrip("#")
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        if len(digits) != 6:
            raise ValueError(f"Not a hex color: {value!r}")
        try:
            return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
        except ValueError:
            raise ValueError(f"Not a hex color: {value!r}") from None

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b


@dataclass(frozen=True)
class LabColor:
    """CIELAB triple: L in [0, 100], a/b roughly in [-128, 127]."""
    L: float
    a: float
    b: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return self.L, self.a, self.b


WHITE = Color(255, 255, 255)
LAB_WHITE = LabColor(100.0, 0.0, 0.0)
