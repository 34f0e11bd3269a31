from dataclasses import dataclass


@dataclass(frozen=True)
class Region:
    """
    Axis-aligned bounding box of a detected wall.
    All four bounds are inclusive: right/bottom are the largest visited
    coordinates, not one-past-the-end.
    """
    left: int
    top: int
    right: int
    bottom: int

    def __post_init__(self):
        if self.left > self.right or self.top > self.bottom:
            raise ValueError(f"Degenerate region bounds: {self}")

    @classmethod
    def point(cls, x: int, y: int) -> "Region":
        return cls(left=x, top=y, right=x, bottom=y)

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    def contains(self, x: int, y: int) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def as_dict(self) -> dict:
        return {"left": self.left, "top": self.top, "right": self.right, "bottom": self.bottom}
