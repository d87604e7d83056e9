"""Shared geometry for simulation entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Box:
    """Axis-aligned bounding box in simulation units (y grows downward).

    Attributes:
        left: x of the left edge
        top: y of the top edge
        width: extent along x
        height: extent along y
    """

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def shrink(self, padding: float) -> "Box":
        """Return this box with ``padding`` removed from all four edges."""
        if padding == 0:
            return self
        return Box(
            self.left + padding,
            self.top + padding,
            self.width - 2 * padding,
            self.height - 2 * padding,
        )

    def overlaps(self, other: "Box") -> bool:
        """Strict overlap test: boxes that only share an edge do not overlap."""
        return (
            self.right > other.left
            and self.left < other.right
            and self.bottom > other.top
            and self.top < other.bottom
        )

    def as_tuple(self) -> tuple:
        return (self.left, self.top, self.width, self.height)
