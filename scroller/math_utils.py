"""Math utilities for the simulation: 2D vectors and scalar helpers."""


class Vector2:
    """A mutable 2D vector. The y axis points down, as on screen."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x: float = float(x)
        self.y: float = float(y)

    def __eq__(self, other: object) -> bool:
        if other.__class__ is not Vector2:
            return False
        return abs(self.x - other.x) < 1e-9 and abs(self.y - other.y) < 1e-9

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into [low, high]."""
    return max(low, min(high, value))
