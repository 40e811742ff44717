"""Core value types: Vector2."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer grid coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def manhattan(self, other: Vector2) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def chebyshev(self, other: Vector2) -> int:
        return max(abs(self.x - other.x), abs(self.y - other.y))

    def as_tuple(self) -> tuple[int, int]:
        return self.x, self.y

    @classmethod
    def of(cls, value: Vector2 | tuple[int, int]) -> Vector2:
        """Coerce an ``(x, y)`` tuple into a Vector2 (Vector2 passes through)."""
        if isinstance(value, Vector2):
            return value
        x, y = value
        return cls(int(x), int(y))

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"
