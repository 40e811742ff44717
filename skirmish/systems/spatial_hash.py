"""Spatial hashing for O(1) lookups by grid cell."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from skirmish.core.models import Vector2

if TYPE_CHECKING:
    from skirmish.core.entity import Entity


class SpatialHash:
    """Maps each grid cell to the entities standing on it, in arrival order.

    Several entities may share a cell; later arrivals are appended.
    """

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: dict[tuple[int, int], list[Entity]] = defaultdict(list)

    @staticmethod
    def _key(pos: Vector2) -> tuple[int, int]:
        return pos.x, pos.y

    def insert(self, entity: Entity, pos: Vector2) -> None:
        self._cells[self._key(pos)].append(entity)

    def remove(self, entity: Entity, pos: Vector2) -> bool:
        key = self._key(pos)
        bucket = self._cells.get(key)
        if bucket is None:
            return False
        for i, occupant in enumerate(bucket):
            if occupant is entity:
                del bucket[i]
                if not bucket:
                    del self._cells[key]
                return True
        return False

    def move(self, entity: Entity, old_pos: Vector2, new_pos: Vector2) -> None:
        if self._key(old_pos) != self._key(new_pos):
            self.remove(entity, old_pos)
            self.insert(entity, new_pos)

    def query_cell(self, pos: Vector2) -> tuple[Entity, ...]:
        """Return the entities on *pos* (a snapshot, never the live bucket)."""
        bucket = self._cells.get(self._key(pos))
        return tuple(bucket) if bucket else ()

    def query_radius(self, pos: Vector2, radius: int) -> list[Entity]:
        """Return entities within *radius* cells (Chebyshev distance) of *pos*."""
        result: list[Entity] = []
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                bucket = self._cells.get((pos.x + dx, pos.y + dy))
                if bucket:
                    result.extend(bucket)
        return result

    def occupied_cells(self) -> list[tuple[int, int]]:
        return sorted(self._cells)

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._cells.values())

    def clear(self) -> None:
        self._cells.clear()
