"""World — bounds plus the spatial index of everything placed on the grid."""

from __future__ import annotations

import logging

from skirmish.core.creature import Creature
from skirmish.core.entity import Entity
from skirmish.core.models import Vector2
from skirmish.systems.spatial_hash import SpatialHash

logger = logging.getLogger(__name__)


class World:
    """The grid an encounter is fought on.

    Placement never raises: a missing entity or an out-of-bounds position is
    logged and the entity stays unplaced.
    """

    __slots__ = ("max_x", "max_y", "creatures", "world_objects", "_spatial_index")

    def __init__(self, max_x: int = 10, max_y: int = 10) -> None:
        if max_x <= 0 or max_y <= 0:
            raise ValueError(f"World bounds must be positive, got {max_x}x{max_y}")
        self.max_x = max_x
        self.max_y = max_y
        self.creatures: list[Creature] = []
        self.world_objects: list[Entity] = []
        self._spatial_index = SpatialHash()

    def is_position_valid(self, pos: Vector2 | tuple[int, int]) -> bool:
        pos = Vector2.of(pos)
        return 0 <= pos.x < self.max_x and 0 <= pos.y < self.max_y

    # -- placement --

    def add_creature(self, creature: Creature | None) -> bool:
        if creature is None:
            logger.warning("Attempted to add null creature")
            return False
        if not self.is_position_valid(creature.pos):
            logger.error("Invalid position %s for creature %s", creature.pos, creature.name)
            return False

        self.creatures.append(creature)
        self._spatial_index.insert(creature, creature.pos)
        logger.info("Added creature %s at %s", creature.name, creature.pos)
        return True

    def add_world_object(self, world_object: Entity | None) -> bool:
        if world_object is None:
            logger.warning("Attempted to add null world object")
            return False
        if not self.is_position_valid(world_object.pos):
            logger.error("Invalid position %s for object %s", world_object.pos, world_object.name)
            return False

        self.world_objects.append(world_object)
        self._spatial_index.insert(world_object, world_object.pos)
        logger.info("Added world object %s at %s", world_object.name, world_object.pos)
        return True

    def remove_world_object(self, world_object: Entity) -> bool:
        """Take a removable object off the grid (e.g. after it is looted)."""
        if not world_object.removable:
            logger.warning("%s cannot be removed from the world", world_object.name)
            return False
        if world_object not in self.world_objects:
            return False
        self.world_objects.remove(world_object)
        self._spatial_index.remove(world_object, world_object.pos)
        logger.debug("Removed world object %s from %s", world_object.name, world_object.pos)
        return True

    def unindex_creature(self, creature: Creature) -> bool:
        """Drop a creature from the spatial index but keep it in ``creatures``."""
        removed = self._spatial_index.remove(creature, creature.pos)
        if removed:
            logger.debug("Unindexed %s at %s", creature.name, creature.pos)
        return removed

    def move_entity(self, entity: Entity, new_pos: Vector2 | tuple[int, int]) -> bool:
        new_pos = Vector2.of(new_pos)
        if not self.is_position_valid(new_pos):
            logger.error("Invalid move of %s to %s", entity.name, new_pos)
            return False
        old_pos = entity.pos
        entity.move_to(new_pos)
        self._spatial_index.move(entity, old_pos, new_pos)
        return True

    # -- queries --

    def get_objects_at(self, pos: Vector2 | tuple[int, int]) -> tuple[Entity, ...]:
        return self._spatial_index.query_cell(Vector2.of(pos))

    def get_objects_near(self, pos: Vector2 | tuple[int, int], radius: int) -> list[Entity]:
        return self._spatial_index.query_radius(Vector2.of(pos), radius)

    def living_creatures(self) -> list[Creature]:
        return [c for c in self.creatures if c.alive]

    def find_entity(self, entity_id: int) -> Entity | None:
        for entity in self.creatures:
            if entity.id == entity_id:
                return entity
        for entity in self.world_objects:
            if entity.id == entity_id:
                return entity
        return None
