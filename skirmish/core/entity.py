"""Entity base — identity, position and the three-phase interaction template.

Every placeable object in the world (creatures, items, obstacles) derives
from ``Entity``.  ``interact()`` runs:

  1. ``_pre_interaction()``   — debug log, overridable
  2. ``_execute_interaction()`` — abstract; every concrete type must define it
  3. ``_post_interaction()``  — debug log + INTERACTED notification

Because ``_execute_interaction`` is abstract, a subclass that forgets it
cannot be instantiated at all (``TypeError`` at construction).
"""

from __future__ import annotations

import itertools
import logging
from abc import ABC, abstractmethod

from skirmish.core.events import EventBus, EventKind, GameEvent
from skirmish.core.models import Vector2

logger = logging.getLogger(__name__)

_id_counter = itertools.count(1)


def allocate_entity_id() -> int:
    return next(_id_counter)


class InteractionEffect(ABC):
    """An effect that can be attached to an entity and applied to it later."""

    @abstractmethod
    def apply(self, target: Entity) -> None:
        """Apply the effect to *target*."""


class Entity(ABC):
    """Base class for every object placed in the world."""

    def __init__(
        self,
        pos: Vector2 | tuple[int, int],
        name: str,
        *,
        lootable: bool,
        removable: bool,
        bus: EventBus | None = None,
    ) -> None:
        if name is None:
            raise ValueError("Entity name must not be None")
        self.id: int = allocate_entity_id()
        self.pos: Vector2 = Vector2.of(pos)
        self.name: str = name
        self.lootable: bool = lootable
        self.removable: bool = removable
        self.bus: EventBus = bus if bus is not None else EventBus()
        self._effects: list[InteractionEffect] = []

        logger.debug("Created %s '%s' (#%d) at %s", type(self).__name__, self.name, self.id, self.pos)

    # -- interaction template --

    def interact(self) -> None:
        self._pre_interaction()
        self._execute_interaction()
        self._post_interaction()

    def _pre_interaction(self) -> None:
        logger.debug("Preparing interaction with %s", self.name)

    @abstractmethod
    def _execute_interaction(self) -> None:
        """Type-specific interaction logic."""

    def _post_interaction(self) -> None:
        logger.debug("Finished interaction with %s", self.name)
        self.bus.emit(GameEvent(EventKind.INTERACTED, self))

    # -- effects --

    @property
    def effects(self) -> tuple[InteractionEffect, ...]:
        return tuple(self._effects)

    def add_effect(self, effect: InteractionEffect) -> None:
        self._effects.append(effect)
        logger.debug("Added effect %s to %s", type(effect).__name__, self.name)

    def apply_effects(self) -> None:
        """Apply every registered effect to this entity, in insertion order."""
        for effect in self._effects:
            effect.apply(self)
            logger.debug("Applied %s to %s", type(effect).__name__, self.name)

    # -- movement --

    def move_to(self, new_pos: Vector2 | tuple[int, int]) -> None:
        """Set the position.  Callers placed in a World should go through
        ``World.move_entity`` so the spatial index stays in sync."""
        self.pos = Vector2.of(new_pos)
        logger.info("%s moved to %s", self.name, self.pos)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, name={self.name!r}, pos={self.pos})"
