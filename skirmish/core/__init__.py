"""Core combat model: entities, items, creatures and the world grid.

Only the leaf types are re-exported here; items, creatures and the world
pull in ``skirmish.systems`` and are imported from their own modules.
"""

from skirmish.core.enums import DamageType, Difficulty, Domain, ItemCapability
from skirmish.core.models import Vector2
from skirmish.core.events import EventBus, EventKind, GameEvent
from skirmish.core.entity import Entity, InteractionEffect

__all__ = [
    "DamageType",
    "Difficulty",
    "Domain",
    "Entity",
    "EventBus",
    "EventKind",
    "GameEvent",
    "InteractionEffect",
    "ItemCapability",
    "Vector2",
]
