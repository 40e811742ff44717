"""Outbound notifications — a small synchronous observer registry.

Every state transition of interest in the core (damage, death, durability
change, broken item, interaction) is published as a ``GameEvent`` on an
``EventBus``.  Handlers run synchronously, in subscription order, inside the
call that triggered them.  Publishing never depends on anyone listening.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from enum import IntEnum, unique
from typing import Any, Callable

logger = logging.getLogger(__name__)


@unique
class EventKind(IntEnum):
    DAMAGE_TAKEN = 0
    CREATURE_DIED = 1
    DURABILITY_CHANGED = 2
    ITEM_BROKEN = 3
    INTERACTED = 4


@dataclass(frozen=True, slots=True)
class GameEvent:
    """A single notification.

    ``source`` is the entity the event is about (the damaged creature, the
    worn item, ...).  ``amount`` carries the damage taken or the new
    durability value where that applies.
    """

    kind: EventKind
    source: Any
    amount: int | None = None


Handler = Callable[[GameEvent], None]


class EventBus:
    """Single-dispatch-to-many fan-out keyed by ``EventKind``."""

    __slots__ = ("_handlers", "_catch_all")

    def __init__(self) -> None:
        self._handlers: dict[EventKind, list[Handler]] = defaultdict(list)
        self._catch_all: list[Handler] = []

    def subscribe(self, kind: EventKind, handler: Handler) -> None:
        self._handlers[kind].append(handler)

    def subscribe_all(self, handler: Handler) -> None:
        """Receive every event regardless of kind (used by the event log)."""
        self._catch_all.append(handler)

    def unsubscribe(self, kind: EventKind, handler: Handler) -> bool:
        handlers = self._handlers.get(kind)
        if handlers and handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def emit(self, event: GameEvent) -> None:
        # Copy so a handler may unsubscribe itself mid-dispatch.
        for handler in list(self._handlers.get(event.kind, ())):
            handler(event)
        for handler in list(self._catch_all):
            handler(event)

    def handler_count(self, kind: EventKind) -> int:
        return len(self._handlers.get(kind, ()))
