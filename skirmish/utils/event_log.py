"""Event log — records every core notification for the API event feed."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Callable

from skirmish.core.events import EventBus, EventKind, GameEvent


@dataclass(frozen=True, slots=True)
class EncounterEvent:
    """A single encounter event, flattened for display."""

    round: int
    category: str
    message: str
    entity_ids: tuple[int, ...] = ()  # IDs of entities involved in this event
    metadata: dict[str, Any] | None = None


def _describe(event: GameEvent) -> tuple[str, dict[str, Any] | None]:
    name = getattr(event.source, "name", repr(event.source))
    match event.kind:
        case EventKind.DAMAGE_TAKEN:
            life = getattr(event.source, "life_points", None)
            return f"{name} took {event.amount} damage", {"damage": event.amount, "life_points": life}
        case EventKind.CREATURE_DIED:
            return f"{name} died", None
        case EventKind.DURABILITY_CHANGED:
            return f"{name} durability is now {event.amount}", {"durability": event.amount}
        case EventKind.ITEM_BROKEN:
            return f"{name} broke", None
        case _:
            return f"{name} was interacted with", None


class EventLog:
    """Bounded event log.  Subscribes to a bus and keeps the newest events."""

    __slots__ = ("_buffer", "_round_source")

    def __init__(self, maxlen: int | None = 1000, round_source: Callable[[], int] | None = None) -> None:
        self._buffer: deque[EncounterEvent] = deque(maxlen=maxlen)
        self._round_source = round_source

    def attach(self, bus: EventBus) -> None:
        bus.subscribe_all(self.record)

    def record(self, event: GameEvent) -> None:
        message, metadata = _describe(event)
        source_id = getattr(event.source, "id", None)
        self.append(EncounterEvent(
            round=self._round_source() if self._round_source else 0,
            category=event.kind.name.lower(),
            message=message,
            entity_ids=(source_id,) if source_id is not None else (),
            metadata=metadata,
        ))

    def append(self, event: EncounterEvent) -> None:
        self._buffer.append(event)

    def since_round(self, round_number: int) -> list[EncounterEvent]:
        """Return all events with round >= *round_number*."""
        return [e for e in self._buffer if e.round >= round_number]

    def latest(self, count: int = 50) -> list[EncounterEvent]:
        """Return the *count* most recent events."""
        items = list(self._buffer)
        return items[-count:] if count > 0 else []

    def __len__(self) -> int:
        return len(self._buffer)

    def clear(self) -> None:
        self._buffer.clear()
