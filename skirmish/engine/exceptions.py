"""Exceptions raised by the turn scheduler and the encounter coordinator."""

from __future__ import annotations


class SkirmishError(Exception):
    """Base class for engine errors."""


class EmptyTurnOrderError(SkirmishError, LookupError):
    """The turn order has no creatures left."""


class ActionError(SkirmishError):
    """An externally requested action cannot be carried out."""


class EncounterOverError(ActionError):
    """The encounter has already been decided."""


class UnknownEntityError(ActionError, LookupError):
    """No entity with the requested id exists in the world."""

    def __init__(self, entity_id: int) -> None:
        super().__init__(f"No entity with id {entity_id}")
        self.entity_id = entity_id


class InvalidActionError(ActionError, ValueError):
    """The action is well-formed but not allowed right now."""
