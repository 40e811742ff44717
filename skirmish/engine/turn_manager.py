"""TurnManager — round-robin turn order over a shared list of creatures.

The manager does not copy the list it is given: adding or removing through
either the manager or the owner is visible to both.  It never skips dead
creatures on its own; whoever handles a death must call ``remove_creature``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from skirmish.engine.exceptions import EmptyTurnOrderError

if TYPE_CHECKING:
    from skirmish.core.creature import Creature

logger = logging.getLogger(__name__)


def initiative_key(creature: Creature) -> int:
    """Initiative score.  Attack power stands in for speed."""
    return creature.base_damage


class TurnManager:
    """Manages turn order and round counting."""

    __slots__ = ("_creatures", "_current_index", "_round_number")

    def __init__(self, creatures: list[Creature]) -> None:
        if creatures is None:
            raise ValueError("creatures must be a list, got None")
        self._creatures = creatures
        self._current_index = 0
        self._round_number = 1
        logger.info("TurnManager initialized with %d creatures", len(self._creatures))

    # -- properties --

    @property
    def order(self) -> list[Creature]:
        return self._creatures

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def round_number(self) -> int:
        return self._round_number

    @property
    def current_creature(self) -> Creature:
        """The creature whose turn it is."""
        if not self._creatures:
            raise EmptyTurnOrderError("No creatures in the turn order")
        # Modulo: the owner may shrink the shared list behind our back.
        return self._creatures[self._current_index % len(self._creatures)]

    def __len__(self) -> int:
        return len(self._creatures)

    # -- progression --

    def next_turn(self) -> Creature:
        """Advance exactly one slot; wrapping to slot 0 starts a new round."""
        if not self._creatures:
            raise EmptyTurnOrderError("No creatures in the turn order")
        self._current_index = (self._current_index + 1) % len(self._creatures)

        if self._current_index == 0:
            self._round_number += 1
            logger.info("Starting round %d", self._round_number)

        current = self._creatures[self._current_index]
        logger.debug("%s's turn started", current.name)
        return current

    def get_turn_order(self) -> list[Creature]:
        """Snapshot of the rotation starting at the current creature."""
        if not self._creatures:
            return []
        start = self._current_index % len(self._creatures)
        return self._creatures[start:] + self._creatures[:start]

    def sort_by_initiative(self, key: Callable[[Creature], int] = initiative_key) -> None:
        """Reorder descending by initiative and restart from the top.

        The round counter is left alone.
        """
        self._creatures.sort(key=key, reverse=True)
        self._current_index = 0

        logger.info("Reordered turn initiative:")
        for creature in self._creatures:
            logger.info("- %s (Speed: %d)", creature.name, key(creature))

    # -- membership --

    def add_creature(self, creature: Creature | None) -> bool:
        if creature is None:
            return False
        self._creatures.append(creature)
        logger.info("Added %s to turn order", creature.name)
        return True

    def remove_creature(self, creature: Creature | None) -> bool:
        """Remove by identity, keeping the current actor's turn if it stays."""
        if creature is None:
            return False
        index = next((i for i, c in enumerate(self._creatures) if c is creature), -1)
        if index < 0:
            return False

        del self._creatures[index]
        if index < self._current_index:
            self._current_index -= 1
        elif self._current_index >= len(self._creatures):
            # The acting creature was last in the rotation: wrap like next_turn.
            self._current_index = 0
            if self._creatures:
                self._round_number += 1
                logger.info("Starting round %d", self._round_number)
        logger.info("Removed %s from turn order", creature.name)
        return True
