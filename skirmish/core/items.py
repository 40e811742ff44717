"""Item hierarchy: weapons, armor, potions and obstacles.

Items are world entities until a creature picks them up.  ``capability``
tells ``Creature.pick`` what to do with an item without isinstance chains.

Weapons and armor wear out: durability is clamped at 0 and an item at 0 is
*broken* (it stays in place but contributes nothing in combat).  Repairs
are capped at ``max_durability``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from skirmish.core.entity import Entity
from skirmish.core.enums import DamageType, Domain, ItemCapability
from skirmish.core.events import EventBus, EventKind, GameEvent
from skirmish.core.models import Vector2
from skirmish.core.modifiers import (
    DamageModifier,
    DefenseModifier,
    apply_damage_modifiers,
    apply_defense_modifiers,
)
from skirmish.systems.rng import DeterministicRNG

if TYPE_CHECKING:
    from skirmish.core.strategies import SpecialAttackStrategy

logger = logging.getLogger(__name__)

DEFAULT_CRITICAL_MULTIPLIER = 1.5
DEFAULT_SPECIAL_ATTACK_WEAR = 5

_DEFAULT_RNG = DeterministicRNG(0)


# ---------------------------------------------------------------------------
# Bases
# ---------------------------------------------------------------------------

class Item(Entity):
    """A lootable, removable world object."""

    capability: ItemCapability = ItemCapability.NONE

    def __init__(self, pos: Vector2 | tuple[int, int], name: str, *, bus: EventBus | None = None) -> None:
        super().__init__(pos, name, lootable=True, removable=True, bus=bus)


class DurableItem(Item):
    """An item that wears out with use."""

    def __init__(
        self,
        pos: Vector2 | tuple[int, int],
        name: str,
        durability: int,
        max_durability: int | None = None,
        *,
        bus: EventBus | None = None,
    ) -> None:
        if durability < 0:
            raise ValueError(f"durability must be >= 0, got {durability}")
        if max_durability is None:
            max_durability = durability
        if max_durability < durability:
            raise ValueError(f"max_durability ({max_durability}) is below durability ({durability})")
        super().__init__(pos, name, bus=bus)
        self.durability: int = durability
        self.max_durability: int = max_durability

    @property
    def is_broken(self) -> bool:
        return self.durability == 0

    def reduce_durability(self, amount: int) -> int:
        """Wear the item down by *amount*, clamping at 0.  Returns the new value."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        was_intact = self.durability > 0
        self.durability = max(0, self.durability - amount)
        logger.debug("%s durability -%d -> %d", self.name, amount, self.durability)
        self.bus.emit(GameEvent(EventKind.DURABILITY_CHANGED, self, self.durability))
        if was_intact and self.durability == 0:
            logger.warning("%s is broken!", self.name)
            self.bus.emit(GameEvent(EventKind.ITEM_BROKEN, self))
        return self.durability

    def repair(self, amount: int) -> int:
        """Restore up to *amount* durability, never above ``max_durability``."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        self.durability = min(self.max_durability, self.durability + amount)
        logger.info("%s repaired to %d/%d", self.name, self.durability, self.max_durability)
        self.bus.emit(GameEvent(EventKind.DURABILITY_CHANGED, self, self.durability))
        return self.durability


# ---------------------------------------------------------------------------
# Weapons
# ---------------------------------------------------------------------------

class AttackItem(DurableItem):
    """A weapon.  Each damage calculation rolls for a critical and wears it by 1."""

    capability = ItemCapability.WEAPON

    def __init__(
        self,
        pos: Vector2 | tuple[int, int],
        name: str,
        base_damage: int,
        *,
        range: int = 1,
        damage_type: DamageType = DamageType.PHYSICAL,
        critical_chance: int = 0,
        durability: int = 100,
        max_durability: int | None = None,
        modifiers: Iterable[DamageModifier] = (),
        critical_multiplier: float = DEFAULT_CRITICAL_MULTIPLIER,
        special_attack_wear: int = DEFAULT_SPECIAL_ATTACK_WEAR,
        rng: DeterministicRNG | None = None,
        stream: int | None = None,
        bus: EventBus | None = None,
    ) -> None:
        if not 0 <= critical_chance <= 100:
            raise ValueError(f"critical_chance must be within 0-100, got {critical_chance}")
        super().__init__(pos, name, durability, max_durability, bus=bus)
        self.base_damage = base_damage
        self.range = range
        self.damage_type = DamageType(damage_type)
        self.critical_chance = critical_chance
        self.critical_multiplier = critical_multiplier
        self.special_attack_wear = special_attack_wear
        self.modifiers: list[DamageModifier] = list(modifiers)
        self._rng = rng if rng is not None else _DEFAULT_RNG
        # Critical rolls are keyed on the stream, not the process-wide id.
        self.stream = stream if stream is not None else self.id
        self._rolls = 0

    def add_modifier(self, modifier: DamageModifier) -> None:
        self.modifiers.append(modifier)

    def roll_critical(self) -> bool:
        """Draw a d100 on this weapon's stream; critical when it is <= critical_chance."""
        hit = self._rng.percent_check(self.critical_chance, Domain.CRITICAL, self.stream, self._rolls)
        self._rolls += 1
        return hit

    def calculate_damage(self) -> int:
        is_critical = self.roll_critical()
        damage = apply_damage_modifiers(self.base_damage, self.modifiers, is_critical)
        if is_critical:
            damage = int(damage * self.critical_multiplier)
            logger.info("%s lands a critical hit!", self.name)
        damage = max(1, damage)
        self.reduce_durability(1)
        return damage

    def perform_special_attack(self, strategy: SpecialAttackStrategy, target: Entity | None = None) -> int:
        """Let *strategy* compute the blow, then wear the weapon heavily."""
        damage = strategy.execute_attack(self, target)
        logger.info("%s performs %s for %d", self.name, type(strategy).__name__, damage)
        self.reduce_durability(self.special_attack_wear)
        return damage

    def _execute_interaction(self) -> None:
        logger.info(
            "%s is a %s weapon with %d damage (range %d, durability %d/%d).",
            self.name, self.damage_type.name.lower(), self.base_damage,
            self.range, self.durability, self.max_durability,
        )


# ---------------------------------------------------------------------------
# Armor
# ---------------------------------------------------------------------------

class DefenceItem(DurableItem):
    """Armor.  Its defense is never worn down implicitly by calculating it."""

    capability = ItemCapability.ARMOR

    def __init__(
        self,
        pos: Vector2 | tuple[int, int],
        name: str,
        base_defense: int,
        *,
        defense_type: DamageType = DamageType.PHYSICAL,
        durability: int = 100,
        max_durability: int | None = None,
        modifiers: Iterable[DefenseModifier] = (),
        bus: EventBus | None = None,
    ) -> None:
        super().__init__(pos, name, durability, max_durability, bus=bus)
        self.base_defense = base_defense
        self.defense_type = DamageType(defense_type)
        self.modifiers: list[DefenseModifier] = list(modifiers)

    def add_modifier(self, modifier: DefenseModifier) -> None:
        self.modifiers.append(modifier)

    def get_total_defense(self) -> int:
        return max(0, apply_defense_modifiers(self.base_defense, self.modifiers))

    def _execute_interaction(self) -> None:
        logger.info(
            "%s is a defense item with %d defense points (durability %d/%d).",
            self.name, self.get_total_defense(), self.durability, self.max_durability,
        )


# ---------------------------------------------------------------------------
# Consumables
# ---------------------------------------------------------------------------

class HealthPotion(Item):
    """Single-use healing item."""

    capability = ItemCapability.CONSUMABLE

    def __init__(
        self,
        pos: Vector2 | tuple[int, int],
        name: str,
        heal_amount: int,
        *,
        bus: EventBus | None = None,
    ) -> None:
        if heal_amount < 0:
            raise ValueError(f"heal_amount must be >= 0, got {heal_amount}")
        super().__init__(pos, name, bus=bus)
        self.heal_amount = heal_amount
        self.consumed = False

    def _execute_interaction(self) -> None:
        logger.info("%s heals for %d HP and disappears.", self.name, self.heal_amount)


# ---------------------------------------------------------------------------
# Scenery
# ---------------------------------------------------------------------------

class Obstacle(Entity):
    """Static scenery: cannot be looted or removed."""

    capability = ItemCapability.NONE

    def __init__(self, pos: Vector2 | tuple[int, int], name: str, *, bus: EventBus | None = None) -> None:
        super().__init__(pos, name, lootable=False, removable=False, bus=bus)

    def _execute_interaction(self) -> None:
        logger.info("%s is an obstacle and cannot be moved.", self.name)
