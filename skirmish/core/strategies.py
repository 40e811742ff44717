"""Special-attack strategies for weapons.

A strategy only computes the blow; the weapon applies its own wear
afterwards.  Strategies hold configuration, never per-item state, so one
instance can be shared by every weapon.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from skirmish.core.enums import DamageType

if TYPE_CHECKING:
    from skirmish.core.entity import Entity
    from skirmish.core.items import AttackItem


class SpecialAttackStrategy(ABC):

    @abstractmethod
    def execute_attack(self, weapon: AttackItem, target: Entity | None) -> int:
        """Return the damage dealt by this special attack."""


@dataclass(frozen=True, slots=True)
class PowerStrike(SpecialAttackStrategy):
    """A heavy swing: base damage times ``factor``."""

    factor: float = 2.0

    def execute_attack(self, weapon: AttackItem, target: Entity | None) -> int:
        return max(1, int(weapon.base_damage * self.factor))


@dataclass(frozen=True, slots=True)
class PiercingThrust(SpecialAttackStrategy):
    """Ignores part of the target's armor by adding its defense back up front."""

    def execute_attack(self, weapon: AttackItem, target: Entity | None) -> int:
        bonus = 0
        armor = getattr(target, "equipped_armor", None)
        if armor is not None and not armor.is_broken:
            bonus = armor.get_total_defense()
        return max(1, weapon.base_damage + bonus)


@dataclass(frozen=True, slots=True)
class ElementalBurst(SpecialAttackStrategy):
    """Extra damage when the weapon's type matches ``element``."""

    element: DamageType = DamageType.FIRE
    bonus: int = 5

    def execute_attack(self, weapon: AttackItem, target: Entity | None) -> int:
        damage = weapon.base_damage
        if weapon.damage_type == self.element:
            damage += self.bonus
        return max(1, damage)


STRATEGIES: dict[str, SpecialAttackStrategy] = {
    "power_strike": PowerStrike(),
    "piercing_thrust": PiercingThrust(),
    "elemental_burst": ElementalBurst(),
}


def get_strategy(name: str) -> SpecialAttackStrategy | None:
    return STRATEGIES.get(name)
