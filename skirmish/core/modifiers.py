"""Damage / defense modifier pipeline.

A modifier is a stateless transformer: it receives the running value and
returns the next one.  Pipelines apply modifiers strictly in insertion
order, so ``[+3, x2]`` and ``[x2, +3]`` give different results.

To add a new modifier family:
  1. Subclass DamageModifier or DefenseModifier.
  2. Implement apply().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from skirmish.core.enums import DamageType


# ---------------------------------------------------------------------------
# Abstract modifiers
# ---------------------------------------------------------------------------

class DamageModifier(ABC):
    """Transforms a running damage value."""

    @abstractmethod
    def apply(self, damage: int, is_critical: bool) -> int:
        """Return the damage after this modifier."""


class DefenseModifier(ABC):
    """Transforms a running defense value (no critical concept)."""

    @abstractmethod
    def apply(self, defense: int) -> int:
        """Return the defense after this modifier."""


# ---------------------------------------------------------------------------
# Damage modifiers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FlatDamageBonus(DamageModifier):
    """Adds a fixed amount (negative values are penalties)."""

    amount: int

    def apply(self, damage: int, is_critical: bool) -> int:
        return damage + self.amount


@dataclass(frozen=True, slots=True)
class DamageMultiplier(DamageModifier):
    """Scales damage, truncating toward zero."""

    factor: float

    def apply(self, damage: int, is_critical: bool) -> int:
        return int(damage * self.factor)


@dataclass(frozen=True, slots=True)
class CriticalBonus(DamageModifier):
    """Adds ``amount`` only when the hit is critical."""

    amount: int

    def apply(self, damage: int, is_critical: bool) -> int:
        return damage + self.amount if is_critical else damage


@dataclass(frozen=True, slots=True)
class ElementalEnchantment(DamageModifier):
    """Flat elemental bonus, e.g. a fire rune on a sword."""

    element: DamageType
    amount: int

    def apply(self, damage: int, is_critical: bool) -> int:
        return damage + self.amount


# ---------------------------------------------------------------------------
# Defense modifiers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FlatDefenseBonus(DefenseModifier):
    amount: int

    def apply(self, defense: int) -> int:
        return defense + self.amount


@dataclass(frozen=True, slots=True)
class DefenseMultiplier(DefenseModifier):
    factor: float

    def apply(self, defense: int) -> int:
        return int(defense * self.factor)


# ---------------------------------------------------------------------------
# Pipelines
# ---------------------------------------------------------------------------

def apply_damage_modifiers(
    damage: int,
    modifiers: Iterable[DamageModifier],
    is_critical: bool = False,
) -> int:
    """Run *damage* through each modifier in order."""
    for modifier in modifiers:
        damage = modifier.apply(damage, is_critical)
    return damage


def apply_defense_modifiers(defense: int, modifiers: Iterable[DefenseModifier]) -> int:
    for modifier in modifiers:
        defense = modifier.apply(defense)
    return defense
