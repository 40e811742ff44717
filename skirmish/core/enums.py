"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class DamageType(IntEnum):
    """Damage families carried by weapons (and guarded against by armor)."""

    PHYSICAL = 0
    MAGICAL = 1
    FIRE = 2
    ICE = 3
    PIERCING = 4


@unique
class ItemCapability(IntEnum):
    """What a creature can do with an item it picks up."""

    NONE = 0
    WEAPON = 1
    ARMOR = 2
    CONSUMABLE = 3


@unique
class Difficulty(IntEnum):
    """Encounter difficulty levels."""

    BEGINNER = 0        # Weaker opponents
    INTERMEDIATE = 1    # Standard
    PRO = 2             # For experienced players

    @classmethod
    def parse(cls, text: str | None) -> Difficulty:
        """Parse a difficulty name case-insensitively; unknown names -> BEGINNER."""
        if not text:
            return cls.BEGINNER
        match text.strip().lower():
            case "intermediate":
                return cls.INTERMEDIATE
            case "pro":
                return cls.PRO
            case _:
                return cls.BEGINNER


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    CRITICAL = 0
    SPAWN = 1
    LOOT = 2
    SPECIAL = 3
