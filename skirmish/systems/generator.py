"""Encounter generator — populates a world with two teams, loot and scenery."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from skirmish.core.creature import Creature
from skirmish.core.enums import DamageType, Difficulty, Domain
from skirmish.core.items import AttackItem, DefenceItem, HealthPotion, Obstacle
from skirmish.core.models import Vector2
from skirmish.core.modifiers import CriticalBonus, ElementalEnchantment, FlatDefenseBonus

if TYPE_CHECKING:
    from skirmish.config import EncounterConfig
    from skirmish.engine.encounter import Encounter
    from skirmish.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

HERO_TEAM = "heroes"
MONSTER_TEAM = "monsters"


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class WeaponTemplate:
    name: str
    base_damage: int
    range: int = 1
    damage_type: DamageType = DamageType.PHYSICAL
    critical_chance: int = 10
    durability: int = 30


@dataclass(frozen=True, slots=True)
class ArmorTemplate:
    name: str
    base_defense: int
    defense_type: DamageType = DamageType.PHYSICAL
    durability: int = 40


WEAPONS: dict[str, WeaponTemplate] = {
    "rusty_sword":   WeaponTemplate("Rusty Sword",   3, critical_chance=5,  durability=15),
    "iron_sword":    WeaponTemplate("Iron Sword",    5, critical_chance=10),
    "hunting_bow":   WeaponTemplate("Hunting Bow",   4, range=4, damage_type=DamageType.PIERCING, critical_chance=15),
    "fire_staff":    WeaponTemplate("Fire Staff",    6, range=3, damage_type=DamageType.FIRE, critical_chance=10, durability=20),
    "frost_wand":    WeaponTemplate("Frost Wand",    5, range=3, damage_type=DamageType.ICE, critical_chance=12, durability=20),
}

ARMORS: dict[str, ArmorTemplate] = {
    "leather_vest":  ArmorTemplate("Leather Vest", 2),
    "chainmail":     ArmorTemplate("Chainmail",    4, durability=60),
    "warded_robe":   ArmorTemplate("Warded Robe",  2, defense_type=DamageType.MAGICAL, durability=30),
}

# (health, damage, defense) per archetype
HERO_ARCHETYPES: dict[str, tuple[int, int, int]] = {
    "Knight": (40, 4, 2),
    "Ranger": (30, 5, 1),
    "Mage":   (25, 6, 0),
}

MONSTER_ARCHETYPES: dict[str, tuple[int, int, int]] = {
    "Goblin": (20, 3, 0),
    "Orc":    (35, 5, 1),
    "Wolf":   (18, 4, 0),
}

# Monster stat multipliers per difficulty: (health_mult, damage_mult, extra_monsters)
_DIFFICULTY_SCALE: dict[Difficulty, tuple[float, float, int]] = {
    Difficulty.BEGINNER:     (0.8, 0.8, 0),
    Difficulty.INTERMEDIATE: (1.0, 1.0, 1),
    Difficulty.PRO:          (1.4, 1.3, 2),
}


def make_weapon(template_id: str, pos: Vector2 | tuple[int, int], rng: DeterministicRNG | None = None,
                config: EncounterConfig | None = None, stream: int | None = None) -> AttackItem:
    t = WEAPONS[template_id]
    kwargs = {}
    if config is not None:
        kwargs = dict(critical_multiplier=config.critical_multiplier, special_attack_wear=config.special_attack_wear)
    return AttackItem(
        pos, t.name, t.base_damage,
        range=t.range, damage_type=t.damage_type, critical_chance=t.critical_chance,
        durability=t.durability, rng=rng, stream=stream, **kwargs,
    )


def make_armor(template_id: str, pos: Vector2 | tuple[int, int]) -> DefenceItem:
    t = ARMORS[template_id]
    return DefenceItem(pos, t.name, t.base_defense, defense_type=t.defense_type, durability=t.durability)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

class EncounterGenerator:
    """Deterministically fills an encounter from the config seed and difficulty."""

    __slots__ = ("_config", "_rng", "_slot")

    def __init__(self, config: EncounterConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng
        self._slot = 0

    def _next_slot(self) -> int:
        self._slot += 1
        return self._slot

    def _weapon(self, template_id: str, pos: Vector2) -> AttackItem:
        """A weapon rolling on its own spawn slot, so crits replay with the seed."""
        return make_weapon(template_id, pos, self._rng, self._config, stream=self._next_slot())

    def _random_position(self, encounter: Encounter, columns: range | None = None) -> Vector2:
        """Pick a free, in-bounds cell (no obstacle), optionally within *columns*."""
        world = encounter.world
        columns = columns if columns is not None else range(world.max_x)
        slot = self._next_slot()
        for attempt in range(50):
            x = self._rng.next_int(Domain.SPAWN, slot, attempt * 2, columns.start, columns.stop - 1)
            y = self._rng.next_int(Domain.SPAWN, slot, attempt * 2 + 1, 0, world.max_y - 1)
            pos = Vector2(x, y)
            if not world.get_objects_at(pos):
                return pos
        # Crowded map: accept a shared cell without an obstacle.
        for x in columns:
            for y in range(world.max_y):
                pos = Vector2(x, y)
                if not any(isinstance(e, Obstacle) for e in world.get_objects_at(pos)):
                    return pos
        return Vector2(columns.start, 0)

    def _team_columns(self, encounter: Encounter, team: str) -> range:
        half = max(1, encounter.world.max_x // 2)
        if team == HERO_TEAM:
            return range(0, half)
        return range(min(half, encounter.world.max_x - 1), encounter.world.max_x)

    def spawn_hero(self, encounter: Encounter, archetype: str) -> Creature:
        health, damage, defense = HERO_ARCHETYPES[archetype]
        hero = Creature(
            self._random_position(encounter, self._team_columns(encounter, HERO_TEAM)), archetype,
            max_health=health, base_damage=damage, base_defense=defense,
            team=HERO_TEAM, armor_wear_per_hit=self._config.armor_wear_per_hit,
        )
        encounter.add_creature(hero)
        return hero

    def spawn_monster(self, encounter: Encounter, archetype: str, index: int) -> Creature:
        health, damage, defense = MONSTER_ARCHETYPES[archetype]
        hp_mult, dmg_mult, _ = _DIFFICULTY_SCALE[self._config.difficulty]
        monster = Creature(
            self._random_position(encounter, self._team_columns(encounter, MONSTER_TEAM)),
            f"{archetype} {index}",
            max_health=max(1, int(health * hp_mult)),
            base_damage=max(1, int(damage * dmg_mult)),
            base_defense=defense,
            team=MONSTER_TEAM, armor_wear_per_hit=self._config.armor_wear_per_hit,
        )
        encounter.add_creature(monster)
        return monster

    def populate(self, encounter: Encounter) -> None:
        """Two teams, starting gear, loose loot and a few rocks."""
        cfg = self._config

        heroes = [self.spawn_hero(encounter, name) for name in HERO_ARCHETYPES]
        starting_gear = {"Knight": ("iron_sword", "chainmail"), "Ranger": ("hunting_bow", "leather_vest"),
                         "Mage": ("fire_staff", "warded_robe")}
        for hero in heroes:
            weapon_id, armor_id = starting_gear[hero.name]
            hero.pick(self._weapon(weapon_id, hero.pos))
            hero.pick(make_armor(armor_id, hero.pos))

        _, _, extra = _DIFFICULTY_SCALE[cfg.difficulty]
        monster_names = list(MONSTER_ARCHETYPES)
        for i in range(len(monster_names) + extra):
            archetype = monster_names[i % len(monster_names)]
            monster = self.spawn_monster(encounter, archetype, i + 1)
            if cfg.difficulty >= Difficulty.INTERMEDIATE:
                blade = self._weapon("rusty_sword", monster.pos)
                if cfg.difficulty == Difficulty.PRO:
                    blade.add_modifier(CriticalBonus(2))
                monster.pick(blade)

        # Loose loot
        potion = HealthPotion(self._random_position(encounter), "Small Health Potion", 15)
        encounter.add_object(potion)
        loot_weapon = self._weapon("frost_wand", self._random_position(encounter))
        loot_weapon.add_modifier(ElementalEnchantment(DamageType.ICE, 2))
        encounter.add_object(loot_weapon)
        loot_armor = make_armor("leather_vest", self._random_position(encounter))
        loot_armor.add_modifier(FlatDefenseBonus(1))
        encounter.add_object(loot_armor)

        # Scenery
        rocks = self._rng.next_int(Domain.SPAWN, 0, cfg.seed, 1, 3)
        for i in range(rocks):
            encounter.add_object(Obstacle(self._random_position(encounter), f"Boulder {i + 1}"))

        logger.info(
            "Populated %dx%d world (%s): %d creatures, %d objects",
            encounter.world.max_x, encounter.world.max_y, cfg.difficulty.name,
            len(encounter.world.creatures), len(encounter.world.world_objects),
        )


def build_encounter(config: EncounterConfig) -> Encounter:
    """Create and populate a fresh encounter for *config*."""
    from skirmish.engine.encounter import Encounter
    from skirmish.systems.rng import DeterministicRNG

    encounter = Encounter(config)
    EncounterGenerator(config, DeterministicRNG(config.seed)).populate(encounter)
    return encounter
