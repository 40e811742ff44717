"""Tests for the encounter coordinator: actions, death handling and victory."""

import pytest

from skirmish.config import EncounterConfig
from skirmish.core.events import EventBus, EventKind
from skirmish.core.items import HealthPotion, Obstacle
from skirmish.core.models import Vector2
from skirmish.engine.encounter import Encounter
from skirmish.engine.exceptions import (
    EncounterOverError,
    InvalidActionError,
    UnknownEntityError,
)
from tests.helpers.builders import make_armor, make_creature, make_weapon


def _duel(hero_hp=30, orc_hp=12, **orc_kwargs):
    """Hero at (0, 0) next to an orc at (1, 0); the hero acts first."""
    encounter = Encounter(EncounterConfig())
    hero = make_creature("Hero", pos=(0, 0), hp=hero_hp, damage=5)
    orc = make_creature("Orc", pos=(1, 0), hp=orc_hp, damage=3, team="monsters", **orc_kwargs)
    encounter.add_creature(hero)
    encounter.add_creature(orc)
    return encounter, hero, orc


class TestSetup:
    """Adding creatures and objects to an encounter."""

    def test_creatures_join_rotation_and_world(self):
        encounter, hero, orc = _duel()
        assert encounter.turns.order == [hero, orc]
        assert encounter.world.creatures == [hero, orc]
        assert encounter.current_creature is hero

    def test_entities_share_the_encounter_bus(self):
        encounter, hero, _ = _duel()
        sword = make_weapon()
        hero.pick(sword)
        assert hero.bus is encounter.bus
        assert sword.bus is encounter.bus

    def test_gear_picked_before_joining_is_adopted(self):
        encounter = Encounter()
        hero = make_creature(pos=(0, 0))
        armor = make_armor()
        hero.pick(armor)
        encounter.add_creature(hero)
        assert armor.bus is encounter.bus

    def test_out_of_bounds_creature_not_added(self):
        encounter = Encounter()
        stray = make_creature(pos=(10, 10))
        assert not encounter.add_creature(stray)
        assert len(encounter.turns) == 0

    def test_rejected_creature_keeps_its_own_bus(self):
        own = EventBus()
        stray = make_creature(pos=(50, 50), bus=own)
        sword = make_weapon()
        stray.pick(sword)
        encounter = Encounter()
        assert not encounter.add_creature(stray)
        assert stray.bus is own
        assert sword.bus is own
        stray.receive_hit(1000)
        assert len(encounter.event_log) == 0

    def test_rejected_object_keeps_its_own_bus(self):
        own = EventBus()
        potion = HealthPotion((-1, 0), "Potion", 10, bus=own)
        assert not Encounter().add_object(potion)
        assert potion.bus is own

    def test_dead_creature_recorded_but_not_scheduled(self):
        encounter = Encounter()
        corpse = make_creature(pos=(2, 2), hp=10, life_points=0)
        assert encounter.add_creature(corpse)
        assert corpse in encounter.world.creatures
        assert len(encounter.turns) == 0


class TestAttack:
    """Attacks, reach, special attacks and victory."""

    def test_attack_adjacent(self):
        encounter, _, orc = _duel()
        result = encounter.attack(orc.id)
        assert result.damage_dealt == 5
        assert result.damage_taken == 5
        assert orc.life_points == 7
        assert not result.killed

    def test_kill_removes_from_rotation_and_index(self):
        encounter, hero, orc = _duel(orc_hp=5)
        result = encounter.attack(orc.id)
        assert result.killed
        assert orc not in encounter.turns.order
        assert encounter.world.get_objects_at((1, 0)) == ()
        assert orc in encounter.world.creatures

    def test_last_team_standing_wins(self):
        encounter, hero, orc = _duel(orc_hp=5)
        encounter.attack(orc.id)
        assert encounter.is_over
        assert encounter.winner == "heroes"

    def test_actions_rejected_after_victory(self):
        encounter, hero, orc = _duel(orc_hp=5)
        encounter.attack(orc.id)
        with pytest.raises(EncounterOverError):
            encounter.end_turn()
        with pytest.raises(EncounterOverError):
            encounter.pick_up()

    def test_cannot_attack_self(self):
        encounter, hero, _ = _duel()
        with pytest.raises(InvalidActionError):
            encounter.attack(hero.id)

    def test_unknown_target(self):
        encounter, _, _ = _duel()
        with pytest.raises(UnknownEntityError):
            encounter.attack(999_999)

    def test_out_of_range(self):
        encounter = Encounter()
        hero = make_creature(pos=(0, 0))
        orc = make_creature("Orc", pos=(5, 5), team="monsters")
        encounter.add_creature(hero)
        encounter.add_creature(orc)
        with pytest.raises(InvalidActionError):
            encounter.attack(orc.id)

    def test_ranged_weapon_extends_reach(self):
        encounter = Encounter()
        hero = make_creature(pos=(0, 0))
        orc = make_creature("Orc", pos=(3, 0), team="monsters")
        hero.pick(make_weapon(base_damage=2, range=3))
        encounter.add_creature(hero)
        encounter.add_creature(orc)
        assert encounter.attack(orc.id).damage_dealt == 7

    def test_special_attack_wears_weapon(self):
        encounter, hero, orc = _duel(orc_hp=50)
        sword = make_weapon(base_damage=6, durability=20)
        hero.pick(sword)
        result = encounter.special_attack(orc.id, "power_strike")
        assert result.damage_dealt == 12
        assert sword.durability == 15

    def test_special_attack_needs_weapon(self):
        encounter, _, orc = _duel()
        with pytest.raises(InvalidActionError):
            encounter.special_attack(orc.id, "power_strike")

    def test_unknown_special_attack(self):
        encounter, hero, orc = _duel()
        hero.pick(make_weapon())
        with pytest.raises(InvalidActionError):
            encounter.special_attack(orc.id, "moonbeam")

    def test_damage_recorded_in_event_log(self):
        encounter, _, orc = _duel()
        encounter.attack(orc.id)
        categories = [e.category for e in encounter.event_log.latest()]
        assert "damage_taken" in categories


class TestTurns:
    """Turn rotation driven through the encounter."""

    def test_end_turn_rotates(self):
        encounter, hero, orc = _duel()
        assert encounter.end_turn() is orc
        assert encounter.end_turn() is hero
        assert encounter.round_number == 2

    def test_death_mid_round_keeps_rotation_valid(self):
        encounter = Encounter()
        a = make_creature("A", pos=(0, 0))
        b = make_creature("B", pos=(1, 0), team="monsters", hp=3)
        c = make_creature("C", pos=(2, 0), team="monsters")
        for creature in (a, b, c):
            encounter.add_creature(creature)
        encounter.attack(b.id)
        assert encounter.turns.order == [a, c]
        assert encounter.end_turn() is c
        assert not encounter.is_over


class TestPickUpAndMove:
    """Looting the current cell and stepping around."""

    def test_pick_up_items_on_cell(self):
        encounter, hero, _ = _duel(hero_hp=30)
        hero.receive_hit(20)
        potion = HealthPotion((0, 0), "Potion", 15)
        sword = make_weapon(pos=(0, 0))
        encounter.add_object(potion)
        encounter.add_object(sword)
        picked = encounter.pick_up()
        assert picked == [potion, sword]
        assert hero.life_points == 25
        assert hero.equipped_weapon is sword
        assert encounter.world.get_objects_at((0, 0)) == (hero,)

    def test_pick_up_nothing(self):
        encounter, _, _ = _duel()
        assert encounter.pick_up() == []

    def test_move_one_step(self):
        encounter, hero, _ = _duel()
        assert encounter.move(0, 1) == Vector2(0, 1)
        assert encounter.world.get_objects_at((0, 1)) == (hero,)

    def test_move_rules(self):
        encounter, _, _ = _duel()
        encounter.add_object(Obstacle((1, 1), "Rock"))
        with pytest.raises(InvalidActionError):
            encounter.move(0, 3)
        with pytest.raises(InvalidActionError):
            encounter.move(-1, 0)
        with pytest.raises(InvalidActionError):
            encounter.move(1, 1)

    def test_broken_item_event_reaches_log(self):
        encounter, hero, orc = _duel(orc_hp=100)
        hero.pick(make_weapon(durability=1))
        encounter.attack(orc.id)
        assert any(e.category == EventKind.ITEM_BROKEN.name.lower() for e in encounter.event_log.latest())
