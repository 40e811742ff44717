"""Tests for world bounds, placement and the spatial index."""

import pytest

from skirmish.core.items import HealthPotion, Obstacle
from skirmish.core.models import Vector2
from skirmish.core.world import World
from skirmish.systems.spatial_hash import SpatialHash
from tests.helpers.builders import make_creature, make_weapon


class TestBounds:
    """World bounds validation."""

    def test_upper_bound_exclusive(self):
        world = World(10, 10)
        assert not world.is_position_valid((10, 0))
        assert not world.is_position_valid((0, 10))
        assert world.is_position_valid((0, 0))
        assert world.is_position_valid((9, 9))

    def test_negative_rejected(self):
        world = World(10, 10)
        assert not world.is_position_valid(Vector2(-1, 0))
        assert not world.is_position_valid(Vector2(0, -1))

    def test_non_positive_size_rejected(self):
        with pytest.raises(ValueError):
            World(0, 10)
        with pytest.raises(ValueError):
            World(10, -3)


class TestPlacement:
    """Placing, moving and removing entities."""

    def test_add_creature_indexes_it(self):
        world = World()
        hero = make_creature(pos=(2, 3))
        assert world.add_creature(hero)
        assert world.creatures == [hero]
        assert world.get_objects_at((2, 3)) == (hero,)

    def test_invalid_position_rejected(self):
        world = World()
        hero = make_creature(pos=(10, 0))
        assert not world.add_creature(hero)
        assert world.creatures == []
        assert world.get_objects_at((10, 0)) == ()

    def test_none_ignored(self):
        world = World()
        assert not world.add_creature(None)
        assert not world.add_world_object(None)

    def test_shared_cell(self):
        world = World()
        hero = make_creature(pos=(1, 1))
        sword = make_weapon(pos=(1, 1))
        world.add_creature(hero)
        world.add_world_object(sword)
        assert set(world.get_objects_at((1, 1))) == {hero, sword}

    def test_empty_cell(self):
        assert World().get_objects_at((4, 4)) == ()

    def test_remove_looted_item(self):
        world = World()
        potion = HealthPotion((3, 3), "Potion", 10)
        world.add_world_object(potion)
        assert world.remove_world_object(potion)
        assert world.get_objects_at((3, 3)) == ()
        assert not world.remove_world_object(potion)

    def test_obstacle_cannot_be_removed(self):
        world = World()
        rock = Obstacle((3, 3), "Rock")
        world.add_world_object(rock)
        assert not world.remove_world_object(rock)
        assert world.get_objects_at((3, 3)) == (rock,)

    def test_unindex_keeps_record(self):
        world = World()
        orc = make_creature("Orc", pos=(5, 5))
        world.add_creature(orc)
        assert world.unindex_creature(orc)
        assert world.get_objects_at((5, 5)) == ()
        assert orc in world.creatures

    def test_move_entity_reindexes(self):
        world = World()
        hero = make_creature(pos=(0, 0))
        world.add_creature(hero)
        assert world.move_entity(hero, (1, 0))
        assert hero.pos == Vector2(1, 0)
        assert world.get_objects_at((0, 0)) == ()
        assert world.get_objects_at((1, 0)) == (hero,)

    def test_move_out_of_bounds_rejected(self):
        world = World(3, 3)
        hero = make_creature(pos=(2, 2))
        world.add_creature(hero)
        assert not world.move_entity(hero, (3, 2))
        assert hero.pos == Vector2(2, 2)

    def test_queries(self):
        world = World()
        hero = make_creature(pos=(0, 0))
        orc = make_creature("Orc", pos=(2, 2), team="monsters", hp=5)
        world.add_creature(hero)
        world.add_creature(orc)
        assert world.find_entity(orc.id) is orc
        assert world.find_entity(-1) is None
        assert len(world.get_objects_near((1, 1), 1)) == 2
        orc.receive_hit(100)
        assert world.living_creatures() == [hero]


class TestSpatialHash:
    """Exact-cell spatial index."""

    def test_insert_query_remove(self):
        index = SpatialHash()
        a, b = make_creature("A"), make_creature("B")
        index.insert(a, Vector2(1, 1))
        index.insert(b, Vector2(1, 1))
        assert index.query_cell(Vector2(1, 1)) == (a, b)
        assert len(index) == 2
        assert index.remove(a, Vector2(1, 1))
        assert not index.remove(a, Vector2(1, 1))
        assert index.query_cell(Vector2(1, 1)) == (b,)

    def test_empty_cells_dropped(self):
        index = SpatialHash()
        a = make_creature("A")
        index.insert(a, Vector2(0, 0))
        index.remove(a, Vector2(0, 0))
        assert index.occupied_cells() == []

    def test_move(self):
        index = SpatialHash()
        a = make_creature("A")
        index.insert(a, Vector2(0, 0))
        index.move(a, Vector2(0, 0), Vector2(2, 0))
        assert index.query_cell(Vector2(2, 0)) == (a,)
        assert index.query_cell(Vector2(0, 0)) == ()

    def test_radius_is_chebyshev(self):
        index = SpatialHash()
        near, far = make_creature("Near"), make_creature("Far")
        index.insert(near, Vector2(2, 2))
        index.insert(far, Vector2(3, 0))
        found = index.query_radius(Vector2(1, 1), 1)
        assert near in found
        assert far not in found

    def test_clear(self):
        index = SpatialHash()
        index.insert(make_creature("A"), Vector2(0, 0))
        index.clear()
        assert len(index) == 0
