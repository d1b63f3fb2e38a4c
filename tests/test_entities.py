"""Tests for pumpkin and monster placement."""

import random

import pytest

from entities import (
    NUM_MONSTER_STYLES,
    NUM_PUMPKIN_STYLES,
    PlacementError,
    monster_positions,
    monster_region,
    place_entities,
    place_monsters,
    place_pumpkins,
)


class TestPlacePumpkins:
    @pytest.mark.parametrize("seed", range(10))
    def test_never_on_start_or_goal(self, seed):
        pumpkins = place_pumpkins(5, 5, 10, random.Random(seed))
        assert len(pumpkins) == 10
        for index, pumpkin in pumpkins.items():
            assert index == pumpkin.y * 5 + pumpkin.x
            assert (pumpkin.x, pumpkin.y) not in ((0, 0), (4, 4))
            assert 0 <= pumpkin.style_id < NUM_PUMPKIN_STYLES

    def test_fills_every_free_cell(self, rng):
        pumpkins = place_pumpkins(3, 2, 4, rng)
        assert sorted(pumpkins) == [1, 2, 3, 4]

    def test_zero(self, rng):
        assert place_pumpkins(5, 5, 0, rng) == {}

    def test_too_many(self, rng):
        with pytest.raises(PlacementError):
            place_pumpkins(3, 2, 5, rng)

    def test_placement_error_is_value_error(self):
        assert issubclass(PlacementError, ValueError)


class TestPlaceMonsters:
    @pytest.mark.parametrize("seed", range(10))
    def test_outside_safe_zone(self, seed):
        rng = random.Random(seed)
        pumpkins = place_pumpkins(8, 8, 5, rng)
        monsters = place_monsters(8, 8, 5, 3, pumpkins, rng)
        assert len(monsters) == 5
        for index, group in monsters.items():
            assert len(group) == 1
            monster = group[0]
            assert index == monster.y * 8 + monster.x
            assert monster.x >= 3 and monster.y >= 3
            assert (monster.x, monster.y) != (7, 7)
            assert index not in pumpkins
            assert monster.previous is None
            assert 0 <= monster.style_id < NUM_MONSTER_STYLES

    def test_too_many_for_playable_region(self, rng):
        # 5x5 with a safe zone of 2 leaves a 3x3 region minus the goal
        with pytest.raises(PlacementError):
            place_monsters(5, 5, 9, 2, rng=rng)
        assert len(place_monsters(5, 5, 8, 2, rng=rng)) == 8

    def test_pumpkins_shrink_the_pool(self):
        pumpkins = {
            y * 5 + x: None for y in range(2, 5) for x in range(2, 5) if (x, y) != (4, 4)
        }
        with pytest.raises(PlacementError):
            place_monsters(5, 5, 1, 2, pumpkins, random.Random(0))

    @pytest.mark.parametrize("safe_zone_size", [0, 1])
    @pytest.mark.parametrize("seed", range(50))
    def test_never_on_start_or_goal_with_small_safe_zone(self, safe_zone_size, seed):
        count = len(monster_region(3, 3, safe_zone_size))
        monsters = place_monsters(3, 3, count, safe_zone_size, rng=random.Random(seed))
        positions = monster_positions(monsters)
        assert len(positions) == count
        assert (0, 0) not in positions
        assert (2, 2) not in positions

    def test_full_grid_minus_start_and_goal(self, rng):
        monsters = place_monsters(3, 3, 7, 0, rng=rng)
        assert sorted(monsters) == [1, 2, 3, 4, 5, 6, 7]
        with pytest.raises(PlacementError):
            place_monsters(3, 3, 8, 0, rng=rng)

    def test_negative_safe_zone(self, rng):
        with pytest.raises(ValueError):
            place_monsters(5, 5, 1, -1, rng=rng)


class TestPlaceEntities:
    def test_no_overlap(self, rng):
        pumpkins, monsters = place_entities(10, 6, 4, 2, 2, rng)
        assert len(pumpkins) == 4
        assert len(monster_positions(monsters)) == 2
        assert not set(pumpkins) & set(monsters)

    def test_deterministic_with_seed(self):
        first = place_entities(10, 6, 4, 2, 2, random.Random(7))
        second = place_entities(10, 6, 4, 2, 2, random.Random(7))
        assert first == second

    @pytest.mark.parametrize("width,height", [(2, 1), (3, 1), (4, 3)])
    def test_maximum_pumpkins_terminates(self, width, height, rng):
        pumpkins, monsters = place_entities(width, height, width * height - 2, 0, 2, rng)
        assert len(pumpkins) == width * height - 2
        assert monsters == {}

    @pytest.mark.parametrize("seed", range(200))
    def test_largest_settings_always_fit(self, seed):
        # 5x5 with a safe zone of 2 leaves 8 monster cells; 10 pumpkins could cover them
        pumpkins, monsters = place_entities(5, 5, 10, 5, 2, random.Random(seed))
        assert len(pumpkins) == 10
        assert len(monster_positions(monsters)) == 5
        assert not set(pumpkins) & set(monsters)

    def test_too_many_monsters(self, rng):
        with pytest.raises(PlacementError):
            place_entities(5, 5, 0, 9, 2, rng)


class TestMonsterRegion:
    def test_excludes_safe_zone_start_and_goal(self):
        assert monster_region(4, 4, 2) == [(2, 2), (3, 2), (2, 3)]
        assert (0, 0) not in monster_region(4, 4, 0)
        assert len(monster_region(4, 4, 0)) == 14

    def test_safe_zone_larger_than_grid(self):
        assert monster_region(3, 3, 5) == []

    def test_negative_safe_zone(self):
        with pytest.raises(ValueError):
            monster_region(3, 3, -1)


class TestPumpkinReserve:
    def test_leaves_room_for_monsters(self, rng):
        region = monster_region(5, 5, 2)
        pumpkins = place_pumpkins(5, 5, 18, rng, keep_free=region, reserve=5)
        inside = [p for p in pumpkins.values() if (p.x, p.y) in region]
        assert len(pumpkins) == 18
        assert len(inside) == 3

    def test_reserve_counts_against_capacity(self, rng):
        region = monster_region(5, 5, 2)
        with pytest.raises(PlacementError):
            place_pumpkins(5, 5, 19, rng, keep_free=region, reserve=5)
