"""Tests for quest batch assembly."""

import pytest

from dynamic_rpg.core.numeric import round_half_up
from dynamic_rpg.core.rng import GameRNG
from dynamic_rpg.errors import EmptyInputError, GenerationExhausted
from dynamic_rpg.host.interfaces import MapInfo, StaticParty
from dynamic_rpg.quest.builder import QuestBuilder
from dynamic_rpg.quest.config import QuestConfig
from dynamic_rpg.quest.models import QuestType

LADDER = [100, 500, 3000]


class TestBuildBatch:
    def test_returns_requested_count(self, config, maps, names):
        builder = QuestBuilder(config, GameRNG(seed=42))
        quests = builder.build_batch(6, 30, maps, names, set())
        assert len(quests) == 6

    def test_zero_count(self, config, maps, names):
        assert QuestBuilder(config, GameRNG(seed=42)).build_batch(0, 30, maps, names, set()) == []

    def test_sorted_by_level_descending(self, config, maps, names):
        for seed in range(20):
            quests = QuestBuilder(config, GameRNG(seed=seed)).build_batch(8, 60, maps, names, set())
            indices = [q.level.index for q in quests]
            assert indices == sorted(indices, reverse=True), f"seed={seed}"

    def test_names_unique_and_recorded(self, config, maps, names):
        cache: set[str] = set()
        quests = QuestBuilder(config, GameRNG(seed=1)).build_batch(10, 40, maps, names, cache)
        quest_names = [q.name for q in quests]
        assert len(set(quest_names)) == len(quest_names)
        assert set(quest_names) <= cache

    def test_dedup_cache_spans_batches(self, config, maps, names):
        cache: set[str] = set()
        builder = QuestBuilder(config, GameRNG(seed=4))
        first = builder.build_batch(5, 20, maps, names, cache)
        second = builder.build_batch(5, 20, maps, names, cache)
        assert not {q.name for q in first} & {q.name for q in second}

    def test_targets_on_marked_maps(self, config, maps, names):
        quests = QuestBuilder(config, GameRNG(seed=7)).build_batch(10, 20, maps, names, set())
        for quest in quests:
            assert quest.target.map_id in (2, 3)
            assert quest.target.target_name in names

    def test_name_rendered_from_parts(self, maps, names):
        config = QuestConfig(name_templates=["[${level}]go to ${map} ${type} ${target}"])
        quest = QuestBuilder(config, GameRNG(seed=3)).build_batch(1, 20, maps, names, set())[0]
        map_text = quest.target.map_name.replace("$", "", 1)
        expected = (
            f"[{quest.level.label}]go to {map_text} "
            f"{config.type_label(quest.type)} {quest.target.target_name}"
        )
        assert quest.name == expected

    def test_new_quests_not_accepted(self, config, maps, names):
        quests = QuestBuilder(config, GameRNG(seed=3)).build_batch(3, 20, maps, names, set())
        assert all(q.status is None for q in quests)
        assert all(q.steps_remaining >= 1 for q in quests)

    def test_level_is_a_private_copy(self, config, maps, names):
        builder = QuestBuilder(config, GameRNG(seed=3))
        quest = builder.build_batch(1, 20, maps, names, set())[0]
        quest.level.rate = 50.0
        other = builder.build_batch(10, 20, maps, names, set())
        assert all(q.level.rate == 1.0 for q in other)

    def test_weak_party_never_gets_top_level(self, config, maps, names):
        builder = QuestBuilder(config, GameRNG(seed=9))
        quests = builder.build_batch(60, 0, maps, names, set())
        assert all(q.level.label != "S" for q in quests)

    def test_all_types_appear(self, config, maps, names):
        quests = QuestBuilder(config, GameRNG(seed=9)).build_batch(60, 30, maps, names, set())
        assert {q.type for q in quests} == set(QuestType)

    def test_build_for_party_uses_mean_level(self, config, maps, names):
        a = QuestBuilder(config, GameRNG(seed=5)).build_for_party(
            5, StaticParty([10, 30]), maps, names, set(),
        )
        b = QuestBuilder(config, GameRNG(seed=5)).build_batch(5, 20, maps, names, set())
        assert [q.name for q in a] == [q.name for q in b]

    def test_build_for_empty_party(self, config, maps, names):
        quests = QuestBuilder(config, GameRNG(seed=5)).build_for_party(
            3, StaticParty([]), maps, names, set(),
        )
        assert len(quests) == 3


class TestBuildErrors:
    def test_no_marked_maps(self, config, names):
        builder = QuestBuilder(config, GameRNG(seed=1))
        with pytest.raises(EmptyInputError):
            builder.build_batch(1, 10, [MapInfo(id=1, name="Town")], names, set())

    def test_empty_name_library(self, config, maps):
        with pytest.raises(EmptyInputError):
            QuestBuilder(config, GameRNG(seed=1)).build_batch(1, 10, maps, [], set())

    def test_name_collisions_exhaust_retries(self, names):
        config = QuestConfig(name_templates=["Fixed quest"], max_name_retries=5)
        builder = QuestBuilder(config, GameRNG(seed=1))
        with pytest.raises(GenerationExhausted):
            builder.build_batch(2, 10, [MapInfo(id=2, name="$Cave")], names, set())

    def test_prefilled_cache_exhausts(self, maps, names):
        config = QuestConfig(name_templates=["Fixed quest"], max_name_retries=3)
        with pytest.raises(GenerationExhausted):
            QuestBuilder(config, GameRNG(seed=1)).build_batch(1, 10, maps, names, {"Fixed quest"})


class TestComputeBonus:
    @pytest.mark.parametrize("level", [0, 1, 2])
    def test_bonus_within_formula_bounds(self, small_config, level):
        builder = QuestBuilder(small_config, GameRNG(seed=1))
        section = LADDER[level] - (LADDER[level - 1] if level else 0)
        inc_lo = round_half_up(section / (level + 2) ** 3 * 0.8)
        inc_hi = round_half_up(section / (level + 2) ** 3 * 1.2)
        ded_lo = round_half_up(section / (level + 2) ** 2 * 0.5)
        ded_hi = round_half_up(section / (level + 2) ** 2 * 0.9)
        for _ in range(200):
            bonus = builder.compute_bonus(level)
            assert inc_lo <= bonus.increase <= inc_hi
            assert ded_lo <= bonus.deduct <= ded_hi

    def test_level_zero_example(self, small_config):
        bonus = QuestBuilder(small_config, GameRNG(seed=1)).compute_bonus(0)
        # section 100: 100 / 8 * [0.8, 1.2], 100 / 4 * [0.5, 0.9]
        assert 10 <= bonus.increase <= 15
        assert 13 <= bonus.deduct <= 23


class TestLocations:
    def test_display_map_name_strips_first_marker(self, config):
        builder = QuestBuilder(config, GameRNG(seed=1))
        assert builder.display_map_name("$Cave$") == "Cave$"

    def test_pick_location(self, config, maps, names):
        builder = QuestBuilder(config, GameRNG(seed=1))
        for _ in range(30):
            location = builder.pick_location(maps, names)
            assert "$" in location.map_name
            assert location.target_name in names
