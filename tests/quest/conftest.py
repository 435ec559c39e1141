"""Shared fixtures for quest tests."""

from __future__ import annotations

import pytest

from dynamic_rpg.host.interfaces import MapInfo
from dynamic_rpg.quest.config import QuestConfig
from dynamic_rpg.quest.models import (
    QuestBonus,
    QuestDescriptor,
    QuestLevel,
    QuestType,
    TargetLocation,
)

LEVELS = ["G", "F", "E"]
LADDER = [100, 500, 3000]


@pytest.fixture
def config() -> QuestConfig:
    """Default configuration (8 levels)."""
    return QuestConfig()


@pytest.fixture
def small_config() -> QuestConfig:
    """Three levels, ladder 100 / 500 / 3000."""
    return QuestConfig(levels=LEVELS, credit_ladder=LADDER)


@pytest.fixture
def maps() -> list[MapInfo]:
    return [
        MapInfo(id=1, name="Town"),
        MapInfo(id=2, name="$Adventure Cave"),
        MapInfo(id=3, name="$Old Forest"),
        MapInfo(id=4, name="Castle"),
    ]


@pytest.fixture
def names() -> list[str]:
    return ["Giant Bat", "Old Hermit", "Rusty Key", "Cave Troll", "Slime King"]


@pytest.fixture
def make_quest():
    """Factory for descriptors on the three-level table."""
    return _make_quest


def _make_quest(
    level_index: int = 0,
    label: str | None = None,
    steps: int = 2,
    increase: int = 80,
    deduct: int = 50,
    rate: float = 1.0,
    name: str | None = None,
    map_id: int = 2,
) -> QuestDescriptor:
    label = label or LEVELS[level_index]
    return QuestDescriptor(
        name=name or f"[{label}]explore Adventure Cave",
        level=QuestLevel(index=level_index, label=label, rate=rate),
        type=QuestType.DEFEAT_ENEMY,
        steps_remaining=steps,
        target=TargetLocation(map_id=map_id, map_name="$Adventure Cave", target_name="Giant Bat"),
        bonus=QuestBonus(increase=increase, deduct=deduct),
    )
