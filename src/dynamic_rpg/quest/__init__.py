"""Quest module -- sampling, assembly and single-quest progress tracking."""

from dynamic_rpg.quest.builder import QuestBuilder
from dynamic_rpg.quest.config import QuestConfig, load_quest_config
from dynamic_rpg.quest.encounters import (
    DefaultEventEmitter,
    EncounterTrigger,
    ScriptRefs,
    TriggerCondition,
)
from dynamic_rpg.quest.models import (
    Grade,
    ProgressPhase,
    ProgressState,
    QuestBonus,
    QuestDescriptor,
    QuestLevel,
    QuestStatus,
    QuestType,
    TargetLocation,
)
from dynamic_rpg.quest.naming import QuestNameRenderer
from dynamic_rpg.quest.progress import ProgressSnapshot, QuestProgress, tier_for_credits
from dynamic_rpg.quest.sampler import QuestSampler, party_strength

__all__ = [
    "DefaultEventEmitter",
    "EncounterTrigger",
    "Grade",
    "ProgressPhase",
    "ProgressSnapshot",
    "ProgressState",
    "QuestBonus",
    "QuestBuilder",
    "QuestConfig",
    "QuestDescriptor",
    "QuestLevel",
    "QuestNameRenderer",
    "QuestProgress",
    "QuestSampler",
    "QuestStatus",
    "QuestType",
    "ScriptRefs",
    "TargetLocation",
    "TriggerCondition",
    "load_quest_config",
    "party_strength",
    "tier_for_credits",
]
