"""Quest data models.

All models are Pydantic v2 ``BaseModel`` instances so quest state can be
dumped into (and restored from) the host's save payload unchanged.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class QuestType(str, Enum):
    """What the player has to do at each quest step.

    Declaration order is the ranked order the type sampler draws from.
    """

    FIND_ITEM = "FIND_ITEM"
    DEFEAT_ENEMY = "DEFEAT_ENEMY"
    CONTACT_NPC = "CONTACT_NPC"


QUEST_TYPES: list[QuestType] = list(QuestType)


class QuestStatus(str, Enum):
    DOING = "DOING"
    DONE = "DONE"


class ProgressPhase(str, Enum):
    """States of the single-quest progress machine."""

    NO_ACTIVE_QUEST = "NO_ACTIVE_QUEST"
    DOING = "DOING"
    DONE = "DONE"


class QuestLevel(BaseModel):
    """A rank in the quest level table."""

    index: int = Field(ge=0)
    """0-based rank, lowest first."""

    label: str
    """Tier text (e.g. ``"B"``) shown in quest names."""

    rate: float = 1.0
    """Reward multiplier.  Starts at 1.0 and only grows through promotion."""


class TargetLocation(BaseModel):
    """Where the current quest step takes place."""

    map_id: int
    map_name: str
    target_name: str
    """Name of the item / enemy / NPC the step is about."""


class QuestBonus(BaseModel):
    """Credit change applied when the quest is finished or abandoned."""

    increase: int
    deduct: int


class QuestDescriptor(BaseModel):
    """A generated quest."""

    name: str
    level: QuestLevel
    type: QuestType
    steps_remaining: int = Field(ge=0)
    target: TargetLocation
    bonus: QuestBonus
    status: QuestStatus | None = None
    """``None`` until the quest is accepted."""


class ProgressState(BaseModel):
    """The player's credit ledger and the tier derived from it."""

    total_credits: int = Field(default=0, ge=0)
    tier_index: int = Field(default=0, ge=0)


class Grade(BaseModel):
    """Summary of the player's standing, for display by the host."""

    credits: int
    level: int
    label: str
