"""Quest engine settings.

Defaults mirror the host plugin parameters.  The credit ladder accepts
numeric strings, which is how the host stores plugin parameters.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError, model_validator

from dynamic_rpg.errors import ConfigurationError
from dynamic_rpg.quest.models import QUEST_TYPES, QuestLevel, QuestType
from dynamic_rpg.quest.naming import validate_templates

DEFAULT_LEVELS = ["G", "F", "E", "D", "C", "B", "A", "S"]
DEFAULT_CREDIT_LADDER = [100, 500, 3000, 20000, 150000, 1200000, 10000000, 99999999]
DEFAULT_TYPE_LABELS = ["find", "beat", "contact"]
DEFAULT_NAME_TEMPLATES = [
    "[${level}]go to ${map} ${type} ${target}",
    "[${level}]explore ${map}",
    "[${level}]${type} the ${target}",
]


class QuestConfig(BaseModel):
    """Validated quest configuration."""

    levels: list[str] = DEFAULT_LEVELS
    """Level labels, lowest first."""

    credit_ladder: list[int] = DEFAULT_CREDIT_LADDER
    """Credit thresholds, one per level, strictly ascending."""

    type_labels: list[str] = DEFAULT_TYPE_LABELS
    """Display text for find-item, defeat-enemy and contact-NPC quests."""

    name_templates: list[str] = DEFAULT_NAME_TEMPLATES
    map_marker: str = "$"
    """Substring marking a host map as usable for quests."""

    names_file: str = "Names"
    """Identifier of the JSON name library (``<names_file>.json``)."""

    up_rate_max: float = 1.3
    """Upper bound of the per-step reward-rate multiplier (must be > 1)."""

    max_party_level: int = 100
    max_name_retries: int = 20
    """Regeneration attempts allowed when a quest name is already taken."""

    @model_validator(mode="after")
    def _validate(self) -> QuestConfig:
        if not self.levels:
            raise ValueError("At least one level is required")
        if len(self.credit_ladder) != len(self.levels):
            raise ValueError(
                f"credit_ladder has {len(self.credit_ladder)} entries but there "
                f"are {len(self.levels)} levels"
            )
        for prev, cur in zip(self.credit_ladder, self.credit_ladder[1:]):
            if cur <= prev:
                raise ValueError(
                    f"credit_ladder must be strictly ascending ({prev} >= {cur})"
                )
        if len(self.type_labels) != len(QUEST_TYPES):
            raise ValueError(
                f"type_labels needs {len(QUEST_TYPES)} entries, got {len(self.type_labels)}"
            )
        if not self.map_marker:
            raise ValueError("map_marker must not be empty")
        if self.up_rate_max <= 1:
            raise ValueError(f"up_rate_max must be > 1, got {self.up_rate_max}")
        if self.max_party_level <= 0:
            raise ValueError("max_party_level must be > 0")
        if self.max_name_retries < 1:
            raise ValueError("max_name_retries must be >= 1")
        validate_templates(self.name_templates)
        return self

    # -- derived views -------------------------------------------------------

    @property
    def level_count(self) -> int:
        return len(self.levels)

    def quest_levels(self) -> list[QuestLevel]:
        """Fresh level table, every rate at 1.0."""
        return [QuestLevel(index=i, label=label) for i, label in enumerate(self.levels)]

    def type_label(self, quest_type: QuestType) -> str:
        return self.type_labels[QUEST_TYPES.index(quest_type)]

    @property
    def names_path(self) -> str:
        return f"{self.names_file}.json"


def load_quest_config(raw: dict[str, Any] | None = None) -> QuestConfig:
    """Validate *raw* settings, raising :class:`ConfigurationError` on failure."""
    try:
        return QuestConfig.model_validate(raw or {})
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid quest configuration:\n{exc}") from exc
