"""Dungeon generation settings."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from dynamic_rpg.errors import ConfigurationError

DEFAULT_TTL_MS = 3_600_000


class DungeonConfig(BaseModel):
    """Size of generated mazes and how long a generated layout is kept."""

    maze_width: int = 10
    maze_height: int = 10
    ttl_ms: int = DEFAULT_TTL_MS
    """Milliseconds a generated layout is reused before regenerating."""

    @field_validator("maze_width", "maze_height")
    @classmethod
    def _validate_dimension(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Maze dimensions must be >= 1, got {v}")
        return v

    @field_validator("ttl_ms")
    @classmethod
    def _validate_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"ttl_ms must be > 0, got {v}")
        return v


def load_dungeon_config(raw: dict[str, Any] | None = None) -> DungeonConfig:
    """Validate *raw* settings, raising :class:`ConfigurationError` on failure."""
    try:
        return DungeonConfig.model_validate(raw or {})
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid dungeon configuration:\n{exc}") from exc
