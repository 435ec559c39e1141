"""Save-payload support for the process-wide engine state.

The host stores the dungeon cache and the quest ledger as opaque blobs in
its save file.  :class:`SaveSession` turns them into JSON-compatible dicts
and back.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field

from dynamic_rpg.dungeon.cache import DungeonCache, DungeonCacheEntry
from dynamic_rpg.quest.progress import ProgressSnapshot, QuestProgress

logger = logging.getLogger(__name__)

PAYLOAD_VERSION = 1


class SessionPayload(BaseModel):
    version: int = PAYLOAD_VERSION
    dungeons: list[DungeonCacheEntry] = Field(default_factory=list)
    progress: ProgressSnapshot | None = None


class SaveSession:
    """Serializes / restores a dungeon cache and a quest tracker."""

    @staticmethod
    def serialize(
        cache: DungeonCache | None = None,
        progress: QuestProgress | None = None,
    ) -> dict[str, Any]:
        payload = SessionPayload(
            dungeons=cache.entries() if cache is not None else [],
            progress=progress.snapshot() if progress is not None else None,
        )
        return payload.model_dump(mode="json")

    @staticmethod
    def deserialize(
        raw: dict[str, Any],
        cache: DungeonCache | None = None,
        progress: QuestProgress | None = None,
    ) -> SessionPayload:
        """Validate *raw* and load it into the given cache / tracker.

        Raises
        ------
        pydantic.ValidationError
            If the payload does not match :class:`SessionPayload`.
        ValueError
            If the payload version is not supported.
        """
        payload = SessionPayload.model_validate(raw)
        if payload.version != PAYLOAD_VERSION:
            raise ValueError(f"Unsupported save payload version: {payload.version}")
        if cache is not None:
            cache.restore(payload.dungeons)
        if progress is not None and payload.progress is not None:
            progress.restore(payload.progress)
        logger.debug(
            "Restored %d dungeon layouts, active quest: %s",
            len(payload.dungeons),
            payload.progress.active.name if payload.progress and payload.progress.active else None,
        )
        return payload
