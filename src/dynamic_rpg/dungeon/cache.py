"""Time-expiring memo of generated dungeon layouts, keyed by map id."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

from dynamic_rpg.core.rng import GameRNG
from dynamic_rpg.dungeon.raster import TileGrid
from dynamic_rpg.errors import EmptyInputError

logger = logging.getLogger(__name__)


class SpawnPoint(BaseModel):
    """Tile position the player is placed on when entering a dungeon."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int


class DungeonLayout(BaseModel):
    """Snapshot of a generated dungeon.

    Frozen: the cache hands the same instance to every caller.
    """

    model_config = ConfigDict(frozen=True)

    width: int
    height: int
    data: tuple[int, ...]
    """Flat tile array in host order (see :meth:`TileGrid.to_flat`)."""

    spawn: SpawnPoint
    events: tuple[dict[str, Any] | None, ...] = ()

    def grid(self) -> TileGrid:
        return TileGrid.from_flat(self.width, self.height, list(self.data))


class DungeonCacheEntry(BaseModel):
    map_id: int
    expires_at: float
    """Absolute expiry time, milliseconds since the epoch."""

    layout: DungeonLayout


def _now_ms() -> float:
    return time.time() * 1000


def pick_spawn(grid: TileGrid, rng: GameRNG) -> SpawnPoint:
    """Pick a walkable tile uniformly at random."""
    candidates = grid.walkable_tiles()
    if not candidates:
        raise EmptyInputError("Tile grid has no walkable tiles to spawn on")
    x, y = rng.random_choice(candidates)
    return SpawnPoint(x=x, y=y)


class DungeonCache:
    """Map id -> generated layout, reused until its TTL elapses.

    Parameters
    ----------
    clock:
        Returns the current time in milliseconds.  Defaults to wall-clock
        time; tests inject a fake.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or _now_ms
        self._entries: dict[int, DungeonCacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, map_id: object) -> bool:
        return isinstance(map_id, int) and self.get(map_id) is not None

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, map_id: int) -> DungeonLayout | None:
        """Return the cached layout for *map_id* if it has not expired."""
        entry = self._entries.get(map_id)
        if entry is None or self._clock() >= entry.expires_at:
            return None
        return entry.layout

    def get_or_generate(
        self,
        map_id: int,
        ttl_ms: float,
        generate_fn: Callable[[], DungeonLayout],
    ) -> DungeonLayout:
        """Return the fresh cached layout, or generate, store and return one."""
        cached = self.get(map_id)
        if cached is not None:
            logger.debug("Dungeon cache hit for map %d", map_id)
            return cached

        logger.debug("Dungeon cache miss for map %d, generating", map_id)
        layout = generate_fn()
        self._entries[map_id] = DungeonCacheEntry(
            map_id=map_id,
            expires_at=self._clock() + ttl_ms,
            layout=layout,
        )
        return layout

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------

    def invalidate(self, map_id: int) -> None:
        """Drop any entry for *map_id* so the next request regenerates."""
        if self._entries.pop(map_id, None) is not None:
            logger.info("Invalidated cached dungeon for map %d", map_id)

    def purge_expired(self) -> int:
        """Remove every expired entry.  Returns how many were removed."""
        now = self._clock()
        expired = [mid for mid, e in self._entries.items() if now >= e.expires_at]
        for map_id in expired:
            del self._entries[map_id]
        return len(expired)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def entries(self) -> list[DungeonCacheEntry]:
        return list(self._entries.values())

    def restore(self, entries: list[DungeonCacheEntry]) -> None:
        """Replace the cache contents (used when loading a save)."""
        self._entries = {e.map_id: e for e in entries}
