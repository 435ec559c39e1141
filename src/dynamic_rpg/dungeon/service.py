"""Dungeon session service -- ties maze generation, rasterization, spawn
selection and the layout cache to a host map store.

``generate_dungeon`` is what the host calls when the player enters a
dungeon map: on a cache miss it rebuilds the map from its template, moves
the map's exit event onto the spawn point and caches the result; on a hit
it simply hands back the cached spawn.  ``load_map`` is the replacement for
the host's plain map loader, serving the cached layout while it is fresh.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from dynamic_rpg.core.rng import GameRNG
from dynamic_rpg.dungeon.cache import DungeonCache, DungeonLayout, SpawnPoint, pick_spawn
from dynamic_rpg.dungeon.config import DungeonConfig
from dynamic_rpg.dungeon.maze import MazeGenerator
from dynamic_rpg.dungeon.raster import DungeonRasterizer, TileIds
from dynamic_rpg.host.interfaces import MapData, MapDataStore

logger = logging.getLogger(__name__)

# Host command code for "transfer player"; the event carrying it is the
# dungeon's exit and is moved onto the spawn point.
TRANSFER_PLAYER = 201


def find_exit_event(events: list[dict[str, Any] | None]) -> dict[str, Any] | None:
    """Return the first event with a page containing a transfer command."""
    for event in events:
        if not event:
            continue
        for page in event.get("pages") or []:
            for command in page.get("list") or []:
                if command.get("code") == TRANSFER_PLAYER:
                    return event
    return None


class DungeonService:
    """Generates and serves dungeon layouts for one game session.

    Parameters
    ----------
    store:
        Host map store; template maps are read from it.
    rng:
        Session RNG.  Forked into ``"maze"`` and ``"spawn"`` streams.
    config:
        Maze size and cache TTL.
    cache:
        Layout cache; a new one is created when omitted.
    """

    def __init__(
        self,
        store: MapDataStore,
        rng: GameRNG,
        config: DungeonConfig | None = None,
        cache: DungeonCache | None = None,
    ) -> None:
        self.store = store
        self.config = config or DungeonConfig()
        self.cache = cache if cache is not None else DungeonCache()
        self._maze_rng = rng.fork("maze")
        self._spawn_rng = rng.fork("spawn")
        self._maze_gen = MazeGenerator()
        self._rasterizer = DungeonRasterizer()

    def generate_dungeon(self, map_id: int) -> SpawnPoint:
        """Ensure *map_id* has a fresh layout and return its spawn point."""
        layout = self.cache.get_or_generate(
            map_id, self.config.ttl_ms, lambda: self._build(map_id),
        )
        return layout.spawn

    def load_map(self, map_id: int) -> MapData:
        """Return the cached layout for *map_id* while fresh, else the stored map."""
        layout = self.cache.get(map_id)
        if layout is None:
            return self.store.load(map_id)
        return MapData(
            width=layout.width,
            height=layout.height,
            data=list(layout.data),
            events=copy.deepcopy(list(layout.events)),
        )

    def invalidate(self, map_id: int) -> None:
        """Force the next :meth:`generate_dungeon` call for *map_id* to rebuild."""
        self.cache.invalidate(map_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _build(self, map_id: int) -> DungeonLayout:
        template = self.store.load(map_id)
        tile_ids = TileIds.from_template(template.data)

        maze = self._maze_gen.generate(
            self.config.maze_width, self.config.maze_height, self._maze_rng,
        )
        grid = self._rasterizer.rasterize(maze, tile_ids)
        spawn = pick_spawn(grid, self._spawn_rng)

        events = copy.deepcopy(template.events)
        exit_event = find_exit_event(events)
        if exit_event is None:
            logger.warning("Map %d has no exit event to place at the spawn point", map_id)
        else:
            exit_event["x"] = spawn.x
            exit_event["y"] = spawn.y

        logger.info(
            "Generated %dx%d dungeon for map %d, spawn at (%d, %d)",
            maze.width, maze.height, map_id, spawn.x, spawn.y,
        )
        return DungeonLayout(
            width=grid.width,
            height=grid.height,
            data=tuple(grid.to_flat()),
            spawn=spawn,
            events=tuple(events),
        )
