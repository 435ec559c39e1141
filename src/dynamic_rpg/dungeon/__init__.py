"""Dungeon module -- maze carving, rasterization, layout caching."""

from dynamic_rpg.dungeon.cache import (
    DungeonCache,
    DungeonCacheEntry,
    DungeonLayout,
    SpawnPoint,
    pick_spawn,
)
from dynamic_rpg.dungeon.config import DungeonConfig, load_dungeon_config
from dynamic_rpg.dungeon.maze import Cell, Maze, MazeGenerator
from dynamic_rpg.dungeon.raster import DungeonRasterizer, TileGrid, TileIds
from dynamic_rpg.dungeon.service import DungeonService

__all__ = [
    "Cell",
    "DungeonCache",
    "DungeonCacheEntry",
    "DungeonConfig",
    "DungeonLayout",
    "DungeonRasterizer",
    "DungeonService",
    "Maze",
    "MazeGenerator",
    "SpawnPoint",
    "TileGrid",
    "TileIds",
    "load_dungeon_config",
    "pick_spawn",
]
