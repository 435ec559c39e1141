"""Rasterization of carved mazes into layered tile grids.

Grid geometry
-------------
For a ``w x h`` maze the grid is ``(2w + 2) x (2h + 2)`` tiles with six
stacked layers (the host's layer count).  Only two layers are written:

- layer 0 (:data:`VISUAL_LAYER`): wall / ground tile ids
- layer 5 (:data:`ZONE_LAYER`): :data:`WALKABLE_ZONE` on tiles the player
  may occupy, 0 elsewhere

A one-tile frame surrounds the cells.  Cell ``(x, y)`` owns the 2x2 block
whose top-left tile is ``(2x + 1, 2y + 1)``::

    +--------+--------+
    | corner |  top   |    corner: wall if top or left wall stands
    +--------+--------+    top:    wall if the north wall stands
    |  left  | ground |    left:   wall if the west wall stands
    +--------+--------+

Walls on the maze boundary are left to the frame, so only walls between two
cells are painted inside blocks.  The frame itself is wall on all four
sides.  The template's roof tile is read but not painted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from pydantic import BaseModel

from dynamic_rpg.dungeon.maze import Maze, Point
from dynamic_rpg.errors import EmptyInputError

logger = logging.getLogger(__name__)

LAYER_COUNT = 6
VISUAL_LAYER = 0
ZONE_LAYER = 5
WALKABLE_ZONE = 1


class TileIds(BaseModel):
    """Tile ids used to paint the visual layer."""

    roof: int
    wall: int
    ground: int

    @classmethod
    def from_template(cls, data: list[int]) -> TileIds:
        """Read ``(roof, wall, ground)`` from the first three layer-0 tiles
        of a template map."""
        if len(data) < 3:
            raise EmptyInputError(
                f"Template map needs at least 3 tiles, got {len(data)}"
            )
        return cls(roof=data[0], wall=data[1], ground=data[2])


@dataclass
class TileGrid:
    """Stacked tile layers, ``layers[layer, y, x]``."""

    layers: np.ndarray

    @classmethod
    def blank(cls, width: int, height: int, fill: int = 0) -> TileGrid:
        layers = np.zeros((LAYER_COUNT, height, width), dtype=np.int64)
        layers[VISUAL_LAYER, :, :] = fill
        return cls(layers=layers)

    @classmethod
    def from_flat(cls, width: int, height: int, data: list[int]) -> TileGrid:
        """Rebuild a grid from the host's flat array."""
        expected = LAYER_COUNT * width * height
        if len(data) != expected:
            raise ValueError(
                f"Flat tile data has {len(data)} entries, expected {expected}"
            )
        layers = np.asarray(data, dtype=np.int64).reshape(LAYER_COUNT, height, width)
        return cls(layers=layers)

    # -- queries -------------------------------------------------------------

    @property
    def width(self) -> int:
        return int(self.layers.shape[2])

    @property
    def height(self) -> int:
        return int(self.layers.shape[1])

    def tile(self, x: int, y: int, layer: int = VISUAL_LAYER) -> int:
        return int(self.layers[layer, y, x])

    def is_walkable(self, x: int, y: int) -> bool:
        return self.tile(x, y, ZONE_LAYER) == WALKABLE_ZONE

    def walkable_tiles(self) -> list[Point]:
        """All ``(x, y)`` positions marked walkable, in row-major order."""
        ys, xs = np.nonzero(self.layers[ZONE_LAYER] == WALKABLE_ZONE)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def to_flat(self) -> list[int]:
        """Flatten to host order ``layer * h * w + y * w + x``."""
        return [int(v) for v in self.layers.ravel()]

    # -- painting ------------------------------------------------------------

    def paint(self, x: int, y: int, layer: int, value: int) -> None:
        self.layers[layer, y, x] = value


class DungeonRasterizer:
    """Expands a carved :class:`Maze` into a :class:`TileGrid`."""

    def rasterize(self, maze: Maze, tile_ids: TileIds) -> TileGrid:
        if maze.is_empty:
            raise EmptyInputError(
                f"Cannot rasterize an empty maze ({maze.width}x{maze.height})"
            )

        grid = TileGrid.blank(maze.width * 2 + 2, maze.height * 2 + 2, fill=tile_ids.wall)

        for column in maze.cells:
            for cell in column:
                top = cell.has_north_wall and cell.y > 0
                left = cell.has_west_wall and cell.x > 0
                bx, by = cell.x * 2 + 1, cell.y * 2 + 1
                self._paint_tile(grid, tile_ids, bx, by, top or left)
                self._paint_tile(grid, tile_ids, bx + 1, by, top)
                self._paint_tile(grid, tile_ids, bx, by + 1, left)
                self._paint_tile(grid, tile_ids, bx + 1, by + 1, False)

        logger.debug(
            "Rasterized %dx%d maze into %dx%d grid (%d walkable tiles)",
            maze.width, maze.height, grid.width, grid.height,
            len(grid.walkable_tiles()),
        )
        return grid

    @staticmethod
    def _paint_tile(
        grid: TileGrid,
        tile_ids: TileIds,
        x: int,
        y: int,
        is_wall: bool,
    ) -> None:
        if is_wall:
            grid.paint(x, y, VISUAL_LAYER, tile_ids.wall)
            grid.paint(x, y, ZONE_LAYER, 0)
        else:
            grid.paint(x, y, VISUAL_LAYER, tile_ids.ground)
            grid.paint(x, y, ZONE_LAYER, WALKABLE_ZONE)
