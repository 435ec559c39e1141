"""Recursive-backtracking maze carving.

The maze is a ``width x height`` grid of :class:`Cell` objects indexed
``cells[x][y]``.  Every cell starts with its north and west walls standing;
east and south walls are implied by the neighbouring cell's west / north
flag (or by the maze boundary).  Carving walks the grid depth-first from a
random start cell, knocking down the wall between each cell and the cell it
was entered from, so the open passages always form a spanning tree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from dynamic_rpg.core.rng import GameRNG

logger = logging.getLogger(__name__)

Point = tuple[int, int]


class Cell(BaseModel):
    """A single maze cell."""

    x: int
    y: int
    has_north_wall: bool = True
    has_west_wall: bool = True
    visited: bool = False
    has_backtracked: bool = False
    """Set once carving has returned from this cell.  Nothing reads it."""


class Maze(BaseModel):
    """A carved (or empty) maze grid."""

    width: int
    height: int
    cells: list[list[Cell]] = Field(default_factory=list)
    """Column-major grid: ``cells[x][y]``."""

    start: Point | None = None
    """Cell the carving started from (``None`` for an empty maze)."""

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def cell(self, x: int, y: int) -> Cell:
        return self.cells[x][y]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def passages(self) -> list[tuple[Point, Point]]:
        """Return every open passage as a ``(cell, neighbour)`` pair.

        Each passage is reported once, from the cell that owns the cleared
        wall (east or south side of the pair).
        """
        edges: list[tuple[Point, Point]] = []
        for column in self.cells:
            for cell in column:
                if cell.x > 0 and not cell.has_west_wall:
                    edges.append(((cell.x, cell.y), (cell.x - 1, cell.y)))
                if cell.y > 0 and not cell.has_north_wall:
                    edges.append(((cell.x, cell.y), (cell.x, cell.y - 1)))
        return edges

    def passage_count(self) -> int:
        return len(self.passages())

    def open_neighbours(self, x: int, y: int) -> list[Point]:
        """Cells reachable from ``(x, y)`` through a single open passage."""
        result: list[Point] = []
        cell = self.cells[x][y]
        if x > 0 and not cell.has_west_wall:
            result.append((x - 1, y))
        if y > 0 and not cell.has_north_wall:
            result.append((x, y - 1))
        if x + 1 < self.width and not self.cells[x + 1][y].has_west_wall:
            result.append((x + 1, y))
        if y + 1 < self.height and not self.cells[x][y + 1].has_north_wall:
            result.append((x, y + 1))
        return result


@dataclass
class _Frame:
    """One level of the (explicit) backtracking stack."""

    pointer: Point
    pending: list[Point] = field(default_factory=list)


class MazeGenerator:
    """Carves mazes with randomized depth-first backtracking.

    The traversal is the classic recursive one, run on an explicit stack so
    that large grids do not hit the interpreter's recursion limit.
    """

    def generate(self, width: int, height: int, rng: GameRNG) -> Maze:
        """Carve a ``width x height`` maze.

        A zero width or height yields an empty maze with no cells.
        """
        if width < 0 or height < 0:
            raise ValueError(f"Maze dimensions must be >= 0, got {width}x{height}")

        if width == 0 or height == 0:
            logger.debug("Empty maze requested (%dx%d)", width, height)
            return Maze(width=width, height=height)

        maze = Maze(
            width=width,
            height=height,
            cells=[
                [Cell(x=x, y=y) for y in range(height)]
                for x in range(width)
            ],
        )
        start = (rng.random_int(0, width - 1), rng.random_int(0, height - 1))
        maze.start = start

        self._enter(maze, start, start)
        stack = [_Frame(start, self._neighbour_order(start, start, rng))]
        while stack:
            frame = stack[-1]
            if not frame.pending:
                x, y = frame.pointer
                maze.cells[x][y].has_backtracked = True
                stack.pop()
                continue
            nxt = frame.pending.pop(0)
            if self._enter(maze, nxt, frame.pointer):
                stack.append(
                    _Frame(nxt, self._neighbour_order(nxt, frame.pointer, rng))
                )

        logger.debug(
            "Carved %dx%d maze from %s (%d passages)",
            width, height, start, maze.passage_count(),
        )
        return maze

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _enter(maze: Maze, pointer: Point, prev: Point) -> bool:
        """Visit *pointer* coming from *prev*.

        Returns False (and carves nothing) when the target is out of bounds
        or already visited.
        """
        x, y = pointer
        if not maze.in_bounds(x, y):
            return False
        current = maze.cells[x][y]
        if current.visited:
            return False
        current.visited = True

        px, py = prev
        if x > px:
            current.has_west_wall = False
        if x < px:
            maze.cells[px][py].has_west_wall = False
        if y > py:
            current.has_north_wall = False
        if y < py:
            maze.cells[px][py].has_north_wall = False
        return True

    @staticmethod
    def _neighbour_order(pointer: Point, prev: Point, rng: GameRNG) -> list[Point]:
        """The four orthogonal neighbours in random order, minus *prev*."""
        x, y = pointer
        candidates = [(x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)]
        # Stable sort on small random keys, so ties keep their order.
        keyed = [(rng.random_int(0, 9), i) for i in range(len(candidates))]
        keyed.sort(key=lambda pair: pair[0])
        ordered = [candidates[i] for _, i in keyed]
        return [p for p in ordered if p != prev]
