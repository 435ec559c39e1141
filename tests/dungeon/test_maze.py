"""Tests for recursive-backtracking maze carving."""

from collections import deque

import pytest

from dynamic_rpg.core.rng import GameRNG
from dynamic_rpg.dungeon.maze import Maze, MazeGenerator


def _reachable(maze: Maze) -> set[tuple[int, int]]:
    start = maze.start
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for nxt in maze.open_neighbours(x, y):
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen


class TestMazeGenerator:
    @pytest.mark.parametrize("width,height", [(1, 1), (1, 5), (5, 1), (2, 2), (10, 10), (7, 13)])
    def test_spanning_tree(self, width, height):
        mg = MazeGenerator()
        for seed in range(10):
            maze = mg.generate(width, height, GameRNG(seed=seed))
            assert len(_reachable(maze)) == width * height, f"seed={seed}"
            assert maze.passage_count() == width * height - 1, f"seed={seed}"

    def test_every_cell_visited(self):
        maze = MazeGenerator().generate(8, 6, GameRNG(seed=1))
        assert all(cell.visited for column in maze.cells for cell in column)
        assert all(cell.has_backtracked for column in maze.cells for cell in column)

    def test_boundary_walls_never_removed(self):
        mg = MazeGenerator()
        for seed in range(20):
            maze = mg.generate(6, 4, GameRNG(seed=seed))
            for y in range(4):
                assert maze.cell(0, y).has_west_wall
            for x in range(6):
                assert maze.cell(x, 0).has_north_wall

    def test_single_cell(self):
        maze = MazeGenerator().generate(1, 1, GameRNG(seed=42))
        assert maze.start == (0, 0)
        assert maze.passages() == []
        cell = maze.cell(0, 0)
        assert cell.has_north_wall and cell.has_west_wall
        assert cell.visited

    @pytest.mark.parametrize("width,height", [(0, 0), (0, 5), (5, 0)])
    def test_zero_dimension_gives_empty_maze(self, width, height):
        maze = MazeGenerator().generate(width, height, GameRNG(seed=42))
        assert maze.is_empty
        assert maze.cells == []
        assert maze.start is None

    def test_negative_dimension_rejected(self):
        with pytest.raises(ValueError):
            MazeGenerator().generate(-1, 3, GameRNG(seed=42))

    def test_large_maze_does_not_hit_recursion_limit(self):
        maze = MazeGenerator().generate(60, 60, GameRNG(seed=5))
        assert maze.passage_count() == 60 * 60 - 1

    def test_deterministic_with_same_seed(self):
        mg = MazeGenerator()
        a = mg.generate(9, 9, GameRNG(seed=11))
        b = mg.generate(9, 9, GameRNG(seed=11))
        assert a.passages() == b.passages()

    def test_different_seeds_produce_different_mazes(self):
        mg = MazeGenerator()
        layouts = {
            tuple(mg.generate(6, 6, GameRNG(seed=seed)).passages())
            for seed in range(30)
        }
        assert len(layouts) > 20

    def test_start_cell_is_random(self):
        mg = MazeGenerator()
        starts = {mg.generate(5, 5, GameRNG(seed=seed)).start for seed in range(50)}
        assert len(starts) > 5
