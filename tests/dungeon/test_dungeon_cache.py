"""Tests for the TTL layout cache and spawn picking."""

import pytest

from dynamic_rpg.core.rng import GameRNG
from dynamic_rpg.dungeon.cache import DungeonCache, DungeonLayout, SpawnPoint, pick_spawn
from dynamic_rpg.dungeon.maze import MazeGenerator
from dynamic_rpg.dungeon.raster import DungeonRasterizer, TileGrid, TileIds
from dynamic_rpg.errors import EmptyInputError


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class CountingGenerator:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> DungeonLayout:
        self.calls += 1
        return DungeonLayout(
            width=1, height=1, data=tuple([self.calls] * 6), spawn=SpawnPoint(x=0, y=0),
        )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> DungeonCache:
    return DungeonCache(clock=clock)


class TestGetOrGenerate:
    def test_generates_once_within_ttl(self, cache, clock):
        gen = CountingGenerator()
        first = cache.get_or_generate(1, 500, gen)
        clock.now += 499
        second = cache.get_or_generate(1, 500, gen)
        assert gen.calls == 1
        assert second is first

    def test_regenerates_after_ttl(self, cache, clock):
        gen = CountingGenerator()
        cache.get_or_generate(1, 500, gen)
        clock.now += 500
        layout = cache.get_or_generate(1, 500, gen)
        assert gen.calls == 2
        assert layout.data[0] == 2

    def test_map_ids_are_independent(self, cache):
        gen = CountingGenerator()
        cache.get_or_generate(1, 500, gen)
        cache.get_or_generate(2, 500, gen)
        assert gen.calls == 2
        assert len(cache) == 2

    def test_expiry_uses_absolute_time(self, cache, clock):
        cache.get_or_generate(1, 250, CountingGenerator())
        assert cache.entries()[0].expires_at == clock.now + 250

    def test_layout_is_read_only(self, cache):
        layout = cache.get_or_generate(1, 500, CountingGenerator())
        with pytest.raises(Exception):
            layout.width = 99


class TestInvalidation:
    def test_invalidate_forces_regeneration(self, cache):
        gen = CountingGenerator()
        cache.get_or_generate(1, 500, gen)
        cache.invalidate(1)
        assert cache.get(1) is None
        cache.get_or_generate(1, 500, gen)
        assert gen.calls == 2

    def test_invalidate_unknown_map_is_noop(self, cache):
        cache.invalidate(42)
        assert len(cache) == 0

    def test_get_ignores_expired_entries(self, cache, clock):
        cache.get_or_generate(1, 100, CountingGenerator())
        clock.now += 100
        assert cache.get(1) is None
        assert 1 not in cache

    def test_purge_expired(self, cache, clock):
        cache.get_or_generate(1, 100, CountingGenerator())
        cache.get_or_generate(2, 1_000, CountingGenerator())
        clock.now += 200
        assert cache.purge_expired() == 1
        assert 2 in cache

    def test_restore_replaces_entries(self, cache, clock):
        cache.get_or_generate(1, 100, CountingGenerator())
        other = DungeonCache(clock=clock)
        other.restore(cache.entries())
        assert other.get(1) == cache.get(1)


class TestPickSpawn:
    @pytest.fixture
    def grid(self) -> TileGrid:
        maze = MazeGenerator().generate(4, 4, GameRNG(seed=1))
        return DungeonRasterizer().rasterize(maze, TileIds(roof=1, wall=2, ground=3))

    def test_spawn_is_walkable(self, grid):
        for seed in range(50):
            spawn = pick_spawn(grid, GameRNG(seed=seed))
            assert grid.is_walkable(spawn.x, spawn.y)

    def test_spawn_varies(self, grid):
        spawns = {pick_spawn(grid, GameRNG(seed=seed)) for seed in range(50)}
        assert len(spawns) > 10

    def test_no_walkable_tiles(self):
        with pytest.raises(EmptyInputError):
            pick_spawn(TileGrid.blank(4, 4), GameRNG(seed=1))
