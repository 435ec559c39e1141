#!/usr/bin/env python3
"""Generate a dungeon layout and dump it as JSON.

Usage:
    python scripts/generate_dungeon.py --width 6 --height 4 --seed 7
    python scripts/generate_dungeon.py -o dungeon.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dynamic_rpg.core.rng import GameRNG
from dynamic_rpg.dungeon.config import load_dungeon_config
from dynamic_rpg.dungeon.service import TRANSFER_PLAYER, DungeonService
from dynamic_rpg.host.interfaces import InMemoryMapStore, MapData


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a maze dungeon layout.")
    parser.add_argument("--width", type=int, default=10, help="Maze width in cells")
    parser.add_argument("--height", type=int, default=10, help="Maze height in cells")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed (random if omitted)")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write JSON here instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = load_dungeon_config({"maze_width": args.width, "maze_height": args.height})
    template = MapData(
        width=3,
        height=1,
        data=[1, 2, 3],
        events=[None, {"id": 1, "name": "Exit", "x": 0, "y": 0,
                       "pages": [{"list": [{"code": TRANSFER_PLAYER, "parameters": []}]}]}],
    )
    store = InMemoryMapStore({1: template})
    rng = GameRNG(args.seed)
    service = DungeonService(store, rng, config)

    spawn = service.generate_dungeon(1)
    layout = service.load_map(1)
    result = {"seed": rng.seed, "spawn": spawn.model_dump(), "map": layout.model_dump()}

    text = json.dumps(result)
    if args.output:
        args.output.write_text(text)
        print(f"Wrote {layout.width}x{layout.height} dungeon to {args.output}")
    else:
        print(text)


if __name__ == "__main__":
    main()
