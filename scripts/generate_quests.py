#!/usr/bin/env python3
"""Generate a batch of quests for a party and print them.

Usage:
    python scripts/generate_quests.py --count 5 --party 12 15 9
    python scripts/generate_quests.py --config quest_config.json --names data/Names.json
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
from dynamic_rpg.host.interfaces import MapInfo, StaticParty
from dynamic_rpg.host.names import load_name_library
from dynamic_rpg.quest.builder import QuestBuilder
from dynamic_rpg.quest.config import load_quest_config

_DATA_DIR = Path(__file__).parent.parent / "data"

_DEMO_MAPS = [
    MapInfo(id=1, name="Town"),
    MapInfo(id=2, name="$Adventure Cave"),
    MapInfo(id=3, name="$Old Forest"),
    MapInfo(id=4, name="$Sunken Keep"),
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate random quests.")
    parser.add_argument("--count", type=int, default=5, help="Number of quests")
    parser.add_argument("--party", type=int, nargs="*", default=[1], help="Party member levels")
    parser.add_argument("--config", type=Path, default=None, help="Quest config JSON file")
    parser.add_argument("--names", type=Path, default=None,
                        help="Name library JSON file (default: data/<names_file>.json)")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed (random if omitted)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    raw = None
    if args.config:
        with open(args.config) as f:
            raw = json.load(f)
    config = load_quest_config(raw)
    names = load_name_library(args.names or _DATA_DIR / config.names_path)

    rng = GameRNG(args.seed)
    builder = QuestBuilder(config, rng.fork("quests"))
    quests = builder.build_for_party(
        args.count, StaticParty(args.party), _DEMO_MAPS, names, set(),
    )

    print(f"Seed {rng.seed}, party levels {args.party}")
    for quest in quests:
        print(
            f"  {quest.name:<45} level={quest.level.label} type={quest.type.value} "
            f"steps={quest.steps_remaining} +{quest.bonus.increase}/-{quest.bonus.deduct}"
        )


if __name__ == "__main__":
    main()
