"""Loading of the target-name library (a JSON array of strings)."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from dynamic_rpg.errors import EmptyInputError

logger = logging.getLogger(__name__)


def load_name_library(path: Path | str) -> list[str]:
    """Load candidate NPC / enemy / item names from a JSON file.

    Raises
    ------
    EmptyInputError
        If the file holds no names.
    ValueError
        If the file is not a JSON array of strings.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list) or not all(isinstance(n, str) for n in raw):
        raise ValueError(f"{path} must contain a JSON array of strings")
    names = [n for n in raw if n]
    if not names:
        raise EmptyInputError(f"Name library {path} is empty")

    logger.debug("Loaded %d names from %s", len(names), path)
    return names
