"""Procedural dungeon mazes and quest generation for 2D RPG hosts.

Two independent engines live here:

- :mod:`dynamic_rpg.dungeon` carves backtracking mazes, rasterizes them into
  layered tile grids and memoizes the result per map with a TTL.
- :mod:`dynamic_rpg.quest` samples level-scaled quest descriptors and tracks
  the single active quest against a credit ladder.

Host specifics (map storage, party data, event records, save payloads) are
reached only through the collaborator interfaces in :mod:`dynamic_rpg.host`.
"""

__version__ = "0.1.0"
