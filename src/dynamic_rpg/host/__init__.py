"""Collaborator interfaces the engines use to reach the host runtime.

Save-payload support lives in :mod:`dynamic_rpg.host.session`.
"""

from dynamic_rpg.host.interfaces import (
    EventScriptEmitter,
    InMemoryMapStore,
    MapData,
    MapDataStore,
    MapInfo,
    PartyState,
    StaticParty,
)
from dynamic_rpg.host.names import load_name_library

__all__ = [
    "EventScriptEmitter",
    "InMemoryMapStore",
    "MapData",
    "MapDataStore",
    "MapInfo",
    "PartyState",
    "StaticParty",
    "load_name_library",
]
