"""Abstract collaborators standing in for the host engine.

The engines never touch host globals.  Everything they need from the
running game (map layouts, party levels, event records) arrives through
one of the interfaces below, injected by the caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from dynamic_rpg.quest.encounters import EncounterTrigger


# ---------------------------------------------------------------------------
# Map data
# ---------------------------------------------------------------------------

class MapData(BaseModel):
    """A host map layout.

    ``data`` is the flat tile-index array in host order:
    ``layer * height * width + y * width + x``.
    """

    width: int
    height: int
    data: list[int] = Field(default_factory=list)
    events: list[dict[str, Any] | None] = Field(default_factory=list)
    """Host event records.  Slots may be ``None`` (deleted events)."""

    def find_event(self, name: str) -> dict[str, Any] | None:
        for event in self.events:
            if event and event.get("name") == name:
                return event
        return None

    def place_event(self, event_id: int, record: dict[str, Any]) -> None:
        """Store *record* at index *event_id*, padding the list as needed."""
        while len(self.events) <= event_id:
            self.events.append(None)
        self.events[event_id] = record


class MapInfo(BaseModel):
    """Entry of the host's map directory (id + display name)."""

    id: int
    name: str


class MapDataStore(ABC):
    """Loads map layouts by identifier."""

    @abstractmethod
    def load(self, map_id: int) -> MapData:
        """Return the stored layout for *map_id*.

        Raises
        ------
        KeyError
            If no map with that identifier exists.
        """

    @abstractmethod
    def map_infos(self) -> list[MapInfo]:
        """Return the directory of every map known to the host."""


class InMemoryMapStore(MapDataStore):
    """Dict-backed store, used by scripts and tests."""

    def __init__(
        self,
        maps: dict[int, MapData] | None = None,
        infos: list[MapInfo] | None = None,
    ) -> None:
        self._maps: dict[int, MapData] = dict(maps or {})
        self._infos = list(infos or [])

    def load(self, map_id: int) -> MapData:
        if map_id not in self._maps:
            raise KeyError(f"Unknown map id: {map_id}")
        return self._maps[map_id].model_copy(deep=True)

    def save(self, map_id: int, map_data: MapData) -> None:
        self._maps[map_id] = map_data.model_copy(deep=True)

    def map_infos(self) -> list[MapInfo]:
        return list(self._infos)


# ---------------------------------------------------------------------------
# Party
# ---------------------------------------------------------------------------

class PartyState(ABC):
    """Read-only view of the active party."""

    @abstractmethod
    def member_levels(self) -> list[int]:
        """Levels of the members currently in the battle party."""


class StaticParty(PartyState):
    """Fixed list of member levels."""

    def __init__(self, levels: list[int]) -> None:
        self._levels = list(levels)

    def member_levels(self) -> list[int]:
        return list(self._levels)


# ---------------------------------------------------------------------------
# Event scripting
# ---------------------------------------------------------------------------

class EventScriptEmitter(ABC):
    """Turns an encounter description into a host event record."""

    @abstractmethod
    def emit(
        self,
        event_id: int,
        name: str,
        x: int,
        y: int,
        trigger: EncounterTrigger,
    ) -> dict[str, Any]:
        """Build the record to insert into a map's event list.

        The returned dict is opaque to the engines apart from its
        ``"name"`` key, which is used to avoid spawning duplicates.
        """
