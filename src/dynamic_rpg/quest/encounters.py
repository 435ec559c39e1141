"""Encounter triggers for defeat-enemy quest targets.

The quest engine only describes an encounter (how it is triggered and which
host scripts run on win / escape / lose).  Turning that description into a
host event record is the job of an :class:`EventScriptEmitter`;
:class:`DefaultEventEmitter` produces a minimal record in the host's
page / command-list shape.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel

from dynamic_rpg.host.interfaces import EventScriptEmitter


class TriggerCondition(str, Enum):
    ACTION_BUTTON = "ACTION_BUTTON"
    PLAYER_TOUCH = "PLAYER_TOUCH"
    EVENT_TOUCH = "EVENT_TOUCH"


class ScriptRefs(BaseModel):
    """Host script snippets run on each battle outcome."""

    win: str
    escape: str
    lose: str


class EncounterTrigger(BaseModel):
    condition_type: TriggerCondition = TriggerCondition.EVENT_TOUCH
    troop_id: int = 10
    can_escape: bool = True
    can_lose: bool = True
    script_refs: ScriptRefs


# Host command codes
BATTLE_PROCESSING = 301
IF_WIN = 601
IF_ESCAPE = 602
IF_LOSE = 603
END_BRANCH = 604
SCRIPT = 355

_TRIGGER_CODES = {
    TriggerCondition.ACTION_BUTTON: 0,
    TriggerCondition.PLAYER_TOUCH: 1,
    TriggerCondition.EVENT_TOUCH: 2,
}


def _command(code: int, parameters: list[Any] | None = None, indent: int = 0) -> dict[str, Any]:
    return {"code": code, "parameters": parameters or [], "indent": indent}


class DefaultEventEmitter(EventScriptEmitter):
    """Builds a wandering-monster event that starts a battle on contact."""

    def __init__(self, character_name: str = "Monster", character_index: int = 1) -> None:
        self.character_name = character_name
        self.character_index = character_index

    def emit(
        self,
        event_id: int,
        name: str,
        x: int,
        y: int,
        trigger: EncounterTrigger,
    ) -> dict[str, Any]:
        refs = trigger.script_refs
        commands = [
            _command(BATTLE_PROCESSING, [0, trigger.troop_id, trigger.can_escape, trigger.can_lose]),
            _command(IF_WIN),
            _command(SCRIPT, [refs.win], 1),
            _command(IF_ESCAPE),
            _command(SCRIPT, [refs.escape], 1),
            _command(IF_LOSE),
            _command(SCRIPT, [refs.lose], 1),
            _command(END_BRANCH),
        ]
        page = {
            "image": {
                "tileId": 0,
                "characterName": self.character_name,
                "characterIndex": self.character_index,
                "direction": 2,
                "pattern": 0,
            },
            "list": commands,
            "moveType": 1,
            "moveSpeed": 2,
            "moveFrequency": 3,
            "priorityType": 1,
            "trigger": _TRIGGER_CODES[trigger.condition_type],
            "walkAnime": True,
        }
        return {"id": event_id, "name": name, "note": "", "pages": [page], "x": x, "y": y}
