"""Single active quest tracking and the credit ladder.

State machine::

    NO_ACTIVE_QUEST --accept--> DOING --advance_step (last step)--> DONE
          ^                      |  ^______advance_step______|        |
          |______abandon_________|                                    |
          |______finish(force)___|                                    |
          |______________finish / abandon_____________________________|

Finishing a quest credits ``bonus.increase`` to the ledger and pays out
gold; abandoning it deducts ``bonus.deduct`` (never below zero).  After
either, the player's tier is re-derived from the credit ladder.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from pydantic import BaseModel

from dynamic_rpg.core.numeric import round_half_up
from dynamic_rpg.core.rng import GameRNG
from dynamic_rpg.errors import InvalidTransition
from dynamic_rpg.host.interfaces import EventScriptEmitter, MapData, MapInfo
from dynamic_rpg.quest.builder import QuestBuilder
from dynamic_rpg.quest.config import QuestConfig
from dynamic_rpg.quest.encounters import DefaultEventEmitter, EncounterTrigger, ScriptRefs
from dynamic_rpg.quest.models import (
    Grade,
    ProgressPhase,
    ProgressState,
    QuestDescriptor,
    QuestStatus,
)

logger = logging.getLogger(__name__)

EnterCallback = Callable[[MapData], None]


def tier_for_credits(ladder: Sequence[int], credits: int) -> int:
    """Index of the first ladder threshold above *credits*.

    Returns ``len(ladder)`` once every threshold has been passed.
    """
    for index, threshold in enumerate(ladder):
        if threshold > credits:
            return index
    return len(ladder)


class ProgressSnapshot(BaseModel):
    """Serializable form of :class:`QuestProgress`."""

    state: ProgressState
    active: QuestDescriptor | None = None


class QuestProgress:
    """Tracks the one active quest and the player's credit ledger.

    Parameters
    ----------
    config:
        Validated quest configuration (levels, ladder, ``up_rate_max``).
    rng:
        Source of randomness for promotions and new step locations.
    available_maps:
        Host map directory; quest steps move between maps carrying the
        configured marker.
    name_library:
        Candidate target names for new steps.
    builder:
        Quest builder used to pick step locations.  Created when omitted.
    """

    def __init__(
        self,
        config: QuestConfig,
        rng: GameRNG,
        available_maps: Sequence[MapInfo] = (),
        name_library: Sequence[str] = (),
        builder: QuestBuilder | None = None,
    ) -> None:
        self.config = config
        self.rng = rng
        self.available_maps = list(available_maps)
        self.name_library = list(name_library)
        self.builder = builder or QuestBuilder(config, rng)
        self.state = ProgressState()
        self._active: QuestDescriptor | None = None
        self._on_enter: EnterCallback | None = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def phase(self) -> ProgressPhase:
        if self._active is None:
            return ProgressPhase.NO_ACTIVE_QUEST
        if self._active.status == QuestStatus.DONE:
            return ProgressPhase.DONE
        return ProgressPhase.DOING

    def current(self) -> QuestDescriptor | None:
        return self._active

    def grade(self) -> Grade:
        tier = self.state.tier_index
        label = self.config.levels[min(tier, self.config.level_count - 1)]
        return Grade(credits=self.state.total_credits, level=tier, label=label)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def accept(self, descriptor: QuestDescriptor) -> bool:
        """Make *descriptor* the active quest.

        Returns False, leaving everything untouched, when the quest's level
        is above the player's tier.

        Raises
        ------
        InvalidTransition
            If a quest is already active.
        """
        if self._active is not None:
            raise InvalidTransition("accept a quest", self.phase.value)
        if descriptor.level.index > self.state.tier_index:
            logger.debug(
                "Rejected quest %r: level %d above tier %d",
                descriptor.name, descriptor.level.index, self.state.tier_index,
            )
            return False

        self._active = descriptor.model_copy(
            deep=True, update={"status": QuestStatus.DOING},
        )
        logger.info("Accepted quest %r", descriptor.name)
        return True

    def advance_step(self) -> QuestDescriptor:
        """Complete the current step of the active quest.

        The reward rate may be promoted first.  The last step moves the
        quest to DONE; any other step sends the player to a new location.
        """
        quest = self._doing("advance a quest step")

        # The next location is drawn before any change so a failed pick
        # leaves the quest untouched.
        next_target = None
        if quest.steps_remaining > 1:
            next_target = self.builder.pick_location(self.available_maps, self.name_library)

        self._promote(quest)
        quest.steps_remaining -= 1
        if next_target is not None:
            quest.target = next_target
            logger.debug(
                "Quest %r: %d steps left, next stop %s",
                quest.name, quest.steps_remaining, quest.target.map_name,
            )
        else:
            quest.status = QuestStatus.DONE
            logger.info("Quest %r done", quest.name)
        return quest

    def finish(self, force: bool = False) -> int | bool:
        """Hand in the active quest.

        Returns the gold reward, or False (no state change) when the quest
        is not DONE and *force* is not set.
        """
        if self._active is None:
            raise InvalidTransition("finish a quest", self.phase.value)
        if self.phase != ProgressPhase.DONE and not force:
            return False

        quest = self._active
        self.state.total_credits += quest.bonus.increase
        self._retier()
        gold = round_half_up(quest.level.rate * ((quest.level.index + 1) * 10) ** 2)
        self._active = None
        logger.info(
            "Finished quest %r: +%d credits, %d gold", quest.name, quest.bonus.increase, gold,
        )
        return gold

    def abandon(self) -> ProgressState:
        """Drop the active quest, paying its deduction in credits."""
        if self._active is None:
            raise InvalidTransition("abandon a quest", self.phase.value)

        quest = self._active
        deduct = min(self.state.total_credits, quest.bonus.deduct)
        self.state.total_credits -= deduct
        self._retier()
        self._active = None
        logger.info("Abandoned quest %r: -%d credits", quest.name, deduct)
        return self.state

    # ------------------------------------------------------------------
    # Map hooks
    # ------------------------------------------------------------------

    def on_enter(self, callback: EnterCallback) -> None:
        """Register the callback fired when the player enters the quest map."""
        self._on_enter = callback

    def enter_map(self, map_id: int, map_data: MapData) -> bool:
        """Notify the tracker that *map_id* was entered.

        Returns True if the enter callback fired.
        """
        quest = self._active
        if (
            quest is None
            or self.phase != ProgressPhase.DOING
            or quest.target.map_id != map_id
            or self._on_enter is None
        ):
            return False
        self._on_enter(map_data)
        return True

    def spawn_target(
        self,
        event_id: int,
        x: int,
        y: int,
        scripts: ScriptRefs,
        map_data: MapData,
        emitter: EventScriptEmitter | None = None,
    ) -> dict | None:
        """Place an encounter event for the current target on *map_data*.

        Returns the inserted record, or None if an event with the target's
        name already exists on the map.
        """
        quest = self._doing("spawn a quest target")

        name = quest.target.target_name
        if map_data.find_event(name) is not None:
            return None
        emitter = emitter or DefaultEventEmitter()
        record = emitter.emit(event_id, name, x, y, EncounterTrigger(script_refs=scripts))
        map_data.place_event(event_id, record)
        logger.debug("Spawned target %r as event %d at (%d, %d)", name, event_id, x, y)
        return record

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            state=self.state.model_copy(),
            active=self._active.model_copy(deep=True) if self._active else None,
        )

    def restore(self, snapshot: ProgressSnapshot) -> None:
        self.state = snapshot.state.model_copy()
        self._active = snapshot.active.model_copy(deep=True) if snapshot.active else None
        self._retier()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _doing(self, operation: str) -> QuestDescriptor:
        quest = self._active
        if quest is None or self.phase != ProgressPhase.DOING:
            raise InvalidTransition(operation, self.phase.value)
        return quest

    def _promote(self, quest: QuestDescriptor) -> None:
        """Grow the reward rate; past ``up_rate_max ** 4`` raise the level.

        The level tag in the quest name is swapped with a plain substring
        replace of the first occurrence of the old label.
        """
        up_rate_max = self.config.up_rate_max
        quest.level.rate *= self.rng.uniform(1, up_rate_max)
        if quest.level.rate <= up_rate_max ** 4:
            return

        old_label = quest.level.label
        quest.level.index = min(quest.level.index + 1, self.config.level_count - 1)
        quest.level.label = self.config.levels[quest.level.index]
        quest.name = quest.name.replace(old_label, quest.level.label, 1)
        logger.debug(
            "Promoted quest %r to level %s (rate %.3f)",
            quest.name, quest.level.label, quest.level.rate,
        )

    def _retier(self) -> None:
        self.state.tier_index = tier_for_credits(
            self.config.credit_ladder, self.state.total_credits,
        )
