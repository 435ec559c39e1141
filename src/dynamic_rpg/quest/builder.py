"""Quest assembly -- turns sampled parts into named quest descriptors."""

from __future__ import annotations

import logging
from typing import Sequence

from dynamic_rpg.core.numeric import round_half_up
from dynamic_rpg.core.rng import GameRNG
from dynamic_rpg.errors import EmptyInputError, GenerationExhausted
from dynamic_rpg.host.interfaces import MapInfo, PartyState
from dynamic_rpg.quest.config import QuestConfig
from dynamic_rpg.quest.models import (
    QUEST_TYPES,
    QuestBonus,
    QuestDescriptor,
    TargetLocation,
)
from dynamic_rpg.quest.naming import QuestNameRenderer
from dynamic_rpg.quest.sampler import (
    LEVEL_DAMP,
    LEVEL_SCOPE,
    TYPE_DAMP,
    TYPE_SCOPE,
    QuestSampler,
    party_strength,
)

logger = logging.getLogger(__name__)


class QuestBuilder:
    """Generates batches of quests.

    Parameters
    ----------
    config:
        Validated quest configuration.
    rng:
        Source of randomness, shared with the sampler unless one is given.
    """

    def __init__(
        self,
        config: QuestConfig,
        rng: GameRNG,
        sampler: QuestSampler | None = None,
    ) -> None:
        self.config = config
        self.rng = rng
        self.sampler = sampler or QuestSampler(rng, config.max_party_level)
        self.renderer = QuestNameRenderer(config.name_templates)
        self._levels = config.quest_levels()

    # ------------------------------------------------------------------
    # Batches
    # ------------------------------------------------------------------

    def build_batch(
        self,
        count: int,
        party_strength: float,
        available_maps: Sequence[MapInfo],
        name_library: Sequence[str],
        dedup_cache: set[str],
    ) -> list[QuestDescriptor]:
        """Generate *count* quests with unique names, highest level first.

        Every accepted name is added to *dedup_cache*; the caller clears it
        when a new generation session starts.
        """
        if count <= 0:
            return []
        quest_maps = self.quest_maps(available_maps)
        if not name_library:
            raise EmptyInputError("Name library is empty")

        quests = [
            self._build_one(party_strength, quest_maps, name_library, dedup_cache)
            for _ in range(count)
        ]
        quests.sort(key=lambda q: -q.level.index)
        logger.debug(
            "Generated %d quests (levels %s)",
            len(quests), [q.level.label for q in quests],
        )
        return quests

    def build_for_party(
        self,
        count: int,
        party: PartyState,
        available_maps: Sequence[MapInfo],
        name_library: Sequence[str],
        dedup_cache: set[str],
    ) -> list[QuestDescriptor]:
        """:meth:`build_batch` scaled by the mean level of *party*."""
        strength = party_strength(party.member_levels())
        return self.build_batch(count, strength, available_maps, name_library, dedup_cache)

    def _build_one(
        self,
        strength: float,
        quest_maps: list[MapInfo],
        name_library: Sequence[str],
        dedup_cache: set[str],
    ) -> QuestDescriptor:
        for attempt in range(self.config.max_name_retries):
            level = self.sampler.pickup(
                self._levels, LEVEL_DAMP, LEVEL_SCOPE, strength,
            ).model_copy()
            quest_type = self.sampler.pickup(QUEST_TYPES, TYPE_DAMP, TYPE_SCOPE, strength)
            bonus = self.compute_bonus(level.index)
            steps = self.sampler.sample_steps(level.index)
            target = self._pick_from(quest_maps, name_library)

            template_index = self.rng.random_int(0, len(self.renderer.templates) - 1)
            name = self.renderer.render(
                template_index,
                level=level.label,
                map=self.display_map_name(target.map_name),
                type=self.config.type_label(quest_type),
                target=target.target_name,
            )
            if name in dedup_cache:
                logger.debug("Quest name %r taken (attempt %d)", name, attempt + 1)
                continue

            dedup_cache.add(name)
            return QuestDescriptor(
                name=name,
                level=level,
                type=quest_type,
                steps_remaining=steps,
                target=target,
                bonus=bonus,
            )

        raise GenerationExhausted(
            f"No unique quest name after {self.config.max_name_retries} attempts"
        )

    # ------------------------------------------------------------------
    # Parts
    # ------------------------------------------------------------------

    def compute_bonus(self, level_index: int) -> QuestBonus:
        """Credits gained on completion / lost on abandonment.

        Both scale with the width of the level's slice of the credit ladder
        and shrink with the level rank.
        """
        ladder = self.config.credit_ladder
        prev = ladder[level_index - 1] if level_index > 0 else 0
        section = ladder[level_index] - prev
        increase = round_half_up(
            section / (level_index + 2) ** 3 * self.rng.uniform(0.8, 1.2)
        )
        deduct = round_half_up(
            section / (level_index + 2) ** 2 * self.rng.uniform(0.5, 0.9)
        )
        return QuestBonus(increase=increase, deduct=deduct)

    def quest_maps(self, available_maps: Sequence[MapInfo]) -> list[MapInfo]:
        """Maps whose name carries the quest marker."""
        marker = self.config.map_marker
        maps = [m for m in available_maps if m and m.name and marker in m.name]
        if not maps:
            raise EmptyInputError(f"No maps are marked with {marker!r} for quests")
        return maps

    def pick_location(
        self,
        available_maps: Sequence[MapInfo],
        name_library: Sequence[str],
    ) -> TargetLocation:
        """Random quest map plus a random target name from the library."""
        if not name_library:
            raise EmptyInputError("Name library is empty")
        return self._pick_from(self.quest_maps(available_maps), name_library)

    def display_map_name(self, map_name: str) -> str:
        """Map name as shown in quest names: first marker removed."""
        return map_name.replace(self.config.map_marker, "", 1)

    def _pick_from(
        self,
        quest_maps: list[MapInfo],
        name_library: Sequence[str],
    ) -> TargetLocation:
        info = self.rng.random_choice(quest_maps)
        return TargetLocation(
            map_id=info.id,
            map_name=info.name,
            target_name=self.rng.random_choice(name_library),
        )
