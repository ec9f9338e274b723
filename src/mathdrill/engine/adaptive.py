"""Adaptive difficulty controller.

Streaks of correct answers move the player up one tier, streaks of wrong
answers move them down one. Every move, and every first mistake, queues a
few easy problems so the player regains confidence before the tier bites.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from mathdrill.config.settings import DifficultyConfig
from mathdrill.engine.tiers import DifficultyTier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DifficultyState:
    tier: DifficultyTier = DifficultyTier.BEGINNER
    consecutive_correct: int = 0
    consecutive_wrong: int = 0
    easy_problems_remaining: int = 0


class AdaptiveController:
    def __init__(self, config: Optional[DifficultyConfig] = None):
        self.config = config or DifficultyConfig()

    def initial_state(self) -> DifficultyState:
        return DifficultyState(tier=self.config.starting_tier)

    def record_outcome(self, correct: bool, state: DifficultyState) -> DifficultyState:
        """Return the state that follows one answered problem."""
        if correct:
            return self._record_correct(state)
        return self._record_wrong(state)

    def _record_correct(self, state: DifficultyState) -> DifficultyState:
        streak = state.consecutive_correct + 1
        if streak < self.config.correct_to_level_up:
            return replace(state, consecutive_correct=streak, consecutive_wrong=0)

        new_tier = state.tier.next
        if new_tier is not state.tier:
            logger.info("level up: %s -> %s", state.tier.value, new_tier.value)
        return DifficultyState(
            tier=new_tier,
            easy_problems_remaining=self.config.easy_after_level_up,
        )

    def _record_wrong(self, state: DifficultyState) -> DifficultyState:
        streak = state.consecutive_wrong + 1
        if streak >= self.config.wrong_to_level_down:
            new_tier = state.tier.previous
            if new_tier is not state.tier:
                logger.info("level down: %s -> %s", state.tier.value, new_tier.value)
            return DifficultyState(
                tier=new_tier,
                easy_problems_remaining=self.config.easy_after_level_down,
            )

        easy = state.easy_problems_remaining
        if streak == 1:
            easy = 1
        return replace(
            state,
            consecutive_correct=0,
            consecutive_wrong=streak,
            easy_problems_remaining=easy,
        )

    @staticmethod
    def consume_easy(state: DifficultyState) -> tuple[DifficultyState, bool]:
        """Take one queued easy problem, if any."""
        if state.easy_problems_remaining <= 0:
            return state, False
        return replace(state, easy_problems_remaining=state.easy_problems_remaining - 1), True
