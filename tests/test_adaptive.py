"""Tests for the adaptive difficulty controller."""

from __future__ import annotations

import dataclasses

import pytest

from mathdrill.config.settings import DifficultyConfig
from mathdrill.engine.adaptive import AdaptiveController, DifficultyState
from mathdrill.engine.tiers import DifficultyTier


@pytest.fixture
def controller():
    return AdaptiveController()


def _play(controller, state, outcomes):
    for correct in outcomes:
        state = controller.record_outcome(correct, state)
        assert not (state.consecutive_correct > 0 and state.consecutive_wrong > 0)
        assert state.easy_problems_remaining >= 0
    return state


class TestRecordCorrect:
    def test_counts_streak(self, controller):
        state = _play(controller, DifficultyState(), [True, True])
        assert state.consecutive_correct == 2
        assert state.tier is DifficultyTier.BEGINNER

    def test_correct_resets_wrong_streak(self, controller):
        state = DifficultyState(consecutive_wrong=1, easy_problems_remaining=1)
        state = controller.record_outcome(True, state)
        assert state.consecutive_wrong == 0
        assert state.consecutive_correct == 1

    def test_level_up_after_threshold(self, controller):
        state = _play(controller, DifficultyState(), [True] * 4)
        assert state.tier is DifficultyTier.EASY
        assert state.consecutive_correct == 0
        assert state.consecutive_wrong == 0
        assert state.easy_problems_remaining == 2

    def test_one_short_of_threshold_stays(self, controller):
        state = _play(controller, DifficultyState(), [True] * 3)
        assert state.tier is DifficultyTier.BEGINNER

    def test_level_up_never_skips(self, controller):
        state = DifficultyState()
        for expected in DifficultyTier.ordered()[1:]:
            state = _play(controller, state, [True] * 4)
            assert state.tier is expected

    def test_level_up_saturates_at_expert(self, controller):
        state = _play(controller, DifficultyState(tier=DifficultyTier.EXPERT), [True] * 4)
        assert state.tier is DifficultyTier.EXPERT
        assert state.consecutive_correct == 0

    def test_custom_threshold(self):
        controller = AdaptiveController(DifficultyConfig(correct_to_level_up=5))
        state = _play(controller, DifficultyState(), [True] * 4)
        assert state.tier is DifficultyTier.BEGINNER
        state = controller.record_outcome(True, state)
        assert state.tier is DifficultyTier.EASY


class TestRecordWrong:
    def test_single_wrong_queues_one_easy(self, controller):
        state = DifficultyState(tier=DifficultyTier.MEDIUM, consecutive_correct=3)
        state = controller.record_outcome(False, state)
        assert state.tier is DifficultyTier.MEDIUM
        assert state.consecutive_wrong == 1
        assert state.consecutive_correct == 0
        assert state.easy_problems_remaining == 1

    def test_level_down_after_threshold(self, controller):
        state = _play(controller, DifficultyState(tier=DifficultyTier.HARD), [False, False])
        assert state.tier is DifficultyTier.MEDIUM
        assert state.consecutive_wrong == 0
        assert state.easy_problems_remaining == 2

    def test_floor_still_queues_recovery(self, controller):
        state = _play(controller, DifficultyState(), [False, False])
        assert state.tier is DifficultyTier.BEGINNER
        assert state.consecutive_wrong == 0
        assert state.easy_problems_remaining == 2

    def test_second_wrong_below_threshold_keeps_queue(self):
        controller = AdaptiveController(DifficultyConfig(wrong_to_level_down=3))
        state = _play(controller, DifficultyState(tier=DifficultyTier.EASY), [False])
        state = controller.consume_easy(state)[0]
        state = controller.record_outcome(False, state)
        assert state.consecutive_wrong == 2
        assert state.easy_problems_remaining == 0
        state = controller.record_outcome(False, state)
        assert state.tier is DifficultyTier.BEGINNER

    def test_configured_recovery_count(self):
        controller = AdaptiveController(DifficultyConfig(easy_after_level_down=3))
        state = _play(controller, DifficultyState(tier=DifficultyTier.EASY), [False, False])
        assert state.easy_problems_remaining == 3


class TestConsumeEasy:
    def test_consumes_one(self):
        state, consumed = AdaptiveController.consume_easy(DifficultyState(easy_problems_remaining=2))
        assert consumed
        assert state.easy_problems_remaining == 1

    def test_empty_queue(self):
        original = DifficultyState()
        state, consumed = AdaptiveController.consume_easy(original)
        assert not consumed
        assert state is original


def test_state_is_replaced_not_mutated(controller):
    original = DifficultyState()
    controller.record_outcome(True, original)
    assert original == DifficultyState()
    with pytest.raises(dataclasses.FrozenInstanceError):
        original.consecutive_correct = 3


def test_initial_state_uses_configured_tier():
    controller = AdaptiveController(DifficultyConfig(starting_tier=DifficultyTier.HARD))
    assert controller.initial_state().tier is DifficultyTier.HARD
