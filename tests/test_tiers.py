"""Tests for the difficulty tier table."""

from __future__ import annotations

from mathdrill.engine.operations import Operation
from mathdrill.engine.tiers import DifficultyTier


class TestDifficultyTier:
    def test_order(self):
        assert [t.display_name for t in DifficultyTier.ordered()] == [
            "Beginner", "Easy", "Medium", "Hard", "Expert",
        ]

    def test_next_steps_once(self):
        assert DifficultyTier.BEGINNER.next is DifficultyTier.EASY
        assert DifficultyTier.HARD.next is DifficultyTier.EXPERT

    def test_next_saturates(self):
        assert DifficultyTier.EXPERT.next is DifficultyTier.EXPERT

    def test_previous_saturates(self):
        assert DifficultyTier.BEGINNER.previous is DifficultyTier.BEGINNER
        assert DifficultyTier.MEDIUM.previous is DifficultyTier.EASY

    def test_from_choice_clamps(self):
        assert DifficultyTier.from_choice(-3) is DifficultyTier.BEGINNER
        assert DifficultyTier.from_choice(2) is DifficultyTier.MEDIUM
        assert DifficultyTier.from_choice(42) is DifficultyTier.EXPERT

    def test_percentage_only_at_expert(self):
        for tier in DifficultyTier:
            has_pct = Operation.PERCENTAGE in tier.policy.operations
            assert has_pct == (tier is DifficultyTier.EXPERT)

    def test_base_scores_increase(self):
        scores = [t.policy.base_score for t in DifficultyTier.ordered()]
        assert scores == [5, 10, 20, 35, 50]

    def test_negative_threshold(self):
        assert not DifficultyTier.EASY.allows_negative
        assert DifficultyTier.MEDIUM.allows_negative
        assert DifficultyTier.EXPERT.allows_negative
