"""Difficulty tier table.

Tiers are static configuration: each owns an operand range, the operations
it may draw from and the base score a correct answer is worth. Moving
between tiers saturates at both ends.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from mathdrill.engine.operations import Operation

_BASIC_OPERATIONS = (
    Operation.ADD,
    Operation.SUBTRACT,
    Operation.MULTIPLY,
    Operation.DIVIDE,
)


@dataclass(frozen=True)
class TierPolicy:
    display_name: str
    number_range: tuple[int, int]
    operations: tuple[Operation, ...]
    base_score: int


class DifficultyTier(str, Enum):
    BEGINNER = "beginner"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    @classmethod
    def ordered(cls) -> list["DifficultyTier"]:
        return list(cls)

    @classmethod
    def from_choice(cls, choice: int) -> "DifficultyTier":
        tiers = cls.ordered()
        return tiers[max(0, min(choice, len(tiers) - 1))]

    @property
    def rank(self) -> int:
        return DifficultyTier.ordered().index(self)

    @property
    def policy(self) -> TierPolicy:
        return TIER_POLICIES[self]

    @property
    def display_name(self) -> str:
        return self.policy.display_name

    @property
    def allows_negative(self) -> bool:
        return self.rank >= ALLOW_NEGATIVE_FROM.rank

    @property
    def next(self) -> "DifficultyTier":
        return DifficultyTier.from_choice(self.rank + 1)

    @property
    def previous(self) -> "DifficultyTier":
        return DifficultyTier.from_choice(self.rank - 1)


TIER_POLICIES: dict[DifficultyTier, TierPolicy] = {
    DifficultyTier.BEGINNER: TierPolicy("Beginner", (1, 10), _BASIC_OPERATIONS, 5),
    DifficultyTier.EASY: TierPolicy("Easy", (1, 20), _BASIC_OPERATIONS, 10),
    DifficultyTier.MEDIUM: TierPolicy("Medium", (1, 50), _BASIC_OPERATIONS, 20),
    DifficultyTier.HARD: TierPolicy("Hard", (1, 100), _BASIC_OPERATIONS, 35),
    DifficultyTier.EXPERT: TierPolicy("Expert", (1, 200), tuple(Operation), 50),
}

# Subtraction may go below zero from this tier upward.
ALLOW_NEGATIVE_FROM = DifficultyTier.MEDIUM
