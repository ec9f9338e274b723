"""Problem generator: tier-aware operand shaping.

Each (operation, tier) pair maps to a shaping function that returns the two
operands. The tables keep the numbers "friendly" for the tier: sums to round
numbers, clean divisions, curated percentages. Easy shaping ignores the tier
entirely and is used for confidence-building problems.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from mathdrill.engine.operations import Operation
from mathdrill.engine.problem import Problem
from mathdrill.engine.tiers import DifficultyTier

logger = logging.getLogger(__name__)

Shaper = Callable[[random.Random, DifficultyTier], tuple[int, int]]

T = DifficultyTier

PERCENTAGES = (10, 20, 25, 50, 75, 100)
PERCENTAGE_BASES = (20, 50, 100, 200)

DIVISORS: dict[DifficultyTier, tuple[int, ...]] = {
    T.BEGINNER: (1, 2, 5),
    T.EASY: (1, 2, 5),
    T.MEDIUM: (2, 3, 4, 5, 10),
    T.HARD: (2, 4, 5, 8, 10, 20, 25),
    T.EXPERT: (2, 4, 5, 8, 10, 20, 25),
}

MAX_QUOTIENT: dict[DifficultyTier, int] = {
    T.BEGINNER: 5,
    T.EASY: 5,
    T.MEDIUM: 10,
    T.HARD: 20,
    T.EXPERT: 25,
}


def _coin(rng: random.Random) -> bool:
    return rng.random() < 0.5


def _maybe_swap(rng: random.Random, first: int, second: int) -> tuple[int, int]:
    if _coin(rng):
        return second, first
    return first, second


# --- Easy shaping (tier independent) ---


def _easy_add(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    if _coin(rng):
        first = rng.randint(1, 9)
        return first, 10 - first
    return rng.randint(1, 5), rng.randint(1, 5)


def _easy_subtract(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    if _coin(rng):
        # Result of 0 or 1
        first = rng.randint(1, 10)
        return first, first if _coin(rng) else first - 1
    return rng.randint(6, 10), rng.randint(1, 5)


def _easy_multiply(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    return _maybe_swap(rng, rng.choice((1, 2, 5, 10)), rng.randint(1, 5))


def _easy_divide(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    divisor = rng.choice((1, 2, 5))
    return divisor * rng.randint(1, 5), divisor


def _easy_percentage(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    return rng.choice((10, 20, 50, 100)), rng.choice((50, 100))


EASY_SHAPERS: dict[Operation, Shaper] = {
    Operation.ADD: _easy_add,
    Operation.SUBTRACT: _easy_subtract,
    Operation.MULTIPLY: _easy_multiply,
    Operation.DIVIDE: _easy_divide,
    Operation.PERCENTAGE: _easy_percentage,
}


# --- Tiered shaping ---


def _add_to_ten_or_twenty(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    target = rng.choice((10, 20))
    first = rng.randint(1, target - 1)
    return first, target - first


def _add_round_up(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    if _coin(rng):
        target = rng.choice((50, 100))
        first = target - rng.randint(1, 20)
        return first, target - first
    return rng.randint(20, 40), rng.randint(1, 10)


def _add_wide(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    if _coin(rng):
        return rng.randint(1, 9) * 10, rng.randint(1, 9) * 10
    low, high = tier.policy.number_range
    return rng.randint(low, high), rng.randint(low, high)


def _subtract_small(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    return rng.randint(5, 15), rng.randint(1, 5)


def _subtract_from_round(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    # One time in four the result goes negative, kept small
    if _coin(rng) and _coin(rng):
        return rng.randint(1, 9), rng.randint(10, 20)
    first = rng.choice((10, 20, 50, 100))
    return first, rng.randint(1, first // 2)


def _subtract_wide(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    if _coin(rng):
        return 100, rng.randint(1, 99)
    low, high = tier.policy.number_range
    first = rng.randint(low, high)
    ceiling = 50 if first > 100 else max(1, first // 2)
    return first, rng.randint(1, ceiling)


def _multiply_simple(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    return _maybe_swap(rng, rng.choice((1, 2, 5, 10)), rng.randint(1, 5))


def _multiply_patterns(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    if _coin(rng):
        pair = (11, rng.randint(2, 9))
    elif _coin(rng):
        square = rng.randint(2, 9)
        pair = (square, square)
    else:
        pair = (rng.choice((5, 10)), rng.randint(5, 12))
    return _maybe_swap(rng, *pair)


def _multiply_capped(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    # The nominal range is wide; one operand stays small for mental math
    if _coin(rng):
        pair = (25, rng.randint(2, 8))
    elif _coin(rng):
        pair = (9, rng.randint(6, 12))
    else:
        pair = (rng.randint(6, 9), rng.randint(6, 12))
    return _maybe_swap(rng, *pair)


def _divide_clean(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    divisor = rng.choice(DIVISORS[tier])
    return divisor * rng.randint(1, MAX_QUOTIENT[tier]), divisor


def _percentage_curated(rng: random.Random, tier: DifficultyTier) -> tuple[int, int]:
    return rng.choice(PERCENTAGE_BASES), rng.choice(PERCENTAGES)


# The lowest tier always uses the easy patterns
SHAPERS: dict[tuple[Operation, DifficultyTier], Shaper] = {
    (op, T.BEGINNER): shaper for op, shaper in EASY_SHAPERS.items()
}

SHAPERS.update({
    (Operation.ADD, T.EASY): _add_to_ten_or_twenty,
    (Operation.ADD, T.MEDIUM): _add_round_up,
    (Operation.ADD, T.HARD): _add_wide,
    (Operation.ADD, T.EXPERT): _add_wide,
    (Operation.SUBTRACT, T.EASY): _subtract_small,
    (Operation.SUBTRACT, T.MEDIUM): _subtract_from_round,
    (Operation.SUBTRACT, T.HARD): _subtract_wide,
    (Operation.SUBTRACT, T.EXPERT): _subtract_wide,
    (Operation.MULTIPLY, T.EASY): _multiply_simple,
    (Operation.MULTIPLY, T.MEDIUM): _multiply_patterns,
    (Operation.MULTIPLY, T.HARD): _multiply_capped,
    (Operation.MULTIPLY, T.EXPERT): _multiply_capped,
    (Operation.DIVIDE, T.EASY): _divide_clean,
    (Operation.DIVIDE, T.MEDIUM): _divide_clean,
    (Operation.DIVIDE, T.HARD): _divide_clean,
    (Operation.DIVIDE, T.EXPERT): _divide_clean,
    (Operation.PERCENTAGE, T.EASY): _percentage_curated,
    (Operation.PERCENTAGE, T.MEDIUM): _percentage_curated,
    (Operation.PERCENTAGE, T.HARD): _percentage_curated,
    (Operation.PERCENTAGE, T.EXPERT): _percentage_curated,
})


class ProblemGenerator:
    """Draws problems for a tier from an injectable random source."""

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        self.rng = rng or random.Random(seed)

    def shaper_for(
        self, operation: Operation, tier: DifficultyTier, force_easy: bool = False,
    ) -> Shaper:
        if force_easy:
            return EASY_SHAPERS[operation]
        return SHAPERS[(operation, tier)]

    def generate(self, tier: DifficultyTier, force_easy: bool = False) -> Problem:
        operation = self.rng.choice(tier.policy.operations)
        first, second = self.shaper_for(operation, tier, force_easy)(self.rng, tier)

        if operation is Operation.SUBTRACT and not tier.allows_negative and first < second:
            first, second = second, first

        problem = Problem(first_term=first, second_term=second, operation=operation)
        logger.debug(
            "generated %r (tier=%s, force_easy=%s)",
            problem.display_text, tier.value, force_easy,
        )
        return problem
