"""Game session: answer buffer, scoring and the delayed answer check."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Optional

from mathdrill.config.settings import Settings
from mathdrill.engine.adaptive import AdaptiveController, DifficultyState
from mathdrill.engine.generator import ProblemGenerator
from mathdrill.engine.problem import Problem
from mathdrill.engine.scheduler import AsyncioScheduler, Handle, Scheduler
from mathdrill.engine.tiers import DifficultyTier

logger = logging.getLogger(__name__)

MAX_STREAK_BONUS = 5
STREAK_BONUS_POINTS = 2


class Outcome(str, Enum):
    NONE = "none"
    PENDING = "pending"  # Answer submitted, check not run yet
    CORRECT = "correct"
    INCORRECT = "incorrect"


def score_for(tier: DifficultyTier, streak: int) -> int:
    """Points for a correct answer at ``tier`` with ``streak`` prior correct answers."""
    return tier.policy.base_score + min(streak, MAX_STREAK_BONUS) * STREAK_BONUS_POINTS


@dataclass(frozen=True)
class SessionState:
    problem: Problem
    difficulty: DifficultyState = field(default_factory=DifficultyState)
    answer: str = ""
    outcome: Outcome = Outcome.NONE
    score: int = 0
    total_answered: int = 0
    total_correct: int = 0
    current_streak: int = 0
    best_streak: int = 0
    level_up_at: int = 4

    @property
    def tier(self) -> DifficultyTier:
        return self.difficulty.tier

    @property
    def can_delete(self) -> bool:
        return bool(self.answer)

    @property
    def can_submit(self) -> bool:
        return bool(self.answer)

    @property
    def is_checking(self) -> bool:
        return self.outcome is not Outcome.NONE

    @property
    def progress_info(self) -> str:
        return (
            f"Level: {self.tier.display_name} | Score: {self.score} "
            f"| Correct: {self.total_correct}/{self.total_answered}"
        )

    @property
    def encouragement(self) -> Optional[str]:
        if self.current_streak >= 5:
            return f"Impressive streak: {self.current_streak}!"
        if self.difficulty.consecutive_correct >= self.level_up_at - 1:
            return "Great progress! Keep going!"
        if self.difficulty.consecutive_wrong > 0:
            return "You've got this!"
        return None


Listener = Callable[[SessionState], None]


class GameSession:
    """Drives one game: keypad events in, immutable snapshots out.

    The answer check runs in two scheduled steps (reveal, then reset). Each
    step carries the generation it was scheduled in; ``reset()`` and
    ``dispose()`` bump the generation so stale steps do nothing.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        generator: Optional[ProblemGenerator] = None,
        controller: Optional[AdaptiveController] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        self.settings = settings or Settings()
        self.generator = generator or ProblemGenerator(seed=self.settings.get_seed())
        self.controller = controller or AdaptiveController(self.settings.difficulty)
        self.scheduler = scheduler or AsyncioScheduler()

        self._listeners: list[Listener] = []
        self._pending: list[Handle] = []
        self._generation = 0
        self._disposed = False
        self.state = self._initial_state()

    def _initial_state(self) -> SessionState:
        difficulty = self.controller.initial_state()
        # The opening problem is always an easy one
        problem = self.generator.generate(difficulty.tier, force_easy=True)
        return SessionState(
            problem=problem,
            difficulty=difficulty,
            level_up_at=self.controller.config.correct_to_level_up,
        )

    # --- Observation ---

    def snapshot(self) -> SessionState:
        return self.state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new state; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def encouragement(self) -> Optional[str]:
        return self.state.encouragement

    def _set(self, state: SessionState) -> None:
        self.state = state
        for listener in list(self._listeners):
            listener(state)

    # --- Keypad events ---

    def append_digit(self, digit: int) -> None:
        if not 0 <= digit <= 9:
            raise ValueError(f"Digit out of range: {digit}")
        if self._disposed or self.state.is_checking:
            return
        if len(self.state.answer) >= self.settings.max_answer_digits:
            return

        self._set(replace(self.state, answer=self.state.answer + str(digit)))

        if self.settings.auto_check:
            if len(self.state.answer) == self.state.problem.answer_length:
                self.submit()

    def delete_last_digit(self) -> None:
        if self._disposed or self.state.is_checking or not self.state.answer:
            return
        self._set(replace(self.state, answer=self.state.answer[:-1]))

    def submit(self) -> None:
        if self._disposed or self.state.is_checking:
            return
        try:
            value = int(self.state.answer)
        except ValueError:
            return

        self._set(replace(self.state, outcome=Outcome.PENDING))
        token = self._generation
        problem = self.state.problem
        logger.debug("checking %s against %r", value, problem.display_text)
        self._schedule(
            self.settings.timing.check_delay, lambda: self._check(token, problem, value),
        )

    on_digit = append_digit
    on_delete = delete_last_digit
    on_submit = submit

    # --- Problems ---

    def generate_new_problem(self) -> Problem:
        # A pending check keeps the problem it was submitted against
        if self._disposed or self.state.is_checking:
            return self.state.problem
        self._set(self._with_new_problem(self.state))
        return self.state.problem

    def _with_new_problem(self, state: SessionState) -> SessionState:
        difficulty, force_easy = self.controller.consume_easy(state.difficulty)
        problem = self.generator.generate(difficulty.tier, force_easy=force_easy)
        return replace(state, problem=problem, difficulty=difficulty, answer="")

    # --- Lifecycle ---

    def reset(self) -> None:
        """Start over with fresh counters and a new opening problem."""
        self._cancel_pending()
        self._disposed = False
        self._set(self._initial_state())

    def dispose(self) -> None:
        self._cancel_pending()
        self._disposed = True
        self._listeners.clear()

    # --- Delayed answer check ---

    def _schedule(self, delay: float, callback: Callable[[], None]) -> None:
        handle = self.scheduler.call_later(delay, callback)
        self._pending.append(handle)

    def _cancel_pending(self) -> None:
        self._generation += 1
        for handle in self._pending:
            handle.cancel()
        self._pending.clear()

    def _check(self, token: int, problem: Problem, value: int) -> None:
        if token != self._generation:
            return
        self._pending.clear()

        state = self.state
        correct = value == problem.correct_result

        if correct:
            streak = state.current_streak + 1
            state = replace(
                state,
                outcome=Outcome.CORRECT,
                score=state.score + score_for(state.tier, state.current_streak),
                total_correct=state.total_correct + 1,
                current_streak=streak,
                best_streak=max(state.best_streak, streak),
            )
        else:
            state = replace(state, outcome=Outcome.INCORRECT, current_streak=0)

        state = replace(
            state,
            total_answered=state.total_answered + 1,
            difficulty=self.controller.record_outcome(correct, state.difficulty),
        )
        self._set(state)
        self._schedule(self.settings.timing.reset_delay, lambda: self._finish(token))

    def _finish(self, token: int) -> None:
        if token != self._generation:
            return
        self._pending.clear()

        state = self.state
        if state.outcome is Outcome.CORRECT:
            state = self._with_new_problem(state)
        else:
            state = replace(state, answer="")
        self._set(replace(state, outcome=Outcome.NONE))
