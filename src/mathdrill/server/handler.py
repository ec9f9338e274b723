"""Server handler: dispatches JSON-lines requests to the game session."""

from __future__ import annotations

from typing import Callable, Optional

from mathdrill.config.settings import Settings
from mathdrill.engine.generator import ProblemGenerator
from mathdrill.engine.scheduler import Scheduler
from mathdrill.engine.session import GameSession, SessionState

from .protocol import Notification


def state_to_dict(state: SessionState) -> dict:
    """Serialize a session snapshot to a JSON-friendly dict."""
    problem = state.problem
    return {
        "problem": {
            "firstTerm": problem.first_term,
            "secondTerm": problem.second_term,
            "operation": problem.operation.name.lower(),
            "symbol": problem.operation.symbol,
            "displayText": problem.display_text,
        },
        "answer": state.answer,
        "outcome": state.outcome.value,
        "score": state.score,
        "totalAnswered": state.total_answered,
        "totalCorrect": state.total_correct,
        "currentStreak": state.current_streak,
        "bestStreak": state.best_streak,
        "tier": state.tier.value,
        "progressInfo": state.progress_info,
        "encouragement": state.encouragement,
        "canDelete": state.can_delete,
        "canSubmit": state.can_submit,
    }


class ServerHandler:
    """Routes incoming requests to session methods and returns result dicts."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        write_notification: Optional[Callable[[Notification], None]] = None,
        scheduler: Optional[Scheduler] = None,
        generator: Optional[ProblemGenerator] = None,
    ):
        self.settings = settings or Settings.load()
        self._write_notification = write_notification or (lambda n: None)

        self.session = GameSession(
            settings=self.settings, scheduler=scheduler, generator=generator,
        )
        self.session.subscribe(self._on_state_changed)

    def _on_state_changed(self, state: SessionState) -> None:
        self._write_notification(
            Notification.state_changed(state_to_dict(state))
        )

    def _state(self) -> dict:
        return {"state": state_to_dict(self.session.snapshot())}

    async def dispatch(self, msg: dict) -> dict:
        """Route a request message to the appropriate handler method."""
        method = msg.get("method", "")
        params = msg.get("params") or {}

        handler_map = {
            "getState": self._get_state,
            "digit": self._digit,
            "delete": self._delete,
            "submit": self._submit,
            "newProblem": self._new_problem,
            "reset": self._reset,
        }

        handler = handler_map.get(method)
        if handler is None:
            raise ValueError(f"Unknown method: {method}")

        return await handler(params)

    async def _get_state(self, params: dict) -> dict:
        return self._state()

    async def _digit(self, params: dict) -> dict:
        if "digit" not in params:
            raise ValueError("Missing 'digit' parameter")
        digit = params["digit"]
        if isinstance(digit, bool) or not isinstance(digit, int):
            raise ValueError(f"Digit must be an integer, got {digit!r}")
        self.session.on_digit(digit)
        return self._state()

    async def _delete(self, params: dict) -> dict:
        self.session.on_delete()
        return self._state()

    async def _submit(self, params: dict) -> dict:
        self.session.on_submit()
        return self._state()

    async def _new_problem(self, params: dict) -> dict:
        self.session.generate_new_problem()
        return self._state()

    async def _reset(self, params: dict) -> dict:
        self.session.reset()
        return self._state()

    def close(self) -> None:
        self.session.dispose()
