"""Shared fixtures for mathdrill tests."""

from __future__ import annotations

import random
from typing import Callable, Optional

import pytest
import yaml

from mathdrill.config.settings import Settings
from mathdrill.engine.generator import ProblemGenerator
from mathdrill.engine.operations import Operation
from mathdrill.engine.problem import Problem
from mathdrill.engine.tiers import DifficultyTier


class ManualHandle:
    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Collects delayed callbacks and runs them only when asked to."""

    def __init__(self, honor_cancel: bool = True):
        self.honor_cancel = honor_cancel
        self.queue: list[ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(delay, callback)
        self.queue.append(handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for h in self.queue if not (h.cancelled and self.honor_cancel))

    def run_next(self) -> bool:
        while self.queue:
            handle = self.queue.pop(0)
            if handle.cancelled and self.honor_cancel:
                continue
            handle.callback()
            return True
        return False

    def run_all(self) -> int:
        ran = 0
        while self.run_next():
            ran += 1
        return ran


class ScriptedGenerator(ProblemGenerator):
    """Hands out a fixed sequence of problems and records every request."""

    def __init__(self, problems: Optional[list[Problem]] = None, repeat_last: bool = True):
        super().__init__(rng=random.Random(0))
        self.problems = list(problems or [])
        self.repeat_last = repeat_last
        self.calls: list[tuple[DifficultyTier, bool]] = []

    def generate(self, tier: DifficultyTier, force_easy: bool = False) -> Problem:
        self.calls.append((tier, force_easy))
        if len(self.problems) > 1 or (self.problems and not self.repeat_last):
            return self.problems.pop(0)
        if self.problems:
            return self.problems[0]
        return Problem(1, 1, Operation.ADD)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path / "data")


@pytest.fixture
def config_file(tmp_path):
    """Write a config.yaml overriding a few defaults."""
    path = tmp_path / "config.yaml"
    data = {
        "difficulty": {"correct_to_level_up": 5, "wrong_to_level_down": 3},
        "timing": {"check_delay": 0.25, "reset_delay": 0.5},
        "auto_check": False,
        "seed": 99,
    }
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
