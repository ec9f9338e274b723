"""Immutable arithmetic problem value."""

from __future__ import annotations

from dataclasses import dataclass

from mathdrill.engine.operations import Operation


@dataclass(frozen=True)
class Problem:
    first_term: int
    second_term: int
    operation: Operation

    @property
    def correct_result(self) -> int:
        return self.operation.apply(self.first_term, self.second_term)

    @property
    def display_text(self) -> str:
        return f"{self.first_term} {self.operation.symbol} {self.second_term} = "

    @property
    def answer_length(self) -> int:
        """Digits in the answer, ignoring any minus sign."""
        return len(str(abs(self.correct_result)))
