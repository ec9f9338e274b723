"""Arithmetic operations and their display symbols."""

from __future__ import annotations

from enum import Enum


class Operation(str, Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"
    PERCENTAGE = "%"

    @property
    def symbol(self) -> str:
        return self.value

    def apply(self, first: int, second: int) -> int:
        if self is Operation.ADD:
            return first + second
        if self is Operation.SUBTRACT:
            return first - second
        if self is Operation.MULTIPLY:
            return first * second
        if self is Operation.DIVIDE:
            # Generated problems always divide cleanly; zero divisors evaluate to 0
            return first // second if second != 0 else 0
        return (first * second) // 100
