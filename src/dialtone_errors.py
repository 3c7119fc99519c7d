#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dialtone_errors.py
----------------------------------------------------------------------
Exception types raised while turning a phone number into a melody.

All of them derive from DialtoneError so the controller can catch one
type and turn it into a status line for the window.
"""

from __future__ import annotations

from typing import List, Tuple


class DialtoneError(Exception):
    """Base class for recoverable translate-time failures."""


class InsufficientDigitsError(DialtoneError):
    """Fewer digit pairs than a melody needs."""

    def __init__(self, found: int, required: int = 4) -> None:
        self.found = found
        self.required = required
        super().__init__(
            f"Need at least {required} digit pairs, got {found}."
        )


class ParseFailureError(DialtoneError):
    """
    One or more selected pairs are not two ASCII digits.

    ``failures`` lists every offending (index, pair) so the shell can
    point at each of them, not only the first.
    """

    def __init__(self, failures: List[Tuple[int, str]]) -> None:
        self.failures = list(failures)
        shown = ", ".join(f"#{idx + 1} {pair!r}" for idx, pair in self.failures)
        super().__init__(f"Not a digit pair: {shown}")


class OutOfRangeError(DialtoneError):
    """Octave correction did not bring a value into the keyboard range."""

    def __init__(self, value: int, low: int, high: int) -> None:
        self.value = value
        self.low = low
        self.high = high
        super().__init__(
            f"Note {value} could not be moved into {low}..{high}."
        )
