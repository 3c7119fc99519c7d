#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dialtone_notes.py
----------------------------------------------------------------------
Note mapping: digit pairs -> four playable MIDI notes.

    pairs  ["06", "01", "02", "03", "04"]
    last 4 ["01", "02", "03", "04"]
    raw    [1, 2, 3, 4]
    notes  [25, 26, 27, 28]   (moved up by whole octaves into 21..108)

Mapping is all-or-nothing: any bad pair fails the whole melody.
"""

from __future__ import annotations

import logging
import re
from typing import List, Sequence

from dialtone_digits import extract_digit_pairs
from dialtone_errors import InsufficientDigitsError, OutOfRangeError, ParseFailureError
from dialtone_keys import HIGH_NOTE, LOW_NOTE


logger = logging.getLogger(__name__)

MELODY_LENGTH = 4

# Enough shifts to bring any MIDI value (0..127) into range, with headroom.
MAX_OCTAVE_SHIFTS = 10

_DIGIT_PAIR_RE = re.compile(r"[0-9]{2}")


def correct_octave(
    note: int,
    low: int = LOW_NOTE,
    high: int = HIGH_NOTE,
    max_shifts: int = MAX_OCTAVE_SHIFTS,
) -> int:
    """
    Move ``note`` by whole octaves until low <= note <= high.

    Values already in range come back unchanged. Raises OutOfRangeError
    when ``max_shifts`` octaves are not enough (or the range is narrower
    than an octave and no shift can land inside it).
    """
    value = int(note)
    shifts = 0
    while value < low:
        if shifts >= max_shifts:
            raise OutOfRangeError(note, low, high)
        value += 12
        shifts += 1
    while value > high:
        if shifts >= max_shifts:
            raise OutOfRangeError(note, low, high)
        value -= 12
        shifts += 1
    if value < low:
        raise OutOfRangeError(note, low, high)
    return value


def parse_pairs(pairs: Sequence[str]) -> List[int]:
    """Parse each pair as 0..99; collect every failure before raising."""
    failures = []
    values = []
    for idx, pair in enumerate(pairs):
        if _DIGIT_PAIR_RE.fullmatch(pair) is None:
            failures.append((idx, pair))
            continue
        values.append(int(pair, 10))
    if failures:
        raise ParseFailureError(failures)
    return values


def map_notes(pairs: Sequence[str], length: int = MELODY_LENGTH) -> List[int]:
    """Return ``length`` playable notes from the last ``length`` pairs."""
    if len(pairs) < length:
        raise InsufficientDigitsError(len(pairs), length)
    selected = list(pairs)[-length:]
    raw = parse_pairs(selected)
    notes = [correct_octave(value) for value in raw]
    logger.debug("Mapped %s -> %s -> %s", selected, raw, notes)
    return notes


def translate_number(raw: str) -> List[int]:
    """Full pipeline for one phone number string."""
    return map_notes(extract_digit_pairs(raw))


__all__ = [
    "MELODY_LENGTH",
    "MAX_OCTAVE_SHIFTS",
    "correct_octave",
    "map_notes",
    "parse_pairs",
    "translate_number",
]
