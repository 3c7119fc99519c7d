#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dialtone_keys.py
----------------------------------------------------------------------
The 88-key table used by the piano roll (A0–C8, MIDI 21..108).

- One PianoKey per pitch, ascending, built once at import time
- Black / white classification by pitch class (C = 0)
- Sharp-based display names: "A0", "C#4", "C8"
- 12-TET frequencies with A4 (69) = 440 Hz

The table is read-only; lookups by pitch are index arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple


LOW_NOTE = 21    # A0
HIGH_NOTE = 108  # C8

WHITE_PITCH_CLASSES = {0, 2, 4, 5, 7, 9, 11}
BLACK_PITCH_CLASSES = {1, 3, 6, 8, 10}

NOTE_LETTERS = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")


def is_black_key(pitch: int) -> bool:
    return (pitch % 12) in BLACK_PITCH_CLASSES


def octave_number(pitch: int) -> int:
    """Scientific octave number; MIDI 60 is C4."""
    return pitch // 12 - 1


def display_name(pitch: int) -> str:
    return f"{NOTE_LETTERS[pitch % 12]}{octave_number(pitch)}"


def midi_to_hz(midi_note: int) -> float:
    """Standard 440 Hz concert pitch conversion."""
    return 440.0 * (2.0 ** ((midi_note - 69) / 12.0))


def in_range(pitch: int) -> bool:
    return LOW_NOTE <= pitch <= HIGH_NOTE


@dataclass(frozen=True)
class PianoKey:
    note: int
    is_black_key: bool
    display_name: str

    @property
    def frequency(self) -> float:
        return midi_to_hz(self.note)


class PianoKeyTable:
    """
    Dense, ascending table of every key between ``low`` and ``high``.

    Index 0 is the lowest key; the interaction resolver lays keys out in
    the same direction, so a coordinate of 0 lands on ``low``.
    """

    def __init__(self, low: int = LOW_NOTE, high: int = HIGH_NOTE) -> None:
        if high < low:
            raise ValueError("high must not be below low.")
        self.low = int(low)
        self.high = int(high)
        self._keys: Tuple[PianoKey, ...] = tuple(
            PianoKey(note=p, is_black_key=is_black_key(p), display_name=display_name(p))
            for p in range(self.low, self.high + 1)
        )

    def key_for(self, pitch: int) -> Optional[PianoKey]:
        """Return the key for ``pitch`` or None outside the table."""
        if not self.low <= pitch <= self.high:
            return None
        return self._keys[pitch - self.low]

    def index_of(self, pitch: int) -> int:
        if not self.low <= pitch <= self.high:
            raise KeyError(pitch)
        return pitch - self.low

    def __getitem__(self, index: int) -> PianoKey:
        return self._keys[index]

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[PianoKey]:
        return iter(self._keys)


PIANO_KEYS = PianoKeyTable()


__all__ = [
    "LOW_NOTE",
    "HIGH_NOTE",
    "PIANO_KEYS",
    "PianoKey",
    "PianoKeyTable",
    "display_name",
    "in_range",
    "is_black_key",
    "midi_to_hz",
    "octave_number",
]
