#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dialtone_interaction.py
----------------------------------------------------------------------
Pointer -> key resolution for the piano roll.

Keys are laid out along one axis with a fixed extent each, lowest key
at coordinate 0. A position resolves to ``table[floor(pos / extent)]``;
anything before 0 or past the last key resolves to None.

Clicks audition the key through the same audio collaborator the
scheduler uses, as a standalone trigger that never touches the
running PlaySession.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Optional

from dialtone_audio import AudioTrigger
from dialtone_keys import PIANO_KEYS, PianoKey, PianoKeyTable


logger = logging.getLogger(__name__)

AUDITION_HOLD = 0.25  # seconds


@dataclass
class HoverState:
    note: Optional[int] = None


@dataclass(frozen=True)
class KeyStatus:
    pitch: int
    display_name: str
    frequency: float

    def describe(self) -> str:
        return f"{self.display_name} (MIDI {self.pitch}, {self.frequency:.2f} Hz)"


class InteractionResolver:
    def __init__(
        self,
        audio: AudioTrigger,
        table: PianoKeyTable = PIANO_KEYS,
        key_extent: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.audio = audio
        self.table = table
        self._clock = clock
        self.hover = HoverState()
        self.key_extent = 1.0
        self.set_key_extent(key_extent)

    def set_key_extent(self, key_extent: float) -> None:
        """Per-key size along the layout axis; the widget updates it on resize."""
        if key_extent <= 0:
            raise ValueError("key_extent must be positive.")
        self.key_extent = float(key_extent)

    @property
    def total_extent(self) -> float:
        return self.key_extent * len(self.table)

    def resolve(self, position: float) -> Optional[PianoKey]:
        if position is None or math.isnan(position) or math.isinf(position) or position < 0:
            return None
        index = math.floor(position / self.key_extent)
        if index >= len(self.table):
            return None
        return self.table[index]

    def on_hover(self, position: float) -> Optional[KeyStatus]:
        key = self.resolve(position)
        if key is None:
            self.hover.note = None
            return None
        self.hover.note = key.note
        return KeyStatus(pitch=key.note, display_name=key.display_name, frequency=key.frequency)

    def on_leave(self) -> None:
        self.hover.note = None

    def on_click(self, position: float) -> Optional[PianoKey]:
        """Audition the key under ``position``; None if nothing was played."""
        key = self.resolve(position)
        if key is None:
            return None
        if not self.audio.is_ready():
            logger.info("Audio output not ready; audition of %s skipped.", key.display_name)
            return None
        self.audio.trigger(key.note, AUDITION_HOLD, self._clock())
        return key


__all__ = ["AUDITION_HOLD", "HoverState", "InteractionResolver", "KeyStatus"]
