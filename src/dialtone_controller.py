#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dialtone_controller.py
----------------------------------------------------------------------
UI-agnostic glue between the window and the core.

It is intentionally free of Qt imports. The window calls:

- play_number(text) -> bool
- stop()
- tick(now=None) -> PlayState
- hover(position) / leave() / click(position)
- reboot_audio() -> bool   only for backends that own a server
- status (str), notes (tuple of the melody on display)
- events / melody_duration (timing of the melody on display)
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Tuple

from dialtone_audio import AudioTrigger
from dialtone_errors import DialtoneError
from dialtone_interaction import InteractionResolver, KeyStatus
from dialtone_keys import PIANO_KEYS, PianoKey, PianoKeyTable, display_name
from dialtone_notes import translate_number
from dialtone_playback import (
    EIGHTH_NOTE,
    INTER_ONSET_INTERVAL,
    NoteEvent,
    PlaybackScheduler,
    PlayState,
    StartResult,
)
from dialtone_playhead import Playhead, PlayheadAnimator


logger = logging.getLogger(__name__)

READY_STATUS = "Enter a phone number and press Play."


class DialtoneController:
    def __init__(
        self,
        audio: AudioTrigger,
        table: PianoKeyTable = PIANO_KEYS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.audio = audio
        self.table = table
        self.scheduler = PlaybackScheduler(audio, clock=clock)
        self.resolver = InteractionResolver(audio, table=table, clock=clock)
        self.playhead = PlayheadAnimator()

        self.notes: Tuple[int, ...] = ()
        self.events: Tuple[NoteEvent, ...] = ()
        self.melody_duration: float = 0.0
        self.status: str = READY_STATUS
        self.last_state: PlayState = self.scheduler.tick()

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def play_number(
        self,
        text: str,
        inter_onset_interval: float = INTER_ONSET_INTERVAL,
        hold_duration: float = EIGHTH_NOTE,
    ) -> bool:
        """Translate ``text`` and start playing it. Returns True if started."""
        self.tick()  # lets an elapsed session finish first
        if self.scheduler.is_playing():
            # Keep the melody on screen; the running session owns it.
            self.status = "Already playing."
            return False

        try:
            notes = tuple(translate_number(text))
        except DialtoneError as exc:
            logger.info("Rejected %r: %s", text, exc)
            self._clear_melody()
            self.status = str(exc)
            return False

        result = self.scheduler.start_session(notes, inter_onset_interval, hold_duration)
        if result is StartResult.BUSY:
            self.status = "Already playing."
            return False
        if result is StartResult.NOT_READY:
            self._clear_melody()
            self.status = "Audio output is not ready yet; try again in a moment."
            return False

        session = self.scheduler.session
        self.notes = notes
        self.events = session.events
        self.melody_duration = session.total_duration
        self.status = "Playing " + " ".join(display_name(n) for n in notes)
        self.last_state = self.scheduler.tick()
        return True

    def _clear_melody(self) -> None:
        self.notes = ()
        self.events = ()
        self.melody_duration = 0.0

    def stop(self) -> None:
        self.scheduler.cancel()
        self.audio.silence()
        self.last_state = self.scheduler.tick()
        self.status = "Stopped."

    @property
    def can_reboot_audio(self) -> bool:
        return callable(getattr(self.audio, "reboot_server", None))

    def reboot_audio(self) -> bool:
        """Stop playback and restart the backend's audio server, if it has one."""
        if not self.can_reboot_audio:
            return False
        self.scheduler.cancel()
        self.audio.silence()
        self.last_state = self.scheduler.tick()
        logger.info("Rebooting audio server")
        self.audio.reboot_server()
        self.status = "Rebooting audio server..."
        return True

    def tick(self, now: Optional[float] = None) -> PlayState:
        was_playing = self.last_state.playing
        self.last_state = self.scheduler.tick(now)
        if was_playing and not self.last_state.playing and self.notes:
            self.status = "Played " + " ".join(display_name(n) for n in self.notes)
        return self.last_state

    def playhead_position(self) -> Playhead:
        return self.playhead.from_state(self.last_state)

    # ------------------------------------------------------------------
    # Pointer
    # ------------------------------------------------------------------

    def hover(self, position: float) -> Optional[KeyStatus]:
        return self.resolver.on_hover(position)

    def leave(self) -> None:
        self.resolver.on_leave()

    def click(self, position: float) -> Optional[PianoKey]:
        return self.resolver.on_click(position)

    @property
    def hover_note(self) -> Optional[int]:
        return self.resolver.hover.note


__all__ = ["DialtoneController", "READY_STATUS"]
