#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dialtone_playback.py
----------------------------------------------------------------------
Playback scheduler for the four-note phone-number melody.

- start_session() lays the notes out on a fixed grid:
      note i starts at  start_time + i * inter_onset_interval
      and is held for   hold_duration
- tick() / progress() are pull-based: whoever drives the render loop
  calls them with the current time; due NoteEvents are handed to the
  audio collaborator in order as the clock passes their onsets.
- progress is clamp((now - start) / total, 0, 1) and never goes back.
  Reaching 1.0 ends the session; replay needs a new start_session().

State machine:  Idle --start--> Playing --progress 1.0 / cancel--> Idle
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from dialtone_audio import AudioTrigger
from dialtone_keys import in_range


logger = logging.getLogger(__name__)

INTER_ONSET_INTERVAL = 0.5  # seconds between note starts
EIGHTH_NOTE = 0.25          # hold per note, seconds


class StartResult(Enum):
    STARTED = "started"
    BUSY = "busy"            # a session is already playing
    NOT_READY = "not_ready"  # audio output has not come up yet


@dataclass(frozen=True)
class NoteEvent:
    note: int
    onset_offset: float
    hold_duration: float

    @property
    def release_offset(self) -> float:
        return self.onset_offset + self.hold_duration


@dataclass
class PlaySession:
    notes: Tuple[int, ...]
    events: Tuple[NoteEvent, ...]
    start_time: float
    total_duration: float
    progress: float = 0.0
    next_event: int = 0  # index of the first event not yet triggered

    def onset_time(self, event: NoteEvent) -> float:
        return self.start_time + event.onset_offset


@dataclass(frozen=True)
class PlayState:
    """Read-only snapshot handed to the renderer on every tick."""

    playing: bool
    progress: float
    notes: Tuple[int, ...] = ()
    events: Tuple[NoteEvent, ...] = ()
    sounding: Tuple[int, ...] = ()


IDLE_STATE = PlayState(playing=False, progress=0.0)


def onset_offsets(count: int, inter_onset_interval: float) -> List[float]:
    return [i * inter_onset_interval for i in range(count)]


def build_events(
    notes: Sequence[int],
    inter_onset_interval: float,
    hold_duration: float,
) -> Tuple[NoteEvent, ...]:
    offsets = onset_offsets(len(notes), inter_onset_interval)
    return tuple(
        NoteEvent(note=int(n), onset_offset=off, hold_duration=hold_duration)
        for n, off in zip(notes, offsets)
    )


class PlaybackScheduler:
    """
    Owns the single PlaySession and drives the audio collaborator.

    Public API:
        - start_session(notes, inter_onset_interval, hold_duration) -> StartResult
        - tick(now=None) -> PlayState
        - progress(now=None) -> float
        - cancel()
        - is_playing() -> bool
    """

    def __init__(
        self,
        audio: AudioTrigger,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.audio = audio
        self._clock = clock
        self._session: Optional[PlaySession] = None

    # --------------- Public API ---------------

    @property
    def session(self) -> Optional[PlaySession]:
        return self._session

    def is_playing(self) -> bool:
        return self._session is not None

    def start_session(
        self,
        notes: Sequence[int],
        inter_onset_interval: float = INTER_ONSET_INTERVAL,
        hold_duration: float = EIGHTH_NOTE,
        now: Optional[float] = None,
    ) -> StartResult:
        if not notes:
            raise ValueError("Cannot play an empty note sequence.")
        if inter_onset_interval <= 0 or hold_duration <= 0:
            raise ValueError("Intervals and hold durations must be positive.")
        bad = [n for n in notes if not in_range(int(n))]
        if bad:
            raise ValueError(f"Notes outside the keyboard range: {bad}")

        now = self._now(now)

        # A session whose time is up but was never ticked ends here.
        if self._session is not None:
            self._advance(self._session, now)
        if self._session is not None:
            logger.info("Playback already running; start ignored.")
            return StartResult.BUSY

        if not self.audio.is_ready():
            logger.info("Audio output not ready; start ignored.")
            return StartResult.NOT_READY

        events = build_events(notes, inter_onset_interval, hold_duration)
        session = PlaySession(
            notes=tuple(int(n) for n in notes),
            events=events,
            start_time=now,
            total_duration=len(events) * inter_onset_interval,
        )
        self._session = session
        logger.debug("Session started at %.3f: %s", now, session.notes)

        # First note is due immediately.
        self._advance(session, now)
        return StartResult.STARTED

    def progress(self, now: Optional[float] = None) -> float:
        """Normalized position of the running session; 0.0 when idle."""
        session = self._session
        if session is None:
            return 0.0
        return self._advance(session, self._now(now))

    def tick(self, now: Optional[float] = None) -> PlayState:
        session = self._session
        if session is None:
            return IDLE_STATE

        now = self._now(now)
        progress = self._advance(session, now)

        if self._session is None:
            # Completed on this tick: report 1.0 once, playhead hides.
            return PlayState(
                playing=False,
                progress=progress,
                notes=session.notes,
                events=session.events,
            )

        elapsed = now - session.start_time
        sounding = tuple(
            ev.note
            for ev in session.events[:session.next_event]
            if ev.onset_offset <= elapsed < ev.release_offset
        )
        return PlayState(
            playing=True,
            progress=progress,
            notes=session.notes,
            events=session.events,
            sounding=sounding,
        )

    def cancel(self) -> None:
        """Drop the session and any events not yet triggered."""
        if self._session is not None:
            pending = len(self._session.events) - self._session.next_event
            logger.debug("Session cancelled with %d pending events", pending)
        self._session = None

    # --------------- Helpers ---------------

    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else float(now)

    def _advance(self, session: PlaySession, now: float) -> float:
        """Trigger due events, update progress, finish the session at 1.0."""
        elapsed = now - session.start_time

        while session.next_event < len(session.events):
            event = session.events[session.next_event]
            if event.onset_offset > elapsed:
                break
            self.audio.trigger(event.note, event.hold_duration, session.onset_time(event))
            session.next_event += 1

        value = min(1.0, max(0.0, elapsed / session.total_duration))
        session.progress = max(session.progress, value)

        if session.progress >= 1.0 and self._session is session:
            logger.debug("Session finished")
            self._session = None
        return session.progress


__all__ = [
    "EIGHTH_NOTE",
    "IDLE_STATE",
    "INTER_ONSET_INTERVAL",
    "NoteEvent",
    "PlaySession",
    "PlayState",
    "PlaybackScheduler",
    "StartResult",
    "build_events",
    "onset_offsets",
]
