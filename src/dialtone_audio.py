#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dialtone_audio.py
----------------------------------------------------------------------
The audio-trigger contract shared by the scheduler and the piano roll,
plus a factory that builds the configured backend.

Every backend exposes:

    trigger(pitch, hold_duration, onset_time)   fire-and-forget
    is_ready() -> bool                          safe to trigger now?
    silence()                                   all notes off
    close()                                     release the device

and works as a context manager so the entry point owns it with a
``with`` block. ``onset_time`` is on the time.monotonic() clock.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from dialtone_settings import AppSettings


logger = logging.getLogger(__name__)


class AudioTrigger(Protocol):
    def trigger(self, pitch: int, hold_duration: float, onset_time: float) -> None:
        ...

    def is_ready(self) -> bool:
        ...

    def silence(self) -> None:
        ...

    def close(self) -> None:
        ...


def create_audio_backend(settings: "AppSettings") -> AudioTrigger:
    """Instantiate the backend named by ``settings.backend``."""
    backend = settings.backend
    logger.info("Using audio backend %r", backend)

    if backend == "supriya":
        from dialtone_engine import DialtoneSynthEngine

        return DialtoneSynthEngine(amp=settings.amp)
    if backend == "osc":
        from dialtone_osc import OscSynthTrigger

        return OscSynthTrigger(
            host=settings.osc_host,
            port=settings.osc_port,
            amp=settings.amp,
        )
    if backend == "midi":
        from dialtone_midi import MidiOutputTrigger

        return MidiOutputTrigger(port_name=settings.midi_port)

    raise ValueError(f"Unknown audio backend: {backend!r}")


__all__ = ["AudioTrigger", "create_audio_backend"]
