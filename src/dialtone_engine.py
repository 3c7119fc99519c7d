#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
dialtone_engine.py
---------------------------------------------------------------------
Supriya-based threaded voice engine for Dialtone.

- Written against newer Supriya APIs:
  * keyword-only UGen arguments
  * scaling done with plain arithmetic (no 'mul' / 'add')
- Provides:
  * trigger(pitch, hold_duration, onset_time) from the GUI thread
  * a timeline on the audio thread: start each voice at its onset and
    gate it off after its hold
  * is_ready() once the SuperCollider server has booted
"""

from __future__ import annotations

import heapq
import itertools
import logging
import queue
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

import supriya
from supriya import Envelope, synthdef
from supriya.ugens import RLPF, EnvGen, Out, Saw, SinOsc

from dialtone_keys import midi_to_hz


logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# SynthDef
# ------------------------------------------------------------------

@synthdef()
def dialtone_voice(
    frequency=440.0,
    amp=0.2,
    gate=1.0,
    cutoff=3000.0,

    # ADSR envelope
    atk=0.005,
    dec=0.15,
    sus=0.5,
    rel=0.4,
):
    """
    Single keyboard-ish voice: sine body, a little saw edge and an
    octave partial through a gentle lowpass, ADSR on gate.
    """
    amp_env = EnvGen.kr(
        envelope=Envelope.adsr(
            attack_time=atk,
            decay_time=dec,
            sustain=sus,
            release_time=rel,
        ),
        gate=gate,
        done_action=2,  # free synth when envelope finishes
    )

    body = SinOsc.ar(frequency=frequency) * 0.6
    edge = Saw.ar(frequency=frequency) * 0.15
    octave = SinOsc.ar(frequency=frequency * 2.0) * 0.25

    sig = RLPF.ar(
        source=body + edge + octave,
        frequency=cutoff,
        reciprocal_of_q=0.7,
    )
    sig = sig * amp_env * amp
    Out.ar(bus=0, source=[sig, sig])


# ------------------------------------------------------------------
# Threaded Supriya engine
# ------------------------------------------------------------------


class DialtoneSynthEngine:
    """Threaded wrapper around Supriya's Server and the dialtone_voice SynthDef.

    Public API (GUI thread safe):
        - trigger(pitch: int, hold_duration: float, onset_time: float)
        - is_ready() -> bool
        - silence()
        - reboot_server()
        - close()
    """

    def __init__(
        self,
        amp: float = 0.2,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        # Queue of commands from GUI thread -> audio thread
        self._command_queue: "queue.Queue" = queue.Queue()
        self._clock = clock
        self._amp = float(amp)

        # Supriya state (only touched on audio thread)
        self._server: Optional[supriya.Server] = None
        self._synth_group = None
        self._voices: Dict[int, supriya.synths.Synth] = {}

        # (due_time, seq, kind, payload) ordered by due_time
        self._timeline: List[Tuple[float, int, str, tuple]] = []
        self._seq = itertools.count()

        # Status reported back to GUI
        self._server_running: bool = False

        # Thread control
        self._running: bool = True
        self._thread = threading.Thread(
            target=self._thread_main,
            name="DialtoneAudioThread",
            daemon=True,
        )
        self._thread.start()

    # --------------- Public API (GUI side) ---------------

    def trigger(self, pitch: int, hold_duration: float, onset_time: float) -> None:
        self._command_queue.put(("trigger", int(pitch), float(hold_duration), float(onset_time)))

    def is_ready(self) -> bool:
        """Return True while the Supriya server is booted and running."""
        return bool(self._server_running)

    def silence(self) -> None:
        self._command_queue.put(("silence",))

    def reboot_server(self) -> None:
        self._command_queue.put(("reboot_server",))

    def close(self) -> None:
        """Stop the audio thread and quit the server."""
        if not self._running:
            return
        self._running = False
        self._command_queue.put(("shutdown",))
        if self._thread.is_alive():
            self._thread.join(timeout=2.0)

    def __enter__(self) -> "DialtoneSynthEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --------------- Worker thread entry ---------------

    def _thread_main(self) -> None:
        """Boot server, install SynthDef, then run commands and the timeline."""
        self._boot_server()

        while self._running:
            try:
                cmd = self._command_queue.get(timeout=self._wait_time())
            except queue.Empty:
                cmd = None

            if cmd:
                kind = cmd[0]
                if kind == "shutdown":
                    break
                elif kind == "reboot_server":
                    self._boot_server()
                elif kind == "trigger":
                    pitch, hold, onset = cmd[1], cmd[2], cmd[3]
                    self._schedule(onset, "start", (pitch, hold))
                elif kind == "silence":
                    self._handle_silence()

            self._run_due_actions()

        self._handle_silence()
        self._teardown_server()

    def _boot_server(self) -> None:
        """(Re)boot the SuperCollider server and install the SynthDef.

        On failure the error is logged and is_ready() stays False so the
        GUI reports "not ready" instead of crashing.
        """
        self._teardown_server()

        try:
            server = supriya.Server().boot()
        except Exception as exc:
            logger.error("Failed to boot SuperCollider server: %s", exc)
            return

        self._server = server
        server.add_synthdefs(dialtone_voice)
        server.sync()
        self._synth_group = server.add_group()
        self._server_running = True
        logger.info("SuperCollider server ready")

    def _teardown_server(self) -> None:
        self._server_running = False
        self._voices.clear()
        self._timeline.clear()

        if self._synth_group is not None:
            try:
                self._synth_group.free()
            except Exception as exc:
                logger.debug("Group free failed: %s", exc)
            self._synth_group = None

        if self._server is not None:
            try:
                self._server.quit()
            except Exception as exc:
                logger.debug("Server quit failed: %s", exc)
            self._server = None

    # --------------- Timeline (audio thread only) ---------------

    def _schedule(self, due: float, kind: str, payload: tuple) -> int:
        seq = next(self._seq)
        heapq.heappush(self._timeline, (due, seq, kind, payload))
        return seq

    def _wait_time(self) -> float:
        if not self._timeline:
            return 0.05
        return min(0.05, max(0.0, self._timeline[0][0] - self._clock()))

    def _run_due_actions(self) -> None:
        now = self._clock()
        while self._timeline and self._timeline[0][0] <= now:
            due, seq, kind, payload = heapq.heappop(self._timeline)
            if kind == "start":
                pitch, hold = payload
                self._handle_start(seq, pitch)
                self._schedule(due + hold, "release", (seq,))
            elif kind == "release":
                self._handle_release(payload[0])

    def _handle_start(self, voice_id: int, pitch: int) -> None:
        if not self._server_running or self._synth_group is None:
            logger.debug("Dropping note %d; server not running", pitch)
            return
        self._voices[voice_id] = self._synth_group.add_synth(
            synthdef=dialtone_voice,
            frequency=midi_to_hz(pitch),
            amp=self._amp,
            gate=1.0,
        )

    def _handle_release(self, voice_id: int) -> None:
        voice = self._voices.pop(voice_id, None)
        if voice is None:
            return
        try:
            voice.set(gate=0.0)
        except Exception as exc:
            logger.debug("Gate-off failed for voice %d: %s", voice_id, exc)

    def _handle_silence(self) -> None:
        """Gate off every sounding voice and forget pending starts."""
        self._timeline = [item for item in self._timeline if item[2] == "release"]
        heapq.heapify(self._timeline)
        for voice_id in list(self._voices):
            self._handle_release(voice_id)


__all__ = ["DialtoneSynthEngine", "dialtone_voice"]
