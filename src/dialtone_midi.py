#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dialtone_midi.py
----------------
MIDI output backend: plays the melody on a hardware or software synth.

    - MidiOutputTrigger(port_name=None)   None = first available output
    - list_output_ports() -> list[str]
    - trigger(pitch, hold_duration, onset_time)
    - silence() / close()

note_on is sent straight away; a background thread sends the matching
note_off once the hold has elapsed.
"""

from __future__ import annotations

import heapq
import logging
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

import mido


logger = logging.getLogger(__name__)

VELOCITY = 100
CHANNEL = 0


def list_output_ports() -> List[str]:
    """Return available MIDI output port names (empty on backend errors)."""
    try:
        return mido.get_output_names()
    except Exception as exc:
        logger.warning("Failed to list MIDI output ports: %s", exc)
        return []


class MidiOutputTrigger:
    """Background note-off scheduler around one mido output port.

    Parameters
    ----------
    port_name :
        Output to open; None picks the first one reported by mido.
    port :
        Already-open port object (anything with ``send(msg)`` and
        ``close()``); overrides ``port_name``.
    clock :
        Time source for hold lengths, time.monotonic by default.
    """

    def __init__(
        self,
        port_name: Optional[str] = None,
        port=None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._pending_offs: List[Tuple[float, int]] = []
        # pitch -> number of triggers still holding it
        self._sounding: Dict[int, int] = {}
        self.current_port_name: Optional[str] = None

        self._port = port
        if self._port is None:
            self._open(port_name)
        else:
            self.current_port_name = getattr(port, "name", None)

        self._running: bool = True
        self._thread: Optional[threading.Thread] = None
        if self._port is not None:
            self._thread = threading.Thread(
                target=self._thread_main,
                name="DialtoneMidiThread",
                daemon=True,
            )
            self._thread.start()

    # ------------------------------------------------------------------
    # Audio-trigger API
    # ------------------------------------------------------------------

    def is_ready(self) -> bool:
        return self._port is not None and self._running

    def trigger(self, pitch: int, hold_duration: float, onset_time: float) -> None:
        if not self.is_ready():
            logger.debug("No MIDI output open; note %d dropped", pitch)
            return
        self._send(mido.Message("note_on", channel=CHANNEL, note=int(pitch), velocity=VELOCITY))
        with self._lock:
            self._sounding[int(pitch)] = self._sounding.get(int(pitch), 0) + 1
            heapq.heappush(self._pending_offs, (self._clock() + float(hold_duration), int(pitch)))

    def silence(self) -> None:
        with self._lock:
            notes = list(self._sounding)
            self._sounding.clear()
            self._pending_offs.clear()
        for pitch in notes:
            self._send(mido.Message("note_off", channel=CHANNEL, note=pitch))

    def close(self) -> None:
        """Stop the background thread, release held notes, close the port."""
        if not self._running:
            return
        self._running = False
        if self._thread is not None and self._thread.is_alive():
            self._thread.join(timeout=1.0)
        self.silence()
        self._close_port()

    def __enter__(self) -> "MidiOutputTrigger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _open(self, port_name: Optional[str]) -> None:
        if port_name is None:
            names = list_output_ports()
            if not names:
                logger.warning("No MIDI output ports available.")
                return
            port_name = names[0]
        try:
            self._port = mido.open_output(port_name)
        except Exception as exc:
            logger.error("Failed to open MIDI output %r: %s", port_name, exc)
            self._port = None
            return
        self.current_port_name = port_name
        logger.info("Opened MIDI output %r", port_name)

    def _send(self, msg: mido.Message) -> None:
        port = self._port
        if port is None:
            return
        try:
            port.send(msg)
        except (IOError, OSError) as exc:
            logger.error("MIDI port error, closing output: %s", exc)
            self._close_port()

    def _close_port(self) -> None:
        port = self._port
        self._port = None
        self.current_port_name = None
        if port is not None:
            try:
                port.close()
            except Exception as exc:
                logger.debug("Closing MIDI port failed: %s", exc)

    def _release_due(self) -> None:
        """Send note_off for pitches whose last overlapping hold has ended."""
        now = self._clock()
        due = []
        with self._lock:
            while self._pending_offs and self._pending_offs[0][0] <= now:
                _, pitch = heapq.heappop(self._pending_offs)
                holders = self._sounding.get(pitch, 0) - 1
                if holders > 0:
                    self._sounding[pitch] = holders
                    continue
                if self._sounding.pop(pitch, None) is not None:
                    due.append(pitch)
        for pitch in due:
            self._send(mido.Message("note_off", channel=CHANNEL, note=pitch))

    # ------------------------------------------------------------------
    # Background thread
    # ------------------------------------------------------------------

    def _thread_main(self) -> None:
        while self._running:
            self._release_due()
            time.sleep(0.002)


__all__ = ["MidiOutputTrigger", "list_output_ports"]
