#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dialtone_osc.py
----------------------------------------------------------------------
Backend: OscSynthTrigger

Talks to an already running scsynth over OSC instead of booting one.
Needs the "dialtone_voice" SynthDef (compiled from
dialtone_engine.py) loaded on the server.

For each trigger:
- /s_new starts the voice immediately (the scheduler only calls us once
  the note is due),
- a bundle time-stamped ``hold`` seconds ahead carries /n_set gate 0, so
  scsynth releases the note itself and nothing has to wait here.
"""

from __future__ import annotations

import logging
import time
from typing import List

from pythonosc import osc_bundle_builder, osc_message_builder, udp_client

from dialtone_keys import midi_to_hz


logger = logging.getLogger(__name__)

SYNTHDEF_NAME = "dialtone_voice"
FIRST_NODE_ID = 2000


class OscSynthTrigger:
    """
    Responsibilities:
    -----------------
    - Maintain an OSC UDP client pointing at scsynth.
    - Start one node per note, release it with a timed bundle.
    - Remember live nodes so silence() can gate them all off.
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 57110,
        amp: float = 0.2,
        client=None,
    ) -> None:
        """
        Parameters
        ----------
        host : str
            IP address for scsynth OSC input (usually "127.0.0.1").
        port : int
            UDP port for scsynth (default: 57110).
        amp : float
            Voice amplitude 0..1.
        client :
            Pre-built client with a ``send(content)`` method; mainly for tests.
        """
        self.client = client if client is not None else udp_client.SimpleUDPClient(host, port)
        self.amp = float(amp)
        self._next_node_id = FIRST_NODE_ID
        self._live_nodes: List[int] = []
        self._closed = False

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _generate_node_id(self) -> int:
        node_id = self._next_node_id
        self._next_node_id += 1
        return node_id

    @staticmethod
    def _message(address: str, args: list):
        builder = osc_message_builder.OscMessageBuilder(address=address)
        for arg in args:
            builder.add_arg(arg)
        return builder.build()

    # ------------------------------------------------------------------
    # Audio-trigger API
    # ------------------------------------------------------------------

    def is_ready(self) -> bool:
        return not self._closed

    def trigger(self, pitch: int, hold_duration: float, onset_time: float) -> None:
        if self._closed:
            logger.debug("Trigger after close ignored (pitch %d)", pitch)
            return

        node_id = self._generate_node_id()
        self._live_nodes.append(node_id)

        # /s_new SynthDefName, nodeID, addAction, targetID, paramName, paramValue...
        self.client.send(
            self._message(
                "/s_new",
                [
                    SYNTHDEF_NAME,
                    node_id,
                    0,  # add head of group
                    1,  # default group
                    "frequency",
                    float(midi_to_hz(pitch)),
                    "amp",
                    self.amp,
                ],
            )
        )

        # Bundle timestamps are wall-clock seconds.
        release_at = time.time() + max(0.0, float(hold_duration))
        bundle = osc_bundle_builder.OscBundleBuilder(release_at)
        bundle.add_content(self._message("/n_set", [node_id, "gate", 0.0]))
        self.client.send(bundle.build())

        # Keep a short history; released nodes free themselves on the server.
        if len(self._live_nodes) > 64:
            del self._live_nodes[:-64]

    def silence(self) -> None:
        """Panic / all-notes-off: release every node started so far."""
        for node_id in self._live_nodes:
            self.client.send(self._message("/n_set", [node_id, "gate", 0.0]))
        self._live_nodes.clear()

    def close(self) -> None:
        if self._closed:
            return
        self.silence()
        self._closed = True

    def __enter__(self) -> "OscSynthTrigger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["OscSynthTrigger", "SYNTHDEF_NAME"]
