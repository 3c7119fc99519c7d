#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dialtone_playhead.py
----------------------------------------------------------------------
Maps playback progress to the playhead line in the piano roll.

No timers here: the render loop asks for a position every frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from dialtone_playback import PlayState


@dataclass(frozen=True)
class Playhead:
    visible: bool
    position: float = 0.0


HIDDEN = Playhead(visible=False)


class PlayheadAnimator:
    """Linear interpolation of progress across [lane_start, lane_end]."""

    def __init__(self, lane_start: float = 0.0, lane_end: float = 1.0) -> None:
        self.lane_start = 0.0
        self.lane_end = 1.0
        self.set_lane(lane_start, lane_end)

    def set_lane(self, lane_start: float, lane_end: float) -> None:
        self.lane_start = float(lane_start)
        self.lane_end = float(lane_end)

    def position(self, progress: Optional[float]) -> Playhead:
        # Progress of 1.0 means the session has ended.
        if progress is None or progress >= 1.0:
            return HIDDEN
        fraction = max(0.0, float(progress))
        x = self.lane_start + (self.lane_end - self.lane_start) * fraction
        return Playhead(visible=True, position=x)

    def from_state(self, state: PlayState) -> Playhead:
        if not state.playing:
            return HIDDEN
        return self.position(state.progress)


__all__ = ["HIDDEN", "Playhead", "PlayheadAnimator"]
