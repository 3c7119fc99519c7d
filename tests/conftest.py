from typing import List, Tuple

import pytest


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


class RecordingAudio:
    """Audio collaborator that remembers every call."""

    def __init__(self, ready: bool = True) -> None:
        self.ready = ready
        self.triggers: List[Tuple[int, float, float]] = []
        self.silenced = 0
        self.closed = False

    def trigger(self, pitch, hold_duration, onset_time):
        self.triggers.append((pitch, hold_duration, onset_time))

    def is_ready(self):
        return self.ready

    def silence(self):
        self.silenced += 1

    def close(self):
        self.closed = True

    @property
    def pitches(self):
        return [t[0] for t in self.triggers]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def audio():
    return RecordingAudio()
