import time

import pytest

from conftest import FakeClock
from dialtone_midi import MidiOutputTrigger


class FakePort:
    name = "Fake Synth"

    def __init__(self):
        self.messages = []
        self.closed = False

    def send(self, msg):
        self.messages.append(msg)

    def close(self):
        self.closed = True


@pytest.fixture
def port():
    return FakePort()


@pytest.fixture
def midi(port, clock):
    trigger = MidiOutputTrigger(port=port, clock=clock)
    yield trigger
    trigger.close()


def wait_for(predicate, timeout=1.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def test_injected_port_is_ready(midi):
    assert midi.is_ready()
    assert midi.current_port_name == "Fake Synth"


def test_note_on_is_immediate(midi, port):
    midi.trigger(60, 0.25, 0.0)
    assert port.messages[0].type == "note_on"
    assert port.messages[0].note == 60
    assert port.messages[0].velocity > 0


def test_note_off_follows_after_hold(midi, port, clock):
    midi.trigger(64, 0.25, 0.0)
    time.sleep(0.02)
    assert [m.type for m in port.messages] == ["note_on"]

    clock.advance(0.25)
    assert wait_for(lambda: len(port.messages) == 2)
    assert port.messages[1].type == "note_off"
    assert port.messages[1].note == 64


def test_silence_releases_sounding_notes(midi, port):
    midi.trigger(60, 10.0, 0.0)
    midi.trigger(67, 10.0, 0.0)
    midi.silence()
    offs = [m.note for m in port.messages if m.type == "note_off"]
    assert offs == [60, 67]


def test_close_closes_port(port):
    trigger = MidiOutputTrigger(port=port, clock=FakeClock())
    with trigger:
        trigger.trigger(60, 5.0, 0.0)
    assert port.closed
    assert not trigger.is_ready()
    assert port.messages[-1].type == "note_off"


def test_overlapping_same_pitch_holds_until_last_release(midi, port, clock):
    clock.now = 0.0
    midi.trigger(60, 0.25, 0.0)
    clock.now = 0.1
    midi.trigger(60, 0.25, 0.1)

    clock.now = 0.26
    midi._release_due()
    assert [m.type for m in port.messages] == ["note_on", "note_on"]

    clock.now = 0.36
    assert wait_for(lambda: len(port.messages) == 3)
    assert port.messages[2].type == "note_off"
    assert port.messages[2].note == 60


def test_no_thread_without_an_output_port(monkeypatch):
    monkeypatch.setattr("dialtone_midi.list_output_ports", lambda: [])
    trigger = MidiOutputTrigger(clock=FakeClock())
    assert trigger._thread is None
    assert not trigger.is_ready()
    trigger.close()


class BrokenPort(FakePort):
    def send(self, msg):
        raise OSError("device unplugged")


def test_send_error_closes_port():
    port = BrokenPort()
    trigger = MidiOutputTrigger(port=port, clock=FakeClock())
    trigger.trigger(60, 0.25, 0.0)
    assert port.closed
    assert not trigger.is_ready()
    assert trigger.current_port_name is None
    trigger.close()
