import pytest

from conftest import FakeClock, RecordingAudio
from dialtone_playback import (
    EIGHTH_NOTE,
    INTER_ONSET_INTERVAL,
    PlaybackScheduler,
    StartResult,
    build_events,
    onset_offsets,
)


MELODY = [25, 26, 27, 28]


@pytest.fixture
def scheduler(audio, clock):
    return PlaybackScheduler(audio, clock=clock)


def test_onsets_strictly_increase():
    offsets = onset_offsets(4, INTER_ONSET_INTERVAL)
    assert offsets == [0.0, 0.5, 1.0, 1.5]
    assert all(a < b for a, b in zip(offsets, offsets[1:]))


def test_events_share_the_session_hold():
    events = build_events(MELODY, 0.5, EIGHTH_NOTE)
    assert [e.note for e in events] == MELODY
    assert {e.hold_duration for e in events} == {EIGHTH_NOTE}
    assert events[1].release_offset == pytest.approx(0.75)


def test_first_note_fires_on_start(scheduler, audio, clock):
    assert scheduler.start_session(MELODY) is StartResult.STARTED
    assert audio.triggers == [(25, EIGHTH_NOTE, clock.now)]
    assert scheduler.is_playing()


def test_events_fire_in_order_as_clock_passes_them(scheduler, audio, clock):
    start = clock.now
    scheduler.start_session(MELODY)

    clock.now = start + 0.375
    scheduler.tick()
    assert audio.pitches == [25]

    clock.now = start + 0.5
    scheduler.tick()
    assert audio.pitches == [25, 26]

    clock.now = start + 1.5
    scheduler.tick()
    assert audio.pitches == MELODY
    onsets = [t[2] for t in audio.triggers]
    assert onsets == [start, start + 0.5, start + 1.0, start + 1.5]


def test_coarse_tick_still_fires_every_event(scheduler, audio, clock):
    scheduler.start_session(MELODY)
    clock.advance(5.0)
    state = scheduler.tick()
    assert audio.pitches == MELODY
    assert not state.playing
    assert state.progress == 1.0


def test_progress_is_normalized_and_monotonic(scheduler, clock):
    scheduler.start_session(MELODY)
    samples = []
    for _ in range(10):
        samples.append(scheduler.progress())
        clock.advance(0.15)
    assert samples[0] == 0.0
    assert samples == sorted(samples)
    assert all(0.0 <= s <= 1.0 for s in samples)
    assert samples[4] == pytest.approx(0.6 / 2.0)


def test_progress_ignores_a_clock_that_steps_back(audio):
    clock = FakeClock(10.0)
    scheduler = PlaybackScheduler(audio, clock=clock)
    scheduler.start_session(MELODY)
    clock.advance(1.0)
    first = scheduler.progress()
    clock.advance(-0.5)
    assert scheduler.progress() == first


def test_session_completes_at_one_and_returns_to_idle(scheduler, clock):
    scheduler.start_session(MELODY)
    clock.advance(2.0)
    assert scheduler.progress() == 1.0
    assert not scheduler.is_playing()
    assert scheduler.session is None
    assert scheduler.progress() == 0.0


def test_reentrant_start_is_busy(scheduler, audio, clock):
    scheduler.start_session(MELODY)
    clock.advance(0.2)
    assert scheduler.start_session([60, 61, 62, 63]) is StartResult.BUSY
    assert audio.pitches == [25]
    assert scheduler.session.notes == tuple(MELODY)


def test_replay_after_completion_needs_new_session(scheduler, audio, clock):
    scheduler.start_session(MELODY)
    clock.advance(2.5)
    # Never ticked: the stale session finishes inside the second start.
    assert scheduler.start_session(MELODY) is StartResult.STARTED
    assert audio.pitches == MELODY + [25]


def test_not_ready_audio_rejects_start(clock):
    audio = RecordingAudio(ready=False)
    scheduler = PlaybackScheduler(audio, clock=clock)
    assert scheduler.start_session(MELODY) is StartResult.NOT_READY
    assert not scheduler.is_playing()
    assert audio.triggers == []


def test_cancel_discards_pending_events(scheduler, audio, clock):
    scheduler.start_session(MELODY)
    scheduler.cancel()
    clock.advance(2.0)
    state = scheduler.tick()
    assert audio.pitches == [25]
    assert not state.playing
    assert state.progress == 0.0


def test_cancel_from_idle_is_harmless(scheduler):
    scheduler.cancel()
    assert not scheduler.is_playing()


def test_state_reports_sounding_notes(scheduler, clock):
    scheduler.start_session(MELODY)
    assert scheduler.tick().sounding == (25,)
    clock.advance(0.3)
    assert scheduler.tick().sounding == ()
    clock.advance(0.25)
    state = scheduler.tick()
    assert state.playing
    assert state.sounding == (26,)
    assert state.notes == tuple(MELODY)


@pytest.mark.parametrize("notes", [[], [10, 30, 40, 50], [30, 40, 50, 120]])
def test_invalid_note_sequences_are_rejected(scheduler, notes):
    with pytest.raises(ValueError):
        scheduler.start_session(notes)


def test_non_positive_timing_is_rejected(scheduler):
    with pytest.raises(ValueError):
        scheduler.start_session(MELODY, inter_onset_interval=0)
    with pytest.raises(ValueError):
        scheduler.start_session(MELODY, hold_duration=-1)
