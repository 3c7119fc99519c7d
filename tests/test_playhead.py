import pytest

from dialtone_playback import IDLE_STATE, PlaybackScheduler
from dialtone_playhead import HIDDEN, PlayheadAnimator


def test_linear_mapping_across_lane():
    animator = PlayheadAnimator(100.0, 500.0)
    assert animator.position(0.0).position == pytest.approx(100.0)
    assert animator.position(0.25).position == pytest.approx(200.0)
    assert animator.position(0.999).visible


def test_hidden_when_no_progress_or_finished():
    animator = PlayheadAnimator()
    assert animator.position(None) == HIDDEN
    assert animator.position(1.0) == HIDDEN
    assert not animator.from_state(IDLE_STATE).visible


def test_visibility_round_trip_through_a_session(audio, clock):
    scheduler = PlaybackScheduler(audio, clock=clock)
    animator = PlayheadAnimator(0.0, 200.0)

    assert not animator.from_state(scheduler.tick()).visible

    scheduler.start_session([25, 26, 27, 28])
    clock.advance(1.0)
    head = animator.from_state(scheduler.tick())
    assert head.visible
    assert head.position == pytest.approx(100.0)

    clock.advance(1.0)
    final = scheduler.tick()
    assert final.progress == 1.0
    assert not animator.from_state(final).visible
    assert not animator.from_state(scheduler.tick()).visible


def test_lane_can_move_on_resize():
    animator = PlayheadAnimator(0.0, 100.0)
    animator.set_lane(50.0, 250.0)
    assert animator.position(0.5).position == pytest.approx(150.0)
