import pytest

from autoclicker.scheduler import (
    ClickScheduler,
    InvalidInterval,
    format_seconds,
    parse_interval,
)
from autoclicker.state import AppState, SchedulerState


@pytest.fixture
def state():
    return AppState()


@pytest.fixture
def scheduler(state, clicker, timers):
    return ClickScheduler(state, clicker, timers)


@pytest.mark.parametrize('text, expected', [
    ('30', 30.0),
    ('0.5', 0.5),
    (' 2 ', 2.0),
    ('1e-3', 0.001),
])
def test_parse_interval_accepts_positive_numbers(text, expected):
    assert parse_interval(text) == expected


@pytest.mark.parametrize('text', ['0', '-5', 'abc', '', '   ', 'inf', 'nan', '1,5'])
def test_parse_interval_rejects(text):
    with pytest.raises(InvalidInterval):
        parse_interval(text)


def test_invalid_interval_is_a_value_error():
    assert issubclass(InvalidInterval, ValueError)


@pytest.mark.parametrize('seconds, text', [
    (30.0, '30'),
    (0.5, '0.5'),
    (2.25, '2.25'),
    (1000000.0, '1000000'),
    (1e16, '10000000000000000'),
    (0.00001, '0.00001'),
    (1e-7, '0.0000001'),
])
def test_format_seconds(seconds, text):
    assert format_seconds(seconds) == text


@pytest.mark.parametrize('text', ['0', '-5', 'abc'])
def test_start_with_invalid_interval_stays_idle(scheduler, state, timers, text):
    assert scheduler.start(text, 'Default') is False

    assert state.scheduler_state == SchedulerState.IDLE
    assert state.status == "Invalid interval for Default"
    assert state.click_count == 0
    assert state.active_interval is None
    assert timers.pending == []


def test_start_sets_running_status(scheduler, state):
    assert scheduler.start('30', 'Default') is True

    assert state.running
    assert state.active_interval == 30.0
    assert state.status == "Clicking every 30s (Default)..."


def test_first_click_after_one_full_interval(scheduler, state, clicker, timers):
    scheduler.start('1', 'Default')

    timers.advance(0.5)
    assert state.click_count == 0
    assert clicker.clicks == []

    timers.advance(0.5)
    assert state.click_count == 1
    assert clicker.clicks == [(100.7, 200.2)]


def test_ticks_repeat_every_interval(scheduler, state, timers):
    scheduler.start('2', 'Default')
    timers.advance(7)
    assert state.click_count == 3


def test_tick_status_truncates_coordinates(scheduler, state, clicker, timers):
    clicker.location = (12.9, -3.7)
    scheduler.start('1', 'Default')
    timers.advance(1)
    assert state.status == "Clicked at 12,-3"


def test_no_tick_after_stop(scheduler, state, timers):
    scheduler.start('1', 'Default')
    timers.advance(1)
    assert state.click_count == 1

    scheduler.stop()
    timers.advance(3)

    assert state.click_count == 1
    assert state.status == "Stopped."
    assert state.scheduler_state == SchedulerState.IDLE
    assert state.active_interval is None
    assert timers.pending == []


def test_stop_when_idle_is_noop(scheduler, state):
    state.status = "Loaded saved profiles"
    scheduler.stop()
    assert state.status == "Loaded saved profiles"
    assert not state.running


def test_restart_resets_click_count(scheduler, state, timers):
    scheduler.start('1', 'Default')
    timers.advance(3)
    scheduler.stop()

    scheduler.start('1', 'Default')
    assert state.click_count == 0
    timers.advance(1)
    assert state.click_count == 1


def test_start_while_running_replaces_task(scheduler, state, timers):
    scheduler.start('1', 'Default')
    scheduler.start('5', 'Slow')

    timers.advance(4)
    assert state.click_count == 0
    timers.advance(1)
    assert state.click_count == 1
    assert len(timers.pending) == 1


def test_tick_without_pointer_location_is_skipped(scheduler, state, clicker, timers):
    scheduler.start('1', 'Default')
    status = state.status
    clicker.location = None

    timers.advance(2)

    assert state.click_count == 0
    assert clicker.clicks == []
    assert state.status == status
    # Still running; clicks resume when the pointer comes back
    assert state.running
    clicker.location = (5, 6)
    timers.advance(1)
    assert state.click_count == 1


def test_tick_when_idle_does_nothing(scheduler, state, clicker):
    scheduler.tick()
    assert clicker.clicks == []
    assert state.click_count == 0


def test_toggle_uses_profile(scheduler, state, timers):
    from autoclicker.profiles import Profile

    profile = Profile('Fishing', '4')
    assert scheduler.toggle(profile) is True
    assert state.status == "Clicking every 4s (Fishing)..."
    assert scheduler.toggle(profile) is False
    assert state.status == "Stopped."


def test_transition_listeners(scheduler, state):
    changes = []
    state.add_transition_listener(changes.append)

    scheduler.start('1', 'Default')
    scheduler.stop()
    scheduler.stop()

    assert [(c.old_state, c.new_state, c.reason) for c in changes] == [
        (SchedulerState.IDLE, SchedulerState.RUNNING, 'start'),
        (SchedulerState.RUNNING, SchedulerState.IDLE, 'stop'),
    ]


def test_failing_listener_does_not_break_ticks(scheduler, state, timers):
    def broken(_):
        raise RuntimeError("boom")

    state.add_listener(broken)
    scheduler.start('1', 'Default')
    timers.advance(2)
    assert state.click_count == 2


def test_long_interval_status_has_no_exponent(scheduler, state):
    scheduler.start('1000000', 'Long')
    assert state.status == "Clicking every 1000000s (Long)..."


def test_tiny_interval_status_has_no_exponent(scheduler, state):
    scheduler.start('0.00005', 'Tiny')
    assert state.status == "Clicking every 0.00005s (Tiny)..."
