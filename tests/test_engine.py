import pytest

from activewatch import Activity, Dispatcher, Event
from activewatch.engine import DebounceEngine
from activewatch.errors import LaunchError

ACTIVE, INACTIVE = Activity.ACTIVE, Activity.INACTIVE


def make_engine(recorder, clock, gap=4):
    return DebounceEngine(recorder, clock=clock, min_movement_gap=gap)


def tick(engine, clock, n=1):
    for _ in range(n):
        clock.advance(1)
        engine.handle(Event.TIME_PASSED)


def test_starts_inactive(recorder, clock):
    engine = make_engine(recorder, clock)
    assert engine.activity is INACTIVE
    assert recorder.seen == []


def test_burst_of_moves_reports_active_once(recorder, clock):
    engine = make_engine(recorder, clock)
    for _ in range(50):
        engine.handle(Event.MOUSEMOVE)
        clock.advance(0.01)
    assert recorder.seen == [ACTIVE]
    assert engine.activity is ACTIVE


def test_ticks_inside_gap_are_ignored(recorder, clock):
    engine = make_engine(recorder, clock)
    engine.handle(Event.MOUSEMOVE)
    tick(engine, clock, 3)
    assert recorder.seen == [ACTIVE]
    tick(engine, clock)
    assert recorder.seen == [ACTIVE, INACTIVE]


def test_reference_scenario(recorder, clock):
    engine = make_engine(recorder, clock)

    engine.handle(Event.MOUSEMOVE)
    tick(engine, clock, 3)
    assert recorder.seen == [ACTIVE]

    for _ in range(5):
        engine.handle(Event.MOUSEMOVE)
        tick(engine, clock, 3)
    assert recorder.seen == [ACTIVE]

    tick(engine, clock, 5)
    assert recorder.seen == [ACTIVE, INACTIVE]


def test_ticks_forever_after_inactive_report_nothing(recorder, clock):
    engine = make_engine(recorder, clock)
    engine.handle(Event.MOUSEMOVE)
    tick(engine, clock, 1000)
    assert recorder.seen == [ACTIVE, INACTIVE]


def test_ticks_while_idle_from_start_report_nothing(recorder, clock):
    engine = make_engine(recorder, clock)
    tick(engine, clock, 100)
    assert recorder.seen == []


def test_notifications_alternate(recorder, clock):
    engine = make_engine(recorder, clock)
    pattern = [Event.MOUSEMOVE] * 3 + [Event.TIME_PASSED] * 6 + [Event.MOUSEMOVE] + [Event.TIME_PASSED] * 2
    for _ in range(10):
        for event in pattern:
            if event is Event.TIME_PASSED:
                clock.advance(1)
            engine.handle(event)

    assert recorder.seen[0] is ACTIVE
    for prev, cur in zip(recorder.seen, recorder.seen[1:]):
        assert prev is not cur


def test_move_after_inactive_reports_active_again(recorder, clock):
    engine = make_engine(recorder, clock)
    engine.handle(Event.MOUSEMOVE)
    tick(engine, clock, 4)
    engine.handle(Event.MOUSEMOVE)
    assert recorder.seen == [ACTIVE, INACTIVE, ACTIVE]


class FailingDispatcher(Dispatcher):
    def __init__(self):
        self.calls = 0

    def dispatch(self, activity):
        self.calls += 1
        raise LaunchError(f"cannot report {activity}")


def test_dispatch_failure_propagates_after_state_flipped(clock):
    dispatcher = FailingDispatcher()
    engine = DebounceEngine(dispatcher, clock=clock, min_movement_gap=4)

    with pytest.raises(LaunchError):
        engine.handle(Event.MOUSEMOVE)

    # The transition counts as done even though reporting it failed
    assert engine.last_is_active is True
    assert engine.activity is ACTIVE

    # No retry: staying active produces no further dispatch
    engine.handle(Event.MOUSEMOVE)
    assert dispatcher.calls == 1


def test_unknown_event_rejected(recorder, clock):
    engine = make_engine(recorder, clock)
    with pytest.raises(ValueError):
        engine.handle("click")
