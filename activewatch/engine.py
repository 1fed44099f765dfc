import logging
import time
from typing import Callable

from . import Activity, Dispatcher, Event

logger = logging.getLogger(__name__)


class DebounceEngine:
    """Turns motion pulses and clock ticks into ACTIVE/INACTIVE transitions.

    Bursts of MOUSEMOVE while active are coalesced, and a long idle period
    yields a single INACTIVE at the first TIME_PASSED where the gap since the
    last pulse has reached min_movement_gap. Only transitions reach the
    dispatcher, so it sees INACTIVE -> ACTIVE -> INACTIVE -> ... with no
    repeats.

    handle() must be called from one thread only.

    The classification is updated before the dispatcher is called. If the
    dispatcher raises, the error propagates to the caller and the new state
    is kept: the transition happened even though reporting it failed.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        clock: Callable[[], float] = time.monotonic,
        min_movement_gap: float = 1.0,
    ):
        self.dispatcher = dispatcher
        self.clock = clock
        self.min_movement_gap = min_movement_gap
        self.last_move_time = clock()
        self.last_is_active = False

    @property
    def activity(self) -> Activity:
        return Activity.ACTIVE if self.last_is_active else Activity.INACTIVE

    def handle(self, event: Event) -> None:
        if event is Event.MOUSEMOVE:
            self.last_move_time = self.clock()
            is_active = True
        elif event is Event.TIME_PASSED:
            is_active = False
            if self.last_is_active:
                elapsed = self.clock() - self.last_move_time
                if elapsed < self.min_movement_gap:
                    # Woke up early; check again on the next tick
                    return
        else:
            raise ValueError(f"Unknown event: {event!r}")

        was_active = self.last_is_active
        self.last_is_active = is_active

        if was_active == is_active:
            return
        activity = Activity.ACTIVE if is_active else Activity.INACTIVE
        logger.debug("transition %s -> %s", "ACTIVE" if was_active else "INACTIVE", activity)
        self.dispatcher.dispatch(activity)
