import enum
import logging
import threading

from .errors import ActiveWatchError

logger = logging.getLogger(__name__)


class Activity(enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"

    def __str__(self):
        return self.value


class Event(enum.Enum):
    # A motion pulse arrived
    MOUSEMOVE = "mousemove"
    # The poll interval elapsed with no pulse
    TIME_PASSED = "time_passed"


class Dispatcher:
    """Receives one call per activity transition."""

    def dispatch(self, activity: Activity) -> None:
        raise NotImplementedError


class InputWatcher:
    """Produces motion pulses into a PulseChannel.

    Subclasses implement run(sink), which blocks for as long as pulses can be
    delivered and raises on any fatal condition.
    """

    name = "input"

    def run(self, sink) -> None:
        raise NotImplementedError

    def start(self, sink, errors) -> threading.Thread:
        def _watch():
            try:
                self.run(sink)
            except ActiveWatchError as e:
                errors.put(e)
            except Exception as e:
                logger.debug("%s watcher crashed", self.name, exc_info=True)
                errors.put(ActiveWatchError(f"{self.name} watcher failed: {e}"))
            else:
                errors.put(ActiveWatchError(f"{self.name} watcher stopped unexpectedly"))

        watcher_thread = threading.Thread(
            target=_watch,
            daemon=True,
            name=f"InputWatcher-{self.name}",
        )
        watcher_thread.start()
        return watcher_thread
