import logging
import queue
import sys
import threading
from collections import deque

from . import Activity
from .errors import ChartClosedError

logger = logging.getLogger(__name__)

BARS = {
    Activity.ACTIVE: "█",
    Activity.INACTIVE: "▁",
}


class ChartSink:
    """Rolling one-line activity strip drawn on its own thread.

    The sink owns its output stream. Values are handed over through a single
    slot: if the previous value has not been picked up yet it is replaced.
    """

    def __init__(self, stream=None, refresh: float = 0.25, width: int = 60):
        self.stream = stream if stream is not None else sys.stdout
        self.refresh = refresh
        self.history = deque(maxlen=width)
        self.current = Activity.INACTIVE
        self._slot = queue.Queue(maxsize=1)
        self._closed = threading.Event()
        self._thread = None

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def start(self):
        self._thread = threading.Thread(target=self._loop, daemon=True, name="ChartSink")
        self._thread.start()
        return self._thread

    def close(self):
        self._closed.set()

    def join(self, timeout=None):
        if self._thread is not None:
            self._thread.join(timeout)

    def offer(self, activity: Activity):
        if self._closed.is_set():
            raise ChartClosedError("activity chart is no longer running")
        try:
            self._slot.put_nowait(activity)
        except queue.Full:
            try:
                self._slot.get_nowait()
            except queue.Empty:
                pass
            self._slot.put_nowait(activity)

    def render(self) -> str:
        strip = "".join(BARS[a] for a in self.history)
        line = f"\r{strip} {self.current}".ljust(self.history.maxlen + 12)
        self.stream.write(line)
        self.stream.flush()
        return line

    def _loop(self):
        try:
            while not self._closed.is_set():
                try:
                    self.current = self._slot.get(timeout=self.refresh)
                except queue.Empty:
                    pass
                self.history.append(self.current)
                self.render()
        except Exception:
            logger.exception("Activity chart stopped")
        finally:
            self._closed.set()
