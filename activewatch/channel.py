import queue
import threading

from .errors import ChannelClosedError


class PulseChannel:
    """Unbounded FIFO of motion pulses between one writer and one reader.

    A pulse carries nothing; the reader stamps its own arrival time. Once
    closed, send() fails and recv() fails as soon as the queue is drained.
    """

    def __init__(self):
        self._queue = queue.SimpleQueue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self):
        self._closed.set()
        # Wake a reader blocked in recv()
        self._queue.put(False)

    def send(self):
        if self._closed.is_set():
            raise ChannelClosedError("activity engine is no longer reading motion pulses")
        self._queue.put(True)

    def recv(self, timeout: float) -> bool:
        """Return True for a pulse, False if none arrived within timeout."""
        try:
            pulse = self._queue.get(timeout=timeout)
        except queue.Empty:
            if self._closed.is_set():
                raise ChannelClosedError("motion pulse channel closed")
            return False
        if not pulse:
            # Leave the marker for any later recv()
            self._queue.put(False)
            raise ChannelClosedError("motion pulse channel closed")
        return True
