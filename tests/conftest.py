import pytest

from activewatch import Dispatcher


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class RecordingDispatcher(Dispatcher):
    def __init__(self):
        self.seen = []

    def dispatch(self, activity):
        self.seen.append(activity)


class RecordingSink:
    def __init__(self):
        self.pulses = 0

    def send(self):
        self.pulses += 1


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recorder():
    return RecordingDispatcher()


@pytest.fixture
def sink():
    return RecordingSink()
