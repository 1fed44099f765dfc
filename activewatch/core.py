import logging
import queue
import threading

from . import Event
from .actions import build_dispatcher
from .channel import PulseChannel
from .chart import ChartSink
from .engine import DebounceEngine
from .errors import ActiveWatchError
from .sources import select_source

logger = logging.getLogger(__name__)


def engine_loop(engine, channel, poll_interval, errors):
    """Feed the engine until something fails, then report it on errors.

    A pulse becomes MOUSEMOVE and a poll interval without one becomes
    TIME_PASSED, so the engine sees a single ordered stream of events.
    """
    try:
        while True:
            event = Event.MOUSEMOVE if channel.recv(poll_interval) else Event.TIME_PASSED
            engine.handle(event)
    except ActiveWatchError as e:
        errors.put(e)
    except Exception as e:
        logger.debug("engine crashed", exc_info=True)
        errors.put(ActiveWatchError(f"activity engine failed: {e}"))
    finally:
        channel.close()


class Monitor:
    """Owns the threads of one run and the error channel they report into."""

    def __init__(self, config, source=None, stream=None, clock=None):
        self.config = config.validate()
        self.errors = queue.Queue()
        self.channel = PulseChannel()
        self.chart = None
        if config.chart_enabled:
            self.chart = ChartSink(stream=stream, refresh=config.poll_interval)
        self.dispatcher = build_dispatcher(config, chart=self.chart, stream=stream)
        engine_kwargs = {"min_movement_gap": config.min_movement_gap}
        if clock is not None:
            engine_kwargs["clock"] = clock
        self.engine = DebounceEngine(self.dispatcher, **engine_kwargs)
        self.source = source if source is not None else select_source(config)

    def start(self):
        if self.chart is not None:
            self.chart.start()
        threading.Thread(
            target=engine_loop,
            args=(self.engine, self.channel, self.config.poll_interval, self.errors),
            daemon=True,
            name="DebounceEngine",
        ).start()
        self.source.start(self.channel, self.errors)

    def wait(self, timeout=None) -> ActiveWatchError:
        """Block until a worker reports a fatal error and return it."""
        return self.errors.get(timeout=timeout)

    def stop(self):
        self.channel.close()
        if self.chart is not None:
            self.chart.close()


def run_core(config, source=None):
    monitor = Monitor(config, source=source)
    monitor.start()
    logger.info(
        "▶️  Monitoring %s input, inactive after %d ms",
        monitor.source.name,
        config.min_movement_gap_ms,
    )
    try:
        failure = monitor.wait()
    finally:
        monitor.stop()
    raise failure
