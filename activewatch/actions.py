import logging
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from . import Activity, Dispatcher
from .errors import DispatchError, LaunchError

logger = logging.getLogger(__name__)


class ProcessLauncher(Dispatcher):
    """Starts the program configured for a transition and does not wait for it."""

    def __init__(self, on_active: Optional[Path] = None, on_inactive: Optional[Path] = None):
        self.programs = {
            Activity.ACTIVE: on_active,
            Activity.INACTIVE: on_inactive,
        }

    def dispatch(self, activity):
        program = self.programs.get(activity)
        if program is None:
            return
        try:
            proc = subprocess.Popen(
                [str(program)],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            raise LaunchError(f"Failed to run {program}: {e}") from e
        logger.debug("Started %s for %s (pid %s)", program, activity, proc.pid)


class StatusPrinter(Dispatcher):
    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdout

    def dispatch(self, activity):
        self.stream.write(f"{activity}\n")
        self.stream.flush()


class ChartFeed(Dispatcher):
    """Hands transitions to a ChartSink without waiting for it."""

    def __init__(self, chart):
        self.chart = chart

    def dispatch(self, activity):
        self.chart.offer(activity)


class FanOutDispatcher(Dispatcher):
    """Delivers each transition to every member.

    A member that fails does not keep the rest from running; the first
    failure is raised once all of them have been called.
    """

    def __init__(self, dispatchers: List[Dispatcher]):
        self.dispatchers = list(dispatchers)

    def dispatch(self, activity):
        failure = None
        for d in self.dispatchers:
            try:
                d.dispatch(activity)
            except DispatchError as e:
                logger.debug("%s failed for %s: %s", type(d).__name__, activity, e)
                if failure is None:
                    failure = e
            except Exception as e:
                logger.debug("%s crashed for %s", type(d).__name__, activity, exc_info=True)
                if failure is None:
                    failure = DispatchError(f"{type(d).__name__} failed: {e}")
                    failure.__cause__ = e
        if failure is not None:
            raise failure


def build_dispatcher(config, chart=None, stream=None) -> FanOutDispatcher:
    """Wire the consumers selected by the configuration.

    Program launches happen in every mode. Quiet mode never prints and chart
    mode forwards to the chart instead of printing.
    """
    dispatchers: List[Dispatcher] = []
    if config.on_active_path is not None or config.on_inactive_path is not None:
        dispatchers.append(ProcessLauncher(config.on_active_path, config.on_inactive_path))
    if config.chart_enabled:
        if chart is None:
            raise ValueError("chart mode needs a ChartSink")
        dispatchers.append(ChartFeed(chart))
    elif not config.quiet:
        dispatchers.append(StatusPrinter(stream))
    return FanOutDispatcher(dispatchers)
