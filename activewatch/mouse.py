import logging

from Xlib import X, display, error
from Xlib.ext import record
from Xlib.protocol import rq

from . import InputWatcher
from .errors import ChannelClosedError, InputSourceError

logger = logging.getLogger(__name__)


class GlobalMouseWatcher(InputWatcher):
    """Listens to pointer motion from every client on the X server.

    Non-exclusive: other applications keep receiving the same events.
    """

    name = "global"

    def __init__(self, display_name=None):
        self.display_name = display_name
        self._failure = None
        self._ctx = None
        self._control = None

    def _handle_event(self, event, sink):
        if event.type != X.MotionNotify:
            return
        try:
            sink.send()
        except ChannelClosedError as e:
            # Nobody will read again, stop recording
            if self._failure is None:
                self._failure = e
                self._stop_recording()

    def _stop_recording(self):
        if self._control is None or self._ctx is None:
            return
        self._control.record_disable_context(self._ctx)
        self._control.flush()

    def _open_display(self):
        try:
            return display.Display(self.display_name)
        except error.DisplayError as e:
            raise InputSourceError(f"Cannot connect to X display: {e}") from e

    def run(self, sink):
        self._failure = None
        d = self._open_display()
        try:
            self._control = self._open_display()
            if not d.has_extension("RECORD"):
                raise InputSourceError("X server does not support the RECORD extension")

            def callback(reply):
                if reply.category != record.FromServer or reply.client_swapped:
                    return
                if not reply.data or len(reply.data) < 2:
                    return

                data = reply.data
                while data:
                    event, data = rq.EventField(None).parse_binary_value(
                        data, d.display, None, None
                    )
                    self._handle_event(event, sink)

            self._ctx = d.record_create_context(
                0,
                [record.AllClients],
                [{
                    'core_requests': (0, 0),
                    'core_replies': (0, 0),
                    'ext_requests': (0, 0, 0, 0),
                    'ext_replies': (0, 0, 0, 0),
                    'delivered_events': (0, 0),
                    'device_events': (X.MotionNotify, X.MotionNotify),
                    'errors': (0, 0),
                    'client_started': False,
                    'client_died': False,
                }]
            )
            logger.info("Listening for pointer motion on all devices")
            try:
                # Blocks until the context is disabled
                d.record_enable_context(self._ctx, callback)
            finally:
                d.record_free_context(self._ctx)
                self._ctx = None
        finally:
            d.close()
            if self._control is not None:
                self._control.close()
                self._control = None

        if self._failure is not None:
            raise self._failure
        raise InputSourceError("X11 motion recording ended")
