import errno
import glob
import logging
import os

import evdev
from evdev import ecodes

from . import InputWatcher
from .errors import DeviceNotFoundError, InputSourceError, PermissionDeniedError

logger = logging.getLogger(__name__)

GRAB_ADVICE = (
    "run as a user with read access to /dev/input (for example a member of the 'input' group), "
    "and make sure no other program holds the device"
)


def list_event_nodes(input_dir="/dev/input"):
    """Every event node, including ones this user may not open."""
    return sorted(glob.glob(os.path.join(input_dir, "event*")))


class ExclusiveGrabWatcher(InputWatcher):
    """Grabs one evdev device by name and turns its vertical motion into pulses.

    While grabbed, the device's events reach this process only; the desktop
    and every other reader stop seeing them.
    """

    name = "grab"

    def __init__(self, device_name, list_devices=list_event_nodes, open_device=evdev.InputDevice):
        self.device_name = device_name
        self._list_devices = list_devices
        self._open_device = open_device

    def find_device(self):
        available = []
        unreadable = []
        for path in self._list_devices():
            try:
                dev = self._open_device(path)
            except OSError as e:
                if e.errno in (errno.EACCES, errno.EPERM):
                    unreadable.append(path)
                logger.debug("Skipping %s: %s", path, e)
                continue
            if dev.name == self.device_name:
                for other in available:
                    other.close()
                return dev
            available.append(dev)

        names = [dev.name for dev in available]
        for dev in available:
            dev.close()
        if unreadable:
            # The device may be among the ones we cannot open
            raise PermissionDeniedError(
                f"No readable input device named {self.device_name!r}; "
                f"{len(unreadable)} device(s) could not be opened ({', '.join(unreadable)}); {GRAB_ADVICE}"
            )
        raise DeviceNotFoundError(self.device_name, names)

    def _grab(self, dev):
        try:
            dev.grab()
        except OSError as e:
            dev.close()
            if e.errno == errno.EBUSY:
                raise PermissionDeniedError(
                    f"Device {self.device_name!r} is already grabbed by another process; {GRAB_ADVICE}"
                ) from e
            if e.errno in (errno.EACCES, errno.EPERM):
                raise PermissionDeniedError(
                    f"Not allowed to grab {self.device_name!r} ({dev.path}); {GRAB_ADVICE}"
                ) from e
            raise InputSourceError(f"Failed to grab {self.device_name!r}: {e}") from e

    @staticmethod
    def is_pulse(event) -> bool:
        return event.type == ecodes.EV_REL and event.code == ecodes.REL_Y

    def run(self, sink):
        dev = self.find_device()
        self._grab(dev)
        logger.info("Grabbed %s (%s) exclusively", dev.name, dev.path)
        try:
            for event in dev.read_loop():
                if self.is_pulse(event):
                    sink.send()
        except OSError as e:
            raise InputSourceError(f"Lost device {self.device_name!r}: {e}") from e
        finally:
            try:
                dev.ungrab()
            except OSError:
                logger.debug("ungrab failed for %s", dev.path, exc_info=True)
            dev.close()
        raise InputSourceError(f"Device {self.device_name!r} stopped delivering events")
