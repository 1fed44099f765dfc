import sys

from . import InputWatcher
from .errors import UnsupportedPlatformError


class UnsupportedPlatformWatcher(InputWatcher):
    """Stands in for an input source this platform cannot provide."""

    name = "unsupported"

    def __init__(self, feature, platform):
        self.feature = feature
        self.platform = platform

    def run(self, sink):
        raise UnsupportedPlatformError(f"{self.feature} is not supported on {self.platform}")


def select_source(config, platform=sys.platform) -> InputWatcher:
    """Pick exactly one input source for this run.

    A requested grab never falls back to the global listener.
    """
    if config.grab_device_name is not None:
        if not platform.startswith("linux"):
            return UnsupportedPlatformWatcher("Exclusive device grab", platform)
        from .device import ExclusiveGrabWatcher
        return ExclusiveGrabWatcher(config.grab_device_name)

    from .mouse import GlobalMouseWatcher
    return GlobalMouseWatcher()
