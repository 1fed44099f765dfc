"""Fatal error types. Anything raised from here stops the monitor."""


class ActiveWatchError(Exception):
    """Base error for activewatch."""


class ConfigError(ActiveWatchError):
    """Raised when the configuration cannot be used."""


class ChannelClosedError(ActiveWatchError):
    """Raised when the pulse channel will never be read (or written) again."""


class InputSourceError(ActiveWatchError):
    """Raised when an input source cannot deliver motion pulses."""


class DeviceNotFoundError(InputSourceError):
    """Raised when no input device matches the requested name."""

    def __init__(self, name: str, available=()):
        self.name = name
        self.available = list(available)
        msg = f"No input device named {name!r}"
        if self.available:
            msg += " (available: " + ", ".join(repr(n) for n in self.available) + ")"
        else:
            msg += " (no readable devices under /dev/input; check permissions)"
        super().__init__(msg)


class PermissionDeniedError(InputSourceError):
    """Raised when a device cannot be opened or exclusively grabbed."""


class UnsupportedPlatformError(InputSourceError):
    """Raised when an input source is selected on a platform that lacks it."""


class DispatchError(ActiveWatchError):
    """Raised when a transition could not be delivered to a consumer."""


class LaunchError(DispatchError):
    """Raised when a configured program could not be started."""


class ChartClosedError(DispatchError):
    """Raised when the chart sink is gone."""
