from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ConfigError

DEFAULT_MIN_MOVEMENT_GAP_MS = 1000
# The engine is re-checked this many times per movement gap
POLL_DIVISOR = 4


@dataclass
class Config:
    on_active_path: Optional[Path] = None
    on_inactive_path: Optional[Path] = None
    quiet: bool = False
    chart_enabled: bool = False
    min_movement_gap_ms: int = DEFAULT_MIN_MOVEMENT_GAP_MS
    grab_device_name: Optional[str] = None

    @property
    def min_movement_gap(self) -> float:
        """Gap in seconds after the last pulse before the user counts as inactive."""
        return self.min_movement_gap_ms / 1000.0

    @property
    def poll_interval(self) -> float:
        """Longest the engine waits for a pulse before re-evaluating."""
        return self.min_movement_gap / POLL_DIVISOR

    def validate(self) -> "Config":
        if self.min_movement_gap_ms <= 0:
            raise ConfigError(
                f"min movement gap must be a positive number of milliseconds, got {self.min_movement_gap_ms}"
            )
        if self.grab_device_name is not None and not self.grab_device_name.strip():
            raise ConfigError("grab device name must not be empty")
        return self
