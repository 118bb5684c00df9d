"""
Time provider abstraction for deterministic generation

KSUIDs embed the wall-clock second they were minted in. Making the clock
injectable lets tests mint identifiers at exact, repeatable instants.
"""

from datetime import datetime, timedelta, timezone
from typing import Protocol


class TimeProvider(Protocol):
    """Protocol for time providers - allows deterministic testing"""

    def now(self) -> datetime:
        """Return current UTC datetime"""
        ...


class RealTimeProvider:
    """Production time provider using system clock"""

    def now(self) -> datetime:
        """Return current UTC time from system clock"""
        return datetime.now(timezone.utc)


class FrozenTimeProvider:
    """
    Controllable time provider for deterministic tests

    Time only moves when told to, so two identifiers minted in a row
    share a timestamp unless the clock is advanced in between.
    """

    def __init__(self, initial_time: datetime | None = None) -> None:
        """
        Initialize with optional fixed time

        Args:
            initial_time: Starting time (defaults to the KSUID epoch)
        """
        self._current_time = initial_time or datetime.fromtimestamp(
            1_400_000_000, tz=timezone.utc
        )

    def now(self) -> datetime:
        """Return current frozen time"""
        return self._current_time

    def set_time(self, dt: datetime) -> None:
        """Set current time to specific value"""
        self._current_time = dt

    def advance_seconds(self, seconds: float) -> None:
        """Advance time by specified seconds"""
        self._current_time += timedelta(seconds=seconds)


# Global default time provider
default_time_provider: TimeProvider = RealTimeProvider()
