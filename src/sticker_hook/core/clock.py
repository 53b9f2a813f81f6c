"""Time abstraction for testability."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from sticker_hook.core.utils import utc_now


class Clock(ABC):
    """Abstract clock interface."""

    @abstractmethod
    def now(self) -> datetime:
        """Get current time."""
        ...


class SystemClock(Clock):
    """Real system time."""

    def now(self) -> datetime:
        return utc_now()


class FakeClock(Clock):
    """Controllable clock for testing."""

    def __init__(self, initial: datetime | None = None) -> None:
        self._now = initial or utc_now()

    def now(self) -> datetime:
        return self._now
