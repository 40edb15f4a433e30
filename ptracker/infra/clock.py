"""
Clock abstraction.

Architecture Decision: Strategy Pattern
Services never read the system time themselves; the caller passes ``now``.
The command line obtains it from a Clock, which tests replace with a fixed one.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional


class Clock(ABC):
    """Supplies the current instant, always timezone-aware UTC"""

    @abstractmethod
    def now(self) -> datetime:
        raise NotImplementedError("Subclasses must implement now")


class UtcClock(Clock):
    """The system clock, expressed in UTC"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """
    A clock that only moves when told to.

    Useful for tests and for replaying a command at a known instant.
    """

    def __init__(self, instant: Optional[datetime] = None):
        if instant is None:
            instant = datetime.now(timezone.utc)
        elif instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def advance(self, delta: timedelta) -> datetime:
        self._instant = self._instant + delta
        return self._instant
