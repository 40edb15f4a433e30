"""Infrastructure layer - Persistence, clock and configuration"""

from .clock import Clock, UtcClock, FixedClock
from .store import JsonStore

__all__ = ["Clock", "UtcClock", "FixedClock", "JsonStore"]
