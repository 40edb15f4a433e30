"""Domain layer - Pure business entities and logic"""

from .models import LogEntry, Project, TrackerData, is_active
from .errors import (
    TrackerError,
    ProjectNotFoundError,
    ProjectExistsError,
    InvalidProjectNameError,
    AlreadyActiveError,
    NotActiveError,
    CorruptStateError,
)

__all__ = [
    "LogEntry", "Project", "TrackerData", "is_active",
    "TrackerError", "ProjectNotFoundError", "ProjectExistsError", "InvalidProjectNameError",
    "AlreadyActiveError", "NotActiveError", "CorruptStateError",
]
