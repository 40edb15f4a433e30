"""
Errors raised by the tracker core and its store.

Every error carries the project name (where there is one) so the command
line can turn it into a one-line message.
"""

from typing import Optional


class TrackerError(Exception):
    """Base class for all tracker errors"""


class ProjectNotFoundError(TrackerError):
    def __init__(self, name: str):
        super().__init__(f"'{name}' not found.")
        self.name = name


class ProjectExistsError(TrackerError):
    def __init__(self, name: str):
        super().__init__(f"Project '{name}' exists.")
        self.name = name


class InvalidProjectNameError(TrackerError):
    def __init__(self, name: str):
        super().__init__("Project name required.")
        self.name = name


class AlreadyActiveError(TrackerError):
    def __init__(self, name: str):
        super().__init__("Already active.")
        self.name = name


class NotActiveError(TrackerError):
    def __init__(self, name: str):
        super().__init__("Not active.")
        self.name = name


class CorruptStateError(TrackerError):
    """The persisted snapshot exists but cannot be read into the data model"""

    def __init__(self, path: str, reason: Optional[str] = None):
        message = f"Corrupt tracker data in {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path
        self.reason = reason
