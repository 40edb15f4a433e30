"""
Session Service - Core time tracking logic.

Architecture Decision: Stateless service over an explicit snapshot
The service holds no state of its own. Every call receives the loaded
TrackerData and, where time matters, the current instant. Callers decide
when to load and save, which keeps the state machine easy to test.

State machine per project:
    Idle   --start-->  Active   (appends an open LogEntry)
    Active --stop-->   Idle     (closes it and adds its length to total_time)

Preconditions are checked before anything is touched, so a call that raises
leaves the snapshot exactly as it was.
"""

from datetime import datetime, timedelta

from ptracker.domain.errors import (
    AlreadyActiveError,
    InvalidProjectNameError,
    NotActiveError,
    ProjectExistsError,
    ProjectNotFoundError,
)
from ptracker.domain.models import LogEntry, Project, TrackerData, as_utc, from_nanos, is_active


class SessionService:
    """
    Starts and stops sessions, and manages the project list.
    """

    @staticmethod
    def get(tracker: TrackerData, name: str) -> Project:
        """Return the named project or raise ProjectNotFoundError"""
        project = tracker.find(name)
        if project is None:
            raise ProjectNotFoundError(name)
        return project

    @staticmethod
    def is_active(project: Project) -> bool:
        return is_active(project)

    def create(self, tracker: TrackerData, name: str) -> Project:
        """
        Add a new, idle project.

        Raises:
            InvalidProjectNameError: name is empty
            ProjectExistsError: a project with this exact name already exists
        """
        if not name or not name.strip():
            raise InvalidProjectNameError(name)
        if tracker.find(name) is not None:
            raise ProjectExistsError(name)

        project = Project(name=name)
        tracker.projects.append(project)
        return project

    def delete(self, tracker: TrackerData, name: str) -> Project:
        """Remove a project together with all of its logs"""
        project = self.get(tracker, name)
        tracker.projects.remove(project)
        return project

    def start(self, tracker: TrackerData, name: str, now: datetime) -> LogEntry:
        """
        Open a new session on an idle project.

        Args:
            tracker: The loaded snapshot
            name: Project name
            now: Start instant (UTC)

        Returns:
            The newly opened entry
        """
        project = self.get(tracker, name)
        if is_active(project):
            raise AlreadyActiveError(name)

        entry = LogEntry(start=as_utc(now))
        project.logs.append(entry)
        return entry

    def stop(self, tracker: TrackerData, name: str, now: datetime) -> timedelta:
        """
        Close the open session of an active project.

        The session length is added to the project's total as given: a zero
        length is fine, and so is a negative one when the clock went backwards.

        Returns:
            The length of the session that was just closed
        """
        project = self.get(tracker, name)
        if not is_active(project):
            raise NotActiveError(name)

        entry = project.logs[-1]
        now = as_utc(now)
        nanos = entry.duration_nanos(now)
        entry.end = now
        entry.end_nanos = 0
        project.total_nanos += nanos
        return from_nanos(nanos)
