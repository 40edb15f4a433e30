"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
The whole tracker state lives in a single JSON snapshot. Pydantic validates it
on load (so a malformed file is rejected before anything touches it) and
serializes it back in the layout the data file has always used.

Instants and totals in that file carry nanoseconds, while ``datetime`` and
``timedelta`` stop at microseconds. The sub-microsecond digits are kept in
separate fields so a snapshot is written back exactly as it was read.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict, field_serializer, field_validator, model_validator

# The zero instant written by earlier versions for an entry that was still open
LEGACY_ZERO_YEAR = 1

MICROSECOND = timedelta(microseconds=1)

_FRACTION = re.compile(r"T\d{2}:\d{2}:\d{2}[.,](\d+)")


def as_utc(value: datetime) -> datetime:
    """Interpret naive instants as UTC and normalize aware ones to UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(f"instant out of range: {value.isoformat()}") from e


def to_nanos(value: timedelta) -> int:
    return (value // MICROSECOND) * 1000


def from_nanos(value: int) -> timedelta:
    return timedelta(microseconds=value // 1000)


def _sub_micro_nanos(raw) -> int:
    """Nanoseconds beyond the microsecond in an RFC 3339 string, e.g. 789 in .123456789"""
    if not isinstance(raw, str):
        return 0
    match = _FRACTION.search(raw)
    if match is None:
        return 0
    digits = match.group(1)[6:9]
    return int(digits.ljust(3, "0")) if digits else 0


def format_instant(value: datetime, nanos: int = 0) -> str:
    """RFC 3339 in UTC with trailing zeros trimmed from the fraction"""
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    fraction = value.microsecond * 1000 + nanos
    if fraction:
        text += "." + f"{fraction:09d}".rstrip("0")
    return text + "Z"


class LogEntry(BaseModel):
    """
    A single tracked session.

    ``end`` is None while the session is still running.
    """
    start: datetime
    end: Optional[datetime] = None
    start_nanos: int = Field(default=0, exclude=True)
    end_nanos: int = Field(default=0, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _capture_nanos(cls, data):
        if isinstance(data, dict):
            data = dict(data)
            data.setdefault("start_nanos", _sub_micro_nanos(data.get("start")))
            data.setdefault("end_nanos", _sub_micro_nanos(data.get("end")))
        return data

    @field_validator("start")
    @classmethod
    def _normalize_start(cls, value: datetime) -> datetime:
        return as_utc(value)

    @field_validator("end")
    @classmethod
    def _normalize_end(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None or value.year == LEGACY_ZERO_YEAR:
            return None
        return as_utc(value)

    @field_serializer("start", when_used="json")
    def _dump_start(self, value: datetime) -> str:
        return format_instant(value, self.start_nanos)

    @field_serializer("end", when_used="json")
    def _dump_end(self, value: Optional[datetime]) -> Optional[str]:
        if value is None:
            return None
        return format_instant(value, self.end_nanos)

    @property
    def is_open(self) -> bool:
        return self.end is None

    def duration(self, now: datetime) -> timedelta:
        """
        Length of the session.

        Closed sessions report their recorded length; open ones the time
        elapsed up to ``now``.
        """
        if self.end is None:
            return now - self.start
        return self.end - self.start

    def duration_nanos(self, now: datetime) -> int:
        """Like duration(), to the nanosecond"""
        if self.end is None:
            return to_nanos(now - self.start) - self.start_nanos
        return to_nanos(self.end - self.start) + self.end_nanos - self.start_nanos


class Project(BaseModel):
    """
    Represents a trackable project.

    ``total_nanos`` only covers closed sessions. It is increased when a session
    is stopped and is stored alongside the logs rather than derived from them.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    logs: List[LogEntry] = Field(default_factory=list)
    total_nanos: int = Field(default=0, alias="totalTime")

    @model_validator(mode="before")
    @classmethod
    def _total_from_timedelta(cls, data):
        if isinstance(data, dict) and "total_time" in data:
            data = dict(data)
            data["totalTime"] = to_nanos(data.pop("total_time"))
        return data

    @field_validator("logs", mode="before")
    @classmethod
    def _null_logs(cls, value):
        return [] if value is None else value

    @property
    def total_time(self) -> timedelta:
        return from_nanos(self.total_nanos)

    @property
    def open_entry(self) -> Optional[LogEntry]:
        """The running session, if any. Only the last entry can be open."""
        if self.logs and self.logs[-1].is_open:
            return self.logs[-1]
        return None

    @property
    def is_active(self) -> bool:
        return is_active(self)


class TrackerData(BaseModel):
    """
    The full snapshot of every tracked project, in creation order.
    """
    projects: List[Project] = Field(default_factory=list)

    @field_validator("projects", mode="before")
    @classmethod
    def _null_projects(cls, value):
        return [] if value is None else value

    @model_validator(mode="after")
    def _unique_names(self) -> "TrackerData":
        seen = set()
        for project in self.projects:
            if project.name in seen:
                raise ValueError(f"duplicate project name: {project.name!r}")
            seen.add(project.name)
        return self

    def find(self, name: str) -> Optional[Project]:
        """Look a project up by its exact (case-sensitive) name"""
        for project in self.projects:
            if project.name == name:
                return project
        return None

    def names(self) -> List[str]:
        return [p.name for p in self.projects]


def is_active(project: Project) -> bool:
    """A project is active iff its last log entry has no end."""
    return bool(project.logs) and project.logs[-1].end is None
