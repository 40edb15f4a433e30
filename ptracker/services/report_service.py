"""
Report Service - Read-side statistics rendered with Jinja2 templates.

Architecture Decision: Template Pattern
The numbers are computed into plain models first; the text tables are
produced by templates, so the layout can change without touching the maths.

Nothing here mutates the snapshot. Time spent in a running session is
derived from ``now`` on every call and never stored.
"""

import datetime
from pathlib import Path
from typing import List, Optional
from jinja2 import Environment, FileSystemLoader
from pydantic import BaseModel

from ptracker.domain.models import Project, TrackerData, as_utc
from ptracker.utils import get_resource_path


class ReportRow(BaseModel):
    """One project's line in the summary report"""
    name: str
    sessions: int
    total: datetime.timedelta
    percent: float


class Report(BaseModel):
    rows: List[ReportRow]
    grand_total: datetime.timedelta


class EntryStat(BaseModel):
    """One session in a project's stats view; ``end`` is None while it is open"""
    index: int
    start: datetime.datetime
    end: Optional[datetime.datetime] = None
    duration: datetime.timedelta

    @property
    def is_open(self) -> bool:
        return self.end is None


class ActiveSession(BaseModel):
    name: str
    started: datetime.datetime
    elapsed: datetime.timedelta


def effective_total(project: Project, now: datetime.datetime) -> datetime.timedelta:
    """Closed-session total plus the live length of the open session, if any"""
    total = project.total_time
    entry = project.open_entry
    if entry is not None:
        total += as_utc(now) - entry.start
    return total


class ReportService:
    """
    Computes per-project and aggregate statistics and renders them as text.
    """

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize the report service.

        Args:
            template_dir: Directory containing Jinja2 templates
        """
        if template_dir is None:
            template_dir = get_resource_path("resources/templates")

        self.template_dir = template_dir

        # Setup Jinja2 environment
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            trim_blocks=True,
            lstrip_blocks=True
        )

        # Add custom filters
        self.env.filters['minutes'] = self._format_minutes
        self.env.filters['timestamp'] = self._format_timestamp

    @staticmethod
    def _format_minutes(value: datetime.timedelta) -> float:
        """Duration as fractional minutes"""
        return value.total_seconds() / 60

    @staticmethod
    def _format_timestamp(dt: datetime.datetime, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
        """Format datetime object"""
        return dt.strftime(fmt)

    def effective_total(self, project: Project, now: datetime.datetime) -> datetime.timedelta:
        return effective_total(project, now)

    def build_report(self, tracker: TrackerData, now: datetime.datetime,
                     sort_by_total: bool = False) -> Report:
        """
        Summarize every project at ``now``.

        Percentages are each project's share of the grand total; they are all
        zero when nothing has been tracked yet.

        Args:
            tracker: The loaded snapshot
            now: Instant used for running sessions
            sort_by_total: Rank rows by total time instead of snapshot order
        """
        totals = [(p, effective_total(p, now)) for p in tracker.projects]
        grand_total = sum((t for _, t in totals), datetime.timedelta(0))

        rows = []
        for project, total in totals:
            percent = 0.0
            if grand_total > datetime.timedelta(0):
                percent = total / grand_total * 100
            rows.append(ReportRow(
                name=project.name,
                sessions=len(project.logs),
                total=total,
                percent=percent
            ))

        if sort_by_total:
            rows.sort(key=lambda r: r.total, reverse=True)

        return Report(rows=rows, grand_total=grand_total)

    def entry_stats(self, project: Project, now: datetime.datetime) -> List[EntryStat]:
        """
        Every session of a project in order, with 1-based indexes.

        Closed sessions keep their recorded length; the open one is measured
        up to ``now``.
        """
        now = as_utc(now)
        return [
            EntryStat(index=i, start=entry.start, end=entry.end, duration=entry.duration(now))
            for i, entry in enumerate(project.logs, start=1)
        ]

    def active_sessions(self, tracker: TrackerData, now: datetime.datetime) -> List[ActiveSession]:
        """Projects with a running session and how long it has been running"""
        now = as_utc(now)
        sessions = []
        for project in tracker.projects:
            entry = project.open_entry
            if entry is not None:
                started = entry.start
                sessions.append(ActiveSession(name=project.name, started=started, elapsed=now - started))
        return sessions

    def render_report(self, tracker: TrackerData, now: datetime.datetime,
                      sort_by_total: bool = False) -> str:
        report = self.build_report(tracker, now, sort_by_total=sort_by_total)
        return self._render("report.txt", report=report)

    def render_stats(self, project: Project, now: datetime.datetime,
                     timestamp_format: str = "%Y-%m-%d %H:%M:%S") -> str:
        return self._render(
            "stats.txt",
            project=project,
            entries=self.entry_stats(project, now),
            timestamp_format=timestamp_format
        )

    def render_status(self, tracker: TrackerData, now: datetime.datetime,
                      time_format: str = "%H:%M:%S") -> str:
        return self._render(
            "status.txt",
            sessions=self.active_sessions(tracker, now),
            time_format=time_format
        )

    def _render(self, template_name: str, **context) -> str:
        template = self.env.get_template(template_name)
        return template.render(**context).rstrip("\n")
