"""
Tests for the session state machine.
"""

from datetime import timedelta

import pytest

from ptracker.domain.errors import (
    AlreadyActiveError,
    InvalidProjectNameError,
    NotActiveError,
    ProjectExistsError,
    ProjectNotFoundError,
)
from ptracker.domain.models import is_active


class TestCreateDelete:

    def test_create_adds_idle_project(self, tracker, sessions):
        project = sessions.create(tracker, "alpha")
        assert tracker.names() == ["alpha"]
        assert project.logs == []
        assert project.total_time == timedelta(0)
        assert not is_active(project)

    def test_create_existing_name_fails(self, tracker, sessions):
        sessions.create(tracker, "alpha")
        with pytest.raises(ProjectExistsError):
            sessions.create(tracker, "alpha")
        assert tracker.names() == ["alpha"]

    def test_names_differing_in_case_are_distinct(self, tracker, sessions):
        sessions.create(tracker, "alpha")
        sessions.create(tracker, "Alpha")
        assert tracker.names() == ["alpha", "Alpha"]

    @pytest.mark.parametrize("name", ["", "   "])
    def test_create_blank_name_fails(self, tracker, sessions, name):
        with pytest.raises(InvalidProjectNameError):
            sessions.create(tracker, name)
        assert tracker.projects == []

    def test_delete_removes_project_and_logs(self, tracker, sessions, t0):
        sessions.create(tracker, "alpha")
        sessions.create(tracker, "beta")
        sessions.start(tracker, "alpha", t0)

        removed = sessions.delete(tracker, "alpha")

        assert removed.name == "alpha"
        assert len(removed.logs) == 1
        assert tracker.names() == ["beta"]

    def test_delete_unknown_project_fails(self, tracker, sessions):
        with pytest.raises(ProjectNotFoundError):
            sessions.delete(tracker, "ghost")


class TestStart:

    def test_start_opens_session(self, tracker, sessions, t0):
        sessions.create(tracker, "alpha")
        entry = sessions.start(tracker, "alpha", t0)

        project = tracker.find("alpha")
        assert project.logs == [entry]
        assert entry.start == t0
        assert entry.end is None
        assert is_active(project)
        assert project.total_time == timedelta(0)

    def test_start_twice_signals_already_active(self, tracker, sessions, t0):
        sessions.create(tracker, "alpha")
        sessions.start(tracker, "alpha", t0)

        with pytest.raises(AlreadyActiveError):
            sessions.start(tracker, "alpha", t0 + timedelta(seconds=5))

        assert len(tracker.find("alpha").logs) == 1

    def test_start_unknown_project(self, tracker, sessions, t0):
        with pytest.raises(ProjectNotFoundError):
            sessions.start(tracker, "ghost", t0)

    def test_several_projects_can_be_active(self, tracker, sessions, t0):
        for name in ("alpha", "beta", "gamma"):
            sessions.create(tracker, name)
            sessions.start(tracker, name, t0)
        assert all(is_active(p) for p in tracker.projects)


class TestStop:

    def test_start_stop_scenario(self, tracker, sessions, t0):
        sessions.create(tracker, "alpha")
        sessions.start(tracker, "alpha", t0)

        duration = sessions.stop(tracker, "alpha", t0 + timedelta(seconds=90))

        project = tracker.find("alpha")
        assert duration == timedelta(seconds=90)
        assert project.total_time == timedelta(seconds=90)
        assert len(project.logs) == 1
        assert project.logs[0].end == t0 + timedelta(seconds=90)
        assert not is_active(project)

    def test_two_sessions_accumulate(self, tracker, sessions, t0):
        sessions.create(tracker, "alpha")
        sessions.create(tracker, "beta")

        sessions.start(tracker, "alpha", t0)
        sessions.start(tracker, "beta", t0 + timedelta(seconds=10))
        sessions.stop(tracker, "alpha", t0 + timedelta(seconds=30))
        sessions.start(tracker, "alpha", t0 + timedelta(seconds=100))
        sessions.stop(tracker, "beta", t0 + timedelta(seconds=110))
        sessions.stop(tracker, "alpha", t0 + timedelta(seconds=145))

        alpha = tracker.find("alpha")
        assert len(alpha.logs) == 2
        assert all(entry.end is not None for entry in alpha.logs)
        assert alpha.total_time == timedelta(seconds=30 + 45)
        assert tracker.find("beta").total_time == timedelta(seconds=100)

    def test_stop_without_start_signals_not_active(self, tracker, sessions, t0):
        sessions.create(tracker, "alpha")
        with pytest.raises(NotActiveError):
            sessions.stop(tracker, "alpha", t0)

        project = tracker.find("alpha")
        assert project.logs == []
        assert project.total_time == timedelta(0)

    def test_stop_after_closed_session_signals_not_active(self, tracker, sessions, t0):
        sessions.create(tracker, "alpha")
        sessions.start(tracker, "alpha", t0)
        sessions.stop(tracker, "alpha", t0 + timedelta(seconds=60))
        before = tracker.model_copy(deep=True)

        with pytest.raises(NotActiveError):
            sessions.stop(tracker, "alpha", t0 + timedelta(seconds=120))

        assert tracker == before

    def test_stop_unknown_project(self, tracker, sessions, t0):
        with pytest.raises(ProjectNotFoundError):
            sessions.stop(tracker, "ghost", t0)

    def test_zero_length_session_is_valid(self, tracker, sessions, t0):
        sessions.create(tracker, "alpha")
        sessions.start(tracker, "alpha", t0)
        assert sessions.stop(tracker, "alpha", t0) == timedelta(0)
        assert not is_active(tracker.find("alpha"))

    def test_backward_clock_records_negative_length(self, tracker, sessions, t0):
        sessions.create(tracker, "alpha")
        sessions.start(tracker, "alpha", t0)

        duration = sessions.stop(tracker, "alpha", t0 - timedelta(seconds=20))

        assert duration == timedelta(seconds=-20)
        assert tracker.find("alpha").total_time == timedelta(seconds=-20)

    def test_total_matches_closed_entries(self, tracker, sessions, t0):
        sessions.create(tracker, "alpha")
        now = t0
        for length in (5, 0, 42, 3600):
            sessions.start(tracker, "alpha", now)
            now += timedelta(seconds=length)
            sessions.stop(tracker, "alpha", now)
            now += timedelta(seconds=7)
        sessions.start(tracker, "alpha", now)

        project = tracker.find("alpha")
        closed = sum((e.end - e.start for e in project.logs if e.end is not None), timedelta(0))
        assert project.total_time == closed
