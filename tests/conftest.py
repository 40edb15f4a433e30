"""
Pytest configuration and fixtures.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
import pytest
from click.testing import CliRunner

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from ptracker.cli import AppContext
from ptracker.domain.models import TrackerData
from ptracker.infra.clock import FixedClock
from ptracker.infra.config import Settings
from ptracker.services.report_service import ReportService
from ptracker.services.session_service import SessionService


@pytest.fixture
def t0():
    """A fixed UTC instant to measure sessions from"""
    return datetime(2026, 1, 1, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(t0):
    return FixedClock(t0)


@pytest.fixture
def tracker():
    """An empty in-memory snapshot"""
    return TrackerData()


@pytest.fixture
def sessions():
    return SessionService()


@pytest.fixture
def reports():
    return ReportService()


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Settings pointing at a temporary data directory"""
    for var in ("PTRACKER_DATA_DIR", "PTRACKER_LOG_LEVEL", "PTRACKER_DATA_FILE_NAME"):
        monkeypatch.delenv(var, raising=False)
    return Settings(data_dir=tmp_path / "ptracker")


@pytest.fixture
def app(settings, clock):
    """CLI context wired to the temporary settings and the fixed clock"""
    return AppContext(settings=settings, clock=clock)


@pytest.fixture
def runner():
    return CliRunner()
