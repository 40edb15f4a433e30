"""Services layer - Business logic"""

from .session_service import SessionService
from .report_service import ReportService, Report, ReportRow, EntryStat, ActiveSession, effective_total

__all__ = [
    "SessionService", "ReportService",
    "Report", "ReportRow", "EntryStat", "ActiveSession", "effective_total",
]
