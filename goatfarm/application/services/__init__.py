from .session_service import SessionService
from .record_collection import RecordCollection
from .goat_service import GoatService
from .feeding_log_service import FeedingLogService
from .dashboard_views import (
    DashboardSummary,
    FeedingCalendarView,
    GoatTableView,
    load_dashboard_summary,
)

__all__ = [
    "SessionService",
    "RecordCollection",
    "GoatService",
    "FeedingLogService",
    "DashboardSummary",
    "FeedingCalendarView",
    "GoatTableView",
    "load_dashboard_summary",
]
