from .auth import LoginRequest, LoginResponse, SessionResponse
from .goat import GoatCreate, GoatForm, GoatResponse, GoatStatsResponse
from .feeding_log import FeedingLogCreate, FeedingLogForm, FeedingLogResponse
from .dashboard import (
    CalendarResponse,
    DashboardResponse,
    FeedingLogFormResponse,
    GoatFormResponse,
    GoatOut,
    GoatRowResponse,
    GoatTableResponse,
    StatCardResponse,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "SessionResponse",
    "GoatCreate",
    "GoatForm",
    "GoatResponse",
    "GoatStatsResponse",
    "FeedingLogCreate",
    "FeedingLogForm",
    "FeedingLogResponse",
    "CalendarResponse",
    "DashboardResponse",
    "FeedingLogFormResponse",
    "GoatFormResponse",
    "GoatOut",
    "GoatRowResponse",
    "GoatTableResponse",
    "StatCardResponse",
]
