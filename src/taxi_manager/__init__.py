from .assist import INSIGHTS_FALLBACK, AssistClient, TripSuggestion, can_suggest
from .config import AssistConfig, load_config
from .models import (
    AppSettings,
    DashboardStats,
    DayCount,
    DepartmentSpend,
    Employee,
    Trip,
    TripDraft,
    User,
)
from .services import DashboardController, TripNotFoundError
from .stats import compute_dashboard_stats, filter_employees, filter_trips
from .storage import AppState, LocalStore

__all__ = [
    "INSIGHTS_FALLBACK",
    "AppSettings",
    "AppState",
    "AssistClient",
    "AssistConfig",
    "DashboardController",
    "DashboardStats",
    "DayCount",
    "DepartmentSpend",
    "Employee",
    "LocalStore",
    "Trip",
    "TripDraft",
    "TripNotFoundError",
    "TripSuggestion",
    "User",
    "can_suggest",
    "compute_dashboard_stats",
    "filter_employees",
    "filter_trips",
    "load_config",
]
