from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal, Optional

TripStatus = Literal["Pending", "Approved", "Rejected"]
TripCategory = Literal["Client Meeting", "Office Commute", "Event", "Other"]

TRIP_STATUSES: tuple[str, ...] = ("Pending", "Approved", "Rejected")
TRIP_CATEGORIES: tuple[str, ...] = ("Client Meeting", "Office Commute", "Event", "Other")
UNASSIGNED_DEPARTMENT = "Other"


@dataclass(frozen=True)
class Employee:
    id: str
    name: str
    department: str
    email: str
    avatar: Optional[str] = None


@dataclass(frozen=True)
class Trip:
    id: str
    employee_id: str
    date: str
    time: str
    pickup: str
    dropoff: str
    amount: Decimal
    currency: str
    status: TripStatus
    purpose: str
    category: TripCategory


@dataclass(frozen=True)
class TripDraft:
    """Editable trip form; becomes a Trip once submitted."""

    employee_id: str
    date: str
    time: str = "09:00"
    pickup: str = ""
    dropoff: str = ""
    amount: Decimal = Decimal("0")
    purpose: str = ""
    category: TripCategory = "Client Meeting"


@dataclass(frozen=True)
class DepartmentSpend:
    name: str
    value: Decimal


@dataclass(frozen=True)
class DayCount:
    date: str
    count: int


@dataclass(frozen=True)
class DashboardStats:
    total_spend: Decimal
    total_trips: int
    pending_count: int
    spend_by_department: list[DepartmentSpend] = field(default_factory=list)
    trips_by_day: list[DayCount] = field(default_factory=list)
    approval_rate: Optional[Decimal] = None


@dataclass(frozen=True)
class AppSettings:
    currency: str = "USD"
    auto_ai: bool = True
    dark_mode: bool = False
    company_name: str = "Acme Corp"
    monthly_budget: Decimal = Decimal("5000")


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    role: str
    avatar: Optional[str] = None
