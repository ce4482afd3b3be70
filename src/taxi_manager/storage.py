from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

from taxi_manager.models import AppSettings, Employee, Trip, User

logger = logging.getLogger(__name__)

TRIPS_KEY = "tm_trips"
EMPLOYEES_KEY = "tm_employees"
SETTINGS_KEY = "tm_settings"
USER_KEY = "tm_user"

INITIAL_EMPLOYEES = [
    Employee("1", "Sarah Chen", "Sales", "sarah.c@company.com", "https://picsum.photos/seed/sarah/100/100"),
    Employee("2", "James Wilson", "Engineering", "james.w@company.com", "https://picsum.photos/seed/james/100/100"),
    Employee("3", "Elena Rodriguez", "Marketing", "elena.r@company.com", "https://picsum.photos/seed/elena/100/100"),
]

INITIAL_TRIPS = [
    Trip("101", "1", "2023-10-24", "09:00", "Downtown Office", "Client HQ - Tech Park", Decimal("32.50"), "USD",
         "Approved", "Q4 Strategy Meeting", "Client Meeting"),
    Trip("102", "2", "2023-10-24", "18:30", "Office", "Central Station", Decimal("15.00"), "USD",
         "Pending", "Evening Commute", "Office Commute"),
    Trip("103", "3", "2023-10-25", "11:15", "Airport Terminal 2", "Main Office", Decimal("45.00"), "USD",
         "Approved", "Return from Conference", "Event"),
]


@dataclass
class AppState:
    trips: list[Trip] = field(default_factory=list)
    employees: list[Employee] = field(default_factory=list)
    settings: AppSettings = field(default_factory=AppSettings)
    user: Optional[User] = None
    insights: Optional[str] = None


def _normalize_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    return value


def to_record(item: Any) -> dict[str, Any]:
    return {key: _normalize_value(value) for key, value in asdict(item).items()}


def trip_from_record(record: dict[str, Any]) -> Trip:
    return Trip(**{**record, "amount": Decimal(str(record["amount"]))})


def employee_from_record(record: dict[str, Any]) -> Employee:
    return Employee(**record)


def settings_from_record(record: dict[str, Any]) -> AppSettings:
    values = dict(record)
    if "monthly_budget" in values:
        values["monthly_budget"] = Decimal(str(values["monthly_budget"]))
    return AppSettings(**values)


def user_from_record(record: dict[str, Any]) -> User:
    return User(**record)


@dataclass
class LocalStore:
    """Per-profile key-value store: one JSON document per key under base_dir."""

    base_dir: Path

    def _path(self, key: str) -> Path:
        safe = re.sub(r"[^A-Za-z0-9_-]", "_", key)
        return self.base_dir / f"{safe}.json"

    def get_item(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    def set_item(self, key: str, value: Any) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps(value, indent=2), encoding="utf-8")
        tmp_path.replace(path)

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def load_state(self) -> AppState:
        trips = self.get_item(TRIPS_KEY)
        employees = self.get_item(EMPLOYEES_KEY)
        settings = self.get_item(SETTINGS_KEY)
        user = self.get_item(USER_KEY)
        logger.debug("Loaded profile from %s", self.base_dir)
        return AppState(
            trips=[trip_from_record(r) for r in trips] if trips is not None else list(INITIAL_TRIPS),
            employees=(
                [employee_from_record(r) for r in employees] if employees is not None else list(INITIAL_EMPLOYEES)
            ),
            settings=settings_from_record(settings) if settings is not None else AppSettings(),
            user=user_from_record(user) if user is not None else None,
        )

    def save_trips(self, trips: list[Trip]) -> None:
        self.set_item(TRIPS_KEY, [to_record(t) for t in trips])

    def save_employees(self, employees: list[Employee]) -> None:
        self.set_item(EMPLOYEES_KEY, [to_record(e) for e in employees])

    def save_settings(self, settings: AppSettings) -> None:
        self.set_item(SETTINGS_KEY, to_record(settings))

    def save_user(self, user: Optional[User]) -> None:
        if user is None:
            self.remove_item(USER_KEY)
        else:
            self.set_item(USER_KEY, to_record(user))
