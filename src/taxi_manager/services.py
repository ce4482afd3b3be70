from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Any, Optional
from uuid import uuid4

from taxi_manager.assist import AssistClient, can_suggest
from taxi_manager.auth import Authenticator, DemoAuthenticator
from taxi_manager.models import TRIP_STATUSES, DashboardStats, Employee, Trip, TripDraft, TripStatus, User
from taxi_manager.stats import compute_dashboard_stats
from taxi_manager.storage import AppState, LocalStore

logger = logging.getLogger(__name__)

NO_INSIGHTS_MESSAGE = "No data available for insights."


class TripNotFoundError(KeyError):
    """Raised when a status change targets a trip that does not exist."""


def new_id() -> str:
    return uuid4().hex[:9]


def _apply_changes(item: Any, changes: dict[str, Any]) -> Any:
    known = {f.name for f in fields(item)}
    for field_name in changes:
        if field_name not in known:
            raise AttributeError(f"Unknown field: {field_name}")
    return replace(item, **changes)


class DashboardController:
    """
    Owns the application state and is the only place it is mutated.

    Every named operation saves the keys it touched, so the local profile always
    reflects the last completed mutation.
    """

    def __init__(
        self,
        store: LocalStore,
        assist: Optional[AssistClient] = None,
        authenticator: Optional[Authenticator] = None,
    ) -> None:
        self.store = store
        self.assist = assist or AssistClient()
        self.authenticator = authenticator or DemoAuthenticator()
        self.state: AppState = store.load_state()

    # Session

    def login(self, email: str, password: str) -> User:
        user = self.authenticator.authenticate(email, password)
        self.state.user = user
        self.store.save_user(user)
        logger.info("Signed in as %s", user.email)
        return user

    def logout(self) -> None:
        self.state.user = None
        self.store.save_user(None)

    def update_profile(self, **changes: Any) -> User:
        if self.state.user is None:
            raise ValueError("No user is signed in")
        self.state.user = _apply_changes(self.state.user, changes)
        self.store.save_user(self.state.user)
        return self.state.user

    # Trips

    def add_trip(self, trip: Trip) -> Trip:
        self.state.trips = [trip, *self.state.trips]
        self.store.save_trips(self.state.trips)
        return trip

    def submit_draft(self, draft: TripDraft) -> Trip:
        trip = Trip(
            id=new_id(),
            employee_id=draft.employee_id,
            date=draft.date,
            time=draft.time,
            pickup=draft.pickup,
            dropoff=draft.dropoff,
            amount=draft.amount,
            currency=self.state.settings.currency,
            status="Pending",
            purpose=draft.purpose,
            category=draft.category,
        )
        return self.add_trip(trip)

    def set_status(self, trip_id: str, status: TripStatus) -> Trip:
        if status not in TRIP_STATUSES:
            raise ValueError(f"Invalid trip status: {status!r}")
        for index, trip in enumerate(self.state.trips):
            if trip.id == trip_id:
                updated = replace(trip, status=status)
                trips = list(self.state.trips)
                trips[index] = updated
                self.state.trips = trips
                self.store.save_trips(trips)
                return updated
        raise TripNotFoundError(trip_id)

    # Employees

    def add_employee(self, employee: Employee) -> Employee:
        self.state.employees = [*self.state.employees, employee]
        self.store.save_employees(self.state.employees)
        return employee

    def add_placeholder_employee(self) -> Employee:
        employee_id = new_id()
        return self.add_employee(
            Employee(
                id=employee_id,
                name="New Employee",
                department="General",
                email="new.emp@company.com",
                avatar=f"https://picsum.photos/seed/{employee_id}/100/100",
            )
        )

    def update_employee(self, employee_id: str, **changes: Any) -> Employee:
        for index, employee in enumerate(self.state.employees):
            if employee.id == employee_id:
                updated = _apply_changes(employee, changes)
                employees = list(self.state.employees)
                employees[index] = updated
                self.state.employees = employees
                self.store.save_employees(employees)
                return updated
        raise KeyError(employee_id)

    def delete_employee(self, employee_id: str) -> None:
        # Trips keep their employee_id; the stats bucket them as "Other".
        self.state.employees = [e for e in self.state.employees if e.id != employee_id]
        self.store.save_employees(self.state.employees)

    # Settings

    def update_settings(self, **changes: Any) -> None:
        self.state.settings = _apply_changes(self.state.settings, changes)
        self.store.save_settings(self.state.settings)

    # Dashboard

    def stats(self) -> DashboardStats:
        return compute_dashboard_stats(self.state.trips, self.state.employees)

    async def refresh_insights(self) -> str:
        insights = await self.assist.generate_insights(self.state.trips)
        self.state.insights = insights or NO_INSIGHTS_MESSAGE
        return self.state.insights

    async def ensure_insights(self) -> Optional[str]:
        if self.state.settings.auto_ai and self.state.trips and not self.state.insights:
            return await self.refresh_insights()
        return self.state.insights

    async def suggest_for_draft(self, draft: TripDraft) -> TripDraft:
        if not can_suggest(draft.pickup, draft.dropoff):
            logger.info("Enter pickup and dropoff locations before requesting a suggestion")
            return draft
        suggestion = await self.assist.suggest_trip_details(draft.pickup, draft.dropoff)
        if suggestion is None:
            return draft
        return replace(draft, purpose=suggestion.purpose, category=suggestion.category)
