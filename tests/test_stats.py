from decimal import Decimal

from taxi_manager.models import DayCount, DepartmentSpend, Employee, Trip
from taxi_manager.stats import compute_dashboard_stats, filter_employees, filter_trips


def make_trip(trip_id, amount, status="Approved", date="2023-10-24", employee_id="1", purpose="Meeting"):
    return Trip(
        id=trip_id,
        employee_id=employee_id,
        date=date,
        time="09:00",
        pickup="Office",
        dropoff="Airport",
        amount=Decimal(amount),
        currency="USD",
        status=status,
        purpose=purpose,
        category="Client Meeting",
    )


EMPLOYEES = [
    Employee("1", "Sarah Chen", "Sales", "sarah.c@company.com"),
    Employee("2", "James Wilson", "Engineering", "james.w@company.com"),
]


def test_dashboard_scenario():
    trips = [
        make_trip("a", "32.50", "Approved", "2023-10-24"),
        make_trip("b", "15.00", "Pending", "2023-10-24", employee_id="2"),
        make_trip("c", "45.00", "Approved", "2023-10-25"),
    ]

    stats = compute_dashboard_stats(trips, EMPLOYEES)

    assert stats.total_spend == Decimal("92.50")
    assert stats.total_trips == 3
    assert stats.pending_count == 1
    assert stats.trips_by_day == [DayCount("2023-10-24", 2), DayCount("2023-10-25", 1)]
    assert stats.approval_rate == Decimal("1.0000")


def test_empty_input_yields_zero_aggregates():
    stats = compute_dashboard_stats([], [])

    assert stats.total_spend == 0
    assert stats.total_trips == 0
    assert stats.pending_count == 0
    assert stats.spend_by_department == []
    assert stats.trips_by_day == []
    assert stats.approval_rate is None


def test_total_spend_is_order_independent():
    trips = [make_trip(str(i), amount) for i, amount in enumerate(["0.10", "0.20", "0.30", "19.99"])]

    forward = compute_dashboard_stats(trips, EMPLOYEES)
    backward = compute_dashboard_stats(list(reversed(trips)), EMPLOYEES)

    assert forward.total_spend == backward.total_spend == Decimal("20.59")


def test_pending_count_is_case_sensitive():
    trips = [make_trip("a", "1", "Pending"), make_trip("b", "1", "pending"), make_trip("c", "1", "PENDING")]

    assert compute_dashboard_stats(trips, EMPLOYEES).pending_count == 1


def test_unresolved_employees_are_bucketed_as_other():
    trips = [
        make_trip("a", "10.00", employee_id="1"),
        make_trip("b", "5.00", employee_id="2"),
        make_trip("c", "7.25", employee_id="deleted"),
        make_trip("d", "2.75", employee_id="also-missing"),
        make_trip("e", "3.00", employee_id="1"),
    ]

    stats = compute_dashboard_stats(trips, EMPLOYEES)

    by_name = {entry.name: entry.value for entry in stats.spend_by_department}
    assert by_name == {"Sales": Decimal("13.00"), "Engineering": Decimal("5.00"), "Other": Decimal("10.00")}


def test_trips_by_day_sorted_by_calendar_date():
    trips = [
        make_trip("a", "1", date="2024-01-02"),
        make_trip("b", "1", date="2023-12-31"),
        make_trip("c", "1", date="2024-01-02"),
        make_trip("d", "1", date="2023-02-10"),
    ]

    stats = compute_dashboard_stats(trips, EMPLOYEES)

    assert stats.trips_by_day == [
        DayCount("2023-02-10", 1),
        DayCount("2023-12-31", 1),
        DayCount("2024-01-02", 2),
    ]


def test_unparseable_dates_sort_last():
    trips = [make_trip("a", "1", date="someday"), make_trip("b", "1", date="2023-10-24")]

    stats = compute_dashboard_stats(trips, EMPLOYEES)

    assert [entry.date for entry in stats.trips_by_day] == ["2023-10-24", "someday"]


def test_aggregation_is_idempotent():
    trips = [make_trip("a", "3.10", date="2023-10-25"), make_trip("b", "4.20", "Rejected", employee_id="x")]

    first = compute_dashboard_stats(trips, EMPLOYEES)
    second = compute_dashboard_stats(trips, EMPLOYEES)

    assert first == second
    assert first.spend_by_department == [
        DepartmentSpend("Sales", Decimal("3.10")),
        DepartmentSpend("Other", Decimal("4.20")),
    ]
    assert first.approval_rate == Decimal("0.5000")


def test_filter_trips_by_status_and_search():
    trips = [
        make_trip("a", "1", "Pending", employee_id="1", purpose="Client lunch"),
        make_trip("b", "1", "Approved", employee_id="2", purpose="Commute"),
        make_trip("c", "1", "Pending", employee_id="gone", purpose="Airport run"),
    ]

    assert [t.id for t in filter_trips(trips, EMPLOYEES)] == ["a", "b", "c"]
    assert [t.id for t in filter_trips(trips, EMPLOYEES, status="Pending")] == ["a", "c"]
    assert [t.id for t in filter_trips(trips, EMPLOYEES, search="JAMES")] == ["b"]
    assert [t.id for t in filter_trips(trips, EMPLOYEES, status="Pending", search="airport")] == ["c"]


def test_filter_employees_matches_name_department_and_email():
    assert [e.id for e in filter_employees(EMPLOYEES, "sales")] == ["1"]
    assert [e.id for e in filter_employees(EMPLOYEES, "james.w@")] == ["2"]
    assert len(filter_employees(EMPLOYEES)) == 2


def test_empty_department_is_bucketed_as_other():
    employees = [Employee("1", "Nadia Park", "", "nadia.p@company.com")]

    stats = compute_dashboard_stats([make_trip("a", "5.00", employee_id="1")], employees)

    assert stats.spend_by_department == [DepartmentSpend("Other", Decimal("5.00"))]
