from datetime import time

import pytest

from trip_planner.errors import InvalidScheduleError, TripRecordError
from trip_planner.schemas.trips import TripSuggestionModel
from trip_planner.services.trips import scheduling


def _trip(name: str, start: str, end: str | None, trip_id: str = "T") -> dict:
    return {"id": trip_id, "trip_name": name, "scheduled_start_time": start, "scheduled_end_time": end}


@pytest.fixture
def existing(monkeypatch: pytest.MonkeyPatch):
    calls: list[tuple] = []

    def _install(trips):
        def fake_fetch(school_id, resource_type, resource_id, exclude_trip_id=None):
            calls.append((school_id, resource_type, resource_id, exclude_trip_id))
            return trips

        monkeypatch.setattr(scheduling, "fetch_active_trips", fake_fetch)
        return calls

    return _install


@pytest.mark.parametrize(
    ("start", "end"),
    [
        ("07:30", "08:30"),  # starts inside
        ("06:30", "07:15"),  # ends inside
        ("06:00", "09:00"),  # encloses
        ("07:00", "08:00"),  # identical
    ],
)
def test_overlapping_window_is_a_conflict(existing, start, end):
    existing([_trip("Morning North - Trip 1", "07:00:00", "08:00:00")])

    result = scheduling.check_resource_conflicts("SCH1", "driver", "D1", start, end)

    assert result.has_conflict is True
    assert result.conflict_type == "driver"
    assert result.conflicting_trip == "Morning North - Trip 1"
    assert result.message == 'Driver is already assigned to "Morning North - Trip 1" during 07:00:00 - 08:00:00'


@pytest.mark.parametrize(("start", "end"), [("08:00", "09:00"), ("06:00", "07:00")])
def test_touching_windows_do_not_conflict(existing, start, end):
    existing([_trip("Morning", "07:00", "08:00")])

    result = scheduling.check_resource_conflicts("SCH1", "vehicle", "V1", start, end)

    assert result.has_conflict is False
    assert result.message is None


def test_trip_without_end_time_is_treated_as_instant(existing):
    existing([_trip("Early", "07:00", None)])

    assert scheduling.check_resource_conflicts("SCH1", "attender", "A1", "07:00", "07:30").has_conflict
    assert not scheduling.check_resource_conflicts("SCH1", "attender", "A1", "07:01", "07:30").has_conflict


def test_lookup_arguments_are_forwarded(existing):
    calls = existing([])

    scheduling.check_resource_conflicts("SCH1", "vehicle", "V9", "07:00", "08:00", exclude_trip_id="T42")

    assert calls == [("SCH1", "vehicle", "V9", "T42")]


def test_end_before_start_is_rejected(existing):
    existing([])

    with pytest.raises(InvalidScheduleError):
        scheduling.check_resource_conflicts("SCH1", "driver", "D1", "09:00", "08:00")


def test_unreadable_stored_schedule_is_a_record_error(existing):
    existing([_trip("Morning", "seven", "08:00", trip_id="T7")])

    with pytest.raises(TripRecordError) as excinfo:
        scheduling.check_resource_conflicts("SCH1", "driver", "D1", "07:00", "08:00")
    assert "T7" in str(excinfo.value)


def test_parse_clock_accepts_minutes_and_seconds():
    assert scheduling.parse_clock("07:05") == time(7, 5)
    assert scheduling.parse_clock("17:45:30") == time(17, 45, 30)
    with pytest.raises(InvalidScheduleError):
        scheduling.parse_clock("quarter past")


def _suggestion(number: int, count: int) -> TripSuggestionModel:
    return TripSuggestionModel(
        trip_number=number,
        trip_name=f"Morning North - Trip {number}",
        student_count=count,
        stops=1,
        students=[f"S{i}" for i in range(count)],
    )


def test_create_trips_builds_one_row_per_suggestion(monkeypatch: pytest.MonkeyPatch):
    inserted: list[list[dict]] = []

    def fake_insert(rows):
        inserted.append(list(rows))
        return [{**row, "id": f"trip-{idx}"} for idx, row in enumerate(rows)]

    monkeypatch.setattr(scheduling, "insert_trips", fake_insert)

    created = scheduling.create_trips_from_suggestions(
        [_suggestion(1, 40), _suggestion(2, 12)],
        profile_id="P1",
        school_id="SCH1",
        trip_type="dropoff",
        start_time="15:30",
    )

    assert [row["id"] for row in created] == ["trip-0", "trip-1"]
    [rows] = inserted
    assert [row["trip_code"] for row in rows] == ["T01", "T02"]
    assert rows[1] == {
        "school_id": "SCH1",
        "route_profile_id": "P1",
        "trip_name": "Morning North - Trip 2",
        "trip_code": "T02",
        "trip_type": "dropoff",
        "scheduled_start_time": "15:30",
        "estimated_duration_minutes": 60,
        "vehicle_capacity": None,
        "assigned_students_count": 12,
        "status": "active",
    }


def test_create_trips_rejects_bad_start_time(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(scheduling, "insert_trips", lambda rows: pytest.fail("insert should not run"))

    with pytest.raises(InvalidScheduleError):
        scheduling.create_trips_from_suggestions([_suggestion(1, 3)], "P1", "SCH1", start_time="7am")
