import pytest

from trip_planner.models.domain import (
    AllStudentsPool,
    RouteProfile,
    Student,
    YearGroupPool,
    parse_pool_criteria,
)
from trip_planner.services.trips.partitioner import (
    filter_eligible,
    group_by_address,
    partition,
    partition_students,
)


def _student(sid: str, address: str | None = None, year_group: str | None = "7") -> Student:
    return Student(
        student_id=sid,
        school_id="SCH1",
        year_group=year_group,
        first_name="First",
        last_name=f"Last {sid}",
        address=address,
        raw={"id": sid},
    )


def _profile(pool) -> RouteProfile:
    return RouteProfile(profile_id="P1", profile_name="Morning North", school_id="SCH1", pool=pool)


@pytest.mark.parametrize("capacity", [1, 2, 3, 7, 10, 40])
def test_partition_covers_every_student_once_within_capacity(capacity: int):
    students = [_student(f"S{i}", address=f"{i % 4} Elm Road") for i in range(10)]

    groups = partition_students(students, capacity)

    placed = [member.student_id for group in groups for member in group.members]
    assert placed == [student.student_id for student in students]
    assert len(set(placed)) == len(placed)
    assert all(group.size <= capacity for group in groups)
    assert len(groups) == -(-len(students) // capacity)


def test_partition_keeps_roster_order_and_smaller_last_chunk():
    students = [_student(f"S{i}") for i in range(5)]

    groups = partition_students(students, 2)

    assert [[m.student_id for m in group.members] for group in groups] == [["S0", "S1"], ["S2", "S3"], ["S4"]]


def test_address_counts_per_chunk():
    students = [
        _student("S1", "1 Elm Road"),
        _student("S2", "2 Oak Road"),
        _student("S3", "1 Elm Road"),
        _student("S4", None),
        _student("S5", "   "),
    ]

    [group] = partition_students(students, 10)

    assert group.address_counts == {"1 Elm Road": 2, "2 Oak Road": 1, None: 2}
    assert group.unknown_count == 2
    assert group.pickup_addresses == ["1 Elm Road", "2 Oak Road"]


def test_address_matching_the_unknown_label_is_still_routable():
    students = [_student("S1", "Unknown Address"), _student("S2", "B"), _student("S3", None)]

    [group] = partition_students(students, 10)

    assert group.pickup_addresses == ["Unknown Address", "B"]
    assert group.address_counts == {"Unknown Address": 1, "B": 1, None: 1}


def test_unknown_address_students_still_fill_seats():
    students = [_student("S1", None), _student("S2", None), _student("S3", "1 Elm Road")]

    groups = partition_students(students, 2)

    assert [group.size for group in groups] == [2, 1]
    assert groups[0].pickup_addresses == []
    assert groups[1].pickup_addresses == ["1 Elm Road"]


def test_empty_roster_yields_no_groups():
    assert partition_students([], 40) == []


def test_capacity_below_one_is_rejected():
    with pytest.raises(ValueError):
        partition_students([_student("S1")], 0)


def test_year_group_pool_filters_students():
    students = [_student("S1", year_group="7"), _student("S2", year_group="8"), _student("S3", year_group=None)]

    eligible = filter_eligible(students, YearGroupPool(year_groups=frozenset({"7"})))

    assert [student.student_id for student in eligible] == ["S1"]


def test_all_students_pool_keeps_everyone():
    students = [_student("S1", year_group="7"), _student("S2", year_group=None)]

    assert filter_eligible(students, AllStudentsPool()) == students


def test_unknown_pool_variant_is_rejected():
    with pytest.raises(TypeError):
        filter_eligible([_student("S1")], object())


def test_partition_applies_profile_pool_before_slicing():
    students = [_student(f"S{i}", year_group="7" if i % 2 else "9") for i in range(6)]
    profile = _profile(YearGroupPool(year_groups=frozenset({"7"})))

    groups = partition(students, profile, 2)

    assert [[m.student_id for m in group.members] for group in groups] == [["S1", "S3"], ["S5"]]


@pytest.mark.parametrize(
    ("pool_type", "criteria", "expected"),
    [
        ("year_group", {"year_groups": ["7", 8]}, YearGroupPool(year_groups=frozenset({"7", "8"}))),
        ("year_group", {}, AllStudentsPool()),
        ("year_group", None, AllStudentsPool()),
        ("all_students", {"year_groups": ["7"]}, AllStudentsPool()),
        (None, None, AllStudentsPool()),
    ],
)
def test_parse_pool_criteria(pool_type, criteria, expected):
    assert parse_pool_criteria(pool_type, criteria) == expected


def test_group_by_address_preserves_first_seen_order():
    students = [_student("S1", "B Street"), _student("S2", "A Street"), _student("S3", "B Street")]

    groups = group_by_address(students)

    assert list(groups) == ["B Street", "A Street"]
    assert [s.student_id for s in groups["B Street"]] == ["S1", "S3"]
