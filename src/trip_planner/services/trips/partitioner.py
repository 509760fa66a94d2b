"""Eligibility filtering and capacity partitioning of a student roster."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ...models.domain import AllStudentsPool, PoolCriteria, RouteProfile, Student, YearGroupPool


@dataclass(slots=True)
class StudentGroup:
    """Students assigned to one vehicle run.

    ``address_counts`` keys students without a usable address under ``None``;
    a real address that happens to read like the display label stays routable.
    """

    members: List[Student]
    address_counts: Dict[Optional[str], int] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def unknown_count(self) -> int:
        return self.address_counts.get(None, 0)

    @property
    def pickup_addresses(self) -> List[str]:
        """Unique routable addresses in first-seen order."""
        return [address for address in self.address_counts if address is not None]


def filter_eligible(students: Sequence[Student], pool: PoolCriteria) -> list[Student]:
    if isinstance(pool, YearGroupPool):
        return [student for student in students if pool.admits(student)]
    if isinstance(pool, AllStudentsPool):
        return list(students)
    raise TypeError(f"Unsupported pool criteria: {type(pool).__name__}")


def group_by_address(students: Sequence[Student]) -> dict[Optional[str], list[Student]]:
    groups: dict[Optional[str], list[Student]] = {}
    for student in students:
        groups.setdefault(student.pickup_address, []).append(student)
    return groups


def partition_students(students: Sequence[Student], vehicle_capacity: int) -> list[StudentGroup]:
    """Slice ``students`` in roster order into chunks of at most ``vehicle_capacity``.

    This is a greedy fixed-size split. Geographic proximity is not considered.
    """
    if vehicle_capacity < 1:
        raise ValueError("Vehicle capacity must be at least 1.")

    groups: list[StudentGroup] = []
    for start in range(0, len(students), vehicle_capacity):
        members = list(students[start : start + vehicle_capacity])
        counts = {address: len(bucket) for address, bucket in group_by_address(members).items()}
        groups.append(StudentGroup(members=members, address_counts=counts))
    return groups


def partition(students: Sequence[Student], profile: RouteProfile, vehicle_capacity: int) -> list[StudentGroup]:
    """Filter ``students`` by the profile's pool, then split by capacity."""
    return partition_students(filter_eligible(students, profile.pool), vehicle_capacity)
