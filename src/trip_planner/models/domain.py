"""Domain models for roster, fleet and route profile records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union


@dataclass(slots=True)
class Student:
    """An enrolled student as seen by trip planning."""

    student_id: str
    school_id: Optional[str]
    year_group: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    address: Optional[str]
    raw: dict = field(default_factory=dict)

    @property
    def pickup_address(self) -> Optional[str]:
        """Trimmed home address, or None when nothing usable is recorded."""
        if self.address is None:
            return None
        cleaned = self.address.strip()
        return cleaned or None


@dataclass(slots=True)
class Vehicle:
    vehicle_id: str
    school_id: Optional[str]
    capacity: Optional[int]
    status: Optional[str]
    raw: dict = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class YearGroupPool:
    """Students whose year group is one of ``year_groups``."""

    year_groups: frozenset[str]

    def admits(self, student: Student) -> bool:
        return student.year_group is not None and str(student.year_group) in self.year_groups


@dataclass(frozen=True, slots=True)
class AllStudentsPool:
    """Every enrolled student is eligible."""

    def admits(self, student: Student) -> bool:
        return True


PoolCriteria = Union[YearGroupPool, AllStudentsPool]


def parse_pool_criteria(pool_type: Optional[str], criteria: Any) -> PoolCriteria:
    """Build the eligibility rule from a profile's pool type and criteria blob."""
    if pool_type == "year_group" and isinstance(criteria, dict):
        year_groups = criteria.get("year_groups")
        if isinstance(year_groups, (list, tuple, set)):
            return YearGroupPool(year_groups=frozenset(str(group) for group in year_groups))
    return AllStudentsPool()


@dataclass(slots=True)
class RouteProfile:
    """Recurring route template; read-only to the planner."""

    profile_id: str
    profile_name: str
    school_id: Optional[str]
    pool: PoolCriteria
    raw: dict = field(default_factory=dict)
