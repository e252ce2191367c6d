"""Aggregation of time records into per-employee hour totals."""
from dataclasses import dataclass
from typing import Dict, Iterable, List

from .time_record import TimeRecord


@dataclass(frozen=True)
class EmployeeSummary:
    """Total hours worked by one employee across all eligible records."""

    employee_name: str
    total_hours: float


def is_eligible(record: TimeRecord) -> bool:
    """Check whether a record counts towards the totals.

    Args:
        record: Time record

    Returns:
        True if the record is not deleted and has a non-blank employee name
    """
    return not record.is_deleted and record.has_employee_name


def summarize(records: Iterable[TimeRecord]) -> List[EmployeeSummary]:
    """Group eligible records by employee and total their hours.

    Names are compared exactly (case-sensitive, untrimmed). The result is
    sorted by total hours, highest first; employees with equal totals keep
    the order in which they were first seen.

    Args:
        records: Time records in fetch order

    Returns:
        List of EmployeeSummary objects (empty for empty input)
    """
    totals: Dict[str, float] = {}
    for record in records:
        if not is_eligible(record):
            continue
        totals[record.employee_name] = totals.get(record.employee_name, 0.0) + record.duration_hours

    # dicts keep insertion order, so the index is the first-seen position
    ordered = sorted(enumerate(totals.items()), key=lambda item: (-item[1][1], item[0]))
    return [EmployeeSummary(name, hours) for _, (name, hours) in ordered]


def total_hours(summaries: Iterable[EmployeeSummary]) -> float:
    """Sum the hours of all summaries."""
    return sum(s.total_hours for s in summaries)
