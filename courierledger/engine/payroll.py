"""Mini README: Pay-period salary computation.

Structure:
    * SalaryBreakdown - every figure printed on a payroll slip.
    * calculate_monthly_salary - roll completed courses and stored shortages
      into a net salary for a date range (both ends inclusive).

Working days count distinct dates with at least one completed course. The
base salary is forfeited entirely below ``working_days_for_salary``;
commissions are paid regardless. Shortages come from the stored audit trail
only, never from live detection.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Dict, Iterable

from ..logging_utils import get_logger
from ..records import Course, StoredShortage
from .constants import DEFAULT_CONSTANTS, LedgerConstants
from .valuation import is_course_completed

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SalaryBreakdown:
    """Salary figures for one courier over one pay period."""

    working_days: int
    total_courses: int
    base_salary: float
    commissions: float
    total_shortages: float
    net_salary: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def calculate_base_salary(
    working_days: int, total_courses: int, constants: LedgerConstants = DEFAULT_CONSTANTS
) -> float:
    """Apply the working-day gate and the course-count tier."""

    if working_days < constants.working_days_for_salary:
        return 0.0
    if total_courses > constants.courses_threshold:
        return constants.base_salary_high
    return constants.base_salary_low


def calculate_monthly_salary(
    courier_id: str,
    start_date: date,
    end_date: date,
    courses: Iterable[Course],
    stored_shortages: Iterable[StoredShortage],
    constants: LedgerConstants = DEFAULT_CONSTANTS,
) -> SalaryBreakdown:
    """Compute the salary owed to a courier for ``start_date``..``end_date``."""

    if start_date > end_date:
        raise ValueError(
            f"Period start {start_date.isoformat()} is after its end {end_date.isoformat()}"
        )

    relevant_courses = [
        course
        for course in courses
        if course.courier_id == courier_id
        and start_date <= course.date <= end_date
        and is_course_completed(course)
    ]
    working_days = len({course.date for course in relevant_courses})
    total_courses = len(relevant_courses)

    base_salary = calculate_base_salary(working_days, total_courses, constants)
    commissions = total_courses * constants.commission_per_course

    total_shortages = 0.0
    for shortage in stored_shortages:
        if not isinstance(shortage, StoredShortage):
            raise TypeError(
                f"Payroll only accepts stored shortages, got {type(shortage).__name__}"
            )
        if shortage.courier_id == courier_id and start_date <= shortage.date <= end_date:
            total_shortages += shortage.amount

    salary = SalaryBreakdown(
        working_days=working_days,
        total_courses=total_courses,
        base_salary=base_salary,
        commissions=commissions,
        total_shortages=total_shortages,
        net_salary=base_salary + commissions - total_shortages,
    )
    LOGGER.debug(
        "Salary courier=%s period=%s..%s days=%s courses=%s net=%s",
        courier_id,
        start_date.isoformat(),
        end_date.isoformat(),
        working_days,
        total_courses,
        salary.net_salary,
    )
    return salary
