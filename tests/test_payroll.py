"""Mini README: Tests for pay-period salary computation.

Structure:
    * working days - distinct dates, not course counts.
    * base salary - the working-day gate and the course-count tiers.
    * shortages - only stored rows in range for the courier are deducted.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from typing import List

import pytest

from courierledger.engine import DEFAULT_CONSTANTS, calculate_monthly_salary
from courierledger.records import (
    Article,
    ArticleStatus,
    Course,
    CourseType,
    Delivery,
    DetectedShortage,
    Shipment,
    ShortageKind,
    StoredShortage,
)

START = date(2024, 5, 1)
END = date(2024, 5, 31)


def _shipment(course_id: str, on: date, *, courier_id: str = "l1", completed: bool = True) -> Course:
    return Course(
        course_id=course_id,
        course_type=CourseType.SHIPMENT,
        courier_id=courier_id,
        date=on,
        completed=completed,
        shipment=Shipment(destination_city="San-Pédro", shipment_fee=500.0),
    )


def _schedule(days: int, per_day: int) -> List[Course]:
    return [
        _shipment(f"c{day}-{index}", START + timedelta(days=day))
        for day in range(days)
        for index in range(per_day)
    ]


def test_working_days_count_distinct_dates() -> None:
    """Three courses on one date are one working day."""

    courses = [_shipment(f"c{index}", date(2024, 5, 4)) for index in range(3)]

    salary = calculate_monthly_salary("l1", START, END, courses, [])

    assert salary.working_days == 1
    assert salary.total_courses == 3
    assert salary.base_salary == 0
    assert salary.commissions == pytest.approx(450.0)


def test_base_salary_forfeited_below_day_gate() -> None:
    """24 days and 600 courses: no base salary, commissions still paid."""

    salary = calculate_monthly_salary("l1", START, END, _schedule(24, 25), [])

    assert salary.working_days == 24
    assert salary.total_courses == 600
    assert salary.base_salary == 0
    assert salary.commissions == pytest.approx(600 * DEFAULT_CONSTANTS.commission_per_course)
    assert salary.net_salary == pytest.approx(90000.0)


def test_high_tier_above_course_threshold() -> None:
    salary = calculate_monthly_salary("l1", START, END, _schedule(25, 21), [])

    assert salary.total_courses == 525
    assert salary.base_salary == pytest.approx(50000.0)
    assert salary.net_salary == pytest.approx(50000.0 + 525 * 150.0)


def test_low_tier_at_threshold() -> None:
    """Exactly the threshold stays on the low tier."""

    salary = calculate_monthly_salary("l1", START, END, _schedule(25, 20), [])

    assert salary.total_courses == 500
    assert salary.base_salary == pytest.approx(25000.0)


def test_only_completed_courses_in_range_count() -> None:
    failed_delivery = Course(
        course_id="d1",
        course_type=CourseType.DELIVERY,
        courier_id="l1",
        date=date(2024, 5, 2),
        completed=True,
        delivery=Delivery(
            contact_name="Ama",
            neighborhood="Marcory",
            delivery_fee=200.0,
            articles=(Article("a1", "Robe", 6000.0, 1, ArticleStatus.NOT_DELIVERED),),
        ),
    )
    courses = [
        _shipment("in", date(2024, 5, 31)),
        _shipment("before", date(2024, 4, 30)),
        _shipment("after", date(2024, 6, 1)),
        _shipment("open", date(2024, 5, 5), completed=False),
        _shipment("other", date(2024, 5, 5), courier_id="l2"),
        failed_delivery,
    ]

    salary = calculate_monthly_salary("l1", START, END, courses, [])

    assert salary.total_courses == 1
    assert salary.working_days == 1


def test_stored_shortages_reduce_net_and_may_turn_it_negative() -> None:
    shortages = [
        StoredShortage("m1", "l1", ShortageKind.PAYMENT_SHORTAGE, 5000.0, "Manque de paiement: 5000 XOF", date(2024, 5, 6)),
        StoredShortage("m2", "l1", ShortageKind.UNVALIDATED_EXPENSE, 300.0, "Dépense non validée: Parking", date(2024, 6, 2)),
        StoredShortage("m3", "l2", ShortageKind.PAYMENT_SHORTAGE, 800.0, "Manque de paiement: 800 XOF", date(2024, 5, 6)),
    ]
    courses = [_shipment("c1", date(2024, 5, 6))]

    salary = calculate_monthly_salary("l1", START, END, courses, shortages)

    assert salary.total_shortages == pytest.approx(5000.0)
    assert salary.net_salary == pytest.approx(150.0 - 5000.0)


def test_payroll_refuses_detected_shortages() -> None:
    detected = DetectedShortage("l1", ShortageKind.PAYMENT_SHORTAGE, 100.0, "Manque", date(2024, 5, 6))

    with pytest.raises(TypeError):
        calculate_monthly_salary("l1", START, END, [], [detected])  # type: ignore[list-item]


def test_thresholds_are_overridable() -> None:
    constants = replace(
        DEFAULT_CONSTANTS,
        working_days_for_salary=2,
        courses_threshold=3,
        base_salary_high=70000.0,
        commission_per_course=200.0,
    )

    salary = calculate_monthly_salary("l1", START, END, _schedule(2, 2), [], constants)

    assert salary.base_salary == pytest.approx(70000.0)
    assert salary.commissions == pytest.approx(800.0)


def test_inverted_period_is_rejected() -> None:
    with pytest.raises(ValueError):
        calculate_monthly_salary("l1", END, START, [], [])
