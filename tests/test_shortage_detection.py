"""Mini README: Tests for live shortage detection and stored/detected totals.

Structure:
    * detection - unreturned articles, payment deficits and pending expenses.
    * exposure - stored and detected shortages add up without double counting.
    * returns - an admin-validated return finds the stored row it clears.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List

import pytest

from courierledger.engine import (
    calculate_daily_financials,
    calculate_monthly_salary,
    detect_shortages,
    find_shortage_for_returned_article,
    format_amount,
    total_shortage_exposure,
    unpersisted_shortages,
)
from courierledger.records import (
    Article,
    ArticleStatus,
    Course,
    CourseType,
    DailyPayment,
    Delivery,
    Expense,
    RecordValidationError,
    ShortageKind,
    StoredShortage,
)

DAY = date(2024, 5, 10)


def _failed_delivery() -> Course:
    return Course(
        course_id="c1",
        course_type=CourseType.DELIVERY,
        courier_id="l1",
        date=DAY,
        delivery=Delivery(
            contact_name="Koffi",
            neighborhood="Yopougon",
            delivery_fee=300.0,
            articles=(
                Article("a1", "Chaussures", 1000.0, 2, ArticleStatus.NOT_DELIVERED, reason="Client absent"),
                Article("a2", "Sac", 500.0, 1, ArticleStatus.NOT_DELIVERED),
            ),
        ),
    )


def _expenses() -> List[Expense]:
    return [
        Expense("e1", "l1", DAY, 1500.0, "Carburant"),
        Expense("e2", "l1", DAY, 400.0, "Repas", rejected_reason="Hors politique", rejected_at=datetime(2024, 5, 10, 19)),
        Expense("e3", "l1", DAY, 900.0, "Vidange", validated=True),
        Expense("e4", "l2", DAY, 700.0, "Carburant"),
    ]


def test_failed_articles_become_unreturned_shortages() -> None:
    """Each undelivered, unreturned article yields one entry worth price times quantity."""

    detected = detect_shortages("l1", DAY, [_failed_delivery()], None, [])

    assert [shortage.kind for shortage in detected] == [ShortageKind.UNDELIVERED_NOT_RETURNED] * 2
    assert [shortage.amount for shortage in detected] == [pytest.approx(2000.0), pytest.approx(500.0)]
    assert sum(shortage.amount for shortage in detected) == pytest.approx(
        calculate_daily_financials("l1", DAY, [_failed_delivery()], [], []).article_shortage
    )
    assert detected[0].description == "Article non livré et non retourné: Chaussures"


def test_payment_deficit_is_reported_against_snapshot() -> None:
    payment = DailyPayment("p1", "l1", DAY, 3000.0, 5000.0)

    detected = detect_shortages("l1", DAY, [], payment, [])

    assert len(detected) == 1
    assert detected[0].kind is ShortageKind.PAYMENT_SHORTAGE
    assert detected[0].amount == pytest.approx(2000.0)
    assert detected[0].description == "Manque de paiement: 2000 XOF"


def test_full_or_surplus_payment_yields_no_shortage() -> None:
    assert detect_shortages("l1", DAY, [], DailyPayment("p1", "l1", DAY, 6000.0, 5000.0), []) == []
    assert detect_shortages("l1", DAY, [], DailyPayment("p1", "l1", DAY, 5000.0, 5000.0), []) == []


def test_only_pending_expenses_are_shortages() -> None:
    """Validated and rejected expenses are settled; pending ones stay a liability."""

    detected = detect_shortages("l1", DAY, [], None, _expenses())

    assert len(detected) == 1
    assert detected[0].kind is ShortageKind.UNVALIDATED_EXPENSE
    assert detected[0].amount == pytest.approx(1500.0)
    assert detected[0].description == "Dépense non validée: Carburant"


def test_payment_for_another_day_is_rejected() -> None:
    with pytest.raises(RecordValidationError):
        detect_shortages("l1", DAY, [], DailyPayment("p1", "l1", date(2024, 5, 9), 10.0, 20.0), [])


def test_detection_does_not_mutate_inputs() -> None:
    courses = [_failed_delivery()]
    expenses = _expenses()

    first = detect_shortages("l1", DAY, courses, None, expenses)
    second = detect_shortages("l1", DAY, courses, None, expenses)

    assert first == second
    assert courses == [_failed_delivery()]


def test_exposure_does_not_double_count_persisted_shortages() -> None:
    detected = detect_shortages("l1", DAY, [_failed_delivery()], None, _expenses())
    stored = [detected[0].persist("m1")]

    exposure = total_shortage_exposure(stored, detected)

    assert exposure.stored_total == pytest.approx(2000.0)
    assert exposure.detected_total == pytest.approx(500.0 + 1500.0)
    assert exposure.total == pytest.approx(4000.0)
    assert len(unpersisted_shortages(detected, stored)) == 2


def test_identical_detections_need_one_stored_row_each() -> None:
    course = _failed_delivery()
    twin = Course(
        course_id="c2",
        course_type=CourseType.DELIVERY,
        courier_id="l1",
        date=DAY,
        delivery=course.delivery,
    )
    detected = detect_shortages("l1", DAY, [course, twin], None, [])
    stored = [detected[0].persist("m1")]

    assert len(unpersisted_shortages(detected, stored)) == 3


def test_exposure_rejects_detected_shortages_as_stored() -> None:
    detected = detect_shortages("l1", DAY, [_failed_delivery()], None, [])

    with pytest.raises(TypeError):
        total_shortage_exposure(detected, [])  # type: ignore[arg-type]


def test_dashboard_exposure_matches_report_after_persisting() -> None:
    """Live plus stored today equals the period report once today is persisted."""

    history = [
        StoredShortage("m0", "l1", ShortageKind.PAYMENT_SHORTAGE, 1200.0, "Manque de paiement: 1200 XOF", date(2024, 5, 3))
    ]
    detected = detect_shortages(
        "l1", DAY, [_failed_delivery()], DailyPayment("p1", "l1", DAY, 100.0, 600.0), _expenses()
    )
    dashboard_total = total_shortage_exposure(history, detected).total

    persisted = history + [shortage.persist(f"m{index + 1}") for index, shortage in enumerate(detected)]
    salary = calculate_monthly_salary("l1", date(2024, 5, 1), date(2024, 5, 31), [], persisted)

    assert salary.total_shortages == pytest.approx(dashboard_total)
    assert total_shortage_exposure(persisted, detected).total == pytest.approx(dashboard_total)


def test_returned_article_finds_its_stored_shortage() -> None:
    course = _failed_delivery()
    stored = [shortage.persist(f"m{index}") for index, shortage in enumerate(
        detect_shortages("l1", DAY, [course], None, [])
    )]

    match = find_shortage_for_returned_article(stored, course, course.articles[1])

    assert match is not None
    assert match.shortage_id == "m1"
    assert "Sac" in match.description


def test_returned_article_without_stored_shortage() -> None:
    course = _failed_delivery()

    assert find_shortage_for_returned_article([], course, course.articles[0]) is None


def test_returned_article_ignores_shortages_of_similarly_named_articles() -> None:
    course = Course(
        course_id="c9",
        course_type=CourseType.DELIVERY,
        courier_id="l1",
        date=DAY,
        delivery=Delivery(
            contact_name="Awa",
            neighborhood="Cocody",
            delivery_fee=0.0,
            articles=(
                Article("a1", "Sacoche", 9000.0, 1, ArticleStatus.NOT_DELIVERED),
                Article("a2", "Sac", 500.0, 1, ArticleStatus.NOT_DELIVERED),
            ),
        ),
    )
    stored = [shortage.persist(f"m{index}") for index, shortage in enumerate(
        detect_shortages("l1", DAY, [course], None, [])
    )]

    match = find_shortage_for_returned_article(stored, course, course.articles[1])

    assert match is not None
    assert match.shortage_id == "m1"
    assert match.amount == pytest.approx(500.0)


def test_returned_article_requires_matching_amount() -> None:
    course = _failed_delivery()
    stored = [
        StoredShortage("m1", "l1", ShortageKind.UNDELIVERED_NOT_RETURNED, 800.0, "Article non livré et non retourné: Sac", DAY)
    ]

    assert find_shortage_for_returned_article(stored, course, course.articles[1]) is None


@pytest.mark.parametrize(
    ("amount", "expected"),
    [(2800.0, "2800"), (0.1 + 0.2, "0.30"), (1234.5, "1234.50"), (99.999, "100")],
)
def test_format_amount_rounds_to_cents(amount: float, expected: str) -> None:
    assert format_amount(amount) == expected


def test_payment_shortage_description_has_no_float_noise() -> None:
    payment = DailyPayment("p1", "l1", DAY, 0.1, 0.4)

    detected = detect_shortages("l1", DAY, [], payment, [])

    assert detected[0].description == "Manque de paiement: 0.30 XOF"
