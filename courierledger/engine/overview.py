"""Mini README: Dashboard rollups built on the engine primitives.

Structure:
    * PendingValidation / pending_validations - admin work queue.
    * FleetDayOverview / summarise_fleet_day - operator dashboard tiles.
    * CourierDaySummary / summarise_courier_day - a courier's own day.

These helpers hold no state. Every call recomputes from the collections it
is given; callers refetch before each render.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from ..logging_utils import get_logger
from ..records import Article, Courier, Course, DailyPayment, Expense, ExpenseStatus, StoredShortage
from ..session import SessionContext
from .aggregation import calculate_daily_financials, courses_for_day, merge_day_payments, payments_for_day
from .constants import DEFAULT_CONSTANTS, LedgerConstants
from .shortages import ShortageExposure, detect_shortages, total_shortage_exposure
from .valuation import calculate_delivered_value, is_course_completed

LOGGER = get_logger(__name__)


class ValidationKind(str, Enum):
    """Reason a course waits for an admin."""

    SHIPMENT = "shipment_validation"
    ARTICLE_RETURN = "article_return"


@dataclass(frozen=True, slots=True)
class PendingValidation:
    course: Course
    kind: ValidationKind
    outstanding_articles: Tuple[Article, ...] = ()

    def as_dict(self) -> Dict[str, object]:
        return {
            "course_id": self.course.course_id,
            "courier_id": self.course.courier_id,
            "date": self.course.date.isoformat(),
            "kind": self.kind.value,
            "outstanding_articles": [
                {"article_id": article.article_id, "name": article.name, "value": article.line_value}
                for article in self.outstanding_articles
            ],
        }


def pending_validations(courses: Iterable[Course]) -> List[PendingValidation]:
    """List completed shipments awaiting validation and deliveries awaiting returns."""

    pending: List[PendingValidation] = []
    for course in courses:
        if course.shipment is not None:
            if course.completed and not course.shipment.validated:
                pending.append(PendingValidation(course=course, kind=ValidationKind.SHIPMENT))
            continue
        outstanding = tuple(article for article in course.articles if article.is_outstanding)
        if outstanding:
            pending.append(
                PendingValidation(
                    course=course,
                    kind=ValidationKind.ARTICLE_RETURN,
                    outstanding_articles=outstanding,
                )
            )
    return pending


@dataclass(frozen=True, slots=True)
class FleetDayOverview:
    """Operator dashboard figures for one date."""

    date: date
    active_couriers: int
    completed_courses: int
    payments_received: float
    shortages: ShortageExposure

    def as_dict(self) -> Dict[str, object]:
        return {
            "date": self.date.isoformat(),
            "active_couriers": self.active_couriers,
            "completed_courses": self.completed_courses,
            "payments_received": self.payments_received,
            "shortages": self.shortages.as_dict(),
        }


def summarise_fleet_day(
    on_date: date,
    couriers: Iterable[Courier],
    courses: Iterable[Course],
    expenses: Iterable[Expense],
    payments: Iterable[DailyPayment],
    stored_shortages: Iterable[StoredShortage],
    *,
    currency: str = "XOF",
) -> FleetDayOverview:
    """Aggregate the fleet's day, adding today's detected shortages to the stored trail.

    Detection covers every courier with records on the date, active or not, so
    a deactivated courier still holding failed articles stays in the exposure.
    """

    courses = list(courses)
    expenses = list(expenses)
    payments = list(payments)
    stored = list(stored_shortages)
    active = [courier for courier in couriers if courier.active]
    working = sorted(
        {record.courier_id for record in (*courses, *expenses, *payments) if record.date == on_date}
    )

    detected = []
    for courier_id in working:
        detected.extend(
            detect_shortages(
                courier_id,
                on_date,
                courses,
                merge_day_payments(courier_id, on_date, payments),
                expenses,
                currency=currency,
            )
        )

    overview = FleetDayOverview(
        date=on_date,
        active_couriers=len(active),
        completed_courses=sum(
            1 for course in courses if course.date == on_date and is_course_completed(course)
        ),
        payments_received=sum(payment.amount for payment in payments if payment.date == on_date),
        shortages=total_shortage_exposure(stored, detected),
    )
    LOGGER.debug(
        "Fleet overview date=%s couriers=%s courses=%s shortages=%s",
        on_date.isoformat(),
        overview.active_couriers,
        overview.completed_courses,
        overview.shortages.total,
    )
    return overview


@dataclass(frozen=True, slots=True)
class CourierDaySummary:
    """What a courier sees about their own day."""

    courier_id: str
    date: date
    completed_courses: int
    delivered_revenue: float
    amount_to_remit: float
    amount_remitted: float
    pending_expenses: int
    shortages: ShortageExposure

    def as_dict(self) -> Dict[str, object]:
        return {
            "courier_id": self.courier_id,
            "date": self.date.isoformat(),
            "completed_courses": self.completed_courses,
            "delivered_revenue": self.delivered_revenue,
            "amount_to_remit": self.amount_to_remit,
            "amount_remitted": self.amount_remitted,
            "pending_expenses": self.pending_expenses,
            "shortages": self.shortages.as_dict(),
        }


def summarise_courier_day(
    session: SessionContext,
    on_date: date,
    courses: Iterable[Course],
    expenses: Iterable[Expense],
    payments: Iterable[DailyPayment],
    stored_shortages: Iterable[StoredShortage],
    *,
    courier_id: Optional[str] = None,
    constants: LedgerConstants = DEFAULT_CONSTANTS,
    currency: str = "XOF",
) -> CourierDaySummary:
    """Summarise one courier's day for the given session."""

    courier = session.resolve_courier(courier_id)
    courses = list(courses)
    expenses = list(expenses)
    payments = list(payments)
    stored = [shortage for shortage in stored_shortages if shortage.courier_id == courier]

    completed = [course for course in courses_for_day(courier, on_date, courses) if is_course_completed(course)]
    financials = calculate_daily_financials(courier, on_date, courses, expenses, payments, constants)
    detected = detect_shortages(
        courier,
        on_date,
        courses,
        merge_day_payments(courier, on_date, payments),
        expenses,
        currency=currency,
    )

    return CourierDaySummary(
        courier_id=courier,
        date=on_date,
        completed_courses=len(completed),
        delivered_revenue=sum(calculate_delivered_value(course, constants) for course in completed),
        amount_to_remit=financials.amount_to_remit,
        amount_remitted=sum(payment.amount for payment in payments_for_day(courier, on_date, payments)),
        pending_expenses=sum(
            1
            for expense in expenses
            if expense.courier_id == courier and expense.status is ExpenseStatus.PENDING
        ),
        shortages=total_shortage_exposure(stored, detected),
    )
