"""Mini README: Daily financial aggregation for one courier.

Structure:
    * DailyFinancials - headline figures for a courier day.
    * courses_for_day / payments_for_day - the shared day filters.
    * merge_day_payments - fold several declarations into one for detection.
    * calculate_daily_financials - received, delivered, expenses, remittance,
      payments and shortages.
    * calculate_expected_payment - the remittance snapshot taken when an
      admin declares a payment.
    * declare_payment - build a DailyPayment carrying that snapshot.

Remittance is computed one way everywhere: delivered value minus validated
expenses, validated shipment fees and the fixed daily cost, floored at zero.
Dashboards, courier summaries and payment declarations all go through
``calculate_daily_financials`` so the figure cannot drift between screens.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional

from ..logging_utils import get_logger
from ..records import Course, DailyPayment, Expense, ExpenseStatus, RecordValidationError
from .constants import DEFAULT_CONSTANTS, LedgerConstants
from .valuation import (
    calculate_articles_received_value,
    calculate_delivered_value,
    calculate_unreturned_value,
    calculate_validated_shipment_fees,
    is_course_completed,
)

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class DailyFinancials:
    """Headline money figures for one courier on one date."""

    total_received: float
    total_delivered: float
    total_validated_expenses: float
    amount_to_remit: float
    amount_remitted: float
    payment_shortage: float
    article_shortage: float
    total_shortage: float
    course_count: int

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def courses_for_day(courier_id: str, on_date: date, courses: Iterable[Course]) -> List[Course]:
    """Return the courier's courses scheduled on ``on_date``."""

    return [course for course in courses if course.courier_id == courier_id and course.date == on_date]


def payments_for_day(
    courier_id: str, on_date: date, payments: Iterable[DailyPayment]
) -> List[DailyPayment]:
    return [payment for payment in payments if payment.courier_id == courier_id and payment.date == on_date]


def merge_day_payments(
    courier_id: str, on_date: date, payments: Iterable[DailyPayment]
) -> Optional[DailyPayment]:
    """Fold a day's payments into one record, or ``None`` when nothing was paid.

    Amounts are summed; the expected amount is the snapshot of the latest
    declaration, which saw the most complete records.
    """

    day_payments = payments_for_day(courier_id, on_date, payments)
    if not day_payments:
        return None
    if len(day_payments) == 1:
        return day_payments[0]
    return DailyPayment(
        payment_id="+".join(payment.payment_id for payment in day_payments),
        courier_id=courier_id,
        date=on_date,
        amount=sum(payment.amount for payment in day_payments),
        expected_amount=day_payments[-1].expected_amount,
    )


def calculate_daily_financials(
    courier_id: str,
    on_date: date,
    courses: Iterable[Course],
    expenses: Iterable[Expense],
    payments: Iterable[DailyPayment],
    constants: LedgerConstants = DEFAULT_CONSTANTS,
) -> DailyFinancials:
    """Aggregate a courier's day into remittance and shortage figures."""

    day_courses = courses_for_day(courier_id, on_date, courses)

    total_received = sum(calculate_articles_received_value(course) for course in day_courses)
    total_delivered = sum(calculate_delivered_value(course, constants) for course in day_courses)

    validated_expenses = sum(
        expense.amount
        for expense in expenses
        if expense.courier_id == courier_id
        and expense.date == on_date
        and expense.status is ExpenseStatus.VALIDATED
    )
    shipment_fees = calculate_validated_shipment_fees(day_courses)
    total_validated_expenses = validated_expenses + shipment_fees + constants.fixed_daily_cost

    amount_to_remit = max(0.0, total_delivered - total_validated_expenses)
    amount_remitted = sum(payment.amount for payment in payments_for_day(courier_id, on_date, payments))

    # Surplus payments are not reported as negative shortages.
    payment_shortage = max(0.0, amount_to_remit - amount_remitted)
    article_shortage = sum(calculate_unreturned_value(course) for course in day_courses)

    financials = DailyFinancials(
        total_received=total_received,
        total_delivered=total_delivered,
        total_validated_expenses=total_validated_expenses,
        amount_to_remit=amount_to_remit,
        amount_remitted=amount_remitted,
        payment_shortage=payment_shortage,
        article_shortage=article_shortage,
        total_shortage=payment_shortage + article_shortage,
        course_count=sum(1 for course in day_courses if is_course_completed(course)),
    )
    LOGGER.debug(
        "Daily financials courier=%s date=%s delivered=%s remit=%s shortage=%s",
        courier_id,
        on_date.isoformat(),
        financials.total_delivered,
        financials.amount_to_remit,
        financials.total_shortage,
    )
    return financials


def calculate_expected_payment(
    courier_id: str,
    on_date: date,
    courses: Iterable[Course],
    expenses: Iterable[Expense],
    constants: LedgerConstants = DEFAULT_CONSTANTS,
) -> float:
    """Return the amount the courier must remit for the day."""

    return calculate_daily_financials(courier_id, on_date, courses, expenses, (), constants).amount_to_remit


def declare_payment(
    payment_id: str,
    courier_id: str,
    on_date: date,
    amount: float,
    courses: Iterable[Course],
    expenses: Iterable[Expense],
    constants: LedgerConstants = DEFAULT_CONSTANTS,
) -> DailyPayment:
    """Record cash handed over, snapshotting the remittance due at declaration time."""

    if amount <= 0:
        raise RecordValidationError("A declared payment must be greater than zero")
    expected_amount = calculate_expected_payment(courier_id, on_date, courses, expenses, constants)
    LOGGER.info(
        "Declared payment %s courier=%s date=%s amount=%s expected=%s",
        payment_id,
        courier_id,
        on_date.isoformat(),
        amount,
        expected_amount,
    )
    return DailyPayment(
        payment_id=payment_id,
        courier_id=courier_id,
        date=on_date,
        amount=amount,
        expected_amount=expected_amount,
    )
