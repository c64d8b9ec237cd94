"""Mini README: Shortage detection and stored/detected bookkeeping.

Structure:
    * detect_shortages - live shortage candidates for a courier day.
    * unpersisted_shortages - detected shortages absent from the stored trail.
    * ShortageExposure / total_shortage_exposure - the one way to add both kinds.
    * find_shortage_for_returned_article - stored row cleared by a validated return.

Detection never writes anything. Callers decide when to persist a
``DetectedShortage`` (``DetectedShortage.persist``) and must total exposure
through ``total_shortage_exposure`` so a shortage already persisted today is
not counted a second time.

Rejected expenses produce no shortage: the courier absorbs that cost. Pending
expenses (neither validated nor rejected) are counted until an admin decides.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from ..logging_utils import get_logger
from ..records import (
    Article,
    Course,
    DailyPayment,
    DetectedShortage,
    Expense,
    ExpenseStatus,
    RecordValidationError,
    ShortageKind,
    StoredShortage,
)
from .aggregation import courses_for_day

LOGGER = get_logger(__name__)

UNRETURNED_ARTICLE_LABEL = "Article non livré et non retourné"
PAYMENT_SHORTAGE_LABEL = "Manque de paiement"
UNVALIDATED_EXPENSE_LABEL = "Dépense non validée"


def format_amount(amount: float) -> str:
    """Render an amount to cents, without decimals for whole values."""

    rounded = round(float(amount), 2)
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.2f}"


def detect_shortages(
    courier_id: str,
    on_date: date,
    courses: Iterable[Course],
    payment: Optional[DailyPayment],
    expenses: Iterable[Expense],
    *,
    currency: str = "XOF",
) -> List[DetectedShortage]:
    """Enumerate unpersisted shortages for one courier day."""

    detected: List[DetectedShortage] = []

    for course in courses_for_day(courier_id, on_date, courses):
        for article in course.articles:
            if article.is_outstanding:
                detected.append(
                    DetectedShortage(
                        courier_id=courier_id,
                        kind=ShortageKind.UNDELIVERED_NOT_RETURNED,
                        amount=article.line_value,
                        description=f"{UNRETURNED_ARTICLE_LABEL}: {article.name}",
                        date=on_date,
                    )
                )

    if payment is not None:
        if payment.courier_id != courier_id or payment.date != on_date:
            raise RecordValidationError(
                f"Payment {payment.payment_id} does not belong to courier {courier_id} on {on_date.isoformat()}"
            )
        if payment.amount < payment.expected_amount:
            deficit = payment.expected_amount - payment.amount
            detected.append(
                DetectedShortage(
                    courier_id=courier_id,
                    kind=ShortageKind.PAYMENT_SHORTAGE,
                    amount=deficit,
                    description=f"{PAYMENT_SHORTAGE_LABEL}: {format_amount(deficit)} {currency}",
                    date=on_date,
                )
            )

    for expense in expenses:
        if (
            expense.courier_id == courier_id
            and expense.date == on_date
            and expense.status is ExpenseStatus.PENDING
        ):
            detected.append(
                DetectedShortage(
                    courier_id=courier_id,
                    kind=ShortageKind.UNVALIDATED_EXPENSE,
                    amount=expense.amount,
                    description=f"{UNVALIDATED_EXPENSE_LABEL}: {expense.description}",
                    date=on_date,
                )
            )

    LOGGER.debug(
        "Detected %s shortages for courier=%s date=%s", len(detected), courier_id, on_date.isoformat()
    )
    return detected


def unpersisted_shortages(
    detected: Iterable[DetectedShortage], stored: Iterable[StoredShortage]
) -> List[DetectedShortage]:
    """Return detected shortages that have no stored counterpart yet.

    Each stored row absorbs at most one detected shortage, so two identical
    unreturned articles still need two stored rows.
    """

    remaining: List[StoredShortage] = list(stored)
    pending: List[DetectedShortage] = []
    for shortage in detected:
        for index, candidate in enumerate(remaining):
            if shortage.matches(candidate):
                del remaining[index]
                break
        else:
            pending.append(shortage)
    return pending


@dataclass(frozen=True, slots=True)
class ShortageExposure:
    """Stored and not-yet-persisted shortage totals kept side by side."""

    stored_total: float
    detected_total: float

    @property
    def total(self) -> float:
        return self.stored_total + self.detected_total

    def as_dict(self) -> Dict[str, float]:
        payload = asdict(self)
        payload["total"] = self.total
        return payload


def total_shortage_exposure(
    stored: Sequence[StoredShortage], detected: Iterable[DetectedShortage]
) -> ShortageExposure:
    """Sum stored shortages with the detected ones not already persisted."""

    for shortage in stored:
        if not isinstance(shortage, StoredShortage):
            raise TypeError(f"Expected StoredShortage, got {type(shortage).__name__}")
    fresh = unpersisted_shortages(detected, stored)
    return ShortageExposure(
        stored_total=sum(shortage.amount for shortage in stored),
        detected_total=sum(shortage.amount for shortage in fresh),
    )


def find_shortage_for_returned_article(
    stored: Iterable[StoredShortage], course: Course, article: Article
) -> Optional[StoredShortage]:
    """Locate the stored unreturned-article shortage an admin-validated return clears."""

    for shortage in stored:
        if (
            shortage.courier_id == course.courier_id
            and shortage.date == course.date
            and shortage.kind is ShortageKind.UNDELIVERED_NOT_RETURNED
            and shortage.description == f"{UNRETURNED_ARTICLE_LABEL}: {article.name}"
            and round(shortage.amount, 2) == round(article.line_value, 2)
        ):
            return shortage
    return None
