"""Mini README: Validated record types consumed by the ledger engine.

Structure:
    * RecordValidationError - raised when a record is malformed.
    * ArticleStatus / CourseType / ShortageKind / ExpenseStatus - enumerations.
    * Courier, Article, Delivery, Shipment, Course - fleet and job records.
    * Expense, DailyPayment, StoredShortage - money movement records.

Records are frozen dataclasses checked on construction, so the engine only
ever sees well-formed input: a course carries exactly the payload matching its
type, amounts are never negative, quantities are at least one and dates are
real ``date`` objects. State changes (validating an expense, acknowledging a
returned article) return new records instead of mutating in place.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Optional, Tuple


class RecordValidationError(ValueError):
    """Raised when a ledger record is malformed."""


class ArticleStatus(str, Enum):
    """Delivery outcome of a single article."""

    DELIVERED = "delivered"
    NOT_DELIVERED = "not_delivered"

    @classmethod
    def from_str(cls, value: str) -> "ArticleStatus":
        """Coerce arbitrary casing into a valid article status."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise RecordValidationError(f"Unsupported article status: {value}") from error


class CourseType(str, Enum):
    """Course variants. Values match the stored ``type`` field."""

    DELIVERY = "livraison"
    SHIPMENT = "expedition"

    @classmethod
    def from_str(cls, value: str) -> "CourseType":
        """Coerce arbitrary casing into a valid course type."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise RecordValidationError(f"Unsupported course type: {value}") from error


class ShortageKind(str, Enum):
    """Categories of monetary deficiency attributable to a courier."""

    UNDELIVERED_NOT_RETURNED = "undelivered_not_returned"
    PAYMENT_SHORTAGE = "payment_shortage"
    UNVALIDATED_EXPENSE = "unvalidated_expense"

    @classmethod
    def from_str(cls, value: str) -> "ShortageKind":
        """Coerce arbitrary casing into a valid shortage kind."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise RecordValidationError(f"Unsupported shortage type: {value}") from error


class ExpenseStatus(str, Enum):
    """Approval state of an expense."""

    PENDING = "pending"
    VALIDATED = "validated"
    REJECTED = "rejected"


def _require_non_negative(value: float, label: str) -> None:
    if value < 0:
        raise RecordValidationError(f"{label} must not be negative (got {value})")


def _require_date(value: object, label: str) -> None:
    if not isinstance(value, date) or isinstance(value, datetime):
        raise RecordValidationError(f"{label} must be a calendar date (got {value!r})")


@dataclass(frozen=True, slots=True)
class Courier:
    """A delivery agent. Read-only for the engine."""

    courier_id: str
    name: str
    phone: str = ""
    active: bool = True
    created_at: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class Article:
    """A priced item handed to the courier as part of a delivery."""

    article_id: str
    name: str
    price: float
    quantity: int = 1
    status: ArticleStatus = ArticleStatus.NOT_DELIVERED
    reason: Optional[str] = None
    returned_to_admin: bool = False
    return_validated_by: Optional[str] = None
    return_validated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        _require_non_negative(self.price, f"Price of article {self.article_id}")
        if self.quantity < 1:
            raise RecordValidationError(
                f"Quantity of article {self.article_id} must be at least 1 (got {self.quantity})"
            )
        if not isinstance(self.status, ArticleStatus):
            raise RecordValidationError(f"Unsupported article status: {self.status}")

    @property
    def line_value(self) -> float:
        """Price multiplied by quantity."""

        return self.price * self.quantity

    @property
    def is_delivered(self) -> bool:
        return self.status is ArticleStatus.DELIVERED

    @property
    def is_outstanding(self) -> bool:
        """Failed delivery still held by the courier (not yet returned)."""

        return self.status is ArticleStatus.NOT_DELIVERED and not self.returned_to_admin

    def mark_returned(self, validated_by: str, validated_at: datetime) -> "Article":
        """Return a copy acknowledging the article came back to the admin."""

        if self.is_delivered:
            raise RecordValidationError(
                f"Article {self.article_id} was delivered and cannot be returned"
            )
        return replace(
            self,
            returned_to_admin=True,
            return_validated_by=validated_by,
            return_validated_at=validated_at,
        )


@dataclass(frozen=True, slots=True)
class Delivery:
    """Payload of a delivery course."""

    contact_name: str
    neighborhood: str
    delivery_fee: float
    articles: Tuple[Article, ...] = ()
    contact_phone: str = ""

    def __post_init__(self) -> None:
        _require_non_negative(self.delivery_fee, "Delivery fee")


@dataclass(frozen=True, slots=True)
class Shipment:
    """Payload of a shipment course."""

    destination_city: str
    shipment_fee: float
    validated: bool = False
    contact_name: str = ""
    contact_phone: str = ""

    def __post_init__(self) -> None:
        _require_non_negative(self.shipment_fee, "Shipment fee")


@dataclass(frozen=True, slots=True)
class Course:
    """One job assigned to one courier on one calendar date.

    ``completed`` is the flag stored by the courier workflow. It can be stale
    for deliveries; use ``engine.is_course_completed`` wherever it matters.
    """

    course_id: str
    course_type: CourseType
    courier_id: str
    date: date
    completed: bool = False
    delivery: Optional[Delivery] = None
    shipment: Optional[Shipment] = None

    def __post_init__(self) -> None:
        _require_date(self.date, f"Date of course {self.course_id}")
        if self.course_type is CourseType.DELIVERY:
            if self.delivery is None or self.shipment is not None:
                raise RecordValidationError(
                    f"Course {self.course_id} is a delivery and must carry only a delivery payload"
                )
        elif self.course_type is CourseType.SHIPMENT:
            if self.shipment is None or self.delivery is not None:
                raise RecordValidationError(
                    f"Course {self.course_id} is a shipment and must carry only a shipment payload"
                )
        else:
            raise RecordValidationError(f"Unsupported course type: {self.course_type}")

    @property
    def articles(self) -> Tuple[Article, ...]:
        """Articles of a delivery; empty for shipments."""

        return self.delivery.articles if self.delivery is not None else ()

    def with_articles(self, articles: Tuple[Article, ...]) -> "Course":
        """Return a copy of a delivery course with its articles replaced."""

        if self.delivery is None:
            raise RecordValidationError(f"Course {self.course_id} has no articles")
        return replace(self, delivery=replace(self.delivery, articles=tuple(articles)))


@dataclass(frozen=True, slots=True)
class Expense:
    """Reimbursable cost submitted by a courier for a date.

    Approving an expense after a rejection can leave the old reason on the
    stored row; ``validated`` takes precedence.
    """

    expense_id: str
    courier_id: str
    date: date
    amount: float
    description: str = ""
    validated: bool = False
    rejected_reason: Optional[str] = None
    rejected_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        _require_date(self.date, f"Date of expense {self.expense_id}")
        _require_non_negative(self.amount, f"Amount of expense {self.expense_id}")

    @property
    def status(self) -> ExpenseStatus:
        if self.validated:
            return ExpenseStatus.VALIDATED
        if self.rejected_reason:
            return ExpenseStatus.REJECTED
        return ExpenseStatus.PENDING

    def validate(self) -> "Expense":
        """Return an approved copy, clearing any earlier rejection."""

        return replace(self, validated=True, rejected_reason=None, rejected_at=None)

    def reject(self, reason: str, rejected_at: datetime) -> "Expense":
        """Return a rejected copy carrying the reason and timestamp."""

        if not reason or not reason.strip():
            raise RecordValidationError("A rejection reason is required")
        return replace(self, validated=False, rejected_reason=reason.strip(), rejected_at=rejected_at)


@dataclass(frozen=True, slots=True)
class DailyPayment:
    """Cash handed over by a courier for one date.

    ``expected_amount`` is the remittance figure snapshotted when the payment
    was declared. It is historical and never recomputed.
    """

    payment_id: str
    courier_id: str
    date: date
    amount: float
    expected_amount: float = 0.0

    def __post_init__(self) -> None:
        _require_date(self.date, f"Date of payment {self.payment_id}")
        _require_non_negative(self.amount, f"Amount of payment {self.payment_id}")
        _require_non_negative(self.expected_amount, f"Expected amount of payment {self.payment_id}")


@dataclass(frozen=True, slots=True)
class StoredShortage:
    """A persisted shortage row, part of the audit trail."""

    shortage_id: str
    courier_id: str
    kind: ShortageKind
    amount: float
    description: str
    date: date

    def __post_init__(self) -> None:
        _require_date(self.date, f"Date of shortage {self.shortage_id}")
        _require_non_negative(self.amount, f"Amount of shortage {self.shortage_id}")
        if not isinstance(self.kind, ShortageKind):
            raise RecordValidationError(f"Unsupported shortage type: {self.kind}")


@dataclass(frozen=True, slots=True)
class DetectedShortage:
    """A shortage computed live from current records and not persisted yet.

    Kept as a separate type from ``StoredShortage`` so totals cannot mix the
    two by accident; ``persist`` is the only way across.
    """

    courier_id: str
    kind: ShortageKind
    amount: float
    description: str
    date: date

    def persist(self, shortage_id: str) -> StoredShortage:
        """Return the stored row to write for this shortage."""

        return StoredShortage(
            shortage_id=shortage_id,
            courier_id=self.courier_id,
            kind=self.kind,
            amount=self.amount,
            description=self.description,
            date=self.date,
        )

    def matches(self, stored: StoredShortage) -> bool:
        """True when ``stored`` is the persisted form of this shortage."""

        return (
            stored.courier_id == self.courier_id
            and stored.kind is self.kind
            and stored.date == self.date
            and stored.amount == self.amount
            and stored.description == self.description
        )

    def as_dict(self) -> dict:
        """Export the shortage with serialisable values."""

        return {
            "courier_id": self.courier_id,
            "type": self.kind.value,
            "amount": self.amount,
            "description": self.description,
            "date": self.date.isoformat(),
        }
