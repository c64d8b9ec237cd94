"""Mini README: Parse raw record payloads into validated ledger records.

Structure:
    * parse_date / parse_datetime - ISO-8601 coercion shared by all parsers.
    * courier_from_dict, course_from_dict, expense_from_dict,
      payment_from_dict, shortage_from_dict - one parser per collection.

Payloads use the field names the courier application stores (``livreurId``,
``livraison``, ``expedition``, ``returnedToAdmin`` ...). Every parser raises
``RecordValidationError`` with the offending record id so a bad row is
reported instead of silently contributing zero to a total.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

from .models import (
    Article,
    ArticleStatus,
    Courier,
    Course,
    CourseType,
    DailyPayment,
    Delivery,
    Expense,
    RecordValidationError,
    Shipment,
    ShortageKind,
    StoredShortage,
)


def parse_date(value: object) -> date:
    """Parse ISO formatted strings or date objects safely."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError as error:
            raise RecordValidationError(f"Invalid ISO-8601 date: {value!r}") from error
    raise RecordValidationError("Dates must be provided as ISO strings or date/datetime instances.")


def parse_datetime(value: object) -> Optional[datetime]:
    """Parse an optional ISO timestamp, accepting a trailing ``Z``."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as error:
            raise RecordValidationError(f"Invalid ISO-8601 timestamp: {value!r}") from error
    raise RecordValidationError(f"Timestamps must be ISO strings (got {value!r})")


def _amount(value: object, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise RecordValidationError(f"{label} must be a number (got {value!r})")
    try:
        return float(value)
    except ValueError as error:
        raise RecordValidationError(f"{label} must be a number (got {value!r})") from error


def _pick(payload: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first key present, accepting camelCase and snake_case spellings."""

    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return default


def _require(payload: Mapping[str, Any], *keys: str) -> Any:
    value = _pick(payload, *keys)
    if value is None:
        record_id = payload.get("id", "<unknown>")
        raise RecordValidationError(f"Record {record_id} is missing field '{keys[0]}'")
    return value


def courier_from_dict(payload: Mapping[str, Any]) -> Courier:
    return Courier(
        courier_id=str(_require(payload, "id")),
        name=str(_require(payload, "name")),
        phone=str(_pick(payload, "phone", default="")),
        active=bool(_pick(payload, "active", default=True)),
        created_at=parse_datetime(_pick(payload, "createdAt", "created_at")),
    )


def article_from_dict(payload: Mapping[str, Any]) -> Article:
    article_id = str(_pick(payload, "id", default=payload.get("name", "")))
    quantity = _pick(payload, "quantity", default=1)
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)) or int(quantity) != quantity:
        raise RecordValidationError(f"Quantity of article {article_id} must be an integer")
    return Article(
        article_id=article_id,
        name=str(_require(payload, "name")),
        price=_amount(_require(payload, "price"), f"Price of article {article_id}"),
        # Missing or zero quantities count as one unit.
        quantity=int(quantity) or 1,
        status=ArticleStatus.from_str(str(_require(payload, "status"))),
        reason=_pick(payload, "reason"),
        returned_to_admin=bool(_pick(payload, "returnedToAdmin", "returned_to_admin", default=False)),
        return_validated_by=_pick(payload, "returnValidatedBy", "return_validated_by"),
        return_validated_at=parse_datetime(_pick(payload, "returnValidatedAt", "return_validated_at")),
    )


def course_from_dict(payload: Mapping[str, Any]) -> Course:
    """Parse a course, rejecting payloads that do not match the declared type.

    A shipment without a recorded carrier fee costs nothing.
    """

    course_id = str(_require(payload, "id"))
    course_type = CourseType.from_str(str(_require(payload, "type")))
    delivery_payload = _pick(payload, "livraison", "delivery")
    shipment_payload = _pick(payload, "expedition", "shipment")

    delivery: Optional[Delivery] = None
    shipment: Optional[Shipment] = None
    if delivery_payload is not None:
        if not isinstance(delivery_payload, Mapping):
            raise RecordValidationError(f"Delivery payload of course {course_id} must be an object")
        articles = _pick(delivery_payload, "articles", default=[])
        if not isinstance(articles, list):
            raise RecordValidationError(f"Articles of course {course_id} must be a list")
        delivery = Delivery(
            contact_name=str(_pick(delivery_payload, "contactName", "contact_name", default="")),
            contact_phone=str(_pick(delivery_payload, "contactPhone", "contact_phone", default="")),
            neighborhood=str(_pick(delivery_payload, "quartier", "neighborhood", default="")),
            delivery_fee=_amount(
                _pick(delivery_payload, "deliveryFee", "delivery_fee", default=0),
                f"Delivery fee of course {course_id}",
            ),
            articles=tuple(article_from_dict(article) for article in articles),
        )
    if shipment_payload is not None:
        if not isinstance(shipment_payload, Mapping):
            raise RecordValidationError(f"Shipment payload of course {course_id} must be an object")
        shipment = Shipment(
            destination_city=str(
                _pick(shipment_payload, "destinationCity", "destination_city", default="")
            ),
            contact_name=str(_pick(shipment_payload, "contactName", "contact_name", default="")),
            contact_phone=str(_pick(shipment_payload, "contactPhone", "contact_phone", default="")),
            shipment_fee=_amount(
                _pick(shipment_payload, "expeditionFee", "shipment_fee", default=0),
                f"Shipment fee of course {course_id}",
            ),
            validated=bool(_pick(shipment_payload, "validated", default=False)),
        )

    return Course(
        course_id=course_id,
        course_type=course_type,
        courier_id=str(_require(payload, "livreurId", "livreur_id", "courier_id")),
        date=parse_date(_require(payload, "date")),
        completed=bool(_pick(payload, "completed", default=False)),
        delivery=delivery,
        shipment=shipment,
    )


def expense_from_dict(payload: Mapping[str, Any]) -> Expense:
    expense_id = str(_require(payload, "id"))
    return Expense(
        expense_id=expense_id,
        courier_id=str(_require(payload, "livreurId", "livreur_id", "courier_id")),
        date=parse_date(_require(payload, "date")),
        amount=_amount(_require(payload, "amount"), f"Amount of expense {expense_id}"),
        description=str(_pick(payload, "description", default="")),
        validated=bool(_pick(payload, "validated", default=False)),
        rejected_reason=_pick(payload, "rejectedReason", "rejected_reason") or None,
        rejected_at=parse_datetime(_pick(payload, "rejectedAt", "rejected_at")),
    )


def payment_from_dict(payload: Mapping[str, Any]) -> DailyPayment:
    payment_id = str(_require(payload, "id"))
    return DailyPayment(
        payment_id=payment_id,
        courier_id=str(_require(payload, "livreurId", "livreur_id", "courier_id")),
        date=parse_date(_require(payload, "date")),
        amount=_amount(_require(payload, "amount"), f"Amount of payment {payment_id}"),
        expected_amount=_amount(
            _pick(payload, "expectedAmount", "expected_amount", default=0),
            f"Expected amount of payment {payment_id}",
        ),
    )


def shortage_from_dict(payload: Mapping[str, Any]) -> StoredShortage:
    shortage_id = str(_require(payload, "id"))
    return StoredShortage(
        shortage_id=shortage_id,
        courier_id=str(_require(payload, "livreurId", "livreur_id", "courier_id")),
        kind=ShortageKind.from_str(str(_require(payload, "type"))),
        amount=_amount(_require(payload, "amount"), f"Amount of shortage {shortage_id}"),
        description=str(_pick(payload, "description", default="")),
        date=parse_date(_require(payload, "date")),
    )


def shortage_to_dict(shortage: StoredShortage) -> Dict[str, Any]:
    """Export a stored shortage in the application's field names."""

    return {
        "id": shortage.shortage_id,
        "livreurId": shortage.courier_id,
        "type": shortage.kind.value,
        "amount": shortage.amount,
        "description": shortage.description,
        "date": shortage.date.isoformat(),
    }
