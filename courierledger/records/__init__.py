"""Mini README: Record types and parsers for the courier ledger.

``models`` defines the validated, immutable records; ``serialisation`` turns
raw payloads into them. Malformed input raises ``RecordValidationError``.
"""

from .models import (
    Article,
    ArticleStatus,
    Courier,
    Course,
    CourseType,
    DailyPayment,
    Delivery,
    DetectedShortage,
    Expense,
    ExpenseStatus,
    RecordValidationError,
    Shipment,
    ShortageKind,
    StoredShortage,
)
from .serialisation import (
    course_from_dict,
    courier_from_dict,
    expense_from_dict,
    parse_date,
    payment_from_dict,
    shortage_from_dict,
    shortage_to_dict,
)

__all__ = [
    "Article",
    "ArticleStatus",
    "Courier",
    "Course",
    "CourseType",
    "DailyPayment",
    "Delivery",
    "DetectedShortage",
    "Expense",
    "ExpenseStatus",
    "RecordValidationError",
    "Shipment",
    "ShortageKind",
    "StoredShortage",
    "course_from_dict",
    "courier_from_dict",
    "expense_from_dict",
    "parse_date",
    "payment_from_dict",
    "shortage_from_dict",
    "shortage_to_dict",
]
