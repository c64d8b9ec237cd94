"""Mini README: The ledger engine, a library of pure reconciliation functions.

Modules, leaves first:
    * constants - named amounts and thresholds (``LedgerConstants``).
    * valuation - per-course value and completion.
    * aggregation - per-courier daily figures and payment declaration.
    * shortages - live shortage detection and stored/detected totals.
    * payroll - pay-period salary.
    * overview - dashboard rollups composed from the above.

Nothing here reads storage, settings or session globals, and nothing is
cached between calls.
"""

from .aggregation import (
    DailyFinancials,
    calculate_daily_financials,
    calculate_expected_payment,
    courses_for_day,
    declare_payment,
    merge_day_payments,
    payments_for_day,
)
from .constants import DEFAULT_CONSTANTS, LedgerConstants, ShipmentPayoutPolicy
from .overview import (
    CourierDaySummary,
    FleetDayOverview,
    PendingValidation,
    ValidationKind,
    pending_validations,
    summarise_courier_day,
    summarise_fleet_day,
)
from .payroll import SalaryBreakdown, calculate_base_salary, calculate_monthly_salary
from .shortages import (
    ShortageExposure,
    detect_shortages,
    find_shortage_for_returned_article,
    format_amount,
    total_shortage_exposure,
    unpersisted_shortages,
)
from .valuation import (
    calculate_articles_received_value,
    calculate_delivered_value,
    calculate_unreturned_value,
    calculate_validated_shipment_fees,
    is_course_completed,
)

__all__ = [
    "DEFAULT_CONSTANTS",
    "CourierDaySummary",
    "DailyFinancials",
    "FleetDayOverview",
    "LedgerConstants",
    "PendingValidation",
    "SalaryBreakdown",
    "ShipmentPayoutPolicy",
    "ShortageExposure",
    "ValidationKind",
    "calculate_articles_received_value",
    "calculate_base_salary",
    "calculate_daily_financials",
    "calculate_delivered_value",
    "calculate_expected_payment",
    "calculate_monthly_salary",
    "calculate_unreturned_value",
    "calculate_validated_shipment_fees",
    "courses_for_day",
    "declare_payment",
    "detect_shortages",
    "find_shortage_for_returned_article",
    "format_amount",
    "is_course_completed",
    "merge_day_payments",
    "payments_for_day",
    "pending_validations",
    "summarise_courier_day",
    "summarise_fleet_day",
    "total_shortage_exposure",
    "unpersisted_shortages",
]
