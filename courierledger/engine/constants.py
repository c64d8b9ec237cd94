"""Mini README: Named monetary and threshold constants for the ledger engine.

Structure:
    * ShipmentPayoutPolicy - which events make a shipment fee count as earned.
    * LedgerConstants - immutable bundle handed to every engine function.
    * DEFAULT_CONSTANTS - the operator's standing values (amounts in XOF).

The engine never reads configuration on its own; callers build a
``LedgerConstants`` (usually via ``CourierLedgerSettings.ledger_constants``)
and pass it explicitly. Overriding a single value is a ``dataclasses.replace``
away.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ShipmentPayoutPolicy(str, Enum):
    """Gate applied before a shipment fee is valued as delivered work."""

    COMPLETION = "completion"
    ADMIN_VALIDATION = "admin_validation"

    @classmethod
    def from_str(cls, value: str) -> "ShipmentPayoutPolicy":
        """Coerce arbitrary casing into a valid payout policy."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported shipment payout policy: {value}") from error


@dataclass(frozen=True, slots=True)
class LedgerConstants:
    """Monetary amounts and thresholds used by valuation, remittance and payroll."""

    fixed_daily_cost: float = 2000.0
    shipment_fee: float = 1000.0
    base_salary_high: float = 50000.0
    base_salary_low: float = 25000.0
    courses_threshold: int = 500
    commission_per_course: float = 150.0
    working_days_for_salary: int = 25
    shipment_payout_policy: ShipmentPayoutPolicy = ShipmentPayoutPolicy.COMPLETION

    def __post_init__(self) -> None:
        for name in (
            "fixed_daily_cost",
            "shipment_fee",
            "base_salary_high",
            "base_salary_low",
            "commission_per_course",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if self.courses_threshold < 0 or self.working_days_for_salary < 0:
            raise ValueError("Payroll thresholds must not be negative")


DEFAULT_CONSTANTS = LedgerConstants()
