"""Mini README: Centralised configuration models and helpers for the courier ledger.

Structure:
    * CourierLedgerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` at the process boundary (CLI, web app) and hand
    ``settings.ledger_constants()`` to the engine. Every monetary constant can
    be overridden with a ``COURIERLEDGER_`` prefixed environment variable or a
    ``.env`` file, e.g. ``COURIERLEDGER_FIXED_DAILY_COST=2500``.

    Shipment payout defaults to ``completion``: a shipment fee counts as
    delivered value once the courier reports it done. Set
    ``COURIERLEDGER_SHIPMENT_PAYOUT_POLICY=admin_validation`` to also require
    the admin's validation.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, validator
from pydantic_settings import BaseSettings

from .engine.constants import LedgerConstants, ShipmentPayoutPolicy


class CourierLedgerSettings(BaseSettings):
    """Runtime configuration for the courier ledger."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the HTTP service exposes.",
        ge=1,
        le=65535,
    )
    currency: str = Field(
        "XOF",
        description="Currency label printed next to amounts. All amounts share it.",
    )
    fixed_daily_cost: float = Field(
        2000.0, ge=0, description="Fuel and overhead charged to every courier day."
    )
    shipment_fee: float = Field(
        1000.0, ge=0, description="Payout earned by a shipment course."
    )
    base_salary_high: float = Field(
        50000.0, ge=0, description="Base salary when the course threshold is exceeded."
    )
    base_salary_low: float = Field(
        25000.0, ge=0, description="Base salary at or below the course threshold."
    )
    courses_threshold: int = Field(
        500, ge=0, description="Completed courses above which the high base salary applies."
    )
    commission_per_course: float = Field(
        150.0, ge=0, description="Flat commission per completed course."
    )
    working_days_for_salary: int = Field(
        25, ge=0, description="Distinct working days required for any base salary."
    )
    shipment_payout_policy: ShipmentPayoutPolicy = Field(
        ShipmentPayoutPolicy.COMPLETION,
        description="Whether shipment fees need admin validation before counting as delivered.",
    )

    class Config:
        env_prefix = "COURIERLEDGER_"
        env_file = ".env"
        case_sensitive = False

    @validator("shipment_payout_policy", pre=True)
    def _coerce_policy(cls, value: object) -> ShipmentPayoutPolicy:
        """Accept policy names in any casing."""

        if isinstance(value, ShipmentPayoutPolicy):
            return value
        return ShipmentPayoutPolicy.from_str(str(value))

    def ledger_constants(self) -> LedgerConstants:
        """Return the immutable constants bundle consumed by the engine."""

        return LedgerConstants(
            fixed_daily_cost=self.fixed_daily_cost,
            shipment_fee=self.shipment_fee,
            base_salary_high=self.base_salary_high,
            base_salary_low=self.base_salary_low,
            courses_threshold=self.courses_threshold,
            commission_per_course=self.commission_per_course,
            working_days_for_salary=self.working_days_for_salary,
            shipment_payout_policy=self.shipment_payout_policy,
        )


@lru_cache()
def get_settings() -> CourierLedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return CourierLedgerSettings()
