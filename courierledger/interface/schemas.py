"""Mini README: Request bodies accepted by the HTTP interface.

Structure:
    * LedgerRequest - the record collections every request carries.
    * CourierDayRequest / FleetDayRequest / PayrollRequest - scoped requests.
    * SessionModel / CourierSummaryRequest - session-scoped courier view.

FastAPI validates identifiers, dates and roles from these models and answers
422 on its own. The record rows stay plain objects and go through the record
parsers, which apply the ledger's own validation rules.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, validator

from ..ingestion import COLLECTIONS, LedgerSnapshot, snapshot_from_dict
from ..session import SessionContext, UserRole


class LedgerRequest(BaseModel):
    couriers: List[Dict[str, Any]] = Field(default_factory=list)
    courses: List[Dict[str, Any]] = Field(default_factory=list)
    expenses: List[Dict[str, Any]] = Field(default_factory=list)
    payments: List[Dict[str, Any]] = Field(default_factory=list)
    shortages: List[Dict[str, Any]] = Field(default_factory=list)

    def snapshot(self) -> LedgerSnapshot:
        """Parse the carried collections, raising ``RecordValidationError`` on bad rows."""

        return snapshot_from_dict({name: getattr(self, name) for name in COLLECTIONS})


class CourierDayRequest(LedgerRequest):
    courier_id: str = Field(..., min_length=1)
    on_date: date = Field(..., alias="date")


class FleetDayRequest(LedgerRequest):
    on_date: date = Field(..., alias="date")


class PayrollRequest(LedgerRequest):
    courier_id: str = Field(..., min_length=1)
    start_date: date
    end_date: date


class SessionModel(BaseModel):
    user_id: str
    role: UserRole
    courier_id: Optional[str] = None

    @validator("role", pre=True)
    def _coerce_role(cls, value: Any) -> UserRole:
        return UserRole.from_str(str(value))

    def context(self) -> SessionContext:
        """Build the session handed to the engine; a courier must name itself."""

        return SessionContext(user_id=self.user_id, role=self.role, courier_id=self.courier_id)


class CourierSummaryRequest(LedgerRequest):
    session: SessionModel
    on_date: date = Field(..., alias="date")
    courier_id: Optional[str] = None
