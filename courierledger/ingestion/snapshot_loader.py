"""Mini README: Load ledger record collections from a JSON snapshot.

Structure:
    * LedgerSnapshot - the record collections the engine consumes.
    * snapshot_from_dict - validate an in-memory payload.
    * SnapshotLoader - read a snapshot file from disk on every call.

A snapshot is one JSON object with ``couriers``, ``courses``, ``expenses``,
``payments`` and ``shortages`` arrays in the courier application's field
names. Missing arrays are treated as empty. The loader never caches: each
``load`` rereads the file so computations do not run on a stale copy.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping

from ..logging_utils import get_logger
from ..records import (
    Courier,
    Course,
    DailyPayment,
    Expense,
    RecordValidationError,
    StoredShortage,
    course_from_dict,
    courier_from_dict,
    expense_from_dict,
    payment_from_dict,
    shortage_from_dict,
)

LOGGER = get_logger(__name__)

COLLECTIONS = ("couriers", "courses", "expenses", "payments", "shortages")


@dataclass(slots=True)
class LedgerSnapshot:
    """Record collections read at one point in time."""

    couriers: List[Courier] = field(default_factory=list)
    courses: List[Course] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    payments: List[DailyPayment] = field(default_factory=list)
    shortages: List[StoredShortage] = field(default_factory=list)

    def get_courier(self, courier_id: str) -> Courier:
        """Retrieve a courier, raising informative errors when missing."""

        for courier in self.couriers:
            if courier.courier_id == courier_id:
                return courier
        raise KeyError(f"Courier {courier_id} not found")


def _collection(payload: Mapping[str, Any], name: str) -> List[Mapping[str, Any]]:
    rows = payload.get(name) or []
    if not isinstance(rows, list):
        raise RecordValidationError(f"Snapshot field '{name}' must be a list")
    for row in rows:
        if not isinstance(row, Mapping):
            raise RecordValidationError(f"Entries of '{name}' must be objects")
    return rows


def snapshot_from_dict(payload: Mapping[str, Any]) -> LedgerSnapshot:
    """Validate every record of a snapshot payload."""

    if not isinstance(payload, Mapping):
        raise RecordValidationError("A snapshot must be a JSON object")
    snapshot = LedgerSnapshot(
        couriers=[courier_from_dict(row) for row in _collection(payload, "couriers")],
        courses=[course_from_dict(row) for row in _collection(payload, "courses")],
        expenses=[expense_from_dict(row) for row in _collection(payload, "expenses")],
        payments=[payment_from_dict(row) for row in _collection(payload, "payments")],
        shortages=[shortage_from_dict(row) for row in _collection(payload, "shortages")],
    )
    LOGGER.debug(
        "Snapshot parsed: %s couriers, %s courses, %s expenses, %s payments, %s shortages",
        len(snapshot.couriers),
        len(snapshot.courses),
        len(snapshot.expenses),
        len(snapshot.payments),
        len(snapshot.shortages),
    )
    return snapshot


class SnapshotLoader:
    """Read ledger snapshots from a JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()
        LOGGER.debug("Snapshot loader bound to %s", self.path)

    def load(self) -> LedgerSnapshot:
        """Read and validate the snapshot file."""

        if not self.path.exists():
            raise FileNotFoundError(f"Snapshot file not found: {self.path}")
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as error:
            raise RecordValidationError(f"Snapshot {self.path} is not valid JSON: {error}") from error
        snapshot = snapshot_from_dict(payload)
        LOGGER.info("Loaded snapshot %s with %s courses", self.path, len(snapshot.courses))
        return snapshot

