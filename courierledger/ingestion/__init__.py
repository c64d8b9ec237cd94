"""Mini README: Boundary helpers that bring record collections into the engine.

The ``snapshot_loader`` module reads JSON snapshots of the courier
application's collections and validates them into ledger records.
"""

from .snapshot_loader import COLLECTIONS, LedgerSnapshot, SnapshotLoader, snapshot_from_dict

__all__ = ["COLLECTIONS", "LedgerSnapshot", "SnapshotLoader", "snapshot_from_dict"]
