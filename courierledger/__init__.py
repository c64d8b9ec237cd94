"""Mini README: Package initialiser for the courier ledger.

The package reconciles a delivery fleet's daily cash flow. The ``engine``
subpackage holds the pure reconciliation functions, ``records`` the validated
record types they consume, and the remaining subpackages are thin boundaries
(snapshot loading, payroll documents, the HTTP interface).
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]

__version__ = "0.1.0"
