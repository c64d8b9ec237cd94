"""Mini README: HTTP interface for the courier ledger.

Exports the FastAPI application factory. The templates directory holds the
printable payroll slip.
"""

from .web_app import create_application

__all__ = ["create_application"]
