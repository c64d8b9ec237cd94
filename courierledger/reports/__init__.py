"""Mini README: Printable outputs derived from engine figures.

``payroll_document`` turns a salary computation into plain values for
payroll slips.
"""

from .payroll_document import PayrollDocument, build_payroll_document, format_money, format_period

__all__ = ["PayrollDocument", "build_payroll_document", "format_money", "format_period"]
