"""Mini README: Plain-value payroll slips ready for layout.

Structure:
    * format_money - thousands-separated amounts for display.
    * PayrollDocument - courier identity, period label and salary figures.
    * build_payroll_document - compute the salary and wrap it for rendering.

The document carries only plain values so any renderer (the HTML template
served by the web interface, the CLI, a PDF generator) can lay it out
without calling back into the engine.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

from ..engine import DEFAULT_CONSTANTS, LedgerConstants, SalaryBreakdown, calculate_monthly_salary
from ..logging_utils import get_logger
from ..records import Courier, Course, StoredShortage

LOGGER = get_logger(__name__)


def format_money(amount: float) -> str:
    """Format an amount with thousands separators, decimals only when needed."""

    if float(amount).is_integer():
        return f"{amount:,.0f}"
    return f"{amount:,.2f}"


def format_period(start_date: date, end_date: date) -> str:
    """Return the ``dd/mm/yyyy - dd/mm/yyyy`` label printed on slips."""

    return f"{start_date.strftime('%d/%m/%Y')} - {end_date.strftime('%d/%m/%Y')}"


@dataclass(frozen=True, slots=True)
class PayrollDocument:
    """Everything a payroll slip prints."""

    courier_name: str
    courier_phone: str
    period_start: date
    period_end: date
    salary: SalaryBreakdown
    currency: str
    generated_at: datetime

    @property
    def period_label(self) -> str:
        return format_period(self.period_start, self.period_end)

    def file_name(self, extension: str = "pdf") -> str:
        """Suggested download name, e.g. ``fiche-paie-Awa-Diop-2024-05-01.pdf``."""

        slug = re.sub(r"\s+", "-", self.courier_name.strip())
        return f"fiche-paie-{slug}-{self.period_start.isoformat()}.{extension}"

    def lines(self) -> List[str]:
        """Labelled lines in slip order, for text renderers."""

        salary = self.salary
        currency = self.currency
        return [
            f"Période: {self.period_label}",
            f"Nom: {self.courier_name}",
            f"Téléphone: {self.courier_phone}",
            f"Jours travaillés: {salary.working_days}",
            f"Total courses livrées: {salary.total_courses}",
            f"Salaire de base: {format_money(salary.base_salary)} {currency}",
            f"Commissions: {format_money(salary.commissions)} {currency}",
            f"Total manquants: {format_money(salary.total_shortages)} {currency}",
            f"SALAIRE NET: {format_money(salary.net_salary)} {currency}",
        ]

    def as_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "courier_name": self.courier_name,
            "courier_phone": self.courier_phone,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "period_label": self.period_label,
            "currency": self.currency,
            "generated_at": self.generated_at.isoformat(),
            "file_name": self.file_name(),
        }
        payload.update(self.salary.as_dict())
        return payload


def build_payroll_document(
    courier: Courier,
    start_date: date,
    end_date: date,
    courses: Iterable[Course],
    stored_shortages: Iterable[StoredShortage],
    *,
    constants: LedgerConstants = DEFAULT_CONSTANTS,
    currency: str = "XOF",
    generated_at: Optional[datetime] = None,
) -> PayrollDocument:
    """Compute a courier's salary for the period and wrap it as a document."""

    salary = calculate_monthly_salary(
        courier.courier_id, start_date, end_date, courses, stored_shortages, constants
    )
    document = PayrollDocument(
        courier_name=courier.name,
        courier_phone=courier.phone,
        period_start=start_date,
        period_end=end_date,
        salary=salary,
        currency=currency,
        generated_at=generated_at or datetime.now(),
    )
    LOGGER.info(
        "Built payroll document for courier=%s period=%s net=%s",
        courier.courier_id,
        document.period_label,
        salary.net_salary,
    )
    return document
