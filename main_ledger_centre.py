"""Mini README: Entry point CLI for the courier ledger.

This script exposes a Typer CLI that serves the HTTP interface or computes
figures straight from a JSON snapshot of the record collections. Monetary
constants come from ``COURIERLEDGER_`` environment variables when set.
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import typer
import uvicorn

from courierledger.configuration import get_settings
from courierledger.engine import (
    calculate_daily_financials,
    detect_shortages,
    merge_day_payments,
    unpersisted_shortages,
)
from courierledger.ingestion import LedgerSnapshot, SnapshotLoader
from courierledger.logging_utils import configure_root_logger, level_for_environment
from courierledger.records import RecordValidationError, parse_date, shortage_to_dict
from courierledger.reports import build_payroll_document, format_money

cli = typer.Typer(help="Reconcile courier cash flow and serve the ledger API.")


@cli.callback()
def main() -> None:
    """Configure logging for the environment before any command runs."""

    configure_root_logger(level_for_environment(get_settings().environment))


def _load(snapshot_path: Path) -> LedgerSnapshot:
    try:
        return SnapshotLoader(snapshot_path).load()
    except (FileNotFoundError, RecordValidationError) as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error


def _day(value: str) -> date:
    try:
        return parse_date(value)
    except RecordValidationError as error:
        raise typer.BadParameter(str(error)) from error


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the HTTP interface using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port

    # 0.0.0.0 cannot be opened in a browser; point operators at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting courier ledger on {effective_host}:{effective_port}.\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "courierledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def daily(
    snapshot: Path = typer.Argument(..., help="JSON snapshot of the record collections."),
    courier_id: str = typer.Option(..., "--courier", help="Courier identifier."),
    on: str = typer.Option(..., "--date", help="ISO date of the day to reconcile."),
) -> None:
    """Print the daily figures of one courier."""

    settings = get_settings()
    records = _load(snapshot)
    financials = calculate_daily_financials(
        courier_id,
        _day(on),
        records.courses,
        records.expenses,
        records.payments,
        settings.ledger_constants(),
    )
    for label, value in financials.as_dict().items():
        rendered = value if label == "course_count" else f"{format_money(value)} {settings.currency}"
        typer.echo(f"{label}: {rendered}")


@cli.command()
def shortages(
    snapshot: Path = typer.Argument(..., help="JSON snapshot of the record collections."),
    courier_id: str = typer.Option(..., "--courier", help="Courier identifier."),
    on: str = typer.Option(..., "--date", help="ISO date of the day to inspect."),
    rows: bool = typer.Option(
        False, "--rows", help="Print not-yet-stored shortages as JSON rows ready to persist."
    ),
) -> None:
    """List live shortages for one courier day."""

    settings = get_settings()
    records = _load(snapshot)
    on_date = _day(on)
    detected = detect_shortages(
        courier_id,
        on_date,
        records.courses,
        merge_day_payments(courier_id, on_date, records.payments),
        records.expenses,
        currency=settings.currency,
    )
    if rows:
        fresh = unpersisted_shortages(detected, records.shortages)
        stem = f"{courier_id}-{on_date.isoformat()}"
        payload = [
            shortage_to_dict(shortage.persist(f"{stem}-{index}"))
            for index, shortage in enumerate(fresh, start=1)
        ]
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    if not detected:
        typer.echo("No shortages detected.")
        return
    for shortage in detected:
        typer.echo(
            f"[{shortage.kind.value}] {format_money(shortage.amount)} {settings.currency} - {shortage.description}"
        )


@cli.command()
def payroll(
    snapshot: Path = typer.Argument(..., help="JSON snapshot of the record collections."),
    courier_id: str = typer.Option(..., "--courier", help="Courier identifier."),
    start: str = typer.Option(..., help="First day of the pay period (ISO date)."),
    end: str = typer.Option(..., help="Last day of the pay period (ISO date)."),
) -> None:
    """Print a payroll slip for one courier and period."""

    settings = get_settings()
    records = _load(snapshot)
    try:
        courier = records.get_courier(courier_id)
        document = build_payroll_document(
            courier,
            _day(start),
            _day(end),
            records.courses,
            records.shortages,
            constants=settings.ledger_constants(),
            currency=settings.currency,
        )
    except (KeyError, ValueError) as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error
    typer.echo("FICHE DE PAIE")
    for line in document.lines():
        typer.echo(line)


if __name__ == "__main__":
    cli()
