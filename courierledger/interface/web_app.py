"""Mini README: FastAPI service exposing the ledger engine over HTTP.

Structure:
    * create_application - application factory wiring routes and templates.
    * _parse_request - validate the record collections of a request body.

Every endpoint receives the record collections in its request body and
recomputes from them; the service keeps no ledger state between requests.
Malformed records answer 422, unknown couriers 404 and a courier session
reading someone else's figures 403.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from .. import __version__
from ..configuration import CourierLedgerSettings, get_settings
from ..engine import (
    calculate_daily_financials,
    calculate_expected_payment,
    detect_shortages,
    merge_day_payments,
    pending_validations,
    summarise_courier_day,
    summarise_fleet_day,
)
from ..ingestion import LedgerSnapshot
from ..logging_utils import get_logger
from ..records import RecordValidationError
from ..reports import PayrollDocument, build_payroll_document, format_money
from .schemas import (
    CourierDayRequest,
    CourierSummaryRequest,
    FleetDayRequest,
    LedgerRequest,
    PayrollRequest,
)

LOGGER = get_logger(__name__)

def _parse_request(payload: LedgerRequest) -> LedgerSnapshot:
    """Validate the record rows of a request body, mapping errors to HTTP 422."""

    try:
        snapshot = payload.snapshot()
    except RecordValidationError as error:
        LOGGER.warning("Rejected malformed records: %s", error)
        raise HTTPException(status_code=422, detail=str(error)) from error
    return snapshot

def create_application(settings: Optional[CourierLedgerSettings] = None) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    constants = settings.ledger_constants()
    currency = settings.currency
    app = FastAPI(title="Courier Ledger", version=__version__)
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    templates.env.filters["money"] = format_money

    def _payroll_for(payload: PayrollRequest) -> PayrollDocument:
        snapshot = _parse_request(payload)
        try:
            courier = snapshot.get_courier(payload.courier_id)
            return build_payroll_document(
                courier,
                payload.start_date,
                payload.end_date,
                snapshot.courses,
                snapshot.shortages,
                constants=constants,
                currency=currency,
            )
        except KeyError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error

    @app.get("/health")
    async def health() -> JSONResponse:
        """Report liveness and the active payout policy."""

        return JSONResponse(
            {
                "status": "ok",
                "environment": settings.environment,
                "shipment_payout_policy": constants.shipment_payout_policy.value,
            }
        )

    @app.post("/daily-financials")
    async def daily_financials(payload: CourierDayRequest) -> JSONResponse:
        """Return the headline figures of one courier day."""

        snapshot = _parse_request(payload)
        financials = calculate_daily_financials(
            payload.courier_id,
            payload.on_date,
            snapshot.courses,
            snapshot.expenses,
            snapshot.payments,
            constants,
        )
        LOGGER.info(
            "Daily financials served for courier=%s date=%s", payload.courier_id, payload.on_date
        )
        return JSONResponse(financials.as_dict())

    @app.post("/payments/expected")
    async def expected_payment(payload: CourierDayRequest) -> JSONResponse:
        """Return the remittance snapshot an admin records with a payment."""

        snapshot = _parse_request(payload)
        expected = calculate_expected_payment(
            payload.courier_id, payload.on_date, snapshot.courses, snapshot.expenses, constants
        )
        return JSONResponse(
            {
                "courier_id": payload.courier_id,
                "date": payload.on_date.isoformat(),
                "expected_amount": expected,
            }
        )

    @app.post("/shortages/detect")
    async def shortages_detect(payload: CourierDayRequest) -> JSONResponse:
        """Return live shortage candidates for one courier day."""

        snapshot = _parse_request(payload)
        detected = detect_shortages(
            payload.courier_id,
            payload.on_date,
            snapshot.courses,
            merge_day_payments(payload.courier_id, payload.on_date, snapshot.payments),
            snapshot.expenses,
            currency=currency,
        )
        return JSONResponse({"shortages": [shortage.as_dict() for shortage in detected]})

    @app.post("/payroll")
    async def payroll(payload: PayrollRequest) -> JSONResponse:
        """Return the salary breakdown and slip values for a pay period."""

        document = _payroll_for(payload)
        return JSONResponse(document.as_dict())

    @app.post("/payroll/document", response_class=HTMLResponse)
    async def payroll_document(request: Request, payload: PayrollRequest) -> HTMLResponse:
        """Render a printable payroll slip."""

        document = _payroll_for(payload)
        return templates.TemplateResponse(request, "payroll_slip.html", {"document": document})

    @app.post("/overview")
    async def overview(payload: FleetDayRequest) -> JSONResponse:
        """Return the fleet dashboard tiles for a date."""

        snapshot = _parse_request(payload)
        fleet = summarise_fleet_day(
            payload.on_date,
            snapshot.couriers,
            snapshot.courses,
            snapshot.expenses,
            snapshot.payments,
            snapshot.shortages,
            currency=currency,
        )
        return JSONResponse(fleet.as_dict())

    @app.post("/courier-summary")
    async def courier_summary(payload: CourierSummaryRequest) -> JSONResponse:
        """Return one courier's day as seen by the requesting session."""

        snapshot = _parse_request(payload)
        try:
            summary = summarise_courier_day(
                payload.session.context(),
                payload.on_date,
                snapshot.courses,
                snapshot.expenses,
                snapshot.payments,
                snapshot.shortages,
                courier_id=payload.courier_id,
                constants=constants,
                currency=currency,
            )
        except PermissionError as error:
            raise HTTPException(status_code=403, detail=str(error)) from error
        except ValueError as error:
            raise HTTPException(status_code=422, detail=str(error)) from error
        return JSONResponse(summary.as_dict())

    @app.post("/validations/pending")
    async def validations_pending(payload: LedgerRequest) -> JSONResponse:
        """Return courses waiting for an admin decision."""

        snapshot = _parse_request(payload)
        pending = pending_validations(snapshot.courses)
        LOGGER.debug("Returning %s pending validations", len(pending))
        return JSONResponse({"pending": [entry.as_dict() for entry in pending]})

    return app
