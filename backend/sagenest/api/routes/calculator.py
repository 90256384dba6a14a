"""Calculator Routes — due-date estimates, gestational age, and calendar export.

Invariants:
    - "today" always comes from Depends(get_today), never from datetime directly
    - Rejected input (estimate or .ics due date) raises CalculationRejectedError
      (400) with the domain message
    - Omitted cycle length / embryo age fall back to configured defaults
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from sagenest.config import get_settings
from sagenest.core.calculator import estimate_pregnancy
from sagenest.core.calendar_export import (
    ICS_FILENAME,
    build_due_date_ics,
    validate_exportable_due_date,
)
from sagenest.core.date_math import gestational_age
from sagenest.core.errors import CalculationRejectedError, ErrorContext
from sagenest.infrastructure.clock import get_today
from sagenest.schemas.calculator import (
    EstimateRequest,
    EstimateResponse,
    GestationalAgeRequest,
    GestationalAgeResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/calculator", tags=["calculator"])


@router.post("/estimate", response_model=EstimateResponse)
async def create_estimate(body: EstimateRequest, today: date = Depends(get_today)):
    """Validate the calculator form and return the full estimate."""
    settings = get_settings()
    cycle_length = (
        body.cycle_length if body.cycle_length is not None
        else settings.default_cycle_length
    )
    embryo_age_days = (
        body.embryo_age_days if body.embryo_age_days is not None
        else settings.default_embryo_age_days
    )
    outcome = estimate_pregnancy(
        body.method, body.reference_date, today,
        cycle_length=cycle_length, embryo_age_days=embryo_age_days,
    )
    if not outcome.valid:
        logger.info(
            f"Calculator input rejected: {outcome.validation.message}",
            extra={"method": body.method.value},
        )
        raise CalculationRejectedError(
            outcome.validation, ErrorContext(method=body.method.value),
        )
    return EstimateResponse.from_estimate(outcome.estimate, settings.display_timezone)


@router.post("/gestational-age", response_model=GestationalAgeResponse)
async def compute_gestational_age(
    body: GestationalAgeRequest, today: date = Depends(get_today),
):
    """Weeks + days since LMP as of the given date (default: today)."""
    age = gestational_age(body.lmp, body.as_of or today)
    return GestationalAgeResponse.from_age(age)


@router.get("/due-date.ics")
async def download_due_date_ics(due_date: date = Query(...)):
    """Single all-day calendar event on the due date."""
    validation = validate_exportable_due_date(due_date)
    if not validation.valid:
        raise CalculationRejectedError(
            validation, ErrorContext(field_name="due_date"),
        )
    return Response(
        content=build_due_date_ics(due_date),
        media_type="text/calendar",
        headers={"Content-Disposition": f'attachment; filename="{ICS_FILENAME}"'},
    )
