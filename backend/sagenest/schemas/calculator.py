"""Calculator Schemas — due-date form input and the estimate returned to the UI.

Invariants:
    - reference_date is a date-only value (YYYY-MM-DD); pydantic rejects anything else
    - cycle_length / embryo_age_days fall back to configured defaults when omitted
    - Every date in a response is serialized as an ISO date string

Design Decisions:
    - from_estimate() builds the response from core value types: routes stay thin
"""

from datetime import date

from pydantic import BaseModel

from sagenest.core.calculator import PregnancyEstimate
from sagenest.core.date_math import format_date
from sagenest.core.domain_types import (
    CalculationMethod,
    ConceptionWindow,
    GestationalAge,
    Trimester,
)
from sagenest.core.progress import format_weeks_and_days, progress_to_percent


class EstimateRequest(BaseModel):
    """Calculator form submission."""
    method: CalculationMethod = CalculationMethod.LMP
    reference_date: date
    cycle_length: int | None = None
    embryo_age_days: int | None = None


class GestationalAgeRequest(BaseModel):
    lmp: date
    as_of: date | None = None


class GestationalAgeResponse(BaseModel):
    total_days: int
    weeks: int
    days: int
    label: str

    @classmethod
    def from_age(cls, age: GestationalAge) -> "GestationalAgeResponse":
        return cls(
            total_days=age.total_days,
            weeks=age.weeks,
            days=age.days,
            label=format_weeks_and_days(age.weeks, age.days),
        )


class ConceptionWindowResponse(BaseModel):
    start: date
    ovulation_estimate: date
    end: date

    @classmethod
    def from_window(cls, window: ConceptionWindow) -> "ConceptionWindowResponse":
        return cls(
            start=window.start,
            ovulation_estimate=window.ovulation_estimate,
            end=window.end,
        )


class EstimateResponse(BaseModel):
    """Everything the result card and timeline render."""
    method: CalculationMethod
    due_date: date
    due_date_display: str
    lmp_equivalent: date
    gestational_age: GestationalAgeResponse
    trimester: Trimester
    trimester_label: str
    summary: str
    conception_window: ConceptionWindowResponse
    progress_percent: int
    current_week: int

    @classmethod
    def from_estimate(cls, estimate: PregnancyEstimate, tz: str) -> "EstimateResponse":
        return cls(
            method=estimate.method,
            due_date=estimate.due_date,
            due_date_display=format_date(estimate.due_date, tz),
            lmp_equivalent=estimate.lmp_equivalent,
            gestational_age=GestationalAgeResponse.from_age(estimate.gestational_age),
            trimester=estimate.trimester,
            trimester_label=estimate.trimester.label,
            summary=estimate.summary,
            conception_window=ConceptionWindowResponse.from_window(
                estimate.conception_window,
            ),
            progress_percent=progress_to_percent(estimate.progress),
            current_week=estimate.current_week,
        )
