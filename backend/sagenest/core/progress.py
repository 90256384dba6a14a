"""Pregnancy Progress — display-oriented numbers derived from dating results.

Invariants:
    - Progress fractions are clamped to [0.0, 1.0]
    - current_week is clamped to [1, TOTAL_WEEKS]
    - format_weeks_and_days never emits negative or overflowing day counts

Design Decisions:
    - Kept apart from date_math: these are presentation mappings, not clinical formulas
"""

import math

from sagenest.core.date_math import DateInput, days_between
from sagenest.core.domain_types import GESTATION_DAYS, TOTAL_WEEKS, Trimester


TRIMESTER_SUMMARIES: dict[Trimester, str] = {
    Trimester.FIRST: (
        "This early stage focuses on organ development, energy shifts, and "
        "establishing consistent prenatal care with your clinician."
    ),
    Trimester.SECOND: (
        "Growth accelerates in the second trimester, often with more stable "
        "energy and clear milestones reviewed at routine visits."
    ),
    Trimester.THIRD: (
        "The final trimester emphasizes fetal growth, monitoring movement, and "
        "preparing for labor, postpartum support, and newborn care."
    ),
}


def _clamp_unit(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return min(1.0, max(0.0, value))


def pregnancy_progress(gestational_days: int) -> float:
    """Fraction of a 280-day pregnancy elapsed."""
    return _clamp_unit(gestational_days / GESTATION_DAYS)


def progress_to_percent(value: float) -> int:
    # half-up like the wheel label, not banker's rounding
    return math.floor(_clamp_unit(value) * 100 + 0.5)


def progress_to_circumference(value: float, radius: float) -> float:
    """Length of the progress arc on a circle of the given radius."""
    return 2 * math.pi * max(0.0, radius) * _clamp_unit(value)


def current_week(due_date: DateInput, as_of: DateInput) -> int:
    weeks_until_due = math.floor(days_between(as_of, due_date) / 7)
    return min(TOTAL_WEEKS, max(1, TOTAL_WEEKS - weeks_until_due))


def format_weeks_and_days(weeks: float, days: float) -> str:
    """Compact "Nw Nd" label; overflow days roll into weeks."""
    safe_weeks = max(0, math.floor(weeks)) if math.isfinite(weeks) else 0
    safe_days = max(0, math.floor(days)) if math.isfinite(days) else 0
    total_days = safe_weeks * 7 + safe_days
    return f"{total_days // 7}w {total_days % 7}d"
