"""Date Math — pure pregnancy dating arithmetic on civil calendar dates.

Invariants:
    - Every input date is normalized to a CalendarDate before arithmetic
    - Two inputs on the same civil day always produce the same result
    - "Today" is an explicit as_of parameter; the process-local date is used
      only when the caller omits it
    - Validation returns ValidationResult, never raises, for expected bad input
    - Non-date arguments raise TypeError (caller bug, not user input)

Design Decisions:
    - datetime.date + timedelta over epoch-millisecond math: month/year rollover
      and leap days are handled by the calendar type, not by hand
    - Month names are a fixed English table: output never depends on LC_TIME
    - format_date resolves the zone at local midnight of the date itself so the
      offset shown matches DST on that day, not today
"""

from datetime import date, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

from sagenest.core.domain_types import (
    CalendarDate,
    ConceptionWindow,
    GestationalAge,
    Trimester,
    ValidationResult,
    GESTATION_DAYS,
    CONCEPTION_TO_DUE_DAYS,
    REFERENCE_CYCLE_DAYS,
    LUTEAL_PHASE_DAYS,
    CONCEPTION_WINDOW_MARGIN_DAYS,
    LMP_LOOKBACK_DAYS,
    FIRST_TRIMESTER_END_DAYS,
    SECOND_TRIMESTER_END_DAYS,
)

DateInput = date | datetime | str

LMP_IN_FUTURE_MESSAGE = "Last menstrual period cannot be in the future."
LMP_TOO_OLD_MESSAGE = "Last menstrual period must be within the past 12 months."
DATE_OUT_OF_RANGE_MESSAGE = "Date is outside the supported calendar range."

_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


# ─── Normalization & Arithmetic ──────────────────────────────────

def normalize(value: DateInput) -> CalendarDate:
    """Drop time-of-day, keeping the civil date the value was expressed in.

    Accepts date, datetime, or an ISO string ("YYYY-MM-DD", optionally with a
    time part). Raises TypeError for anything else, ValueError for bad strings.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip()).date()
    raise TypeError(f"Expected a date, datetime or ISO date string, got {type(value).__name__}")


def _resolve_as_of(as_of: DateInput | None) -> CalendarDate:
    return date.today() if as_of is None else normalize(as_of)


def add_days(value: DateInput, n: int) -> CalendarDate:
    return normalize(value) + timedelta(days=n)


def add_weeks(value: DateInput, n: int) -> CalendarDate:
    return add_days(value, n * 7)


def days_between(start: DateInput, end: DateInput) -> int:
    """Whole civil days from start to end (negative when end precedes start)."""
    return (normalize(end) - normalize(start)).days


# ─── Due Date Estimates ─────────────────────────────────────────

def due_date_from_lmp(lmp: DateInput, cycle_length: int) -> CalendarDate:
    """Naegele's rule shifted by how far the cycle deviates from 28 days."""
    return add_days(lmp, GESTATION_DAYS + (cycle_length - REFERENCE_CYCLE_DAYS))


def due_date_from_conception(conception: DateInput) -> CalendarDate:
    return add_days(conception, CONCEPTION_TO_DUE_DAYS)


def due_date_from_ivf_transfer(transfer_date: DateInput, embryo_age_days: int) -> CalendarDate:
    """Embryo age at transfer is development that already happened before transfer."""
    return add_days(transfer_date, GESTATION_DAYS - embryo_age_days)


# ─── Derived Quantities ─────────────────────────────────────────

def gestational_age(lmp: DateInput, as_of: DateInput | None = None) -> GestationalAge:
    """Elapsed days since the LMP-equivalent date, clamped at zero."""
    elapsed = days_between(lmp, _resolve_as_of(as_of))
    return GestationalAge(total_days=max(0, elapsed))


def conception_window(lmp: DateInput, cycle_length: int) -> ConceptionWindow:
    ovulation = add_days(lmp, cycle_length - LUTEAL_PHASE_DAYS)
    return ConceptionWindow(
        start=add_days(ovulation, -CONCEPTION_WINDOW_MARGIN_DAYS),
        ovulation_estimate=ovulation,
        end=add_days(ovulation, CONCEPTION_WINDOW_MARGIN_DAYS),
    )


def trimester_from_due_date(due_date: DateInput, as_of: DateInput | None = None) -> Trimester:
    days_remaining = days_between(_resolve_as_of(as_of), due_date)
    gestation_days = GESTATION_DAYS - days_remaining
    if gestation_days < FIRST_TRIMESTER_END_DAYS:
        return Trimester.FIRST
    if gestation_days < SECOND_TRIMESTER_END_DAYS:
        return Trimester.SECOND
    return Trimester.THIRD


# ─── Validation ──────────────────────────────────────────────────

def validate_lmp(lmp: DateInput, as_of: DateInput | None = None) -> ValidationResult:
    """Accept LMP dates from 366 days before as_of up to as_of inclusive."""
    today = _resolve_as_of(as_of)
    candidate = normalize(lmp)
    if candidate > today:
        return ValidationResult.fail(LMP_IN_FUTURE_MESSAGE)
    if candidate < add_days(today, -LMP_LOOKBACK_DAYS):
        return ValidationResult.fail(LMP_TOO_OLD_MESSAGE)
    return ValidationResult.ok()


# ─── Display ─────────────────────────────────────────────────────

def _format_offset(offset: timedelta | None) -> str:
    total_minutes = int(offset.total_seconds() // 60) if offset else 0
    if total_minutes == 0:
        return "GMT"
    sign = "+" if total_minutes > 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"GMT{sign}{hours:02d}:{minutes:02d}"


def format_date(value: DateInput, tz: str | tzinfo = "UTC") -> str:
    """Long-form English date with the zone's offset and abbreviation.

    >>> format_date(date(2026, 2, 13))
    'February 13, 2026 (GMT UTC)'
    """
    zone = ZoneInfo(tz) if isinstance(tz, str) else tz
    day = normalize(value)
    midnight = datetime(day.year, day.month, day.day, tzinfo=zone)
    zone_parts = [_format_offset(midnight.utcoffset()), midnight.tzname() or ""]
    zone_text = " ".join(part for part in zone_parts if part)
    return f"{_MONTH_NAMES[day.month - 1]} {day.day}, {day.year} ({zone_text})"
