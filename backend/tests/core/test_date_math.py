"""Date Math — tests for pure pregnancy dating arithmetic.

Tests cover:
    - normalize drops time-of-day and rejects non-dates
    - add_days crosses month/year/leap boundaries and is invertible
    - Due dates from LMP (cycle-adjusted), conception and IVF transfer
    - Gestational age is additive and clamped at zero
    - Conception window sits ±3 days around ovulation
    - validate_lmp accepts [as_of - 366 days, as_of]
    - Trimester thresholds at 91 and 189 implied days
    - format_date output is stable and zone-aware
"""

from datetime import date, datetime, timezone, timedelta

import pytest

from sagenest.core.date_math import (
    add_days,
    add_weeks,
    conception_window,
    days_between,
    due_date_from_conception,
    due_date_from_ivf_transfer,
    due_date_from_lmp,
    format_date,
    gestational_age,
    normalize,
    trimester_from_due_date,
    validate_lmp,
    LMP_IN_FUTURE_MESSAGE,
    LMP_TOO_OLD_MESSAGE,
)
from sagenest.core.domain_types import Trimester


TODAY = date(2026, 10, 19)


# ─── normalize ───────────────────────────────────────────────────

def test_normalize_drops_time_of_day():
    assert normalize(datetime(2026, 1, 15, 23, 59, 59)) == date(2026, 1, 15)
    assert normalize(datetime(2026, 1, 15, 0, 0, 1)) == normalize(datetime(2026, 1, 15, 18, 0))


def test_normalize_keeps_wall_clock_date_of_aware_datetime():
    late = datetime(2026, 1, 15, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    assert normalize(late) == date(2026, 1, 15)


def test_normalize_parses_iso_strings():
    assert normalize("2026-02-13") == date(2026, 2, 13)
    assert normalize(" 2026-02-13T08:15:00 ") == date(2026, 2, 13)


def test_normalize_passes_dates_through():
    d = date(2024, 2, 29)
    assert normalize(d) == d


def test_normalize_rejects_non_dates():
    with pytest.raises(TypeError):
        normalize(20260213)
    with pytest.raises(TypeError):
        normalize(None)


def test_normalize_rejects_malformed_strings():
    with pytest.raises(ValueError):
        normalize("not a date")
    with pytest.raises(ValueError):
        normalize("2026-02-30")


# ─── add_days / add_weeks ────────────────────────────────────────

def test_add_days_crosses_month_and_year():
    assert add_days(date(2026, 1, 31), 1) == date(2026, 2, 1)
    assert add_days(date(2026, 12, 31), 1) == date(2027, 1, 1)
    assert add_days(date(2026, 3, 1), -1) == date(2026, 2, 28)


def test_add_days_handles_leap_years():
    assert add_days(date(2024, 2, 28), 1) == date(2024, 2, 29)
    assert add_days(date(2024, 2, 29), 1) == date(2024, 3, 1)
    assert add_days(date(2024, 2, 29), 365) == date(2025, 2, 28)


def test_add_days_normalizes_datetime_input():
    assert add_days(datetime(2026, 5, 10, 22, 0), 0) == date(2026, 5, 10)


@pytest.mark.parametrize("start", [
    date(2024, 2, 29), date(2025, 12, 31), datetime(2026, 3, 8, 14, 30), date(1999, 1, 1),
])
def test_add_days_is_invertible(start):
    for n in range(-800, 801, 37):
        assert add_days(add_days(start, n), -n) == normalize(start)


def test_add_weeks_is_seven_days():
    assert add_weeks(date(2026, 1, 1), 2) == date(2026, 1, 15)
    assert add_weeks(date(2026, 1, 1), -1) == date(2025, 12, 25)


def test_days_between_is_signed():
    assert days_between(date(2026, 1, 1), date(2026, 1, 15)) == 14
    assert days_between(date(2026, 1, 15), date(2026, 1, 1)) == -14


# ─── due dates ───────────────────────────────────────────────────

def test_due_date_from_lmp_standard_cycle():
    assert due_date_from_lmp(date(2026, 2, 13), 28) == date(2026, 11, 20)


def test_due_date_from_lmp_long_cycle_shifts_later():
    assert due_date_from_lmp(date(2025, 12, 1), 32) == date(2026, 9, 11)


def test_due_date_from_lmp_short_cycle_shifts_earlier():
    assert due_date_from_lmp(date(2026, 2, 13), 24) == date(2026, 11, 16)


def test_due_date_from_lmp_leap_day():
    assert due_date_from_lmp(date(2024, 2, 29), 28) == date(2024, 12, 5)


@pytest.mark.parametrize("cycle", range(21, 41))
def test_due_date_from_lmp_formula_holds_for_every_cycle(cycle):
    lmp = datetime(2026, 4, 7, 16, 45)
    assert due_date_from_lmp(lmp, cycle) == date(2026, 4, 7) + timedelta(days=280 + cycle - 28)


def test_due_date_from_conception():
    assert due_date_from_conception(date(2026, 3, 1)) == date(2026, 11, 22)


def test_due_date_from_ivf_transfer():
    assert due_date_from_ivf_transfer(date(2026, 5, 10), 5) == date(2027, 2, 9)
    assert due_date_from_ivf_transfer(date(2026, 5, 10), 3) == date(2027, 2, 11)


def test_due_date_accepts_iso_strings():
    assert due_date_from_lmp("2026-02-13", 28) == date(2026, 11, 20)


# ─── gestational_age ─────────────────────────────────────────────

def test_gestational_age_two_weeks():
    age = gestational_age(date(2026, 1, 1), date(2026, 1, 15))
    assert age.weeks == 2
    assert age.days == 0
    assert age.total_days == 14


def test_gestational_age_zero_on_reference_day():
    age = gestational_age(date(2026, 1, 1), datetime(2026, 1, 1, 23, 0))
    assert age.total_days == 0


def test_gestational_age_clamped_when_as_of_precedes_lmp():
    age = gestational_age(date(2026, 1, 15), date(2026, 1, 1))
    assert age.total_days == 0
    assert age.weeks == 0
    assert age.days == 0


def test_gestational_age_is_additive():
    lmp = date(2025, 11, 3)
    for offset in range(0, 300, 11):
        age = gestational_age(lmp, add_days(lmp, offset))
        assert age.total_days == offset
        assert age.weeks * 7 + age.days == age.total_days


def test_gestational_age_ignores_time_of_day():
    age = gestational_age(datetime(2026, 1, 1, 23, 59), datetime(2026, 1, 8, 0, 1))
    assert age.total_days == 7


# ─── conception_window ───────────────────────────────────────────

def test_conception_window_standard_cycle():
    window = conception_window(date(2026, 1, 1), 28)
    assert window.ovulation_estimate == date(2026, 1, 15)
    assert window.start == date(2026, 1, 12)
    assert window.end == date(2026, 1, 18)


def test_conception_window_long_cycle():
    window = conception_window(date(2026, 1, 1), 35)
    assert window.ovulation_estimate == date(2026, 1, 22)
    assert (window.end - window.start).days == 6


# ─── validate_lmp ────────────────────────────────────────────────

def test_validate_lmp_accepts_today():
    assert validate_lmp(TODAY, TODAY).valid


def test_validate_lmp_rejects_tomorrow():
    result = validate_lmp(date(2026, 10, 20), TODAY)
    assert not result.valid
    assert result.message == LMP_IN_FUTURE_MESSAGE
    assert "in the future" in result.message


def test_validate_lmp_accepts_exactly_366_days_back():
    assert validate_lmp(date(2025, 10, 18), TODAY).valid


def test_validate_lmp_rejects_367_days_back():
    result = validate_lmp(date(2025, 10, 17), TODAY)
    assert not result.valid
    assert result.message == LMP_TOO_OLD_MESSAGE
    assert "12 months" in result.message


def test_validate_lmp_rejects_very_old_dates():
    assert not validate_lmp(date(2020, 1, 1), TODAY).valid


def test_validate_lmp_accepts_every_day_in_window():
    for back in range(0, 367):
        assert validate_lmp(add_days(TODAY, -back), TODAY).valid


def test_validate_lmp_uses_civil_days():
    assert validate_lmp(datetime(2026, 10, 19, 23, 59), datetime(2026, 10, 19, 0, 1)).valid


def test_validate_lmp_defaults_to_today():
    assert validate_lmp(date.today()).valid
    assert not validate_lmp(date.today() + timedelta(days=10)).valid


# ─── trimester_from_due_date ─────────────────────────────────────

@pytest.mark.parametrize("implied_days, expected", [
    (0, Trimester.FIRST),
    (90, Trimester.FIRST),
    (91, Trimester.SECOND),
    (188, Trimester.SECOND),
    (189, Trimester.THIRD),
    (280, Trimester.THIRD),
    (300, Trimester.THIRD),
])
def test_trimester_thresholds(implied_days, expected):
    due = add_days(TODAY, 280 - implied_days)
    assert trimester_from_due_date(due, TODAY) is expected


def test_trimester_far_future_due_date_is_first():
    assert trimester_from_due_date(add_days(TODAY, 400), TODAY) is Trimester.FIRST


# ─── format_date ─────────────────────────────────────────────────

def test_format_date_utc_default():
    assert format_date(date(2026, 2, 13)) == "February 13, 2026 (GMT UTC)"


def test_format_date_reports_standard_time_offset():
    assert format_date(date(2026, 1, 15), "America/New_York") == "January 15, 2026 (GMT-05:00 EST)"


def test_format_date_reports_daylight_time_offset():
    assert format_date(date(2026, 7, 4), "America/New_York") == "July 4, 2026 (GMT-04:00 EDT)"


def test_format_date_half_hour_offset():
    assert format_date(date(2026, 3, 1), "Asia/Kolkata") == "March 1, 2026 (GMT+05:30 IST)"


def test_format_date_drops_time_of_day():
    assert format_date(datetime(2026, 11, 20, 23, 59)) == "November 20, 2026 (GMT UTC)"
