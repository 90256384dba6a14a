"""Calculator — validates raw calculator input and assembles a full pregnancy estimate.

Invariants:
    - Validation order per method is fixed; the first failure is returned
    - LMP: validate_lmp, then cycle length range [21, 40]
    - Conception: date not after as_of, then cycle length range
    - IVF: date not after as_of, then embryo age range [1, 7], then cycle length range
    - Dates whose derived quantities leave the calendar range fail with
      DATE_OUT_OF_RANGE_MESSAGE
    - Expected bad input yields CalculationOutcome(validation=fail), never an exception

Design Decisions:
    - Non-LMP methods derive an LMP-equivalent (due date - 280 days) so every
      method shares one code path for gestational age and conception window
    - The conception window always uses the submitted cycle length, whatever
      the method
"""

from dataclasses import dataclass

from sagenest.core.date_math import (
    DATE_OUT_OF_RANGE_MESSAGE,
    DateInput,
    add_days,
    conception_window,
    due_date_from_conception,
    due_date_from_ivf_transfer,
    due_date_from_lmp,
    gestational_age,
    normalize,
    trimester_from_due_date,
    validate_lmp,
)
from sagenest.core.domain_types import (
    CalculationMethod,
    CalendarDate,
    ConceptionWindow,
    GestationalAge,
    Trimester,
    ValidationResult,
    GESTATION_DAYS,
    MIN_CYCLE_LENGTH,
    MAX_CYCLE_LENGTH,
    MIN_EMBRYO_AGE_DAYS,
    MAX_EMBRYO_AGE_DAYS,
    REFERENCE_CYCLE_DAYS,
)
from sagenest.core.progress import (
    TRIMESTER_SUMMARIES,
    current_week,
    pregnancy_progress,
)

DEFAULT_EMBRYO_AGE_DAYS = 5

_FUTURE_DATE_LABELS = {
    CalculationMethod.CONCEPTION: "Conception date",
    CalculationMethod.IVF: "Transfer date",
}


@dataclass(frozen=True)
class PregnancyEstimate:
    method: CalculationMethod
    due_date: CalendarDate
    lmp_equivalent: CalendarDate
    gestational_age: GestationalAge
    trimester: Trimester
    summary: str
    conception_window: ConceptionWindow
    progress: float
    current_week: int


@dataclass(frozen=True)
class CalculationOutcome:
    validation: ValidationResult
    estimate: PregnancyEstimate | None = None

    @property
    def valid(self) -> bool:
        return self.validation.valid


# ─── Range / Date Checks ─────────────────────────────────────────

def validate_cycle_length(cycle_length: int) -> ValidationResult:
    if MIN_CYCLE_LENGTH <= cycle_length <= MAX_CYCLE_LENGTH:
        return ValidationResult.ok()
    return ValidationResult.fail(
        f"Cycle length must be between {MIN_CYCLE_LENGTH} and {MAX_CYCLE_LENGTH} days.",
    )


def validate_embryo_age(embryo_age_days: int) -> ValidationResult:
    if MIN_EMBRYO_AGE_DAYS <= embryo_age_days <= MAX_EMBRYO_AGE_DAYS:
        return ValidationResult.ok()
    return ValidationResult.fail(
        f"Embryo age must be between {MIN_EMBRYO_AGE_DAYS} and {MAX_EMBRYO_AGE_DAYS} days.",
    )


def validate_not_in_future(value: DateInput, as_of: DateInput, label: str) -> ValidationResult:
    if normalize(value) > normalize(as_of):
        return ValidationResult.fail(f"{label} cannot be in the future.")
    return ValidationResult.ok()


def _first_failure(*results: ValidationResult) -> ValidationResult:
    for result in results:
        if not result.valid:
            return result
    return ValidationResult.ok()


def validate_calculation_input(
    method: CalculationMethod,
    reference_date: DateInput,
    as_of: DateInput,
    cycle_length: int = REFERENCE_CYCLE_DAYS,
    embryo_age_days: int = DEFAULT_EMBRYO_AGE_DAYS,
) -> ValidationResult:
    if method == CalculationMethod.LMP:
        return _first_failure(
            validate_lmp(reference_date, as_of),
            validate_cycle_length(cycle_length),
        )
    future_check = validate_not_in_future(
        reference_date, as_of, _FUTURE_DATE_LABELS[method],
    )
    if method == CalculationMethod.CONCEPTION:
        return _first_failure(future_check, validate_cycle_length(cycle_length))
    return _first_failure(
        future_check,
        validate_embryo_age(embryo_age_days),
        validate_cycle_length(cycle_length),
    )


# ─── Estimate ────────────────────────────────────────────────────

def _due_date_for(
    method: CalculationMethod,
    reference_date: DateInput,
    cycle_length: int,
    embryo_age_days: int,
) -> CalendarDate:
    if method == CalculationMethod.LMP:
        return due_date_from_lmp(reference_date, cycle_length)
    if method == CalculationMethod.CONCEPTION:
        return due_date_from_conception(reference_date)
    return due_date_from_ivf_transfer(reference_date, embryo_age_days)


def estimate_pregnancy(
    method: CalculationMethod,
    reference_date: DateInput,
    as_of: DateInput,
    cycle_length: int = REFERENCE_CYCLE_DAYS,
    embryo_age_days: int = DEFAULT_EMBRYO_AGE_DAYS,
) -> CalculationOutcome:
    """Validate input and, when acceptable, compute every derived quantity."""
    validation = validate_calculation_input(
        method, reference_date, as_of, cycle_length, embryo_age_days,
    )
    if not validation.valid:
        return CalculationOutcome(validation=validation)

    try:
        estimate = _build_estimate(
            method, reference_date, as_of, cycle_length, embryo_age_days,
        )
    except OverflowError:
        return CalculationOutcome(
            validation=ValidationResult.fail(DATE_OUT_OF_RANGE_MESSAGE),
        )
    return CalculationOutcome(validation=validation, estimate=estimate)


def _build_estimate(
    method: CalculationMethod,
    reference_date: DateInput,
    as_of: DateInput,
    cycle_length: int,
    embryo_age_days: int,
) -> PregnancyEstimate:
    due_date = _due_date_for(method, reference_date, cycle_length, embryo_age_days)
    lmp_equivalent = (
        normalize(reference_date) if method == CalculationMethod.LMP
        else add_days(due_date, -GESTATION_DAYS)
    )
    age = gestational_age(lmp_equivalent, as_of)
    trimester = trimester_from_due_date(due_date, as_of)

    return PregnancyEstimate(
        method=method,
        due_date=due_date,
        lmp_equivalent=lmp_equivalent,
        gestational_age=age,
        trimester=trimester,
        summary=TRIMESTER_SUMMARIES[trimester],
        conception_window=conception_window(lmp_equivalent, cycle_length),
        progress=pregnancy_progress(age.total_days),
        current_week=current_week(due_date, as_of),
    )
