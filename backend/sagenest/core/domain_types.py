"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CalendarDate is datetime.date: time-of-day never reaches domain logic
    - GestationalAge: weeks * 7 + days == total_days, total_days >= 0
    - ConceptionWindow: start/end sit exactly 3 days around the ovulation estimate
    - ValidationResult.message is set only when valid is False
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - Frozen dataclasses over dicts: results are values, never mutated after return
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import TypeAlias


CalendarDate: TypeAlias = date


# ─── Clinical Constants ─────────────────────────────────────────

GESTATION_DAYS = 280            # LMP to due date, 28-day cycle (Naegele)
CONCEPTION_TO_DUE_DAYS = 266    # fertilization to due date
REFERENCE_CYCLE_DAYS = 28
LUTEAL_PHASE_DAYS = 14          # ovulation sits this many days before next period
CONCEPTION_WINDOW_MARGIN_DAYS = 3
LMP_LOOKBACK_DAYS = 366         # "12 months", tolerant of a leap day
FIRST_TRIMESTER_END_DAYS = 13 * 7
SECOND_TRIMESTER_END_DAYS = 27 * 7
TOTAL_WEEKS = 40

MIN_CYCLE_LENGTH = 21
MAX_CYCLE_LENGTH = 40
MIN_EMBRYO_AGE_DAYS = 1
MAX_EMBRYO_AGE_DAYS = 7


# ─── Enums ───────────────────────────────────────────────────────

class Trimester(str, Enum):
    """Pregnancy trimester derived from implied gestational days."""
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"

    @property
    def label(self) -> str:
        return f"{self.value.capitalize()} trimester"


class CalculationMethod(str, Enum):
    """Reference point the user dates the pregnancy from."""
    LMP = "lmp"
    CONCEPTION = "conception"
    IVF = "ivf"


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class GestationalAge:
    total_days: int

    @property
    def weeks(self) -> int:
        return self.total_days // 7

    @property
    def days(self) -> int:
        return self.total_days % 7


@dataclass(frozen=True)
class ConceptionWindow:
    start: CalendarDate
    ovulation_estimate: CalendarDate
    end: CalendarDate


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    message: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, message: str) -> "ValidationResult":
        return cls(valid=False, message=message)
