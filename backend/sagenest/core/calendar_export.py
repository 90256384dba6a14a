"""Calendar Export — single-event iCalendar document for the estimated due date.

Invariants:
    - Lines are CRLF-terminated (RFC 5545 section 3.1)
    - The event is all-day: DTSTART is a DATE, DTEND is the following day
    - UID is derived from the due date, so the same date always yields the same document
    - date.max has no following day; validate_exportable_due_date rejects it
"""

from datetime import date

from sagenest.core.date_math import (
    DATE_OUT_OF_RANGE_MESSAGE,
    DateInput,
    add_days,
    normalize,
)
from sagenest.core.domain_types import ValidationResult

PRODUCT_ID = "-//SageNest//Due Date Calculator//EN"
EVENT_SUMMARY = "Estimated Due Date"
EVENT_DESCRIPTION = "SageNest estimated due date reminder"
ICS_FILENAME = "sagenest-due-date.ics"


def validate_exportable_due_date(due_date: DateInput) -> ValidationResult:
    if normalize(due_date) >= date.max:
        return ValidationResult.fail(DATE_OUT_OF_RANGE_MESSAGE)
    return ValidationResult.ok()


def build_due_date_ics(due_date: DateInput) -> str:
    day = normalize(due_date)
    stamp = day.strftime("%Y%m%d")
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODUCT_ID}",
        "BEGIN:VEVENT",
        f"UID:due-date-{stamp}@sagenest",
        f"DTSTAMP:{stamp}T000000Z",
        f"DTSTART;VALUE=DATE:{stamp}",
        f"DTEND;VALUE=DATE:{add_days(day, 1).strftime('%Y%m%d')}",
        f"SUMMARY:{EVENT_SUMMARY}",
        f"DESCRIPTION:{EVENT_DESCRIPTION}",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(lines) + "\r\n"
