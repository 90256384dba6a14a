"""Clock — the single place the running process asks for "today".

Invariants:
    - Returns a civil date in the configured display time zone
    - Routes receive it via Depends(get_today), so tests override it instead of patching time
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from sagenest.config import get_settings


def today_in(zone_name: str) -> date:
    return datetime.now(ZoneInfo(zone_name)).date()


def get_today() -> date:
    """FastAPI dependency: today's date in the display time zone."""
    return today_in(get_settings().display_timezone)
