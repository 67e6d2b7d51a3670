"""Date formatting used by the templates."""
import math
from datetime import datetime, timezone
from typing import Optional

MINUTES_IN_DAY = 1440
MINUTES_IN_MONTH = 43200
MINUTES_IN_TWO_MONTHS = 86400


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _round(value: float) -> int:
    return int(math.floor(value + 0.5))


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _calendar_months(earlier: datetime, later: datetime) -> int:
    """Whole calendar months from ``earlier`` to ``later``."""
    months = (later.year - earlier.year) * 12 + later.month - earlier.month
    if (later.day, later.time()) < (earlier.day, earlier.time()):
        months -= 1
    return max(months, 0)


def distance_in_words(earlier: datetime, later: datetime) -> str:
    """Approximate distance between two instants, e.g. ``about 2 hours``."""
    minutes = _round((later - earlier).total_seconds() / 60)
    if minutes < 1:
        return "less than a minute"
    if minutes < 2:
        return "1 minute"
    if minutes < 45:
        return f"{minutes} minutes"
    if minutes < 90:
        return "about 1 hour"
    if minutes < MINUTES_IN_DAY:
        return f"about {_round(minutes / 60)} hours"
    if minutes < 2520:
        return "1 day"
    if minutes < MINUTES_IN_MONTH:
        return _plural(_round(minutes / MINUTES_IN_DAY), "day")
    if minutes < MINUTES_IN_TWO_MONTHS:
        return "about " + _plural(_round(minutes / MINUTES_IN_MONTH), "month")

    months = _calendar_months(earlier, later)
    if months < 12:
        return _plural(_round(minutes / MINUTES_IN_MONTH), "month")
    years, remainder = divmod(months, 12)
    if remainder < 3:
        return "about " + _plural(years, "year")
    if remainder < 9:
        return "over " + _plural(years, "year")
    return f"almost {years + 1} years"


def relative_date(value: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Distance from ``now`` with a suffix, e.g. ``3 days ago``."""
    if value is None:
        return ""
    now = _aware(now or datetime.now(timezone.utc))
    value = _aware(value)
    if value <= now:
        return distance_in_words(value, now) + " ago"
    return "in " + distance_in_words(now, value)


def absolute_date(value: Optional[datetime]) -> str:
    """``Jan 05, 2024 14:30``"""
    return value.strftime("%b %d, %Y %H:%M") if value else ""


def long_date(value: Optional[datetime]) -> str:
    return value.strftime("%B %d, %Y") if value else ""


def short_date(value: Optional[datetime]) -> str:
    return value.strftime("%b %d, %Y") if value else ""
