"""Date window for the standup query.

The window is expressed in git's approxidate vocabulary ("3 days ago",
"yesterday", "last Fri") and handed to `git log` unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from git_standup.options import DEFAULT_WEEKDAYS, StandupOptions


# English names so the comparison does not depend on the process locale.
WEEKDAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass(frozen=True)
class DateWindow:
    since: str
    until: Optional[str] = None
    after: Optional[str] = None


def parse_weekday_range(value: Optional[str]) -> Tuple[str, str]:
    """Split "Start-End", falling back to Mon-Fri when a side is missing."""
    default_start, default_end = DEFAULT_WEEKDAYS.split("-", 1)
    raw = (value or "").strip()
    if "-" not in raw:
        return default_start, default_end
    start, end = (part.strip() for part in raw.split("-", 1))
    if not start or not end:
        return default_start, default_end
    return start, end


def is_weekday(today: date, name: str) -> bool:
    wanted = name.strip().casefold()
    idx = today.weekday()
    return wanted in (WEEKDAY_ABBREVIATIONS[idx].casefold(), WEEKDAY_NAMES[idx].casefold())


def _days_ago(days: int) -> str:
    return f"{days} days ago"


def resolve_since(options: StandupOptions, today: Optional[date] = None) -> str:
    if options.days_since:
        return _days_ago(options.days_since)

    start, end = parse_weekday_range(options.weekdays)
    if is_weekday(today or date.today(), start):
        return f"last {end}"
    return "yesterday"


def resolve_until(options: StandupOptions) -> Optional[str]:
    if options.days_until:
        return _days_ago(options.days_until)
    if options.before:
        return options.before
    return None


def resolve_date_window(options: StandupOptions, today: Optional[date] = None) -> DateWindow:
    return DateWindow(
        since=resolve_since(options, today),
        until=resolve_until(options),
        after=options.after or None,
    )
