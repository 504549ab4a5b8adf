from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


DEFAULT_WEEKDAYS = "Mon-Fri"
DEFAULT_MAX_DEPTH = 2
DEFAULT_DATE_FORMAT = "relative"

AUTHOR_ALL = "all"
MATCH_ALL_AUTHORS = ".*"


@dataclass(frozen=True)
class StandupOptions:
    """Parsed command-line options for one standup run.

    `days_since` and `days_until` use 0 as the "not given" value.
    `author=None` means "the identity configured in each repository".
    """

    author: Optional[str] = None
    branch: Optional[str] = None
    weekdays: Optional[str] = None
    max_depth: int = DEFAULT_MAX_DEPTH
    force_recursion: bool = False
    follow_symlinks: bool = False
    days_since: int = 0
    days_until: int = 0
    date_format: str = DEFAULT_DATE_FORMAT
    show_signature: bool = False
    fetch: bool = False
    silent: bool = False
    report: bool = False
    diff_stat: bool = False
    after: Optional[str] = None
    before: Optional[str] = None
    author_date: bool = False
    summary: bool = False
    color: Optional[bool] = None
    verbose: bool = False
