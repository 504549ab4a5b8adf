"""Run each repository's query and print or record the result.

Per repository the renderer moves through:

    discovered -> validated | skipped
    validated  -> queried -> rendered | suppressed

Invalid repositories and failing queries never stop the run; they are
skipped or rendered as "no activity".
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

from git_standup.options import MATCH_ALL_AUTHORS, StandupOptions
from git_standup.query.date_window import DateWindow
from git_standup.query.log_query import LogQuery, build_log_query
from git_standup.reporting.report_paths import append_report, reset_report


STATE_SKIPPED = "skipped"
STATE_RENDERED = "rendered"
STATE_SUPPRESSED = "suppressed"

NO_ACTIVITY_LINE = "No activity found!"

BOLD = "\033[1m"
UNDERLINE = "\033[4m"
YELLOW = "\033[33m"
NORMAL = "\033[0m"


def supports_color(stream: TextIO) -> bool:
    if os.getenv("NO_COLOR"):
        return False
    if (os.getenv("TERM") or "").strip().lower() == "dumb":
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def no_commits_message(author: str) -> str:
    if author == MATCH_ALL_AUTHORS:
        return "No commits found during this period."
    return f"No commits from {author} during this period."


@dataclass(frozen=True)
class RepositoryVisit:
    path: Path
    state: str
    author: str = ""
    output: str = ""
    query: Optional[LogQuery] = None


class StandupRenderer:
    """Visits repositories one at a time and emits their standup output."""

    def __init__(
        self,
        options: StandupOptions,
        window: DateWindow,
        git,
        *,
        out: Optional[TextIO] = None,
        report_file: Optional[Path] = None,
    ):
        self.options = options
        self.window = window
        self.git = git
        self.out = out or sys.stdout
        self.report_file = report_file
        if options.report and report_file is None:
            raise ValueError("report mode needs a report file")

        if options.report:
            self.color = False
        elif options.color is not None:
            self.color = options.color
        else:
            self.color = supports_color(self.out)

    def _emit(self, text: str = "") -> None:
        print(text, file=self.out)

    def _header(self, repo: Path) -> str:
        if self.color:
            return f"{BOLD}{UNDERLINE}{YELLOW}{repo}{NORMAL}"
        return str(repo)

    def _warning(self, text: str) -> str:
        if self.color:
            return f"{YELLOW}{text}{NORMAL}"
        return text

    def visit(self, repo: Path) -> RepositoryVisit:
        if not self.git.is_valid_repository(repo):
            return RepositoryVisit(path=repo, state=STATE_SKIPPED)

        if self.options.fetch:
            self.git.fetch_all(repo)

        query, author = build_log_query(repo, self.window, self.options, self.git, color=self.color)
        output = self.git.run_log(query.to_args(), repo)
        has_output = bool(output.strip())

        if self.options.report:
            if has_output:
                append_report(self.report_file, f"{repo}\n{output}\n")
            elif not self.options.silent:
                append_report(self.report_file, f"{repo}\n{NO_ACTIVITY_LINE}\n")
        else:
            if has_output:
                self._emit(self._header(repo))
                self._emit(output)
                self._emit()
            elif not self.options.silent:
                self._emit(self._header(repo))
                self._emit(self._warning(no_commits_message(author)))
                self._emit()

        state = STATE_RENDERED if has_output or not self.options.silent else STATE_SUPPRESSED
        return RepositoryVisit(path=repo, state=state, author=author, output=output, query=query)

    def run(self, repos: Iterable[Path]) -> List[RepositoryVisit]:
        if self.options.report:
            reset_report(self.report_file)

        visits: List[RepositoryVisit] = []
        for repo in repos:
            visits.append(self.visit(repo))

        if self.options.report:
            self._emit(f"Report saved to {self.report_file}")
        return visits
