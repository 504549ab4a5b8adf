from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from git_standup.options import AUTHOR_ALL, MATCH_ALL_AUTHORS, StandupOptions
from git_standup.query.date_window import DateWindow


SIGNATURE_FIELD_COLOR = " %C(yellow)gpg: %G?%Creset"
SIGNATURE_FIELD_PLAIN = " gpg: %G?"

# Tab separated, consumed by reporting.summary.
ROW_FORMAT = "%h%x09%an%x09{date}"


def pretty_format(*, color: bool, author_date: bool, show_signature: bool) -> str:
    date_field = "%ad" if author_date else "%cd"
    if color:
        fmt = f"%Cred%h%Creset - %s %Cgreen({date_field}) %C(bold blue)<%an>%Creset"
    else:
        fmt = f"%h - %s ({date_field}) <%an>"
    if show_signature:
        fmt += SIGNATURE_FIELD_COLOR if color else SIGNATURE_FIELD_PLAIN
    return fmt


@dataclass(frozen=True)
class LogQuery:
    """One `git log` request; `to_args()` turns it into an argument list."""

    since: str
    author: str
    until: Optional[str] = None
    after: Optional[str] = None
    branch: Optional[str] = None
    date_format: str = "relative"
    author_date: bool = False
    show_signature: bool = False
    diff_stat: bool = False
    color: bool = False
    pretty: Optional[str] = None

    @property
    def template(self) -> str:
        if self.pretty is not None:
            return self.pretty
        return pretty_format(
            color=self.color,
            author_date=self.author_date,
            show_signature=self.show_signature,
        )

    def to_args(self) -> List[str]:
        args: List[str] = ["--no-pager", "log"]
        args.append("--first-parent" if self.branch else "--all")
        args.append("--no-merges")
        args.append(f"--since={self.since}")
        if self.until:
            args.append(f"--until={self.until}")
        if self.after:
            args.append(f"--after={self.after}")
        args.append(f"--author={self.author}")
        args.extend(["--abbrev-commit", "--oneline"])
        args.append(f"--pretty=format:{self.template}")
        args.append(f"--date={self.date_format}")
        args.append(f"--color={'always' if self.color else 'never'}")
        if self.diff_stat:
            args.append("--stat")
        if self.branch:
            # Branch names are never parsed as options.
            args.extend(["--end-of-options", self.branch])
        return args

    def for_rows(self) -> "LogQuery":
        """Same filters, machine-readable one-line-per-commit output."""
        date_field = "%ad" if self.author_date else "%cd"
        return dataclasses.replace(
            self,
            pretty=ROW_FORMAT.format(date=date_field),
            date_format="short",
            color=False,
            diff_stat=False,
        )


def resolve_author(repo: Path, options: StandupOptions, git) -> str:
    """Author pattern for `repo`; the configured identity is looked up per repository."""
    if options.author is not None:
        if options.author == AUTHOR_ALL:
            return MATCH_ALL_AUTHORS
        return options.author
    return git.get_user_name(repo) or MATCH_ALL_AUTHORS


def build_log_query(
    repo: Path,
    window: DateWindow,
    options: StandupOptions,
    git,
    *,
    color: bool = False,
) -> Tuple[LogQuery, str]:
    author = resolve_author(repo, options, git)
    query = LogQuery(
        since=window.since,
        until=window.until,
        after=window.after,
        author=author,
        branch=options.branch or None,
        date_format=options.date_format,
        author_date=options.author_date,
        show_signature=options.show_signature,
        diff_stat=options.diff_stat,
        color=color,
    )
    return query, author
