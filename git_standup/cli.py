#!/usr/bin/env python3
"""git-standup: recall what you did on the last working day.

Finds git repositories under the current directory (or uses the one you are
in) and lists their recent non-merge commits:

    git standup                 # your commits since yesterday (or last Friday on Monday)
    git standup -a all -d 3     # everyone's commits from the last three days
    git standup -r -s           # write git-standup-report.txt, skipping idle repos
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from dotenv import load_dotenv

from git_standup.config import ConfigError, EnvDefaults, load_env_defaults
from git_standup.discovery.locator import locate_repositories
from git_standup.options import StandupOptions
from git_standup.query.date_window import resolve_date_window
from git_standup.reporting.git_cli import GitCli, GitCliNotFound, ensure_git_available
from git_standup.reporting.renderer import StandupRenderer
from git_standup.reporting.report_paths import append_report, report_path
from git_standup.reporting.summary import build_summary, collect_rows, format_summary


HELP_HINT = "Run `git standup -h` for help."


class StandupArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        print(f"{self.prog}: error: {message}", file=sys.stderr)
        print(HELP_HINT, file=sys.stderr)
        raise SystemExit(1)


def build_parser(env: Optional[EnvDefaults] = None) -> StandupArgumentParser:
    env = env or EnvDefaults()
    parser = StandupArgumentParser(
        prog="git-standup",
        description="Recall what you did on the last working day.",
    )
    parser.add_argument('-a', '--author', default=None, help='Author to show commits for; "all" for everyone (default: git config user.name of each repository)')
    parser.add_argument('-b', '--branch', default=None, help='Only show commits on the first-parent history of this branch (default: all branches)')
    parser.add_argument('-w', '--weekdays', default=env.weekdays, help='Weekday range, e.g. "Sun-Thu" (default: Mon-Fri)')
    parser.add_argument('-m', '--max-depth', type=int, default=env.max_depth, help=f'Depth to search for repositories (default: {env.max_depth})')
    parser.add_argument('-F', '--force-recursion', action='store_true', help='Search for repositories even when run inside one')
    parser.add_argument('-L', '--symlinks', dest='follow_symlinks', action='store_true', help='Follow symbolic links while searching')
    parser.add_argument('-d', '--days', dest='days_since', type=int, default=0, help='Show commits from this many days ago')
    parser.add_argument('-u', '--until-days', dest='days_until', type=int, default=0, help='Show commits until this many days ago')
    parser.add_argument('-D', '--date-format', default=env.date_format, help=f'git log date format: relative, local, default, iso, rfc, short, raw (default: {env.date_format})')
    parser.add_argument('-g', '--gpg', dest='show_signature', action='store_true', help='Show GPG signature status')
    parser.add_argument('-f', '--fetch', action='store_true', help='Fetch all remotes before listing commits')
    parser.add_argument('-s', '--silent', action='store_true', help='Do not mention repositories without activity')
    parser.add_argument('-r', '--report', action='store_true', help='Write the output to git-standup-report.txt in the current directory')
    parser.add_argument('-c', '--diff-stat', action='store_true', help='Show the files changed by each commit')
    parser.add_argument('-A', '--after', default=None, help='Show commits after this date')
    parser.add_argument('-B', '--before', default=None, help='Show commits before this date')
    parser.add_argument('-R', '--author-date', action='store_true', help='Show the author date instead of the committer date')
    parser.add_argument('--summary', action='store_true', help='Print commit counts per repository and author')
    parser.add_argument('--no-color', dest='color', action='store_const', const=False, default=None, help='Disable colored output')
    parser.add_argument('--verbose', action='store_true', default=env.verbose, help='Trace git commands on stderr')
    return parser


def options_from_args(args: argparse.Namespace) -> StandupOptions:
    return StandupOptions(
        author=args.author,
        branch=args.branch,
        weekdays=args.weekdays,
        max_depth=args.max_depth,
        force_recursion=args.force_recursion,
        follow_symlinks=args.follow_symlinks,
        days_since=args.days_since,
        days_until=args.days_until,
        date_format=args.date_format,
        show_signature=args.show_signature,
        fetch=args.fetch,
        silent=args.silent,
        report=args.report,
        diff_stat=args.diff_stat,
        after=args.after,
        before=args.before,
        author_date=args.author_date,
        summary=args.summary,
        color=args.color,
        verbose=args.verbose,
    )


def main(
    argv: Optional[List[str]] = None,
    *,
    cwd: Optional[Path] = None,
    out: Optional[TextIO] = None,
) -> int:
    load_dotenv()
    out = out or sys.stdout

    try:
        env = load_env_defaults()
    except ConfigError as e:
        print(f"git-standup: error: {e}", file=sys.stderr)
        return 1

    args = build_parser(env).parse_args(argv)
    options = options_from_args(args)

    try:
        ensure_git_available()
    except GitCliNotFound as e:
        print(f"git-standup: error: {e}", file=sys.stderr)
        return 1

    git = GitCli(verbose=options.verbose)
    cwd = Path(cwd) if cwd is not None else Path(os.getcwd())

    repos = locate_repositories(cwd, options, git, whitelist_filename=env.whitelist_filename)
    if not repos:
        print("You must be inside a git repository!", file=out)
        return 0

    window = resolve_date_window(options)
    if options.verbose:
        print(f"[standup] since={window.since} until={window.until} after={window.after}", file=sys.stderr)
        print(f"[standup] {len(repos)} repositories", file=sys.stderr)

    report_file = report_path(cwd) if options.report else None
    renderer = StandupRenderer(options, window, git, out=out, report_file=report_file)
    visits = renderer.run(repos)

    if options.summary:
        text = format_summary(build_summary(collect_rows(visits, git)))
        if report_file is not None:
            append_report(report_file, f"\n{text}\n")
        else:
            print(text, file=out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
