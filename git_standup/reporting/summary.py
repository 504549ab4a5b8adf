"""Per-repository commit counts for the standup window.

Each visited repository's query is re-run with a tab separated format
(`hash<TAB>author<TAB>YYYY-MM-DD`) and the rows are tabulated with pandas.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

import pandas as pd

from git_standup.reporting.renderer import STATE_SKIPPED, RepositoryVisit


SUMMARY_COLUMNS = ["repository", "author", "commits", "first_date", "last_date"]


def parse_rows(repository: str, log_output: str) -> List[Dict]:
    rows: List[Dict] = []
    for line in log_output.splitlines():
        parts = line.split("\t")
        if len(parts) != 3:
            continue
        commit, author, day = (p.strip() for p in parts)
        if not commit:
            continue
        rows.append({'repository': repository, 'commit': commit, 'author': author, 'date': day})
    return rows


def collect_rows(visits: Iterable[RepositoryVisit], git) -> List[Dict]:
    rows: List[Dict] = []
    for visit in visits:
        if visit.state == STATE_SKIPPED or visit.query is None:
            continue
        output = git.run_log(visit.query.for_rows().to_args(), visit.path)
        rows.extend(parse_rows(str(visit.path), output))
    return rows


def build_summary(rows: List[Dict]) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    df = pd.DataFrame(rows)
    summary = df.groupby(['repository', 'author']).agg(
        commits=('commit', 'count'),
        first_date=('date', 'min'),
        last_date=('date', 'max'),
    ).reset_index()
    summary = summary.sort_values(['repository', 'commits', 'author'], ascending=[True, False, True])
    return summary[SUMMARY_COLUMNS].reset_index(drop=True)


def format_summary(summary: pd.DataFrame) -> str:
    if summary.empty:
        return "No commits to summarize."
    total = int(summary['commits'].sum())
    table = summary.to_string(index=False)
    return f"{table}\n\nTotal commits: {total}"
