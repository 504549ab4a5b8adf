from __future__ import annotations

from pathlib import Path
from typing import Union


TOOL_NAME = "git-standup"
REPORT_FILENAME = f"{TOOL_NAME}-report.txt"


def report_path(invocation_dir: Union[str, Path]) -> Path:
    """Return the absolute report path for a run started in `invocation_dir`.

    Layout:
      <invocation_dir>/git-standup-report.txt
    """

    return (Path(invocation_dir).expanduser() / REPORT_FILENAME).resolve()


def reset_report(path: Path) -> Path:
    """Create `path` empty, discarding the previous run's report."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


def append_report(path: Path, text: str) -> None:
    with path.open("a", encoding="utf-8") as handle:
        handle.write(text)
