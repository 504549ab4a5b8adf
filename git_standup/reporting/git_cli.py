from __future__ import annotations

import shutil
import subprocess
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence, Union

from git_standup.config import env_flag, git_timeout_seconds


PathLike = Union[str, Path]


class GitCliNotFound(RuntimeError):
    pass


class GitCliError(RuntimeError):
    pass


def ensure_git_available() -> str:
    git = shutil.which("git")
    if not git:
        raise GitCliNotFound("git not found in PATH. Install git and make sure it is on your PATH.")
    return git


def run_git(
    args: Sequence[str],
    *,
    cwd: Optional[PathLike] = None,
    timeout: Optional[float] = None,
    verbose: bool = False,
) -> str:
    """Run `git <args>` in `cwd` and return stdout.

    Raises GitCliError on a non-zero exit, a timeout, or an unusable `cwd`.
    Trailing newlines are stripped; leading whitespace is kept because log
    output may be indented.
    """
    git = ensure_git_available()
    cmd: List[str] = [git, *args]

    verbose = verbose or env_flag("GIT_STANDUP_VERBOSE") or env_flag("GIT_STANDUP_DEBUG")
    if timeout is None:
        timeout = git_timeout_seconds()

    if verbose:
        pretty = " ".join(cmd)
        where = f" (cwd={cwd})" if cwd else ""
        if timeout:
            print(f"[git] -> {pretty}{where} (timeout={timeout}s)", file=sys.stderr)
        else:
            print(f"[git] -> {pretty}{where}", file=sys.stderr)
        start = time.perf_counter()

    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise GitCliError(
            f"Timed out while running git. Command: {' '.join(cmd)}. "
            "Tip: raise GIT_STANDUP_GIT_TIMEOUT_SECONDS or unset it."
        )
    except OSError as e:
        # Missing or unreadable working directory.
        raise GitCliError(f"Cannot run git in {cwd}: {e}")

    if verbose:
        elapsed = time.perf_counter() - start
        print(f"[git] <- exit={proc.returncode} ({elapsed:.2f}s)", file=sys.stderr)
    if proc.returncode != 0:
        stderr = (proc.stderr or "").strip()
        msg = stderr or f"git exited with code {proc.returncode}"
        raise GitCliError(msg)
    return (proc.stdout or "").rstrip("\n")


class GitCli:
    """The git operations a standup run needs, each scoped to an explicit directory."""

    def __init__(self, *, verbose: bool = False, timeout: Optional[float] = None):
        self.verbose = verbose
        self.timeout = timeout

    def run(self, args: Sequence[str], cwd: PathLike) -> str:
        return run_git(args, cwd=cwd, timeout=self.timeout, verbose=self.verbose)

    def get_toplevel(self, cwd: PathLike) -> Optional[Path]:
        try:
            out = self.run(["rev-parse", "--show-toplevel"], cwd).strip()
        except GitCliError:
            return None
        return Path(out) if out else None

    def is_valid_repository(self, repo: PathLike) -> bool:
        try:
            return bool(self.run(["rev-parse", "--git-dir"], repo).strip())
        except GitCliError:
            return False

    def get_user_name(self, repo: PathLike) -> str:
        try:
            return self.run(["config", "user.name"], repo).strip()
        except GitCliError:
            return ""

    def fetch_all(self, repo: PathLike) -> None:
        try:
            self.run(["fetch", "--all"], repo)
        except GitCliError as e:
            if self.verbose:
                print(f"[git] fetch failed in {repo}: {e}", file=sys.stderr)

    def run_log(self, args: Sequence[str], repo: PathLike) -> str:
        try:
            return self.run(args, repo)
        except GitCliError as e:
            if self.verbose:
                print(f"[git] log failed in {repo}: {e}", file=sys.stderr)
            return ""
