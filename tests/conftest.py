from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest


def _run(cmd: list[str], cwd: Path | None = None, env: Dict[str, str] | None = None) -> str:
    result = subprocess.run(
        cmd,
        cwd=str(cwd) if cwd else None,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )
    return (result.stdout or "").strip()


def _git_env() -> Dict[str, str]:
    env = os.environ.copy()
    env["GIT_CONFIG_NOSYSTEM"] = "1"
    env.pop("GIT_DIR", None)
    env.pop("GIT_WORK_TREE", None)
    return env


def create_git_repo(path: Path, *, user_name: str = "Test User", user_email: str = "test@example.com") -> Path:
    path.mkdir(parents=True, exist_ok=True)
    env = _git_env()
    _run(["git", "init", "-q"], cwd=path, env=env)
    _run(["git", "config", "user.name", user_name], cwd=path, env=env)
    _run(["git", "config", "user.email", user_email], cwd=path, env=env)
    _run(["git", "config", "commit.gpgsign", "false"], cwd=path, env=env)
    return path


def git_commit(
    repo: Path,
    message: str,
    *,
    filename: str = "notes.txt",
    author_name: Optional[str] = None,
    author_email: str = "someone@example.com",
) -> None:
    target = repo / filename
    previous = target.read_text(encoding="utf-8") if target.exists() else ""
    target.write_text(previous + message + "\n", encoding="utf-8")

    env = _git_env()
    if author_name:
        env["GIT_AUTHOR_NAME"] = author_name
        env["GIT_AUTHOR_EMAIL"] = author_email
        env["GIT_COMMITTER_NAME"] = author_name
        env["GIT_COMMITTER_EMAIL"] = author_email
    _run(["git", "add", filename], cwd=repo, env=env)
    _run(["git", "commit", "-q", "-m", message], cwd=repo, env=env)


@pytest.fixture
def require_git() -> None:
    if shutil.which("git") is None:
        pytest.skip("git is not installed")


@pytest.fixture
def isolated_git(monkeypatch, tmp_path) -> Path:
    """Stop git from finding repositories above `tmp_path`."""
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)
    for name in ("GIT_STANDUP_WEEKDAYS", "GIT_STANDUP_MAX_DEPTH", "GIT_STANDUP_DATE_FORMAT", "GIT_STANDUP_WHITELIST"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def make_repo(require_git, isolated_git) -> Callable[..., Path]:
    def factory(relative: str, **kwargs) -> Path:
        return create_git_repo(isolated_git / relative, **kwargs)

    return factory


class FakeGit:
    """In-memory stand-in for GitCli keyed by repository path."""

    def __init__(
        self,
        *,
        names: Optional[Dict[Path, str]] = None,
        logs: Optional[Dict[Path, str]] = None,
        invalid: Optional[set] = None,
        toplevel: Optional[Path] = None,
    ):
        self.names = names or {}
        self.logs = logs or {}
        self.invalid = invalid or set()
        self.toplevel = toplevel
        self.log_calls: list = []
        self.fetched: list = []

    def get_toplevel(self, cwd):
        return self.toplevel

    def is_valid_repository(self, repo) -> bool:
        return Path(repo) not in self.invalid

    def get_user_name(self, repo) -> str:
        return self.names.get(Path(repo), "")

    def fetch_all(self, repo) -> None:
        self.fetched.append(Path(repo))

    def run_log(self, args, repo) -> str:
        self.log_calls.append((Path(repo), list(args)))
        return self.logs.get(Path(repo), "")


@pytest.fixture
def fake_git_factory() -> Callable[..., FakeGit]:
    return FakeGit
