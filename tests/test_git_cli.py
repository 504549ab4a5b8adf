import shutil

import pytest

from git_standup.reporting import git_cli
from git_standup.reporting.git_cli import GitCli, GitCliError, GitCliNotFound, run_git

from conftest import git_commit


def test_missing_git_executable(monkeypatch):
    monkeypatch.setattr(git_cli.shutil, "which", lambda name: None)
    with pytest.raises(GitCliNotFound):
        run_git(["status"])


def test_run_git_raises_on_failure(make_repo):
    repo = make_repo("alpha")
    with pytest.raises(GitCliError):
        run_git(["rev-parse", "--verify", "does-not-exist"], cwd=repo)


def test_verbose_trace_goes_to_stderr(make_repo, capsys):
    repo = make_repo("alpha")
    run_git(["rev-parse", "--git-dir"], cwd=repo, verbose=True)
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "[git] -> " in captured.err
    assert "[git] <- exit=0" in captured.err


def test_toplevel_and_validity(make_repo, isolated_git):
    repo = make_repo("alpha")
    sub = repo / "src"
    sub.mkdir()
    git = GitCli()

    assert git.get_toplevel(sub).resolve() == repo.resolve()
    assert git.is_valid_repository(repo)
    assert git.get_toplevel(isolated_git) is None
    assert not git.is_valid_repository(isolated_git)
    assert not git.is_valid_repository(isolated_git / "missing")


def test_user_name(make_repo):
    repo = make_repo("alpha", user_name="Alice Example")
    assert GitCli().get_user_name(repo) == "Alice Example"


def test_log_failure_is_empty_output(make_repo):
    repo = make_repo("alpha")
    git_commit(repo, "first")
    shutil.rmtree(repo / ".git" / "objects")

    assert GitCli().run_log(["--no-pager", "log", "--all"], repo) == ""


def test_fetch_without_remotes_is_ignored(make_repo):
    repo = make_repo("alpha")
    GitCli().fetch_all(repo)
