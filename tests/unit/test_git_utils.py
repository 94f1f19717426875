from __future__ import annotations

import subprocess

import pytest

from gitocd.core.errors import GitCommandError
from gitocd.utils import git as git_utils
from gitocd.utils.git import count_unpushed_commits, get_repo_status, parse_porcelain, run_git


def test_parse_untracked_and_modified() -> None:
    untracked, modified = parse_porcelain("?? a.txt\n M b.txt\n")

    assert untracked == ["a.txt"]
    assert modified == ["b.txt"]


def test_every_non_blank_code_counts_as_modified() -> None:
    output = "\n".join([
        "M  staged.txt",
        " M unstaged.txt",
        "MM both.txt",
        "A  added.txt",
        " D deleted.txt",
        "R  old.txt -> new.txt",
        "C  copy.txt",
        "UU conflict.txt",
    ])

    untracked, modified = parse_porcelain(output)

    assert untracked == []
    assert modified == [
        "staged.txt",
        "unstaged.txt",
        "both.txt",
        "added.txt",
        "deleted.txt",
        "old.txt -> new.txt",
        "copy.txt",
        "conflict.txt",
    ]


def test_order_follows_output() -> None:
    untracked, modified = parse_porcelain("?? z\n M y\n?? a\n M b\n")

    assert untracked == ["z", "a"]
    assert modified == ["y", "b"]


def test_short_and_blank_lines_are_skipped() -> None:
    untracked, modified = parse_porcelain("\n?? \nM\n M  \t\n?? ok\n")

    assert untracked == ["ok"]
    assert modified == []


def test_empty_output_is_clean() -> None:
    assert parse_porcelain("") == ([], [])


def fake_run_git(responses):
    def run(repo_path, args, **kwargs):
        return responses.get(args[0], "")
    return run


def test_no_upstream_means_zero_ahead(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(git_utils, "run_git", fake_run_git({"rev-parse": ""}))

    assert count_unpushed_commits("/repo") == 0


def test_no_upstream_message_means_zero_ahead(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(git_utils, "run_git", fake_run_git({
        "rev-parse": "fatal: no upstream configured for branch 'main'\n",
        "rev-list": "7\n",
    }))

    assert count_unpushed_commits("/repo") == 0


def test_ahead_count_is_parsed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(git_utils, "run_git", fake_run_git({
        "rev-parse": "origin/main\n",
        "rev-list": "3\n",
    }))

    assert count_unpushed_commits("/repo") == 3


def test_unparsable_ahead_count_defaults_to_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(git_utils, "run_git", fake_run_git({
        "rev-parse": "origin/main\n",
        "rev-list": "garbage",
    }))

    assert count_unpushed_commits("/repo") == 0


def test_get_repo_status_combines_queries(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(git_utils, "run_git", fake_run_git({
        "status": "?? new.txt\n M changed.txt\n",
        "rev-parse": "origin/main\n",
        "rev-list": "2\n",
    }))

    status = get_repo_status("/repo")

    assert status.untracked_files == ("new.txt",)
    assert status.modified_files == ("changed.txt",)
    assert status.unpushed_commits == 2
    assert not status.is_clean


def test_run_git_non_zero_exit_is_empty_output(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(command, **kwargs):
        raise subprocess.CalledProcessError(128, command, output=b"partial", stderr=b"fatal")

    monkeypatch.setattr(git_utils.subprocess, "run", fake_run)

    assert run_git("/repo", ["status", "--porcelain"]) == ""


def test_run_git_spawn_failure_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(command, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", "git")

    monkeypatch.setattr(git_utils.subprocess, "run", fake_run)

    with pytest.raises(GitCommandError) as excinfo:
        run_git("/repo", ["status"])
    assert excinfo.value.cwd == "/repo"
    assert excinfo.value.command == ["git", "status"]


def test_run_git_timeout_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(command, **kwargs):
        raise subprocess.TimeoutExpired(command, kwargs["timeout"])

    monkeypatch.setattr(git_utils.subprocess, "run", fake_run)

    with pytest.raises(GitCommandError, match="timed out"):
        run_git("/repo", ["status"], timeout=5)


def test_run_git_rejects_oversized_output(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(command, **kwargs):
        return subprocess.CompletedProcess(command, 0, stdout=b"x" * 11, stderr=b"")

    monkeypatch.setattr(git_utils.subprocess, "run", fake_run)

    with pytest.raises(GitCommandError, match="exceeds 10 bytes"):
        run_git("/repo", ["status"], max_output=10)


def test_run_git_runs_in_repository_without_optional_locks(monkeypatch: pytest.MonkeyPatch) -> None:
    seen = {}

    def fake_run(command, **kwargs):
        seen.update(kwargs)
        seen["command"] = command
        return subprocess.CompletedProcess(command, 0, stdout=b"?? a\n", stderr=b"noise")

    monkeypatch.setattr(git_utils.subprocess, "run", fake_run)

    assert run_git("/repo", ["status", "--porcelain"]) == "?? a\n"
    assert seen["command"] == ["git", "status", "--porcelain"]
    assert seen["cwd"] == "/repo"
    assert seen["env"]["GIT_OPTIONAL_LOCKS"] == "0"
