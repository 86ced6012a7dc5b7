"""Tests for the git plumbing wrapper."""

from __future__ import annotations

from pathlib import Path

import pytest

from stagelint.git import EMPTY_TREE, GITLINK_MODE, GitRepository, RepositoryError
from stagelint.models import ChangeKind, ChangedFile
from stagelint.runner import CommandResult
from tests._fixtures.fake_git import FakeGit


def test_discover_resolves_toplevel(repo_root: Path, fake_git: FakeGit) -> None:
    repository = GitRepository.discover(repo_root / "lib", runner=fake_git)

    assert repository.root == repo_root
    assert fake_git.calls[0].args == ["git", "rev-parse", "--show-toplevel"]
    assert fake_git.calls[0].cwd == repo_root / "lib"


def test_discover_outside_work_tree_raises(tmp_path: Path, fake_git: FakeGit) -> None:
    fake_git.toplevel_ok = False
    with pytest.raises(RepositoryError, match="not inside a Git work tree"):
        GitRepository.discover(tmp_path, runner=fake_git)


def test_changed_files_parses_raw_entries(repository: GitRepository, fake_git: FakeGit) -> None:
    fake_git.stage("lib/Foo.pm", status="M")
    fake_git.stage("bin/new tool", status="A")
    fake_git.stage("lib/Bar.pm", status="R087", previous_path="lib/Baz.pm")

    changed = repository.changed_files()

    assert changed == [
        ChangedFile(path="lib/Foo.pm", kind=ChangeKind.MODIFIED),
        ChangedFile(path="bin/new tool", kind=ChangeKind.ADDED),
        ChangedFile(path="lib/Bar.pm", kind=ChangeKind.RENAMED, previous_path="lib/Baz.pm"),
    ]
    diff_call = fake_git.calls_to("git")[-1]
    assert diff_call.args[:2] == ["git", "diff-index"]
    assert "--cached" in diff_call.args
    assert "--diff-filter=AMR" in diff_call.args
    assert "--raw" in diff_call.args
    assert diff_call.args[-1] == "HEAD"
    assert diff_call.cwd == repository.root


def test_changed_files_empty_when_nothing_staged(repository: GitRepository) -> None:
    assert repository.changed_files() == []


def test_first_commit_compares_against_empty_tree(repo_root: Path) -> None:
    fake = FakeGit(repo_root, has_head=False)
    fake.stage("a.pl", status="A", diff="")
    repository = GitRepository(repo_root, runner=fake)

    repository.changed_files()
    repository.file_diff("a.pl")

    assert repository.against == EMPTY_TREE
    diff_call = [call for call in fake.calls if "diff" in call.args[1:4]][0]
    assert EMPTY_TREE in diff_call.args


def test_file_diff_targets_single_path(repository: GitRepository, fake_git: FakeGit) -> None:
    fake_git.stage("a.pl", diff="@@ -1 +1 @@\n+x\n")

    lines = repository.file_diff("a.pl")

    assert lines == ["@@ -1 +1 @@", "+x", ""]
    call = fake_git.calls[-1]
    assert call.args[:5] == ["git", "-c", "diff.suppressBlankEmpty=false", "diff", "--cached"]
    assert call.args[-2:] == ["--", "a.pl"]


def test_staged_content_reads_index(repository: GitRepository, fake_git: FakeGit) -> None:
    fake_git.stage("a.pl", content="#!/usr/bin/perl\nprint 1;\n")

    assert repository.staged_content("a.pl").startswith("#!/usr/bin/perl")
    assert fake_git.calls[-1].args == ["git", "show", ":a.pl"]


def test_git_failure_raises_repository_error(repo_root: Path) -> None:
    def runner(args, cwd, input=None):  # type: ignore[no-untyped-def]
        return CommandResult(args=tuple(args), returncode=128, stderr="fatal: bad revision\n")

    repository = GitRepository(repo_root, runner=runner)
    with pytest.raises(RepositoryError, match="bad revision"):
        repository.changed_files()


def test_hooks_dir_resolves_relative_to_root(repository: GitRepository, repo_root: Path) -> None:
    assert repository.hooks_dir == repo_root / ".git" / "hooks"


def test_changed_files_records_index_mode(repository: GitRepository, fake_git: FakeGit) -> None:
    fake_git.stage("bin/run", status="A", mode="100755")

    assert repository.changed_files() == [
        ChangedFile(path="bin/run", kind=ChangeKind.ADDED, mode="100755")
    ]


def test_changed_files_skips_submodule_entries(repository: GitRepository, fake_git: FakeGit) -> None:
    fake_git.stage("vendor/lib", status="M", mode=GITLINK_MODE)
    fake_git.stage("lib/Foo.pm", status="M")

    assert [item.path for item in repository.changed_files()] == ["lib/Foo.pm"]
    assert not [call for call in fake_git.calls if call.args[:2] == ["git", "show"]]


def test_unexpected_raw_entry_raises(repo_root: Path) -> None:
    def runner(args, cwd, input=None):  # type: ignore[no-untyped-def]
        return CommandResult(args=tuple(args), returncode=0, stdout="M\0lib/Foo.pm\0")

    with pytest.raises(RepositoryError, match="Unexpected diff-index entry"):
        GitRepository(repo_root, runner=runner).changed_files()


def test_failure_names_git_subcommand(repo_root: Path) -> None:
    def runner(args, cwd, input=None):  # type: ignore[no-untyped-def]
        return CommandResult(args=tuple(args), returncode=128, stderr="fatal: bad revision\n")

    with pytest.raises(RepositoryError, match="git diff failed"):
        GitRepository(repo_root, runner=runner).file_diff("a.pl")
