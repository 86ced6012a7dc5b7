from __future__ import annotations

from pathlib import Path

import pytest

from stagelint.config import StageLintConfig
from stagelint.git import GitRepository
from tests._fixtures.fake_git import FakeGit


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    (root / ".git" / "hooks").mkdir(parents=True)
    return root


@pytest.fixture
def fake_git(repo_root: Path) -> FakeGit:
    """Provide scripted git plumbing rooted at a throwaway work tree."""
    return FakeGit(repo_root)


@pytest.fixture
def repository(repo_root: Path, fake_git: FakeGit) -> GitRepository:
    return GitRepository(repo_root, runner=fake_git)


@pytest.fixture
def config(repo_root: Path) -> StageLintConfig:
    return StageLintConfig(root=repo_root)
