"""Base classes for per-file content rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import PurePosixPath
from typing import List, Sequence

from ..config import StageLintConfig
from ..git.repository import GitRepository
from ..logging import get_logger
from ..models import ChangedFile
from ..runner import Runner


class StagedFile:
    """A changed file with lazy access to its staged diff and content."""

    def __init__(self, changed: ChangedFile, repository: GitRepository) -> None:
        self.changed = changed
        self._repository = repository

    @property
    def path(self) -> str:
        return self.changed.path

    @property
    def suffix(self) -> str:
        return PurePosixPath(self.path).suffix.lower()

    @cached_property
    def diff_lines(self) -> List[str]:
        return self._repository.file_diff(self.path)

    @cached_property
    def content(self) -> str:
        return self._repository.staged_content(self.path)

    @property
    def first_line(self) -> str:
        head, _, _ = self.content.partition("\n")
        return head


class Rule(ABC):
    """Contract for checks run against each staged file."""

    name: str = "rule"

    def __init__(self, config: StageLintConfig) -> None:
        self.config = config
        self.logger = get_logger(f"rules.{self.name}")

    @abstractmethod
    def supports(self, staged: StagedFile) -> bool:
        """Return True when this rule applies to the file."""

    @abstractmethod
    def check(self, staged: StagedFile) -> str:
        """Return diagnostic text, or an empty string when the file passes."""


class CommandRule(Rule):
    """A rule that pipes staged content through an external tool."""

    def __init__(self, config: StageLintConfig, runner: Runner) -> None:
        super().__init__(config)
        self._runner = runner

    @abstractmethod
    def command(self) -> Sequence[str]:
        """Argument vector of the external tool."""

    def check(self, staged: StagedFile) -> str:
        """Feed the staged content to the tool; its output on non-zero exit.

        Raises :class:`~stagelint.runner.ToolNotFoundError` if the tool is missing.
        """
        args = list(self.command())
        result = self._runner(args, cwd=self.config.root, input=staged.content)
        if result.ok:
            return ""
        self.logger.debug("%s exited with %d for %s", args[0], result.returncode, staged.path)
        return _terminated(result.output) or f"{args[0]} exited with status {result.returncode}\n"


def _terminated(text: str) -> str:
    if text and not text.endswith("\n"):
        return text + "\n"
    return text
