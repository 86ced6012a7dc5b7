"""Core data models shared across stagelint components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ChangeKind(str, Enum):
    """Kind of change recorded in the index for a path."""

    ADDED = "added"
    MODIFIED = "modified"
    RENAMED = "renamed"

    @classmethod
    def from_status(cls, status: str) -> "ChangeKind":
        """Map a git status letter (``A``, ``M``, ``R100``...) to a change kind."""
        letter = status[:1].upper()
        try:
            return _STATUS_LETTERS[letter]
        except KeyError:
            raise ValueError(f"Unsupported change status: {status!r}") from None


_STATUS_LETTERS = {
    "A": ChangeKind.ADDED,
    "M": ChangeKind.MODIFIED,
    "R": ChangeKind.RENAMED,
}


@dataclass(frozen=True)
class ChangedFile:
    """A staged path and how it changed."""

    path: str
    kind: ChangeKind
    previous_path: Optional[str] = None
    mode: str = "100644"


@dataclass(frozen=True)
class DiffHunk:
    """Line ranges parsed from a unified diff hunk header."""

    old_start: int
    old_size: int
    new_start: int
    new_size: int


@dataclass(frozen=True)
class Violation:
    """A single finding at a line of the staged file."""

    line: int
    message: str

    def render(self) -> str:
        return f"line {self.line}: {self.message}"


@dataclass
class CheckResult:
    """Accumulated rule output for one changed file."""

    path: str
    outputs: List[str] = field(default_factory=list)
    failed_rules: List[str] = field(default_factory=list)
    environment_errors: List[str] = field(default_factory=list)

    def add(self, rule: str, output: str) -> None:
        if not output:
            return
        self.outputs.append(output)
        self.failed_rules.append(rule)

    @property
    def text(self) -> str:
        return "".join(self.outputs)

    @property
    def passed(self) -> bool:
        return not self.text
