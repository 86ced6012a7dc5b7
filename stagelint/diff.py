"""Unified diff inspection: hunk tracking and added-line checks."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import PurePosixPath
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .models import DiffHunk, Violation

_HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_TRAILING_WHITESPACE = re.compile(r"\s+$")

DEFAULT_EXEMPT_SUFFIXES: Sequence[str] = (".csv", ".sql")


class MalformedDiffError(ValueError):
    """Raised when diff text does not follow the hunk-delimited format."""


class LineKind(Enum):
    """Classification of a single line of unified diff output."""

    HUNK_HEADER = "hunk_header"
    CONTEXT = "context"
    ADDITION = "addition"
    REMOVAL = "removal"
    OTHER = "other"


def parse_hunk_header(line: str) -> Optional[DiffHunk]:
    """Return the hunk described by ``line`` or None if it is not a header."""
    match = _HUNK_HEADER.match(line)
    if match is None:
        return None
    old_start, old_size, new_start, new_size = match.groups()
    return DiffHunk(
        old_start=int(old_start),
        old_size=int(old_size) if old_size is not None else 1,
        new_start=int(new_start),
        new_size=int(new_size) if new_size is not None else 1,
    )


class HunkLineTracker:
    """Walks diff lines while tracking the line number in the new file."""

    def __init__(self) -> None:
        self.hunk: Optional[DiffHunk] = None
        self.cursor: Optional[int] = None

    def classify(self, line: str) -> LineKind:
        if line.startswith("@@"):
            return LineKind.HUNK_HEADER if _HUNK_HEADER.match(line) else LineKind.OTHER
        if line.startswith("diff "):
            return LineKind.OTHER
        # File headers precede the first hunk of each file.
        if self.hunk is None and line.startswith(("+++ ", "--- ")):
            return LineKind.OTHER
        if line.startswith(" "):
            return LineKind.CONTEXT
        # Blank context lines lose their space under diff.suppressBlankEmpty.
        if line == "" and self.hunk is not None:
            return LineKind.CONTEXT
        if line.startswith("+"):
            return LineKind.ADDITION
        if line.startswith("-"):
            return LineKind.REMOVAL
        return LineKind.OTHER

    def walk(self, lines: Iterable[str]) -> Iterator[Tuple[LineKind, Optional[int], str]]:
        """Yield ``(kind, line_number, content)`` for every diff line.

        ``line_number`` is the position of context and added lines in the new
        file and None for everything else. ``content`` has the diff prefix
        removed for context, added and removed lines.
        """
        for line in lines:
            kind = self.classify(line)
            if kind is LineKind.HUNK_HEADER:
                hunk = parse_hunk_header(line)
                if hunk is None:
                    raise MalformedDiffError(f"Unreadable hunk header: {line!r}")
                self.hunk = hunk
                self.cursor = hunk.new_start
                yield kind, None, line
            elif kind in (LineKind.CONTEXT, LineKind.ADDITION):
                if self.cursor is None:
                    raise MalformedDiffError(f"Diff line outside of any hunk: {line!r}")
                number = self.cursor
                self.cursor += 1
                yield kind, number, line[1:]
            elif kind is LineKind.REMOVAL:
                yield kind, None, line[1:]
            else:
                if line.startswith("diff "):
                    self.hunk = None
                    self.cursor = None
                yield kind, None, line


def trailing_whitespace_violations(
    path: str,
    diff_lines: Iterable[str],
    *,
    exempt_suffixes: Sequence[str] = DEFAULT_EXEMPT_SUFFIXES,
) -> List[Violation]:
    """Report added lines of ``path`` that end in whitespace."""
    if PurePosixPath(path).suffix.lower() in {suffix.lower() for suffix in exempt_suffixes}:
        return []

    violations: List[Violation] = []
    for kind, number, content in HunkLineTracker().walk(diff_lines):
        if kind is not LineKind.ADDITION or number is None:
            continue
        if _TRAILING_WHITESPACE.search(content):
            violations.append(Violation(line=number, message="trailing whitespace"))
    return violations


__all__ = [
    "DEFAULT_EXEMPT_SUFFIXES",
    "HunkLineTracker",
    "LineKind",
    "MalformedDiffError",
    "parse_hunk_header",
    "trailing_whitespace_violations",
]
