"""Trailing whitespace rule for added lines."""

from __future__ import annotations

from ..diff import trailing_whitespace_violations
from .base import Rule, StagedFile


class TrailingWhitespaceRule(Rule):
    """Flags added lines that end in whitespace."""

    name = "whitespace"

    def supports(self, staged: StagedFile) -> bool:
        exempt = {suffix.lower() for suffix in self.config.lint.exempt_suffixes}
        return staged.suffix not in exempt

    def check(self, staged: StagedFile) -> str:
        violations = trailing_whitespace_violations(
            staged.path,
            staged.diff_lines,
            exempt_suffixes=self.config.lint.exempt_suffixes,
        )
        return "".join(f"{violation.render()}\n" for violation in violations)
