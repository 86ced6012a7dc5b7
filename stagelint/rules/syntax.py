"""Compile-only syntax check."""

from __future__ import annotations

from typing import Sequence

from .base import CommandRule, StagedFile
from .language import is_target_source


class SyntaxRule(CommandRule):
    """Runs the interpreter in syntax-check mode over the staged content."""

    name = "syntax"

    def supports(self, staged: StagedFile) -> bool:
        lint = self.config.lint
        return is_target_source(staged, suffixes=lint.source_suffixes, interpreter=lint.interpreter)

    def command(self) -> Sequence[str]:
        return self.config.lint.syntax_command
