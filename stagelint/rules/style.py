"""Style-policy check driven by the repository profile."""

from __future__ import annotations

from typing import List

from .base import CommandRule, StagedFile
from .language import is_target_source


class StyleRule(CommandRule):
    """Runs the static analyser with the profile at the repository root."""

    name = "style"

    def supports(self, staged: StagedFile) -> bool:
        lint = self.config.lint
        return is_target_source(staged, suffixes=lint.source_suffixes, interpreter=lint.interpreter)

    def command(self) -> List[str]:
        profile = str(self.config.profile_path)
        return [part.replace("{profile}", profile) for part in self.config.lint.style_command]
