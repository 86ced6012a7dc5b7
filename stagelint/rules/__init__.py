"""Content rules applied to each staged file."""

from __future__ import annotations

from typing import List

from ..config import StageLintConfig
from ..runner import Runner
from .base import CommandRule, Rule, StagedFile
from .language import is_target_source
from .style import StyleRule
from .syntax import SyntaxRule
from .whitespace import TrailingWhitespaceRule


def default_rules(config: StageLintConfig, runner: Runner) -> List[Rule]:
    """Return the rules in the order they run: whitespace, syntax, style."""
    return [
        TrailingWhitespaceRule(config),
        SyntaxRule(config, runner),
        StyleRule(config, runner),
    ]


__all__ = [
    "CommandRule",
    "Rule",
    "StagedFile",
    "StyleRule",
    "SyntaxRule",
    "TrailingWhitespaceRule",
    "default_rules",
    "is_target_source",
]
