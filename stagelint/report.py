"""Terminal reporting of check results."""

from __future__ import annotations

from typing import Sequence

from rich.console import Console

from .models import CheckResult

BYPASS_ADVICE = (
    "stagelint: commit rejected. Fix the problems above, "
    "or bypass the check with `git commit --no-verify`."
)


class Reporter:
    """Prints one block per failing file: highlighted path, then rule output."""

    def __init__(self, console: Console | None = None, error_console: Console | None = None) -> None:
        self.console = console or Console(highlight=False, emoji=False)
        self.error_console = error_console or Console(stderr=True, highlight=False, emoji=False)

    def report(self, results: Sequence[CheckResult]) -> int:
        """Print failures and return how many files failed."""
        failures = [result for result in results if not result.passed]
        for result in failures:
            self.console.print(result.path, style="bold red", markup=False, soft_wrap=True)
            self.console.print(result.text, end="", markup=False, soft_wrap=True)
        if failures:
            self.error_console.print(BYPASS_ADVICE, markup=False, soft_wrap=True)
        return len(failures)


__all__ = ["BYPASS_ADVICE", "Reporter"]
