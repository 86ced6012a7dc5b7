"""Commit-time checks over the staged change set."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .config import StageLintConfig
from .git.repository import GitRepository
from .logging import get_logger
from .models import ChangedFile, CheckResult
from .rules import Rule, StagedFile, default_rules
from .runner import Runner, ToolNotFoundError, run_command


class ContentRuleRunner:
    """Runs each rule in order against one staged file and collects output."""

    def __init__(self, rules: Sequence[Rule]) -> None:
        self.rules = list(rules)
        self.logger = get_logger("checker")

    def run(self, staged: StagedFile) -> CheckResult:
        result = CheckResult(path=staged.path)
        for rule in self.rules:
            if not rule.supports(staged):
                self.logger.debug("Skipping %s rule for %s", rule.name, staged.path)
                continue
            try:
                output = rule.check(staged)
            except ToolNotFoundError as exc:
                # A missing tool still blocks the commit, but is reported as
                # an environment problem rather than a finding.
                self.logger.error("%s (needed by the %s rule)", exc, rule.name)
                output = f"{exc}\n"
                result.environment_errors.append(str(exc))
            result.add(rule.name, output)
        return result


class DiffLintChecker:
    """Checks every added, modified or renamed file in the index."""

    def __init__(
        self,
        config: StageLintConfig,
        repository: GitRepository,
        *,
        runner: Runner | None = None,
        rules: Optional[Iterable[Rule]] = None,
    ) -> None:
        self.config = config
        self.repository = repository
        self._runner = runner or run_command
        selected = list(rules) if rules is not None else default_rules(config, self._runner)
        self.rule_runner = ContentRuleRunner(selected)
        self.logger = get_logger("checker")

    def changed_files(self) -> List[ChangedFile]:
        return self.repository.changed_files()

    def run(self) -> List[CheckResult]:
        """Check all staged files; one result per file, in enumeration order."""
        changed = self.changed_files()
        self.logger.debug("Checking %d staged file(s) in %s", len(changed), self.repository.root)
        results: List[CheckResult] = []
        for item in changed:
            staged = StagedFile(item, self.repository)
            result = self.rule_runner.run(staged)
            if not result.passed:
                self.logger.debug("%s failed: %s", item.path, ", ".join(result.failed_rules))
            results.append(result)
        return results


__all__ = ["ContentRuleRunner", "DiffLintChecker"]
