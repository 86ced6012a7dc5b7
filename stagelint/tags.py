"""Tag-file generation across configured project directories."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .config import TagsConfig
from .logging import get_logger
from .runner import Runner, ToolNotFoundError, run_command


@dataclass(frozen=True)
class TagsOutcome:
    """Result of indexing a single project directory."""

    project: Path
    ok: bool
    detail: str = ""


class TagsGenerator:
    """Writes the ctags settings file and indexes each project under the roots."""

    def __init__(self, config: TagsConfig, runner: Runner | None = None) -> None:
        self.config = config
        self._runner = runner or run_command
        self.logger = get_logger("tags")

    @property
    def options_path(self) -> Path:
        return Path(self.config.options_file).expanduser()

    def options(self) -> List[str]:
        lines = ["--recurse=yes"]
        if self.config.languages:
            lines.append(f"--languages={','.join(self.config.languages)}")
        lines.extend(f"--exclude={pattern}" for pattern in self.config.exclude)
        lines.extend(self.config.extra_options)
        return lines

    def write_options(self) -> Path:
        """Write the settings file, one option per line."""
        path = self.options_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(self.options()) + "\n", encoding="utf-8")
        self.logger.debug("Wrote ctags options to %s", path)
        return path

    def enumerate_projects(self) -> List[Path]:
        """Immediate, non-hidden sub-directories of every configured root."""
        projects: List[Path] = []
        for raw_root in self.config.roots:
            root = Path(raw_root).expanduser()
            if not root.is_dir():
                self.logger.warning("Skipping missing tags root %s", root)
                continue
            children = sorted(
                child for child in root.iterdir() if child.is_dir() and not child.name.startswith(".")
            )
            projects.extend(children)
        return projects

    def generate(self, projects: Optional[List[Path]] = None) -> List[TagsOutcome]:
        """Index every project; a failing project does not stop the others."""
        options_file = self.write_options()
        targets = projects if projects is not None else self.enumerate_projects()
        outcomes: List[TagsOutcome] = []
        for project in targets:
            args = [
                self.config.command,
                f"--options={options_file}",
                "-f",
                str(project / self.config.tag_file),
                ".",
            ]
            try:
                result = self._runner(args, cwd=project)
            except ToolNotFoundError as exc:
                self.logger.error("%s", exc)
                outcomes.append(TagsOutcome(project=project, ok=False, detail=str(exc)))
                continue
            if result.ok:
                self.logger.info("Indexed %s", project)
                outcomes.append(TagsOutcome(project=project, ok=True))
            else:
                detail = result.output.strip() or f"exit status {result.returncode}"
                self.logger.warning("Indexing %s failed: %s", project, detail)
                outcomes.append(TagsOutcome(project=project, ok=False, detail=detail))
        return outcomes


__all__ = ["TagsGenerator", "TagsOutcome"]
