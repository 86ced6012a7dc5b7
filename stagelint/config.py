"""Configuration loading for stagelint (.stagelint.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".stagelint.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LintConfig:
    """Commit-time lint settings."""

    exempt_suffixes: List[str] = field(default_factory=lambda: [".csv", ".sql"])
    source_suffixes: List[str] = field(default_factory=lambda: [".pl", ".pm", ".t"])
    interpreter: str = "perl"
    syntax_command: List[str] = field(default_factory=lambda: ["perl", "-c"])
    style_command: List[str] = field(
        default_factory=lambda: ["perlcritic", "--profile", "{profile}"]
    )
    profile: str = ".perlcriticrc"
    hook_name: str = "pre-commit"


@dataclass
class TagsConfig:
    """Tag-file generation settings."""

    roots: List[str] = field(default_factory=list)
    command: str = "ctags"
    options_file: str = "~/.ctags.d/stagelint.ctags"
    tag_file: str = "tags"
    languages: List[str] = field(default_factory=lambda: ["Perl"])
    exclude: List[str] = field(default_factory=lambda: [".git", "blib"])
    extra_options: List[str] = field(default_factory=list)


@dataclass
class StageLintConfig:
    """Represents the settings defined in .stagelint.yml."""

    root: Path
    lint: LintConfig = field(default_factory=LintConfig)
    tags: TagsConfig = field(default_factory=TagsConfig)

    @property
    def profile_path(self) -> Path:
        """Location of the style policy profile, relative to the repository root."""
        return self.root / self.lint.profile


def load_config(config_path: Path) -> StageLintConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return StageLintConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    lint = LintConfig()
    lint_data = _as_dict(data.get("lint"))
    if lint_data:
        lint.exempt_suffixes = _suffixes(lint_data.get("exempt_suffixes"), lint.exempt_suffixes)
        lint.source_suffixes = _suffixes(lint_data.get("source_suffixes"), lint.source_suffixes)
        lint.interpreter = _as_str(lint_data.get("interpreter")) or lint.interpreter
        lint.syntax_command = _command(lint_data, "syntax_command", lint.syntax_command)
        lint.style_command = _command(lint_data, "style_command", lint.style_command)
        lint.profile = _as_str(lint_data.get("profile")) or lint.profile
        lint.hook_name = _as_str(lint_data.get("hook_name")) or lint.hook_name

    tags = TagsConfig()
    tags_data = _as_dict(data.get("tags"))
    if tags_data:
        tags.roots = _as_str_list(tags_data.get("roots"))
        tags.command = _as_str(tags_data.get("command")) or tags.command
        tags.options_file = _as_str(tags_data.get("options_file")) or tags.options_file
        tags.tag_file = _as_str(tags_data.get("tag_file")) or tags.tag_file
        if "languages" in tags_data:
            tags.languages = _as_str_list(tags_data.get("languages"))
        if "exclude" in tags_data:
            tags.exclude = _as_str_list(tags_data.get("exclude"))
        tags.extra_options = _as_str_list(tags_data.get("extra_options"))

    return StageLintConfig(root=root, lint=lint, tags=tags)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _command(data: Dict[str, Any], key: str, default: List[str]) -> List[str]:
    if key not in data:
        return default
    command = _as_str_list(data.get(key))
    if not command:
        raise ConfigError(f"lint.{key} must name a command")
    return command


def _suffixes(value: Any, default: List[str]) -> List[str]:
    if value is None:
        return default
    suffixes = []
    for item in _as_str_list(value):
        item = item.strip().lower()
        if item and not item.startswith("."):
            item = f".{item}"
        if item:
            suffixes.append(item)
    return suffixes


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
