"""CLI entrypoints for the stagelint commit hook and tag generator."""

from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path

from .checker import DiffLintChecker
from .config import ConfigError, load_config
from .git import GitRepository, HookExistsError, RepositoryError, link_hook
from .logging import configure_logging
from .report import Reporter
from .runner import Runner
from .tags import TagsGenerator


def _add_logging_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write a debug-level log to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stagelint",
        description="Lint the staged change before a commit is recorded.",
    )
    _add_logging_options(parser)
    parser.add_argument(
        "--link",
        action="store_true",
        help="Install stagelint as this repository's pre-commit hook and exit.",
    )
    return parser


def _build_tags_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stagelint-tags",
        description="Regenerate tag files for every project under the configured roots.",
    )
    _add_logging_options(parser)
    parser.add_argument(
        "--config",
        default="~/.stagelint.yml",
        help="Configuration file holding the tags section (defaults to ~/.stagelint.yml).",
    )
    return parser


def main(argv: list[str] | None = None, *, runner: Runner | None = None) -> int:
    """CLI entrypoint for the pre-commit check."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        repository = GitRepository.discover(Path.cwd(), runner=runner)
        config = load_config(repository.root)
    except (RepositoryError, ConfigError) as exc:
        parser.exit(1, f"stagelint: {exc}\n")

    if args.link:
        try:
            hook = link_hook(
                repository.hooks_dir,
                _hook_executable(),
                hook_name=config.lint.hook_name,
            )
        except (HookExistsError, RepositoryError) as exc:
            parser.exit(1, f"stagelint: {exc}\n")
        print(f"Installed {hook}")
        return 0

    try:
        results = DiffLintChecker(config, repository, runner=runner).run()
    except RepositoryError as exc:
        parser.exit(1, f"stagelint: {exc}\nRun with --verbose for more details.\n")

    failures = Reporter().report(results)
    return 1 if failures else 0


def tags_main(argv: list[str] | None = None, *, runner: Runner | None = None) -> int:
    """CLI entrypoint for tag-file generation."""
    parser = _build_tags_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"stagelint-tags: {exc}\n")

    if not config.tags.roots:
        parser.exit(1, f"stagelint-tags: no tags.roots configured in {args.config}\n")

    outcomes = TagsGenerator(config.tags, runner=runner).generate()
    failed = [outcome for outcome in outcomes if not outcome.ok]
    for outcome in failed:
        print(f"{outcome.project}: {outcome.detail}", file=sys.stderr)
    return 1 if failed else 0


def _hook_executable() -> Path:
    installed = shutil.which("stagelint")
    if installed:
        return Path(installed).resolve()
    return Path(sys.argv[0]).resolve()


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
