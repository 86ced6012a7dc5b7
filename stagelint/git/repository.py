"""Git plumbing used to inspect the staged change."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from ..logging import get_logger
from ..models import ChangeKind, ChangedFile
from ..runner import CommandResult, Runner, run_command

# Index mode of a submodule (gitlink) entry.
GITLINK_MODE = "160000"

# Object id of the empty tree; the comparison base before the first commit.
EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


class RepositoryError(RuntimeError):
    """Raised when git plumbing fails or no work tree can be found."""


class GitRepository:
    """Read-only view of a work tree's index relative to its last commit."""

    def __init__(self, root: Path, runner: Runner | None = None) -> None:
        self.root = Path(root)
        self._runner = runner or run_command
        self._against: str | None = None
        self.logger = get_logger("git")

    @classmethod
    def discover(cls, cwd: Path, runner: Runner | None = None) -> "GitRepository":
        """Resolve the work tree containing ``cwd``."""
        run = runner or run_command
        result = run(["git", "rev-parse", "--show-toplevel"], cwd=cwd)
        toplevel = result.stdout.strip()
        if not result.ok or not toplevel:
            detail = result.stderr.strip() or "git rev-parse failed"
            raise RepositoryError(f"{cwd} is not inside a Git work tree ({detail})")
        return cls(Path(toplevel), runner=runner)

    @property
    def hooks_dir(self) -> Path:
        """Directory git runs hooks from, honouring ``core.hooksPath``."""
        path = Path(self._git("rev-parse", "--git-path", "hooks").strip())
        return path if path.is_absolute() else self.root / path

    @property
    def against(self) -> str:
        """The commit the staged change is compared with."""
        if self._against is None:
            result = self._run(["git", "rev-parse", "--verify", "--quiet", "HEAD"])
            self._against = "HEAD" if result.ok else EMPTY_TREE
            self.logger.debug("Comparing index against %s", self._against)
        return self._against

    def changed_files(self) -> List[ChangedFile]:
        """Return files added, modified or renamed in the index."""
        output = self._git(
            "diff-index",
            "--cached",
            "-z",
            "--raw",
            "-M",
            "--diff-filter=AMR",
            self.against,
        )
        changed = []
        for item in _parse_raw(output.split("\0")):
            if item.mode == GITLINK_MODE:
                self.logger.debug("Skipping submodule entry %s", item.path)
                continue
            changed.append(item)
        return changed

    def file_diff(self, path: str) -> List[str]:
        """Return the staged unified diff for ``path`` as a list of lines."""
        # Porcelain diff honours diff.suppressBlankEmpty, which drops the
        # leading space of blank context lines.
        output = self._git(
            "-c",
            "diff.suppressBlankEmpty=false",
            "diff",
            "--cached",
            "--no-color",
            "--no-ext-diff",
            self.against,
            "--",
            path,
        )
        return output.split("\n")

    def staged_content(self, path: str) -> str:
        """Return the content of ``path`` as recorded in the index."""
        return self._git("show", f":{path}")

    # ------------------------------------------------------------------
    # Internals

    def _git(self, *args: str) -> str:
        result = self._run(["git", *args])
        if not result.ok:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            raise RepositoryError(f"git {_subcommand(args)} failed: {detail}")
        return result.stdout

    def _run(self, args: Iterable[str]) -> CommandResult:
        return self._runner(list(args), cwd=self.root)


def _subcommand(args: Iterable[str]) -> str:
    options = iter(args)
    for arg in options:
        if arg == "-c":
            next(options, None)
        elif not arg.startswith("-"):
            return arg
    return "command"


def _parse_raw(fields: List[str]) -> Iterable[ChangedFile]:
    # Each entry is ":<old mode> <new mode> <old sha> <new sha> <status>"
    # followed by one path, or two for renames.
    tokens = [field for field in fields if field]
    index = 0
    while index < len(tokens):
        meta = tokens[index].lstrip(":").split()
        if len(meta) != 5:
            raise RepositoryError(f"Unexpected diff-index entry: {tokens[index]!r}")
        new_mode, status = meta[1], meta[4]
        kind = ChangeKind.from_status(status)
        if kind is ChangeKind.RENAMED:
            previous, path = tokens[index + 1], tokens[index + 2]
            index += 3
            yield ChangedFile(path=path, kind=kind, previous_path=previous, mode=new_mode)
        else:
            path = tokens[index + 1]
            index += 2
            yield ChangedFile(path=path, kind=kind, mode=new_mode)
