"""Process execution seam shared by git plumbing and external checks."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Sequence, Tuple

from .logging import get_logger

_LOGGER = get_logger("runner")


class ToolNotFoundError(RuntimeError):
    """Raised when an external command cannot be started at all."""

    def __init__(self, tool: str, detail: str = "") -> None:
        message = f"cannot run {tool}: command not found"
        if detail:
            message = f"cannot run {tool}: {detail}"
        super().__init__(message)
        self.tool = tool


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured output of a finished command."""

    args: Tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr, the text reported for a failing check."""
        return self.stdout + self.stderr


Runner = Callable[..., CommandResult]


def run_command(
    args: Iterable[str],
    *,
    cwd: Path,
    input: str | None = None,
) -> CommandResult:
    """Run ``args`` to completion and capture its output.

    A non-zero exit is returned, not raised. A command that cannot be
    started raises :class:`ToolNotFoundError`.
    """
    argv: Sequence[str] = list(args)
    _LOGGER.debug("Running %s (cwd=%s)", " ".join(argv), cwd)
    try:
        completed = subprocess.run(
            argv,
            cwd=str(cwd),
            input=input,
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError as exc:
        raise ToolNotFoundError(argv[0]) from exc
    except PermissionError as exc:
        raise ToolNotFoundError(argv[0], "permission denied") from exc
    return CommandResult(
        args=tuple(argv),
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


__all__ = ["CommandResult", "Runner", "ToolNotFoundError", "run_command"]
