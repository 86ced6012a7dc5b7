"""Installation of stagelint as a git hook."""

from __future__ import annotations

import os
from pathlib import Path

from ..logging import get_logger

_LOGGER = get_logger("hooks")


class HookExistsError(FileExistsError):
    """Raised when a hook is already installed at the target path."""


def link_hook(hooks_dir: Path, executable: Path, *, hook_name: str = "pre-commit") -> Path:
    """Symlink ``executable`` into ``hooks_dir`` as ``hook_name``.

    Anything already at the target, including a dangling link, is left alone.
    """
    target = hooks_dir / hook_name
    if target.exists() or target.is_symlink():
        raise HookExistsError(
            f"{target} already exists; remove it first to install stagelint as the {hook_name} hook"
        )
    hooks_dir.mkdir(parents=True, exist_ok=True)
    os.symlink(executable, target)
    _LOGGER.debug("Linked %s -> %s", target, executable)
    return target


__all__ = ["HookExistsError", "link_hook"]
