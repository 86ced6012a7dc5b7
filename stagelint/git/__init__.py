"""Git integration: staged-change inspection and hook installation."""

from .hooks import HookExistsError, link_hook
from .repository import EMPTY_TREE, GITLINK_MODE, GitRepository, RepositoryError

__all__ = [
    "EMPTY_TREE",
    "GITLINK_MODE",
    "GitRepository",
    "HookExistsError",
    "RepositoryError",
    "link_hook",
]
