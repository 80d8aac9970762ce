"""Git-related services for git-worktree-keeper."""

from .inspector import RepositoryInspector, parse_worktree_list, parse_worktree_porcelain
from .worktrees import WorktreeService

__all__ = [
    "RepositoryInspector",
    "WorktreeService",
    "parse_worktree_list",
    "parse_worktree_porcelain",
]
