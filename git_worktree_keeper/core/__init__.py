"""Core functionality for git-worktree-keeper"""

from .session import WorktreeSession
from .worktree_manager import WorktreeManager, normalize_worktree_path

__all__ = ["WorktreeManager", "WorktreeSession", "normalize_worktree_path"]
