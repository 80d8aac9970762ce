"""Services for git-worktree-keeper."""

from .force_policy import DeletionState, ForceDeletionPolicy
from .hooks import TreeChangeHooks

__all__ = ["DeletionState", "ForceDeletionPolicy", "TreeChangeHooks"]
