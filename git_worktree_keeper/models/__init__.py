"""Data models for git-worktree-keeper."""

from .worktree import WorktreeEntry, BranchRef
from .operation import Operation, DeleteOutcome, CreateResult, SwitchResult, DeleteResult

__all__ = [
    "WorktreeEntry",
    "BranchRef",
    "Operation",
    "DeleteOutcome",
    "CreateResult",
    "SwitchResult",
    "DeleteResult",
]
