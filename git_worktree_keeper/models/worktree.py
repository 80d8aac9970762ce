"""Worktree data models."""

import os
from dataclasses import dataclass
from typing import Optional

from git_worktree_keeper.constants import BARE_COMMIT


@dataclass(frozen=True)
class WorktreeEntry:
    """A row of `git worktree list`."""

    path: str
    commit: str  # short sha, or "(bare)" for the bare repository record
    branch: Optional[str]  # None when detached or bare
    is_locked: bool = False
    is_prunable: bool = False

    @property
    def is_bare(self) -> bool:
        return self.commit == BARE_COMMIT

    @property
    def is_detached(self) -> bool:
        """Check if this worktree is in detached HEAD state."""
        return self.branch is None and not self.is_bare

    @property
    def exists(self) -> bool:
        """Check if the worktree directory is still on disk."""
        return os.path.isdir(self.path)

    def __str__(self) -> str:
        """String representation of worktree."""
        branch = self.branch or "(detached)"
        flags = ""
        if self.is_locked:
            flags += " [locked]"
        if self.is_prunable:
            flags += " [prunable]"
        return f"{branch} @ {self.path} ({self.commit}){flags}"


@dataclass(frozen=True)
class BranchRef:
    """A local branch and whether a worktree has it checked out."""

    name: str
    exists_as_worktree: bool
    is_current: bool = False
