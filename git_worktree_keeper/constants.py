"""Shared constants for git-worktree-keeper."""

from dataclasses import dataclass
from typing import List


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


# Columns of the worktree listing, in display order
WORKTREE_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("branch", "Branch"),
    ColumnDefinition("path", "Path"),
    ColumnDefinition("sha", "SHA"),
]


# Commit column value git prints for the bare repository record
BARE_COMMIT = "(bare)"
SHORT_SHA_LENGTH = 7
# Used when a new branch should start from the current worktree
CURRENT_HEAD = "HEAD"


# Confirmation prompts
PROMPT_DELETE = "Delete worktree? [y/n]: "
PROMPT_FORCE_DELETE = "Force deletion of worktree? [y/n]: "
PROMPT_USE_CURRENT_AS_BASE = "Use current worktree as base? [Y/n]: "
PROMPT_BASE_BRANCH = "Base branch > "


# Notices
MSG_FORCE_ON = "The next deletion will be forced"
MSG_FORCE_OFF = "The next deletion will not be forced"
MSG_NOT_DELETED = "Didn't delete worktree"
MSG_DELETE_FAILED = "Deletion failed, use --force to force the next deletion"


# Fragments of `git worktree remove` stderr meaning --force is needed
DIRTY_MARKERS = (
    "contains modified or untracked files",
    "use --force",
    "is locked",
    "locked working tree",
    "is dirty",
)
# Fragments meaning the path is not a worktree at all
NOT_A_WORKTREE_MARKERS = (
    "is not a working tree",
    "is a main working tree",
)
