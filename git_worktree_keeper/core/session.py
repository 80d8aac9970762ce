"""Session state shared by worktree operations."""

from dataclasses import dataclass, field
from typing import Optional

from git_worktree_keeper.config import Config
from git_worktree_keeper.services.force_policy import ConfirmFn, ForceDeletionPolicy, NotifyFn
from git_worktree_keeper.services.hooks import TreeChangeHooks


@dataclass
class WorktreeSession:
    """Everything a WorktreeManager reads or mutates besides the repository.

    Owned by the application: build one at startup and hand it to the manager.
    """

    config: Config
    policy: ForceDeletionPolicy
    hooks: TreeChangeHooks = field(default_factory=TreeChangeHooks)
    current_path: Optional[str] = None  # Worktree most recently switched to

    @classmethod
    def create(
        cls,
        config: Optional[Config] = None,
        confirm: Optional[ConfirmFn] = None,
        notify: Optional[NotifyFn] = None,
    ) -> "WorktreeSession":
        """Build a session with a fresh (unforced) deletion policy."""
        config = config or Config()
        return cls(config=config, policy=ForceDeletionPolicy(config, confirm=confirm, notify=notify))
