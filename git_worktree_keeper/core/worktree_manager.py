"""Create, switch and delete worktrees."""

import os
from typing import Callable, List, Optional

from git_worktree_keeper.constants import MSG_NOT_DELETED
from git_worktree_keeper.core.session import WorktreeSession
from git_worktree_keeper.exceptions import (
    AmbiguousBaseError,
    ExternalCommandError,
    GitWorktreeKeeperError,
    InvalidWorktreeError,
    UserCancelled,
    WorktreeCreationError,
)
from git_worktree_keeper.models.operation import (
    CreateResult,
    DeleteOutcome,
    DeleteResult,
    Operation,
    SwitchResult,
)
from git_worktree_keeper.models.worktree import BranchRef, WorktreeEntry
from git_worktree_keeper.services.git import RepositoryInspector, WorktreeService
from git_worktree_keeper.services.git.inspector import same_path
from git_worktree_keeper.utils.logging import get_logger

logger = get_logger(__name__)


def normalize_worktree_path(
    path: str, repo_root: str, base_directory: Optional[str] = None
) -> str:
    """Resolve where a worktree called `path` should live.

    A bare name (no '/') goes under base_directory when one is configured.
    Whatever is still relative after that is taken relative to repo_root.
    """
    if "/" not in path and os.sep not in path and base_directory:
        path = os.path.join(os.path.expanduser(base_directory), path)
    path = os.path.expanduser(path)
    if not os.path.isabs(path):
        path = os.path.join(repo_root, path)
    return os.path.normpath(path)


class WorktreeManager:
    """Worktree lifecycle operations for one repository."""

    def __init__(self, repo_path: str, session: Optional[WorktreeSession] = None):
        """Initialize the manager.

        Args:
            repo_path: Path to the git repository (or any worktree of it)
            session: Config, force flag and hooks; a default session is built if omitted
        """
        self.repo_path = repo_path
        self.session = session or WorktreeSession.create()
        self.inspector = RepositoryInspector(repo_path)
        self.worktree_service = WorktreeService(repo_path)

        logger.debug(f"Worktree manager initialized for {repo_path}")

    @property
    def config(self):
        return self.session.config

    # Queries

    def list_worktrees(self) -> List[WorktreeEntry]:
        return self.inspector.list_worktrees()

    def list_branches(self) -> List[BranchRef]:
        return self.inspector.list_branches()

    def branch_exists(self, name: str) -> bool:
        return self.inspector.branch_exists(name)

    def current_branch(self) -> Optional[str]:
        return self.inspector.current_branch()

    # Operations

    def create_worktree(
        self,
        path: str,
        branch: str,
        commit_ish: Optional[str] = None,
        base_branch: Optional[str] = None,
    ) -> CreateResult:
        """Create a worktree for branch at path.

        An existing branch is checked out as is. A new branch needs a start
        point: base_branch, or failing that commit_ish ("HEAD" means the
        current worktree).

        Raises:
            AmbiguousBaseError: If branch doesn't exist and no start point was given
            WorktreeCreationError: If the path is taken or git refuses
            ExternalCommandError: If git can't be queried at all
        """
        if not branch or not branch.strip():
            raise ValueError("A branch name is required to create a worktree")
        branch = branch.strip()

        target = normalize_worktree_path(
            path or branch, self.inspector.repo_root, self.config.base_directory
        )

        for wt in self.inspector.list_all_worktrees():
            if same_path(wt.path, target):
                raise WorktreeCreationError(target, "a worktree already exists at this path")

        if self.inspector.branch_exists(branch):
            base = None
            if base_branch or commit_ish:
                logger.debug(f"Branch {branch} exists; ignoring start point {base_branch or commit_ish}")
        else:
            base = base_branch or commit_ish
            if not base:
                raise AmbiguousBaseError(branch)

        self.worktree_service.add_worktree(target, branch, new_branch_base=base)

        result = CreateResult(path=target, branch=branch, created_branch=base is not None, base=base)
        self.session.hooks.emit(
            Operation.CREATE, {"path": target, "branch": branch, "base": base}
        )
        return result

    def resolve_worktree(self, path_or_branch: str) -> WorktreeEntry:
        """Find the worktree a user means by a path (absolute or repo-relative) or branch.

        Raises:
            InvalidWorktreeError: If no registered worktree matches
        """
        entry = self.inspector.find_worktree(path_or_branch)
        if entry is None and not os.path.isabs(path_or_branch):
            entry = self.inspector.find_worktree(
                os.path.join(self.inspector.repo_root, path_or_branch)
            )
        if entry is None:
            if os.path.exists(path_or_branch):
                raise InvalidWorktreeError(path_or_branch, "not a worktree of this repository")
            raise InvalidWorktreeError(path_or_branch, "no such worktree")
        return entry

    def switch_worktree(self, path: str) -> SwitchResult:
        """Make the worktree at path the active one.

        Raises:
            InvalidWorktreeError: If path is not a worktree or its directory is gone
        """
        entry = self.resolve_worktree(path)
        if not entry.exists:
            raise InvalidWorktreeError(entry.path, "directory no longer exists")

        previous = self.session.current_path or os.getcwd()
        self.session.current_path = entry.path
        if self.config.change_directory:
            os.chdir(entry.path)
        logger.info(f"Switched to worktree {entry.path}")

        self.session.hooks.emit(
            Operation.SWITCH, {"path": entry.path, "previous_path": previous}
        )
        return SwitchResult(path=entry.path, previous_path=previous)

    def delete_worktree(
        self,
        path: str,
        forced: Optional[bool] = None,
        on_success: Optional[Callable[[], None]] = None,
        on_failure: Optional[Callable[[str], None]] = None,
    ) -> DeleteResult:
        """Remove the worktree at path.

        Failures are returned (and passed to on_failure), never raised. A
        successful deletion clears the session's force flag; a failed one
        leaves it alone.

        Args:
            path: Worktree path or the branch checked out in it
            forced: Pass --force to git; None uses the session's force flag
            on_success: Called with no arguments after a successful removal
            on_failure: Called with the error message after a failed removal
        """
        policy = self.session.policy
        if forced is None:
            forced = policy.forced

        if not policy.confirm_deletion(forced):
            return DeleteResult(
                path=path,
                outcome=DeleteOutcome.CANCELLED,
                forced=forced,
                message=MSG_NOT_DELETED,
                error=UserCancelled(path),
            )

        target = self._resolve_for_delete(path)
        try:
            self.worktree_service.remove_worktree(target, force=forced)
        except GitWorktreeKeeperError as e:
            message = str(e)
            logger.warning(f"Deletion of {target} failed: {message}")
            if on_failure:
                on_failure(message)
            return DeleteResult(
                path=target,
                outcome=DeleteOutcome.FAILED,
                forced=forced,
                message=message,
                error=e,
            )

        policy.consume()
        if self.session.current_path and same_path(self.session.current_path, target):
            self.session.current_path = None
        self.session.hooks.emit(Operation.DELETE, {"path": target, "forced": forced})
        if on_success:
            on_success()
        return DeleteResult(path=target, outcome=DeleteOutcome.DELETED, forced=forced)

    def _resolve_for_delete(self, path: str) -> str:
        """Map a branch name or relative path to the worktree's path, if known."""
        try:
            return self.resolve_worktree(path).path
        except (InvalidWorktreeError, ExternalCommandError) as e:
            # Let git itself report on paths we can't resolve
            logger.debug(f"Could not resolve {path} before deletion: {e}")
            return path

    def toggle_force(self) -> bool:
        """Flip the one-shot force flag for the next deletion."""
        return self.session.policy.toggle_force()

    def prune_worktrees(self) -> None:
        """Drop metadata of worktrees whose directories were removed by hand."""
        self.worktree_service.prune_worktrees()
