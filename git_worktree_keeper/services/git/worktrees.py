"""Worktree operations service for git-worktree-keeper."""

import git
import os
from typing import Optional

from git_worktree_keeper.constants import DIRTY_MARKERS, NOT_A_WORKTREE_MARKERS
from git_worktree_keeper.exceptions import (
    ExternalCommandError,
    GitWorktreeKeeperError,
    InvalidWorktreeError,
    WorktreeCreationError,
    WorktreeDeletionError,
    WorktreeDirtyError,
)
from git_worktree_keeper.services.git.base import describe_git_error, git_error_stderr, open_repo
from git_worktree_keeper.utils.logging import get_logger

logger = get_logger(__name__)


def classify_remove_error(path: str, stderr: str) -> GitWorktreeKeeperError:
    """Turn `git worktree remove` stderr into the matching exception."""
    lowered = stderr.lower()
    if any(marker in lowered for marker in NOT_A_WORKTREE_MARKERS):
        return InvalidWorktreeError(path, stderr)
    if any(marker in lowered for marker in DIRTY_MARKERS):
        return WorktreeDirtyError(path, stderr)
    return WorktreeDeletionError(path, stderr)


class WorktreeService:
    """Service for adding, removing and pruning git worktrees."""

    def __init__(self, repo_path: str):
        """Initialize the worktree service.

        Args:
            repo_path: Path to the git repository
        """
        self.repo_path = repo_path

    def _get_repo(self):
        """Get a fresh git.Repo instance."""
        return open_repo(self.repo_path)

    def add_worktree(self, path: str, branch: str, new_branch_base: Optional[str] = None) -> None:
        """Add a worktree at path.

        Args:
            path: Absolute path of the new worktree directory
            branch: Branch to check out (or to create, if new_branch_base is given)
            new_branch_base: Start point for a new branch; None checks out an existing branch

        Raises:
            WorktreeCreationError: If git refuses (path collision, bad ref, I/O error)
        """
        if new_branch_base:
            args = ["add", "-b", branch, path, new_branch_base]
        else:
            args = ["add", path, branch]

        parent = os.path.dirname(path)
        repo = self._get_repo()
        try:
            if parent:
                os.makedirs(parent, exist_ok=True)
            logger.debug(f"git worktree {' '.join(args)}")
            repo.git.worktree(*args)
            logger.info(f"Created worktree at {path} for branch {branch}")
        except git.exc.GitCommandNotFound as e:
            raise WorktreeCreationError(path, f"git executable not found: {e}") from e
        except git.exc.GitCommandError as e:
            error_msg = describe_git_error("worktree add", e)
            logger.error(f"Failed to create worktree at {path}: {error_msg}")
            raise WorktreeCreationError(path, git_error_stderr(e) or error_msg) from e
        except OSError as e:
            logger.error(f"Failed to create parent directory for {path}: {e}")
            raise WorktreeCreationError(path, str(e)) from e
        finally:
            repo.close()

    def remove_worktree(self, path: str, force: bool = False) -> None:
        """Remove a worktree at the specified path.

        Args:
            path: Path to the worktree directory
            force: Force removal even if working tree is dirty or locked

        Raises:
            WorktreeDirtyError: If the worktree has changes or is locked and force is False
            InvalidWorktreeError: If git does not know the path as a linked worktree
            WorktreeDeletionError: For any other git failure
        """
        # git wants --force twice to remove a locked worktree
        args = ["remove", "--force", "--force", path] if force else ["remove", path]

        repo = self._get_repo()
        try:
            logger.debug(f"git worktree {' '.join(args)}")
            repo.git.worktree(*args)
            logger.info(f"Removed worktree at {path}")
        except git.exc.GitCommandNotFound as e:
            raise WorktreeDeletionError(path, f"git executable not found: {e}") from e
        except git.exc.GitCommandError as e:
            error_msg = describe_git_error("worktree remove", e)
            logger.error(f"Failed to remove worktree at {path}: {error_msg}")
            raise classify_remove_error(path, git_error_stderr(e) or error_msg) from e
        finally:
            repo.close()

    def prune_worktrees(self) -> None:
        """Prune metadata of worktrees whose directories are gone.

        Raises:
            ExternalCommandError: If git fails
        """
        repo = self._get_repo()
        try:
            repo.git.worktree("prune")
            logger.info("Pruned orphaned worktree metadata")
        except git.exc.GitCommandNotFound as e:
            raise ExternalCommandError("worktree prune", f"git executable not found: {e}") from e
        except git.exc.GitCommandError as e:
            error_msg = describe_git_error("worktree prune", e)
            logger.error(f"Failed to prune worktrees: {error_msg}")
            raise ExternalCommandError("worktree prune", error_msg) from e
        finally:
            repo.close()
