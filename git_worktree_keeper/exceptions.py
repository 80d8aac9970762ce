"""Custom exceptions for git-worktree-keeper"""

from typing import Optional


class GitWorktreeKeeperError(Exception):
    """Base exception for all git-worktree-keeper errors."""
    pass


class ExternalCommandError(GitWorktreeKeeperError):
    """Exception raised when git is missing or exits with a non-zero status."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class WorktreeCreationError(ExternalCommandError):
    """Exception raised when git refuses to add a worktree."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__("worktree add", f"{path}: {message}" if message else path)


class WorktreeDeletionError(ExternalCommandError):
    """Exception raised when git refuses to remove a worktree."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__("worktree remove", f"{path}: {message}" if message else path)


class WorktreeDirtyError(WorktreeDeletionError):
    """Exception raised when a worktree has local changes or is locked."""
    pass


class NoWorktreesFound(GitWorktreeKeeperError):
    """Raised when a listing holds nothing but the bare repository record."""

    def __init__(self, repo_path: Optional[str] = None):
        self.repo_path = repo_path
        msg = "No git worktrees found"
        if repo_path:
            msg += f" in {repo_path}"
        super().__init__(msg)


class AmbiguousBaseError(GitWorktreeKeeperError):
    """Raised when a new branch is requested without a ref to start it from."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(
            f"Branch '{branch}' does not exist; a base branch is required to create it"
        )


class InvalidWorktreeError(GitWorktreeKeeperError):
    """Raised when a path is not (or is no longer) a worktree of the repository."""

    def __init__(self, path: str, reason: str = "not a worktree"):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid worktree '{path}': {reason}")


class UserCancelled(GitWorktreeKeeperError):
    """The user declined a confirmation prompt."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        super().__init__("Didn't delete worktree" + (f" {path}" if path else ""))
