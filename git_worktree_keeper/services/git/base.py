"""Shared helpers for the git services."""

import git

from git_worktree_keeper.exceptions import ExternalCommandError


def open_repo(repo_path: str) -> git.Repo:
    """Open the repository at (or above) repo_path.

    GitPython repos are lightweight - they don't clone, just open the existing repo.

    Raises:
        ExternalCommandError: If the path is not inside a git repository
    """
    try:
        return git.Repo(repo_path, search_parent_directories=True)
    except git.exc.NoSuchPathError as e:
        raise ExternalCommandError("open_repo", f"No such path: {e}") from e
    except git.exc.InvalidGitRepositoryError as e:
        raise ExternalCommandError("open_repo", f"Not a git repository: {e}") from e


def git_error_stderr(error: git.exc.GitCommandError) -> str:
    """Return the stderr text of a failed git command, without GitPython's decoration."""
    stderr = error.stderr if hasattr(error, "stderr") and error.stderr else str(error)
    stderr = stderr.strip()
    # GitPython renders stderr as "stderr: '<text>'"
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:"):].strip()
    if len(stderr) >= 2 and stderr[0] == stderr[-1] == "'":
        stderr = stderr[1:-1].strip()
    return stderr


def describe_git_error(command: str, error: git.exc.GitCommandError) -> str:
    """Build a one-line description of a failed git command."""
    stderr = git_error_stderr(error)
    status = error.status if hasattr(error, "status") else "unknown"

    if stderr:
        return f"git {command} failed (exit {status}): {stderr}"
    return f"git {command} failed with exit code {status}"
