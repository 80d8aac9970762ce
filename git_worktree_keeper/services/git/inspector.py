"""Read-only queries about a repository's worktrees and branches."""

import os
import re
from typing import Dict, List, Optional

import git

from git_worktree_keeper.constants import BARE_COMMIT, SHORT_SHA_LENGTH
from git_worktree_keeper.exceptions import ExternalCommandError, NoWorktreesFound
from git_worktree_keeper.models.worktree import BranchRef, WorktreeEntry
from git_worktree_keeper.services.git.base import describe_git_error, open_repo
from git_worktree_keeper.utils.logging import get_logger

logger = get_logger(__name__)

# One line of the human-readable `git worktree list`, e.g.
#   /repo        abcd123 [main]
#   /repo/.bare  (bare)
#   /repo/tmp    abcd123 (detached HEAD) locked
_LIST_LINE = re.compile(
    r"^(?P<path>.+?)\s+"
    r"(?:(?P<bare>\(bare\))"
    r"|(?P<commit>[0-9a-f]{4,40})"
    r"(?:\s+(?:\[(?P<branch>[^\]]+)\]|\(detached HEAD\)))?)"
    r"(?P<flags>(?:\s+(?:locked|prunable))*)\s*$"
)


def parse_worktree_list(output: str) -> List[WorktreeEntry]:
    """Parse the human-readable output of `git worktree list`.

    Bare records are returned with commit "(bare)"; filtering them is up to
    the caller. Lines that don't look like a worktree row are skipped.
    """
    entries = []
    for line in output.splitlines():
        if not line.strip():
            continue
        match = _LIST_LINE.match(line.strip())
        if not match:
            logger.warning(f"Unrecognized worktree list line: {line!r}")
            continue

        flags = match.group("flags").split()
        entries.append(
            WorktreeEntry(
                path=match.group("path"),
                commit=BARE_COMMIT if match.group("bare") else match.group("commit"),
                branch=match.group("branch"),
                is_locked="locked" in flags,
                is_prunable="prunable" in flags,
            )
        )
    return entries


def parse_worktree_porcelain(output: str) -> List[WorktreeEntry]:
    """Parse the output of `git worktree list --porcelain`.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name
        (blank line between worktrees)
    """
    entries = []
    current: Dict[str, str] = {}

    def flush():
        if not current.get("worktree"):
            return
        if "bare" in current:
            commit = BARE_COMMIT
        else:
            commit = current.get("HEAD", "")[:SHORT_SHA_LENGTH]
        branch = current.get("branch")
        if branch and branch.startswith("refs/heads/"):
            branch = branch[len("refs/heads/"):]
        entries.append(
            WorktreeEntry(
                path=current["worktree"],
                commit=commit,
                branch=branch or None,
                is_locked="locked" in current,
                is_prunable="prunable" in current,
            )
        )

    for line in output.split("\n"):
        line = line.strip()
        if not line:
            # Empty line marks end of worktree entry
            flush()
            current = {}
            continue
        key, _, value = line.partition(" ")
        current[key] = value

    # Handle last entry if no trailing blank line
    flush()
    return entries


def same_path(a: str, b: str) -> bool:
    """Compare two filesystem paths after resolving symlinks."""
    return os.path.realpath(a) == os.path.realpath(b)


class RepositoryInspector:
    """Lists worktrees and branches of a repository."""

    def __init__(self, repo_path: str):
        """Initialize the inspector.

        Args:
            repo_path: Path to the git repository (or any directory inside it)
        """
        self.repo_path = repo_path

    def _get_repo(self) -> git.Repo:
        """Get a fresh git.Repo instance."""
        return open_repo(self.repo_path)

    def _git(self, command: str, *args: str) -> str:
        """Run a git subcommand and return its stdout.

        Raises:
            ExternalCommandError: If git is missing or exits non-zero
        """
        repo = self._get_repo()
        try:
            return getattr(repo.git, command)(*args)
        except git.exc.GitCommandNotFound as e:
            raise ExternalCommandError(command, f"git executable not found: {e}") from e
        except git.exc.GitCommandError as e:
            message = describe_git_error(command, e)
            logger.error(message)
            raise ExternalCommandError(command, message) from e
        finally:
            repo.close()

    @property
    def repo_root(self) -> str:
        """Directory that relative worktree paths are resolved against.

        This is the parent of the shared git directory, so it is the same
        from every linked worktree, and for a `/repo/.bare` layout it is `/repo`.
        """
        repo = self._get_repo()
        try:
            return os.path.dirname(os.path.abspath(repo.common_dir))
        finally:
            repo.close()

    def list_all_worktrees(self) -> List[WorktreeEntry]:
        """List every worktree record, bare record included."""
        output = self._git("worktree", "list", "--porcelain")
        entries = parse_worktree_porcelain(output)
        logger.debug(f"Found {len(entries)} worktree records")
        return entries

    def list_worktrees(self) -> List[WorktreeEntry]:
        """List user-selectable worktrees (the bare record is skipped).

        Raises:
            ExternalCommandError: If git fails
            NoWorktreesFound: If nothing but the bare record exists
        """
        entries = [wt for wt in self.list_all_worktrees() if not wt.is_bare]
        if not entries:
            raise NoWorktreesFound(self.repo_path)
        for wt in entries:
            logger.debug(f"  {wt}")
        return entries

    def find_worktree(self, path_or_branch: str) -> Optional[WorktreeEntry]:
        """Find a worktree by its path or by the branch checked out in it."""
        try:
            entries = self.list_worktrees()
        except NoWorktreesFound:
            return None

        for wt in entries:
            if same_path(wt.path, path_or_branch):
                return wt
        for wt in entries:
            if wt.branch == path_or_branch:
                return wt
        return None

    def branch_exists(self, name: str) -> bool:
        """Check if a local branch with exactly this name exists."""
        if not name or not name.strip():
            return False
        output = self._git("branch", "--list", name)
        # Each line is "  name", "* name" or "+ name" (checked out elsewhere)
        names = {line.strip().lstrip("*+").strip() for line in output.splitlines()}
        return name in names

    def current_branch(self) -> Optional[str]:
        """Name of the branch checked out at repo_path, or None when detached."""
        try:
            branch = self._git("rev-parse", "--abbrev-ref", "HEAD").strip()
        except ExternalCommandError as e:
            # Unborn HEAD (no commits yet) fails here
            logger.debug(f"Could not resolve current branch: {e}")
            return None
        return None if branch == "HEAD" else branch

    def list_branches(self) -> List[BranchRef]:
        """List local branches, marking those checked out in a worktree."""
        output = self._git("for-each-ref", "--format=%(refname:short)", "refs/heads")
        try:
            in_worktrees = {wt.branch for wt in self.list_worktrees() if wt.branch}
        except NoWorktreesFound:
            in_worktrees = set()
        current = self.current_branch()

        return [
            BranchRef(
                name=name,
                exists_as_worktree=name in in_worktrees,
                is_current=name == current,
            )
            for name in (line.strip() for line in output.splitlines())
            if name
        ]
