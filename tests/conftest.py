"""Pytest fixtures for git-worktree-keeper tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock
import pytest
import git

from git_worktree_keeper.config import Config
from git_worktree_keeper.core import WorktreeManager, WorktreeSession


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # git records resolved paths; resolve so comparisons match
        yield Path(tmpdir).resolve()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch('-M', 'main')
    except Exception:
        pass

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_worktree(git_repo, temp_dir):
    """Repository with a linked worktree for branch 'feature' at <temp>/feature."""
    worktree_path = temp_dir / "feature"
    git_repo.git.worktree("add", "-b", "feature", str(worktree_path), "main")
    yield git_repo


@pytest.fixture
def notices():
    """Collects messages the force policy would print."""
    return []


@pytest.fixture
def confirm():
    """Confirmation function that answers yes; tests can change return_value."""
    return Mock(return_value="y")


@pytest.fixture
def make_manager(git_repo, confirm, notices):
    """Factory for a WorktreeManager on git_repo with a given Config."""

    def _make(**config_values):
        config_values.setdefault("change_directory", False)
        session = WorktreeSession.create(
            Config(**config_values), confirm=confirm, notify=notices.append
        )
        return WorktreeManager(git_repo.working_dir, session)

    return _make


@pytest.fixture
def manager(make_manager):
    """Manager with confirmations disabled."""
    return make_manager(confirm_deletions=False)


@pytest.fixture
def porcelain_output():
    """Sample `git worktree list --porcelain` output with a bare record."""
    return (
        "worktree /repo/.bare\n"
        "bare\n"
        "\n"
        "worktree /repo/main\n"
        "HEAD abcd1234567890abcd1234567890abcd12345678\n"
        "branch refs/heads/main\n"
        "\n"
        "worktree /repo/hotfix\n"
        "HEAD 1234567890abcdef1234567890abcdef12345678\n"
        "detached\n"
        "locked\n"
        "\n"
        "worktree /repo/with space\n"
        "HEAD fedcba9876543210fedcba9876543210fedcba98\n"
        "branch refs/heads/feat/x\n"
        "prunable gitdir file points to non-existent location\n"
    )
