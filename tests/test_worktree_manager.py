"""Tests for WorktreeManager"""
import os
import shutil
import pytest
from unittest.mock import Mock, patch

from git_worktree_keeper.constants import MSG_NOT_DELETED, PROMPT_FORCE_DELETE
from git_worktree_keeper.core import WorktreeManager, WorktreeSession, normalize_worktree_path
from git_worktree_keeper.config import Config
from git_worktree_keeper.exceptions import (
    AmbiguousBaseError,
    InvalidWorktreeError,
    UserCancelled,
    WorktreeCreationError,
    WorktreeDeletionError,
    WorktreeDirtyError,
)
from git_worktree_keeper.models.operation import DeleteOutcome, Operation


class TestNormalizeWorktreePath:
    """Test where worktree paths end up."""

    def test_bare_name_goes_under_base_directory(self):
        assert normalize_worktree_path("feat", "/repo", "/worktrees") == "/worktrees/feat"

    def test_relative_base_directory_is_repo_relative(self):
        assert normalize_worktree_path("feat", "/repo", "trees") == "/repo/trees/feat"

    def test_name_with_slash_ignores_base_directory(self):
        assert normalize_worktree_path("feat/x", "/repo", "/worktrees") == "/repo/feat/x"

    def test_no_base_directory(self):
        assert normalize_worktree_path("feat", "/repo") == "/repo/feat"

    def test_absolute_path_kept(self):
        assert normalize_worktree_path("/elsewhere/feat", "/repo", "/worktrees") == "/elsewhere/feat"


class TestCreateWorktree:
    """Test worktree creation."""

    def test_new_branch_from_base(self, manager, temp_dir):
        target = str(temp_dir / "feat-x")
        result = manager.create_worktree(target, "feat-x", base_branch="main")

        assert result.path == target
        assert result.created_branch is True
        assert result.base == "main"
        assert os.path.isdir(target)
        assert manager.branch_exists("feat-x")
        assert target in [wt.path for wt in manager.list_worktrees()]

    def test_new_branch_without_base_is_ambiguous(self, manager, temp_dir):
        """Test a missing branch with no base branch fails before touching git."""
        with patch.object(manager.worktree_service, "add_worktree") as add:
            with pytest.raises(AmbiguousBaseError):
                manager.create_worktree("feat/x", "feat/x")
            add.assert_not_called()

    def test_commit_ish_is_a_start_point(self, manager, temp_dir):
        target = str(temp_dir / "from-head")
        result = manager.create_worktree(target, "from-head", commit_ish="HEAD")
        assert result.created_branch is True
        assert result.base == "HEAD"

    def test_existing_branch_checked_out(self, manager, git_repo, temp_dir):
        git_repo.create_head("existing")
        target = str(temp_dir / "existing")

        result = manager.create_worktree(target, "existing")

        assert result.created_branch is False
        assert result.base is None
        entry = manager.inspector.find_worktree(target)
        assert entry.branch == "existing"

    def test_bare_name_uses_base_directory(self, make_manager, git_repo):
        manager = make_manager(confirm_deletions=False, base_directory="trees")
        result = manager.create_worktree("feat-y", "feat-y", base_branch="main")
        assert result.path == os.path.join(git_repo.working_dir, "trees", "feat-y")
        assert os.path.isdir(result.path)

    def test_empty_path_falls_back_to_branch(self, manager, git_repo):
        result = manager.create_worktree("", "solo", base_branch="main")
        assert result.path == os.path.join(git_repo.working_dir, "solo")

    def test_existing_worktree_path_rejected(self, manager, git_repo_with_worktree, temp_dir):
        with pytest.raises(WorktreeCreationError, match="already exists"):
            manager.create_worktree(str(temp_dir / "feature"), "other", base_branch="main")

    def test_invalid_base_ref(self, manager, temp_dir):
        """Test git's refusal carries its diagnostic."""
        target = temp_dir / "bad"
        with pytest.raises(WorktreeCreationError) as exc_info:
            manager.create_worktree(str(target), "bad", base_branch="no-such-ref")
        assert exc_info.value.message
        assert not manager.branch_exists("bad")

    def test_branch_required(self, manager):
        with pytest.raises(ValueError):
            manager.create_worktree("somewhere", "  ")


class TestSwitchWorktree:
    """Test switching the active worktree."""

    def test_switch_changes_directory(self, make_manager, git_repo_with_worktree, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        manager = make_manager(change_directory=True)
        target = str(temp_dir / "feature")

        result = manager.switch_worktree(target)

        assert result.path == target
        assert result.previous_path == str(temp_dir)
        assert os.path.realpath(os.getcwd()) == target
        assert manager.session.current_path == target

    def test_switch_by_branch_name(self, manager, git_repo_with_worktree, temp_dir):
        result = manager.switch_worktree("feature")
        assert result.path == str(temp_dir / "feature")

    def test_switch_without_chdir(self, manager, git_repo_with_worktree, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        manager.switch_worktree("feature")
        assert os.getcwd() == str(temp_dir)

    def test_previous_path_tracks_last_switch(self, manager, git_repo_with_worktree, temp_dir):
        manager.switch_worktree("feature")
        result = manager.switch_worktree("main")
        assert result.previous_path == str(temp_dir / "feature")

    def test_stale_worktree(self, manager, git_repo_with_worktree, temp_dir):
        """Test a worktree whose directory was removed behind git's back."""
        shutil.rmtree(temp_dir / "feature")
        with pytest.raises(InvalidWorktreeError, match="no longer exists"):
            manager.switch_worktree(str(temp_dir / "feature"))

    def test_unknown_path(self, manager, temp_dir):
        with pytest.raises(InvalidWorktreeError):
            manager.switch_worktree(str(temp_dir / "nowhere"))

    def test_directory_that_is_not_a_worktree(self, manager, temp_dir):
        (temp_dir / "plain").mkdir()
        with pytest.raises(InvalidWorktreeError, match="not a worktree"):
            manager.switch_worktree(str(temp_dir / "plain"))


class TestDeleteWorktree:
    """Test deletion, force handling and callbacks."""

    def test_delete_clean_worktree(self, manager, git_repo_with_worktree, temp_dir):
        on_success = Mock()
        on_failure = Mock()
        target = str(temp_dir / "feature")

        result = manager.delete_worktree(target, on_success=on_success, on_failure=on_failure)

        assert result.outcome is DeleteOutcome.DELETED
        assert result.succeeded
        assert not os.path.exists(target)
        on_success.assert_called_once_with()
        on_failure.assert_not_called()

    def test_delete_by_branch_name(self, manager, git_repo_with_worktree, temp_dir):
        result = manager.delete_worktree("feature")
        assert result.succeeded
        assert result.path == str(temp_dir / "feature")

    def test_dirty_then_forced(self, manager, git_repo_with_worktree, temp_dir):
        """Test a dirty worktree needs force, and the forced retry resets the flag."""
        target = temp_dir / "feature"
        (target / "scratch.txt").write_text("uncommitted\n")
        on_failure = Mock()

        result = manager.delete_worktree(str(target), forced=False, on_failure=on_failure)

        assert result.outcome is DeleteOutcome.FAILED
        assert isinstance(result.error, WorktreeDirtyError)
        on_failure.assert_called_once_with(result.message)
        assert target.exists()

        manager.toggle_force()
        result = manager.delete_worktree(str(target), forced=True)

        assert result.succeeded
        assert not target.exists()
        assert manager.session.policy.forced is False

    def test_locked_then_forced(self, manager, git_repo_with_worktree, temp_dir):
        """Test a locked worktree refuses plain removal but goes with force."""
        target = temp_dir / "feature"
        git_repo_with_worktree.git.worktree("lock", "--reason", "in use", str(target))

        result = manager.delete_worktree(str(target), forced=False)

        assert result.outcome is DeleteOutcome.FAILED
        assert isinstance(result.error, WorktreeDirtyError)
        assert target.exists()

        manager.toggle_force()
        result = manager.delete_worktree(str(target), forced=True)

        assert result.succeeded
        assert not target.exists()
        assert manager.session.policy.forced is False

    def test_session_flag_used_when_forced_omitted(self, manager, git_repo_with_worktree, temp_dir):
        target = temp_dir / "feature"
        (target / "scratch.txt").write_text("uncommitted\n")

        manager.toggle_force()
        result = manager.delete_worktree(str(target))

        assert result.forced is True
        assert result.succeeded

    def test_failure_keeps_force_flag(self, manager, temp_dir):
        """Test a failed deletion never changes the flag."""
        manager.toggle_force()
        result = manager.delete_worktree(str(temp_dir / "not-a-worktree"))

        assert result.outcome is DeleteOutcome.FAILED
        assert manager.session.policy.forced is True

    def test_failure_without_force_stays_clear(self, manager, temp_dir):
        result = manager.delete_worktree(str(temp_dir / "not-a-worktree"))
        assert not result.succeeded
        assert manager.session.policy.forced is False

    def test_success_resets_flag_from_idle(self, manager, git_repo_with_worktree, temp_dir):
        result = manager.delete_worktree(str(temp_dir / "feature"))
        assert result.succeeded
        assert manager.session.policy.forced is False

    def test_failures_are_not_raised(self, manager):
        """Test errors from git come back in the result."""
        with patch.object(
            manager.worktree_service,
            "remove_worktree",
            side_effect=WorktreeDeletionError("/repo/old", "permission denied"),
        ):
            result = manager.delete_worktree("/repo/old", forced=False)

        assert result.outcome is DeleteOutcome.FAILED
        assert "permission denied" in result.message

    def test_declined_confirmation(self, make_manager, git_repo_with_worktree, temp_dir, confirm, notices):
        manager = make_manager(confirm_deletions=True)
        manager.toggle_force()
        confirm.return_value = "n"
        on_success = Mock()
        on_failure = Mock()
        target = str(temp_dir / "feature")

        result = manager.delete_worktree(target, on_success=on_success, on_failure=on_failure)

        assert result.cancelled
        assert isinstance(result.error, UserCancelled)
        assert os.path.isdir(target)
        assert manager.session.policy.forced is True
        on_success.assert_not_called()
        on_failure.assert_not_called()
        assert notices[-1] == MSG_NOT_DELETED
        confirm.assert_called_once_with(PROMPT_FORCE_DELETE)

    def test_accepted_confirmation(self, make_manager, git_repo_with_worktree, temp_dir, confirm):
        manager = make_manager(confirm_deletions=True)
        confirm.return_value = "Yes"
        assert manager.delete_worktree(str(temp_dir / "feature")).succeeded

    def test_no_prompt_when_confirmations_disabled(self, manager, git_repo_with_worktree, temp_dir, confirm):
        confirm.return_value = "n"
        assert manager.delete_worktree(str(temp_dir / "feature")).succeeded
        confirm.assert_not_called()

    def test_deleting_current_worktree_clears_it(self, manager, git_repo_with_worktree, temp_dir):
        manager.switch_worktree("feature")
        manager.delete_worktree("feature")
        assert manager.session.current_path is None


class TestTreeChangeHooks:
    """Test hook notifications from the manager."""

    def test_operations_reported_in_order(self, manager, temp_dir):
        events = []
        manager.session.hooks.register(lambda op, meta: events.append((op, meta)))
        target = str(temp_dir / "hooked")

        manager.create_worktree(target, "hooked", base_branch="main")
        manager.switch_worktree(target)
        manager.delete_worktree(target)

        assert [op for op, _ in events] == [Operation.CREATE, Operation.SWITCH, Operation.DELETE]
        assert events[0][1] == {"path": target, "branch": "hooked", "base": "main"}
        assert events[1][1]["path"] == target
        assert events[2][1]["path"] == target

    def test_failing_hook_does_not_break_operation(self, manager, temp_dir):
        later = Mock()
        manager.session.hooks.register(Mock(side_effect=RuntimeError("boom")))
        manager.session.hooks.register(later)

        result = manager.create_worktree(str(temp_dir / "h2"), "h2", base_branch="main")

        assert os.path.isdir(result.path)
        later.assert_called_once()

    def test_unregistered_hook_not_called(self, manager, temp_dir):
        hook = manager.session.hooks.register(Mock())
        manager.session.hooks.unregister(hook)
        manager.session.hooks.unregister(hook)

        manager.create_worktree(str(temp_dir / "h3"), "h3", base_branch="main")

        hook.assert_not_called()

    def test_no_hook_on_failure(self, manager, temp_dir):
        hook = Mock()
        manager.session.hooks.register(hook)
        manager.delete_worktree(str(temp_dir / "not-a-worktree"))
        hook.assert_not_called()


def test_default_session():
    """Test a manager builds its own session when none is given."""
    manager = WorktreeManager("/fake/repo")
    assert isinstance(manager.session, WorktreeSession)
    assert manager.config == Config()
