"""Command-line interface for git-worktree-keeper"""

import dataclasses
import os
import sys

from rich.console import Console

from git_worktree_keeper.cli.args import parse_args
from git_worktree_keeper.config import Config
from git_worktree_keeper.constants import (
    CURRENT_HEAD,
    MSG_DELETE_FAILED,
    PROMPT_BASE_BRANCH,
    PROMPT_USE_CURRENT_AS_BASE,
)
from git_worktree_keeper.core import WorktreeManager, WorktreeSession
from git_worktree_keeper.exceptions import (
    GitWorktreeKeeperError,
    NoWorktreesFound,
    WorktreeDirtyError,
)
from git_worktree_keeper.services.display_service import DisplayService
from git_worktree_keeper.services.force_policy import is_affirmative
from git_worktree_keeper.services.git import RepositoryInspector
from git_worktree_keeper.utils.logging import get_logger, setup_logging

console = Console()
logger = get_logger(__name__)


def load_config(parsed_args, repo_path: str) -> Config:
    """Build the Config from the config file plus command-line overrides."""
    if parsed_args.config:
        config = Config.from_file(parsed_args.config)
    else:
        config = Config.discover(RepositoryInspector(repo_path).repo_root)

    overrides = {}
    if parsed_args.base_directory:
        overrides["base_directory"] = parsed_args.base_directory
    if getattr(parsed_args, "yes", False):
        overrides["confirm_deletions"] = False
    # A CLI process can't change its parent shell's directory
    overrides["change_directory"] = False
    return dataclasses.replace(config, **overrides)


def cmd_list(manager: WorktreeManager, parsed_args) -> int:
    DisplayService(console).display_worktree_table(
        manager.list_worktrees(), current_path=os.getcwd()
    )
    return 0


def cmd_branches(manager: WorktreeManager, parsed_args) -> int:
    DisplayService(console).display_branch_table(manager.list_branches())
    return 0


def ask_base_branch(manager: WorktreeManager) -> str:
    """Ask which ref a new branch should start from."""
    if is_affirmative(console.input(PROMPT_USE_CURRENT_AS_BASE) or "y"):
        return CURRENT_HEAD

    DisplayService(console).display_branch_table(manager.list_branches())
    return console.input(PROMPT_BASE_BRANCH).strip()


def cmd_create(manager: WorktreeManager, parsed_args) -> int:
    base = parsed_args.base
    needs_base = not base and not parsed_args.commit and not manager.branch_exists(parsed_args.branch)
    if needs_base and not parsed_args.no_interactive and sys.stdin.isatty():
        base = ask_base_branch(manager) or None

    result = manager.create_worktree(
        parsed_args.path or parsed_args.branch,
        parsed_args.branch,
        commit_ish=parsed_args.commit,
        base_branch=base,
    )
    if result.created_branch:
        console.print(
            f"[green]✓ Created branch {result.branch} from {result.base} "
            f"in worktree {result.path}[/green]"
        )
    else:
        console.print(f"[green]✓ Created worktree {result.path} for {result.branch}[/green]")
    return 0


def cmd_switch(manager: WorktreeManager, parsed_args) -> int:
    result = manager.switch_worktree(parsed_args.target)
    # Bare path on stdout so shells can `cd "$(git-worktree-keeper switch x)"`
    console.print(result.path, markup=False, highlight=False, soft_wrap=True)
    return 0


def cmd_delete(manager: WorktreeManager, parsed_args) -> int:
    if parsed_args.force:
        manager.toggle_force()

    result = manager.delete_worktree(
        parsed_args.target,
        on_failure=lambda message: console.print(f"[red]✗ {message}[/red]"),
    )
    if result.cancelled:
        return 1
    if not result.succeeded:
        if isinstance(result.error, WorktreeDirtyError) and not result.forced:
            console.print(f"[yellow]{MSG_DELETE_FAILED}[/yellow]")
        return 1

    console.print(f"[green]✓ Removed worktree at {result.path}[/green]")
    return 0


def cmd_prune(manager: WorktreeManager, parsed_args) -> int:
    manager.prune_worktrees()
    console.print("[green]✓ Pruned worktree metadata[/green]")
    return 0


COMMANDS = {
    "list": cmd_list,
    "branches": cmd_branches,
    "create": cmd_create,
    "switch": cmd_switch,
    "delete": cmd_delete,
    "prune": cmd_prune,
}


def main(argv=None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        repo_path = parsed_args.repo or os.getcwd()
        config = load_config(parsed_args, repo_path)

        if parsed_args.debug:
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        session = WorktreeSession.create(config, confirm=console.input)
        manager = WorktreeManager(repo_path, session)
        return COMMANDS[parsed_args.command](manager, parsed_args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except NoWorktreesFound as e:
        console.print(f"[yellow]{e}[/yellow]")
        return 0
    except (GitWorktreeKeeperError, ValueError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        if parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
