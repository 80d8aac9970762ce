"""Command-line argument parsing for git-worktree-keeper."""

import argparse
from git_worktree_keeper.__version__ import __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subparser per command."""
    parser = argparse.ArgumentParser(
        prog="git-worktree-keeper",
        description="List, create, switch and delete git worktrees",
        epilog="Settings are read from git-worktree-keeper.json in the repository root "
        "unless --config is given.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"git-worktree-keeper {__version__}")
    parser.add_argument(
        "-C",
        dest="repo",
        metavar="DIR",
        help="Run as if started in DIR (default: current directory)",
    )
    parser.add_argument("--config", metavar="FILE", help="Path to a JSON config file")
    parser.add_argument(
        "--base-directory",
        metavar="DIR",
        help="Directory for worktrees given by bare name (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    subparsers.add_parser("list", help="List worktrees")
    subparsers.add_parser("branches", help="List local branches")

    create = subparsers.add_parser("create", help="Create a worktree for a branch")
    create.add_argument("branch", help="Branch to check out (created if it doesn't exist)")
    create.add_argument(
        "--path", help="Worktree path (default: the branch name, under --base-directory)"
    )
    create.add_argument("--base", metavar="REF", help="Base branch for a new branch")
    create.add_argument(
        "--commit", metavar="COMMIT", help="Start point for a new branch when --base is not given"
    )
    create.add_argument(
        "--no-interactive",
        action="store_true",
        help="Fail instead of asking for a base branch",
    )

    switch = subparsers.add_parser(
        "switch", help="Switch to a worktree and print its path"
    )
    switch.add_argument("target", help="Worktree path or branch name")

    delete = subparsers.add_parser("delete", help="Delete a worktree")
    delete.add_argument("target", help="Worktree path or branch name")
    delete.add_argument(
        "--force", action="store_true", help="Delete even with local changes or a lock"
    )
    delete.add_argument("-y", "--yes", action="store_true", help="Skip the confirmation prompt")

    subparsers.add_parser("prune", help="Prune metadata of missing worktrees")

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
