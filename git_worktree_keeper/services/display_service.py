"""Display and formatting service for worktree information"""
import os
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from git_worktree_keeper.constants import WORKTREE_COLUMNS
from git_worktree_keeper.models.worktree import BranchRef, WorktreeEntry

console = Console()


def format_path(path: str, cwd: Optional[str] = None) -> str:
    """Shorten a path for display: relative to cwd when below it, else with ~ for home."""
    cwd = cwd or os.getcwd()
    real_path = os.path.realpath(path)
    real_cwd = os.path.realpath(cwd)
    if real_path == real_cwd:
        return "."
    if real_path.startswith(real_cwd + os.sep):
        return os.path.relpath(real_path, real_cwd)

    home = os.path.expanduser("~")
    if path == home or path.startswith(home + os.sep):
        return "~" + path[len(home):]
    return path


def _containing_worktree(
    worktrees: List[WorktreeEntry], path: str
) -> Optional[WorktreeEntry]:
    """The most deeply nested worktree that contains path."""
    real = os.path.realpath(path)
    best = None
    for wt in worktrees:
        root = os.path.realpath(wt.path)
        if real == root or real.startswith(root + os.sep):
            if best is None or len(root) > len(os.path.realpath(best.path)):
                best = wt
    return best


class DisplayService:
    def __init__(self, output: Optional[Console] = None):
        self.console = output or console

    def worktree_row(self, wt: WorktreeEntry, cwd: Optional[str] = None) -> List[str]:
        """Cell values for one worktree, in WORKTREE_COLUMNS order."""
        values = {
            "branch": wt.branch or "(detached)",
            "path": format_path(wt.path, cwd),
            "sha": wt.commit,
        }
        return [values[col.key] for col in WORKTREE_COLUMNS]

    def display_worktree_table(
        self, worktrees: List[WorktreeEntry], current_path: Optional[str] = None
    ) -> None:
        """Display a table of worktrees; the one containing current_path is highlighted."""
        table = Table()
        for col in WORKTREE_COLUMNS:
            table.add_column(col.label, style="cyan" if col.key == "branch" else None)

        active = _containing_worktree(worktrees, current_path) if current_path else None
        for wt in worktrees:
            style = None
            if wt is active:
                style = "bold green"
            elif not wt.exists or wt.is_prunable:
                style = "yellow"
            table.add_row(*self.worktree_row(wt), style=style)

        self.console.print(table)

    def display_branch_table(self, branches: List[BranchRef]) -> None:
        """Display local branches with a worktree marker."""
        table = Table()
        table.add_column("Branch")
        table.add_column("Worktree")

        for ref in branches:
            name = f"{ref.name} *" if ref.is_current else ref.name
            table.add_row(name, "W" if ref.exists_as_worktree else "")

        self.console.print(table)
        self.console.print("[dim]* = current branch   W = checked out in a worktree[/dim]")
