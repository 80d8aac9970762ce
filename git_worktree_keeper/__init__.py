"""
git-worktree-keeper - Create, switch and delete git worktrees
"""

from .__version__ import __version__
from .config import Config
from .core import WorktreeManager, WorktreeSession

__all__ = ["Config", "WorktreeManager", "WorktreeSession", "__version__"]
