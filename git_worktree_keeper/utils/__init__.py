"""Utility functions for git-worktree-keeper.

This package provides:
- logging: Logging configuration and logger creation
"""

from .logging import setup_logging, get_logger

__all__ = [
    "setup_logging",
    "get_logger",
]
