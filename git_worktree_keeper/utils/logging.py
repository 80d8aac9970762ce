"""Logging setup for git-worktree-keeper"""
import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_PREFIX = "git_worktree_keeper."
LOG_DIR = Path.home() / ".git-worktree-keeper"
LOG_FILE_NAME = "git-worktree-keeper.log"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# ANSI colors for the message text of each level
LEVEL_COLORS = {
    logging.DEBUG: "\033[2m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}


class LevelColorFormatter(logging.Formatter):
    """Colors whole log lines by level when writing to a terminal."""

    def __init__(self, fmt: str, color: bool = False):
        super().__init__(fmt, datefmt="%Y-%m-%d %H:%M:%S")
        self.color = color

    def format(self, record):
        line = super().format(record)
        prefix = LEVEL_COLORS.get(record.levelno) if self.color else None
        return f"{prefix}{line}\033[0m" if prefix else line


def log_level(verbose: bool = False, debug: bool = False) -> int:
    if debug:
        return logging.DEBUG
    return logging.INFO if verbose else logging.WARNING


def setup_logging(
    verbose: bool = False, debug: bool = False, log_dir: Optional[Path] = None
) -> None:
    """Route log records to stderr, and in debug mode to a log file as well.

    Stdout is left alone: `switch` prints a path there for shells to consume.
    """
    level = log_level(verbose, debug)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level)
    stderr_handler.setFormatter(
        LevelColorFormatter(FILE_FORMAT if debug else "[%(name)s] %(message)s", color=sys.stderr.isatty())
    )
    root_logger.addHandler(stderr_handler)

    if debug:
        log_dir = log_dir or LOG_DIR
        log_dir.mkdir(parents=True, exist_ok=True)
        # One file per run
        file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME, mode="w")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(LevelColorFormatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)

    # GitPython logs every command it runs
    logging.getLogger("git").setLevel(logging.DEBUG if debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, named without the package prefix (e.g. `core.worktree_manager`)."""
    if name.startswith(PACKAGE_PREFIX):
        name = name[len(PACKAGE_PREFIX):]
    return logging.getLogger(name)
