"""Configuration handling for git-worktree-keeper"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union

CONFIG_FILE_NAME = "git-worktree-keeper.json"


@dataclass(frozen=True)
class Config:
    """Configuration for git-worktree-keeper with validation.

    Frozen: a Config is built once at startup and only read afterwards.
    """

    # Ask before removing a worktree
    confirm_deletions: bool = True
    # Directory that bare worktree names (no '/') are placed under
    base_directory: Optional[str] = None
    # chdir into the worktree on switch
    change_directory: bool = True

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_confirm_deletions()
        self._validate_base_directory()
        self._validate_change_directory()

    def _validate_confirm_deletions(self):
        """Validate confirm_deletions is a boolean."""
        if not isinstance(self.confirm_deletions, bool):
            raise ValueError(
                f"confirm_deletions must be a boolean, got {self.confirm_deletions!r}"
            )

    def _validate_base_directory(self):
        """Validate base_directory is None or a non-empty string."""
        if self.base_directory is None:
            return
        if not isinstance(self.base_directory, str) or not self.base_directory.strip():
            raise ValueError("base_directory must be a non-empty string or null")

    def _validate_change_directory(self):
        """Validate change_directory is a boolean."""
        if not isinstance(self.change_directory, bool):
            raise ValueError(
                f"change_directory must be a boolean, got {self.change_directory!r}"
            )

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "confirm_deletions": self.confirm_deletions,
            "base_directory": self.base_directory,
            "change_directory": self.change_directory,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Config":
        """Load Config from a JSON file.

        Raises:
            ValueError: If the file is not valid JSON or not a JSON object
        """
        path = Path(path)
        try:
            with open(path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a JSON object")
        return cls.from_dict(data)

    @classmethod
    def discover(cls, repo_root: Union[str, Path]) -> "Config":
        """Load the repository's config file if one exists, else defaults."""
        candidate = Path(repo_root) / CONFIG_FILE_NAME
        if candidate.is_file():
            return cls.from_file(candidate)
        return cls()
