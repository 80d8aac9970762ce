"""Operation kinds and result models"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional


class Operation(Enum):
    """Kind of change made to the set of worktrees."""
    CREATE = "create"
    SWITCH = "switch"
    DELETE = "delete"


class DeleteOutcome(Enum):
    """How a delete request ended."""
    DELETED = "deleted"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class CreateResult:
    """Outcome of a successful worktree creation."""
    path: str
    branch: str
    created_branch: bool  # True if `-b` made a new branch
    base: Optional[str] = None


@dataclass(frozen=True)
class SwitchResult:
    """Outcome of a successful switch."""
    path: str
    previous_path: Optional[str] = None


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a delete request.

    Failures are returned rather than raised, since retrying with force is
    the caller's decision.
    """
    path: str
    outcome: DeleteOutcome
    forced: bool
    message: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is DeleteOutcome.DELETED

    @property
    def cancelled(self) -> bool:
        return self.outcome is DeleteOutcome.CANCELLED
