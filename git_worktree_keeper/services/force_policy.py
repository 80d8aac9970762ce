"""Force flag and confirmation gate for worktree deletion."""

from enum import Enum
from typing import Callable, Optional

from rich.console import Console

from git_worktree_keeper.config import Config
from git_worktree_keeper.constants import (
    MSG_FORCE_OFF,
    MSG_FORCE_ON,
    MSG_NOT_DELETED,
    PROMPT_DELETE,
    PROMPT_FORCE_DELETE,
)
from git_worktree_keeper.utils.logging import get_logger

console = Console()
logger = get_logger(__name__)

# Takes the prompt text, returns whatever the user typed
ConfirmFn = Callable[[str], str]
NotifyFn = Callable[[str], None]


class DeletionState(Enum):
    """State of the deletion gate."""
    IDLE = "idle"
    PENDING_CONFIRMATION = "pending-confirmation"
    FORCED = "forced"


def is_affirmative(answer: Optional[str]) -> bool:
    """True when the first character of the answer is 'y' or 'Y'."""
    return bool(answer) and answer[:1].lower() == "y"


class ForceDeletionPolicy:
    """One-shot force flag plus the optional yes/no confirmation.

    The flag is set by toggle_force() and cleared only by consume(), which
    the manager calls after a successful deletion. A failed deletion leaves
    it set so the user can retry straight away.
    """

    def __init__(
        self,
        config: Config,
        confirm: Optional[ConfirmFn] = None,
        notify: Optional[NotifyFn] = None,
    ):
        self.config = config
        self.confirm = confirm or console.input
        self.notify = notify or console.print
        self._forced = False
        self._pending = False

    @property
    def state(self) -> DeletionState:
        if self._pending:
            return DeletionState.PENDING_CONFIRMATION
        if self._forced:
            return DeletionState.FORCED
        return DeletionState.IDLE

    @property
    def forced(self) -> bool:
        return self._forced

    def toggle_force(self) -> bool:
        """Flip the force flag for the next deletion and return its new value."""
        self._forced = not self._forced
        message = MSG_FORCE_ON if self._forced else MSG_FORCE_OFF
        logger.info(message)
        self.notify(message)
        return self._forced

    def consume(self) -> None:
        """Clear the force flag after a successful deletion."""
        if self._forced:
            logger.debug("Force flag consumed by successful deletion")
        self._forced = False

    def confirm_deletion(self, forced: bool) -> bool:
        """Ask the user to confirm a deletion, unless confirmations are disabled."""
        if not self.config.confirm_deletions:
            return True

        prompt = PROMPT_FORCE_DELETE if forced else PROMPT_DELETE
        self._pending = True
        try:
            answer = self.confirm(prompt)
        finally:
            self._pending = False

        if is_affirmative(answer):
            return True

        logger.info(MSG_NOT_DELETED)
        self.notify(MSG_NOT_DELETED)
        return False
