"""Tree-change hooks: callers subscribe to create/switch/delete events."""

from typing import Any, Callable, Dict, List

from git_worktree_keeper.models.operation import Operation
from git_worktree_keeper.utils.logging import get_logger

logger = get_logger(__name__)

TreeChangeHook = Callable[[Operation, Dict[str, Any]], None]


class TreeChangeHooks:
    """Registry of callbacks run after a worktree operation completes."""

    def __init__(self):
        self._hooks: List[TreeChangeHook] = []

    def register(self, hook: TreeChangeHook) -> TreeChangeHook:
        """Add a hook. Returns it, so this also works as a decorator."""
        self._hooks.append(hook)
        return hook

    def unregister(self, hook: TreeChangeHook) -> None:
        if hook in self._hooks:
            self._hooks.remove(hook)

    def emit(self, operation: Operation, metadata: Dict[str, Any]) -> None:
        """Run every hook in registration order.

        The git operation has already happened, so a failing hook is logged
        and the remaining hooks still run.
        """
        logger.debug(f"Tree change: {operation.value} {metadata}")
        for hook in list(self._hooks):
            try:
                hook(operation, dict(metadata))
            except Exception:
                logger.error(f"Tree change hook {hook!r} failed on {operation.value}", exc_info=True)
