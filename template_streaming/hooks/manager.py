"""Hook execution manager.

Hooks run one after another in registration order. Hooks may establish
state later rendering relies on, so the first failure stops the run and
propagates to the caller.
"""

import inspect

import structlog

from .events import HookEvent
from .registry import HookRegistry


class HookManager:
    """Runs the hooks registered for an event."""

    def __init__(self, registry: HookRegistry):
        """Initialize the hook manager.

        Args:
            registry: The hook registry to get hooks from
        """
        self._registry = registry
        self._logger = structlog.get_logger(__name__)

    @property
    def registry(self) -> HookRegistry:
        return self._registry

    async def emit(self, event: HookEvent) -> None:
        """Run every hook registered for ``event``.

        Sync hooks are called directly; awaitables returned by async hooks
        are awaited before the next hook starts.

        Args:
            event: The event to emit

        Raises:
            Exception: Whatever the first failing hook raised
        """
        for hook in self._registry.get_hooks(event):
            try:
                result = hook()
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                self._logger.error(
                    "streaming_hook_failed",
                    hook=getattr(hook, "__qualname__", repr(hook)),
                    hook_event=event.value,
                    error=str(e),
                    exc_info=e,
                )
                raise
