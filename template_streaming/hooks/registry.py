"""Central registry for all hooks"""

from collections import defaultdict
from collections.abc import Awaitable, Callable

import structlog

from .events import HookEvent


Hook = Callable[[], Awaitable[None] | None]


class HookRegistry:
    """Ordered hooks per event"""

    def __init__(self) -> None:
        self._hooks: dict[HookEvent, list[Hook]] = defaultdict(list)
        self._logger = structlog.get_logger(__name__)

    def register(self, event: HookEvent, hook: Hook) -> Hook:
        """Register a hook for an event; returns the hook for decorator use"""
        self._hooks[event].append(hook)
        self._logger.debug(
            "hook_registered",
            hook=getattr(hook, "__qualname__", repr(hook)),
            hook_event=event.value,
        )
        return hook

    def unregister(self, event: HookEvent, hook: Hook) -> None:
        """Remove a hook from an event"""
        if hook in self._hooks[event]:
            self._hooks[event].remove(hook)

    def get_hooks(self, event: HookEvent) -> list[Hook]:
        """Get all hooks for an event, in registration order"""
        return list(self._hooks.get(event, []))

    def copy(self) -> "HookRegistry":
        """Independent registry starting with the same hooks"""
        clone = HookRegistry()
        for event, hooks in self._hooks.items():
            clone._hooks[event] = list(hooks)
        return clone
