"""Hook system for template streaming.

External code registers callbacks for lifecycle events; currently the single
event is "streaming has begun for this request".

Key components:
- HookEvent: Enumeration of all supported events
- HookRegistry: Ordered registry of hooks per event
- HookManager: Runs the hooks registered for an event
"""

from .events import HookEvent
from .manager import HookManager
from .registry import Hook, HookRegistry


__all__ = ["Hook", "HookEvent", "HookManager", "HookRegistry"]
