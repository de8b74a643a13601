"""Event definitions for the hook system."""

from enum import Enum


class HookEvent(str, Enum):
    """Event types that can trigger hooks"""

    # Fired once per request, after the streaming body is installed and
    # before the deferred template render starts.
    STREAMING_STARTED = "template.streaming.started"
