"""Streaming response bodies and transport helpers."""

from .body import PADDING_OVERHEAD, StreamingBody, padding
from .threshold import progressive_rendering_threshold
from .transport import TransportFlusher, resolve_flusher


__all__ = [
    "PADDING_OVERHEAD",
    "StreamingBody",
    "TransportFlusher",
    "padding",
    "progressive_rendering_threshold",
    "resolve_flusher",
]
