"""Forced transport flushing for servers that advertise support for it.

A server that buffers writes can advertise a flush capability through the
ASGI scope: ``scope["extensions"]["http.response.flush"]`` holds a receiver
object. The configured backend is then called with that receiver after every
push so buffered chunks reach the socket immediately.
"""

import importlib
import inspect
from collections.abc import Callable, Mapping
from typing import Any

import structlog

from template_streaming.core.errors import ConfigurationError


logger = structlog.get_logger(__name__)

FLUSH_EXTENSION = "http.response.flush"

FlushBackend = Callable[[Any], Any]


async def flush_receiver(receiver: Any) -> None:
    """Default backend: call ``receiver.flush()``, awaiting it if needed."""
    result = receiver.flush()
    if inspect.isawaitable(result):
        await result


def load_flush_backend(path: str) -> FlushBackend:
    """Import the backend named by a ``module:attribute`` path."""
    module_name, _, attribute = path.partition(":")
    try:
        module = importlib.import_module(module_name)
        backend = getattr(module, attribute)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(
            f"Template streaming on a server advertising '{FLUSH_EXTENSION}' "
            f"requires the flush backend '{path}', which could not be loaded: {e}",
            details={"flush_backend": path},
        ) from e
    if not callable(backend):
        raise ConfigurationError(
            f"Flush backend '{path}' is not callable",
            details={"flush_backend": path},
        )
    return backend  # type: ignore[no-any-return]


class TransportFlusher:
    """Forces the server to write out whatever it has buffered."""

    def __init__(self, receiver: Any, backend: FlushBackend) -> None:
        self.receiver = receiver
        self._backend = backend

    async def flush(self) -> None:
        result = self._backend(self.receiver)
        if inspect.isawaitable(result):
            await result


def resolve_flusher(
    scope: Mapping[str, Any], backend_path: str
) -> TransportFlusher | None:
    """Build a flusher when the server advertises the flush extension.

    Returns:
        A TransportFlusher, or None when the server does not need one

    Raises:
        ConfigurationError: The extension is advertised but the backend is missing
    """
    extensions = scope.get("extensions") or {}
    if FLUSH_EXTENSION not in extensions:
        return None

    backend = load_flush_backend(backend_path)
    logger.debug(
        "transport_flush_enabled",
        backend=backend_path,
        category="streaming",
    )
    return TransportFlusher(extensions[FLUSH_EXTENSION], backend)
