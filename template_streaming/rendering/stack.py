"""Render nesting depth for a single request."""

from collections.abc import Iterator
from contextlib import contextmanager


class RenderStack:
    """Tracks how deeply render calls are nested within one request.

    Partials rendered from inside a template call back into the controller,
    so only the first, non-nested call sees ``outermost``.
    """

    def __init__(self) -> None:
        self.depth = 0

    @property
    def outermost(self) -> bool:
        return self.depth == 1

    @contextmanager
    def enter(self) -> Iterator[int]:
        """Hold one level of render depth for the duration of the block."""
        self.depth += 1
        try:
            yield self.depth
        finally:
            self.depth -= 1
