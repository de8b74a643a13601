"""Decide whether a render call can be streamed."""

from collections.abc import Mapping, Sequence
from typing import Any


# Renders producing a complete non-template body in one go.
UNSTREAMABLE_KEYS = frozenset({"text", "xml", "json", "js", "update", "nothing"})

UPDATE_DIRECTIVE = "update"


def render_arguments(args: Sequence[Any], kwargs: Mapping[str, Any]) -> tuple[Any, ...]:
    """Fold keyword options into the trailing options mapping.

    ``render("index", layout="x")`` and ``render("index", {"layout": "x"})``
    describe the same call.
    """
    if not kwargs:
        return tuple(args)
    if args and isinstance(args[-1], Mapping):
        return (*args[:-1], {**args[-1], **kwargs})
    return (*args, dict(kwargs))


def is_streamable(args: Sequence[Any], *, outermost: bool) -> bool:
    """Return True if this render call should be streamed.

    Only the outermost render of a request streams. A trailing options
    mapping streams unless it names one of UNSTREAMABLE_KEYS; a bare
    directive streams unless it is "update".
    """
    if not outermost:
        return False

    if args and isinstance(args[-1], Mapping):
        return UNSTREAMABLE_KEYS.isdisjoint(args[-1].keys())

    directive = args[0] if args else None
    return directive != UPDATE_DIRECTIVE
