"""Render classification, nesting and layout handling."""

from .engine import ResolvedTemplate, TemplateEngine
from .layout import (
    Continuation,
    ImplicitLayout,
    Layout,
    PartialLayout,
    PreLayoutSplitter,
    prelayout_path,
)
from .options import UNSTREAMABLE_KEYS, is_streamable, render_arguments
from .stack import RenderStack
from .view import View


__all__ = [
    "Continuation",
    "ImplicitLayout",
    "Layout",
    "PartialLayout",
    "PreLayoutSplitter",
    "RenderStack",
    "ResolvedTemplate",
    "TemplateEngine",
    "UNSTREAMABLE_KEYS",
    "View",
    "is_streamable",
    "prelayout_path",
    "render_arguments",
]
