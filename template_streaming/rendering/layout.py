"""Layout application and the pre-layout split.

A layout ``layouts/application.html`` may come with a pre-layout
``layouts/preapplication.html`` holding only the document head. When one
exists it is rendered first so the head can be flushed while the body is
still being produced; the body and layout follow through a continuation.
"""

from __future__ import annotations

import posixpath
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog
from markupsafe import Markup

from template_streaming.core.errors import TemplateNotFoundError

from .engine import ResolvedTemplate, TemplateEngine


if TYPE_CHECKING:
    from .view import View


logger = structlog.get_logger(__name__)

PRELAYOUT_PREFIX = "pre"

RenderStep = Callable[[], Awaitable[str]]


@dataclass(frozen=True)
class ImplicitLayout:
    """The layout the controller wraps around a template render."""

    template: ResolvedTemplate


@dataclass(frozen=True)
class PartialLayout:
    """A layout a template explicitly asked to wrap around a partial."""

    name: str


Layout = ImplicitLayout | PartialLayout


def prelayout_path(layout_path: str) -> str:
    """``layouts/application`` -> ``layouts/preapplication``."""
    directory, name = posixpath.split(layout_path)
    return posixpath.join(directory, PRELAYOUT_PREFIX + name)


class Continuation:
    """The deferred body-plus-layout render, runnable once.

    Exposed to pre-layout templates as ``render_body``. The first call takes
    the render step and runs it; later calls render nothing. When ``drain``
    is given it runs first, so whatever the pre-layout rendered before the
    call reaches the client ahead of the body.
    """

    def __init__(
        self, step: RenderStep, drain: Callable[[], Awaitable[None]] | None = None
    ) -> None:
        self._step: RenderStep | None = step
        self._drain = drain

    @property
    def consumed(self) -> bool:
        return self._step is None

    async def __call__(self) -> Markup:
        return await self.run(drain=True)

    async def run(self, *, drain: bool) -> Markup:
        step, self._step = self._step, None
        if step is None:
            logger.debug("continuation_already_consumed", category="streaming")
            return Markup("")
        if drain and self._drain is not None:
            await self._drain()
        return Markup(await step())


class PreLayoutSplitter:
    """Layout interceptor rendering the pre-layout ahead of the body.

    While the response is streamed the pre-layout output is pushed before
    the body starts rendering, so body flushes can never overtake the head.
    """

    def __init__(self, engine: TemplateEngine) -> None:
        self.engine = engine

    def prelayout_for(self, layout: Layout) -> ResolvedTemplate | None:
        # Layouts named by templates wrap partials; never split those.
        if not isinstance(layout, ImplicitLayout):
            return None

        resolved = layout.template
        try:
            return self.engine.find_template(
                prelayout_path(resolved.path), resolved.format
            )
        except TemplateNotFoundError:
            return None

    async def __call__(
        self,
        view: View,
        layout: Layout,
        locals: Mapping[str, Any],
        render_layout: RenderStep,
    ) -> str:
        prelayout = self.prelayout_for(layout)
        if prelayout is None:
            return await render_layout()

        controller = view.controller
        streaming = controller.coordinator.streaming
        logger.debug(
            "prelayout_found",
            prelayout=prelayout.name,
            streaming=streaming,
            category="streaming",
        )

        async def drain() -> None:
            if any(view.output_buffer or ()):
                await controller.flush()

        continuation = Continuation(render_layout, drain if streaming else None)
        output = await view.render_file(
            prelayout, {**locals, "render_body": continuation}
        )
        if continuation.consumed:
            return output

        if not streaming:
            return output + str(await continuation.run(drain=False))

        if output:
            await controller.push(output)
        return str(await continuation.run(drain=False))
