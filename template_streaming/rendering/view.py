"""Per-request template rendering and the helpers templates can call."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from functools import partial
from typing import TYPE_CHECKING, Any

from markupsafe import Markup

from .engine import ResolvedTemplate, TemplateEngine
from .layout import ImplicitLayout, Layout, PartialLayout


if TYPE_CHECKING:
    from template_streaming.controller import Controller
    from template_streaming.http.flash import Flash


LayoutInterceptor = Callable[
    ["View", Layout, Mapping[str, Any], Callable[[], Awaitable[str]]],
    Awaitable[str],
]


class View:
    """Renders templates for one request.

    Every file render collects its output in its own buffer;
    ``output_buffer`` always points at the innermost one, which is what a
    ``flush()`` call from a template drains.
    """

    def __init__(
        self,
        controller: Controller,
        engine: TemplateEngine,
        *,
        format: str = "html",
        layout_interceptor: LayoutInterceptor | None = None,
    ) -> None:
        self.controller = controller
        self.engine = engine
        self.format = format
        self.layout_interceptor = layout_interceptor
        self.output_buffer: list[str] | None = None

    def template_context(self, locals: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "flush": self.flush,
            "push": self.push,
            "render": self.render,
            "flash": self.flash,
            "view": self,
            **self.controller.assigns,
            **locals,
        }

    async def render_file(
        self, template: ResolvedTemplate, locals: Mapping[str, Any]
    ) -> str:
        buffer: list[str] = []
        previous, self.output_buffer = self.output_buffer, buffer
        try:
            async for chunk in self.engine.generate(
                template, self.template_context(locals)
            ):
                buffer.append(chunk)
        finally:
            self.output_buffer = previous
        return "".join(buffer)

    async def render_template(
        self, path: str, layout: str | None, locals: Mapping[str, Any]
    ) -> str:
        """Render a template, wrapped in the controller's layout if given."""
        template = self.engine.find_template(path, self.format)
        if not layout:
            return await self.render_file(template, locals)

        wrapping = ImplicitLayout(self.engine.find_template(layout, self.format))
        return await self.render_with_layout(
            wrapping, locals, partial(self.render_file, template, locals)
        )

    async def render_partial(
        self, path: str, layout: str | None, locals: Mapping[str, Any]
    ) -> str:
        template = self.engine.find_template(path, self.format)
        if not layout:
            return await self.render_file(template, locals)

        return await self.render_with_layout(
            PartialLayout(layout), locals, partial(self.render_file, template, locals)
        )

    async def render_with_layout(
        self,
        layout: Layout,
        locals: Mapping[str, Any],
        render_body: Callable[[], Awaitable[str]],
    ) -> str:
        async def render_layout() -> str:
            content = await render_body()
            if isinstance(layout, ImplicitLayout):
                template = layout.template
            else:
                template = self.engine.find_template(layout.name, self.format)
            return await self.render_file(
                template, {**locals, "content_for_layout": Markup(content)}
            )

        if self.layout_interceptor is None:
            return await render_layout()
        return await self.layout_interceptor(self, layout, locals, render_layout)

    # Template helpers

    async def flush(self) -> Markup:
        """Send everything rendered so far in this template to the client."""
        await self.controller.flush()
        return Markup("")

    async def push(self, data: Any) -> Markup:
        """Send ``data`` to the client immediately."""
        await self.controller.push(str(data))
        return Markup("")

    async def render(
        self, name: str, /, layout: str | None = None, **locals: Any
    ) -> Markup:
        """Render a partial, optionally wrapped in a named layout."""
        options: dict[str, Any] = {"partial": name, "locals": locals}
        if layout:
            options["layout"] = layout
        return Markup(await self.controller.render(options) or "")

    def flash(self) -> Flash:
        # The flash captured when streaming began; reloading would sweep again.
        shadowed = self.controller.coordinator.streaming_flash
        if shadowed is not None:
            return shadowed
        return self.controller.flash
