"""Request-scoped controller: the render surface application code talks to."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable, Mapping, MutableMapping
from typing import Any

import structlog
from starlette.requests import Request

from template_streaming.config.core import StreamingSettings, TemplateSettings
from template_streaming.coordinator import RenderCoordinator
from template_streaming.core.errors import DoubleRenderError
from template_streaming.hooks import Hook, HookRegistry
from template_streaming.http.flash import Flash
from template_streaming.http.response import StreamingTemplateResponse
from template_streaming.rendering.engine import TemplateEngine
from template_streaming.rendering.layout import PreLayoutSplitter
from template_streaming.rendering.options import render_arguments
from template_streaming.rendering.view import View


logger = structlog.get_logger(__name__)

Action = Callable[["Controller"], Awaitable[None]]

# Content types for renders that bypass templates.
DIRECT_CONTENT_TYPES = {
    "json": "application/json",
    "xml": "application/xml",
    "js": "text/javascript",
    "update": "text/javascript",
}


class Controller:
    """Handles rendering for a single request.

    ``render`` goes through the RenderCoordinator, which streams the
    outermost template render; ``render_without_streaming`` is the plain
    render path it wraps.
    """

    def __init__(
        self,
        request: Request,
        engine: TemplateEngine,
        *,
        settings: StreamingSettings | None = None,
        template_settings: TemplateSettings | None = None,
        hooks: HookRegistry | None = None,
        template: str | None = None,
    ) -> None:
        template_settings = template_settings or TemplateSettings()

        self.request = request
        self.response = StreamingTemplateResponse()
        self.assigns: dict[str, Any] = {}
        self.default_template = template
        self.layout = template_settings.layout
        self.performed_render = False
        self._flash: Flash | None = None

        session = request.scope.get("session")
        self.session: MutableMapping[str, Any] = session if session is not None else {}

        self.view = View(
            self,
            engine,
            format=template_settings.format,
            layout_interceptor=PreLayoutSplitter(engine),
        )
        self.coordinator = RenderCoordinator(
            self,
            self.render_without_streaming,
            settings or StreamingSettings(),
            hooks.copy() if hooks is not None else None,
        )

    @property
    def flash(self) -> Flash:
        return self.load_flash()

    @property
    def current_flash(self) -> Flash | None:
        """The flash if it has been loaded during this action."""
        return self._flash

    def load_flash(self) -> Flash:
        """Load the flash, sweeping it out of the session on first use."""
        if self._flash is None:
            self._flash = Flash(self.session)
            logger.debug("flash_swept", notices=len(self._flash))
        return self._flash

    def when_streaming_template(self, hook: Hook) -> Hook:
        return self.coordinator.when_streaming_template(hook)

    async def render(self, *args: Any, **options: Any) -> str | None:
        return await self.coordinator.render(*args, **options)

    async def flush(self) -> None:
        await self.coordinator.flush()

    async def push(self, data: str) -> None:
        await self.coordinator.push(data)

    async def dispatch(self, action: Action | None = None) -> StreamingTemplateResponse:
        """Run ``action`` and make sure something was rendered.

        The flash is released when the action returns, like any other
        action-scoped state.
        """
        try:
            if action is not None:
                await action(self)
            if not self.performed_render:
                await self.render()
        finally:
            self._flash = None
        return self.response

    async def render_without_streaming(self, *args: Any, **options: Any) -> str | None:
        """Render immediately and return the markup.

        At the outermost level the markup also becomes the response body,
        unless the response is being streamed.
        """
        toplevel = self.coordinator.stack.depth <= 1
        if toplevel:
            if self.performed_render:
                raise DoubleRenderError()
            self.performed_render = True

        markup = await self._render_options(_normalize(args, options))

        if toplevel and not self.coordinator.streaming:
            self.response.body = markup
        return markup

    async def _render_options(self, options: Mapping[str, Any]) -> str:
        if options.get("nothing"):
            return ""

        if "text" in options:
            return str(options["text"])

        for key, content_type in DIRECT_CONTENT_TYPES.items():
            if key in options:
                self.response.headers["content-type"] = content_type
                value = options[key]
                return json.dumps(value) if key == "json" else str(value)

        locals = dict(options.get("locals") or {})

        if "partial" in options:
            return await self.view.render_partial(
                options["partial"], options.get("layout"), locals
            )

        template = options.get("template") or self.default_template
        if template is None:
            raise ValueError("No template given and the controller has no default")
        layout = options.get("layout", self.layout)
        return await self.view.render_template(template, layout or None, locals)


def _normalize(args: tuple[Any, ...], options: Mapping[str, Any]) -> dict[str, Any]:
    """Turn render arguments into a single options dict."""
    arguments = render_arguments(args, options)
    normalized: dict[str, Any] = {}
    if arguments and isinstance(arguments[-1], Mapping):
        normalized.update(arguments[-1])
        arguments = arguments[:-1]
    if arguments:
        directive = arguments[0]
        if directive == "nothing":
            normalized["nothing"] = True
        elif directive == "update":
            normalized.setdefault("update", "")
        elif isinstance(directive, str):
            normalized.setdefault("template", directive)
    return normalized
