"""Entry point for FastAPI endpoints that render streamed templates."""

from typing import Any

import structlog
from fastapi import Request

from template_streaming.config.settings import Settings, get_settings
from template_streaming.controller import Action, Controller
from template_streaming.hooks import Hook, HookEvent, HookRegistry
from template_streaming.http.response import StreamingTemplateResponse
from template_streaming.rendering.engine import TemplateEngine


logger = structlog.get_logger(__name__)


class StreamingTemplates:
    """Application-wide template configuration.

    Example:
        templates = StreamingTemplates(directory="templates")

        @app.get("/")
        async def index(request: Request):
            return await templates.render(request, "index", user=current_user)

        @app.get("/reports")
        async def reports(controller: Controller = Depends(templates.controller)):
            controller.assigns["reports"] = await load_reports()
            return await controller.dispatch()
    """

    def __init__(
        self,
        directory: str | None = None,
        *,
        engine: TemplateEngine | None = None,
        settings: Settings | None = None,
        hooks: HookRegistry | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.engine = engine or TemplateEngine(
            directory or self.settings.templates.directory
        )
        self.hooks = hooks or HookRegistry()

    def when_streaming_template(self, hook: Hook) -> Hook:
        """Register a hook run for every request once streaming begins."""
        return self.hooks.register(HookEvent.STREAMING_STARTED, hook)

    def controller(self, request: Request) -> Controller:
        """Build the controller for ``request``; usable as a FastAPI dependency."""
        return Controller(
            request,
            self.engine,
            settings=self.settings.streaming,
            template_settings=self.settings.templates,
            hooks=self.hooks,
            template=_default_template(request),
        )

    async def render(
        self,
        request: Request,
        template: str,
        *,
        action: Action | None = None,
        **assigns: Any,
    ) -> StreamingTemplateResponse:
        """Render ``template`` for ``request``, streaming when possible."""
        controller = self.controller(request)
        controller.default_template = template
        controller.assigns.update(assigns)
        return await controller.dispatch(action)


def _default_template(request: Request) -> str | None:
    route = request.scope.get("route")
    name = getattr(route, "name", None)
    return name if isinstance(name, str) else None
