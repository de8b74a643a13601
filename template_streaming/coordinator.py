"""Streaming render coordinator.

Wraps a controller's ordinary render step. The outermost render of a request
that can be streamed does not render right away: it installs a StreamingBody
on the response, and the real render runs later, while the transport pulls
that body, pushing output to the client as it is flushed.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

import structlog

from template_streaming.config.core import StreamingSettings
from template_streaming.core.errors import DoubleRenderError, NotStreamingError
from template_streaming.hooks import Hook, HookEvent, HookManager, HookRegistry
from template_streaming.rendering.options import is_streamable, render_arguments
from template_streaming.rendering.stack import RenderStack
from template_streaming.streaming.body import StreamingBody
from template_streaming.streaming.threshold import progressive_rendering_threshold
from template_streaming.streaming.transport import TransportFlusher, resolve_flusher


if TYPE_CHECKING:
    from template_streaming.controller import Controller
    from template_streaming.http.flash import Flash


logger = structlog.get_logger(__name__)

RenderStep = Callable[..., Awaitable[str | None]]


class RenderCoordinator:
    """Decides per render call whether to stream, and drives the stream.

    One instance per request. It owns the render stack, the streaming body,
    the flash captured when streaming began and the transport flusher.
    """

    def __init__(
        self,
        controller: Controller,
        render_step: RenderStep,
        settings: StreamingSettings,
        hooks: HookRegistry | None = None,
    ) -> None:
        self.controller = controller
        self.settings = settings
        self.stack = RenderStack()
        self.hooks = HookManager(hooks if hooks is not None else HookRegistry())
        self.streaming_body: StreamingBody | None = None
        self.streaming_flash: Flash | None = None
        self._render_step = render_step
        self._flusher: TransportFlusher | None = None
        self._transport_checked = False

    @property
    def streaming(self) -> bool:
        return self.streaming_body is not None

    def when_streaming_template(self, hook: Hook) -> Hook:
        """Register a hook to run once streaming begins for this request."""
        return self.hooks.registry.register(HookEvent.STREAMING_STARTED, hook)

    async def render(self, *args: Any, **kwargs: Any) -> str | None:
        """Render, streaming if this is the outermost streamable call.

        Returns:
            The rendered markup, or None once streaming has been set up
        """
        with self.stack.enter():
            if not is_streamable(
                render_arguments(args, kwargs), outermost=self.stack.outermost
            ):
                return await self._render_step(*args, **kwargs)

            await self._start_streaming(args, kwargs)
            return None

    async def _start_streaming(
        self, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> None:
        controller = self.controller
        response = controller.response

        if controller.performed_render:
            raise DoubleRenderError()
        controller.performed_render = True
        self._check_transport_support()

        async def produce() -> None:
            # The real render performs its own double-render check.
            controller.performed_render = False
            with self.stack.enter():
                last_piece = await self._render_step(*args, **kwargs)
            await self.push(last_piece or "")

        threshold = progressive_rendering_threshold(
            response.content_type, controller.request.headers.get("user-agent")
        )
        self.streaming_body = StreamingBody(threshold, produce)
        response.body = self.streaming_body
        response.prepare()

        if self.settings.autosweep_flash:
            controller.load_flash()
        # The flash is released once the action returns, long before the
        # templates read it; keep the instance loaded now.
        self.streaming_flash = controller.current_flash

        logger.info(
            "streaming_started",
            threshold=threshold,
            path=controller.request.url.path,
            category="streaming",
        )
        await self.hooks.emit(HookEvent.STREAMING_STARTED)

    async def flush(self) -> None:
        """Push whatever the current template has rendered so far."""
        buffer = self.controller.view.output_buffer
        if buffer is None:
            return
        data = "".join(buffer)
        buffer.clear()
        await self.push(data)

    async def push(self, data: str) -> None:
        """Send ``data`` to the client now."""
        if self.streaming_body is None:
            raise NotStreamingError()
        await self.streaming_body.push(data)
        if self._flusher is not None:
            await self._flusher.flush()

    def _check_transport_support(self) -> None:
        if self._transport_checked:
            return
        self._flusher = resolve_flusher(
            self.controller.request.scope, self.settings.flush_backend
        )
        self._transport_checked = True
