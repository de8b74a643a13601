"""Response that can carry either a rendered body or a StreamingBody."""

from __future__ import annotations

from collections.abc import Mapping

import structlog
from starlette.background import BackgroundTask
from starlette.responses import Response
from starlette.types import Receive, Scope, Send

from template_streaming.streaming.body import StreamingBody


logger = structlog.get_logger(__name__)


class StreamingTemplateResponse(Response):
    """HTML response whose body is assigned after construction.

    The controller sets ``body`` to rendered markup or, when streaming, to a
    StreamingBody. Header finalization happens once, in :meth:`prepare`; a
    streaming body never gets a content-length.
    """

    media_type = "text/html"

    def __init__(
        self,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        media_type: str | None = None,
        background: BackgroundTask | None = None,
    ) -> None:
        self.status_code = status_code
        if media_type is not None:
            self.media_type = media_type
        self.background = background
        self._body: str | bytes | StreamingBody | None = None
        self._prepared = False
        self.init_headers(headers)

    @property  # type: ignore[override]
    def body(self) -> str | bytes | StreamingBody | None:
        return self._body

    @body.setter
    def body(self, value: str | bytes | StreamingBody | None) -> None:
        self._body = value

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def streaming(self) -> bool:
        return isinstance(self._body, StreamingBody)

    @property
    def prepared(self) -> bool:
        return self._prepared

    def prepare(self) -> None:
        """Finalize headers. Only the first call has any effect."""
        if self._prepared:
            return
        self.set_content_length()
        self._prepared = True
        logger.debug(
            "response_prepared",
            status_code=self.status_code,
            streaming=self.streaming,
        )

    def set_content_length(self) -> None:
        if self.streaming:
            # Total length is unknown until the stream ends.
            if "content-length" in self.headers:
                del self.headers["content-length"]
            return
        self.headers["content-length"] = str(len(self._encoded_body()))

    def _encoded_body(self) -> bytes:
        body = self._body
        if body is None:
            return b""
        if isinstance(body, bytes):
            return body
        return str(body).encode(self.charset)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        self.prepare()
        await send(
            {
                "type": "http.response.start",
                "status": self.status_code,
                "headers": self.raw_headers,
            }
        )

        body = self._body
        if isinstance(body, StreamingBody):

            async def consume(chunk: str) -> None:
                await send(
                    {
                        "type": "http.response.body",
                        "body": chunk.encode(self.charset),
                        "more_body": True,
                    }
                )

            await body.each(consume)
            await send({"type": "http.response.body", "body": b"", "more_body": False})
        else:
            await send({"type": "http.response.body", "body": self._encoded_body()})

        if self.background is not None:
            await self.background()
