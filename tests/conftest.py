"""Shared test fixtures for template streaming tests.

Templates come from an in-memory Jinja2 DictLoader; requests are plain
Starlette requests built from an ASGI scope, so no server is involved.
"""

from collections.abc import Callable
from typing import Any

import jinja2
import pytest
from starlette.requests import Request

from template_streaming.config.core import StreamingSettings, TemplateSettings
from template_streaming.controller import Controller
from template_streaming.core.logging import setup_logging
from template_streaming.hooks import HookRegistry
from template_streaming.rendering.engine import TemplateEngine


CHROME_UA = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
SAFARI_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_2) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.2 Safari/605.1.15"
)
MSIE_UA = "Mozilla/4.0 (compatible; MSIE 8.0; Windows NT 6.1; Trident/4.0)"
CURL_UA = "curl/8.4.0"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom settings."""
    setup_logging(json_logs=False, log_level_name="DEBUG")


def build_scope(
    path: str = "/",
    user_agent: str | None = CHROME_UA,
    extensions: dict[str, Any] | None = None,
    session: dict[str, Any] | None = None,
) -> dict[str, Any]:
    headers = []
    if user_agent is not None:
        headers.append((b"user-agent", user_agent.encode("latin-1")))
    scope: dict[str, Any] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": b"",
        "headers": headers,
        "server": ("testserver", 80),
        "client": ("testclient", 50000),
        "extensions": extensions or {},
    }
    if session is not None:
        scope["session"] = session
    return scope


class RecordingSend:
    """ASGI send callable that keeps every message."""

    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def __call__(self, message: dict[str, Any]) -> None:
        self.messages.append(message)

    @property
    def start(self) -> dict[str, Any]:
        return self.messages[0]

    @property
    def headers(self) -> dict[bytes, bytes]:
        return dict(self.start["headers"])

    @property
    def body_chunks(self) -> list[bytes]:
        return [
            m["body"] for m in self.messages if m["type"] == "http.response.body"
        ]

    @property
    def body(self) -> bytes:
        return b"".join(self.body_chunks)


async def receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@pytest.fixture
def make_engine() -> Callable[[dict[str, str]], TemplateEngine]:
    def factory(templates: dict[str, str]) -> TemplateEngine:
        return TemplateEngine(loader=jinja2.DictLoader(templates))

    return factory


@pytest.fixture
def make_controller(
    make_engine: Callable[[dict[str, str]], TemplateEngine],
) -> Callable[..., Controller]:
    """Build a controller over in-memory templates.

    Layouts are off unless ``layout`` is given.
    """

    def factory(
        templates: dict[str, str],
        *,
        template: str | None = "index",
        layout: str | None = None,
        user_agent: str | None = CHROME_UA,
        extensions: dict[str, Any] | None = None,
        session: dict[str, Any] | None = None,
        settings: StreamingSettings | None = None,
        hooks: HookRegistry | None = None,
    ) -> Controller:
        request = Request(
            build_scope(
                user_agent=user_agent, extensions=extensions, session=session
            )
        )
        return Controller(
            request,
            make_engine(templates),
            settings=settings or StreamingSettings(),
            template_settings=TemplateSettings(layout=layout),
            hooks=hooks,
            template=template,
        )

    return factory


@pytest.fixture
def recording_send() -> RecordingSend:
    return RecordingSend()
