"""Progressive HTML rendering for FastAPI / Starlette applications.

Flushes the layout head to the client before the body has finished
rendering, padding the first chunk so browsers start painting at once.
"""

from ._version import __version__
from .controller import Controller
from .coordinator import RenderCoordinator
from .http.response import StreamingTemplateResponse
from .rendering.engine import TemplateEngine
from .streaming.body import StreamingBody


__all__ = [
    "Controller",
    "RenderCoordinator",
    "StreamingBody",
    "StreamingTemplateResponse",
    "TemplateEngine",
    "__version__",
]
