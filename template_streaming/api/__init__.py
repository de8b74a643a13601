"""FastAPI integration."""

from .app import create_app
from .middleware.errors import setup_error_handlers
from .templates import StreamingTemplates


__all__ = ["StreamingTemplates", "create_app", "setup_error_handlers"]
