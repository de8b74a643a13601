"""FastAPI application factory for template streaming apps."""

import structlog
from fastapi import FastAPI

from template_streaming._version import __version__
from template_streaming.api.middleware.errors import setup_error_handlers
from template_streaming.api.templates import StreamingTemplates
from template_streaming.config.settings import Settings, get_settings
from template_streaming.core.logging import get_logger, setup_logging


logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    templates: StreamingTemplates | None = None,
    **fastapi_kwargs: object,
) -> FastAPI:
    """Create a FastAPI application that renders streamed templates.

    Args:
        settings: Optional settings override. If None, uses get_settings().
        templates: Optional StreamingTemplates; built from settings if None.

    Returns:
        Configured FastAPI application, with the templates on
        ``app.state.templates``.
    """
    if settings is None:
        settings = get_settings()

    # Configure logging based on settings BEFORE any module uses logger
    if not structlog.is_configured():
        setup_logging(
            json_logs=settings.logging.format == "json",
            log_level_name=settings.logging.level,
        )

    app = FastAPI(version=__version__, **fastapi_kwargs)  # type: ignore[arg-type]
    app.state.templates = templates or StreamingTemplates(settings=settings)
    setup_error_handlers(app)

    logger.debug(
        "app_created",
        template_directory=settings.templates.directory,
        autosweep_flash=settings.streaming.autosweep_flash,
    )
    return app
