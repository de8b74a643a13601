"""Error handling for template streaming errors raised before streaming starts."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from structlog import get_logger

from template_streaming.core.errors import TemplateStreamingError


logger = get_logger(__name__)


def setup_error_handlers(app: FastAPI) -> None:
    """Setup error handlers for the FastAPI application.

    Once a streamed response has sent its headers, errors can no longer be
    turned into responses; they propagate to the server instead.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(TemplateStreamingError)
    async def template_streaming_error_handler(
        request: Request, exc: TemplateStreamingError
    ) -> JSONResponse:
        logger.error(
            "template_streaming_error",
            error_type=exc.error_type,
            error_message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "type": exc.error_type,
                    "message": exc.message,
                    **({"details": exc.details} if exc.details else {}),
                }
            },
        )

    logger.debug("error_handlers_setup_completed")
