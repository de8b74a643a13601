"""Custom exceptions for template streaming."""

from typing import Any


class TemplateStreamingError(Exception):
    """Base exception for template streaming errors."""

    def __init__(
        self,
        message: str,
        error_type: str = "internal_server_error",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.status_code = status_code
        self.details = details or {}


class ConfigurationError(TemplateStreamingError):
    """Raised when the runtime environment cannot support streaming."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            error_type="configuration_error",
            status_code=500,
            details=details,
        )


class StreamNotAttachedError(TemplateStreamingError):
    """Data was pushed before the transport started pulling the body."""

    def __init__(
        self, message: str = "Cannot push to a streaming body before it is iterated"
    ) -> None:
        super().__init__(message=message, error_type="stream_not_attached")


class StreamAlreadyConsumedError(TemplateStreamingError):
    """A streaming body can only be iterated once."""

    def __init__(self, message: str = "Streaming body has already been consumed") -> None:
        super().__init__(message=message, error_type="stream_already_consumed")


class NotStreamingError(TemplateStreamingError):
    """Push or flush requested while the response is not being streamed."""

    def __init__(self, message: str = "Response is not being streamed") -> None:
        super().__init__(message=message, error_type="not_streaming")


class DoubleRenderError(TemplateStreamingError):
    """Render was called more than once for the same request."""

    def __init__(
        self,
        message: str = "Render can only be called once per action",
    ) -> None:
        super().__init__(message=message, error_type="double_render_error")


class TemplateNotFoundError(TemplateStreamingError):
    """Template lookup failed."""

    def __init__(self, name: str) -> None:
        super().__init__(
            message=f"Missing template '{name}'",
            error_type="missing_template",
            status_code=500,
            details={"template": name},
        )
        self.name = name
