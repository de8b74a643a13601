"""Core configuration sections."""

from pydantic import BaseModel, Field, field_validator


DEFAULT_FLUSH_BACKEND = "template_streaming.streaming.transport:flush_receiver"


class StreamingSettings(BaseModel):
    """Streaming behaviour settings."""

    autosweep_flash: bool = Field(
        default=True,
        description="Load (and sweep) the flash as soon as streaming begins so "
        "templates rendered later still see this request's notices",
    )

    flush_backend: str = Field(
        default=DEFAULT_FLUSH_BACKEND,
        description="Dotted path ('module:attribute') of the callable used to force "
        "a transport flush on servers advertising http.response.flush",
    )

    @field_validator("flush_backend")
    @classmethod
    def validate_flush_backend(cls, v: str) -> str:
        """Require a 'module:attribute' path."""
        module, _, attribute = v.partition(":")
        if not module or not attribute:
            raise ValueError(
                f"Invalid flush backend: {v}. Expected 'package.module:callable'"
            )
        return v


class TemplateSettings(BaseModel):
    """Template lookup settings."""

    directory: str = Field(
        default="templates",
        description="Directory templates are loaded from",
    )

    layout: str | None = Field(
        default="layouts/application",
        description="Layout wrapping every template render (None disables layouts)",
    )

    format: str = Field(
        default="html",
        description="Template format; templates are looked up as '<path>.<format>'",
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    format: str = Field(
        default="console",
        description="Logging output format: 'console' or 'json'",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        upper_v = v.upper()
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v

    @field_validator("format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate and normalize log format."""
        lower_v = v.lower()
        valid_formats = ["console", "json"]
        if lower_v not in valid_formats:
            raise ValueError(f"Invalid log format: {v}. Must be one of {valid_formats}")
        return lower_v
