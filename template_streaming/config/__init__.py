"""Configuration module for template streaming."""

from .core import LoggingSettings, StreamingSettings, TemplateSettings
from .settings import Settings, get_settings


__all__ = [
    "LoggingSettings",
    "Settings",
    "StreamingSettings",
    "TemplateSettings",
    "get_settings",
]
