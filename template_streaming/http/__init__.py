"""HTTP response and session-backed flash."""

from .flash import FLASH_SESSION_KEY, Flash
from .response import StreamingTemplateResponse


__all__ = ["FLASH_SESSION_KEY", "Flash", "StreamingTemplateResponse"]
