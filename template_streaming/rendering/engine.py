"""Jinja2 template engine adapter.

Templates are rendered with ``generate_async`` so output arrives chunk by
chunk, letting helpers called from a template flush what precedes them.
"""

from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass
from typing import Any

import jinja2
import structlog

from template_streaming.core.errors import TemplateNotFoundError


logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ResolvedTemplate:
    """A template found by path and format."""

    path: str
    format: str
    template: jinja2.Template

    @property
    def name(self) -> str:
        return f"{self.path}.{self.format}"


class TemplateEngine:
    """Looks up and renders templates through a Jinja2 environment."""

    def __init__(
        self,
        directory: str | None = None,
        *,
        loader: jinja2.BaseLoader | None = None,
        autoescape: bool = True,
    ) -> None:
        if loader is None:
            if directory is None:
                raise ValueError("Either a template directory or a loader is required")
            loader = jinja2.FileSystemLoader(directory)

        self.environment = jinja2.Environment(
            loader=loader,
            autoescape=autoescape,
            enable_async=True,
        )

    def find_template(self, path: str, fmt: str = "html") -> ResolvedTemplate:
        """Find ``<path>.<fmt>``.

        Raises:
            TemplateNotFoundError: No such template. Other loader and syntax
                errors propagate unchanged.
        """
        name = f"{path}.{fmt}"
        try:
            template = self.environment.get_template(name)
        except jinja2.TemplateNotFound as e:
            raise TemplateNotFoundError(name) from e
        return ResolvedTemplate(path=path, format=fmt, template=template)

    async def generate(
        self, template: ResolvedTemplate, context: Mapping[str, Any]
    ) -> AsyncIterator[str]:
        """Yield the rendered output of ``template`` as it is produced."""
        logger.debug("template_render_started", template=template.name)
        async for chunk in template.template.generate_async(context):
            yield chunk
