from pathlib import Path
from typing import Optional, Union

import structlog
from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from ..common.exceptions import RenderError
from ..common.models.table_config import IndexPage, NESTED_TYPE_PREFIXES, TablePage

logger = structlog.get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
TABLE_TEMPLATE = "table.md.j2"
INDEX_TEMPLATE = "toc.md.j2"


def has_prefix(value, prefix) -> bool:
    """True when ``value`` starts with ``prefix`` (or one of several), ignoring case."""
    if value is None:
        return False
    if isinstance(prefix, (list, tuple)):
        prefix = tuple(p.lower() for p in prefix)
    else:
        prefix = prefix.lower()
    return str(value).lower().startswith(prefix)


def md_cell(value) -> str:
    """Make a value safe for a single Markdown table cell."""
    if value is None:
        return ""
    text = str(value).replace("|", "\\|")
    return "<br>".join(line.strip() for line in text.splitlines())


class MarkdownRenderer:
    """Renders table documents and the index from jinja2 templates."""

    def __init__(self, templates_dir: Optional[Union[str, Path]] = None):
        self.templates_dir = Path(templates_dir) if templates_dir else TEMPLATES_DIR
        self.logger = logger.bind(component="MarkdownRenderer")
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(enabled_extensions=()),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.env.filters["has_prefix"] = has_prefix
        self.env.tests["has_prefix"] = has_prefix
        self.env.filters["md_cell"] = md_cell
        self.env.globals["nested_type_prefixes"] = list(NESTED_TYPE_PREFIXES)

    def _render(self, template_name: str, params: dict) -> str:
        try:
            template = self.env.get_template(template_name)
            return template.render(**params)
        except TemplateError as e:
            self.logger.error("Template rendering failed",
                              template=template_name, error=str(e))
            raise RenderError(f"Failed to render template '{template_name}': {e}") from e

    def render_table(self, page: TablePage) -> str:
        return self._render(TABLE_TEMPLATE, page.model_dump())

    def render_index(self, page: IndexPage) -> str:
        return self._render(INDEX_TEMPLATE, page.model_dump())
