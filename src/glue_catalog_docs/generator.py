"""
Documentation pipeline: fetch catalog tables, render Markdown, write files.
"""

from pathlib import Path
from typing import List, Union

import structlog

from .catalog.glue_catalog import GlueCatalogClient
from .common.exceptions import OutputError
from .common.models.table_config import CatalogTable, IndexPage, TableSummary
from .rendering.markdown_renderer import MarkdownRenderer

logger = structlog.get_logger(__name__)

INDEX_FILENAME = "README.md"


class CatalogDocumentationGenerator:
    """
    Generates one Markdown document per catalog table plus a README.md index.

    Processing is sequential and stops at the first error; documents written
    before the failure are left in place.
    """

    def __init__(self, catalog: GlueCatalogClient, renderer: MarkdownRenderer,
                 output_dir: Union[str, Path], project_name: str):
        self.catalog = catalog
        self.renderer = renderer
        self.output_dir = Path(output_dir)
        self.project_name = project_name
        self.logger = logger.bind(component="CatalogDocumentationGenerator")

    def write_document(self, filename: str, content: str) -> Path:
        """
        Write a rendered document to the output directory.

        Args:
            filename: File name relative to the output directory
            content: Rendered Markdown

        Returns:
            Path of the written file
        """
        path = self.output_dir / filename
        try:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            self.logger.error("Failed to write document", path=str(path), error=str(e))
            raise OutputError(f"Failed to write {path}: {e}", path=str(path)) from e

        self.logger.debug("Document written", path=str(path), size=len(content))
        return path

    def _ensure_output_dir(self) -> None:
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.logger.error("Failed to create output directory",
                              path=str(self.output_dir), error=str(e))
            raise OutputError(f"Failed to create output directory {self.output_dir}: {e}",
                              path=str(self.output_dir)) from e

    def _check_index_clash(self, tables: List[CatalogTable]) -> None:
        # Compared case-insensitively: README.md and readme.md are one file on some filesystems.
        for table in tables:
            if table.filename.lower() == INDEX_FILENAME.lower():
                path = str(self.output_dir / table.filename)
                self.logger.error("Table document would overwrite the index",
                                  table=table.name, path=path)
                raise OutputError(
                    f"Table '{table.name}' conflicts with the index file {INDEX_FILENAME}",
                    path=path
                )

    def run(self, database_name: str) -> List[TableSummary]:
        """
        Document every table of ``database_name``.

        Returns:
            One summary per generated table document, in catalog order
        """
        self.logger.info("Starting documentation run",
                         database=database_name,
                         output_dir=str(self.output_dir))

        tables = self.catalog.search_tables(database_name)
        self._check_index_clash(tables)
        self._ensure_output_dir()

        summaries: List[TableSummary] = []
        for table in tables:
            content = self.renderer.render_table(table.to_page())
            self.write_document(table.filename, content)
            summaries.append(table.to_summary())
            self.logger.info("Table documented",
                             table=table.name,
                             columns=table.column_count,
                             partition_keys=len(table.partition_keys))

        index = IndexPage(project_name=self.project_name,
                          database_name=database_name,
                          tables=summaries)
        self.write_document(INDEX_FILENAME, self.renderer.render_index(index))

        self.logger.info("Documentation run completed",
                         database=database_name,
                         table_count=len(summaries),
                         output_dir=str(self.output_dir))
        return summaries
