"""
Command line entry point.

Usage:
    glue-catalog-docs --project-name "Sales Lake" --database-name sales --output-dir docs/
"""

import argparse
import sys
from typing import List, Optional

import structlog

from . import __version__
from .catalog.glue_catalog import GlueCatalogClient
from .common.connections.glue_connection import GlueConnectionManager
from .common.exceptions import CatalogDocsError, CatalogError, ConfigurationError
from .common.monitoring.logger import LOG_FORMATS, configure_logging
from .common.utils.config import AppConfig, load_config
from .generator import CatalogDocumentationGenerator
from .rendering.markdown_renderer import MarkdownRenderer

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glue-catalog-docs",
        description="Generate Markdown documentation for the tables of a Glue Data Catalog database."
    )
    # Flags default to None so that unset flags do not mask env/config values.
    parser.add_argument("--project-name", "--projectName", dest="project_name",
                        help="project name shown in README.md (default: 'no name')")
    parser.add_argument("--output-dir", "--outputDir", dest="output_dir",
                        help="output directory (default: '.')")
    parser.add_argument("--database-name", "--databaseName", dest="database_name",
                        help="catalog database name (default: 'default')")
    parser.add_argument("--config", dest="config_file",
                        help="YAML or JSON configuration file")
    parser.add_argument("--region", help="AWS region")
    parser.add_argument("--profile", help="AWS shared config profile")
    parser.add_argument("--catalog-id", dest="catalog_id",
                        help="catalog id (account) to query")
    parser.add_argument("--endpoint-url", dest="endpoint_url",
                        help="custom Glue endpoint URL")
    parser.add_argument("--page-size", dest="page_size", type=int,
                        help="tables requested per SearchTables page (1-1000)")
    parser.add_argument("--log-level", dest="log_level",
                        help="DEBUG, INFO, WARNING or ERROR (default: INFO)")
    parser.add_argument("--log-format", dest="log_format", choices=LOG_FORMATS,
                        help="log output format (default: console)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def create_generator(config: AppConfig) -> CatalogDocumentationGenerator:
    """Wire the catalog client, renderer and generator from configuration."""
    connection = GlueConnectionManager(config.connection_settings())
    try:
        glue_client = connection.glue_client
    except ConnectionError as e:
        raise CatalogError(str(e)) from e

    catalog = GlueCatalogClient(glue_client,
                                catalog_id=config.catalog_id,
                                page_size=config.page_size)
    return CatalogDocumentationGenerator(catalog=catalog,
                                         renderer=MarkdownRenderer(),
                                         output_dir=config.output_dir,
                                         project_name=config.project_name)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    overrides = {k: v for k, v in vars(args).items() if k != "config_file"}

    # Logging must be set up before loading config, which logs itself.
    try:
        configure_logging(args.log_level or "INFO", args.log_format or "console")
    except ValueError:
        configure_logging()

    try:
        config = load_config(args.config_file, overrides)
    except ConfigurationError as e:
        logger.error("Configuration error", error=str(e))
        return EXIT_ERROR

    configure_logging(config.log_level, config.log_format)

    try:
        generator = create_generator(config)
        summaries = generator.run(config.database_name)
    except CatalogDocsError as e:
        logger.error("Documentation run failed", error=str(e), error_type=type(e).__name__)
        return EXIT_ERROR
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return EXIT_INTERRUPTED

    logger.info("Generated documentation",
                tables=len(summaries),
                output_dir=config.output_dir)
    return EXIT_OK


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
