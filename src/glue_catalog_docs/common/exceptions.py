"""
Exception hierarchy for the documentation generator.
"""


class CatalogDocsError(Exception):
    """Base class for all errors raised by glue_catalog_docs."""


class ConfigurationError(CatalogDocsError):
    """Configuration could not be loaded or failed validation."""


class CatalogError(CatalogDocsError):
    """The catalog service could not be reached or returned an error."""


class RenderError(CatalogDocsError):
    """A template could not be loaded or executed."""


class OutputError(CatalogDocsError):
    """A generated document could not be written."""

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.path = path
