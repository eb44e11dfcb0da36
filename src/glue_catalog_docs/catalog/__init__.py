"""
Catalog access: listing table definitions.
"""

from .glue_catalog import GlueCatalogClient

__all__ = [
    "GlueCatalogClient"
]
