"""
Data models for catalog tables and rendering parameters.
"""

from .table_config import CatalogColumn, CatalogTable, TableSummary, TablePage, IndexPage

__all__ = [
    "CatalogColumn",
    "CatalogTable",
    "TableSummary",
    "TablePage",
    "IndexPage"
]
