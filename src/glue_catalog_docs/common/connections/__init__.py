"""
Connection management for the catalog service.
"""

from .glue_connection import GlueConnectionManager

__all__ = [
    "GlueConnectionManager"
]
