"""
Markdown rendering of catalog tables.
"""

from .markdown_renderer import MarkdownRenderer

__all__ = [
    "MarkdownRenderer"
]
