"""
Markdown documentation generator for AWS Glue Data Catalog databases.
"""

__version__ = "0.1.0"
