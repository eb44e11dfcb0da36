"""
Configuration utilities.
"""

from .config import AppConfig, load_config

__all__ = [
    "AppConfig",
    "load_config"
]
