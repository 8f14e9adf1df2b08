"""
Core module exports.
"""

from .config import (
    Settings,
    AzureSettings,
    GraphSettings,
    get_settings,
)
from .logging import get_logger, setup_logging

__all__ = [
    "Settings",
    "AzureSettings",
    "GraphSettings",
    "get_settings",
    "get_logger",
    "setup_logging",
]
