"""
API v1 endpoints module.
"""

from . import incidents, health

__all__ = ["incidents", "health"]
