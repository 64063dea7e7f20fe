"""
HTTP handlers.
"""

from .health import HealthHandler
from .admin import AdminHandler

__all__ = ["HealthHandler", "AdminHandler"]
