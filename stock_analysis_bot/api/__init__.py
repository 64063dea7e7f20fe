"""
API layer for the stock analysis bot.
"""

from .app import create_app
from .dependencies import AppServices, build_services

__all__ = [
    "create_app",
    "AppServices",
    "build_services",
]
