"""
Configuration management for the stock analysis bot.
"""

from .settings import Settings, get_settings
from .external_apis import ExternalAPIConfig
from .languages import LanguageCatalog, LanguageTexts, default_catalog

__all__ = [
    "Settings",
    "get_settings",
    "ExternalAPIConfig",
    "LanguageCatalog",
    "LanguageTexts",
    "default_catalog",
]
