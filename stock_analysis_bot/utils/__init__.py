"""
Utility modules for the stock analysis bot.
"""

from .logging import configure_logging, get_logger
from .text import MetaTextExtractor, parse_stock_names

__all__ = [
    "configure_logging",
    "get_logger",
    "MetaTextExtractor",
    "parse_stock_names",
]
