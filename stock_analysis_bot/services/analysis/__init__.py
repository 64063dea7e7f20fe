"""
Stock analysis module.
"""

from .generator import (
    AnalysisGenerator,
    SinglePassGenerator,
    TwoPassGenerator,
    get_generator,
)
from .pipeline import STOCK_SEPARATOR, StockAnalysisPipeline

__all__ = [
    "AnalysisGenerator",
    "SinglePassGenerator",
    "TwoPassGenerator",
    "get_generator",
    "STOCK_SEPARATOR",
    "StockAnalysisPipeline",
]
