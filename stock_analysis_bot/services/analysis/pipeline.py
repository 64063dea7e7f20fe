"""
Fetch and analyse every stock named in a query.
"""

import asyncio
from typing import List, Optional

from ...config import LanguageCatalog, default_catalog
from ...core.enums import LanguagePreference
from ...core.exceptions import (
    AnalysisGenerationError,
    MarketDataError,
    StockNotFoundError,
    TranslationError,
)
from ...utils.logging import get_logger
from ...utils.text import parse_stock_names
from ..market_data import MarketDataService
from .generator import AnalysisGenerator

logger = get_logger("analysis.pipeline")

STOCK_SEPARATOR = "\n\n---\n\n"


class StockAnalysisPipeline:
    """Build the full reply for a stock query.

    Per-stock failures become a localized line in the reply so one bad name
    never hides the analysis of the others.
    """

    def __init__(
        self,
        market_data: MarketDataService,
        generator: AnalysisGenerator,
        catalog: Optional[LanguageCatalog] = None,
        stock_delay: float = 1.0,
    ):
        self.market_data = market_data
        self.generator = generator
        self.catalog = catalog or default_catalog()
        self.stock_delay = stock_delay

    async def _analyze_one(self, name: str, language: LanguagePreference) -> str:
        texts = self.catalog.texts_for(language)
        try:
            stock = await self.market_data.fetch_stock(name)
        except StockNotFoundError:
            logger.info("Stock not found: %s", name)
            return texts.not_found.format(stock=name)
        except MarketDataError as e:
            logger.error("Error fetching %s: %s", name, e)
            return f"❌ {name}: {texts.data_unavailable}"

        try:
            return await self.generator.generate(stock, language)
        except TranslationError as e:
            logger.error("Translation failed for %s: %s", stock.company_name, e)
            return texts.translation_failed
        except AnalysisGenerationError as e:
            logger.error("Analysis failed for %s: %s", stock.company_name, e)
            return f"*{stock.company_name.upper()}:*\n\n{texts.analysis_failed}"

    async def analyze(self, query_text: str, language: LanguagePreference) -> str:
        names = parse_stock_names(query_text)
        logger.info("Analyzing %d stock(s) in %s", len(names), language.value)

        results: List[str] = []
        for i, name in enumerate(names):
            results.append(await self._analyze_one(name, language))
            if i < len(names) - 1 and self.stock_delay > 0:
                await asyncio.sleep(self.stock_delay)

        results.append(self.catalog.texts_for(language).disclaimer)
        return STOCK_SEPARATOR.join(results)
