"""
Market data service for the IndianAPI stock endpoint (via RapidAPI).
"""

from typing import Any, Dict, Optional

import httpx

from ...config import ExternalAPIConfig
from ...core.exceptions import MarketDataError, StockNotFoundError
from ...core.models import StockSnapshot
from ...utils.logging import get_logger
from .metrics import MetricsExtractor, FinancialsMetricsExtractor, to_float

logger = get_logger("market_data")


class MarketDataService:
    """Fetch a stock by name and map it to a :class:`StockSnapshot`."""

    def __init__(
        self,
        api_config: ExternalAPIConfig,
        extractor: Optional[MetricsExtractor] = None,
    ):
        self.api_config = api_config
        self.extractor = extractor or FinancialsMetricsExtractor()
        self.timeout = api_config.market_data_timeout

    async def _get_stock_payload(self, stock_name: str) -> Dict[str, Any]:
        """Make the lookup request with error handling."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    self.api_config.get_stock_url(),
                    params={"name": stock_name},
                    headers=self.api_config.get_market_data_headers(),
                )
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException as e:
            raise MarketDataError(f"API request timed out for {stock_name}") from e
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise StockNotFoundError(stock_name) from e
            raise MarketDataError(f"API HTTP error {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise MarketDataError(f"API request failed: {e}") from e

    async def fetch_stock(self, stock_name: str) -> StockSnapshot:
        """Look up ``stock_name``.

        Raises:
            StockNotFoundError: The provider returned no company for the name.
            MarketDataError: The request failed.
        """
        logger.info("Searching for: %s", stock_name)
        payload = await self._get_stock_payload(stock_name)
        if not isinstance(payload, dict) or not payload.get("companyName"):
            raise StockNotFoundError(stock_name)

        prices = payload.get("currentPrice") or {}
        return StockSnapshot(
            symbol=payload.get("tickerId") or stock_name.upper(),
            company_name=payload["companyName"],
            industry=payload.get("industry"),
            current_price=to_float(prices.get("NSE")) or to_float(prices.get("BSE")),
            percent_change=to_float(payload.get("percentChange")) or 0.0,
            year_high=to_float(payload.get("yearHigh")) or None,
            year_low=to_float(payload.get("yearLow")) or None,
            metrics=self.extractor.extract(payload),
            analyst_view=payload.get("analystView"),
            raw_data=payload,
        )
