"""
Market data models.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..enums import RiskLevel


class YearlyFinancials(BaseModel):
    """Headline numbers for one fiscal year."""

    year: Optional[str] = None
    revenue: Optional[float] = None
    net_income: Optional[float] = None
    eps: Optional[float] = None
    margin: Optional[float] = None


class HistoricalFinancials(BaseModel):
    """Multi-year trend used to fill growth figures and assess risk."""

    revenue_growth: Optional[float] = None
    eps_growth: Optional[float] = None
    context_summary: str = ""
    risk_level: RiskLevel = RiskLevel.MODERATE
    volatility_score: float = 0.0
    yearly_data: List[YearlyFinancials] = Field(default_factory=list)


class StockMetrics(BaseModel):
    """Financial ratios extracted from a market data payload.

    Every field is optional: providers omit sections freely and the prompt
    renders missing values as ``N/A``.
    """

    model_config = ConfigDict(extra="forbid")

    # Income statement
    revenue: Optional[float] = None
    net_income: Optional[float] = None
    operating_income: Optional[float] = None
    gross_profit: Optional[float] = None
    cost_of_revenue: Optional[float] = None
    ebitda: Optional[float] = None
    net_profit_margin: Optional[float] = None
    gross_margin: Optional[float] = None
    operating_margin: Optional[float] = None

    # Balance sheet
    total_assets: Optional[float] = None
    total_equity: Optional[float] = None
    total_debt: Optional[float] = None
    cash: Optional[float] = None
    debt_to_equity: Optional[float] = None
    current_ratio: Optional[float] = None
    roe: Optional[float] = None
    roa: Optional[float] = None
    asset_turnover: Optional[float] = None

    # Per share / market
    eps: Optional[float] = None
    book_value: Optional[float] = None
    cash_flow_per_share: Optional[float] = None
    dividend_per_share: Optional[float] = None
    market_cap: Optional[float] = None
    current_price: Optional[float] = None
    beta: Optional[float] = None
    avg_volume: Optional[float] = None

    # Cash flow
    operating_cash_flow: Optional[float] = None
    free_cash_flow: Optional[float] = None

    # Valuation
    pe_ratio: Optional[float] = None
    pb_ratio: Optional[float] = None
    price_to_sales: Optional[float] = None
    dividend_yield: Optional[float] = None

    # Growth and risk
    revenue_growth: Optional[float] = None
    revenue_growth_ttm: Optional[float] = None
    eps_growth: Optional[float] = None
    risk_level: RiskLevel = RiskLevel.MODERATE
    volatility_score: float = 0.0
    historical_context: str = ""

    # Market data from the main response
    year_high: Optional[float] = None
    year_low: Optional[float] = None
    percent_change: float = 0.0


class StockSnapshot(BaseModel):
    """A single stock as returned by the market data provider."""

    symbol: str
    company_name: str
    industry: Optional[str] = None
    current_price: Optional[float] = None
    percent_change: float = 0.0
    year_high: Optional[float] = None
    year_low: Optional[float] = None
    metrics: StockMetrics = Field(default_factory=StockMetrics)
    analyst_view: Optional[Any] = None
    raw_data: Dict[str, Any] = Field(default_factory=dict, repr=False)

    def price_position(self) -> str:
        """Describe the current price relative to the 52-week high."""
        if not (self.current_price and self.year_high):
            return ""
        drop = round((self.year_high - self.current_price) / self.year_high * 100)
        return f"{drop}% below high" if drop > 0 else "near high"
