"""
Metric extraction strategies for the market data payload.

The provider exposes both audited statements (``financials``) and a
precomputed ``keyMetrics`` block. Which one feeds the analysis is chosen by
name through :func:`get_extractor`.
"""

from typing import Any, Dict, List, Optional, Sequence

from ...core.enums import RiskLevel
from ...core.models import HistoricalFinancials, StockMetrics, YearlyFinancials
from ...utils.logging import get_logger

logger = get_logger("market_data.metrics")


def to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def find_item(items: Any, key: str) -> Optional[float]:
    """Numeric value of the ``{"key": ..., "value": ...}`` entry named ``key``."""
    if not isinstance(items, list):
        return None
    for item in items:
        if isinstance(item, dict) and item.get("key") == key:
            return to_float(item.get("value"))
    return None


def first_item(items: Any, *keys: str) -> Optional[float]:
    """First non-zero value among ``keys``."""
    for key in keys:
        value = find_item(items, key)
        if value:
            return value
    return None


def _ratio(numerator: Optional[float], denominator: Optional[float], scale: float = 1.0) -> Optional[float]:
    if numerator and denominator:
        return numerator / denominator * scale
    return None


def _annual_statements(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    financials = payload.get("financials")
    if not isinstance(financials, list):
        return []
    return [f for f in financials if isinstance(f, dict) and f.get("Type") == "Annual"]


def _market_fields(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "year_high": to_float(payload.get("yearHigh")) or None,
        "year_low": to_float(payload.get("yearLow")) or None,
        "percent_change": to_float(payload.get("percentChange")) or 0.0,
    }


class MetricsExtractor:
    """Base class for metric extraction strategies."""

    name = "base"

    def extract(self, payload: Dict[str, Any]) -> StockMetrics:
        raise NotImplementedError


class KeyMetricsExtractor(MetricsExtractor):
    """Read ratios straight from the provider's ``keyMetrics`` groups."""

    name = "key_metrics"

    def extract(self, payload: Dict[str, Any]) -> StockMetrics:
        km = payload.get("keyMetrics") or {}
        valuation = km.get("valuation")
        strength = km.get("financialstrength")
        margins = km.get("margins")
        mgmt = km.get("mgmtEffectiveness")
        price_volume = km.get("priceandVolume")
        per_share = km.get("persharedata")
        growth = km.get("growth")
        income = km.get("incomeStatement")

        return StockMetrics(
            pe_ratio=first_item(
                valuation,
                "pPerEExcludingExtraordinaryItemsMostRecentFiscalYear",
                "pPerEIncludingExtraordinaryItemsTTM",
            ),
            pb_ratio=find_item(valuation, "priceToBookMostRecentFiscalYear"),
            dividend_yield=find_item(valuation, "currentDividendYieldCommonStockPrimaryIssueLTM"),
            price_to_sales=find_item(valuation, "priceToSalesMostRecentFiscalYear"),
            debt_to_equity=first_item(
                strength,
                "totalDebtPerTotalEquityMostRecentFiscalYear",
                "ltDebtPerEquityMostRecentFiscalYear",
            ),
            current_ratio=find_item(strength, "currentRatioMostRecentFiscalYear"),
            free_cash_flow=find_item(strength, "freeCashFlowtrailing12Month"),
            net_profit_margin=find_item(margins, "netProfitMarginPercentTrailing12Month"),
            operating_margin=find_item(margins, "operatingMarginTrailing12Month"),
            gross_margin=find_item(margins, "grossMarginTrailing12Month"),
            roe=first_item(
                mgmt,
                "returnOnAverageEquityTrailing12Month",
                "returnOnAverageEquityMostRecentFiscalYear",
            ),
            roa=find_item(mgmt, "returnOnAverageAssetsTrailing12Month"),
            asset_turnover=find_item(mgmt, "assetTurnoverTrailing12Month"),
            market_cap=find_item(price_volume, "marketCap"),
            beta=find_item(price_volume, "beta"),
            avg_volume=find_item(price_volume, "averageVolume10Day"),
            eps=first_item(
                per_share,
                "ePSIncludingExtraOrdinaryItemsTrailing12Month",
                "ePSExcludingExtraordinaryItemsMostRecentFiscalYear",
            ),
            book_value=find_item(per_share, "bookValuePerShareMostRecentFiscalYear"),
            cash_flow_per_share=find_item(per_share, "cashFlowPerShareTrailing12Month"),
            dividend_per_share=find_item(per_share, "dividendsPerShareTrailing12Month"),
            revenue_growth=find_item(growth, "revenueGrowthRate5Year"),
            eps_growth=find_item(growth, "ePSGrowthRate5Year"),
            revenue_growth_ttm=find_item(growth, "revenueChangePercentTTMPOverTTM"),
            revenue=find_item(income, "revenueTrailing12Month"),
            net_income=find_item(income, "netIncomeAvailableToCommonTrailing12Months"),
            ebitda=find_item(income, "eBITDTrailing12Month"),
            **_market_fields(payload),
        )


def _describe_trend(
    years: Sequence[YearlyFinancials], profit_growth: float
) -> str:
    previous = years[-2]
    if len(years) >= 3:
        oldest = years[0]
        if (
            profit_growth > 15
            and previous.net_income is not None
            and oldest.net_income is not None
            and previous.net_income < oldest.net_income
        ):
            return f"recovering from FY{previous.year} decline"
        if profit_growth > 10:
            return "showing growth momentum"
        if profit_growth < -15:
            return "experiencing declining performance"
        return "showing mixed performance"
    if profit_growth > 10:
        return "showing growth"
    if profit_growth < -10:
        return "showing decline"
    return "showing stable performance"


def analyze_history(payload: Dict[str, Any], years: int = 3) -> HistoricalFinancials:
    """Growth, volatility and risk from the most recent annual statements."""
    history = HistoricalFinancials()
    annual = list(reversed(_annual_statements(payload)[:years]))  # oldest first
    if not annual:
        logger.info("No annual financial data for historical analysis")
        return history

    for statement in annual:
        fmap = statement.get("stockFinancialMap") or {}
        inc, bal = fmap.get("INC"), fmap.get("BAL")
        if not inc:
            continue
        revenue = first_item(inc, "Revenue", "TotalRevenue")
        net_income = first_item(inc, "NetIncome", "NetIncomeAfterTaxes")
        shares = find_item(bal, "TotalCommonSharesOutstanding") if bal else None
        history.yearly_data.append(
            YearlyFinancials(
                year=str(statement.get("FiscalYear")) if statement.get("FiscalYear") else None,
                revenue=revenue,
                net_income=net_income,
                eps=_ratio(net_income, shares),
                margin=_ratio(net_income, revenue, 100),
            )
        )

    if len(history.yearly_data) < 2:
        return history

    current, previous = history.yearly_data[-1], history.yearly_data[-2]
    if current.revenue and previous.revenue:
        history.revenue_growth = round(
            (current.revenue - previous.revenue) / previous.revenue * 100, 1
        )
    if current.eps and previous.eps:
        history.eps_growth = round((current.eps - previous.eps) / previous.eps * 100, 1)

    profit_growth = 0.0
    if current.net_income and previous.net_income:
        profit_growth = (current.net_income - previous.net_income) / previous.net_income * 100

    history.volatility_score = max(abs(history.revenue_growth or 0.0), abs(profit_growth))
    history.risk_level = RiskLevel.from_volatility(history.volatility_score)

    revenue_change = history.revenue_growth or 0.0
    history.context_summary = (
        f"Revenue {'up' if revenue_change > 0 else 'down'} {abs(revenue_change):.1f}% "
        f"to ₹{current.revenue} crores, {_describe_trend(history.yearly_data, profit_growth)} "
        f"with profit {'growth' if profit_growth > 0 else 'decline'} of {profit_growth:.1f}%"
    )
    logger.debug(
        "History: revenue growth %s%%, EPS growth %s%%, risk %s (volatility %.1f)",
        history.revenue_growth,
        history.eps_growth,
        history.risk_level.value,
        history.volatility_score,
    )
    return history


class FinancialsMetricsExtractor(MetricsExtractor):
    """Compute metrics from the latest annual statements plus 3-year history."""

    name = "financials"

    def extract(self, payload: Dict[str, Any]) -> StockMetrics:
        fields: Dict[str, Any] = dict(_market_fields(payload))
        annual = _annual_statements(payload)
        fmap = (annual[0].get("stockFinancialMap") or {}) if annual else {}
        if not fmap:
            logger.info("No annual financial data found")
        inc, bal, cas = fmap.get("INC"), fmap.get("BAL"), fmap.get("CAS")

        if inc:
            revenue = first_item(inc, "Revenue", "TotalRevenue")
            net_income = first_item(inc, "NetIncome", "NetIncomeAfterTaxes")
            operating_income = find_item(inc, "OperatingIncome")
            gross_profit = find_item(inc, "GrossProfit")
            fields.update(
                revenue=revenue,
                net_income=net_income,
                operating_income=operating_income,
                gross_profit=gross_profit,
                cost_of_revenue=find_item(inc, "CostofRevenueTotal"),
                net_profit_margin=_ratio(net_income, revenue, 100),
                gross_margin=_ratio(gross_profit, revenue, 100),
                operating_margin=_ratio(operating_income, revenue, 100),
            )

        if bal:
            net_income = fields.get("net_income")
            total_assets = find_item(bal, "TotalAssets")
            total_equity = find_item(bal, "TotalEquity")
            total_debt = first_item(bal, "TotalDebt", "TotalLongTermDebt")
            shares = find_item(bal, "TotalCommonSharesOutstanding")
            fields.update(
                total_assets=total_assets,
                total_equity=total_equity,
                total_debt=total_debt,
                cash=first_item(bal, "Cash", "CashandShortTermInvestments"),
                debt_to_equity=_ratio(total_debt, total_equity),
                roe=_ratio(net_income, total_equity, 100),
                roa=_ratio(net_income, total_assets, 100),
                eps=_ratio(net_income, shares),
            )
            prices = payload.get("currentPrice") or {}
            price = to_float(prices.get("BSE")) or to_float(prices.get("NSE"))
            if price and shares:
                fields.update(market_cap=price * shares, current_price=price)

        if cas:
            operating_cf = find_item(cas, "CashfromOperatingActivities")
            capex = find_item(cas, "CapitalExpenditures")
            fields.update(
                operating_cash_flow=operating_cf,
                # capex is reported negative
                free_cash_flow=operating_cf + capex if operating_cf and capex else operating_cf,
            )

        valuation = (payload.get("keyMetrics") or {}).get("valuation")
        if valuation:
            fields.update(
                pe_ratio=find_item(valuation, "pPerEExcludingExtraordinaryItemsMostRecentFiscalYear"),
                pb_ratio=find_item(valuation, "priceToBookMostRecentFiscalYear"),
                dividend_yield=find_item(valuation, "currentDividendYieldCommonStockPrimaryIssueLTM"),
            )

        history = analyze_history(payload)
        fields.update(
            revenue_growth=history.revenue_growth,
            eps_growth=history.eps_growth,
            risk_level=history.risk_level,
            volatility_score=history.volatility_score,
            historical_context=history.context_summary,
        )
        return StockMetrics(**fields)


_EXTRACTORS = {
    FinancialsMetricsExtractor.name: FinancialsMetricsExtractor,
    KeyMetricsExtractor.name: KeyMetricsExtractor,
}


def get_extractor(name: str) -> MetricsExtractor:
    """Return the extraction strategy registered under ``name``."""
    try:
        return _EXTRACTORS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown metrics strategy {name!r}; expected one of {sorted(_EXTRACTORS)}"
        ) from None
