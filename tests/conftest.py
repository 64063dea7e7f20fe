"""
Pytest configuration and fixtures.
"""

from typing import List, Tuple

import pytest

from stock_analysis_bot.config import default_catalog
from stock_analysis_bot.services.users import PreferenceResolver, UserStore
from stock_analysis_bot.utils import event_log


class RecordingSender:
    """Stands in for WhatsAppSender; records every text sent."""

    def __init__(self):
        self.sent: List[Tuple[str, str]] = []

    async def send_text(self, to: str, body: str) -> int:
        self.sent.append((to, body))
        return 1

    def bodies(self) -> List[str]:
        return [body for _, body in self.sent]


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def user_store(tmp_path):
    return UserStore(str(tmp_path / "users.db"))


@pytest.fixture
def resolver(user_store, catalog):
    return PreferenceResolver(user_store, catalog)


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture(autouse=True)
def events_file(tmp_path):
    """Keep analytics events out of the working directory."""
    path = tmp_path / "events.jsonl"
    event_log.set_log_path(path)
    return path


def _items(**values):
    return [{"key": k, "value": str(v)} for k, v in values.items()]


def _annual(year, revenue, net_income, shares=10, **extra):
    return {
        "FiscalYear": str(year),
        "Type": "Annual",
        "stockFinancialMap": {
            "INC": _items(Revenue=revenue, NetIncome=net_income, **extra.get("inc", {})),
            "BAL": _items(TotalCommonSharesOutstanding=shares, **extra.get("bal", {})),
            "CAS": _items(**extra.get("cas", {})),
        },
    }


@pytest.fixture
def stock_payload():
    """IndianAPI ``/stock`` response for a healthy company, newest year first."""
    return {
        "tickerId": "TCS",
        "companyName": "Tata Consultancy Services",
        "industry": "IT Services",
        "currentPrice": {"BSE": "1500.5", "NSE": "1501"},
        "percentChange": "1.25",
        "yearHigh": "2000",
        "yearLow": "1200",
        "financials": [
            _annual(
                2024,
                1200,
                240,
                inc={"OperatingIncome": 300, "GrossProfit": 600, "CostofRevenueTotal": 600},
                bal={"TotalAssets": 2000, "TotalEquity": 1200, "TotalDebt": 300, "Cash": 100},
                cas={"CashfromOperatingActivities": 280, "CapitalExpenditures": -80},
            ),
            {"FiscalYear": "2024", "Type": "Interim", "stockFinancialMap": {}},
            _annual(2023, 1000, 200),
            _annual(2022, 900, 210),
        ],
        "keyMetrics": {
            "valuation": _items(
                pPerEExcludingExtraordinaryItemsMostRecentFiscalYear=31.2,
                priceToBookMostRecentFiscalYear=5.1,
                currentDividendYieldCommonStockPrimaryIssueLTM=1.4,
            ),
        },
    }


@pytest.fixture
def annual_statement():
    return _annual
