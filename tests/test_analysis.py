from types import SimpleNamespace

import pytest
from agents import AgentsException

import stock_analysis_bot.services.analysis.generator as generator_module
from stock_analysis_bot.core.enums import LanguagePreference
from stock_analysis_bot.core.exceptions import (
    AnalysisGenerationError,
    MarketDataError,
    StockNotFoundError,
    TranslationError,
)
from stock_analysis_bot.core.models import StockMetrics, StockSnapshot
from stock_analysis_bot.services.analysis import (
    STOCK_SEPARATOR,
    SinglePassGenerator,
    StockAnalysisPipeline,
    TwoPassGenerator,
    get_generator,
)
from stock_analysis_bot.services.analysis.prompts import build_analysis_prompt


def _snapshot(name="Tata Consultancy Services"):
    return StockSnapshot(
        symbol="TCS",
        company_name=name,
        current_price=1500,
        year_high=2000,
        year_low=1200,
        metrics=StockMetrics(pe_ratio=31.2, historical_context="Revenue up 20.0%"),
    )


class FakeRunner:
    """Replaces ``Runner``; answers by agent name."""

    def __init__(self, answers):
        self.answers = answers
        self.calls = []

    async def run(self, agent, input):
        self.calls.append((agent.name, input))
        answer = self.answers[agent.name]
        if isinstance(answer, Exception):
            raise answer
        return SimpleNamespace(final_output=answer)


@pytest.fixture
def fake_runner(monkeypatch):
    def install(**answers):
        runner = FakeRunner({k.replace("_", " ").capitalize(): v for k, v in answers.items()})
        monkeypatch.setattr(generator_module, "Runner", runner)
        return runner

    return install


def test_analysis_prompt_contains_figures():
    prompt = build_analysis_prompt(_snapshot(), LanguagePreference.GUJARATI)

    assert "Write the analysis in Gujarati." in prompt
    assert "*TATA CONSULTANCY SERVICES:*" in prompt
    assert "| 31.2 |" in prompt
    assert "| N/A% |" in prompt
    assert "25% below high" in prompt
    assert "Revenue up 20.0%" in prompt


@pytest.mark.asyncio
async def test_two_pass_english_skips_translation(fake_runner):
    runner = fake_runner(stock_analyst="*TCS:* strong")

    text = await TwoPassGenerator().generate(_snapshot(), LanguagePreference.ENGLISH)

    assert text == "*TCS:* strong"
    assert [name for name, _ in runner.calls] == ["Stock analyst"]


@pytest.mark.asyncio
async def test_two_pass_translates_english_draft(fake_runner):
    runner = fake_runner(stock_analyst="*TCS:* strong", analysis_translator="*TCS:* मजबूत")

    text = await TwoPassGenerator().generate(_snapshot(), LanguagePreference.HINDI)

    assert text == "*TCS:* मजबूत"
    assert "Write the analysis in English." in runner.calls[0][1]
    assert runner.calls[1][0] == "Analysis translator"
    assert "conversational Hindi" in runner.calls[1][1]
    assert "*TCS:* strong" in runner.calls[1][1]


@pytest.mark.asyncio
async def test_two_pass_translation_failure(fake_runner):
    fake_runner(stock_analyst="*TCS:* strong", analysis_translator=AgentsException("rate limited"))

    with pytest.raises(TranslationError):
        await TwoPassGenerator().generate(_snapshot(), LanguagePreference.GUJARATI)


@pytest.mark.asyncio
async def test_single_pass_asks_for_target_language(fake_runner):
    runner = fake_runner(stock_analyst="  *TCS:* ગુજરાતી  ")

    text = await SinglePassGenerator().generate(_snapshot(), LanguagePreference.GUJARATI)

    assert text == "*TCS:* ગુજરાતી"
    assert "Write the analysis in Gujarati." in runner.calls[0][1]


@pytest.mark.asyncio
async def test_empty_answer_is_generation_error(fake_runner):
    fake_runner(stock_analyst="   ")

    with pytest.raises(AnalysisGenerationError):
        await SinglePassGenerator().generate(_snapshot(), LanguagePreference.ENGLISH)


def test_get_generator():
    assert isinstance(get_generator("two_pass"), TwoPassGenerator)
    assert isinstance(get_generator("single_pass", model="gpt-4o"), SinglePassGenerator)
    with pytest.raises(ValueError):
        get_generator("three_pass")


class FakeMarketData:
    def __init__(self, outcomes):
        self.outcomes = outcomes
        self.requested = []

    async def fetch_stock(self, name):
        self.requested.append(name)
        outcome = self.outcomes[name]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeGenerator:
    name = "fake"

    def __init__(self, error=None):
        self.error = error

    async def generate(self, stock, language):
        if self.error:
            raise self.error
        return f"{stock.company_name} in {language.value}"


@pytest.mark.asyncio
async def test_pipeline_joins_stocks_and_appends_disclaimer(catalog):
    market = FakeMarketData({"TCS": _snapshot("TCS Ltd"), "INFY": _snapshot("Infosys")})
    pipeline = StockAnalysisPipeline(market, FakeGenerator(), catalog, stock_delay=0)

    reply = await pipeline.analyze("TCS, INFY", LanguagePreference.ENGLISH)

    assert market.requested == ["TCS", "INFY"]
    assert reply.split(STOCK_SEPARATOR) == [
        "TCS Ltd in english",
        "Infosys in english",
        catalog.texts_for(LanguagePreference.ENGLISH).disclaimer,
    ]


@pytest.mark.asyncio
async def test_pipeline_reports_per_stock_failures(catalog):
    market = FakeMarketData(
        {
            "XYZ": StockNotFoundError("XYZ"),
            "DOWN": MarketDataError("503"),
            "TCS": _snapshot("TCS Ltd"),
        }
    )
    pipeline = StockAnalysisPipeline(market, FakeGenerator(), catalog, stock_delay=0)
    hindi = catalog.texts_for(LanguagePreference.HINDI)

    reply = await pipeline.analyze("XYZ DOWN TCS", LanguagePreference.HINDI)

    assert reply.split(STOCK_SEPARATOR) == [
        hindi.not_found.format(stock="XYZ"),
        f"❌ DOWN: {hindi.data_unavailable}",
        "TCS Ltd in hindi",
        hindi.disclaimer,
    ]


@pytest.mark.asyncio
async def test_pipeline_generation_failures(catalog):
    english = catalog.texts_for(LanguagePreference.ENGLISH)
    market = FakeMarketData({"TCS": _snapshot("TCS Ltd")})

    failed = StockAnalysisPipeline(
        market, FakeGenerator(AnalysisGenerationError("down")), catalog, stock_delay=0
    )
    reply = await failed.analyze("TCS", LanguagePreference.ENGLISH)
    assert reply.startswith(f"*TCS LTD:*\n\n{english.analysis_failed}")

    untranslated = StockAnalysisPipeline(
        market, FakeGenerator(TranslationError("down")), catalog, stock_delay=0
    )
    reply = await untranslated.analyze("TCS", LanguagePreference.ENGLISH)
    assert reply.startswith(english.translation_failed)
