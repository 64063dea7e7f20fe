"""
Analysis generation strategies backed by OpenAI agents.
"""

from agents import Agent, AgentsException, ModelSettings, Runner
from openai import OpenAIError

from ...core.enums import LanguagePreference
from ...core.exceptions import AnalysisGenerationError, TranslationError
from ...core.models import StockSnapshot
from ...utils.logging import get_logger
from .prompts import (
    ANALYST_INSTRUCTIONS,
    TRANSLATOR_INSTRUCTIONS,
    build_analysis_prompt,
    build_translation_prompt,
)

logger = get_logger("analysis")


def _build_analyst(model: str) -> Agent:
    return Agent(
        name="Stock analyst",
        instructions=ANALYST_INSTRUCTIONS,
        model=model,
        model_settings=ModelSettings(temperature=0.3, max_tokens=800),
    )


def _build_translator(model: str) -> Agent:
    return Agent(
        name="Analysis translator",
        instructions=TRANSLATOR_INSTRUCTIONS,
        model=model,
        model_settings=ModelSettings(temperature=0.2, max_tokens=800),
    )


async def _run(agent: Agent, prompt: str) -> str:
    try:
        result = await Runner.run(agent, input=prompt)
    except (AgentsException, OpenAIError) as e:
        raise AnalysisGenerationError(f"OpenAI run failed for {agent.name}: {e}") from e
    text = (result.final_output or "").strip()
    if not text:
        raise AnalysisGenerationError(f"OpenAI returned an empty answer for {agent.name}")
    return text


class AnalysisGenerator:
    """Base class: produce one stock's write-up in the requested language."""

    name = "base"

    async def generate(self, stock: StockSnapshot, language: LanguagePreference) -> str:
        raise NotImplementedError


class SinglePassGenerator(AnalysisGenerator):
    """Ask the model for the analysis directly in the target language."""

    name = "single_pass"

    def __init__(self, model: str = "gpt-4o-mini"):
        self.analyst = _build_analyst(model)

    async def generate(self, stock: StockSnapshot, language: LanguagePreference) -> str:
        logger.info("Generating %s analysis for %s", language.value, stock.company_name)
        return await _run(self.analyst, build_analysis_prompt(stock, language))


class TwoPassGenerator(AnalysisGenerator):
    """Write the analysis in English, then translate it.

    Translation failures raise :class:`TranslationError` so callers can fall
    back to a localized message instead of the English text.
    """

    name = "two_pass"

    def __init__(self, model: str = "gpt-4o-mini"):
        self.analyst = _build_analyst(model)
        self.translator = _build_translator(model)

    async def generate(self, stock: StockSnapshot, language: LanguagePreference) -> str:
        logger.info("Generating English analysis for %s", stock.company_name)
        english = await _run(
            self.analyst, build_analysis_prompt(stock, LanguagePreference.ENGLISH)
        )
        if language is LanguagePreference.ENGLISH:
            return english

        logger.info("Translating to %s for %s", language.value, stock.company_name)
        try:
            return await _run(self.translator, build_translation_prompt(english, language))
        except AnalysisGenerationError as e:
            raise TranslationError(str(e)) from e


_GENERATORS = {
    SinglePassGenerator.name: SinglePassGenerator,
    TwoPassGenerator.name: TwoPassGenerator,
}


def get_generator(name: str, model: str = "gpt-4o-mini") -> AnalysisGenerator:
    """Return the generation strategy registered under ``name``."""
    try:
        return _GENERATORS[name](model=model)
    except KeyError:
        raise ValueError(
            f"Unknown analysis strategy {name!r}; expected one of {sorted(_GENERATORS)}"
        ) from None
