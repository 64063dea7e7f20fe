"""
Prompt templates for stock analysis and translation.
"""

from typing import Optional

from ...core.enums import LanguagePreference
from ...core.models import StockSnapshot

ANALYST_INSTRUCTIONS = """
You are an expert Indian stock analyst writing WhatsApp messages for retail investors.

— SYMBOL DEFINITIONS (use only these) —
• ✅ if the metric is genuinely POSITIVE (profits up, healthy margins, low debt, attractive valuation)
• ⚠️ if the metric is NEUTRAL/MIXED (fair valuation, moderate concerns, small declines, P/E above 30)
• ❌ if the metric is genuinely NEGATIVE (losses, declining revenue, high debt, expensive valuation)
• If a company has losses or declining revenue, ALWAYS use ❌ for Year-on-Year Profits.
• If a company has severe issues (negative margins, financial instability), ALWAYS use ❌ for Risks & Challenges.

— Guidelines —
- P/E above 30 is generally high, but can be acceptable for growth stocks.
- Use simple language and actual numbers (percentages, ₹ amounts, crores).
- Use SINGLE asterisks for bold (*text*), never double asterisks.
- Give practical advice with clear reasoning and mention specific business risks.
- Keep the whole response under 1500 characters including formatting and symbols.
""".strip()

TRANSLATOR_INSTRUCTIONS = """
You translate English stock analyses for Indian retail investors aged 60+.

PRESERVE EXACTLY:
- WhatsApp formatting: *bold text*, symbols ✅⚠️❌
- All numbers, percentages and ₹ amounts
- Line breaks, bullet structure, headings order and recommendation logic
- Company names; technical terms may stay in English in parentheses
Do not add, remove or reflow punctuation, numbers or symbols.

LANGUAGE STYLE:
- Simple, conversational language rather than formal or literary style
- Mix in common English finance words sparingly
- Keep the whole response under 1500 characters
""".strip()

TRANSLATION_GLOSSARY = {
    LanguagePreference.HINDI: (
        '"Market Cap" → "कंपनी का साइज़", "Debt" → "कर्जा", '
        '"Revenue" → "कारोबार", "Profit" → "प्रोफिट". '
        "Recommendation line: *सलाह:* 👉 *खरीदें/रुकें/बेचें* – [reason]"
    ),
    LanguagePreference.GUJARATI: (
        '"Market Cap" → "કંપનીનું કદ", "Debt" → "દેવું", '
        '"Revenue" → "વેચાણ", "Profit" → "નફો". '
        "Recommendation line: *સલાહ:* 👉 *ખરીદો/રાહ જુઓ/વેચો* – [reason]"
    ),
}

LANGUAGE_NAMES = {
    LanguagePreference.ENGLISH: "English",
    LanguagePreference.HINDI: "Hindi",
    LanguagePreference.GUJARATI: "Gujarati",
}


def _fmt(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    return f"{value:,.2f}".rstrip("0").rstrip(".")


def language_name(language: LanguagePreference) -> str:
    return LANGUAGE_NAMES.get(language, "Hindi")


def build_analysis_prompt(stock: StockSnapshot, language: LanguagePreference) -> str:
    """Render the per-stock analysis request in ``language``."""
    m = stock.metrics
    position = stock.price_position()
    profits_hint = m.historical_context or "Profit trends with specific revenue and growth numbers"
    return f"""
Write the analysis in {language_name(language)}.

Company: {stock.company_name}
Industry: {stock.industry or "N/A"}
Current Price: ₹{_fmt(stock.current_price)}
Today's Change: {_fmt(stock.percent_change)}%
52-Week High: ₹{_fmt(stock.year_high)}
52-Week Low: ₹{_fmt(stock.year_low)}
Price position: {position or "N/A"}
Risk level from financial volatility: {m.risk_level.value}

Financial Metrics:
| Metric            | Value |
|-------------------|-------|
| Market Cap        | ₹{_fmt(m.market_cap)} crores |
| PE Ratio          | {_fmt(m.pe_ratio)} |
| PB Ratio          | {_fmt(m.pb_ratio)} |
| ROE               | {_fmt(m.roe)}% |
| ROA               | {_fmt(m.roa)}% |
| Debt to Equity    | {_fmt(m.debt_to_equity)} |
| Net Profit Margin | {_fmt(m.net_profit_margin)}% |
| EPS               | ₹{_fmt(m.eps)} |
| Revenue           | ₹{_fmt(m.revenue)} crores |
| Net Income        | ₹{_fmt(m.net_income)} crores |
| Revenue Growth    | {_fmt(m.revenue_growth)}% |
| EPS Growth        | {_fmt(m.eps_growth)}% |

Create the analysis in this EXACT format:

*{stock.company_name.upper()}:*

✅/⚠️/❌ *Company Size:* [Market cap and size description with actual numbers]
✅/⚠️/❌ *Current Price:* [Price with 52-week high/low and price position]
✅/⚠️/❌ *Year-on-Year Profits:* [{profits_hint}]
✅/⚠️/❌ *Price vs Earnings (P/E):* [P/E with actual ratio and valuation assessment]
✅/⚠️/❌ *Risks & Challenges:* [Specific risks, debt levels and {m.risk_level.value} volatility risk]

*Summary:* [2-3 line summary of the overall investment situation]

*Recommendation:* 👉 *BUY/HOLD/SELL* – [Brief reasoning]
""".strip()


def build_translation_prompt(analysis: str, language: LanguagePreference) -> str:
    glossary = TRANSLATION_GLOSSARY.get(language, "")
    return (
        f"Translate this stock analysis to conversational {language_name(language)}.\n"
        f"Preferred terms: {glossary}\n\n"
        f"Analysis to translate:\n{analysis}"
    )
