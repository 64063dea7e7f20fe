"""
Recognised language commands and the canned replies for each language.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import LanguagePreference


class LanguageTexts(BaseModel):
    """Canned texts for one reply language."""

    model_config = ConfigDict(frozen=True)

    tokens: List[str]
    confirmation: str
    acknowledgement: str
    empty_query: str
    not_found: str  # formatted with {stock}
    disclaimer: str
    analysis_failed: str
    data_unavailable: str
    service_unavailable: str
    translation_failed: str


class LanguageCatalog(BaseModel):
    """All language commands known to the bot plus the onboarding prompts."""

    model_config = ConfigDict(frozen=True)

    languages: Dict[LanguagePreference, LanguageTexts]
    onboarding_prompt: str
    fallback_prompt: str
    default_language: LanguagePreference = LanguagePreference.HINDI

    def match_command(self, normalized: str) -> Optional[LanguagePreference]:
        """Whole-message match of an already lower-cased, trimmed message."""
        for language, texts in self.languages.items():
            if normalized in (token.lower() for token in texts.tokens):
                return language
        return None

    def texts_for(self, language: LanguagePreference) -> LanguageTexts:
        """Texts for ``language``; PENDING and unknown use the default language."""
        texts = self.languages.get(language)
        if texts is None:
            texts = self.languages[self.default_language]
        return texts


ENGLISH_TEXTS = LanguageTexts(
    tokens=["english", "eng"],
    confirmation="Language set to English! Send any stock name for analysis.",
    acknowledgement="📊 Analyzing stocks... Please wait 30 seconds",
    empty_query="Please send a stock name. Example: TCS or Reliance",
    not_found="❌ {stock}: Stock not found. Please check the name.",
    disclaimer="⚠️ This is information only, not investment advice.",
    analysis_failed="Analysis failed. Please try again later.",
    data_unavailable="Unable to fetch stock data. Please try again later.",
    service_unavailable="Analysis service is experiencing issues. Please try again later.",
    translation_failed="Analysis could not be prepared. Please try again later.",
)

HINDI_TEXTS = LanguageTexts(
    tokens=["hindi", "hin"],
    confirmation="भाषा हिंदी सेट कर दी गई! विश्लेषण के लिए कोई भी स्टॉक का नाम भेजें।",
    acknowledgement="📊 विश्लेषण कर रहे हैं... कृपया 30 सेकंड रुकें",
    empty_query="कृपया स्टॉक का नाम भेजें। जैसे: TCS या Reliance",
    not_found="❌ {stock}: स्टॉक नहीं मिला। सही नाम लिखें।",
    disclaimer="⚠️ यह सिर्फ जानकारी है, निवेश सलाह नहीं है।",
    analysis_failed="विश्लेषण में समस्या हुई। कृपया बाद में कोशिश करें।",
    data_unavailable="स्टॉक डेटा प्राप्त करने में समस्या हुई। कृपया बाद में कोशिश करें।",
    service_unavailable="विश्लेषण सेवा में समस्या है। कृपया बाद में कोशिश करें।",
    translation_failed="विश्लेषण अनुवाद में त्रुटि हुई। कृपया बाद में कोशिश करें।",
)

GUJARATI_TEXTS = LanguageTexts(
    tokens=["gujarati", "guj"],
    confirmation="ભાષા ગુજરાતી સેટ કરવામાં આવી! વિશ્લેષણ માટે કોઈપણ સ્ટોકનું નામ મોકલો.",
    acknowledgement="📊 વિશ્લેષણ કરી રહ્યા છીએ... કૃપા કરીને 30 સેકન્ડ રાહ જુઓ",
    empty_query="કૃપા કરીને સ્ટોકનું નામ મોકલો. ઉદાહરણ: TCS અથવા Reliance",
    not_found="❌ {stock}: સ્ટોક મળ્યો નથી. સાચું નામ લખો.",
    disclaimer="⚠️ આ માત્ર માહિતી છે, રોકાણ સલાહ નથી.",
    analysis_failed="વિશ્લેષણમાં સમસ્યા આવી. કૃપા કરીને પછીથી પ્રયાસ કરો.",
    data_unavailable="સ્ટોક ડેટા મેળવવામાં સમસ્યા આવી. કૃપા કરીને પછીથી પ્રયાસ કરો.",
    service_unavailable="વિશ્લેષણ સેવામાં સમસ્યા છે. કૃપા કરીને પછીથી પ્રયાસ કરો.",
    translation_failed="વિશ્લેષણ અનુવાદમાં ભૂલ આવી. કૃપા કરીને પછીથી પ્રયાસ કરો.",
)

ONBOARDING_PROMPT = (
    "Welcome! Please choose your language:\n\n"
    'Send "English" for English\n'
    'Send "Hindi" for हिंदी\n'
    'Send "Gujarati" for ગુજરાતી\n\n'
    '"English" भेजें अंग्रेजी के लिए\n'
    '"Hindi" भेजें हिंदी के लिए\n'
    '"Gujarati" મોકલો ગુજરાતી માટે'
)

FALLBACK_PROMPT = "Welcome! Please choose your language: English, Hindi or Gujarati"


def default_catalog() -> LanguageCatalog:
    return LanguageCatalog(
        languages={
            LanguagePreference.ENGLISH: ENGLISH_TEXTS,
            LanguagePreference.HINDI: HINDI_TEXTS,
            LanguagePreference.GUJARATI: GUJARATI_TEXTS,
        },
        onboarding_prompt=ONBOARDING_PROMPT,
        fallback_prompt=FALLBACK_PROMPT,
    )
