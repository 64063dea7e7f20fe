import pytest
from pydantic import ValidationError

from stock_analysis_bot.config import ExternalAPIConfig, Settings
from stock_analysis_bot.core.enums import LanguagePreference


def test_external_config_from_settings():
    settings = Settings(
        meta_phone_number_id="12345",
        meta_access_token="token",
        rapidapi_key="key",
        market_data_base_url="https://stocks.test/",
    )

    config = ExternalAPIConfig.from_settings(settings)

    assert config.get_whatsapp_messages_url() == "https://graph.facebook.com/v22.0/12345/messages"
    assert config.get_whatsapp_headers()["Authorization"] == "Bearer token"
    assert config.get_stock_url() == "https://stocks.test/stock"
    assert config.is_whatsapp_configured()
    assert config.is_market_data_configured()
    assert not config.is_openai_configured()


def test_unconfigured_whatsapp_has_no_url():
    config = ExternalAPIConfig()
    assert config.get_whatsapp_messages_url() is None
    assert not config.is_whatsapp_configured()


def test_message_length_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(wa_max_message_length=0)


def test_catalog_commands(catalog):
    assert catalog.match_command("eng") is LanguagePreference.ENGLISH
    assert catalog.match_command("gujarati") is LanguagePreference.GUJARATI
    assert catalog.match_command("tamil") is None
    assert catalog.match_command("") is None


def test_catalog_texts_fall_back_to_default_language(catalog):
    assert catalog.texts_for(LanguagePreference.PENDING) == catalog.texts_for(LanguagePreference.HINDI)
    assert "{stock}" in catalog.texts_for(LanguagePreference.ENGLISH).not_found
