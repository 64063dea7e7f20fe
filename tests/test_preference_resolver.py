import sqlite3

import pytest

from stock_analysis_bot.core.enums import DispositionKind, LanguagePreference
from stock_analysis_bot.core.exceptions import PersistenceUnavailable
from stock_analysis_bot.core.models import LanguageSet, NeedsOnboarding, Ready
from stock_analysis_bot.services.users import PreferenceResolver


@pytest.mark.asyncio
async def test_last_language_command_wins(resolver, user_store):
    first = await resolver.resolve("919800000001", "english")
    second = await resolver.resolve("919800000001", "hindi")

    assert first.kind is DispositionKind.LANGUAGE_SET
    assert second.kind is DispositionKind.LANGUAGE_SET
    assert second.language is LanguagePreference.HINDI

    user = await user_store.get_user("919800000001")
    assert user.language_preference is LanguagePreference.HINDI
    assert user.message_count == 2


@pytest.mark.asyncio
async def test_new_user_is_asked_for_language(resolver, user_store, catalog):
    result = await resolver.resolve("919800000001", "TCS")

    assert isinstance(result, NeedsOnboarding)
    assert result.message == catalog.onboarding_prompt
    assert result.first_contact is True
    assert result.degraded is False

    user = await user_store.get_user("919800000001")
    assert user.language_preference is LanguagePreference.PENDING
    assert user.message_count == 1


@pytest.mark.asyncio
async def test_ready_carries_trimmed_query(resolver):
    await resolver.resolve("919800000001", "english")

    result = await resolver.resolve("919800000001", "  Reliance TCS \n")

    assert result == Ready(language=LanguagePreference.ENGLISH, query_text="Reliance TCS")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "message,language",
    [
        ("English", LanguagePreference.ENGLISH),
        ("  ENG ", LanguagePreference.ENGLISH),
        ("Hin", LanguagePreference.HINDI),
        ("GUJARATI", LanguagePreference.GUJARATI),
        ("guj", LanguagePreference.GUJARATI),
    ],
)
async def test_commands_are_case_insensitive(resolver, catalog, message, language):
    result = await resolver.resolve("919800000001", message)

    assert isinstance(result, LanguageSet)
    assert result.language is language
    assert result.message == catalog.texts_for(language).confirmation


@pytest.mark.asyncio
async def test_command_word_inside_sentence_is_a_query(resolver):
    await resolver.resolve("919800000001", "gujarati")

    result = await resolver.resolve("919800000001", "english please")

    assert isinstance(result, Ready)
    assert result.language is LanguagePreference.GUJARATI
    assert result.query_text == "english please"


@pytest.mark.asyncio
async def test_empty_message_from_known_user_is_ready_with_empty_query(resolver):
    await resolver.resolve("919800000001", "hindi")

    result = await resolver.resolve("919800000001", "   ")

    assert result == Ready(language=LanguagePreference.HINDI, query_text="")


@pytest.mark.asyncio
async def test_store_failure_falls_back_to_onboarding(user_store, catalog, monkeypatch):
    async def broken_upsert(identifier, language=None):
        raise PersistenceUnavailable("disk I/O error")

    monkeypatch.setattr(user_store, "upsert_user", broken_upsert)
    resolver = PreferenceResolver(user_store, catalog)

    result = await resolver.resolve("919800000001", "english")

    assert isinstance(result, NeedsOnboarding)
    assert result.message == catalog.fallback_prompt
    assert result.degraded is True


def test_dispositions_carry_only_their_fields():
    assert not hasattr(NeedsOnboarding(message="hi"), "query_text")
    assert not hasattr(LanguageSet(language=LanguagePreference.HINDI, message="ok"), "query_text")
    with pytest.raises(AttributeError):
        Ready(language=LanguagePreference.HINDI, query_text="TCS").query_text = "INFY"


@pytest.mark.asyncio
async def test_pending_user_is_reminded_not_first_contact(resolver):
    await resolver.resolve("919800000001", "TCS")

    result = await resolver.resolve("919800000001", "INFY")

    assert isinstance(result, NeedsOnboarding)
    assert result.first_contact is False


@pytest.mark.asyncio
async def test_unreadable_stored_row_falls_back_to_onboarding(resolver, user_store, catalog):
    await user_store.initialize()
    conn = sqlite3.connect(user_store.db_path)
    with conn:
        conn.execute(
            "INSERT INTO users VALUES (?, ?, ?, ?, ?)",
            ("42", "english", "garbage", "garbage", 3),
        )
    conn.close()

    result = await resolver.resolve("42", "TCS")

    assert isinstance(result, NeedsOnboarding)
    assert result.message == catalog.fallback_prompt
    assert result.degraded is True
