"""
Decide how an inbound message is handled given the sender's language preference.
"""

from typing import Optional

from ...config import LanguageCatalog, default_catalog
from ...core.exceptions import PersistenceUnavailable
from ...core.models import Disposition, LanguageSet, NeedsOnboarding, Ready
from ...utils.logging import get_logger
from .store import UserStore

logger = get_logger("users.resolver")


class PreferenceResolver:
    """Turn ``(identifier, message)`` into a :data:`Disposition`.

    Each call performs exactly one create-or-update of the user record before
    branching, so activity is counted for every disposition. Concurrent calls
    for the same identifier rely on the store's atomic upsert.
    """

    def __init__(self, store: UserStore, catalog: Optional[LanguageCatalog] = None):
        self.store = store
        self.catalog = catalog or default_catalog()

    async def resolve(self, identifier: str, raw_message: str) -> Disposition:
        text = (raw_message or "").strip()
        command = self.catalog.match_command(text.lower())

        try:
            user = await self.store.upsert_user(identifier, language=command)
        except PersistenceUnavailable:
            logger.exception("Preference lookup failed for %s", identifier)
            return NeedsOnboarding(message=self.catalog.fallback_prompt, degraded=True)

        if command is not None:
            logger.info("Language command processed for %s: %s", identifier, command.value)
            return LanguageSet(
                language=command,
                message=self.catalog.texts_for(command).confirmation,
            )

        if not user.language_preference.is_selected:
            logger.info("User %s has no language yet, asking for preference", identifier)
            return NeedsOnboarding(
                message=self.catalog.onboarding_prompt,
                first_contact=user.message_count == 1,
            )

        return Ready(language=user.language_preference, query_text=text)
