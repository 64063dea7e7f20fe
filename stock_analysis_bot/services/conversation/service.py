"""
Conversation service: one inbound text message in, one or more replies out.
"""

import time
from typing import Optional

from ...config import LanguageCatalog
from ...core.exceptions import AnalysisGenerationError, MarketDataError
from ...core.models import InboundMessage, LanguageSet, NeedsOnboarding
from ...utils.event_log import log_event
from ...utils.logging import get_logger
from ...utils.text import parse_stock_names
from ..analysis import StockAnalysisPipeline
from ..delivery import WhatsAppSender
from ..users import PreferenceResolver

logger = get_logger("conversation")


class ConversationService:
    """Route a message through the preference resolver and the analysis pipeline."""

    def __init__(
        self,
        resolver: PreferenceResolver,
        pipeline: StockAnalysisPipeline,
        sender: WhatsAppSender,
        catalog: Optional[LanguageCatalog] = None,
    ):
        self.resolver = resolver
        self.pipeline = pipeline
        self.sender = sender
        self.catalog = catalog or resolver.catalog

    async def handle_message(self, message: InboundMessage) -> None:
        user = message.sender
        logger.info(
            "Processing message from %s (%s): %r",
            user,
            message.profile_name or "Unknown",
            message.text[:100],
        )

        disposition = await self.resolver.resolve(user, message.text)

        if isinstance(disposition, LanguageSet):
            log_event("language_set", user, {"language": disposition.language.value})
            await self.sender.send_text(user, disposition.message)
            return

        if isinstance(disposition, NeedsOnboarding):
            if disposition.degraded:
                event = "preference_lookup_failed"
            elif disposition.first_contact:
                event = "new_user_joined"
            else:
                event = "onboarding_reminder_sent"
            log_event(event, user, {"language_status": "pending"})
            await self.sender.send_text(user, disposition.message)
            return

        language = disposition.language
        texts = self.catalog.texts_for(language)
        query = disposition.query_text
        if not query:
            logger.info("Empty query from %s", user)
            await self.sender.send_text(user, texts.empty_query)
            return

        await self.sender.send_text(user, texts.acknowledgement)

        stocks = parse_stock_names(query)
        log_event(
            "stock_analysis_requested",
            user,
            {
                "stocks": query,
                "stock_count": len(stocks),
                "language": language.value,
                "is_multi_stock": len(stocks) > 1,
            },
        )

        start = time.monotonic()
        try:
            reply = await self.pipeline.analyze(query, language)
        except MarketDataError as e:
            await self._fail(user, query, language.value, "api_error", e, texts.data_unavailable)
            return
        except AnalysisGenerationError as e:
            await self._fail(user, query, language.value, "openai_error", e, texts.service_unavailable)
            return
        except Exception as e:
            logger.exception("Stock analysis failed for %s", user)
            await self._fail(user, query, language.value, "unknown_error", e, texts.analysis_failed)
            return

        log_event(
            "stock_analysis_completed",
            user,
            {
                "stocks": query,
                "language": language.value,
                "response_time": round(time.monotonic() - start),
                "success": True,
            },
        )
        await self.sender.send_text(user, reply)

    async def _fail(
        self,
        user: str,
        query: str,
        language: str,
        error_type: str,
        error: Exception,
        reply: str,
    ) -> None:
        logger.error("Analysis for %s failed (%s): %s", user, error_type, error)
        log_event(
            "stock_analysis_failed",
            user,
            {
                "stocks": query,
                "language": language,
                "error_type": error_type,
                "error_message": str(error),
            },
        )
        await self.sender.send_text(user, reply)
