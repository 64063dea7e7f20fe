"""
Service wiring, built once at process start and shared by the handlers.
"""

from dataclasses import dataclass

from ..config import ExternalAPIConfig, LanguageCatalog, Settings, default_catalog
from ..services.analysis import StockAnalysisPipeline, get_generator
from ..services.conversation import ConversationService, MessageDispatcher
from ..services.delivery import WhatsAppSender
from ..services.market_data import MarketDataService, get_extractor
from ..services.users import PreferenceResolver, UserStore


@dataclass
class AppServices:
    settings: Settings
    store: UserStore
    resolver: PreferenceResolver
    sender: WhatsAppSender
    conversation: ConversationService
    dispatcher: MessageDispatcher


def build_services(settings: Settings, catalog: LanguageCatalog | None = None) -> AppServices:
    """Construct every collaborator from ``settings``."""
    catalog = catalog or default_catalog()
    api_config = ExternalAPIConfig.from_settings(settings)

    store = UserStore(settings.users_db_path, timezone=settings.timezone)
    resolver = PreferenceResolver(store, catalog)
    sender = WhatsAppSender(
        api_config,
        max_chunk_size=settings.wa_max_message_length,
        chunk_delay=settings.wa_chunk_delay_seconds,
    )
    market_data = MarketDataService(api_config, get_extractor(settings.metrics_strategy))
    pipeline = StockAnalysisPipeline(
        market_data,
        get_generator(settings.analysis_strategy, model=settings.analysis_model),
        catalog,
        stock_delay=settings.stock_delay_seconds,
    )
    conversation = ConversationService(resolver, pipeline, sender, catalog)
    dispatcher = MessageDispatcher(
        conversation.handle_message,
        workers=settings.worker_count,
        maxsize=settings.queue_maxsize,
    )
    return AppServices(
        settings=settings,
        store=store,
        resolver=resolver,
        sender=sender,
        conversation=conversation,
        dispatcher=dispatcher,
    )
