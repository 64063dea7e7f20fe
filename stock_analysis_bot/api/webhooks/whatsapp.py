"""
WhatsApp webhook handler (Meta Cloud API).
"""

from typing import Dict

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import PlainTextResponse

from ...utils.logging import get_logger
from ...utils.text import MetaTextExtractor
from ..dependencies import AppServices

logger = get_logger("webhook")


class WhatsAppWebhook:
    """Handler for WhatsApp webhook events.

    Inbound messages are acknowledged at once and processed by the
    dispatcher's workers, so Meta never waits on market data or the LLM.
    """

    def __init__(self, services: AppServices):
        self.services = services
        self.settings = services.settings
        self.router = APIRouter()
        self.text_extractor = MetaTextExtractor()

        # Meta retries deliveries; remember the last message id per sender
        self._last_msgid: Dict[str, str] = {}

        self._setup_routes()

    def _setup_routes(self):
        """Setup WhatsApp webhook routes."""

        @self.router.get("")
        async def verify_webhook(request: Request):
            """Answer Meta's subscription challenge."""
            params = request.query_params
            mode = params.get("hub.mode")
            token = params.get("hub.verify_token")
            challenge = params.get("hub.challenge", "")

            expected = self.settings.webhook_verify_token
            if mode == "subscribe" and expected and token == expected:
                logger.info("Webhook verified successfully")
                return PlainTextResponse(challenge)
            logger.warning("Webhook verification failed (mode=%s)", mode)
            return PlainTextResponse("Verification failed", status_code=status.HTTP_403_FORBIDDEN)

        @self.router.post("")
        async def receive_whatsapp_message(request: Request):
            """Handle incoming WhatsApp messages."""
            try:
                body = await request.json()
            except ValueError:
                return Response(status_code=status.HTTP_400_BAD_REQUEST)

            if not self.text_extractor.is_whatsapp_payload(body):
                logger.info("Non-WhatsApp webhook received, ignoring")
                return PlainTextResponse("OK")

            for message in self.text_extractor.extract_messages(body):
                if self._is_duplicate_message(message.sender, message.message_id):
                    logger.info("Duplicate message %s ignored", message.message_id)
                    continue
                if message.message_id:
                    self._last_msgid[message.sender] = message.message_id
                logger.info(
                    "Inbound message from %s (id=%s)", message.sender, message.message_id
                )
                self.services.dispatcher.submit(message)

            return PlainTextResponse("OK")

    def _is_duplicate_message(self, sender_id: str, msg_id: str | None) -> bool:
        """Check if message is a duplicate."""
        if not msg_id:
            return False
        return self._last_msgid.get(sender_id) == msg_id
