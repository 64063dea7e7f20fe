"""
WhatsApp sender for the Meta Cloud API.
"""

import asyncio
from typing import Optional, Sequence

import httpx

from ...config import ExternalAPIConfig
from ...core.exceptions import WhatsAppAPIError
from ...utils.logging import get_logger
from .segmenter import segment

logger = get_logger("delivery")


def _message_id(resp: httpx.Response) -> str:
    """Id of the accepted message, or "" when the body does not carry one."""
    try:
        body = resp.json()
    except ValueError:
        logger.warning("WhatsApp accepted the message but returned a non-JSON body")
        return ""
    messages = body.get("messages") if isinstance(body, dict) else None
    if isinstance(messages, list) and messages and isinstance(messages[0], dict):
        return str(messages[0].get("id", ""))
    return ""


class WhatsAppSender:
    """Send text messages, one API call per part, strictly in order."""

    def __init__(
        self,
        api_config: ExternalAPIConfig,
        max_chunk_size: int = 1500,
        chunk_delay: float = 1.0,
        retries: int = 3,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_config = api_config
        self.max_chunk_size = max_chunk_size
        self.chunk_delay = chunk_delay
        self.retries = retries
        self._client = client

    async def _post(self, client: httpx.AsyncClient, to: str, text: str) -> str:
        url = self.api_config.get_whatsapp_messages_url()
        payload = {
            "messaging_product": "whatsapp",
            "to": to,
            "type": "text",
            "text": {"body": text},
        }
        backoff = 1
        last_error = "unknown error"
        for attempt in range(1, self.retries + 1):
            try:
                resp = await client.post(
                    url, json=payload, headers=self.api_config.get_whatsapp_headers()
                )
            except httpx.RequestError as e:
                logger.warning("WhatsApp send failed on attempt %d: %s", attempt, e)
                last_error = str(e)
            else:
                if 200 <= resp.status_code < 300:
                    return _message_id(resp)
                logger.error(
                    "WhatsApp send failed: status=%s body=%s",
                    resp.status_code,
                    resp.text[:200],
                )
                last_error = f"HTTP {resp.status_code}"
                if not (resp.status_code == 429 or resp.status_code >= 500):
                    break
            if attempt < self.retries:
                await asyncio.sleep(backoff)
                backoff *= 2
        raise WhatsAppAPIError(f"Failed to send message to {to}: {last_error}")

    async def send_chunks(self, to: str, chunks: Sequence[str]) -> int:
        """Send already-segmented ``chunks`` sequentially; returns parts sent."""
        if not self.api_config.is_whatsapp_configured():
            logger.warning("Skipping WhatsApp send: Meta API not configured")
            return 0

        client = self._client or httpx.AsyncClient(timeout=self.api_config.wa_timeout)
        try:
            for i, chunk in enumerate(chunks):
                message_id = await self._post(client, to, chunk)
                logger.info(
                    "Sent part %d/%d to %s (%d chars, id=%s)",
                    i + 1,
                    len(chunks),
                    to,
                    len(chunk),
                    message_id,
                )
                if i < len(chunks) - 1 and self.chunk_delay > 0:
                    await asyncio.sleep(self.chunk_delay)
        finally:
            if self._client is None:
                await client.aclose()
        return len(chunks)

    async def send_text(self, to: str, body: str) -> int:
        """Segment ``body`` and send every part to ``to``."""
        parts = segment(body, self.max_chunk_size)
        if len(parts) > 1:
            logger.info(
                "Message over limit (%d chars), sending %d parts", len(body), len(parts)
            )
        return await self.send_chunks(to, parts)
