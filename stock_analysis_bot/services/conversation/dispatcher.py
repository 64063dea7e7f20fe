"""
Background processing of inbound messages.

The webhook acknowledges Meta immediately and hands each message to the
dispatcher. Messages from the same sender always land on the same worker, so
one user's replies are produced in the order the messages arrived.
"""

import asyncio
import zlib
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

from ...core.models import InboundMessage
from ...utils.logging import get_logger

logger = get_logger("dispatcher")

MessageHandler = Callable[[InboundMessage], Awaitable[None]]


@dataclass
class DispatcherStats:
    submitted: int = 0
    processed: int = 0
    failed: int = 0
    rejected: int = 0
    pending: int = 0


class MessageDispatcher:
    """Per-sender ordered worker pool with completion and failure counters."""

    def __init__(self, handler: MessageHandler, workers: int = 2, maxsize: int = 1000):
        if workers <= 0:
            raise ValueError("workers must be positive")
        self.handler = handler
        self._queues: List[asyncio.Queue] = [
            asyncio.Queue(maxsize=maxsize) for _ in range(workers)
        ]
        self._tasks: List[asyncio.Task] = []
        self._stats = DispatcherStats()

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._tasks)

    def _queue_for(self, sender: str) -> asyncio.Queue:
        return self._queues[zlib.crc32(sender.encode("utf-8")) % len(self._queues)]

    async def start(self) -> None:
        if self.running:
            return
        self._tasks = [
            asyncio.create_task(self._worker(i, q), name=f"dispatcher-{i}")
            for i, q in enumerate(self._queues)
        ]
        logger.info("Dispatcher started with %d workers", len(self._tasks))

    async def stop(self, drain: bool = True, timeout: Optional[float] = 30.0) -> None:
        """Stop the workers, optionally waiting for queued messages first."""
        if drain and self.running:
            try:
                await asyncio.wait_for(self.join(), timeout)
            except asyncio.TimeoutError:
                logger.warning("Dispatcher drain timed out; %d messages dropped", self.stats().pending)
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        logger.info("Dispatcher stopped")

    def submit(self, message: InboundMessage) -> bool:
        """Queue ``message``; returns False when the sender's queue is full."""
        try:
            self._queue_for(message.sender).put_nowait(message)
        except asyncio.QueueFull:
            self._stats.rejected += 1
            logger.error("Dispatcher queue full, dropping message %s", message.message_id)
            return False
        self._stats.submitted += 1
        return True

    async def join(self) -> None:
        """Wait until every queued message has been handled."""
        for queue in self._queues:
            await queue.join()

    def stats(self) -> DispatcherStats:
        self._stats.pending = sum(q.qsize() for q in self._queues)
        return DispatcherStats(**vars(self._stats))

    async def _worker(self, index: int, queue: asyncio.Queue) -> None:
        while True:
            message = await queue.get()
            try:
                await self.handler(message)
                self._stats.processed += 1
            except Exception:
                self._stats.failed += 1
                logger.exception(
                    "Worker %d failed to handle message %s from %s",
                    index,
                    message.message_id,
                    message.sender,
                )
            finally:
                queue.task_done()
