"""OrderUpdatesQueue — Redis list feeding the order-indexing pipeline."""
import json
import logging
from collections.abc import Awaitable, Callable, Sequence

import redis.asyncio as aioredis

from src.ob_common.redis_client import get_redis
from src.ob_notify.domain.events import OrderChangedEvent

logger = logging.getLogger(__name__)


class OrderUpdatesQueue:
    """Concrete OrderNotifierProtocol: one RPUSH per batch, one message per order.

    Errors propagate; the trigger is redelivered upstream and reprocessing
    is idempotent.
    """

    def __init__(
        self,
        queue_name: str,
        redis_factory: Callable[[], Awaitable[aioredis.Redis]] = get_redis,
    ) -> None:
        self._queue_name = queue_name
        self._redis_factory = redis_factory

    async def publish(self, events: Sequence[OrderChangedEvent]) -> None:
        if not events:
            return
        redis = await self._redis_factory()
        messages = [json.dumps(e.to_message()) for e in events]
        await redis.rpush(self._queue_name, *messages)
        logger.info("Queued %d order updates on %s", len(messages), self._queue_name)
