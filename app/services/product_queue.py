"""Redis-backed queue between the product endpoint and the sync worker."""

import json
import logging
from functools import lru_cache
from typing import List

import redis

from app.core.config import settings
from app.core.exceptions import EnqueueError
from app.schemas.products import ProductEventBase

logger = logging.getLogger(__name__)


class ProductQueue:
    """
    FIFO queue of product events stored in a Redis list.

    Producers RPUSH one JSON message per event; the worker LPOPs them in
    batches.
    """

    def __init__(self, client: redis.Redis, name: str):
        self.client = client
        self.name = name

    def send(self, event: ProductEventBase) -> None:
        """
        Enqueue a validated event.

        Raises:
            EnqueueError: if Redis rejects or cannot receive the message
        """
        message = json.dumps(
            event.model_dump(mode="json", exclude_unset=True),
            ensure_ascii=False,
        )
        try:
            self.client.rpush(self.name, message)
        except redis.RedisError as e:
            logger.error(f"Error queuing product event on {self.name}: {e}")
            raise EnqueueError(str(e)) from e

    def receive_batch(self, max_size: int) -> List[str]:
        """Pop up to max_size messages, oldest first."""
        messages = self.client.lpop(self.name, max_size)
        if not messages:
            return []
        return [
            message.decode("utf-8") if isinstance(message, bytes) else message
            for message in messages
        ]

    def size(self) -> int:
        return self.client.llen(self.name)

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError as e:
            logger.warning(f"Product queue backend not reachable: {e}")
            return False


@lru_cache(maxsize=1)
def get_redis_client() -> redis.Redis:
    """One Redis client (and connection pool) per process."""
    return redis.Redis.from_url(settings.redis_url)


def close_redis_client() -> None:
    if get_redis_client.cache_info().currsize:
        client = get_redis_client()
        client.close()
        client.connection_pool.disconnect()
        get_redis_client.cache_clear()
        logger.info("Redis client closed")


def get_product_queue() -> ProductQueue:
    """Dependency that returns the queue configured in settings."""
    return ProductQueue(get_redis_client(), settings.product_queue_name)
