"""
Celery tasks that drain the product event queue into Typesense.
"""
import logging
from typing import Any, Dict, List

import redis

from app.celery_app import celery_app
from app.core.config import settings
from app.services.product_queue import get_product_queue
from app.services.product_sync import ProductBatchSynchronizer
from app.services.typesense import TypesenseClient

logger = logging.getLogger(__name__)


def run_batch_sync(messages: List[Any]) -> Dict[str, Any]:
    """Sincroniza un lote con un cliente de Typesense nuevo y lo cierra al acabar."""
    client = TypesenseClient.from_settings()
    try:
        report = ProductBatchSynchronizer(client).handle(messages)
    finally:
        client.session.close()
    return report.to_dict()


@celery_app.task(
    bind=True,
    name="app.tasks.product_tasks.sync_product_batch"
)
def sync_product_batch(self, messages: List[Any]) -> Dict[str, Any]:
    """
    Sync one batch of queued product events to Typesense.

    Args:
        messages: Raw message bodies (JSON strings or dicts)

    Returns:
        Dict with the batch report
    """
    logger.info(f"Task {self.name} [{self.request.id}] syncing {len(messages)} product events")
    return run_batch_sync(messages)


@celery_app.task(
    bind=True,
    name="app.tasks.product_tasks.drain_product_queue"
)
def drain_product_queue(self) -> Dict[str, Any]:
    """
    Pop one batch from the product queue and sync it.
    Runs periodically from beat (configured in celery_app.py) and schedules
    itself again while it keeps finding full batches.

    Returns:
        Dict with the batch report
    """
    batch_size = settings.product_queue_batch_size
    queue = get_product_queue()

    try:
        messages = queue.receive_batch(batch_size)
    except redis.RedisError as e:
        logger.error(f"Error reading product queue {queue.name}: {e}")
        return {"success": False, "received": 0, "errors": [str(e)]}

    if not messages:
        return {"success": True, "received": 0}

    logger.info(f"Draining {len(messages)} product events from {queue.name}")
    report = run_batch_sync(messages)

    if len(messages) >= batch_size:
        drain_product_queue.apply_async()

    return report
