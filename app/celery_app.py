"""
Celery application configuration for the product search sync worker.
"""
from celery import Celery
from app.core.config import settings

# Create Celery instance
celery_app = Celery(
    "product_search_sync",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=[
        "app.tasks.product_tasks",
    ]
)

celery_app.conf.update(
    # Serialization
    task_serializer=settings.celery_task_serializer,
    result_serializer=settings.celery_result_serializer,
    accept_content=settings.celery_accept_content,

    # Timezone
    timezone=settings.celery_timezone,
    enable_utc=settings.celery_enable_utc,

    # Task execution
    task_track_started=True,
    task_time_limit=30 * 60,
    task_soft_time_limit=25 * 60,

    # One batch at a time per worker process
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,

    result_expires=7200,

    # Worker: celery -A app.celery_app worker -B -Q product_sync_queue
    task_routes={
        'app.tasks.product_tasks.*': {
            'queue': 'product_sync_queue',
        },
    },

    broker_connection_retry_on_startup=True,
)

celery_app.conf.beat_schedule = {
    'drain-product-events': {
        'task': 'app.tasks.product_tasks.drain_product_queue',
        'schedule': settings.product_queue_poll_interval,
    },
}

if __name__ == '__main__':
    celery_app.start()
