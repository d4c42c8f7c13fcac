from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Typesense
    typesense_host: str = "localhost"
    typesense_port: Optional[int] = 443
    typesense_protocol: str = "https"
    typesense_admin_key: str = "xyz"
    typesense_timeout: float = 60.0
    typesense_import_action: str = "create"
    english_products_alias: str = "english-products-alias"
    spanish_products_alias: str = "spanish-products-alias"

    # Product event queue
    redis_url: str = "redis://redis:6379/0"
    product_queue_name: str = "product_events"
    product_queue_batch_size: int = 100
    product_queue_poll_interval: float = 10.0

    # Celery
    celery_broker_url: str = "redis://redis:6379/1"
    celery_result_backend: str = "redis://redis:6379/2"
    celery_task_serializer: str = "json"
    celery_result_serializer: str = "json"
    celery_accept_content: List[str] = ["json"]
    celery_timezone: str = "Europe/Madrid"
    celery_enable_utc: bool = True

    log_level: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
