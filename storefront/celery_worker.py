"""
Ledger Worker

Celery application that drains the ledger-export queue. Redis carries both
the queue and task results.

Run:
    celery -A storefront.celery_worker worker -Q ledger --loglevel=info
"""

from celery import Celery

from storefront.core.config import get_settings

settings = get_settings()

celery_app = Celery(
    "storefront_ledger",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["storefront.tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    # One workbook, one writer
    task_default_queue=settings.ledger_queue,
    task_routes={"storefront.tasks.*": {"queue": settings.ledger_queue}},
    worker_prefetch_multiplier=1,
    worker_concurrency=1,

    # Ack once the row is written; requeue if the worker dies
    task_acks_late=True,
    task_reject_on_worker_lost=True,

    result_expires=3600,
    broker_connection_retry_on_startup=True,
)


if __name__ == "__main__":
    celery_app.start()
