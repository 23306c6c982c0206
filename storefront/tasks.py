"""
Ledger Export Tasks

Run by the ledger worker (``storefront.celery_worker``). The API queues one
``export_order_to_ledger`` per placed order when ledger export is enabled.
"""

import logging
import time
from datetime import datetime

from celery.utils.time import get_exponential_backoff_interval

from storefront.celery_worker import celery_app
from storefront.services.order_ledger import OrderLedger

logger = logging.getLogger(__name__)

RETRY_DELAY_SECONDS = 5
MAX_RETRY_DELAY_SECONDS = 600


def ledger_retry_delay(retries: int) -> int:
    """Seconds to wait before retry number ``retries + 1``: 5, 10, 20, ..."""
    return get_exponential_backoff_interval(
        factor=RETRY_DELAY_SECONDS, retries=retries, maximum=MAX_RETRY_DELAY_SECONDS
    )


@celery_app.task(bind=True, max_retries=3, default_retry_delay=RETRY_DELAY_SECONDS)
def export_order_to_ledger(self, order_data: dict) -> dict:
    """
    Append a placed order to the Excel ledger.

    A lock timeout is retried with backoff; any other failure is reported
    in the result and not retried.

    Args:
        order_data: Flattened order (see ``ledger_row_source``)
    """
    task_id = self.request.id
    order_id = order_data.get("order_id", "unknown")
    started = time.time()

    logger.info(f"📋 Task {task_id}: exporting Order #{order_id}")
    result = OrderLedger.export_order(order_data)

    if result.get("retryable"):
        countdown = ledger_retry_delay(self.request.retries or 0)
        logger.warning(f"Task {task_id}: ledger busy, retrying Order #{order_id} in {countdown}s")
        raise self.retry(countdown=countdown)

    elapsed = round(time.time() - started, 3)
    result["task_id"] = task_id
    result["processing_time_seconds"] = elapsed

    if result["success"]:
        logger.info(f"✅ Task {task_id}: Order #{order_id} in ledger after {elapsed}s")
    else:
        logger.error(f"❌ Task {task_id}: Order #{order_id} not exported: {result['message']}")

    return result


@celery_app.task
def clear_ledger() -> dict:
    """Delete the ledger workbook, e.g. before a simulation run."""
    cleared = OrderLedger.clear_all()
    return {
        "success": cleared,
        "message": "Ledger cleared" if cleared else "Could not clear ledger",
        "timestamp": datetime.now().isoformat(),
    }
