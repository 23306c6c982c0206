"""
Order Ledger with Concurrency Control

Appends placed orders to an Excel workbook for back-office use. Several
Celery workers may export at once, so every read-modify-write of the
workbook happens under a file lock.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd
from filelock import FileLock, Timeout

from storefront.core.config import get_settings

logger = logging.getLogger(__name__)


class OrderLedger:
    """Process- and thread-safe Excel ledger of placed orders."""

    ORDER_COLUMNS = [
        "order_id",
        "date_time",
        "customer_name",
        "phone",
        "address",
        "payment",
        "items",
        "item_count",
        "subtotal",
        "delivery_fee",
        "total",
        "exported_at",
    ]

    @staticmethod
    def ledger_path() -> Path:
        return get_settings().ledger_path

    @classmethod
    def lock_path(cls) -> Path:
        path = cls.ledger_path()
        return path.with_name(path.name + ".lock")

    @classmethod
    def _ensure_data_dir(cls) -> None:
        """Create data directory if needed."""
        data_dir = cls.ledger_path().parent
        if not data_dir.exists():
            data_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created data directory: {data_dir}")

    @classmethod
    def _load_or_create_df(cls, file_path: Path) -> pd.DataFrame:
        """Existing ledger rows, or an empty frame for a new ledger.

        An unreadable workbook raises rather than being replaced.
        """
        if file_path.exists():
            return pd.read_excel(file_path, engine="openpyxl")
        return pd.DataFrame(columns=cls.ORDER_COLUMNS)

    @classmethod
    def export_order(cls, order_data: dict[str, Any]) -> dict[str, Any]:
        """
        Append one order to the ledger.

        Args:
            order_data: Order fields as produced by ``ledger_row_source``

        Returns:
            dict with ``success``, ``message``, ``order_id`` and ``exported_at``;
            ``retryable`` is set when the lock could not be taken in time
        """
        cls._ensure_data_dir()

        order_id = order_data.get("order_id", "unknown")
        result = {
            "success": False,
            "message": "",
            "order_id": order_id,
            "exported_at": None,
        }
        timeout = get_settings().ledger_lock_timeout

        try:
            lock = FileLock(str(cls.lock_path()), timeout=timeout)

            with lock:
                logger.debug(f"Lock acquired for Order #{order_id}")

                ledger_file = cls.ledger_path()
                df = cls._load_or_create_df(ledger_file)

                items = order_data.get("items") or []
                export_time = datetime.now().isoformat()
                new_row = {
                    "order_id": order_id,
                    "date_time": order_data.get("created_at", export_time),
                    "customer_name": order_data.get("customer_name"),
                    "phone": order_data.get("phone"),
                    "address": order_data.get("address"),
                    "payment": order_data.get("payment"),
                    "items": json.dumps(items, ensure_ascii=False),
                    "item_count": sum(item.get("qty", 0) for item in items),
                    "subtotal": order_data.get("subtotal"),
                    "delivery_fee": order_data.get("delivery_fee"),
                    "total": order_data.get("total"),
                    "exported_at": export_time,
                }

                if df.empty:
                    df = pd.DataFrame([new_row], columns=cls.ORDER_COLUMNS)
                else:
                    df = pd.concat([df, pd.DataFrame([new_row])], ignore_index=True)
                df.to_excel(str(ledger_file), index=False, engine="openpyxl")

                logger.info(f"Order #{order_id} exported to ledger")

                result["success"] = True
                result["message"] = f"Order #{order_id} exported"
                result["exported_at"] = export_time

            logger.debug(f"Lock released for Order #{order_id}")

        except Timeout:
            result["message"] = f"Lock timeout ({timeout}s)"
            result["retryable"] = True
            logger.warning(f"Lock timeout for Order #{order_id}")

        except Exception as e:
            result["message"] = str(e)
            logger.exception(f"Error exporting Order #{order_id}")

        return result

    @classmethod
    def get_all_orders(cls) -> list[dict[str, Any]]:
        """Get all ledger rows."""
        ledger_file = cls.ledger_path()
        if not ledger_file.exists():
            return []

        try:
            df = pd.read_excel(ledger_file, engine="openpyxl")
            return df.to_dict("records")
        except Exception as e:
            logger.error(f"Error reading ledger: {e}")
            return []

    @classmethod
    def clear_all(cls) -> bool:
        """Delete the ledger and its lock file."""
        try:
            for f in [cls.ledger_path(), cls.lock_path()]:
                if f.exists():
                    f.unlink()
            logger.info("Order ledger cleared")
            return True
        except OSError as e:
            logger.error(f"Error clearing ledger: {e}")
            return False


def ledger_row_source(order) -> dict[str, Any]:
    """Flatten an ``Order`` ORM row into the task payload."""
    return {
        "order_id": order.id,
        "created_at": order.created_at.isoformat(),
        "customer_name": order.customer_name,
        "phone": order.phone,
        "address": order.address,
        "payment": order.payment_method,
        "items": order.item_list,
        "subtotal": order.subtotal,
        "delivery_fee": order.delivery_fee,
        "total": order.total_amount,
    }
