import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

# Settings are cached and the engine is built at import time, so the
# environment has to point at scratch locations before storefront loads.
_TMP = Path(tempfile.mkdtemp(prefix="storefront-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP / 'orders.db'}"
os.environ["DATA_DIRECTORY"] = str(_TMP / "data")
os.environ["LEDGER_EXPORT_ENABLED"] = "false"
os.environ["API_BASE_URL"] = "http://testserver"
os.environ.pop("CATALOG_FILE", None)
os.environ.pop("DELIVERY_FEE", None)

from storefront.client.catalog import build_catalog  # noqa: E402
from storefront.core.config import get_settings  # noqa: E402

get_settings.cache_clear()


SAMPLE_RECORDS = [
    {
        "_id": "r1",
        "name": "Reddys Kitchen",
        "cuisine": "Indian",
        "rating": 4.6,
        "time": "30 mins",
        "image": "https://example.com/r1.jpg",
        "emoji": "🍛",
        "menu": [
            {"name": "Chicken Biryani", "price": 240, "veg": False, "category": "Biryani"},
            {"name": "Veg Biryani", "price": 180, "veg": True, "category": "Biryani"},
            {"name": "Paneer Tikka", "price": 200, "veg": True},
            {"name": "Gulab Jamun", "price": 80, "veg": True, "category": "Dessert"},
        ],
    },
    {
        "_id": "r2",
        "name": "Shoel Biriyani",
        "cuisine": "Arabian",
        "rating": 4.5,
        "time": "32 mins",
        "menu": [
            {"name": "Mandi Special", "price": 420, "veg": False, "category": "Mandi"},
            {"name": "Chicken Shawarma", "price": 150, "veg": False},
            {"name": "Mutton Mandi", "price": 560, "veg": False, "category": "Mandi"},
            {"name": "Grilled Wings", "price": 260, "veg": False},
        ],
    },
    {
        "_id": "r3",
        "name": "Slice Theory",
        "cuisine": "Italian",
        "rating": 4.3,
        "time": "25 mins",
        "menu": [
            {"name": "Margherita Pizza", "price": 299, "veg": True, "category": "Pizza"},
            {"name": "Pepperoni Pizza", "price": 379, "veg": False, "category": "Pizza"},
        ],
    },
]


@pytest.fixture()
def sample_records():
    return [dict(record, menu=[dict(item) for item in record["menu"]]) for record in SAMPLE_RECORDS]


@pytest.fixture()
def catalog(sample_records):
    return build_catalog(sample_records)


@pytest.fixture()
def tmp_data_dir(tmp_path, monkeypatch):
    """Point the order ledger at a fresh directory."""
    monkeypatch.setenv("DATA_DIRECTORY", str(tmp_path))
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()
