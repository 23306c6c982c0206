"""
Catalog Store

Serves the restaurant catalog from a JSON file on disk. The file is re-read
on every request so edits show up without a restart; a missing or malformed
file surfaces as ``CatalogUnavailableError`` for the API layer to report.

Usage:
    from storefront.services.catalog_store import get_catalog_store

    restaurants = get_catalog_store().load()
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Union

from pydantic import TypeAdapter, ValidationError

from storefront.core.config import get_settings
from storefront.schemas import RestaurantRecord

logger = logging.getLogger(__name__)

_catalog_adapter = TypeAdapter(list[RestaurantRecord])


class CatalogUnavailableError(Exception):
    """The catalog file is missing, unreadable or not a valid catalog."""


class CatalogStore:
    """
    File-backed restaurant catalog.

    Attributes:
        path: Location of the JSON catalog file
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> list[RestaurantRecord]:
        """
        Read and validate the catalog file.

        Returns:
            list[RestaurantRecord]: Restaurants in file order

        Raises:
            CatalogUnavailableError: If the file cannot be read or validated
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Cannot read catalog {self.path}: {e}")
            raise CatalogUnavailableError(str(e)) from e

        try:
            restaurants = _catalog_adapter.validate_python(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Invalid catalog {self.path}: {e}")
            raise CatalogUnavailableError(str(e)) from e

        logger.debug(f"Loaded {len(restaurants)} restaurants from {self.path}")
        return restaurants

    def health_check(self) -> bool:
        """Check that the catalog file can be served."""
        try:
            self.load()
        except CatalogUnavailableError:
            return False
        return True


@lru_cache()
def get_catalog_store() -> CatalogStore:
    """Get the configured catalog store instance."""
    settings = get_settings()
    logger.info(f"Catalog Store: {settings.catalog_file}")
    return CatalogStore(settings.catalog_file)


def reset_catalog_store() -> None:
    """
    Clear the cached catalog store instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_catalog_store.cache_clear()
