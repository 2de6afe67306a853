"""
Reference data providers.

The chat engine reads six record collections through the provider
protocol below. ``JsonFileProvider`` serves a local JSON document for
development and the console demo; ``SupabaseProvider`` reads the same
tables from a Supabase (PostgREST) backend over HTTP.

Every provider failure is raised as ``DataUnavailableError`` so the
reference store can treat that one collection as empty.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol

import httpx

from barberbot.config import AppConfig, settings

logger = logging.getLogger(__name__)

SAMPLE_DATA_PATH = Path(__file__).with_name("sample_data.json")

# Collection name -> backend table name
COLLECTION_TABLES: dict[str, str] = {
    "services": "services",
    "barbers": "barbers",
    "faqs": "faqs",
    "promotions": "promotions",
    "locations": "locations",
    "working_hours": "working_hours",
}


class DataUnavailableError(Exception):
    """Raised when a reference collection cannot be fetched."""

    def __init__(self, collection: str, reason: str) -> None:
        super().__init__(f"Collection '{collection}' unavailable: {reason}")
        self.collection = collection
        self.reason = reason


class DataProvider(Protocol):
    """Read-only source of reference records."""

    async def fetch_services(self) -> list[dict[str, Any]]: ...

    async def fetch_barbers(self) -> list[dict[str, Any]]: ...

    async def fetch_faqs(self) -> list[dict[str, Any]]: ...

    async def fetch_promotions(self) -> list[dict[str, Any]]: ...

    async def fetch_locations(self) -> list[dict[str, Any]]: ...

    async def fetch_working_hours(self) -> list[dict[str, Any]]: ...


class _CollectionProvider:
    """Maps the six fetch methods onto a single ``_fetch(collection)``."""

    async def _fetch(self, collection: str) -> list[dict[str, Any]]:
        raise NotImplementedError

    async def fetch_services(self) -> list[dict[str, Any]]:
        return await self._fetch("services")

    async def fetch_barbers(self) -> list[dict[str, Any]]:
        return await self._fetch("barbers")

    async def fetch_faqs(self) -> list[dict[str, Any]]:
        return await self._fetch("faqs")

    async def fetch_promotions(self) -> list[dict[str, Any]]:
        return await self._fetch("promotions")

    async def fetch_locations(self) -> list[dict[str, Any]]:
        return await self._fetch("locations")

    async def fetch_working_hours(self) -> list[dict[str, Any]]:
        return await self._fetch("working_hours")


class JsonFileProvider(_CollectionProvider):
    """Serves collections from a JSON object keyed by collection name."""

    def __init__(self, path: Optional[Path | str] = None) -> None:
        self._path = Path(path) if path else SAMPLE_DATA_PATH

    @property
    def path(self) -> Path:
        return self._path

    async def _fetch(self, collection: str) -> list[dict[str, Any]]:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError) as e:
            raise DataUnavailableError(collection, str(e)) from e

        if not isinstance(document, dict) or collection not in document:
            raise DataUnavailableError(collection, f"missing from {self._path.name}")

        records = document[collection]
        if not isinstance(records, list):
            raise DataUnavailableError(collection, "expected a list of records")
        return records


class SupabaseProvider(_CollectionProvider):
    """Reads collections from Supabase's PostgREST endpoint."""

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }

    async def _fetch(self, collection: str) -> list[dict[str, Any]]:
        url = f"{self._base_url}/rest/v1/{COLLECTION_TABLES[collection]}"
        try:
            response = await self._client.get(
                url, params={"select": "*"}, headers=self._headers
            )
            response.raise_for_status()
            records = response.json()
        except httpx.HTTPError as e:
            logger.warning("Supabase fetch failed for %s: %s", collection, e)
            raise DataUnavailableError(collection, str(e)) from e
        except ValueError as e:
            raise DataUnavailableError(collection, "response was not JSON") from e

        if not isinstance(records, list):
            raise DataUnavailableError(collection, "expected a list of records")
        return records

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()


def build_provider(config: AppConfig = settings) -> DataProvider:
    """Create the provider selected by ``DATA_SOURCE``."""
    if config.data.source == "supabase":
        logger.info("Using Supabase reference data at %s", config.data.supabase_url)
        return SupabaseProvider(
            config.data.supabase_url,
            config.data.supabase_key,
            timeout=config.data.request_timeout_sec,
        )
    provider = JsonFileProvider(config.data.path or None)
    logger.info("Using JSON reference data from %s", provider.path)
    return provider
