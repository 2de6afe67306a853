"""
Reference store: the per-session snapshot of business records.

The snapshot is loaded once when a chat session starts and never
refreshed mid-session. A collection that fails to load is served as
empty so the formatters can fall back to their apology text.

Usage:
    store = await load_reference_store(JsonFileProvider(), notify=toast)
    if "services" in store.unavailable:
        ...
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from barberbot.data.providers import DataProvider, DataUnavailableError
from barberbot.schemas.records import (
    FAQ,
    Barber,
    Location,
    Promotion,
    Service,
    WorkingHours,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

LOAD_FAILED_TITLE = "Failed to load chatbot data"
LOAD_FAILED_DESCRIPTION = "Please try again later"

# Collection name -> (record model, provider method name)
COLLECTIONS: dict[str, tuple[type[BaseModel], str]] = {
    "services": (Service, "fetch_services"),
    "barbers": (Barber, "fetch_barbers"),
    "faqs": (FAQ, "fetch_faqs"),
    "promotions": (Promotion, "fetch_promotions"),
    "locations": (Location, "fetch_locations"),
    "working_hours": (WorkingHours, "fetch_working_hours"),
}


@dataclass(frozen=True)
class ReferenceStore:
    """Immutable snapshot of every reference collection."""

    services: tuple[Service, ...] = ()
    barbers: tuple[Barber, ...] = ()
    faqs: tuple[FAQ, ...] = ()
    promotions: tuple[Promotion, ...] = ()
    locations: tuple[Location, ...] = ()
    working_hours: tuple[WorkingHours, ...] = ()
    unavailable: frozenset[str] = field(default_factory=frozenset)

    @property
    def primary_location(self) -> Optional[Location]:
        """The first location is treated as the shop's only location."""
        return self.locations[0] if self.locations else None

    @classmethod
    def from_records(cls, **collections: Iterable[dict[str, Any]]) -> "ReferenceStore":
        """Build a snapshot from raw provider dicts, skipping invalid records."""
        unknown = set(collections) - set(COLLECTIONS)
        if unknown:
            raise KeyError(f"Unknown collections: {sorted(unknown)}")
        parsed = {
            name: _parse_records(name, COLLECTIONS[name][0], raw)
            for name, raw in collections.items()
        }
        return cls(**parsed)


def _parse_records(
    collection: str, model: type[RecordT], raw_records: Iterable[dict[str, Any]]
) -> tuple[RecordT, ...]:
    records = []
    for position, raw in enumerate(raw_records):
        try:
            records.append(model.model_validate(raw))
        except ValidationError as e:
            first = e.errors()[0]
            logger.warning(
                "Skipping malformed %s record at position %d (%s): %s",
                collection, position, ".".join(str(p) for p in first["loc"]), first["msg"],
            )
    return tuple(records)


async def load_reference_store(
    provider: DataProvider,
    notify: Optional[Callable[[str, str], None]] = None,
) -> ReferenceStore:
    """
    Fetch all six collections into one snapshot.

    Args:
        provider: Source of raw records.
        notify: Optional ``notify(title, description)`` callback, called
            once if any collection failed to load.

    Returns:
        A ReferenceStore whose ``unavailable`` set names every collection
        that was replaced by an empty tuple.
    """
    parsed: dict[str, tuple] = {}
    unavailable: set[str] = set()

    for name, (model, method_name) in COLLECTIONS.items():
        fetch = getattr(provider, method_name)
        try:
            parsed[name] = _parse_records(name, model, await fetch())
        except DataUnavailableError as e:
            logger.error("Reference data unavailable: %s", e)
            unavailable.add(name)
            parsed[name] = ()
        except Exception:
            logger.exception("Unexpected error loading %s", name)
            unavailable.add(name)
            parsed[name] = ()

    store = ReferenceStore(**parsed, unavailable=frozenset(unavailable))
    logger.info(
        "Reference store loaded: %s",
        ", ".join(f"{name}={len(getattr(store, name))}" for name in COLLECTIONS),
    )

    if unavailable and notify is not None:
        notify(LOAD_FAILED_TITLE, LOAD_FAILED_DESCRIPTION)
    return store
