"""Shared test fixtures and helpers."""

from datetime import datetime
from typing import Any, Optional

import pytest

from barberbot.conversation.router import IntentRouter
from barberbot.conversation.session import DialogueSession
from barberbot.data.providers import DataUnavailableError
from barberbot.data.store import ReferenceStore

# 2024-01-07 was a Sunday
SUNDAY = datetime(2024, 1, 7, 10, 0)
MONDAY = datetime(2024, 1, 8, 10, 0)
WEDNESDAY = datetime(2024, 1, 10, 10, 0)

SERVICES = [
    {"name": "Classic Cut", "price": 25, "duration_minutes": 30, "description": "Standard haircut"},
    {"name": "Beard Trim", "price": 15, "duration_minutes": 20, "description": "Shape and line-up"},
    {"name": "Skin Fade", "price": 30, "duration_minutes": 45, "description": None},
]

BARBERS = [
    {"id": "b1", "name": "Marcus Reed", "bio": "Fade specialist", "is_active": True},
    {"id": "b2", "name": "Tony Alvarez", "bio": None, "is_active": False},
]

FAQS = [
    {"question": "Do you accept walk-ins?", "answer": "Walk-ins are welcome."},
    {"question": "Is there parking nearby?", "answer": "Free street parking on Main Street."},
]

PROMOTIONS = [
    {"title": "First Visit", "details": "20% off your first cut", "valid_until": None},
    {"title": "Winter Sale", "details": "Old deal", "valid_until": "2020-01-01T00:00:00Z"},
    {"title": "Loyalty Card", "details": None, "valid_until": "2099-12-31T00:00:00Z"},
]

LOCATIONS = [
    {"name": "EliteCuts Downtown", "address": "123 Main Street", "city": "Springfield",
     "phone": "555-1234", "email": None},
    {"name": "EliteCuts Uptown", "address": "9 High Road", "city": "Springfield"},
]

WORKING_HOURS = [
    {"day_of_week": 1, "open_time": "09:00", "close_time": "18:00", "is_closed": False},
    {"day_of_week": 0, "open_time": None, "close_time": None, "is_closed": True},
]


def make_records(**overrides: list[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    """Raw records for every collection, with per-collection overrides."""
    records = {
        "services": SERVICES,
        "barbers": BARBERS,
        "faqs": FAQS,
        "promotions": PROMOTIONS,
        "locations": LOCATIONS,
        "working_hours": WORKING_HOURS,
    }
    records.update(overrides)
    return records


def make_store(**overrides: list[dict[str, Any]]) -> ReferenceStore:
    """Helper to create a ReferenceStore with sensible defaults."""
    return ReferenceStore.from_records(**make_records(**overrides))


class FakeProvider:
    """In-memory provider; collections named in ``failing`` raise."""

    def __init__(
        self,
        records: Optional[dict[str, list[dict[str, Any]]]] = None,
        failing: tuple[str, ...] = (),
    ) -> None:
        self.records = records if records is not None else make_records()
        self.failing = failing
        self.calls: list[str] = []

    async def _fetch(self, collection: str) -> list[dict[str, Any]]:
        self.calls.append(collection)
        if collection in self.failing:
            raise DataUnavailableError(collection, "backend down")
        return self.records.get(collection, [])

    async def fetch_services(self):
        return await self._fetch("services")

    async def fetch_barbers(self):
        return await self._fetch("barbers")

    async def fetch_faqs(self):
        return await self._fetch("faqs")

    async def fetch_promotions(self):
        return await self._fetch("promotions")

    async def fetch_locations(self):
        return await self._fetch("locations")

    async def fetch_working_hours(self):
        return await self._fetch("working_hours")


class Recorder:
    """Callable that remembers its calls, for navigator/notifier hooks."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def __call__(self, *args: Any) -> None:
        self.calls.append(args)


def make_session(
    provider: Optional[FakeProvider] = None,
    typing_delay: float = 0.0,
    follow_up_delay: float = 0.0,
    navigation_delay: float = 0.0,
    **kwargs: Any,
) -> DialogueSession:
    """Helper to create a DialogueSession without artificial delays."""
    kwargs.setdefault("router", IntentRouter(clear_booking_context_on_confirm=False))
    return DialogueSession(
        provider or FakeProvider(),
        typing_delay=typing_delay,
        follow_up_delay=follow_up_delay,
        navigation_delay=navigation_delay,
        **kwargs,
    )


@pytest.fixture
def store():
    return make_store()


@pytest.fixture
def empty_store():
    return ReferenceStore()


@pytest.fixture
def router():
    return IntentRouter(clear_booking_context_on_confirm=False)
