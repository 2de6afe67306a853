"""Lookups that locate reference records from partial text."""

import logging
import re
from datetime import datetime
from typing import Optional

from barberbot.data.store import ReferenceStore
from barberbot.prompts import response_templates as t
from barberbot.schemas.records import Barber, Service
from barberbot.tools.formatters import format_price, render_barber_detail, service_line
from barberbot.utils import normalize_input

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"[a-z0-9]+")

# Words that carry no service meaning when a question is split into terms
SERVICE_QUERY_STOPWORDS = frozenset({
    "how", "much", "what", "whats", "your", "are", "the", "for", "you",
    "does", "can", "get", "want", "need", "would", "like", "please",
    "about", "there", "have", "this", "that", "with", "and", "any", "is",
    "price", "prices", "pricing", "cost", "costs", "fee", "fees",
    "charge", "charges", "tell", "know", "give", "some", "kind",
})


def _service_contains(service: Service, term: str) -> bool:
    if term in service.name.lower():
        return True
    return bool(service.description) and term in service.description.lower()


def match_services(store: ReferenceStore, query: str) -> list[Service]:
    """
    Services whose name or description contains the query.

    The full query is tried first. When it matches nothing, each content
    word of the query (longer than two characters, not a filler word) is
    tried on its own so "How much for a haircut?" still finds haircuts.
    """
    normalized = normalize_input(query)
    if not normalized or not store.services:
        return []

    matches = [s for s in store.services if _service_contains(s, normalized)]
    if matches:
        return matches

    terms = [
        word for word in _WORD_RE.findall(normalized)
        if len(word) > 2 and word not in SERVICE_QUERY_STOPWORDS
    ]
    if not terms:
        return []
    return [s for s in store.services if any(_service_contains(s, term) for term in terms)]


def find_service(store: ReferenceStore, query: str) -> Optional[str]:
    """
    Answer a service question.

    Returns:
        None when nothing matches, a detailed answer for a single match,
        or a bullet list (one line per service) for several matches.
    """
    matches = match_services(store, query)
    if not matches:
        return None

    if len(matches) == 1:
        service = matches[0]
        return t.SINGLE_SERVICE.format(
            name=service.name,
            price=format_price(service.price),
            duration=service.duration_minutes,
            description=service.description or "",
        )

    logger.debug("Query %r matched %d services", query, len(matches))
    return f"{t.MULTIPLE_SERVICES_HEADER}\n\n" + "\n".join(service_line(s) for s in matches)


def find_barber(
    store: ReferenceStore,
    barber_id: Optional[str] = None,
    name: Optional[str] = None,
) -> Optional[Barber]:
    """Exact lookup by id, else first barber whose name contains ``name``."""
    if barber_id:
        return next((b for b in store.barbers if b.id == barber_id), None)
    if name:
        normalized = normalize_input(name)
        return next((b for b in store.barbers if normalized in b.name.lower()), None)
    return None


def format_barber_detail(store: ReferenceStore, name: str) -> str:
    """Describe the first barber whose name contains ``name``."""
    barber = find_barber(store, name=name)
    if barber is None:
        return t.BARBER_NOT_FOUND.format(name=name)
    return render_barber_detail(barber)


def weekday_index(moment: datetime) -> int:
    """Day index with Sunday as 0, matching the working-hours records."""
    return (moment.weekday() + 1) % 7


def find_todays_hours(store: ReferenceStore, now: Optional[datetime] = None) -> Optional[str]:
    """Opening hours for the current local weekday, or None if unknown."""
    today = weekday_index(now or datetime.now())
    hours = next((h for h in store.working_hours if h.day_of_week == today), None)
    if hours is None:
        return None
    if hours.is_closed:
        return t.CLOSED_TODAY
    return t.OPEN_TODAY.format(
        open_time=hours.open_time or t.NOT_AVAILABLE,
        close_time=hours.close_time or t.NOT_AVAILABLE,
    )
