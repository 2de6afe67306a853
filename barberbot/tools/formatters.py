"""Render reference collections into reply text."""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from barberbot.data.store import ReferenceStore
from barberbot.prompts import response_templates as t
from barberbot.schemas.records import Barber, Promotion, Service

logger = logging.getLogger(__name__)


def format_price(price: Decimal) -> str:
    """Whole amounts drop the decimals ("25"), others keep cents ("25.50")."""
    if price == price.to_integral_value():
        return str(int(price))
    return f"{price:.2f}"


def service_line(service: Service) -> str:
    return f"• {service.name} - ${format_price(service.price)} ({service.duration_minutes} mins)"


def format_services(store: ReferenceStore) -> str:
    """List every service with price, duration and description."""
    if not store.services:
        return t.SERVICES_UNAVAILABLE

    entries = [
        f"{service_line(s)}\n  {s.description or t.NO_DESCRIPTION}"
        for s in store.services
    ]
    return f"{t.SERVICES_HEADER}\n\n" + "\n\n".join(entries)


def format_barbers(store: ReferenceStore) -> str:
    """List every barber with their bio."""
    if not store.barbers:
        return t.BARBERS_UNAVAILABLE

    entries = [f"• {b.name}\n  {b.bio or t.NO_BIO}" for b in store.barbers]
    return f"{t.BARBERS_HEADER}\n\n" + "\n\n".join(entries)


def render_barber_detail(barber: Barber) -> str:
    availability = t.BARBER_AVAILABLE if barber.is_active else t.BARBER_UNAVAILABLE
    return f"👨‍💼 {barber.name}\n\n{barber.bio or t.NO_BIO}\n\n{availability}"


def format_location(store: ReferenceStore) -> str:
    """Contact details of the primary (first) location."""
    location = store.primary_location
    if location is None:
        return t.LOCATION_UNAVAILABLE

    return (
        f"{t.LOCATION_HEADER}\n\n"
        f"{location.name}\n{location.address}\n{location.city}\n\n"
        f"📱 Phone: {location.phone or t.NOT_AVAILABLE}\n"
        f"📧 Email: {location.email or t.NOT_AVAILABLE}\n\n"
        f"{t.LOCATION_FOOTER}"
    )


def format_hours(store: ReferenceStore) -> str:
    """Weekly opening hours, Sunday first."""
    if not store.working_hours:
        return t.HOURS_UNAVAILABLE

    lines = []
    for hours in sorted(store.working_hours, key=lambda h: h.day_of_week):
        day = t.DAY_NAMES[hours.day_of_week]
        if hours.is_closed:
            lines.append(f"• {day}: Closed")
        else:
            open_time = hours.open_time or t.NOT_AVAILABLE
            close_time = hours.close_time or t.NOT_AVAILABLE
            lines.append(f"• {day}: {open_time} - {close_time}")
    return f"{t.HOURS_HEADER}\n\n" + "\n".join(lines)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def format_expiry(valid_until: datetime) -> str:
    """Expiry as a local MM/DD/YYYY date."""
    return _as_utc(valid_until).astimezone().strftime("%m/%d/%Y")


def is_promotion_active(promotion: Promotion, now: Optional[datetime] = None) -> bool:
    """No expiry means always active; otherwise expiry must be in the future."""
    if promotion.valid_until is None:
        return True
    now = _as_utc(now or datetime.now(timezone.utc))
    return _as_utc(promotion.valid_until) > now


def format_promotions(store: ReferenceStore, now: Optional[datetime] = None) -> str:
    """Currently active promotions with their expiry."""
    if not store.promotions:
        return t.NO_ACTIVE_PROMOTIONS

    active = [p for p in store.promotions if is_promotion_active(p, now)]
    if not active:
        logger.debug("All %d promotions have expired", len(store.promotions))
        return t.NO_ACTIVE_PROMOTIONS

    entries = []
    for promo in active:
        if promo.valid_until is not None:
            validity = f"Valid until: {format_expiry(promo.valid_until)}"
        else:
            validity = t.NO_EXPIRATION
        entries.append(f"• {promo.title}\n  {promo.details or t.NO_DETAILS}\n  {validity}")
    return f"{t.PROMOTIONS_HEADER}\n\n" + "\n\n".join(entries)
