"""
Keyword intent router for the barbershop chat.

Routing is an ordered table of rules. Each rule has a ``when`` predicate
over the normalized input and a ``respond`` handler that produces the
replies and the next conversation context. The first rule whose
predicate holds and whose handler returns a result wins; a handler
returning None lets the remaining rules run.

The router holds no conversation state: the current context tag is
passed in and the new one is returned, so every turn can be tested
without a session.

Usage:
    router = IntentRouter()
    result = router.classify("How much for a haircut?", None, store)
    assert result.context == ContextTag.SERVICE
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from barberbot.config import settings
from barberbot.data.store import ReferenceStore
from barberbot.prompts import response_templates as t
from barberbot.schemas.chat_schema import ContextTag
from barberbot.tools.faq import find_faq_answer
from barberbot.tools.finders import find_service, find_todays_hours
from barberbot.tools.formatters import (
    format_barbers,
    format_hours,
    format_location,
    format_promotions,
    format_services,
    render_barber_detail,
)
from barberbot.utils import contains_any, normalize_input

logger = logging.getLogger(__name__)

BOOKING_KEYWORDS = ("book", "appointment", "schedule", "reserve")
HAIR_KEYWORDS = ("haircut", "cut", "hair", "trim")
PRICE_KEYWORDS = ("price", "cost", "how much", "fee", "charge", "pricing")
BARBER_KEYWORDS = ("barber", "stylist", "staff")
TODAY_KEYWORD = "today"
TODAY_HOURS_KEYWORDS = ("open", "hour", "time")
SERVICE_TOPIC_KEYWORDS = ("service", "price", "offer")
LOCATION_KEYWORDS = ("location", "address", "where", "find")
HOURS_TOPIC_KEYWORDS = ("hour", "time", "open", "close")
PROMOTION_KEYWORDS = ("promotion", "deal", "discount", "offer")
CONFIRM_KEYWORD = "yes"


@dataclass(frozen=True)
class Reply:
    """One bot message. Staged replies are shown after a follow-up pause."""
    text: str
    staged: bool = False


@dataclass(frozen=True)
class RouteResult:
    """Outcome of classifying one user turn."""
    rule: str
    replies: tuple[Reply, ...]
    context: Optional[ContextTag]
    navigate_to_booking: bool = False


@dataclass(frozen=True)
class Turn:
    """Everything a rule may look at."""
    text: str
    context: Optional[ContextTag]
    store: ReferenceStore
    now: datetime


@dataclass(frozen=True)
class Rule:
    """A single routing rule."""
    name: str
    when: Callable[[Turn], bool]
    respond: Callable[[Turn], Optional[RouteResult]]


def _reply(rule: str, text: str, context: Optional[ContextTag]) -> RouteResult:
    return RouteResult(rule=rule, replies=(Reply(text),), context=context)


def _always(turn: Turn) -> bool:
    return True


# --- Rule handlers ---

def _booking(turn: Turn) -> RouteResult:
    return RouteResult(
        rule="booking",
        replies=(Reply(t.BOOKING_OFFER), Reply(t.BOOKING_PROMPT, staged=True)),
        context=ContextTag.BOOKING,
    )


def _service_pricing(turn: Turn) -> RouteResult:
    answer = find_service(turn.store, turn.text)
    if answer is not None:
        return _reply("service_pricing", answer, ContextTag.SERVICE)
    return _reply("service_pricing", format_services(turn.store), ContextTag.SERVICES)


def _barber(turn: Turn) -> RouteResult:
    for barber in turn.store.barbers:
        if barber.name.lower() in turn.text:
            return _reply("barber", render_barber_detail(barber), ContextTag.BARBER)
    return _reply("barber", format_barbers(turn.store), ContextTag.BARBERS)


def _todays_hours(turn: Turn) -> Optional[RouteResult]:
    hours = find_todays_hours(turn.store, turn.now)
    if hours is None:
        return None
    return _reply("todays_hours", f"{t.CLOCK_MARKER} {hours}", ContextTag.HOURS)


def _faq(turn: Turn) -> Optional[RouteResult]:
    answer = find_faq_answer(turn.store, turn.text)
    if answer is None:
        return None
    return _reply("faq", answer, turn.context)


def _booking_confirmation(turn: Turn) -> RouteResult:
    return RouteResult(
        rule="booking_confirmation",
        replies=(Reply(t.BOOKING_CONFIRMATION),),
        context=turn.context,
        navigate_to_booking=True,
    )


def _fallback(turn: Turn) -> RouteResult:
    return _reply("fallback", t.OUT_OF_SCOPE, None)


def _topic(name: str, keywords: tuple[str, ...], render, context: ContextTag) -> Rule:
    return Rule(
        name=name,
        when=lambda turn: contains_any(turn.text, keywords),
        respond=lambda turn: _reply(name, render(turn), context),
    )


ROUTING_RULES: tuple[Rule, ...] = (
    Rule("booking", lambda turn: contains_any(turn.text, BOOKING_KEYWORDS), _booking),
    Rule(
        "service_pricing",
        lambda turn: contains_any(turn.text, HAIR_KEYWORDS)
        or contains_any(turn.text, PRICE_KEYWORDS),
        _service_pricing,
    ),
    Rule("barber", lambda turn: contains_any(turn.text, BARBER_KEYWORDS), _barber),
    Rule(
        "todays_hours",
        lambda turn: TODAY_KEYWORD in turn.text
        and contains_any(turn.text, TODAY_HOURS_KEYWORDS),
        _todays_hours,
    ),
    Rule("faq", _always, _faq),

    # --- General topics ---
    _topic("services_topic", SERVICE_TOPIC_KEYWORDS,
           lambda turn: format_services(turn.store), ContextTag.SERVICES),
    _topic("barbers_topic", BARBER_KEYWORDS,
           lambda turn: format_barbers(turn.store), ContextTag.BARBERS),
    _topic("location_topic", LOCATION_KEYWORDS,
           lambda turn: format_location(turn.store), ContextTag.LOCATION),
    _topic("hours_topic", HOURS_TOPIC_KEYWORDS,
           lambda turn: format_hours(turn.store), ContextTag.HOURS),
    _topic("promotions_topic", PROMOTION_KEYWORDS,
           lambda turn: format_promotions(turn.store, turn.now), ContextTag.PROMOTIONS),

    # --- Follow-ups ---
    Rule(
        "booking_confirmation",
        lambda turn: CONFIRM_KEYWORD in turn.text and turn.context == ContextTag.BOOKING,
        _booking_confirmation,
    ),
    Rule("fallback", _always, _fallback),
)


class IntentRouter:
    """Evaluates the routing table against one user turn at a time."""

    def __init__(
        self,
        rules: tuple[Rule, ...] = ROUTING_RULES,
        clear_booking_context_on_confirm: Optional[bool] = None,
    ) -> None:
        if not rules or rules[-1].name != "fallback":
            raise ValueError("Routing table must end with the fallback rule")
        self._rules = rules
        if clear_booking_context_on_confirm is None:
            clear_booking_context_on_confirm = settings.dialogue.clear_booking_context_on_confirm
        self._clear_booking_context = clear_booking_context_on_confirm

    @property
    def rule_names(self) -> list[str]:
        """Rule names in evaluation order."""
        return [rule.name for rule in self._rules]

    def classify(
        self,
        text: str,
        context: Optional[ContextTag],
        store: ReferenceStore,
        now: Optional[datetime] = None,
    ) -> RouteResult:
        """
        Route one user message.

        Args:
            text: Raw user input.
            context: Context tag left by the previous turn.
            store: Reference records to answer from.
            now: Evaluation time for today's hours and promotion expiry.

        Returns:
            The replies to show and the context for the next turn.
        """
        turn = Turn(
            text=normalize_input(text),
            context=context,
            store=store,
            now=now or datetime.now().astimezone(),
        )

        for rule in self._rules:
            if not rule.when(turn):
                continue
            result = rule.respond(turn)
            if result is None:
                logger.debug("Rule '%s' matched but had no answer, continuing", rule.name)
                continue

            if result.navigate_to_booking and self._clear_booking_context:
                result = RouteResult(
                    rule=result.rule,
                    replies=result.replies,
                    context=None,
                    navigate_to_booking=True,
                )

            logger.debug(
                "Routed by '%s' (context: %s -> %s)",
                result.rule,
                context.value if context else None,
                result.context.value if result.context else None,
            )
            return result

        raise RuntimeError("Routing table has no catch-all rule")  # unreachable with fallback


def classify(
    text: str,
    context: Optional[ContextTag],
    store: ReferenceStore,
    now: Optional[datetime] = None,
) -> RouteResult:
    """Route one message with the default routing table."""
    return IntentRouter().classify(text, context, store, now)
