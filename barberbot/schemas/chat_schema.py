"""Chat transcript schemas."""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    USER = "user"
    BOT = "bot"


class ContextTag(str, Enum):
    """Most recent topic of the conversation. ``None`` stands for no context."""
    BOOKING = "booking"
    SERVICE = "service"
    SERVICES = "services"
    BARBER = "barber"
    BARBERS = "barbers"
    LOCATION = "location"
    HOURS = "hours"
    PROMOTIONS = "promotions"


def _new_message_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    """A single immutable message in the transcript."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_message_id)
    sender: Sender
    text: str
    timestamp: datetime = Field(default_factory=_utcnow)


class ChatTranscript(BaseModel):
    """Export of one session's conversation for a presentation layer."""

    session_id: str
    exported_at: datetime = Field(default_factory=_utcnow)
    context: Optional[ContextTag] = None
    is_composing: bool = False
    is_ready: bool = False
    messages: list[ChatMessage] = Field(default_factory=list)
