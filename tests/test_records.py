"""Tests for reference record and chat message models."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from barberbot.schemas.chat_schema import ChatMessage, ContextTag, Sender
from barberbot.schemas.records import Barber, Promotion, Service, WorkingHours


class TestRecords:
    def test_barber_id_coerced_to_text(self):
        assert Barber(id=7, name="Sam").id == "7"

    def test_barber_requires_name(self):
        with pytest.raises(ValidationError):
            Barber(id="1", name="")

    def test_service_rejects_negative_price(self):
        with pytest.raises(ValidationError):
            Service(name="Cut", price=-1, duration_minutes=30)

    def test_working_hours_text_day(self):
        assert WorkingHours(day_of_week="5", is_closed=True).day_of_week == 5

    def test_working_hours_out_of_range(self):
        with pytest.raises(ValidationError):
            WorkingHours(day_of_week=7)

    def test_date_only_expiry(self):
        promo = Promotion(title="Deal", valid_until="2030-05-01")
        assert promo.valid_until == datetime(2030, 5, 1)


class TestChatMessage:
    def test_ids_are_unique(self):
        first = ChatMessage(sender=Sender.USER, text="hi")
        second = ChatMessage(sender=Sender.USER, text="hi")
        assert first.id != second.id

    def test_timestamp_is_utc(self):
        message = ChatMessage(sender=Sender.BOT, text="hello")
        assert message.timestamp.utcoffset().total_seconds() == 0

    def test_message_is_frozen(self):
        message = ChatMessage(sender=Sender.BOT, text="hello")
        with pytest.raises(ValidationError):
            message.text = "changed"

    def test_context_tag_values(self):
        assert ContextTag.BOOKING == "booking"
        assert ContextTag("hours") == ContextTag.HOURS
