"""Tests for service, barber and today's-hours lookups."""

from datetime import datetime

from barberbot.prompts import response_templates as t
from barberbot.tools.finders import (
    find_barber,
    find_service,
    find_todays_hours,
    match_services,
    weekday_index,
)
from tests.conftest import MONDAY, SUNDAY, WEDNESDAY, make_store


class TestFindService:
    def test_single_match_is_detailed(self, store):
        text = find_service(store, "beard")
        assert "Beard Trim" in text
        assert "$15" in text
        assert "20 minutes" in text
        assert "book an appointment" in text

    def test_matches_description(self, store):
        text = find_service(store, "standard")
        assert "Classic Cut" in text

    def test_case_insensitive(self, store):
        assert find_service(store, "SKIN FADE") is not None

    def test_no_match_returns_none(self, store):
        assert find_service(store, "massage") is None

    def test_empty_store_returns_none(self, empty_store):
        assert find_service(empty_store, "cut") is None

    def test_multiple_matches_one_bullet_each(self, store):
        text = find_service(store, "cut or trim")
        assert text.startswith(t.MULTIPLE_SERVICES_HEADER)
        bullets = [line for line in text.splitlines() if line.startswith("• ")]
        assert len(bullets) == 2
        assert "• Classic Cut - $25 (30 mins)" in bullets

    def test_bullet_count_equals_match_count(self, store):
        matches = match_services(store, "a")
        text = find_service(store, "a")
        bullets = [line for line in text.splitlines() if line.startswith("• ")]
        assert len(bullets) == len(matches) == 3

    def test_question_words_fall_back_to_content_terms(self):
        store = make_store(services=[
            {"name": "Classic Cut", "price": 25, "duration_minutes": 30,
             "description": "Standard haircut"},
        ])
        text = find_service(store, "How much for a haircut?")
        assert "$25" in text
        assert "30 minutes" in text

    def test_filler_words_alone_do_not_match(self, store):
        assert find_service(store, "what are your prices?") is None

    def test_full_query_preferred_over_terms(self, store):
        assert [s.name for s in match_services(store, "classic cut")] == ["Classic Cut"]


class TestFindBarber:
    def test_by_id(self, store):
        assert find_barber(store, barber_id="b2").name == "Tony Alvarez"

    def test_id_takes_precedence_over_name(self, store):
        assert find_barber(store, barber_id="b1", name="tony").name == "Marcus Reed"

    def test_unknown_id(self, store):
        assert find_barber(store, barber_id="nope") is None

    def test_partial_name_case_insensitive(self, store):
        assert find_barber(store, name="REED").id == "b1"

    def test_first_hit_wins(self):
        store = make_store(barbers=[
            {"id": "1", "name": "Sam Cole"},
            {"id": "2", "name": "Sam Price"},
        ])
        assert find_barber(store, name="sam").id == "1"

    def test_no_arguments(self, store):
        assert find_barber(store) is None


class TestTodaysHours:
    def test_weekday_index_sunday_is_zero(self):
        assert weekday_index(SUNDAY) == 0
        assert weekday_index(datetime(2024, 1, 13)) == 6

    def test_open_today(self, store):
        assert find_todays_hours(store, MONDAY) == "We're open today from 09:00 to 18:00."

    def test_closed_today(self, store):
        assert find_todays_hours(store, SUNDAY) == t.CLOSED_TODAY

    def test_no_entry_returns_none(self, store):
        assert find_todays_hours(store, WEDNESDAY) is None

    def test_first_entry_for_day_wins(self):
        store = make_store(working_hours=[
            {"day_of_week": 1, "open_time": "08:00", "close_time": "12:00"},
            {"day_of_week": "1", "is_closed": True},
        ])
        assert "08:00" in find_todays_hours(store, MONDAY)
