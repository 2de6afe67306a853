"""Tests for FAQ relevance scoring."""

from barberbot.prompts import response_templates as t
from barberbot.schemas.records import FAQ
from barberbot.tools.faq import best_faq, find_faq_answer, score_faq
from tests.conftest import make_store


class TestScoreFaq:
    def test_question_phrase_match(self):
        faq = FAQ(question="Do you accept walk-ins?", answer="Sure.")
        # phrase (+10) plus "accept"; "walk-ins?" keeps its question mark
        assert score_faq("accept walk-ins", faq) == 10 + 1

    def test_answer_phrase_match(self):
        faq = FAQ(question="Parking?", answer="Free street parking nearby.")
        assert score_faq("street parking", faq) == 5 + 2

    def test_word_matches_ignore_short_words(self):
        faq = FAQ(question="Do you take cards?", answer="We take all cards.")
        assert score_faq("do we take it", faq) == 1

    def test_word_match_is_not_stemmed(self):
        faq = FAQ(question="Do you take card payments?", answer="Yes.")
        assert score_faq("cards", faq) == 0

    def test_case_insensitive(self):
        faq = FAQ(question="Is There Parking?", answer="Yes.")
        assert score_faq("IS THERE PARKING", faq) == 10 + 1

    def test_deterministic(self):
        faq = FAQ(question="Do you sell gift cards?", answer="We sell gift cards in store.")
        assert score_faq("gift cards", faq) == score_faq("gift cards", faq)

    def test_full_query_in_question_adds_at_least_ten(self):
        query = "can i bring my dog"
        plain = FAQ(question="Are pets allowed?", answer="Dogs are welcome.")
        boosted = FAQ(question=f"Are pets allowed? {query}", answer="Dogs are welcome.")
        assert score_faq(query, boosted) - score_faq(query, plain) >= 10


class TestFindFaqAnswer:
    def test_returns_marked_answer(self, store):
        answer = find_faq_answer(store, "is there parking nearby?")
        assert answer == f"{t.FAQ_MARKER} Free street parking on Main Street."

    def test_below_threshold_returns_none(self, store):
        assert find_faq_answer(store, "tell me a joke") is None

    def test_empty_faqs_returns_none(self, empty_store):
        assert find_faq_answer(empty_store, "is there parking nearby?") is None

    def test_blank_query_returns_none(self, store):
        assert find_faq_answer(store, "   ") is None

    def test_ties_go_to_first_entry(self):
        store = make_store(faqs=[
            {"question": "Gift cards?", "answer": "First answer."},
            {"question": "Gift cards?", "answer": "Second answer."},
        ])
        faq, score = best_faq(store, "gift cards?")
        assert faq.answer == "First answer."
        assert find_faq_answer(store, "gift cards?") == f"{t.FAQ_MARKER} First answer."
