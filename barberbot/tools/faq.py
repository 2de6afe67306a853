"""FAQ relevance scoring."""

import logging
from typing import Optional

from barberbot.config import settings
from barberbot.data.store import ReferenceStore
from barberbot.prompts import response_templates as t
from barberbot.schemas.records import FAQ

logger = logging.getLogger(__name__)


def score_faq(
    query: str,
    faq: FAQ,
    question_weight: Optional[int] = None,
    answer_weight: Optional[int] = None,
    min_word_length: Optional[int] = None,
) -> int:
    """
    Score how well an FAQ entry matches a free-text query.

    The whole query appearing in the question or answer earns the phrase
    weights; each query word (at least ``min_word_length`` characters)
    found among the FAQ's words earns one point.
    """
    cfg = settings.matching
    question_weight = cfg.faq_question_weight if question_weight is None else question_weight
    answer_weight = cfg.faq_answer_weight if answer_weight is None else answer_weight
    min_word_length = cfg.faq_min_word_length if min_word_length is None else min_word_length

    lowered = query.lower()
    question = faq.question.lower()
    answer = faq.answer.lower()

    score = 0
    if lowered in question:
        score += question_weight
    if lowered in answer:
        score += answer_weight

    faq_words = set(question.split()) | set(answer.split())
    for word in lowered.split():
        if len(word) >= min_word_length and word in faq_words:
            score += 1
    return score


def best_faq(store: ReferenceStore, query: str) -> tuple[Optional[FAQ], int]:
    """Highest scoring FAQ; ties go to the earliest entry."""
    best: Optional[FAQ] = None
    best_score = 0
    for faq in store.faqs:
        score = score_faq(query, faq)
        if best is None or score > best_score:
            best, best_score = faq, score
    return best, best_score


def find_faq_answer(store: ReferenceStore, query: str) -> Optional[str]:
    """Marked answer of the best FAQ, or None below the confidence threshold."""
    if not query.strip():
        return None
    faq, score = best_faq(store, query)
    if faq is None or score < settings.matching.faq_min_score:
        return None
    logger.debug("FAQ matched with score %d: %r", score, faq.question)
    return f"{t.FAQ_MARKER} {faq.answer}"
