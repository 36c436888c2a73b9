"""Build multiple-choice quizzes from a topic's terms."""
from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

from flashquiz.models import InsufficientTerms, Question, Quiz, Term

_log = logging.getLogger("flashquiz.qgen")

# One correct answer plus DISTRACTOR_COUNT wrong ones per question.
MIN_TERMS = 4
DISTRACTOR_COUNT = 3

T = TypeVar("T")


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int:
        """Return a uniform integer in ``[0, stop)``."""
        ...


def shuffle(items: Sequence[T], rng: RandomSource | None = None) -> list[T]:
    """Return a uniformly shuffled copy of *items* (Fisher-Yates).

    The input sequence is never modified.
    """
    if rng is None:
        rng = random.Random()
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randrange(i + 1)
        out[i], out[j] = out[j], out[i]
    return out


def _build_question(card: Term, deck: list[Term], rng: RandomSource) -> Question:
    # Exclusion is by label, so a duplicate label never shows up as a distractor.
    others = [c for c in deck if c.term != card.term]
    wrong = [c.term for c in shuffle(others, rng)[:DISTRACTOR_COUNT]]
    options = shuffle([card.term, *wrong], rng)
    return Question(definition=card.definition, correct=card.term, options=options)


def build_quiz(
    terms: Sequence[Term], rng: RandomSource | None = None,
) -> Quiz | InsufficientTerms:
    """Generate one question per term, in random order.

    Returns ``InsufficientTerms`` when fewer than ``MIN_TERMS`` terms are
    given.  Each question's options are the term's own label plus up to three
    labels drawn at random from the other terms, shuffled.  Without an
    explicit *rng* a fresh generator is created for this call, so concurrent
    callers never share random state.
    """
    if len(terms) < MIN_TERMS:
        _log.info("Quiz refused: %d terms, need %d", len(terms), MIN_TERMS)
        return InsufficientTerms(available=len(terms), required=MIN_TERMS)

    if rng is None:
        rng = random.Random()

    deck = shuffle(terms, rng)
    questions = tuple(_build_question(card, deck, rng) for card in deck)
    _log.debug("Built quiz with %d questions", len(questions))
    return Quiz(questions=questions)


def generate_quiz(terms: Sequence[Term], rng: RandomSource | None = None) -> list[Question]:
    """Like ``build_quiz`` but returns ``[]`` when there are too few terms."""
    result = build_quiz(terms, rng)
    if isinstance(result, InsufficientTerms):
        return []
    return list(result.questions)
