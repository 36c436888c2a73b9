"""Quiz and flip-card review sessions."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from flashquiz.models import InsufficientTerms, Question, Quiz, Term
from flashquiz.quiz_generator import RandomSource, build_quiz

_log = logging.getLogger("flashquiz.session")


class SessionError(Exception):
    """An operation was called out of order (e.g. next() before answering)."""


class InsufficientTermsError(Exception):
    def __init__(self, result: InsufficientTerms):
        self.result = result
        super().__init__(
            f"Not enough terms for a quiz (need at least {result.required})"
        )


class QuizSession:
    """Step through a generated quiz, one question at a time.

    The quiz itself is immutable; the session only tracks the cursor, the
    pending selection and the running score.  ``restart()`` builds a brand
    new quiz from the same terms.
    """

    def __init__(self, terms: Sequence[Term], rng: RandomSource | None = None):
        self._terms = list(terms)
        self._rng = rng
        self.quiz = self._generate()
        self.step = 0
        self.score = 0
        self.selected: str | None = None

    def _generate(self) -> Quiz:
        result = build_quiz(self._terms, self._rng)
        if isinstance(result, InsufficientTerms):
            raise InsufficientTermsError(result)
        return result

    @property
    def total(self) -> int:
        return len(self.quiz)

    @property
    def finished(self) -> bool:
        return self.step >= len(self.quiz)

    @property
    def answered(self) -> bool:
        return self.selected is not None

    @property
    def current(self) -> Question | None:
        if self.finished:
            return None
        return self.quiz[self.step]

    def select(self, option: str) -> bool:
        """Answer the current question. Returns True if *option* is correct.

        Only the first selection counts; later calls return the original
        verdict without touching the score.
        """
        q = self.current
        if q is None:
            raise SessionError("Quiz is already finished")
        if self.selected is not None:
            return self.selected == q.correct
        if option not in q.options:
            raise SessionError(f"{option!r} is not one of the options")
        self.selected = option
        correct = option == q.correct
        if correct:
            self.score += 1
        return correct

    def next(self) -> Question | None:
        if self.finished:
            raise SessionError("Quiz is already finished")
        if self.selected is None:
            raise SessionError("Answer the current question first")
        self.selected = None
        self.step += 1
        return self.current

    def restart(self) -> Question | None:
        self.quiz = self._generate()
        self.step = 0
        self.score = 0
        self.selected = None
        _log.info("Quiz restarted with %d questions", len(self.quiz))
        return self.current

    def summary(self) -> dict:
        return {
            "score": self.score,
            "total": self.total,
            "accuracy": round(self.score / max(self.total, 1) * 100, 1),
        }


class CardDeck:
    """Flip-card review: show a term, flip to its definition, move on."""

    def __init__(self, terms: Sequence[Term]):
        self.terms = list(terms)
        self.index = 0
        self.flipped = False

    @property
    def current(self) -> Term | None:
        if not self.terms:
            return None
        return self.terms[self.index]

    @property
    def position(self) -> tuple[int, int]:
        return self.index + 1, len(self.terms)

    def flip(self) -> bool:
        if self.terms:
            self.flipped = not self.flipped
        return self.flipped

    def next(self) -> Term | None:
        # Wraps around to the first card.
        if not self.terms:
            return None
        self.flipped = False
        self.index = (self.index + 1) % len(self.terms)
        return self.current
