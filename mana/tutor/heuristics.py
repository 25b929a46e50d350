"""Text heuristics — rule-based quality classification of free-text answers.

Scores an explanation from independent signals (length, topic vocabulary,
examples, step structure, politeness/clarity) and maps the score to an
AnswerQuality. Pure and deterministic: no randomness, no I/O.

Usage:
    from mana.tutor.heuristics import classify
    classify("まず、両辺から3を引きます。例えば…", "algebra")  # "good"
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache

from mana.tutor.lexicon import Lexicon, lexicons_for
from mana.tutor.topics import require_topic

_LATIN_WORDS = re.compile(r"^[A-Za-z' ]+$")

EXCELLENT_FROM = 6
GOOD_FROM = 4
AVERAGE_FROM = 2


@dataclass(frozen=True)
class HeuristicScore:
    """Per-signal breakdown of one classification."""

    word_count: int
    length_points: int
    has_keywords: bool
    has_examples: bool
    has_steps: bool
    is_polite_or_clear: bool

    @property
    def total(self) -> int:
        return (
            self.length_points
            + (2 if self.has_keywords else 0)
            + (1 if self.has_examples else 0)
            + (1 if self.has_steps else 0)
            + (1 if self.is_polite_or_clear else 0)
        )

    @property
    def quality(self) -> str:
        return quality_for_score(self.total)


@lru_cache(maxsize=512)
def _word_pattern(phrase: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(phrase)}\b", re.IGNORECASE)


def contains_any(text: str, phrases: Iterable[str]) -> bool:
    """Checks whether any phrase occurs in the text.

    Latin-only phrases match case-insensitively on word boundaries so that
    "term" does not fire inside "determine"; all other phrases (CJK,
    numbering like "1.", bullets) match as plain substrings.
    """
    lowered = text.lower()
    for phrase in phrases:
        if _LATIN_WORDS.match(phrase):
            if _word_pattern(phrase).search(text):
                return True
        elif phrase.lower() in lowered:
            return True
    return False


def count_matches(text: str, phrases: Iterable[str]) -> int:
    """Counts how many distinct phrases occur in the text."""
    return sum(1 for phrase in phrases if contains_any(text, (phrase,)))


def word_count(text: str) -> int:
    """Counts whitespace-separated words; empty or blank text has none."""
    stripped = text.strip()
    if not stripped:
        return 0
    return len(stripped.split())


def quality_for_score(score: int) -> str:
    """Maps a heuristic score to an AnswerQuality."""
    if score >= EXCELLENT_FROM:
        return "excellent"
    if score >= GOOD_FROM:
        return "good"
    if score >= AVERAGE_FROM:
        return "average"
    return "poor"


def _any_lexicon(
    text: str, lexicons: tuple[Lexicon, ...], attr: str
) -> bool:
    return any(contains_any(text, getattr(lex, attr)) for lex in lexicons)


def score_answer(
    answer_text: str, topic: str, language: str | None = None
) -> HeuristicScore:
    """Scores an answer and returns the per-signal breakdown.

    Args:
        answer_text: The user's free-text explanation.
        topic: One of the four catalogue topics.
        language: Restrict keyword matching to one language; None consults
            every configured lexicon.

    Raises:
        UnknownTopicError: If the topic is not in the catalogue.
    """
    require_topic(topic)
    lexicons = lexicons_for(language)

    words = word_count(answer_text)
    if words > 50:
        length_points = 2
    elif words > 20:
        length_points = 1
    else:
        length_points = 0

    has_keywords = any(
        contains_any(answer_text, lex.topic_keywords.get(topic, ()))
        for lex in lexicons
    )

    return HeuristicScore(
        word_count=words,
        length_points=length_points,
        has_keywords=has_keywords,
        has_examples=_any_lexicon(answer_text, lexicons, "example_markers"),
        has_steps=_any_lexicon(answer_text, lexicons, "step_markers"),
        is_polite_or_clear=(
            _any_lexicon(answer_text, lexicons, "polite_markers")
            or _any_lexicon(answer_text, lexicons, "clarity_markers")
        ),
    )


def classify(answer_text: str, topic: str, language: str | None = None) -> str:
    """Classifies an answer's quality: poor, average, good or excellent."""
    return score_answer(answer_text, topic, language).quality
