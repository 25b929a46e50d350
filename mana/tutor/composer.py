"""Response composer — the character's rule-based replies and questions.

Picks replies and questions from the template pools in tutor/templates.py.
The random source is injected so that tests can seed it and assert the
exact template chosen; nothing else about composition is random.

Consumed by:
- TutorService — the fallback path for replies and questions, and the
  canned "trouble right now" texts
"""

from __future__ import annotations

import logging
import random
import re
from collections.abc import Sequence

from mana.schemas import ConversationMessage
from mana.tutor.templates import TemplateSet, templates_for
from mana.tutor.topics import difficulty_for, require_topic

logger = logging.getLogger(__name__)

# Runs of kana/kanji, or runs of Latin letters — one token per script run.
_TOKEN_PATTERN = re.compile(r"[ぁ-んァ-ヶー一-龠]+|[A-Za-z]+")

_STOPWORDS = frozenset({
    "a", "an", "and", "are", "can", "do", "does", "for", "how", "i", "in",
    "is", "it", "me", "my", "of", "on", "the", "this", "to", "what", "with",
    "you",
})

# Number of recent assistant messages checked for repetition.
RECENT_QUESTION_WINDOW = 3
SIMILARITY_THRESHOLD = 2


def tokenize(text: str) -> set[str]:
    """Splits text into keyword tokens on script boundaries.

    Single-character tokens and common English function words are dropped.
    """
    tokens = set()
    for match in _TOKEN_PATTERN.findall(text):
        token = match.lower()
        if len(token) > 1 and token not in _STOPWORDS:
            tokens.add(token)
    return tokens


def is_similar(first: str, second: str) -> bool:
    """True when two texts share more than two keyword tokens."""
    return len(tokenize(first) & tokenize(second)) > SIMILARITY_THRESHOLD


def _recent_assistant(history: Sequence[ConversationMessage]) -> list[str]:
    recent = [m.content for m in history if m.is_assistant]
    return recent[-RECENT_QUESTION_WINDOW:]


def _unused(pool: Sequence[str], history: Sequence[ConversationMessage]) -> Sequence[str]:
    """Pool entries that did not open a recent character message (or the whole pool)."""
    recent = _recent_assistant(history)
    fresh = [entry for entry in pool if not any(text.startswith(entry) for text in recent)]
    return fresh or pool


class ResponseComposer:
    """Builds replies and questions from fixed template pools.

    Args:
        language: Template language ("ja" or "en"; unknown falls back to "ja").
        rng: Random source used for every template choice. Defaults to a
            fresh unseeded random.Random.
    """

    def __init__(self, language: str = "ja", rng: random.Random | None = None) -> None:
        self._templates: TemplateSet = templates_for(language)
        self._rng = rng if rng is not None else random.Random()

    @property
    def language(self) -> str:
        return self._templates.language

    def compose(
        self,
        quality: str,
        topic: str,
        recent_history: Sequence[ConversationMessage] = (),
    ) -> str:
        """Composes a reply to an evaluated answer.

        Good and excellent answers share the positive pool; average answers
        get encouragement, poor ones confusion. A topic comment is appended
        unless the answer was poor. Replies that opened one of the last
        three character messages are skipped while the pool has others.
        """
        require_topic(topic)
        t = self._templates
        if quality in ("excellent", "good"):
            pool = t.positive
        elif quality == "poor":
            pool = t.confused
        else:
            pool = t.encouraging

        reply = self._rng.choice(_unused(pool, recent_history))
        if quality == "poor":
            return reply

        comment = self._rng.choice(t.topic_comments[topic])
        return f"{reply} {comment}"

    def compose_question(
        self,
        topic: str,
        understanding: int,
        recent_history: Sequence[ConversationMessage] = (),
    ) -> str:
        """Picks a question matching the topic and understanding tier.

        If the chosen question resembles one of the last three questions the
        character asked, a "let's try a different angle" phrase is prepended.
        """
        require_topic(topic)
        difficulty = difficulty_for(understanding)
        question = self._rng.choice(self._templates.questions[topic][difficulty])

        recent = _recent_assistant(recent_history)
        if any(is_similar(question, previous) for previous in recent):
            variation = self._rng.choice(self._templates.variations)
            question = f"{variation} {question}"

        logger.debug("Composed %s question for %s", difficulty, topic)
        return question

    def fallback_reply(self) -> str:
        """The canned reply used when evaluation cannot proceed at all."""
        return self._templates.fallback_reply

    def fallback_question(self) -> str:
        """The canned open question used when question composition fails."""
        return self._templates.fallback_question
