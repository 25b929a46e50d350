"""Analysis of AI-written replies.

When the model writes Mana's reaction, the answer quality and the new mood
are read back out of that reaction by keyword, so the AI path and the
rule-based path feed the same progression rules.

Usage:
    from mana.ai.reply_analysis import analyze_reply_quality, mood_from_reply
    quality = analyze_reply_quality(reply, user_answer)
    mood = mood_from_reply(reply)
"""

from __future__ import annotations

from mana.tutor.heuristics import contains_any, count_matches
from mana.tutor.lexicon import lexicons_for

LONG_ANSWER_CHARS = 100


def _count(reply: str, attr: str, language: str | None) -> int:
    return sum(count_matches(reply, getattr(lex, attr)) for lex in lexicons_for(language))


def _mentions(reply: str, attr: str, language: str | None) -> bool:
    return any(contains_any(reply, getattr(lex, attr)) for lex in lexicons_for(language))


def reply_score(reply: str, answer: str, language: str | None = None) -> int:
    """Scores a reply: praise and encouragement add, repeated confusion subtracts."""
    positive = _count(reply, "reply_positive", language)
    encouraging = _count(reply, "reply_encouraging", language)
    confused = _count(reply, "reply_confused", language)

    score = 0
    if positive >= 2:
        score += 3
    elif positive >= 1:
        score += 2
    if encouraging >= 1:
        score += 1
    if confused >= 2:
        score -= 2
    if len(answer) > LONG_ANSWER_CHARS:
        score += 1
    return score


def analyze_reply_quality(reply: str, answer: str, language: str | None = None) -> str:
    """Maps an AI reply (and the answer it reacts to) to an AnswerQuality."""
    score = reply_score(reply, answer, language)
    if score >= 4:
        return "excellent"
    if score >= 2:
        return "good"
    if score >= 0:
        return "average"
    return "poor"


def mood_from_reply(reply: str, language: str | None = None) -> str:
    """Reads the character's mood from a reply: excited > confused > happy > curious."""
    if _mentions(reply, "mood_excited", language):
        return "excited"
    if _mentions(reply, "mood_confused", language):
        return "confused"
    if _mentions(reply, "mood_happy", language):
        return "happy"
    return "curious"
