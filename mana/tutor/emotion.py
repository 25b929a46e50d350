"""Learner emotion and learning-state analysis, and the character's response to it.

Three keyword/threshold heuristics in the style of the rest of the tutor
core:

- analyze_emotion() reads the primary emotion from one learner message
  (keyword hits plus punctuation weights) and suggests a reply style.
- analyze_learning_state() rates comprehension and engagement over the
  learner's recent answers.
- personalize_behavior() adjusts the character's mood, reply style and
  encouragement from trust, emotion and recent performance.

Keyword lists live in tutor/lexicon.py. Pure and deterministic.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from mana.schemas import (
    QUALITY_ORDER,
    TOPICS,
    CharacterBehavior,
    CharacterRelationship,
    ConversationMessage,
    EmotionAnalysis,
    LearningState,
    MotivationIndicators,
    ResponseSuggestions,
)
from mana.tutor.heuristics import count_matches, score_answer
from mana.tutor.lexicon import lexicons_for

# Score order doubles as the tie-break order.
EMOTIONS = ("confused", "frustrated", "confident", "curious", "excited")

SHORT_MESSAGE_BELOW = 10
SHORT_MESSAGE_WEIGHT = 0.5
QUESTION_CURIOUS_WEIGHT = 0.3
QUESTION_CONFUSED_WEIGHT = 0.2
EXCLAMATION_WEIGHT = 0.3
FULL_CONFIDENCE_SCORE = 3

# Number of recent learner answers the learning state and behaviour read.
RECENT_ANSWERS = 5

_QUESTION_MARKS = re.compile(r"[?？]")
_EXCLAMATIONS = re.compile(r"[!！]")

_INDICATORS: dict[str, dict[str, tuple[str, ...]]] = {
    "ja": {
        "confused": ("質問が多い", "不確実な表現"),
        "frustrated": ("短い回答", "否定的な語彙"),
        "confident": ("断定的な回答", "詳細な説明"),
        "curious": ("疑問詞の使用", "追加質問"),
        "excited": ("感嘆符の多用", "ポジティブな語彙"),
    },
    "en": {
        "confused": ("many questions", "uncertain wording"),
        "frustrated": ("short answer", "negative wording"),
        "confident": ("assertive answer", "detailed explanation"),
        "curious": ("question words", "follow-up questions"),
        "excited": ("frequent exclamation marks", "positive wording"),
    },
}

_SUGGESTIONS: dict[str, ResponseSuggestions] = {
    "confused": ResponseSuggestions(
        response_style="explanatory", tone_adjustment="gentler", content_adjustment="simplify"
    ),
    "frustrated": ResponseSuggestions(
        response_style="encouraging", tone_adjustment="gentler", content_adjustment="simplify"
    ),
    "confident": ResponseSuggestions(
        response_style="challenging",
        tone_adjustment="maintain",
        content_adjustment="increase_complexity",
    ),
    "curious": ResponseSuggestions(
        response_style="explanatory",
        tone_adjustment="more_energetic",
        content_adjustment="maintain",
    ),
    "excited": ResponseSuggestions(
        response_style="encouraging",
        tone_adjustment="more_energetic",
        content_adjustment="maintain",
    ),
    "neutral": ResponseSuggestions(
        response_style="supportive", tone_adjustment="maintain", content_adjustment="maintain"
    ),
}

_GREETINGS = {
    "ja": "今日も一緒に数学を頑張ろう！",
    "en": "Let's keep working on math together today!",
}
GREETING_AFTER_MESSAGES = 20


# ---------------------------------------------------------------------------
# Emotion
# ---------------------------------------------------------------------------


def emotion_scores(message: str) -> dict[str, float]:
    """Raw per-emotion scores for one message.

    One point per matching keyword across every lexicon, plus: +0.5
    frustrated for messages under 10 characters, +0.3 curious and +0.2
    confused per question mark, and +0.3 excited per exclamation mark once
    there are at least two.
    """
    scores = dict.fromkeys(EMOTIONS, 0.0)
    for lex in lexicons_for():
        for emotion in EMOTIONS:
            scores[emotion] += count_matches(message, lex.emotion_keywords.get(emotion, ()))

    if len(message) < SHORT_MESSAGE_BELOW:
        scores["frustrated"] += SHORT_MESSAGE_WEIGHT

    questions = len(_QUESTION_MARKS.findall(message))
    scores["curious"] += questions * QUESTION_CURIOUS_WEIGHT
    scores["confused"] += questions * QUESTION_CONFUSED_WEIGHT

    exclamations = len(_EXCLAMATIONS.findall(message))
    if exclamations > 1:
        scores["excited"] += exclamations * EXCLAMATION_WEIGHT
    return scores


def analyze_emotion(message: str, language: str = "ja") -> EmotionAnalysis:
    """Reads the primary emotion from a learner message.

    The highest score wins, ties going to EMOTIONS order. A blank message,
    or one where nothing scores, is neutral with zero confidence.
    """
    if not message.strip():
        emotion, confidence = "neutral", 0.0
    else:
        scores = emotion_scores(message)
        best = max(scores.values())
        if best <= 0:
            emotion, confidence = "neutral", 0.0
        else:
            emotion = next(e for e in EMOTIONS if scores[e] == best)
            confidence = min(best / FULL_CONFIDENCE_SCORE, 1.0)

    indicators = _INDICATORS.get(language, _INDICATORS["ja"]).get(emotion, ())
    return EmotionAnalysis(
        primary_emotion=emotion,
        confidence=confidence,
        indicators=list(indicators),
        suggestions=_SUGGESTIONS[emotion],
    )


# ---------------------------------------------------------------------------
# Learning state
# ---------------------------------------------------------------------------


def answer_scores(messages: Sequence[ConversationMessage]) -> list[float]:
    """Scores each learner answer in [0, 1] by its heuristic quality.

    poor=0, average=1/3, good=2/3, excellent=1. Character messages and
    messages without a catalogue topic are skipped.
    """
    top = len(QUALITY_ORDER) - 1
    scores = []
    for message in messages:
        if message.is_assistant or message.topic not in TOPICS:
            continue
        quality = score_answer(message.content, message.topic).quality
        scores.append(QUALITY_ORDER.index(quality) / top)
    return scores


def analyze_learning_state(
    recent_messages: Sequence[str], quality_scores: Sequence[float]
) -> LearningState:
    """Rates comprehension and engagement.

    Args:
        recent_messages: The learner's recent message texts.
        quality_scores: Per-answer scores in [0, 1], oldest first.
    """
    average = sum(quality_scores) / len(quality_scores) if quality_scores else 0.0

    if average < 0.3:
        comprehension = "struggling"
    elif average < 0.6:
        comprehension = "developing"
    elif average < 0.8:
        comprehension = "proficient"
    else:
        comprehension = "advanced"

    written = sum(len(text) for text in recent_messages)
    if written < 50:
        engagement = "low"
    elif written < 200:
        engagement = "medium"
    else:
        engagement = "high"

    return LearningState(
        comprehension_level=comprehension,
        engagement_level=engagement,
        motivation_indicators=MotivationIndicators(
            is_motivated=engagement != "low" and average > 0.4,
            needs_encouragement=comprehension == "struggling" or average < 0.5,
            showing_progress=(
                len(quality_scores) > 1 and quality_scores[-1] > quality_scores[0]
            ),
        ),
    )


# ---------------------------------------------------------------------------
# Character behaviour
# ---------------------------------------------------------------------------


def personalize_behavior(
    relationship: CharacterRelationship,
    emotion: str,
    recent_performance: float | None,
    language: str = "ja",
) -> CharacterBehavior:
    """Adjusts the character's behaviour toward a learner.

    Later rules override earlier ones: trust level, then the learner's
    emotion, then recent performance (None when there is nothing to judge).
    A greeting is added once more than 20 messages have been exchanged.
    """
    mood, style, encouragement = "curious", "supportive", 0.5

    if relationship.trust_level > 70:
        mood, style, encouragement = "happy", "friendly", 0.7
    elif relationship.trust_level < 30:
        mood, style, encouragement = "curious", "gentle", 0.8

    if emotion == "frustrated":
        mood, style, encouragement = "supportive", "encouraging", 0.9
    elif emotion == "excited":
        mood, style, encouragement = "excited", "energetic", 0.6

    if recent_performance is not None:
        if recent_performance > 0.8:
            mood, style, encouragement = "proud", "congratulatory", 0.3
        elif recent_performance < 0.4:
            mood, style, encouragement = "supportive", "patient", 0.9

    greeting = None
    if relationship.communication_history > GREETING_AFTER_MESSAGES:
        greeting = _GREETINGS.get(language, _GREETINGS["ja"])

    return CharacterBehavior(
        mood=mood,
        response_style=style,
        encouragement_level=encouragement,
        greeting=greeting,
    )
