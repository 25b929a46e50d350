"""Learner profile analysis — learning style, pace and motivation.

Infers a LearnerProfile from conversation history plus the current
metrics. Keyword-driven like the rest of the tutor core; the keyword lists
live in tutor/lexicon.py.
"""

from __future__ import annotations

from collections.abc import Sequence

from mana.schemas import (
    CharacterRelationship,
    CharacterState,
    ConversationMessage,
    InteractionPreferences,
    LearnerProfile,
    LearningMetrics,
)
from mana.tutor.heuristics import count_matches
from mana.tutor.lexicon import lexicons_for

LEARNING_STYLES = ("visual", "auditory", "kinesthetic", "reading")
DEFAULT_MOTIVATION = "achievement"
DETAILED_MESSAGE_LENGTH = 100
TRUST_PER_MESSAGE = 2


def infer_learning_style(text: str) -> str:
    """Picks the style whose keywords appear most; ties go to catalogue order."""
    scores = dict.fromkeys(LEARNING_STYLES, 0)
    for lex in lexicons_for():
        for style in LEARNING_STYLES:
            scores[style] += count_matches(text, lex.style_keywords.get(style, ()))
    best = max(scores.values())
    return next(style for style in LEARNING_STYLES if scores[style] == best)


def learning_pace(velocity: float) -> str:
    if velocity < 2:
        return "slow"
    if velocity < 5:
        return "moderate"
    return "fast"


def preferred_difficulty(average_proficiency: float) -> str:
    if average_proficiency < 40:
        return "easy"
    if average_proficiency < 70:
        return "moderate"
    return "challenging"


def motivation_factors(text: str) -> list[str]:
    """Motivation factors mentioned anywhere in the text, in a fixed order."""
    found: list[str] = []
    for lex in lexicons_for():
        for factor, keywords in lex.motivation_keywords.items():
            if factor not in found and count_matches(text, keywords):
                found.append(factor)
    order = ("fun_learning", "achievement", "recognition")
    found.sort(key=lambda f: order.index(f) if f in order else len(order))
    return found or [DEFAULT_MOTIVATION]


def interaction_preferences(
    history: Sequence[ConversationMessage],
) -> InteractionPreferences:
    if history:
        average_length = sum(len(m.content) for m in history) / len(history)
    else:
        average_length = 0
    style = "detailed" if average_length > DETAILED_MESSAGE_LENGTH else "brief"
    return InteractionPreferences(explanation_style=style)


def analyze_profile(
    state: CharacterState,
    history: Sequence[ConversationMessage],
    metrics: LearningMetrics,
) -> LearnerProfile:
    """Builds the learner profile.

    Args:
        state: Current character state (mood feeds the relationship block).
        history: Recent conversation, oldest first.
        metrics: Metrics derived from the same state.
    """
    text = " ".join(m.content for m in history)
    return LearnerProfile(
        learning_style=infer_learning_style(text),
        pace=learning_pace(metrics.learning_velocity),
        preferred_difficulty=preferred_difficulty(metrics.average_proficiency),
        motivation_factors=motivation_factors(text),
        interaction_preferences=interaction_preferences(history),
        character_relationship=CharacterRelationship(
            trust_level=min(len(history) * TRUST_PER_MESSAGE, 100),
            preferred_mood=state.mood,
            communication_history=len(history),
        ),
    )


def motivation_level(metrics: LearningMetrics, profile: LearnerProfile) -> str:
    """Rates motivation low/medium/high from four independent signals."""
    signals = (
        metrics.learning_velocity > 3,
        profile.character_relationship.trust_level > 50,
        metrics.total_problems > 10,
        len(profile.motivation_factors) > 1,
    )
    score = sum(signals)
    if score >= 3:
        return "high"
    if score >= 2:
        return "medium"
    return "low"
