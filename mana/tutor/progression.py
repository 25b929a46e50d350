"""Progression engine — experience, understanding and mood from a quality signal.

apply_quality() is a pure state-transition function: it reads a
CharacterState snapshot and returns the raw delta. merge_delta() is the
caller-side rule that folds a delta into a new snapshot, including the
one-level-per-update cap.

Experience never rolls over: the stored value is the running total and
level is derived from it (floor(experience / 100) + 1, capped at +1 per
update).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mana.schemas import CharacterState, EvaluationOutcome, clamp_understanding
from mana.tutor.topics import require_topic

logger = logging.getLogger(__name__)

EXP_PER_LEVEL = 100
MAX_EXP_GAIN = 30

BASE_EXP: dict[str, int] = {
    "excellent": 25,
    "good": 15,
    "average": 8,
    "poor": 3,
}

UNDERSTANDING_GAIN: dict[str, int] = {
    "excellent": 8,
    "good": 5,
    "average": 3,
    "poor": 1,
}

MOOD_FOR_QUALITY: dict[str, str] = {
    "excellent": "excited",
    "good": "happy",
    "average": "curious",
    "poor": "confused",
}


@dataclass(frozen=True)
class ProgressionDelta:
    """Raw numbers produced by one evaluated answer."""

    exp_gain: int
    understanding_delta: int
    new_mood: str


def experience_gain(quality: str, answer_length: int) -> int:
    """Experience for an answer: base by quality plus a length bonus, capped at 30."""
    exp = BASE_EXP[quality]
    if answer_length > 100:
        exp += 5
    elif answer_length > 50:
        exp += 2
    return min(exp, MAX_EXP_GAIN)


def level_for(experience: int) -> int:
    """Level implied by accumulated experience, without any cap."""
    return experience // EXP_PER_LEVEL + 1


def apply_quality(
    quality: str,
    answer_length: int,
    topic: str,
    state: CharacterState,
) -> ProgressionDelta:
    """Computes the state delta for one evaluated answer.

    The understanding delta is the effective change: it is reduced when the
    topic is already near 100 so that current + delta stays in [0, 100].

    Args:
        quality: AnswerQuality of the answer.
        answer_length: Answer length in characters.
        topic: The topic the answer was about.
        state: Current character snapshot (not modified).

    Returns:
        The ProgressionDelta to merge.

    Raises:
        UnknownTopicError: If the topic is not in the catalogue.
        KeyError: If quality is not a known AnswerQuality.
    """
    require_topic(topic)
    current = state.understanding_of(topic)
    target = clamp_understanding(current + UNDERSTANDING_GAIN[quality])

    return ProgressionDelta(
        exp_gain=experience_gain(quality, answer_length),
        understanding_delta=target - current,
        new_mood=MOOD_FOR_QUALITY[quality],
    )


def merge_delta(
    state: CharacterState,
    delta: ProgressionDelta | EvaluationOutcome,
    topic: str,
) -> CharacterState:
    """Folds a delta (or an evaluation outcome) into a new CharacterState snapshot.

    Level follows accumulated experience but never rises by more than one
    per update; a level earned beyond that cap is picked up on later
    updates as experience keeps accumulating.
    """
    require_topic(topic)
    experience = state.experience + delta.exp_gain
    level = min(max(level_for(experience), state.level), state.level + 1)

    understanding = dict(state.understanding)
    understanding[topic] = clamp_understanding(
        understanding.get(topic, 0) + delta.understanding_delta
    )

    if level > state.level:
        logger.info("Level up: %d -> %d (experience=%d)", state.level, level, experience)

    return state.model_copy(
        update={
            "experience": experience,
            "level": level,
            "understanding": understanding,
            "mood": delta.new_mood,
            "total_problems": state.total_problems + 1,
        }
    )
