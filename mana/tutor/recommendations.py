"""Recommendation engine — metrics, ranked recommendations, learning paths.

Everything here works on immutable snapshots (CharacterState,
LearningMetrics) and returns new values, so aggregation for one user never
needs coordination with scoring for another.

Consumed by:
- TutorService (tutor/service.py) — get_metrics/get_recommendations/get_learning_path
- The stateless /learning endpoints, which post a LearningMetrics directly
"""

from __future__ import annotations

import logging
import math

from mana.schemas import (
    MASTERED_FROM,
    STRUGGLING_BELOW,
    TOPICS,
    CharacterState,
    LearningMetrics,
    LearningPath,
    LearningPathStep,
    Recommendation,
)
from mana.tutor.topics import difficulty_for, display_name

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 3
ACTIVITY_WINDOW_DAYS = 7
CORRECT_ANSWER_RATIO = 0.7
ESTIMATED_RESPONSE_SECONDS = 45.0

# (title, description) templates per phase, keyed by language.
_PATH_TEXT: dict[str, dict[str, tuple[str, str]]] = {
    "ja": {
        "beginner": ("{name}の基礎", "{name}の基本概念を理解しましょう"),
        "intermediate": ("{name}の応用", "{name}の応用問題に取り組みましょう"),
        "advanced": ("{name}の発展", "{name}の高度な問題に挑戦しましょう"),
    },
    "en": {
        "beginner": ("{name} basics", "Build an understanding of the core ideas of {name}"),
        "intermediate": ("Applying {name}", "Work through application problems in {name}"),
        "advanced": ("Advanced {name}", "Take on challenging {name} problems"),
    },
}

_PATH_MINUTES: dict[str, int] = {
    "beginner": 15,
    "intermediate": 20,
    "advanced": 30,
}

_REASONING: dict[str, dict[str, str]] = {
    "ja": {
        "struggling": "{name}の理解度が低いため、基礎概念の復習をお勧めします",
        "balanced": "全体的にバランス良く学習されています。{name}をさらに伸ばしましょう",
        "mastered": "{name}の基礎は十分理解されています。応用問題に挑戦しましょう",
    },
    "en": {
        "struggling": "Understanding of {name} is low, so reviewing the core concepts is recommended",
        "balanced": "Learning is well balanced overall. Let's strengthen {name} further",
        "mastered": "The basics of {name} are well understood. Try some problem-solving challenges",
    },
}


def _text(table: dict[str, dict[str, str]], language: str) -> dict[str, str]:
    return table.get(language, table["en"])


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------


def suggested_level(average_proficiency: float, current_level: int) -> int:
    """Suggests the next difficulty level from mean proficiency."""
    if average_proficiency >= 80:
        return current_level + 1
    if average_proficiency >= 60:
        return current_level
    return max(1, current_level - 1)


def build_metrics(
    state: CharacterState,
    recent_activity: int,
    window_days: int = ACTIVITY_WINDOW_DAYS,
) -> LearningMetrics:
    """Derives a LearningMetrics snapshot from a character state.

    Args:
        state: The character snapshot; understanding is the proficiency.
        recent_activity: Number of conversation messages in the window.
        window_days: Length of the activity window in days.

    Returns:
        A fresh LearningMetrics snapshot.
    """
    proficiency = {topic: state.understanding_of(topic) for topic in TOPICS}
    average = sum(proficiency.values()) / len(TOPICS)

    return LearningMetrics(
        topic_proficiency=proficiency,
        struggling_topics=[t for t in TOPICS if proficiency[t] < STRUGGLING_BELOW],
        mastered_topics=[t for t in TOPICS if proficiency[t] >= MASTERED_FROM],
        learning_velocity=recent_activity / window_days if window_days > 0 else 0.0,
        current_level=state.level,
        suggested_level=suggested_level(average, state.level),
        total_problems=state.total_problems,
        correct_answers=math.floor(state.total_problems * CORRECT_ANSWER_RATIO),
        average_response_time=ESTIMATED_RESPONSE_SECONDS,
    )


def overall_progress(metrics: LearningMetrics) -> int:
    """Rounded mean proficiency across the four topics."""
    return round(metrics.average_proficiency)


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------


def _weakest_topic(metrics: LearningMetrics) -> str:
    # min() keeps the first topic in catalogue order on ties.
    return min(TOPICS, key=lambda t: metrics.topic_proficiency[t])


def recommend(
    metrics: LearningMetrics, language: str = "ja"
) -> list[Recommendation]:
    """Generates up to three ranked recommendations.

    Priority: struggling topics (beginner concepts), then — only when nothing
    is struggling — the weakest topic as an application exercise, then
    mastered topics (advanced problem solving). A topic is never emitted
    twice.
    """
    text = _text(_REASONING, language)
    recommendations: list[Recommendation] = []
    seen: set[str] = set()

    def _add(topic: str, difficulty: str, question_type: str, key: str) -> None:
        if topic in seen:
            return
        seen.add(topic)
        recommendations.append(
            Recommendation(
                topic=topic,
                difficulty=difficulty,
                question_type=question_type,
                focus_areas=[topic],
                reasoning=text[key].format(name=display_name(topic, language)),
            )
        )

    for topic in metrics.struggling_topics:
        _add(topic, "beginner", "concept", "struggling")

    if not metrics.struggling_topics:
        weakest = _weakest_topic(metrics)
        difficulty = difficulty_for(metrics.topic_proficiency[weakest])
        _add(weakest, difficulty, "application", "balanced")

    for topic in metrics.mastered_topics:
        _add(topic, "advanced", "problem_solving", "mastered")

    return recommendations[:MAX_RECOMMENDATIONS]


# ---------------------------------------------------------------------------
# Learning path
# ---------------------------------------------------------------------------


def generate_learning_path(
    metrics: LearningMetrics, language: str = "ja"
) -> LearningPath:
    """Builds an ordered learning path: foundations, application, extension.

    Struggling topics come first with no prerequisites; topics that are
    neither struggling nor mastered follow with the struggling topics as
    prerequisites; mastered topics close the path with the other three
    topics as prerequisites. Step numbers are 1-based and contiguous.
    """
    text = _PATH_TEXT.get(language, _PATH_TEXT["en"])
    struggling = list(metrics.struggling_topics)
    mastered = list(metrics.mastered_topics)

    phases: list[tuple[str, str, list[str]]] = []
    for topic in struggling:
        phases.append((topic, "beginner", []))
    for topic in TOPICS:
        if topic not in struggling and topic not in mastered:
            phases.append((topic, "intermediate", list(struggling)))
    for topic in mastered:
        phases.append((topic, "advanced", [t for t in TOPICS if t != topic]))

    steps = []
    for index, (topic, difficulty, prerequisites) in enumerate(phases, start=1):
        title, description = text[difficulty]
        name = display_name(topic, language)
        steps.append(
            LearningPathStep(
                step=index,
                topic=topic,
                title=title.format(name=name),
                description=description.format(name=name),
                difficulty=difficulty,
                estimated_minutes=_PATH_MINUTES[difficulty],
                prerequisites=prerequisites,
            )
        )

    logger.debug("Learning path: %d steps", len(steps))
    return LearningPath(current_step=1, total_steps=len(steps), steps=steps)
