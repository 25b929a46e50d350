"""Core data models — shared Pydantic types for the Mana tutor.

Every character snapshot, conversation message, metrics snapshot and API
response flows through these types. They are the shared vocabulary between
the scoring core, the AI layer, the state store and the HTTP boundary.

Leaf module: imports only from pydantic and the stdlib.
No project imports allowed — everything else imports from here.

Usage:
    from mana.schemas import CharacterState, ConversationMessage, ApiResponse
"""

import logging
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Closed vocabularies
# ---------------------------------------------------------------------------

Topic = Literal["algebra", "geometry", "functions", "probability"]
Mood = Literal["curious", "happy", "confused", "excited"]
AnswerQuality = Literal["poor", "average", "good", "excellent"]
Difficulty = Literal["beginner", "intermediate", "advanced"]
QuestionType = Literal["concept", "application", "problem_solving"]

# Catalogue order — used wherever "first topic" or stable ordering matters.
TOPICS: tuple[str, ...] = ("algebra", "geometry", "functions", "probability")

# Ordinal rank, lowest first.
QUALITY_ORDER: tuple[str, ...] = ("poor", "average", "good", "excellent")

# Roles that mark a message as authored by the character.
ASSISTANT_ROLES = frozenset({"assistant", "mana", "マナ"})

UNDERSTANDING_MIN = 0
UNDERSTANDING_MAX = 100


def clamp_understanding(value: int) -> int:
    """Clamps an understanding value into [0, 100]."""
    return max(UNDERSTANDING_MIN, min(UNDERSTANDING_MAX, int(value)))


# ---------------------------------------------------------------------------
# Conversation
# ---------------------------------------------------------------------------


class ConversationMessage(BaseModel):
    """One conversation turn. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: str
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    topic: str | None = None

    @property
    def is_assistant(self) -> bool:
        """True when the character authored this message."""
        return self.role.lower() in ASSISTANT_ROLES


# ---------------------------------------------------------------------------
# Character state
# ---------------------------------------------------------------------------


class CharacterState(BaseModel):
    """Accumulated state of the tutored character.

    Owned by the caller — the scoring core only computes deltas against a
    snapshot. Understanding values are clamped into [0, 100] on read so a
    snapshot mutated elsewhere never breaks scoring; topics missing from the
    map default to 0.
    """

    name: str = "Mana"
    level: int = Field(default=1, ge=1)
    experience: int = Field(default=0, ge=0)
    understanding: dict[Topic, int] = Field(
        default_factory=lambda: {topic: 0 for topic in TOPICS}
    )
    mood: Mood = "curious"
    total_problems: int = Field(default=0, ge=0)

    @field_validator("understanding", mode="after")
    @classmethod
    def _clamp_understanding(cls, value: dict[str, int]) -> dict[str, int]:
        result = {topic: 0 for topic in TOPICS}
        for topic, score in value.items():
            clamped = clamp_understanding(score)
            if clamped != score:
                logger.warning(
                    "Understanding for %s out of range (%d); clamped to %d",
                    topic,
                    score,
                    clamped,
                )
            result[topic] = clamped
        return result

    def understanding_of(self, topic: str) -> int:
        """Returns the understanding score for a topic (0 if unknown)."""
        return self.understanding.get(topic, 0)  # type: ignore[call-overload]


# ---------------------------------------------------------------------------
# Learning analytics
# ---------------------------------------------------------------------------

STRUGGLING_BELOW = 30
MASTERED_FROM = 80


class LearningMetrics(BaseModel):
    """Derived, read-only snapshot of a learner's per-topic proficiency.

    Recomputed on every call and never persisted. When struggling_topics or
    mastered_topics are omitted they are derived from topic_proficiency
    (proficiency < 30 / >= 80, catalogue order). Explicit sets are
    de-duplicated into catalogue order and must not share a topic.
    """

    model_config = ConfigDict(frozen=True)

    topic_proficiency: dict[Topic, int]
    struggling_topics: list[Topic] = Field(default_factory=list)
    mastered_topics: list[Topic] = Field(default_factory=list)
    learning_velocity: float = 0.0
    current_level: int = Field(default=1, ge=1)
    suggested_level: int = Field(default=1, ge=1)
    total_problems: int = Field(default=0, ge=0)
    correct_answers: int = Field(default=0, ge=0)
    average_response_time: float = 45.0

    @model_validator(mode="before")
    @classmethod
    def _derive_topic_sets(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        raw = data.get("topic_proficiency")
        if not isinstance(raw, dict) or set(raw) - set(TOPICS):
            # Let field validation reject it with a clear message.
            return data
        try:
            proficiency = {
                topic: clamp_understanding(raw.get(topic, 0)) for topic in TOPICS
            }
        except (TypeError, ValueError, OverflowError):
            return data
        data["topic_proficiency"] = proficiency
        if "struggling_topics" not in data:
            data["struggling_topics"] = [
                t for t in TOPICS if proficiency[t] < STRUGGLING_BELOW
            ]
        if "mastered_topics" not in data:
            data["mastered_topics"] = [
                t for t in TOPICS if proficiency[t] >= MASTERED_FROM
            ]
        return data

    @field_validator("struggling_topics", "mastered_topics", mode="after")
    @classmethod
    def _as_topic_set(cls, value: list[str]) -> list[str]:
        return [topic for topic in TOPICS if topic in value]

    @model_validator(mode="after")
    def _disjoint_topic_sets(self) -> "LearningMetrics":
        overlap = [t for t in self.struggling_topics if t in self.mastered_topics]
        if overlap:
            raise ValueError(
                f"Topics cannot be both struggling and mastered: {', '.join(overlap)}"
            )
        return self

    @property
    def average_proficiency(self) -> float:
        """Mean proficiency across the four topics."""
        return sum(self.topic_proficiency.values()) / len(TOPICS)


class Recommendation(BaseModel):
    """One ranked study recommendation. Immutable once returned."""

    model_config = ConfigDict(frozen=True)

    topic: Topic
    difficulty: Difficulty
    question_type: QuestionType
    focus_areas: list[Topic] = Field(default_factory=list)
    reasoning: str


class LearningPathStep(BaseModel):
    """One step of a generated learning path."""

    model_config = ConfigDict(frozen=True)

    step: int = Field(ge=1)
    topic: Topic
    title: str
    description: str
    difficulty: Difficulty
    estimated_minutes: int
    prerequisites: list[Topic] = Field(default_factory=list)


class LearningPath(BaseModel):
    """Ordered learning path: foundations, then application, then extension."""

    model_config = ConfigDict(frozen=True)

    current_step: int = 1
    total_steps: int
    steps: list[LearningPathStep]


# ---------------------------------------------------------------------------
# Learner profile
# ---------------------------------------------------------------------------

LearningStyle = Literal["visual", "auditory", "kinesthetic", "reading"]
Pace = Literal["slow", "moderate", "fast"]
PreferredDifficulty = Literal["easy", "moderate", "challenging"]
MotivationLevel = Literal["low", "medium", "high"]


class InteractionPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    formality_level: Literal["formal", "casual", "friendly"] = "friendly"
    explanation_style: Literal["brief", "detailed", "step_by_step"] = "brief"
    feedback_type: Literal["immediate", "summary", "minimal"] = "immediate"


class CharacterRelationship(BaseModel):
    model_config = ConfigDict(frozen=True)

    trust_level: int = Field(ge=0, le=100)
    preferred_mood: Mood
    communication_history: int = Field(ge=0)


class LearnerProfile(BaseModel):
    """Inferred learning preferences, recomputed from history on demand."""

    model_config = ConfigDict(frozen=True)

    learning_style: LearningStyle
    pace: Pace
    preferred_difficulty: PreferredDifficulty
    motivation_factors: list[str]
    interaction_preferences: InteractionPreferences
    character_relationship: CharacterRelationship


# ---------------------------------------------------------------------------
# Learner emotion and behaviour
# ---------------------------------------------------------------------------

Emotion = Literal["confused", "frustrated", "confident", "curious", "excited", "neutral"]


class ResponseSuggestions(BaseModel):
    """How the character should adjust its next reply."""

    model_config = ConfigDict(frozen=True)

    response_style: Literal["encouraging", "explanatory", "challenging", "supportive"]
    tone_adjustment: Literal["gentler", "maintain", "more_energetic"]
    content_adjustment: Literal["simplify", "maintain", "increase_complexity"]


class EmotionAnalysis(BaseModel):
    """Emotion read from one learner message."""

    model_config = ConfigDict(frozen=True)

    primary_emotion: Emotion
    confidence: float = Field(ge=0, le=1)
    indicators: list[str]
    suggestions: ResponseSuggestions


class MotivationIndicators(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_motivated: bool
    needs_encouragement: bool
    showing_progress: bool


class LearningState(BaseModel):
    """Comprehension and engagement over the learner's recent answers."""

    model_config = ConfigDict(frozen=True)

    comprehension_level: Literal["struggling", "developing", "proficient", "advanced"]
    engagement_level: Literal["low", "medium", "high"]
    motivation_indicators: MotivationIndicators


class CharacterBehavior(BaseModel):
    """How the character carries itself toward this learner.

    Distinct from CharacterState.mood: the behaviour mood is advisory and
    has a wider vocabulary ("supportive", "proud").
    """

    model_config = ConfigDict(frozen=True)

    mood: Literal["curious", "happy", "supportive", "excited", "proud"]
    response_style: Literal[
        "supportive", "friendly", "gentle", "encouraging", "energetic",
        "congratulatory", "patient",
    ]
    encouragement_level: float = Field(ge=0, le=1)
    greeting: str | None = None


class AnalysisSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_progress: int
    next_steps: list[Recommendation]
    strengths: list[Topic]
    areas_for_improvement: list[Topic]
    learning_style: LearningStyle
    motivation_level: MotivationLevel


class DetailedAnalysis(BaseModel):
    """Everything the analysis dashboard shows, in one snapshot."""

    model_config = ConfigDict(frozen=True)

    metrics: LearningMetrics
    recommendations: list[Recommendation]
    learning_path: LearningPath
    profile: LearnerProfile
    emotion: EmotionAnalysis
    learning_state: LearningState
    behavior: CharacterBehavior
    summary: AnalysisSummary


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


class EvaluationOutcome(BaseModel):
    """Result of evaluating one user explanation."""

    model_config = ConfigDict(frozen=True)

    reply_text: str
    quality: AnswerQuality
    exp_gain: int
    new_mood: Mood
    understanding_delta: int
    source: Literal["ai", "fallback"]


# ---------------------------------------------------------------------------
# API envelope
# ---------------------------------------------------------------------------


class ApiError(BaseModel):
    """Error detail inside ApiResponse.error.

    code is an uppercase string like "UNKNOWN_TOPIC", "VALIDATION_ERROR".
    Not an enum — error codes grow with the API.
    """

    model_config = ConfigDict(frozen=True)

    code: str
    message: str


class ApiResponse(BaseModel):
    """Universal response envelope — every API endpoint returns this shape."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    data: Any | None = None
    error: ApiError | None = None
