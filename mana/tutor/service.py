"""TutorService — orchestrates one tutoring turn and the analytics views.

The per-turn operations consult the AI gateway first and fall back to the
rule-based path (heuristics + templates) on any AIError, so they never fail
because of the AI. Only an unknown topic is rejected outright.

Analytics operations (metrics, recommendations, learning path, profile,
emotion) are pure functions over snapshots and never touch the AI.

Constructed once at startup by main._init_services() and injected into the
API routers through api/deps.get_tutor_service.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from mana.ai.context import ContextManager, PromptUnavailableError
from mana.ai.gateway import AIGateway
from mana.ai.providers.base import AIError
from mana.ai.reply_analysis import analyze_reply_quality, mood_from_reply
from mana.schemas import (
    AnalysisSummary,
    CharacterState,
    ConversationMessage,
    DetailedAnalysis,
    EmotionAnalysis,
    EvaluationOutcome,
    LearnerProfile,
    LearningMetrics,
    LearningPath,
    Recommendation,
)
from mana.tutor import emotion, profile, recommendations
from mana.tutor.composer import ResponseComposer
from mana.tutor.heuristics import score_answer
from mana.tutor.progression import apply_quality
from mana.tutor.topics import require_topic

logger = logging.getLogger(__name__)

NEXT_STEPS_IN_SUMMARY = 2


class TutorService:
    """Evaluates answers, asks questions and produces learning analytics.

    Args:
        composer: Rule-based reply/question composer (always required).
        gateway: AI gateway, or None to run purely rule-based.
        context: Prompt assembler for the gateway. Required when gateway is set.
    """

    def __init__(
        self,
        composer: ResponseComposer,
        gateway: AIGateway | None = None,
        context: ContextManager | None = None,
    ) -> None:
        if gateway is not None and context is None:
            raise ValueError("A ContextManager is required when an AI gateway is configured")
        self._composer = composer
        self._gateway = gateway
        self._context = context

    @property
    def ai_enabled(self) -> bool:
        return self._gateway is not None

    @property
    def language(self) -> str:
        return self._composer.language

    # -------------------------------------------------------------------
    # Per-turn operations
    # -------------------------------------------------------------------

    async def evaluate_answer(
        self,
        user_answer: str,
        topic: str,
        state: CharacterState,
        history: Sequence[ConversationMessage],
        *,
        user_id: str | None = None,
    ) -> EvaluationOutcome:
        """Evaluates one explanation and returns the reply and state delta.

        The state itself is not modified; merge the outcome with
        progression.merge_delta().

        Raises:
            UnknownTopicError: If the topic is not in the catalogue.
        """
        require_topic(topic)

        if self._gateway is not None:
            try:
                return await self._evaluate_with_ai(
                    user_answer, topic, state, history, user_id=user_id
                )
            except (AIError, PromptUnavailableError) as exc:
                logger.warning(
                    "AI evaluation failed for topic=%s, using rule-based reply: %s",
                    topic,
                    exc,
                )

        return self._evaluate_with_rules(user_answer, topic, state, history)

    async def generate_question(
        self,
        topic: str,
        state: CharacterState,
        history: Sequence[ConversationMessage],
        *,
        user_id: str | None = None,
    ) -> str:
        """Returns the character's next question about a topic.

        Raises:
            UnknownTopicError: If the topic is not in the catalogue.
        """
        require_topic(topic)

        if self._gateway is not None:
            try:
                assembled = self._context.build_question_prompt(topic, state, history)
                return await self._gateway.complete(
                    assembled.prompt,
                    system_prompt=assembled.system_prompt,
                    call_type="question",
                    user_id=user_id,
                    topic=topic,
                )
            except (AIError, PromptUnavailableError) as exc:
                logger.warning(
                    "AI question generation failed for topic=%s, using template: %s",
                    topic,
                    exc,
                )

        return self._composer.compose_question(
            topic, state.understanding_of(topic), history
        )

    # -------------------------------------------------------------------
    # Analytics
    # -------------------------------------------------------------------

    def get_metrics(self, state: CharacterState, recent_activity: int) -> LearningMetrics:
        return recommendations.build_metrics(state, recent_activity)

    def get_recommendations(self, metrics: LearningMetrics) -> list[Recommendation]:
        return recommendations.recommend(metrics, self.language)

    def get_learning_path(self, metrics: LearningMetrics) -> LearningPath:
        return recommendations.generate_learning_path(metrics, self.language)

    def analyze_profile(
        self,
        state: CharacterState,
        history: Sequence[ConversationMessage],
        metrics: LearningMetrics,
    ) -> LearnerProfile:
        return profile.analyze_profile(state, history, metrics)

    def analyze_emotion(self, message: str) -> EmotionAnalysis:
        return emotion.analyze_emotion(message, self.language)

    def detailed_analysis(
        self,
        state: CharacterState,
        history: Sequence[ConversationMessage],
        recent_activity: int,
    ) -> DetailedAnalysis:
        """Combines metrics, recommendations, path and profile with a summary.

        Emotion is read from the learner's latest message; learning state and
        the character's behaviour from their last few answers.
        """
        metrics = self.get_metrics(state, recent_activity)
        recs = self.get_recommendations(metrics)
        learner = self.analyze_profile(state, history, metrics)

        answers = [m for m in history if not m.is_assistant][-emotion.RECENT_ANSWERS:]
        scores = emotion.answer_scores(answers)
        feeling = self.analyze_emotion(answers[-1].content if answers else "")
        performance = sum(scores) / len(scores) if scores else None

        return DetailedAnalysis(
            metrics=metrics,
            recommendations=recs,
            learning_path=self.get_learning_path(metrics),
            profile=learner,
            emotion=feeling,
            learning_state=emotion.analyze_learning_state(
                [m.content for m in answers], scores
            ),
            behavior=emotion.personalize_behavior(
                learner.character_relationship,
                feeling.primary_emotion,
                performance,
                self.language,
            ),
            summary=AnalysisSummary(
                overall_progress=recommendations.overall_progress(metrics),
                next_steps=recs[:NEXT_STEPS_IN_SUMMARY],
                strengths=list(metrics.mastered_topics),
                areas_for_improvement=list(metrics.struggling_topics),
                learning_style=learner.learning_style,
                motivation_level=profile.motivation_level(metrics, learner),
            ),
        )

    # -------------------------------------------------------------------
    # Evaluation paths
    # -------------------------------------------------------------------

    async def _evaluate_with_ai(
        self,
        user_answer: str,
        topic: str,
        state: CharacterState,
        history: Sequence[ConversationMessage],
        *,
        user_id: str | None,
    ) -> EvaluationOutcome:
        assembled = self._context.build_evaluation_prompt(user_answer, topic, state, history)
        reply = await self._gateway.complete(
            assembled.prompt,
            system_prompt=assembled.system_prompt,
            call_type="evaluation",
            user_id=user_id,
            topic=topic,
        )
        quality = analyze_reply_quality(reply, user_answer)
        delta = apply_quality(quality, len(user_answer), topic, state)
        logger.info("Evaluated answer via AI: topic=%s quality=%s", topic, quality)
        return EvaluationOutcome(
            reply_text=reply,
            quality=quality,
            exp_gain=delta.exp_gain,
            new_mood=mood_from_reply(reply),
            understanding_delta=delta.understanding_delta,
            source="ai",
        )

    def _evaluate_with_rules(
        self,
        user_answer: str,
        topic: str,
        state: CharacterState,
        history: Sequence[ConversationMessage],
    ) -> EvaluationOutcome:
        score = score_answer(user_answer, topic)
        quality = score.quality
        delta = apply_quality(quality, len(user_answer), topic, state)
        logger.info(
            "Evaluated answer via rules: topic=%s quality=%s score=%d",
            topic,
            quality,
            score.total,
        )

        try:
            reply = self._composer.compose(quality, topic, history)
        except Exception:
            logger.exception("Composing reply failed for topic=%s", topic)
            reply = self._composer.fallback_reply()

        return EvaluationOutcome(
            reply_text=reply,
            quality=quality,
            exp_gain=delta.exp_gain,
            new_mood=delta.new_mood,
            understanding_delta=delta.understanding_delta,
            source="fallback",
        )
