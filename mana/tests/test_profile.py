"""Tests for mana.tutor.profile — learner profile inference."""

import pytest

from mana.schemas import (
    CharacterRelationship,
    CharacterState,
    InteractionPreferences,
    LearnerProfile,
)
from mana.tutor.profile import (
    analyze_profile,
    infer_learning_style,
    interaction_preferences,
    learning_pace,
    motivation_factors,
    motivation_level,
    preferred_difficulty,
)


def _profile(trust: int = 0, factors: list[str] | None = None) -> LearnerProfile:
    return LearnerProfile(
        learning_style="visual",
        pace="slow",
        preferred_difficulty="easy",
        motivation_factors=factors or ["achievement"],
        interaction_preferences=InteractionPreferences(),
        character_relationship=CharacterRelationship(
            trust_level=trust, preferred_mood="curious", communication_history=0
        ),
    )


class TestLearningStyle:
    def test_visual_keywords(self) -> None:
        assert infer_learning_style("グラフを見るのが好き") == "visual"

    def test_reading_keywords(self) -> None:
        assert infer_learning_style("I like to read and write notes") == "reading"

    def test_kinesthetic_keywords(self) -> None:
        assert infer_learning_style("実践で体験したい") == "kinesthetic"

    def test_no_signal_defaults_to_first_style(self) -> None:
        assert infer_learning_style("") == "visual"


class TestThresholds:
    @pytest.mark.parametrize(
        ("velocity", "pace"),
        [(0.0, "slow"), (1.9, "slow"), (2.0, "moderate"), (4.9, "moderate"), (5.0, "fast")],
    )
    def test_pace(self, velocity: float, pace: str) -> None:
        assert learning_pace(velocity) == pace

    @pytest.mark.parametrize(
        ("average", "difficulty"),
        [(10, "easy"), (40, "moderate"), (69.9, "moderate"), (70, "challenging")],
    )
    def test_preferred_difficulty(self, average: float, difficulty: str) -> None:
        assert preferred_difficulty(average) == difficulty


class TestMotivation:
    def test_default_factor(self) -> None:
        assert motivation_factors("") == ["achievement"]

    def test_factors_in_fixed_order(self) -> None:
        assert motivation_factors("目標があるし、数学は楽しい") == ["fun_learning", "achievement"]

    def test_english_factors(self) -> None:
        assert motivation_factors("I want praise") == ["recognition"]

    def test_level_high(self, make_metrics) -> None:
        metrics = make_metrics(learning_velocity=4.0, total_problems=12)
        assert motivation_level(metrics, _profile(trust=60)) == "high"

    def test_level_medium(self, make_metrics) -> None:
        metrics = make_metrics(learning_velocity=4.0)
        assert motivation_level(metrics, _profile(factors=["fun_learning", "achievement"])) == "medium"

    def test_level_low(self, make_metrics) -> None:
        assert motivation_level(make_metrics(), _profile()) == "low"


class TestAnalyzeProfile:
    def test_interaction_style_from_message_length(self, make_message) -> None:
        assert interaction_preferences([]).explanation_style == "brief"
        long_history = [make_message("x" * 150, role="user")]
        assert interaction_preferences(long_history).explanation_style == "detailed"

    def test_relationship_block(self, make_message, make_metrics) -> None:
        history = [make_message(role="user") for _ in range(3)]
        profile = analyze_profile(CharacterState(mood="happy"), history, make_metrics())
        rel = profile.character_relationship
        assert rel.trust_level == 6
        assert rel.preferred_mood == "happy"
        assert rel.communication_history == 3

    def test_trust_capped(self, make_message, make_metrics) -> None:
        history = [make_message() for _ in range(60)]
        profile = analyze_profile(CharacterState(), history, make_metrics())
        assert profile.character_relationship.trust_level == 100

    def test_pace_and_difficulty_from_metrics(self, make_metrics) -> None:
        metrics = make_metrics(80, 80, 80, 80, learning_velocity=6.0)
        profile = analyze_profile(CharacterState(), [], metrics)
        assert profile.pace == "fast"
        assert profile.preferred_difficulty == "challenging"
        assert profile.motivation_factors == ["achievement"]
