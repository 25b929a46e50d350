"""Tests for mana.tutor.recommendations — metrics, recommendations, paths."""

from mana.schemas import CharacterState, LearningMetrics
from mana.tutor.recommendations import (
    build_metrics,
    generate_learning_path,
    overall_progress,
    recommend,
    suggested_level,
)


# ---------------------------------------------------------------------------
# LearningMetrics derivation
# ---------------------------------------------------------------------------


class TestMetrics:
    """Struggling/mastered derivation and build_metrics."""

    def test_topic_sets_derived_when_omitted(self, make_metrics) -> None:
        metrics = make_metrics(algebra=20, geometry=85, functions=50, probability=50)
        assert metrics.struggling_topics == ["algebra"]
        assert metrics.mastered_topics == ["geometry"]

    def test_boundaries(self, make_metrics) -> None:
        metrics = make_metrics(algebra=29, geometry=30, functions=79, probability=80)
        assert metrics.struggling_topics == ["algebra"]
        assert metrics.mastered_topics == ["probability"]

    def test_build_metrics_from_state(self) -> None:
        state = CharacterState(
            level=3,
            total_problems=10,
            understanding={"algebra": 10, "geometry": 90, "functions": 60, "probability": 60},
        )
        metrics = build_metrics(state, recent_activity=14)
        assert metrics.topic_proficiency["geometry"] == 90
        assert metrics.struggling_topics == ["algebra"]
        assert metrics.mastered_topics == ["geometry"]
        assert metrics.learning_velocity == 2.0
        assert metrics.current_level == 3
        assert metrics.correct_answers == 7
        assert metrics.average_response_time == 45.0
        # average 55 → one level down
        assert metrics.suggested_level == 2

    def test_suggested_level(self) -> None:
        assert suggested_level(85, 2) == 3
        assert suggested_level(60, 2) == 2
        assert suggested_level(10, 2) == 1
        assert suggested_level(10, 1) == 1

    def test_overall_progress(self, make_metrics) -> None:
        assert overall_progress(make_metrics(20, 85, 50, 50)) == 51


# ---------------------------------------------------------------------------
# recommend
# ---------------------------------------------------------------------------


class TestRecommend:
    """Priority order, truncation and de-duplication."""

    def test_struggling_and_mastered(self, make_metrics) -> None:
        recs = recommend(make_metrics(algebra=20, geometry=85, functions=50, probability=50))
        assert [(r.topic, r.difficulty, r.question_type) for r in recs] == [
            ("algebra", "beginner", "concept"),
            ("geometry", "advanced", "problem_solving"),
        ]

    def test_balanced_picks_weakest_topic(self, make_metrics) -> None:
        recs = recommend(make_metrics(algebra=60, geometry=40, functions=50, probability=70))
        assert len(recs) == 1
        assert recs[0].topic == "geometry"
        assert recs[0].difficulty == "intermediate"
        assert recs[0].question_type == "application"

    def test_weakest_tie_goes_to_catalogue_order(self, make_metrics) -> None:
        recs = recommend(make_metrics(50, 50, 50, 50))
        assert recs[0].topic == "algebra"

    def test_at_most_three(self, make_metrics) -> None:
        recs = recommend(make_metrics(algebra=0, geometry=10, functions=20, probability=90))
        assert len(recs) == 3
        assert [r.topic for r in recs] == ["algebra", "geometry", "functions"]

    def test_all_mastered(self, make_metrics) -> None:
        recs = recommend(make_metrics(90, 90, 90, 95))
        # weakest (algebra) as application, then mastered topics minus algebra
        assert recs[0].topic == "algebra"
        assert recs[0].question_type == "application"
        assert [r.topic for r in recs[1:]] == ["geometry", "functions"]

    def test_no_duplicate_topics(self, make_metrics) -> None:
        recs = recommend(make_metrics(90, 90, 90, 95))
        topics = [r.topic for r in recs]
        assert len(topics) == len(set(topics))

    def test_explicit_topic_sets_are_respected(self) -> None:
        metrics = LearningMetrics(
            topic_proficiency={"algebra": 50, "geometry": 50, "functions": 50, "probability": 50},
            struggling_topics=["probability"],
            mastered_topics=[],
        )
        recs = recommend(metrics)
        assert [r.topic for r in recs] == ["probability"]

    def test_reasoning_localised(self, make_metrics) -> None:
        metrics = make_metrics(algebra=20)
        assert "代数" in recommend(metrics, "ja")[0].reasoning
        assert "algebra" in recommend(metrics, "en")[0].reasoning


# ---------------------------------------------------------------------------
# generate_learning_path
# ---------------------------------------------------------------------------


class TestLearningPath:
    """Phase ordering, prerequisites, numbering."""

    def test_phase_order_and_minutes(self, make_metrics) -> None:
        path = generate_learning_path(make_metrics(algebra=20, geometry=85, functions=50, probability=50))
        assert [(s.topic, s.difficulty, s.estimated_minutes) for s in path.steps] == [
            ("algebra", "beginner", 15),
            ("functions", "intermediate", 20),
            ("probability", "intermediate", 20),
            ("geometry", "advanced", 30),
        ]

    def test_prerequisites(self, make_metrics) -> None:
        path = generate_learning_path(make_metrics(algebra=20, geometry=85, functions=50, probability=50))
        by_topic = {s.topic: s for s in path.steps}
        assert by_topic["algebra"].prerequisites == []
        assert by_topic["functions"].prerequisites == ["algebra"]
        assert by_topic["geometry"].prerequisites == ["algebra", "functions", "probability"]

    def test_steps_contiguous(self, make_metrics) -> None:
        path = generate_learning_path(make_metrics(10, 90, 40, 95))
        assert [s.step for s in path.steps] == list(range(1, path.total_steps + 1))
        assert path.total_steps == len(path.steps)
        assert path.current_step == 1

    def test_every_topic_appears_once(self, make_metrics) -> None:
        path = generate_learning_path(make_metrics(10, 90, 40, 95))
        assert sorted(s.topic for s in path.steps) == [
            "algebra", "functions", "geometry", "probability",
        ]

    def test_titles_localised(self, make_metrics) -> None:
        path = generate_learning_path(make_metrics(algebra=20), language="ja")
        assert path.steps[0].title == "代数の基礎"
