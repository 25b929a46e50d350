"""Tests for mana.tutor.composer — template replies and questions."""

import random

import pytest

from mana.schemas import ConversationMessage
from mana.tutor.composer import ResponseComposer, is_similar, tokenize
from mana.tutor.templates import EN, JA
from mana.tutor.topics import UnknownTopicError


def _composer(language: str = "en", seed: int = 3) -> ResponseComposer:
    return ResponseComposer(language=language, rng=random.Random(seed))


# ---------------------------------------------------------------------------
# Similarity
# ---------------------------------------------------------------------------


class TestSimilarity:
    """Keyword tokenization and the shared-token rule."""

    def test_tokenize_drops_stopwords_and_single_letters(self) -> None:
        assert tokenize("How do I solve x + 5 = 12?") == {"solve"}

    def test_tokenize_splits_on_script_runs(self) -> None:
        assert tokenize("方程式の解き方") == {"方程式の解き方"}
        assert tokenize("三角形 area") == {"三角形", "area"}

    def test_three_shared_tokens_is_similar(self) -> None:
        assert is_similar(
            "solve linear equation quickly", "solve linear equation slowly"
        )

    def test_two_shared_tokens_is_not_similar(self) -> None:
        assert not is_similar("solve linear equation", "solve linear inequality")


# ---------------------------------------------------------------------------
# compose
# ---------------------------------------------------------------------------


class TestCompose:
    """Pool selection by quality and the topic comment."""

    @pytest.mark.parametrize("quality", ["excellent", "good"])
    def test_positive_pool_with_topic_comment(self, quality: str) -> None:
        rng = random.Random(3)
        expected = f"{rng.choice(EN.positive)} {rng.choice(EN.topic_comments['geometry'])}"
        assert _composer().compose(quality, "geometry") == expected

    def test_average_uses_encouraging_pool(self) -> None:
        reply = _composer().compose("average", "functions")
        assert any(reply.startswith(t) for t in EN.encouraging)
        assert any(reply.endswith(c) for c in EN.topic_comments["functions"])

    def test_poor_has_no_topic_comment(self) -> None:
        reply = _composer().compose("poor", "algebra")
        assert reply in EN.confused

    def test_japanese_pools(self) -> None:
        reply = _composer("ja").compose("poor", "probability")
        assert reply in JA.confused

    def test_same_seed_same_reply(self) -> None:
        assert _composer(seed=11).compose("good", "algebra") == _composer(seed=11).compose(
            "good", "algebra"
        )

    def test_unknown_topic_raises(self) -> None:
        with pytest.raises(UnknownTopicError):
            _composer().compose("good", "calculus")

    @pytest.mark.parametrize("seed", range(20))
    def test_recent_replies_skipped(self, seed: int) -> None:
        history = [
            ConversationMessage(role="assistant", content=f"{reply} Geometry is fun!")
            for reply in EN.positive[:3]
        ]
        reply = _composer(seed=seed).compose("good", "geometry", history)
        assert reply.startswith(EN.positive[3:])

    def test_only_last_three_character_messages_count(self) -> None:
        history = [
            ConversationMessage(role="assistant", content=EN.confused[0]),
            ConversationMessage(role="assistant", content=EN.confused[1]),
            ConversationMessage(role="user", content=EN.confused[2]),
            ConversationMessage(role="Mana", content=EN.confused[3]),
            ConversationMessage(role="assistant", content=EN.confused[4]),
        ]
        seen = {_composer(seed=seed).compose("poor", "algebra", history) for seed in range(40)}
        assert seen == {EN.confused[0], EN.confused[2]}


# ---------------------------------------------------------------------------
# compose_question
# ---------------------------------------------------------------------------


class TestComposeQuestion:
    """Difficulty tier, repetition avoidance."""

    @pytest.mark.parametrize(
        ("understanding", "tier"),
        [(0, "beginner"), (45, "intermediate"), (90, "advanced")],
    )
    def test_question_from_matching_tier(self, understanding: int, tier: str) -> None:
        question = _composer().compose_question("geometry", understanding)
        assert question in EN.questions["geometry"][tier]

    def test_repeated_question_gets_variation_prefix(self) -> None:
        rng = random.Random(3)
        question = rng.choice(EN.questions["algebra"]["beginner"])
        variation = rng.choice(EN.variations)
        history = [ConversationMessage(role="assistant", content=question)]

        result = _composer().compose_question("algebra", 10, history)
        assert result == f"{variation} {question}"

    def test_user_messages_do_not_count_as_asked(self) -> None:
        question = random.Random(3).choice(EN.questions["algebra"]["beginner"])
        history = [ConversationMessage(role="user", content=question)]
        assert _composer().compose_question("algebra", 10, history) == question

    def test_only_last_three_questions_checked(self) -> None:
        question = random.Random(3).choice(EN.questions["algebra"]["beginner"])
        history = [ConversationMessage(role="assistant", content=question)] + [
            ConversationMessage(role="assistant", content=f"Unrelated filler {i}")
            for i in range(3)
        ]
        assert _composer().compose_question("algebra", 10, history) == question

    def test_character_role_names_count_as_assistant(self) -> None:
        question = random.Random(3).choice(EN.questions["algebra"]["beginner"])
        history = [ConversationMessage(role="Mana", content=question)]
        result = _composer().compose_question("algebra", 0, history)
        assert result.endswith(question)
        assert result != question


# ---------------------------------------------------------------------------
# Fallbacks and language selection
# ---------------------------------------------------------------------------


class TestFallbacks:
    def test_fallback_texts(self) -> None:
        composer = _composer("ja")
        assert composer.fallback_reply() == JA.fallback_reply
        assert composer.fallback_question() == JA.fallback_question

    def test_unknown_language_uses_japanese(self) -> None:
        assert ResponseComposer(language="fr").language == "ja"
