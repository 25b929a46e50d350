"""Tests for mana.ai.reply_analysis — quality and mood read from AI replies."""

import pytest

from mana.ai.reply_analysis import analyze_reply_quality, mood_from_reply, reply_score

PRAISE_JA = "すごい！とても分かりやすい説明だったよ！😊 ありがとう！"
CONFUSED_JA = "うーん、ちょっと難しくて分からないかも...😅"
LONG_ANSWER = "両辺から3を引いて2で割ります。" * 10


class TestReplyQuality:
    """Keyword scoring of the reply plus the long-answer bonus."""

    def test_praise_is_good(self) -> None:
        assert reply_score(PRAISE_JA, "x=2") == 3
        assert analyze_reply_quality(PRAISE_JA, "x=2") == "good"

    def test_praise_for_long_answer_is_excellent(self) -> None:
        assert len(LONG_ANSWER) > 100
        assert analyze_reply_quality(PRAISE_JA, LONG_ANSWER) == "excellent"

    def test_single_encouragement_is_average(self) -> None:
        assert analyze_reply_quality("なるほど！", "x=2") == "average"

    def test_neutral_reply_is_average(self) -> None:
        assert analyze_reply_quality("Hello there.", "x=2") == "average"

    def test_repeated_confusion_is_poor(self) -> None:
        assert analyze_reply_quality(CONFUSED_JA, "???") == "poor"

    def test_english_reply(self) -> None:
        assert analyze_reply_quality("Wow, amazing explanation! Thank you!", "x=2") == "good"
        assert analyze_reply_quality("Hmm, I don't understand. It's difficult.", "?") == "poor"

    def test_language_restriction(self) -> None:
        assert analyze_reply_quality(PRAISE_JA, "x=2", language="en") == "average"


class TestMood:
    """Priority: excited > confused > happy > curious."""

    @pytest.mark.parametrize(
        ("reply", "mood"),
        [
            (PRAISE_JA, "excited"),
            (CONFUSED_JA, "confused"),
            ("なるほど、ありがとう！", "happy"),
            ("それで、次はどうなるの？", "curious"),
            ("Wow, that's neat.", "excited"),
            ("I see, thank you.", "happy"),
        ],
    )
    def test_mood(self, reply: str, mood: str) -> None:
        assert mood_from_reply(reply) == mood

    def test_excited_beats_confused(self) -> None:
        assert mood_from_reply("すごい！でもちょっと難しい") == "excited"
