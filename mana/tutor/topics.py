"""Topic catalogue — the four fixed math domains and their lookups.

Leaf module of the tutor core: imports only from mana.schemas.
"""

from mana.schemas import TOPICS

# Display names per language, used in prompts, path titles and reasoning text.
_DISPLAY_NAMES: dict[str, dict[str, str]] = {
    "ja": {
        "algebra": "代数",
        "geometry": "幾何",
        "functions": "関数",
        "probability": "確率",
    },
    "en": {
        "algebra": "algebra",
        "geometry": "geometry",
        "functions": "functions",
        "probability": "probability",
    },
}

# Longer names used in AI prompts.
_PROMPT_NAMES: dict[str, dict[str, str]] = {
    "ja": {
        "algebra": "代数（方程式・因数分解）",
        "geometry": "幾何（図形・角度）",
        "functions": "関数（グラフ・座標）",
        "probability": "確率（場合の数）",
    },
    "en": {
        "algebra": "algebra (equations, factoring)",
        "geometry": "geometry (shapes, angles)",
        "functions": "functions (graphs, coordinates)",
        "probability": "probability (counting outcomes)",
    },
}

BEGINNER_BELOW = 30
INTERMEDIATE_BELOW = 70


class UnknownTopicError(ValueError):
    """Raised when a topic outside the fixed catalogue is requested."""

    def __init__(self, topic: object) -> None:
        self.topic = topic
        super().__init__(
            f"Unknown topic: {topic!r}. Expected one of: {', '.join(TOPICS)}"
        )


def require_topic(topic: str) -> str:
    """Returns the topic unchanged if it is in the catalogue.

    Raises:
        UnknownTopicError: If the topic is not one of the four domains.
    """
    if topic not in TOPICS:
        raise UnknownTopicError(topic)
    return topic


def difficulty_for(understanding: float) -> str:
    """Maps an understanding/proficiency score to a difficulty tier."""
    if understanding < BEGINNER_BELOW:
        return "beginner"
    if understanding < INTERMEDIATE_BELOW:
        return "intermediate"
    return "advanced"


def display_name(topic: str, language: str = "ja") -> str:
    """Returns the short human-readable topic name (falls back to the key)."""
    names = _DISPLAY_NAMES.get(language, _DISPLAY_NAMES["en"])
    return names.get(topic, topic)


def prompt_name(topic: str, language: str = "ja") -> str:
    """Returns the descriptive topic name used inside AI prompts."""
    names = _PROMPT_NAMES.get(language, _PROMPT_NAMES["en"])
    return names.get(topic, topic)
