"""Context assembly — renders question and evaluation prompts.

Fills the Markdown prompt templates loaded by PromptLoader with the
character's current situation: topic, level, understanding, difficulty,
mood and the recent conversation. Produces an AssembledPrompt that maps
directly to AIGateway.complete() args.

Templates use ``$name`` placeholders (string.Template), so formulas with
braces such as ``{ x + y = 5 }`` survive untouched.

Consumed by:
- TutorService (tutor/service.py) — before every AI question/evaluation call
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from string import Template

from mana.ai.prompts import PromptLoader, TutorPrompts
from mana.schemas import CharacterState, ConversationMessage
from mana.tutor.topics import difficulty_for, prompt_name

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_WINDOW = 6

# ---------------------------------------------------------------------------
# Per-language labels substituted into the templates.
# ---------------------------------------------------------------------------
_DIFFICULTY_LABELS: dict[str, dict[str, str]] = {
    "ja": {"beginner": "基礎", "intermediate": "標準", "advanced": "応用"},
    "en": {"beginner": "basic", "intermediate": "standard", "advanced": "advanced"},
}

_MOOD_DESCRIPTIONS: dict[str, dict[str, str]] = {
    "ja": {
        "curious": "好奇心旺盛で学習意欲が高い",
        "happy": "満足していて前向き",
        "confused": "少し困惑している",
        "excited": "興奮していて非常に積極的",
    },
    "en": {
        "curious": "curious and eager to learn",
        "happy": "satisfied and upbeat",
        "confused": "a little confused",
        "excited": "excited and very engaged",
    },
}

_EMPTY_HISTORY: dict[str, str] = {
    "ja": "まだ会話が始まったばかりです",
    "en": "The conversation has only just started.",
}


class PromptUnavailableError(LookupError):
    """A required prompt file is missing for the requested language."""


@dataclass(frozen=True)
class AssembledPrompt:
    """Provider-ready prompt pair for AIGateway.complete()."""

    system_prompt: str
    prompt: str


class ContextManager:
    """Assembles AI prompts from prompt files and character state.

    Args:
        prompt_loader: Injected PromptLoader for loading prompt files.
        provider: Provider name used for model-specific prompt overrides.
        language: Language of the prompt files and labels.
        history_window: How many recent messages the question prompt shows.
    """

    def __init__(
        self,
        prompt_loader: PromptLoader,
        provider: str,
        language: str = "ja",
        history_window: int = DEFAULT_HISTORY_WINDOW,
    ) -> None:
        self._loader = prompt_loader
        self._provider = provider
        self._language = language
        self._history_window = history_window

    @property
    def language(self) -> str:
        return self._language

    # -------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------

    def build_question_prompt(
        self,
        topic: str,
        state: CharacterState,
        history: Sequence[ConversationMessage],
    ) -> AssembledPrompt:
        """Builds the question-generation prompt.

        Args:
            topic: Catalogue topic to ask about.
            state: Current character state.
            history: Conversation so far, oldest first.

        Raises:
            PromptUnavailableError: If the persona or question file is missing.
        """
        prompts = self._prompts()
        template = self._require(prompts.question, "question")
        values = self._situation(topic, state)
        values["history"] = self._format_history(history)
        return AssembledPrompt(
            system_prompt=self._require(prompts.persona, "persona"),
            prompt=Template(template).safe_substitute(values),
        )

    def build_evaluation_prompt(
        self,
        answer: str,
        topic: str,
        state: CharacterState,
        history: Sequence[ConversationMessage],
    ) -> AssembledPrompt:
        """Builds the answer-evaluation prompt.

        The prompt quotes the last question the character asked (empty if
        there is none) and the user's explanation verbatim.

        Raises:
            PromptUnavailableError: If the persona or evaluation file is missing.
        """
        prompts = self._prompts()
        template = self._require(prompts.evaluation, "evaluation")
        values = self._situation(topic, state)
        values["last_question"] = last_assistant_message(history)
        values["answer"] = answer
        return AssembledPrompt(
            system_prompt=self._require(prompts.persona, "persona"),
            prompt=Template(template).safe_substitute(values),
        )

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------

    def _prompts(self) -> TutorPrompts:
        return self._loader.load_prompts(self._provider, self._language)

    def _require(self, content: str | None, prompt_type: str) -> str:
        if content is None:
            raise PromptUnavailableError(
                f"No {prompt_type} prompt for language {self._language!r}"
            )
        return content

    def _situation(self, topic: str, state: CharacterState) -> dict[str, str]:
        understanding = state.understanding_of(topic)
        difficulty = difficulty_for(understanding)
        labels = _DIFFICULTY_LABELS.get(self._language, _DIFFICULTY_LABELS["en"])
        moods = _MOOD_DESCRIPTIONS.get(self._language, _MOOD_DESCRIPTIONS["en"])
        return {
            "name": state.name,
            "topic_name": prompt_name(topic, self._language),
            "level": str(state.level),
            "understanding": str(understanding),
            "difficulty": labels[difficulty],
            "mood": moods[state.mood],
        }

    def _format_history(self, history: Sequence[ConversationMessage]) -> str:
        recent = list(history)[-self._history_window:] if self._history_window else []
        if not recent:
            return _EMPTY_HISTORY.get(self._language, _EMPTY_HISTORY["en"])
        return "\n".join(f"{msg.role}: {msg.content}" for msg in recent)


def last_assistant_message(history: Sequence[ConversationMessage]) -> str:
    """Returns the content of the most recent assistant message, or ""."""
    for msg in reversed(history):
        if msg.is_assistant:
            return msg.content
    return ""
