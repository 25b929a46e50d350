"""Prompt loading from disk with model-specific fallback chain and caching.

Loads Mana's prompt files from the prompts/<language>/ directory tree. Each
prompt type (persona, question, evaluation) has a base version and optional
model-specific overrides. The loader tries the model-specific file first,
falls back to base, and caches the result keyed by (provider, language).

Consumed by:
- ContextManager (ai/context.py) — renders the question and evaluation prompts
- Startup (main.py) — validates every supported language has its base prompts
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# Provider name → file suffix mapping.
# Unknown providers fall back to base files only.
_PROVIDER_SUFFIX: dict[str, str] = {
    "anthropic": "claude",
    "gemini": "gemini",
}

PROMPT_TYPES = ("persona", "question", "evaluation")


@dataclass(frozen=True)
class TutorPrompts:
    """Loaded prompt files for a single (provider, language) combo.

    Each field is the raw Markdown content of the corresponding prompt file,
    or None if the file doesn't exist (or is empty/whitespace-only).
    """

    persona: str | None
    question: str | None
    evaluation: str | None


class PromptLoader:
    """Loads and caches prompt files from disk.

    Args:
        prompts_dir: Base prompts directory (e.g. PROJECT_ROOT / "prompts").
    """

    def __init__(self, prompts_dir: Path) -> None:
        self._prompts_dir = prompts_dir
        self._cache: dict[tuple[str, str], TutorPrompts] = {}

    def load_prompts(self, provider: str, language: str) -> TutorPrompts:
        """Loads the prompt set for a language with model-specific fallback.

        For each prompt type, tries the model-specific variant first
        (e.g. question_gemini.md), then falls back to base (question_base.md).
        Empty or whitespace-only files are treated as absent.

        Args:
            provider: Provider name (e.g. "gemini", "anthropic").
            language: Language directory to read from (e.g. "ja").

        Returns:
            TutorPrompts with loaded content (or None per field).
        """
        cache_key = (provider, language)
        if cache_key in self._cache:
            logger.debug("Cache hit for prompts: provider=%s language=%s", provider, language)
            return self._cache[cache_key]

        logger.debug("Cache miss for prompts: provider=%s language=%s", provider, language)
        suffix = _PROVIDER_SUFFIX.get(provider)
        language_dir = self._prompts_dir / language

        result = TutorPrompts(
            persona=self._load_with_fallback(language_dir, "persona", suffix),
            question=self._load_with_fallback(language_dir, "question", suffix),
            evaluation=self._load_with_fallback(language_dir, "evaluation", suffix),
        )
        self._cache[cache_key] = result
        return result

    def validate_language(self, language: str) -> list[str]:
        """Checks that every base prompt file exists and is non-empty.

        Args:
            language: Language directory to check.

        Returns:
            List of error strings (empty means valid).
        """
        errors: list[str] = []
        language_dir = self._prompts_dir / language

        for prompt_type in PROMPT_TYPES:
            filename = f"{prompt_type}_base.md"
            filepath = language_dir / filename
            if not filepath.exists():
                errors.append(
                    f"Language '{language}': missing required prompt file "
                    f"prompts/{language}/{filename}"
                )
            elif not filepath.read_text(encoding="utf-8").strip():
                errors.append(
                    f"Language '{language}': prompt file "
                    f"prompts/{language}/{filename} is empty"
                )

        return errors

    def invalidate(self) -> None:
        """Clears the in-memory prompt cache."""
        logger.debug("Prompt cache invalidated (%d entries cleared)", len(self._cache))
        self._cache.clear()

    def _load_with_fallback(
        self, directory: Path, type_name: str, suffix: str | None
    ) -> str | None:
        """Loads a prompt file with model-specific fallback to base.

        Tries {type_name}_{suffix}.md first (if suffix is not None),
        then {type_name}_base.md. Returns None if neither exists or
        if the found file is empty/whitespace-only.
        """
        if suffix is not None:
            content = self._read_prompt_file(directory / f"{type_name}_{suffix}.md")
            if content is not None:
                return content

        return self._read_prompt_file(directory / f"{type_name}_base.md")

    @staticmethod
    def _read_prompt_file(path: Path) -> str | None:
        """Reads a single prompt file, returning None if absent or empty."""
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

        stripped = content.strip()
        if not stripped:
            return None

        return stripped
