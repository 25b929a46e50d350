"""Tests for mana.ai.prompts — PromptLoader fallback chain and caching.

Uses tmp_path prompt trees so overrides and missing files can be staged.
"""

import logging
from pathlib import Path

import pytest

from mana.ai.prompts import PromptLoader, TutorPrompts


def _write(root: Path, language: str, name: str, content: str) -> Path:
    directory = root / language
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def prompts_dir(tmp_path: Path) -> Path:
    """A minimal prompt tree with base files for "ja"."""
    for prompt_type in ("persona", "question", "evaluation"):
        _write(tmp_path, "ja", f"{prompt_type}_base.md", f"{prompt_type} base\n")
    return tmp_path


class TestLoadPrompts:
    """Model-specific override → base fallback."""

    def test_base_files(self, prompts_dir: Path) -> None:
        prompts = PromptLoader(prompts_dir).load_prompts("gemini", "ja")
        assert prompts == TutorPrompts(
            persona="persona base", question="question base", evaluation="evaluation base"
        )

    def test_gemini_override(self, prompts_dir: Path) -> None:
        _write(prompts_dir, "ja", "question_gemini.md", "gemini question")
        prompts = PromptLoader(prompts_dir).load_prompts("gemini", "ja")
        assert prompts.question == "gemini question"
        assert prompts.persona == "persona base"

    def test_anthropic_uses_claude_suffix(self, prompts_dir: Path) -> None:
        _write(prompts_dir, "ja", "persona_claude.md", "claude persona")
        loader = PromptLoader(prompts_dir)
        assert loader.load_prompts("anthropic", "ja").persona == "claude persona"
        assert loader.load_prompts("gemini", "ja").persona == "persona base"

    def test_empty_override_falls_back(self, prompts_dir: Path) -> None:
        _write(prompts_dir, "ja", "evaluation_gemini.md", "   \n")
        prompts = PromptLoader(prompts_dir).load_prompts("gemini", "ja")
        assert prompts.evaluation == "evaluation base"

    def test_unknown_provider_uses_base(self, prompts_dir: Path) -> None:
        prompts = PromptLoader(prompts_dir).load_prompts("mock", "ja")
        assert prompts.question == "question base"

    def test_missing_language_yields_none(self, prompts_dir: Path) -> None:
        prompts = PromptLoader(prompts_dir).load_prompts("gemini", "fr")
        assert prompts == TutorPrompts(persona=None, question=None, evaluation=None)


class TestCache:
    """Results are cached per (provider, language) until invalidated."""

    def test_cached_until_invalidated(self, prompts_dir: Path) -> None:
        loader = PromptLoader(prompts_dir)
        first = loader.load_prompts("gemini", "ja")
        _write(prompts_dir, "ja", "question_base.md", "edited")

        assert loader.load_prompts("gemini", "ja") is first

        loader.invalidate()
        assert loader.load_prompts("gemini", "ja").question == "edited"

    def test_cache_keyed_by_language(self, prompts_dir: Path) -> None:
        _write(prompts_dir, "en", "question_base.md", "english question")
        loader = PromptLoader(prompts_dir)
        assert loader.load_prompts("gemini", "ja").question == "question base"
        assert loader.load_prompts("gemini", "en").question == "english question"

    def test_cache_hit_logged(
        self, prompts_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        loader = PromptLoader(prompts_dir)
        with caplog.at_level(logging.DEBUG, logger="mana.ai.prompts"):
            loader.load_prompts("gemini", "ja")
            loader.load_prompts("gemini", "ja")
        messages = [r.getMessage() for r in caplog.records]
        assert any("Cache miss" in m for m in messages)
        assert any("Cache hit" in m for m in messages)


class TestValidateLanguage:
    """Startup validation of base files."""

    def test_complete_language_valid(self, prompts_dir: Path) -> None:
        assert PromptLoader(prompts_dir).validate_language("ja") == []

    def test_missing_files_reported(self, prompts_dir: Path) -> None:
        errors = PromptLoader(prompts_dir).validate_language("en")
        assert len(errors) == 3
        assert all("missing" in e for e in errors)

    def test_empty_file_reported(self, prompts_dir: Path) -> None:
        _write(prompts_dir, "ja", "persona_base.md", "")
        errors = PromptLoader(prompts_dir).validate_language("ja")
        assert errors == ["Language 'ja': prompt file prompts/ja/persona_base.md is empty"]
