"""App configuration — environment variable loading with typed defaults.

Loads settings from .env file (via python-dotenv) and os.environ.
Real environment variables take precedence over .env file values.

The model env var (TUTOR_MODEL=GEMINI_FLASH) is resolved to a ModelConfig
at load time via MODEL_MAP from mana.models.

Usage:
    from mana.config import get_settings
    settings = get_settings()
    print(settings.tutor_model.model_id)  # "gemini-2.5-flash"
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from mana.models import MODEL_MAP, ModelConfig

# Only load .env from the project root — don't traverse parent directories.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
_DOTENV_PATH = PROJECT_ROOT / ".env"

_AI_BACKENDS = ("gemini", "anthropic", "none")

_DEFAULT_FAMILY: dict[str, str] = {
    "gemini": "GEMINI_FLASH",
    "anthropic": "CLAUDE_HAIKU",
    "none": "GEMINI_FLASH",
}

# Values shipped in .env.example — treated as "not configured".
_PLACEHOLDER_KEYS = frozenset({
    "your_gemini_api_key_here",
    "your_anthropic_api_key_here",
})


@dataclass(frozen=True)
class Settings:
    """Typed configuration for the Mana tutor backend.

    All fields have sensible defaults for local development.
    """

    # App
    app_env: str
    app_port: int
    log_level: str
    cors_origins: list[str]

    # AI
    ai_backend: str
    tutor_model: ModelConfig
    google_api_key: str
    anthropic_api_key: str
    ai_timeout_seconds: float

    # Tutor
    history_window: int
    default_language: str
    supported_languages: list[str]

    @property
    def ai_api_key(self) -> str:
        """Returns the API key for the configured backend ("" if none)."""
        if self.ai_backend == "gemini":
            return self.google_api_key
        if self.ai_backend == "anthropic":
            return self.anthropic_api_key
        return ""

    @property
    def ai_enabled(self) -> bool:
        """True when a backend is selected and its API key is present."""
        return self.ai_backend != "none" and bool(self.ai_api_key)


def _resolve_model(env_var: str, value: str, backend: str) -> ModelConfig:
    """Resolves a family-name string to a ModelConfig via MODEL_MAP.

    Args:
        env_var: Name of the environment variable (for error messages).
        value: The family-name value from the environment (e.g. "GEMINI_FLASH").
        backend: The selected AI backend; the model must belong to it.

    Returns:
        The resolved ModelConfig.

    Raises:
        ValueError: If the value doesn't match any key in MODEL_MAP, or the
            model's provider differs from the selected backend.
    """
    if value not in MODEL_MAP:
        valid = ", ".join(sorted(MODEL_MAP.keys()))
        raise ValueError(
            f"Invalid value for {env_var}: {value!r}. "
            f"Valid options: {valid}"
        )
    config = MODEL_MAP[value]
    if backend != "none" and config.provider != backend:
        raise ValueError(
            f"{env_var}={value!r} is a {config.provider!r} model but "
            f"AI_BACKEND is {backend!r}"
        )
    return config


def _resolve_backend(value: str) -> str:
    """Validates the AI_BACKEND value."""
    backend = value.strip().lower()
    if backend not in _AI_BACKENDS:
        raise ValueError(
            f"Invalid value for AI_BACKEND: {value!r}. "
            f"Valid options: {', '.join(_AI_BACKENDS)}"
        )
    return backend


def _clean_key(value: str) -> str:
    """Strips an API key and blanks known placeholder values."""
    value = value.strip()
    return "" if value in _PLACEHOLDER_KEYS else value


def _split_csv(value: str) -> list[str]:
    """Splits a comma-separated string into a list of stripped, non-empty values."""
    return [item.strip() for item in value.split(",") if item.strip()]


def _load_settings() -> Settings:
    """Loads configuration from .env file and environment variables.

    Returns:
        A fully resolved Settings instance.
    """
    load_dotenv(_DOTENV_PATH)

    backend = _resolve_backend(os.environ.get("AI_BACKEND", "gemini"))
    google_key = os.environ.get("GOOGLE_API_KEY") or os.environ.get("GEMINI_API_KEY", "")

    return Settings(
        # App
        app_env=os.environ.get("APP_ENV", "development"),
        app_port=int(os.environ.get("APP_PORT", "8000")),
        log_level=os.environ.get("LOG_LEVEL", "info"),
        cors_origins=_split_csv(
            os.environ.get("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
        ),
        # AI
        ai_backend=backend,
        tutor_model=_resolve_model(
            "TUTOR_MODEL",
            os.environ.get("TUTOR_MODEL", _DEFAULT_FAMILY[backend]),
            backend,
        ),
        google_api_key=_clean_key(google_key),
        anthropic_api_key=_clean_key(os.environ.get("ANTHROPIC_API_KEY", "")),
        ai_timeout_seconds=float(os.environ.get("AI_TIMEOUT_SECONDS", "10")),
        # Tutor
        history_window=int(os.environ.get("HISTORY_WINDOW", "6")),
        default_language=os.environ.get("DEFAULT_LANGUAGE", "ja"),
        supported_languages=_split_csv(
            os.environ.get("SUPPORTED_LANGUAGES", "ja,en")
        ),
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Returns the singleton Settings instance. Loads .env on first call."""
    global _settings
    if _settings is None:
        _settings = _load_settings()
    return _settings
