"""Shared FastAPI dependencies — state store, tutor service, AI injection.

Module-level singletons for each service. Route handlers access them via
FastAPI's Depends() system — never by importing implementations directly.
When the team swaps the stub store for a real implementation, they change
the class here and every downstream handler picks it up automatically.

TEAM: To wire your real store, replace the stub class on the right side
of the _state_store assignment below. The get_* functions and all route
handlers stay unchanged.

Usage:
    from mana.api.deps import get_state_store, get_tutor_service

    @router.get("/something")
    async def do_thing(
        store: StateStore = Depends(get_state_store),
        service: TutorService = Depends(get_tutor_service),
    ): ...
"""

import logging

from fastapi import HTTPException

from mana.ai.prompts import PromptLoader
from mana.ai.providers.base import AIProvider
from mana.config import Settings
from mana.hooks.interfaces import StateStore
from mana.hooks.state_store import InMemoryStateStore
from mana.models import ModelConfig
from mana.schemas import ApiError, ApiResponse
from mana.tutor.service import TutorService

logger = logging.getLogger("mana")

# ---------------------------------------------------------------------------
# Service singletons — the swap point
# ---------------------------------------------------------------------------

# TEAM: Replace with your real implementation here.
_state_store: StateStore = InMemoryStateStore()

# Set by _init_services() in main.py at startup
_prompt_loader: PromptLoader | None = None
_tutor_service: TutorService | None = None


# ---------------------------------------------------------------------------
# Dependency providers
# ---------------------------------------------------------------------------


def get_state_store() -> StateStore:
    """Returns the state store singleton."""
    return _state_store


def get_tutor_service() -> TutorService:
    """Returns the tutor service singleton.

    Raises HTTPException(503) if the service hasn't been initialized yet
    (startup not complete).
    """
    if _tutor_service is None:
        raise HTTPException(
            status_code=503,
            detail=ApiResponse(
                ok=False,
                error=ApiError(
                    code="SERVICE_UNAVAILABLE",
                    message="Tutor service is not yet available. Server is starting up.",
                ),
            ).model_dump(),
        )
    return _tutor_service


# ---------------------------------------------------------------------------
# AI provider factory
# ---------------------------------------------------------------------------


def create_provider(model_config: ModelConfig, settings: Settings) -> AIProvider:
    """Routes a ModelConfig to the correct concrete provider instance.

    Args:
        model_config: The resolved model configuration.
        settings: Application settings with API keys.

    Returns:
        A concrete AIProvider instance (GeminiProvider or AnthropicProvider).

    Raises:
        ValueError: If the provider name is not recognized.
    """
    # Local imports to avoid pulling SDK dependencies at module load time.
    if model_config.provider == "gemini":
        from mana.ai.providers.gemini import GeminiProvider

        return GeminiProvider(api_key=settings.google_api_key)

    if model_config.provider == "anthropic":
        from mana.ai.providers.anthropic import AnthropicProvider

        return AnthropicProvider(api_key=settings.anthropic_api_key)

    raise ValueError(
        f"Unknown provider: {model_config.provider!r}. "
        f"Expected 'gemini' or 'anthropic'."
    )
