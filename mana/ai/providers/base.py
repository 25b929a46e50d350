"""Base AI provider interface, usage record and error taxonomy.

Defines the contract that every AI provider implementation (Gemini,
Anthropic, Mock) must satisfy, plus the AIError family every provider
translates its SDK errors into. Callers above the gateway only ever see
AIError — never a google-genai or anthropic exception.

Leaf module — imports only stdlib and mana.models.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from mana.models import ModelConfig

__all__ = [
    "AIError",
    "AIProvider",
    "AITimeoutError",
    "AIUnavailableError",
    "ModelConfig",
    "UsageInfo",
]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class AIError(Exception):
    """Any failure of an AI completion: transport, quota, bad response."""


class AITimeoutError(AIError):
    """The completion did not finish within the configured timeout."""


class AIUnavailableError(AIError):
    """No provider is configured, or the provider rejected the credentials."""


# ---------------------------------------------------------------------------
# Usage
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UsageInfo:
    """Token usage from a completed AI call. Used for usage logging."""

    prompt_tokens: int
    completion_tokens: int


# ---------------------------------------------------------------------------
# AIProvider ABC — the interface every provider implements
# ---------------------------------------------------------------------------


class AIProvider(ABC):
    """Abstract base for AI model providers.

    Concrete implementations (GeminiProvider, AnthropicProvider,
    MockProvider) implement complete() against their respective APIs.
    Providers make exactly one attempt per call; timeouts are enforced by
    the AIGateway wrapping them.
    """

    @abstractmethod
    async def complete(
        self,
        *,
        system_prompt: str,
        messages: list[dict[str, str]],
        model_config: ModelConfig,
    ) -> tuple[str, UsageInfo]:
        """Returns the full response text and usage info.

        Args:
            system_prompt: The assembled system instruction.
            messages: Conversation as {"role": ..., "content": ...} dicts,
                roles "user" or "assistant".
            model_config: Provider-specific configuration (model ID,
                temperature, output limit).

        Returns:
            Tuple of (full response text, token usage information).

        Raises:
            AIError: On any transport, quota or API failure.
        """
