"""Model ID registry — single source of truth for AI model identifiers.

Every AI call Mana makes resolves its model ID through this module. The rest
of the codebase imports family-name constants from here — no raw model ID
strings anywhere else.

Two-layer abstraction:
  Layer 1: TUTOR_MODEL env var names a model family ("GEMINI_FLASH")
  Layer 2: MODEL_MAP resolves the family → ModelConfig for the provider

To swap a model: change a constant below.
"""

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Model IDs (update when providers release new versions)
# ---------------------------------------------------------------------------

# --- Gemini models ---
GEMINI_FLASH_LITE: str = "gemini-flash-lite-latest"
GEMINI_FLASH: str = "gemini-2.5-flash"
GEMINI_PRO: str = "gemini-2.5-pro"

# --- Claude models ---
CLAUDE_HAIKU: str = "claude-haiku-4-5-20251001"
CLAUDE_SONNET: str = "claude-sonnet-4-5"


@dataclass(frozen=True)
class ModelConfig:
    """Bundles all provider-specific configuration for one model.

    Leaf module — no project imports. Consumed by provider
    implementations and the AI gateway.
    """

    provider: str          # "gemini", "anthropic" or "mock"
    model_id: str          # e.g. "gemini-2.5-flash"
    temperature: float = 0.7
    max_output_tokens: int = 1000
    thinking_budget: int = 0  # Gemini thinking tokens (0 = off)


# Keys match the constant names exactly (case-sensitive).
MODEL_MAP: dict[str, ModelConfig] = {
    "GEMINI_FLASH_LITE": ModelConfig(provider="gemini", model_id=GEMINI_FLASH_LITE),
    "GEMINI_FLASH": ModelConfig(provider="gemini", model_id=GEMINI_FLASH),
    "GEMINI_PRO": ModelConfig(provider="gemini", model_id=GEMINI_PRO),
    "CLAUDE_HAIKU": ModelConfig(provider="anthropic", model_id=CLAUDE_HAIKU),
    "CLAUDE_SONNET": ModelConfig(provider="anthropic", model_id=CLAUDE_SONNET),
}


def resolve_model(family: str) -> ModelConfig:
    """Resolves a family-name constant to its ModelConfig.

    Args:
        family: Model family name ("GEMINI_FLASH", "CLAUDE_HAIKU", ...).

    Returns:
        The ModelConfig for the family.

    Raises:
        KeyError: If the family name is not found in MODEL_MAP.
    """
    return MODEL_MAP[family]
