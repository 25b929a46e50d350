"""Anthropic Claude AI provider using the anthropic SDK.

Implements the AIProvider contract for Anthropic's Claude model family
through the Messages API. One attempt per call — the SDK client is built
with max_retries=0 and SDK errors are translated into AIError.

Imports from base.py + anthropic SDK.
"""

import logging

import anthropic

from mana.ai.providers.base import (
    AIError,
    AIProvider,
    AIUnavailableError,
    ModelConfig,
    UsageInfo,
)

logger = logging.getLogger(__name__)


def _translate_error(exc: anthropic.APIError) -> AIError:
    """Maps an anthropic SDK error onto the AIError taxonomy."""
    if isinstance(exc, (anthropic.AuthenticationError, anthropic.PermissionDeniedError)):
        return AIUnavailableError("Anthropic rejected credentials")
    if isinstance(exc, anthropic.APIStatusError):
        return AIError(f"Anthropic API error {exc.status_code}: {exc.message}")
    return AIError(f"Anthropic API error: {exc}")


class AnthropicProvider(AIProvider):
    """Anthropic Claude provider using the anthropic SDK.

    Args:
        api_key: Anthropic API key.
    """

    def __init__(self, api_key: str) -> None:
        self._client = anthropic.AsyncAnthropic(api_key=api_key, max_retries=0)

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
            messages: Conversation history as {"role": ..., "content": ...} dicts.
            model_config: Provider-specific configuration.

        Returns:
            Tuple of (full response text, token usage information).

        Raises:
            AIError: On any Anthropic API error.
        """
        if model_config.thinking_budget > 0:
            logger.debug(
                "thinking_budget=%d ignored for Anthropic provider",
                model_config.thinking_budget,
            )

        kwargs: dict = {
            "model": model_config.model_id,
            "messages": messages,
            "max_tokens": model_config.max_output_tokens,
            "temperature": model_config.temperature,
        }
        if system_prompt:
            kwargs["system"] = system_prompt

        try:
            response = await self._client.messages.create(**kwargs)
        except anthropic.APIError as exc:
            raise _translate_error(exc) from exc

        # Concatenate text from all text content blocks
        parts_text = [block.text for block in response.content if block.type == "text"]

        usage = UsageInfo(
            prompt_tokens=response.usage.input_tokens,
            completion_tokens=response.usage.output_tokens,
        )
        return "".join(parts_text), usage
