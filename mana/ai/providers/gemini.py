"""Google Gemini AI provider using the google-genai SDK.

Implements the AIProvider contract for Google's Gemini model family.
Non-streaming only: Mana's replies are short and are analysed as a whole
before being shown. One attempt per call — SDK-level retries are disabled
and SDK errors are translated into AIError.

Imports from base.py + google-genai SDK.
"""

import logging

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from mana.ai.providers.base import (
    AIError,
    AIProvider,
    AIUnavailableError,
    ModelConfig,
    UsageInfo,
)

logger = logging.getLogger(__name__)

_AUTH_ERROR_CODES = frozenset({401, 403})


def _build_contents(messages: list[dict[str, str]]) -> list[types.Content]:
    """Converts provider-neutral message dicts to Gemini Content objects.

    Role mapping: "user" → "user", "assistant" → "model".
    """
    role_map = {"user": "user", "assistant": "model"}
    contents = []
    for msg in messages:
        role = role_map.get(msg["role"], msg["role"])
        contents.append(
            types.Content(
                parts=[types.Part(text=msg["content"])],
                role=role,
            )
        )
    return contents


def _build_config(
    system_prompt: str,
    model_config: ModelConfig,
) -> types.GenerateContentConfig:
    """Builds the GenerateContentConfig for a Gemini API call."""
    config = types.GenerateContentConfig(
        temperature=model_config.temperature,
        max_output_tokens=model_config.max_output_tokens,
        thinking_config=types.ThinkingConfig(
            thinking_budget=model_config.thinking_budget,
        ),
    )
    if system_prompt:
        config.system_instruction = system_prompt
    return config


def _translate_error(exc: genai_errors.APIError) -> AIError:
    """Maps a google-genai error onto the AIError taxonomy."""
    if exc.code in _AUTH_ERROR_CODES:
        return AIUnavailableError(f"Gemini rejected credentials ({exc.code})")
    return AIError(f"Gemini API error {exc.code}: {exc.message}")


class GeminiProvider(AIProvider):
    """Gemini AI provider using the google-genai SDK.

    Args:
        api_key: Google API key for Gemini access.
    """

    def __init__(self, api_key: str) -> None:
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(
                retry_options=types.HttpRetryOptions(attempts=1),
            ),
        )

    async def complete(
        self,
        *,
        system_prompt: str,
        messages: list[dict[str, str]],
        model_config: ModelConfig,
    ) -> tuple[str, UsageInfo]:
        """Returns the full response text and usage info.

        Thinking parts are skipped; an empty candidate list (safety block)
        yields an empty string, which the gateway treats as a failure.

        Args:
            system_prompt: The assembled system instruction.
            messages: Conversation history as {"role": ..., "content": ...} dicts.
            model_config: Provider-specific configuration.

        Returns:
            Tuple of (full response text, token usage information).

        Raises:
            AIError: On any Gemini API error.
        """
        contents = _build_contents(messages)
        config = _build_config(system_prompt, model_config)

        try:
            response = await self._client.aio.models.generate_content(
                model=model_config.model_id,
                contents=contents,
                config=config,
            )
        except genai_errors.APIError as exc:
            raise _translate_error(exc) from exc

        # Extract text from all non-thinking parts
        parts_text = []
        if response.candidates:
            for candidate in response.candidates:
                if candidate.content is None or candidate.content.parts is None:
                    continue
                for part in candidate.content.parts:
                    if getattr(part, "thought", False):
                        continue
                    if part.text is not None:
                        parts_text.append(part.text)

        prompt_tokens = 0
        completion_tokens = 0
        if response.usage_metadata is not None:
            prompt_tokens = response.usage_metadata.prompt_token_count or 0
            completion_tokens = response.usage_metadata.candidates_token_count or 0

        return "".join(parts_text), UsageInfo(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
        )
