"""AI gateway — one bounded completion call with uniform error handling.

Wraps an AIProvider so callers get a single, predictable contract: a
non-empty string back, or an AIError. One attempt per call, bounded by
asyncio.wait_for; no retries. Successful calls are logged via ai/usage.

Usage:
    gateway = AIGateway(GeminiProvider(key), settings.tutor_model, timeout=10)
    text = await gateway.complete(prompt, system_prompt=persona, call_type="question")
"""

from __future__ import annotations

import asyncio
import logging
import time

from mana.ai.providers.base import AIError, AIProvider, AITimeoutError, ModelConfig
from mana.ai.usage import log_ai_call

logger = logging.getLogger(__name__)


class AIGateway:
    """Timeout-bounded access to one configured AI provider.

    Args:
        provider: The provider to call.
        model_config: Model ID, temperature and output limit for every call.
        timeout: Seconds before a call is abandoned with AITimeoutError.
    """

    def __init__(
        self,
        provider: AIProvider,
        model_config: ModelConfig,
        timeout: float = 10.0,
    ) -> None:
        self._provider = provider
        self._model_config = model_config
        self._timeout = timeout

    @property
    def model_config(self) -> ModelConfig:
        return self._model_config

    @property
    def provider_name(self) -> str:
        return self._model_config.provider

    async def complete(
        self,
        prompt: str,
        *,
        system_prompt: str = "",
        call_type: str,
        user_id: str | None = None,
        topic: str | None = None,
    ) -> str:
        """Sends a single-turn prompt and returns the stripped reply text.

        Args:
            prompt: The user-turn prompt.
            system_prompt: Persona / system instruction.
            call_type: Label for usage logging ("question", "evaluation").
            user_id: Optional user ID for usage logging.
            topic: Optional topic for usage logging.

        Raises:
            AITimeoutError: The provider did not answer within the timeout.
            AIError: The provider failed or returned an empty reply.
        """
        start = time.monotonic()
        try:
            text, usage = await asyncio.wait_for(
                self._provider.complete(
                    system_prompt=system_prompt,
                    messages=[{"role": "user", "content": prompt}],
                    model_config=self._model_config,
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as exc:
            raise AITimeoutError(
                f"{call_type} call timed out after {self._timeout:g}s"
            ) from exc
        except AIError:
            raise
        except Exception as exc:
            raise AIError(f"{call_type} call failed: {exc}") from exc

        latency_ms = (time.monotonic() - start) * 1000
        log_ai_call(
            model_id=self._model_config.model_id,
            prompt_tokens=usage.prompt_tokens,
            completion_tokens=usage.completion_tokens,
            latency_ms=latency_ms,
            call_type=call_type,
            user_id=user_id,
            topic=topic,
        )

        text = text.strip()
        if not text:
            raise AIError(f"{call_type} call returned an empty reply")
        return text
