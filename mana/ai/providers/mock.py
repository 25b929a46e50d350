"""Mock AI provider for testing and development.

Deterministic, zero-cost AIProvider implementation that returns
configurable canned responses. Used by:
- The test suite (via conftest.mock_provider fixture)
- Development mode for team members without API keys
- Reference implementation of the AIProvider contract

Imports only from base.py.
"""

import asyncio

from mana.ai.providers.base import AIProvider, ModelConfig, UsageInfo

_DEFAULT_RESPONSES = ["Hello from MockProvider"]
_DEFAULT_USAGE = UsageInfo(prompt_tokens=10, completion_tokens=5)


class MockProvider(AIProvider):
    """Deterministic AI provider for testing.

    Returns configurable canned text and usage info. Can simulate errors
    and slow responses.

    Args:
        responses: Text strings concatenated into the completion. Defaults
            to a single "Hello from MockProvider".
        usage: Token usage returned by complete(). Defaults to 10/5.
        error: If set, complete() raises this immediately.
        delay: Seconds to sleep before answering (simulates a slow API).

    Attributes:
        calls: Every call's keyword arguments, in order.
    """

    def __init__(
        self,
        responses: list[str] | None = None,
        usage: UsageInfo | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.responses = responses if responses is not None else list(_DEFAULT_RESPONSES)
        self.usage = usage or _DEFAULT_USAGE
        self.error = error
        self.delay = delay
        self.calls: list[dict] = []

    async def complete(
        self,
        *,
        system_prompt: str,
        messages: list[dict[str, str]],
        model_config: ModelConfig,
    ) -> tuple[str, UsageInfo]:
        """Returns concatenated responses and configured usage info.

        Raises configured error immediately if error is set.
        """
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "messages": messages,
                "model_config": model_config,
            }
        )
        if self.error is not None:
            raise self.error
        if self.delay:
            await asyncio.sleep(self.delay)

        return "".join(self.responses), self.usage
