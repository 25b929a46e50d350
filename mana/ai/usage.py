"""Per-call AI usage lines for Mana's cost tracking.

Every question Mana asks and every explanation it grades through the
gateway leaves one INFO line on ``mana.ai.usage``. The line names the
learner and topic next to the token counts and latency, so spend can
be summed by learner or by topic. Failed calls raise from the gateway
and are not logged here.

The same values ride on the record as ``extra`` attributes for whatever
formatter the deployment installs.
"""

import logging

logger = logging.getLogger("mana.ai.usage")


def log_ai_call(
    *,
    model_id: str,
    prompt_tokens: int,
    completion_tokens: int,
    latency_ms: float,
    call_type: str,
    user_id: str | None = None,
    topic: str | None = None,
) -> None:
    """Logs one completed question or evaluation call.

    Missing learner or topic show as "-" in the message and None in extra.

    Args:
        model_id: The model identifier used for this call.
        prompt_tokens: Number of input tokens consumed.
        completion_tokens: Number of output tokens generated.
        latency_ms: Wall-clock duration of the AI call in milliseconds.
        call_type: The type of AI call ("question" or "evaluation").
        user_id: The stored user this call serves, if any.
        topic: The catalogue topic of the call, if any.
    """
    logger.info(
        "AI call: %s %s tokens_in=%d tokens_out=%d latency=%.0fms user=%s topic=%s",
        call_type,
        model_id,
        prompt_tokens,
        completion_tokens,
        latency_ms,
        user_id or "-",
        topic or "-",
        extra={
            "model_id": model_id,
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "latency_ms": latency_ms,
            "call_type": call_type,
            "user_id": user_id,
            "topic": topic,
        },
    )
