"""Stateless chat routes — question and answer over a posted snapshot.

The client owns the character state and history and posts them with every
request; nothing is stored. Useful for clients that keep their own state
(a single-page app, say) and for trying the tutor out.

- POST /chat/question — next question for a topic
- POST /chat/answer — evaluate an explanation, return reply + new state

All responses use the ApiResponse envelope.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from mana.api.deps import get_tutor_service
from mana.schemas import ApiResponse, CharacterState, ConversationMessage, Topic
from mana.tutor.progression import merge_delta
from mana.tutor.service import TutorService

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request bodies (API-boundary types, local to this module)
# ---------------------------------------------------------------------------


class GenerateQuestionRequest(BaseModel):
    """Request body for POST /chat/question."""

    topic: Topic
    character_state: CharacterState = Field(default_factory=CharacterState)
    history: list[ConversationMessage] = Field(default_factory=list)


class EvaluateAnswerRequest(BaseModel):
    """Request body for POST /chat/answer."""

    message: str
    topic: Topic
    character_state: CharacterState = Field(default_factory=CharacterState)
    history: list[ConversationMessage] = Field(default_factory=list)

    @field_validator("message")
    @classmethod
    def _message_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message is required")
        return value


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/question")
async def generate_question(
    body: GenerateQuestionRequest,
    service: TutorService = Depends(get_tutor_service),
) -> dict[str, Any]:
    """Generates the character's next question."""
    question = await service.generate_question(
        body.topic, body.character_state, body.history
    )
    return ApiResponse(
        ok=True,
        data={"question": question, "topic": body.topic},
    ).model_dump()


@router.post("/answer")
async def evaluate_answer(
    body: EvaluateAnswerRequest,
    service: TutorService = Depends(get_tutor_service),
) -> dict[str, Any]:
    """Evaluates an explanation against the posted state.

    Returns the evaluation and the merged character state; the client is
    expected to keep the new state for its next request.
    """
    outcome = await service.evaluate_answer(
        body.message, body.topic, body.character_state, body.history
    )
    new_state = merge_delta(body.character_state, outcome, body.topic)
    return ApiResponse(
        ok=True,
        data={
            "evaluation": outcome.model_dump(),
            "character_state": new_state.model_dump(),
            "level_up": new_state.level > body.character_state.level,
        },
    ).model_dump()
