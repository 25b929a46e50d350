"""Per-user routes — the stored tutoring flow and its analytics.

Users are identified by the {user_id} path parameter; state and history
live behind the StateStore hook.

- GET    /users/{user_id}/character — stored character state
- POST   /users/{user_id}/question — generate a question and record it
- POST   /users/{user_id}/answer — evaluate, merge, save, record both turns
- GET    /users/{user_id}/metrics — metrics incl. 7-day activity
- GET    /users/{user_id}/recommendations
- GET    /users/{user_id}/learning-path
- GET    /users/{user_id}/analysis — everything above plus profile + summary
- DELETE /users/{user_id} — forget the user

All responses use the ApiResponse envelope.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator

from mana.api.deps import get_state_store, get_tutor_service
from mana.config import get_settings
from mana.hooks.interfaces import StateStore
from mana.schemas import ApiError, ApiResponse, ConversationMessage, Topic
from mana.tutor.progression import merge_delta
from mana.tutor.recommendations import ACTIVITY_WINDOW_DAYS
from mana.tutor.service import TutorService

logger = logging.getLogger(__name__)

router = APIRouter()

# Conversation window the analysis reads for profile inference.
PROFILE_HISTORY = 50


# ---------------------------------------------------------------------------
# Request bodies (API-boundary types, local to this module)
# ---------------------------------------------------------------------------


class QuestionRequest(BaseModel):
    """Request body for POST /users/{user_id}/question."""

    topic: Topic


class AnswerRequest(BaseModel):
    """Request body for POST /users/{user_id}/answer."""

    message: str
    topic: Topic

    @field_validator("message")
    @classmethod
    def _message_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message is required")
        return value


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _recent_activity(store: StateStore, user_id: str) -> int:
    since = datetime.now(timezone.utc) - timedelta(days=ACTIVITY_WINDOW_DAYS)
    return await store.count_messages_since(user_id, since)


# ---------------------------------------------------------------------------
# Tutoring flow
# ---------------------------------------------------------------------------


@router.get("/{user_id}/character")
async def get_character(
    user_id: str,
    store: StateStore = Depends(get_state_store),
) -> dict[str, Any]:
    state = await store.load(user_id)
    return ApiResponse(ok=True, data=state.model_dump()).model_dump()


@router.post("/{user_id}/question")
async def ask_question(
    user_id: str,
    body: QuestionRequest,
    store: StateStore = Depends(get_state_store),
    service: TutorService = Depends(get_tutor_service),
) -> dict[str, Any]:
    """Generates the next question and appends it to the user's history."""
    settings = get_settings()
    state = await store.load(user_id)
    history = await store.load_recent_messages(user_id, settings.history_window)

    question = await service.generate_question(body.topic, state, history, user_id=user_id)
    await store.append_message(
        user_id,
        ConversationMessage(role="assistant", content=question, topic=body.topic),
    )

    return ApiResponse(
        ok=True,
        data={"question": question, "topic": body.topic},
    ).model_dump()


@router.post("/{user_id}/answer")
async def answer(
    user_id: str,
    body: AnswerRequest,
    store: StateStore = Depends(get_state_store),
    service: TutorService = Depends(get_tutor_service),
) -> dict[str, Any]:
    """Evaluates an explanation and persists the resulting state.

    Both the user's message and the character's reply are appended to the
    history, in that order.
    """
    settings = get_settings()
    state = await store.load(user_id)
    history = await store.load_recent_messages(user_id, settings.history_window)

    outcome = await service.evaluate_answer(
        body.message, body.topic, state, history, user_id=user_id
    )
    new_state = merge_delta(state, outcome, body.topic)
    await store.save(user_id, new_state)

    await store.append_message(
        user_id,
        ConversationMessage(role="user", content=body.message, topic=body.topic),
    )
    await store.append_message(
        user_id,
        ConversationMessage(role="assistant", content=outcome.reply_text, topic=body.topic),
    )

    return ApiResponse(
        ok=True,
        data={
            "evaluation": outcome.model_dump(),
            "character_state": new_state.model_dump(),
            "level_up": new_state.level > state.level,
        },
    ).model_dump()


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------


@router.get("/{user_id}/metrics")
async def metrics(
    user_id: str,
    store: StateStore = Depends(get_state_store),
    service: TutorService = Depends(get_tutor_service),
) -> dict[str, Any]:
    state = await store.load(user_id)
    result = service.get_metrics(state, await _recent_activity(store, user_id))
    return ApiResponse(ok=True, data=result.model_dump()).model_dump()


@router.get("/{user_id}/recommendations")
async def recommendations(
    user_id: str,
    store: StateStore = Depends(get_state_store),
    service: TutorService = Depends(get_tutor_service),
) -> dict[str, Any]:
    state = await store.load(user_id)
    result = service.get_metrics(state, await _recent_activity(store, user_id))
    recs = service.get_recommendations(result)
    return ApiResponse(
        ok=True,
        data={"recommendations": [rec.model_dump() for rec in recs]},
    ).model_dump()


@router.get("/{user_id}/learning-path")
async def learning_path(
    user_id: str,
    store: StateStore = Depends(get_state_store),
    service: TutorService = Depends(get_tutor_service),
) -> dict[str, Any]:
    state = await store.load(user_id)
    result = service.get_metrics(state, await _recent_activity(store, user_id))
    path = service.get_learning_path(result)
    return ApiResponse(ok=True, data=path.model_dump()).model_dump()


@router.get("/{user_id}/analysis")
async def analysis(
    user_id: str,
    store: StateStore = Depends(get_state_store),
    service: TutorService = Depends(get_tutor_service),
) -> dict[str, Any]:
    """Detailed analysis: metrics, recommendations, path, profile, summary."""
    state = await store.load(user_id)
    history = await store.load_recent_messages(user_id, PROFILE_HISTORY)
    result = service.detailed_analysis(
        state, history, await _recent_activity(store, user_id)
    )
    return ApiResponse(ok=True, data=result.model_dump()).model_dump()


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    store: StateStore = Depends(get_state_store),
) -> dict[str, Any]:
    """Deletes the user's state and history. 404 if nothing was stored."""
    deleted = await store.delete_user(user_id)
    if not deleted:
        raise HTTPException(
            status_code=404,
            detail=ApiResponse(
                ok=False,
                error=ApiError(code="USER_NOT_FOUND", message="User not found."),
            ).model_dump(),
        )
    logger.info("Deleted stored data for user %s", user_id)
    return ApiResponse(ok=True, data={"deleted": True}).model_dump()
