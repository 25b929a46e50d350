"""Stateless learning analytics routes over a posted LearningMetrics.

- POST /learning/recommendations — up to three ranked recommendations
- POST /learning/path — ordered learning path

Struggling and mastered topics may be omitted from the body; they are then
derived from topic_proficiency.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from mana.api.deps import get_tutor_service
from mana.schemas import ApiResponse, LearningMetrics
from mana.tutor.service import TutorService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/recommendations")
async def recommendations(
    metrics: LearningMetrics,
    service: TutorService = Depends(get_tutor_service),
) -> dict[str, Any]:
    recs = service.get_recommendations(metrics)
    return ApiResponse(
        ok=True,
        data={"recommendations": [rec.model_dump() for rec in recs]},
    ).model_dump()


@router.post("/path")
async def learning_path(
    metrics: LearningMetrics,
    service: TutorService = Depends(get_tutor_service),
) -> dict[str, Any]:
    path = service.get_learning_path(metrics)
    return ApiResponse(ok=True, data=path.model_dump()).model_dump()
