# app/api/v1/routers/recommendations.py
from fastapi import APIRouter, Depends
import time
import logging

from app.api.deps import recommendation_resolver_dep
from app.api.v1.schemas.reco import RecommendationOut, RecommendationRequest
from app.domain.services.recommendation_svc import RecommendationResolver

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recommendations"])


async def _resolve(resolver: RecommendationResolver, user_id: str) -> RecommendationOut:
    start_time = time.perf_counter()
    result = await resolver.resolve(user_id)
    logger.info(
        "Response: recommendations user_id=%s, count=%s, demo=%s, message=%r, elapsed_time=%.4fs",
        user_id, len(result.recommendations), result.is_demo_mode, result.message,
        time.perf_counter() - start_time,
    )
    return RecommendationOut.from_result(result)


@router.post("/recommendations", response_model=RecommendationOut)
async def recommendations(
    body: RecommendationRequest,
    resolver: RecommendationResolver = Depends(recommendation_resolver_dep),
):
    """
    Up to 4 products for the user. Always 200: when AI, database or history
    are missing the response degrades (category, random, popular or demo list)
    and `isDemoMode` tells whether anything was personalized.
    """
    logger.info("Request: recommendations user_id=%s", body.user_id)
    return await _resolve(resolver, body.user_id)


@router.get("/users/{user_id}/recommendations", response_model=RecommendationOut)
async def user_recommendations(
    user_id: str,
    resolver: RecommendationResolver = Depends(recommendation_resolver_dep),
):
    logger.info("Request: user_recommendations user_id=%s", user_id)
    return await _resolve(resolver, user_id)
