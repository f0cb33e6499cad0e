"""
추천 API
호출자가 넘긴 프로필과 후보 제품으로 매칭 점수, 추천 목록, 루틴, 유사 제품을 계산
"""
import logging
from datetime import datetime

from fastapi import APIRouter, Depends

from matchcare.api.dependencies import get_engine, get_knowledge, get_recommendation_service
from matchcare.models.request import RecommendRequest, RoutineRequest, ScoreRequest, SimilarRequest
from matchcare.models.response import (
    ErrorResponse, RecommendationItem, RecommendationResponse, RoutineResponse, RoutineStepResponse,
    ScoreResponse, SimilarItem, SimilarResponse
)
from matchcare.services.knowledge_service import KnowledgeService
from matchcare.services.match_score_engine import MatchScoreEngine
from matchcare.services.recommendation_service import RecommendationService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/recommend",
    tags=["recommendation"],
    responses={500: {"model": ErrorResponse, "description": "서버 내부 오류"}},
)


@router.post("", response_model=RecommendationResponse, summary="추천 목록")
async def recommend_products(
    request: RecommendRequest,
    service: RecommendationService = Depends(get_recommendation_service),
    knowledge: KnowledgeService = Depends(get_knowledge),
):
    """
    후보 제품을 프로필 기준으로 점수화해 상위 limit개 반환

    user_id가 있으면 7일 점수 캐시를 사용하고, 없으면(게스트) 매번 계산한다.
    """
    candidates = request.candidates
    if request.enrich_candidates:
        candidates = [knowledge.enrich_product(product) for product in candidates]

    result = await service.recommend(
        request.profile,
        candidates,
        user_id=request.user_id,
        limit=request.limit,
        category=request.category,
        exclude_ids=request.exclude_ids,
        force_recalculate=request.force_recalculate,
        include_explanation=request.include_explanation,
    )

    return RecommendationResponse(
        recommendations=[RecommendationItem(**item.to_dict()) for item in result.recommendations],
        total_candidates=result.total_candidates,
        scored_candidates=result.scored_candidates,
        cache_hits=result.cache_hits,
        step_times_ms=result.step_times_ms,
        timestamp=datetime.now(),
    )


@router.post("/score", response_model=ScoreResponse, summary="단일 제품 매칭 점수")
async def score_product(request: ScoreRequest, engine: MatchScoreEngine = Depends(get_engine)):
    result = engine.compute(request.product, request.profile)
    return ScoreResponse(
        product_id=result.product_id,
        score=result.score,
        reasons=result.reasons,
        explanation=engine.explain(result),
        disqualified=result.disqualified,
        breakdown=result.breakdown.to_dict(),
    )


@router.post("/routine", response_model=RoutineResponse, summary="아침/저녁 루틴 추천")
async def recommend_routine(
    request: RoutineRequest,
    service: RecommendationService = Depends(get_recommendation_service),
):
    routine = await service.recommend_routine(request.profile, request.candidates, user_id=request.user_id)

    def to_response(steps):
        return [RoutineStepResponse(**step.to_dict()) for step in steps]

    return RoutineResponse(
        morning=to_response(routine.get("morning", [])),
        evening=to_response(routine.get("evening", [])),
    )


@router.post("/similar", response_model=SimilarResponse, summary="핵심 성분 유사 제품")
async def similar_products(
    request: SimilarRequest,
    service: RecommendationService = Depends(get_recommendation_service),
):
    similar = service.similar_products(request.source, request.candidates, limit=request.limit)
    return SimilarResponse(
        source_product_id=request.source.product_id,
        products=[SimilarItem(**item.to_dict()) for item in similar],
    )
