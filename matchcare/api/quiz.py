"""
피부 퀴즈 API
"""
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from matchcare.api.dependencies import get_quiz_builder
from matchcare.models.profile_models import SkinProfile
from matchcare.models.request import QuizAnswersRequest, QuizProfileRequest
from matchcare.models.response import ClassifyResponse, ErrorResponse, QuizProfileResponse
from matchcare.services.quiz_profile_builder import QuizProfileBuilder

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/quiz",
    tags=["quiz"],
    responses={500: {"model": ErrorResponse, "description": "서버 내부 오류"}},
)


@router.get("/questions", summary="퀴즈 질문 목록")
async def get_questions(builder: QuizProfileBuilder = Depends(get_quiz_builder)) -> Dict[str, List[Dict[str, Any]]]:
    return {"questions": builder.get_questions()}


@router.post("/classify", response_model=ClassifyResponse, summary="진단 문항으로 피부 타입 판정")
async def classify_skin_type(
    request: QuizAnswersRequest,
    builder: QuizProfileBuilder = Depends(get_quiz_builder),
):
    classifier = builder.classifier
    return ClassifyResponse(
        skin_type=classifier.classify_skin_type(request.answers),
        scores=classifier.score_buckets(request.answers),
    )


@router.post("/profile", response_model=QuizProfileResponse, summary="퀴즈 응답으로 프로필 생성")
async def build_profile(
    request: QuizProfileRequest,
    builder: QuizProfileBuilder = Depends(get_quiz_builder),
):
    """
    퀴즈 응답을 프로필 변경분으로 만들고 기존 프로필에 병합

    저장은 호출자 몫이며, 병합된 프로필과 피부 분석 요약을 돌려준다.
    """
    patch = builder.build_profile_delta(request.answers)
    profile = builder.apply_patch(request.profile or SkinProfile(), patch)
    return QuizProfileResponse(
        patch=patch,
        profile=profile,
        summary=builder.skin_analysis_summary(profile),
    )
