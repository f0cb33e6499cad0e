"""
요청 모델 정의
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from matchcare.models.profile_models import ProductRecord, SkinProfile
from matchcare.shared.constants import CandidateLimits


class RecommendRequest(BaseModel):
    """추천 목록 요청"""
    profile: SkinProfile = Field(..., description="스킨 프로필")
    candidates: List[ProductRecord] = Field(default_factory=list, description="상위 단계에서 걸러진 후보 제품")
    user_id: Optional[str] = Field(None, description="회원 ID (없으면 게스트, 점수 캐시 미사용)")
    limit: int = Field(CandidateLimits.DEFAULT_LIMIT, ge=1, le=100, description="반환할 제품 수")
    category: Optional[str] = Field(None, description="카테고리 부분 문자열 필터")
    exclude_ids: List[str] = Field(default_factory=list, description="제외할 제품 ID")
    force_recalculate: bool = Field(False, description="캐시 무시하고 재계산")
    include_explanation: bool = Field(True, description="설명 문구 포함")
    enrich_candidates: bool = Field(False, description="비어 있는 피부 타입/고민을 카테고리 매핑으로 채움")

    @field_validator("exclude_ids", mode="before")
    @classmethod
    def coerce_ids(cls, v):
        if v is None:
            return []
        return [str(item) for item in v]


class ScoreRequest(BaseModel):
    """단일 제품 매칭 점수 요청"""
    profile: SkinProfile
    product: ProductRecord


class RoutineRequest(BaseModel):
    """루틴 추천 요청"""
    profile: SkinProfile
    candidates: List[ProductRecord] = Field(default_factory=list)
    user_id: Optional[str] = None


class SimilarRequest(BaseModel):
    """유사 제품 요청"""
    source: ProductRecord = Field(..., description="기준 제품")
    candidates: List[ProductRecord] = Field(default_factory=list)
    limit: int = Field(CandidateLimits.SIMILAR_LIMIT, ge=1, le=50)


class QuizAnswersRequest(BaseModel):
    """퀴즈 응답 (질문 ID → 응답)"""
    answers: Dict[str, Any] = Field(default_factory=dict)


class QuizProfileRequest(QuizAnswersRequest):
    """퀴즈 응답 + 병합 대상 프로필"""
    profile: Optional[SkinProfile] = Field(None, description="기존 프로필 (없으면 빈 프로필)")


class CompatibilityRequest(BaseModel):
    """성분 호환성 요청"""
    ingredient_name: str = Field(..., min_length=1, description="성분명")
    profile: SkinProfile

    @field_validator("ingredient_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("성분명은 비어 있을 수 없습니다")
        return v
