"""
응답 모델 정의
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from matchcare.models.profile_models import ProfilePatch, SkinProfile


class ErrorDetail(BaseModel):
    """에러 상세 정보"""
    code: str
    message: str
    field: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """에러 응답"""
    error: ErrorDetail
    timestamp: datetime
    path: str


class RecommendationItem(BaseModel):
    """추천 아이템"""
    product_id: str
    product_name: str
    brand: Optional[str] = None
    main_category: Optional[str] = None
    match_score: int
    match_reasons: List[str] = []
    explanation: Optional[str] = None
    from_cache: bool = False


class RecommendationResponse(BaseModel):
    """추천 응답"""
    recommendations: List[RecommendationItem]
    total_candidates: int
    scored_candidates: int
    cache_hits: int
    step_times_ms: Dict[str, float] = {}
    timestamp: datetime


class ScoreResponse(BaseModel):
    """단일 제품 매칭 점수"""
    product_id: str
    score: int
    reasons: List[str]
    explanation: str
    disqualified: bool
    breakdown: Dict[str, Any]


class RoutineStepResponse(BaseModel):
    step: int
    category: str
    required: bool
    recommendations: List[RecommendationItem] = []


class RoutineResponse(BaseModel):
    """아침/저녁 루틴"""
    morning: List[RoutineStepResponse]
    evening: List[RoutineStepResponse]


class SimilarItem(BaseModel):
    product_id: str
    product_name: str
    brand: Optional[str] = None
    main_category: Optional[str] = None
    similarity_score: float


class SimilarResponse(BaseModel):
    source_product_id: str
    products: List[SimilarItem]


class ClassifyResponse(BaseModel):
    """피부 타입 판정 결과"""
    skin_type: str
    scores: Dict[str, int]


class QuizProfileResponse(BaseModel):
    """퀴즈 처리 결과"""
    patch: ProfilePatch
    profile: SkinProfile
    summary: Optional[Dict[str, Any]] = None


class IngredientResponse(BaseModel):
    """성분 지식"""
    name: str
    functions: List[str]
    suitable_skin_types: List[str]
    treated_concerns: List[str]
    benefits: List[str]
    synergistic_with: List[str]
    incompatible_with: List[str]
    is_key_ingredient: bool
    source: str


class CompatibilityResponse(BaseModel):
    """성분-프로필 호환성"""
    ingredient_name: str
    score: int
    suitable_for_skin_type: bool
    matched_concerns: List[str]


class HealthResponse(BaseModel):
    """관리자 헬스체크 응답"""
    status: str
    knowledge: Dict[str, Any]
    score_cache: Dict[str, Any]
    process: Dict[str, Any]
    timestamp: datetime
