"""
스킨 프로필 / 제품 데이터 모델
매칭 코어가 읽기 전용으로 소비하는 프로필과 제품 레코드 정의
"""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from matchcare.shared.constants import SKIN_TYPE_UNSURE


class SkinType(str, Enum):
    """피부 타입"""
    NORMAL = "normal"
    DRY = "dry"
    OILY = "oily"
    COMBINATION = "combination"
    SENSITIVE = "sensitive"


class RoutineComplexity(str, Enum):
    """루틴 복잡도"""
    MINIMAL = "minimal"
    MODERATE = "moderate"
    EXTENSIVE = "extensive"


def normalize_tags(values: Optional[List[Any]]) -> List[str]:
    """태그 정규화: 소문자/공백 제거, 빈 값 제외, 순서 유지 중복 제거"""
    if not values:
        return []
    if isinstance(values, str):
        values = [values]

    seen = set()
    result = []
    for value in values:
        if value is None:
            continue
        tag = str(value).strip().lower()
        if tag and tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result


def clean_names(values: Optional[List[Any]]) -> List[str]:
    """이름 목록 정리 (원래 표기 유지, 공백 제거, 대소문자 무시 중복 제거)"""
    if not values:
        return []
    if isinstance(values, str):
        values = [values]

    seen = set()
    result = []
    for value in values:
        if value is None:
            continue
        name = str(value).strip()
        if name and name.lower() not in seen:
            seen.add(name.lower())
            result.append(name)
    return result


class BudgetRange(BaseModel):
    """제품당 예산 범위"""
    min: float = Field(0, ge=0, description="최소 가격")
    max: float = Field(0, ge=0, description="최대 가격")


class SkinAnalysis(BaseModel):
    """피부 분석 벡터 (1-5 척도)"""
    t_zone_oiliness: int = Field(3, ge=1, le=5)
    cheek_dryness: int = Field(3, ge=1, le=5)
    sensitivity: int = Field(3, ge=1, le=5)
    acne_proneness: int = Field(3, ge=1, le=5)
    confidence_score: int = Field(85, ge=0, le=100)


class CompletenessPoints:
    """프로필 완성도 체크리스트 배점 (합계 100)"""
    SKIN_TYPE = 30
    CONCERNS = 25
    SENSITIVITIES = 15
    ROUTINE_COMPLEXITY = 15
    BUDGET = 15


def calculate_completeness(
    skin_type: Optional[Any],
    skin_concerns: Optional[List[str]],
    known_sensitivities: Optional[List[str]],
    routine_complexity: Optional[Any],
    budget_range: Optional[BudgetRange],
) -> int:
    """채워진 필드 기준 프로필 완성도 계산 (순수 함수)"""
    score = 0
    if skin_type:
        score += CompletenessPoints.SKIN_TYPE
    if skin_concerns:
        score += CompletenessPoints.CONCERNS
    if known_sensitivities:
        score += CompletenessPoints.SENSITIVITIES
    if routine_complexity:
        score += CompletenessPoints.ROUTINE_COMPLEXITY
    if budget_range is not None and budget_range.max > 0:
        score += CompletenessPoints.BUDGET
    return min(score, 100)


class SkinProfile(BaseModel):
    """사용자/게스트 스킨 프로필"""
    model_config = ConfigDict(validate_assignment=True, use_enum_values=True)

    skin_type: Optional[SkinType] = Field(None, description="피부 타입")
    skin_concerns: List[str] = Field(default_factory=list, description="피부 고민 (acne, dryness, etc.)")
    known_sensitivities: List[str] = Field(default_factory=list, description="민감 성분 ('none' 센티넬 허용)")
    avoided_ingredients: List[str] = Field(default_factory=list, description="피하는 성분")
    preferred_ingredients: List[str] = Field(default_factory=list, description="선호 성분")
    preferred_brands: List[str] = Field(default_factory=list, description="선호 브랜드")
    routine_complexity: Optional[RoutineComplexity] = Field(None, description="루틴 복잡도")
    budget_range: Optional[BudgetRange] = Field(None, description="예산 범위")
    skin_analysis: Optional[SkinAnalysis] = Field(None, description="피부 분석 벡터")

    @field_validator("skin_type", mode="before")
    @classmethod
    def normalize_skin_type(cls, v):
        if v is None:
            return None
        if isinstance(v, str):
            v = v.strip().lower()
            if not v or v == SKIN_TYPE_UNSURE:
                return None
        return v

    @field_validator("skin_concerns", "known_sensitivities", mode="before")
    @classmethod
    def normalize_tag_lists(cls, v):
        return normalize_tags(v)

    @field_validator("avoided_ingredients", "preferred_ingredients", "preferred_brands", mode="before")
    @classmethod
    def clean_name_lists(cls, v):
        return clean_names(v)

    @computed_field
    @property
    def profile_completeness(self) -> int:
        """프로필 완성도 (필드 변경 시마다 재계산)"""
        return calculate_completeness(
            self.skin_type,
            self.skin_concerns,
            self.known_sensitivities,
            self.routine_complexity,
            self.budget_range,
        )


class ProductRecord(BaseModel):
    """후보 제품 레코드 (카탈로그 저장소에서 전달됨)"""
    model_config = ConfigDict(use_enum_values=True)

    product_id: str = Field(..., description="제품 ID")
    product_name: str = Field("", description="제품명")
    brand: Optional[str] = Field(None, description="브랜드")
    main_category: Optional[str] = Field(None, description="메인 카테고리")
    suitable_skin_types: List[str] = Field(default_factory=list)
    addresses_concerns: List[str] = Field(default_factory=list)
    provided_benefits: List[str] = Field(default_factory=list)
    ingredients: List[str] = Field(default_factory=list, description="전성분")
    key_ingredients: List[str] = Field(default_factory=list, description="핵심 성분")

    # 포뮬레이션 특성
    fragrance_free: bool = False
    alcohol_free: bool = False
    silicone_free: bool = False
    sulfate_free: bool = False
    paraben_free: bool = False
    fungal_acne_free: bool = False

    rating: float = Field(0.0, ge=0)
    review_count: int = Field(0, ge=0)
    price: Optional[float] = Field(None, ge=0)

    @field_validator("product_id", mode="before")
    @classmethod
    def coerce_product_id(cls, v):
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator("suitable_skin_types", "addresses_concerns", "provided_benefits", mode="before")
    @classmethod
    def normalize_tag_lists(cls, v):
        return normalize_tags(v)

    @field_validator("ingredients", "key_ingredients", mode="before")
    @classmethod
    def clean_ingredient_lists(cls, v):
        return clean_names(v)


class QuizResponse(BaseModel):
    """퀴즈 응답 기록"""
    question_id: str
    answer: Any = None
    timestamp: datetime


class ProfilePatch(BaseModel):
    """퀴즈 응답으로 만든 프로필 변경분"""
    skin_type: Optional[str] = None
    skin_type_inferred: bool = False
    skin_concerns: List[str] = Field(default_factory=list)
    known_sensitivities: List[str] = Field(default_factory=list)
    routine_complexity: Optional[str] = None
    budget_range: BudgetRange
    skin_analysis: SkinAnalysis
    profile_completeness: int = Field(0, ge=0, le=100)
    quiz_responses: List[QuizResponse] = Field(default_factory=list)
    last_quiz_date: datetime

    def profile_fields(self) -> Dict[str, Any]:
        """SkinProfile에 병합할 필드만 추출"""
        return {
            "skin_type": self.skin_type,
            "skin_concerns": self.skin_concerns,
            "known_sensitivities": self.known_sensitivities,
            "routine_complexity": self.routine_complexity,
            "budget_range": self.budget_range,
            "skin_analysis": self.skin_analysis,
        }
