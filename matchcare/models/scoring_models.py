"""
매칭 점수 계산 결과 데이터 모델
점수 분해, 매칭 결과, 캐시 레코드, 성분 지식 등을 담는 데이터 클래스들
"""
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional


# === 예외 정의 ===

class KnowledgeLoadError(Exception):
    """지식 그래프 문서 로드 실패 (내부용, 호출자에게 전파되지 않음)"""
    pass


class ScoreStoreError(Exception):
    """점수 저장소 접근 실패"""
    pass


# === 성분 지식 ===

@dataclass(frozen=True)
class IngredientFact:
    """성분 하나에 대한 지식 조회 결과"""
    name: str
    functions: FrozenSet[str] = frozenset()
    suitable_skin_types: FrozenSet[str] = frozenset()
    treated_concerns: FrozenSet[str] = frozenset()
    benefits: FrozenSet[str] = frozenset()
    synergistic_with: FrozenSet[str] = frozenset()
    incompatible_with: FrozenSet[str] = frozenset()
    is_key_ingredient: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """JSON 직렬화용 딕셔너리 (집합은 정렬된 리스트로)"""
        return {
            "name": self.name,
            "functions": sorted(self.functions),
            "suitable_skin_types": sorted(self.suitable_skin_types),
            "treated_concerns": sorted(self.treated_concerns),
            "benefits": sorted(self.benefits),
            "synergistic_with": sorted(self.synergistic_with),
            "incompatible_with": sorted(self.incompatible_with),
            "is_key_ingredient": self.is_key_ingredient,
        }


# === 점수 계산 ===

@dataclass
class ScoreBreakdown:
    """세부 점수 분해"""
    skin_type_score: float = 0.0
    concerns_score: float = 0.0
    ingredient_score: float = 0.0
    formulation_score: float = 0.0
    brand_score: float = 0.0
    matched_concerns: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MatchResult:
    """제품-프로필 매칭 결과"""
    product_id: str
    score: int
    reasons: List[str] = field(default_factory=list)
    breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)
    disqualified: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_id": self.product_id,
            "score": self.score,
            "reasons": list(self.reasons),
            "breakdown": self.breakdown.to_dict(),
            "disqualified": self.disqualified,
        }


@dataclass
class MatchScoreRecord:
    """(user_id, product_id) 점수 캐시 레코드"""
    user_id: str
    product_id: str
    score: int
    reasons: List[str] = field(default_factory=list)
    calculated_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        # 캐시 시계와 같은 로컬 naive 시각으로 맞춤
        if self.calculated_at.tzinfo is not None:
            self.calculated_at = self.calculated_at.astimezone().replace(tzinfo=None)

    @property
    def key(self):
        return (self.user_id, self.product_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "product_id": self.product_id,
            "score": self.score,
            "reasons": list(self.reasons),
            "calculated_at": self.calculated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchScoreRecord":
        return cls(
            user_id=str(data["user_id"]),
            product_id=str(data["product_id"]),
            score=int(data["score"]),
            reasons=list(data.get("reasons") or []),
            calculated_at=datetime.fromisoformat(data["calculated_at"]),
        )


@dataclass
class ScoredProduct:
    """추천 목록의 한 항목"""
    product_id: str
    product_name: str
    brand: Optional[str]
    main_category: Optional[str]
    match_score: int
    match_reasons: List[str] = field(default_factory=list)
    explanation: Optional[str] = None
    from_cache: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RecommendationResult:
    """추천 목록 계산 결과"""
    recommendations: List[ScoredProduct] = field(default_factory=list)
    total_candidates: int = 0
    scored_candidates: int = 0
    cache_hits: int = 0
    step_times_ms: Dict[str, float] = field(default_factory=dict)


@dataclass
class RoutineStep:
    """루틴 한 단계와 추천 제품"""
    step: int
    category: str
    required: bool
    recommendations: List[ScoredProduct] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SimilarProduct:
    """핵심 성분 유사 제품"""
    product_id: str
    product_name: str
    brand: Optional[str]
    main_category: Optional[str]
    similarity_score: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
