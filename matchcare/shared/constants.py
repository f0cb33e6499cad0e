"""
공유 상수 정의
매칭 점수 계산에 쓰이는 고정값들을 중앙 집중 관리
"""
from datetime import timedelta
from typing import Dict, FrozenSet, Tuple

# 시스템 버전 정보
SYSTEM_VERSION = "1.0.0"

# 피부 타입
SKIN_TYPES: Tuple[str, ...] = ("normal", "dry", "oily", "combination", "sensitive")

# 데이터가 없을 때 반환하는 안전한 기본 피부 타입 집합
DEFAULT_SUITABLE_SKIN_TYPES: FrozenSet[str] = frozenset({"normal", "dry", "oily", "combination"})

# 센티넬 값
SENSITIVITY_NONE = "none"
SKIN_TYPE_UNSURE = "unsure"


# 매칭 점수 가중치 (합계 1.0)
class MatchWeights:
    SKIN_TYPE = 0.35
    CONCERNS = 0.30
    INGREDIENT_PREFERENCE = 0.20
    FORMULATION = 0.10
    BRAND = 0.05


# 세부 점수 고정값
class SubScores:
    NEUTRAL = 50.0
    SKIN_TYPE_EXACT = 100.0
    SKIN_TYPE_ADJACENT = 70.0
    SKIN_TYPE_MISMATCH = 30.0
    CONCERNS_NO_OVERLAP = 30.0
    CONCERNS_BONUS_PER_MATCH = 5.0
    CONCERNS_BONUS_CAP = 20.0
    INGREDIENT_NO_AVOIDED_BONUS = 20.0
    INGREDIENT_PREFERRED_BONUS = 30.0
    INGREDIENT_CONCERN_PAIR_BONUS = 5.0
    INGREDIENT_CONCERN_BONUS_CAP = 20.0
    FORMULATION_FLAG_BONUS = 15.0
    FORMULATION_FLAG_PENALTY = 10.0
    BRAND_MATCH = 100.0
    BRAND_MISMATCH = 30.0
    MIN = 0.0
    MAX = 100.0


# 추천 사유 임계값
class ReasonThresholds:
    SKIN_TYPE = 80.0
    CONCERNS = 70.0
    INGREDIENT = 70.0
    FORMULATION = 80.0
    MAX_CONCERNS_IN_REASON = 2


# 성분 호환성 점수
class CompatibilityPoints:
    SKIN_TYPE = 40
    CONCERNS_MAX = 60


# 인접 피부 타입 (부분 적합)
SKIN_TYPE_ADJACENCY: Dict[str, Tuple[str, ...]] = {
    "normal": ("combination",),
    "dry": ("sensitive",),
    "oily": ("combination",),
    "combination": ("normal", "oily"),
    "sensitive": ("dry", "normal"),
}

# 민감 성분 → 제품 포뮬레이션 플래그
SENSITIVITY_FLAGS: Dict[str, str] = {
    "fragrance": "fragrance_free",
    "alcohol": "alcohol_free",
    "silicone": "silicone_free",
    "sulfates": "sulfate_free",
    "parabens": "paraben_free",
}


# 점수 캐시 / 후보 제한
class ScoreCacheConfig:
    FRESHNESS_WINDOW = timedelta(days=7)
    REDIS_KEY_PREFIX = "match_score"


class CandidateLimits:
    DEFAULT_LIMIT = 20
    CANDIDATE_MULTIPLIER = 2
    MAX_SCORED_CANDIDATES = 200
    ROUTINE_STEP_LIMIT = 3
    SIMILAR_LIMIT = 5


class KnowledgeCacheConfig:
    TTL_SECONDS = 300
    MAX_SIZE = 2048


# 루틴 단계 (시간대 → (단계, 카테고리, 필수 여부))
ROUTINE_STEPS: Dict[str, Tuple[Tuple[int, str, bool], ...]] = {
    "morning": (
        (1, "cleanser", True),
        (2, "toner", False),
        (3, "serum", True),
        (4, "moisturizer", True),
        (5, "sunscreen", True),
    ),
    "evening": (
        (1, "cleanser", True),
        (2, "exfoliator", False),
        (3, "serum", True),
        (4, "moisturizer", True),
    ),
}

DEFAULT_EXPLANATION = "Good match for your profile"
EXPLANATION_SEPARATOR = " • "
