"""
매칭 점수 엔진
프로필과 제품 사이의 5개 세부 점수를 가중 합산해 0-100 매칭 점수와 추천 사유를 만든다

세부 점수 (가중치):
- 피부 타입 (0.35)
- 피부 고민 (0.30)
- 성분 선호 (0.20), 회피 성분이 있으면 전체 점수 0 (거부권)
- 포뮬레이션 (0.10)
- 브랜드 (0.05)
"""
import math
import logging
from typing import Iterable, List, Optional, Tuple, Union

from matchcare.models.profile_models import ProductRecord, SkinProfile
from matchcare.models.scoring_models import MatchResult, ScoreBreakdown
from matchcare.services.knowledge_service import KnowledgeService
from matchcare.shared.constants import (
    DEFAULT_EXPLANATION, EXPLANATION_SEPARATOR, MatchWeights, ReasonThresholds, SENSITIVITY_FLAGS,
    SENSITIVITY_NONE, SKIN_TYPE_ADJACENCY, SubScores
)

logger = logging.getLogger(__name__)


def _clamp(value: float) -> float:
    return max(SubScores.MIN, min(SubScores.MAX, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class MatchScoreEngine:
    """프로필-제품 매칭 점수 계산기 (지식 서비스 상태가 같으면 결정적)"""

    def __init__(self, knowledge: KnowledgeService):
        self.knowledge = knowledge

    def compute(self, product: ProductRecord, profile: SkinProfile) -> MatchResult:
        """
        매칭 점수 계산

        Returns:
            MatchResult: 0-100 점수, 고정 순서의 추천 사유, 세부 점수
        """
        skin_type_score = self.skin_type_score(product, profile)
        concerns_score, matched_concerns = self.concerns_score(product, profile)

        vetoed = self.has_avoided_ingredient(product, profile)
        ingredient_score = SubScores.MIN if vetoed else self.ingredient_score(product, profile)

        formulation_score = self.formulation_score(product, profile)
        brand_score = self.brand_score(product, profile)

        weighted = (
            skin_type_score * MatchWeights.SKIN_TYPE
            + concerns_score * MatchWeights.CONCERNS
            + ingredient_score * MatchWeights.INGREDIENT_PREFERENCE
            + formulation_score * MatchWeights.FORMULATION
            + brand_score * MatchWeights.BRAND
        )
        total = int(_clamp(_round_half_up(weighted)))
        if vetoed:
            total = 0
            logger.debug(f"제품 {product.product_id}: 회피 성분 포함으로 제외")

        breakdown = ScoreBreakdown(
            skin_type_score=skin_type_score,
            concerns_score=concerns_score,
            ingredient_score=ingredient_score,
            formulation_score=formulation_score,
            brand_score=brand_score,
            matched_concerns=matched_concerns,
        )
        reasons = self._build_reasons(breakdown, profile)

        return MatchResult(
            product_id=product.product_id,
            score=total,
            reasons=reasons,
            breakdown=breakdown,
            disqualified=vetoed,
        )

    def _build_reasons(self, breakdown: ScoreBreakdown, profile: SkinProfile) -> List[str]:
        reasons = []
        if breakdown.skin_type_score >= ReasonThresholds.SKIN_TYPE and profile.skin_type:
            reasons.append(f"Perfect for {profile.skin_type} skin")
        if breakdown.concerns_score >= ReasonThresholds.CONCERNS and breakdown.matched_concerns:
            shown = breakdown.matched_concerns[:ReasonThresholds.MAX_CONCERNS_IN_REASON]
            reasons.append(f"Addresses {', '.join(shown)}")
        if breakdown.ingredient_score >= ReasonThresholds.INGREDIENT:
            reasons.append("Contains beneficial ingredients for you")
        if breakdown.formulation_score >= ReasonThresholds.FORMULATION:
            reasons.append("Formulated to avoid your sensitivities")
        return reasons

    # === 세부 점수 ===

    def skin_type_score(self, product: ProductRecord, profile: SkinProfile) -> float:
        """일치 100, 인접 타입 70, 불일치 30, 프로필 타입 없음 50"""
        if not profile.skin_type:
            return SubScores.NEUTRAL

        suitable = set(product.suitable_skin_types)
        if profile.skin_type in suitable:
            return SubScores.SKIN_TYPE_EXACT

        adjacent = SKIN_TYPE_ADJACENCY.get(profile.skin_type, ())
        if any(skin_type in suitable for skin_type in adjacent):
            return SubScores.SKIN_TYPE_ADJACENT
        return SubScores.SKIN_TYPE_MISMATCH

    def concerns_score(self, product: ProductRecord, profile: SkinProfile) -> Tuple[float, List[str]]:
        """고민 일치 비율 × 100 + 일치 개수당 5점 (최대 20), 상한 100"""
        if not profile.skin_concerns:
            return SubScores.NEUTRAL, []

        wanted = set(profile.skin_concerns)
        matched = [concern for concern in product.addresses_concerns if concern in wanted]
        if not matched:
            return SubScores.CONCERNS_NO_OVERLAP, []

        ratio = len(matched) / len(profile.skin_concerns)
        bonus = min(SubScores.CONCERNS_BONUS_CAP, len(matched) * SubScores.CONCERNS_BONUS_PER_MATCH)
        return min(SubScores.MAX, ratio * 100 + bonus), matched

    @staticmethod
    def has_avoided_ingredient(product: ProductRecord, profile: SkinProfile) -> bool:
        """전성분 중 회피 성분을 (대소문자 무시 부분 문자열로) 포함하는지"""
        avoided = [name.strip().lower() for name in profile.avoided_ingredients if name.strip()]
        if not avoided:
            return False

        for entry in product.ingredients:
            lowered = entry.lower()
            if any(name in lowered for name in avoided):
                return True
        return False

    def ingredient_score(self, product: ProductRecord, profile: SkinProfile) -> float:
        """회피 성분이 없을 때의 성분 선호 점수 (기본 50)"""
        score = SubScores.NEUTRAL

        if any(name.strip() for name in profile.avoided_ingredients):
            score += SubScores.INGREDIENT_NO_AVOIDED_BONUS

        preferred = {name.lower() for name in profile.preferred_ingredients}
        if preferred and any(name.lower() in preferred for name in product.key_ingredients):
            score += SubScores.INGREDIENT_PREFERRED_BONUS

        if profile.skin_concerns and product.key_ingredients:
            concerns = set(profile.skin_concerns)
            pairs = 0
            for key_ingredient in product.key_ingredients:
                pairs += len(concerns & self.knowledge.get_treated_concerns(key_ingredient))
            score += min(SubScores.INGREDIENT_CONCERN_BONUS_CAP, pairs * SubScores.INGREDIENT_CONCERN_PAIR_BONUS)

        return min(SubScores.MAX, score)

    @staticmethod
    def formulation_score(product: ProductRecord, profile: SkinProfile) -> float:
        """민감 성분별 *_free 플래그 있으면 +15, 없으면 -10"""
        score = SubScores.NEUTRAL
        for sensitivity in profile.known_sensitivities:
            if sensitivity == SENSITIVITY_NONE:
                continue
            flag = SENSITIVITY_FLAGS.get(sensitivity)
            if flag is None:
                continue
            if getattr(product, flag, False):
                score += SubScores.FORMULATION_FLAG_BONUS
            else:
                score -= SubScores.FORMULATION_FLAG_PENALTY
        return _clamp(score)

    @staticmethod
    def brand_score(product: ProductRecord, profile: SkinProfile) -> float:
        if not profile.preferred_brands:
            return SubScores.NEUTRAL
        brand = (product.brand or "").strip().lower()
        if brand and brand in {name.lower() for name in profile.preferred_brands}:
            return SubScores.BRAND_MATCH
        return SubScores.BRAND_MISMATCH

    # === 부가 기능 ===

    @staticmethod
    def explain(result: Union[MatchResult, Iterable[str], None]) -> str:
        """매칭 결과(또는 사유 목록)를 한 줄 설명으로"""
        if isinstance(result, MatchResult):
            result = result.reasons
        reasons = [reason for reason in (result or []) if reason]
        if not reasons:
            return DEFAULT_EXPLANATION
        return EXPLANATION_SEPARATOR.join(reasons)

    @staticmethod
    def ingredient_similarity(first: Optional[Iterable[str]], second: Optional[Iterable[str]]) -> float:
        """핵심 성분 자카드 유사도 × 100"""
        if first is None or second is None:
            return 0.0
        left = {name.strip().lower() for name in first if name and name.strip()}
        right = {name.strip().lower() for name in second if name and name.strip()}
        union = left | right
        if not union:
            return 0.0
        return len(left & right) / len(union) * 100
