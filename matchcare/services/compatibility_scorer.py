"""
성분-프로필 호환성 점수
"""
import logging

from matchcare.models.profile_models import SkinProfile
from matchcare.services.knowledge_service import KnowledgeService
from matchcare.shared.constants import CompatibilityPoints, SubScores

logger = logging.getLogger(__name__)


class CompatibilityScorer:
    """성분 하나가 프로필에 얼마나 맞는지 0-100 점수로 계산"""

    def __init__(self, knowledge: KnowledgeService):
        self.knowledge = knowledge

    def compatibility(self, ingredient_name: str, profile: SkinProfile) -> int:
        """
        호환성 점수

        피부 타입 적합 시 40점, 프로필 고민 중 해당 성분이 개선하는 비율 × 60점.
        고민이 없는 프로필은 고민 항목이 0점이다.
        """
        score = 0.0

        if profile.skin_type and profile.skin_type in self.knowledge.get_suitable_skin_types(ingredient_name):
            score += CompatibilityPoints.SKIN_TYPE

        concerns = profile.skin_concerns
        if concerns:
            treated = self.knowledge.get_treated_concerns(ingredient_name)
            matched = [concern for concern in concerns if concern in treated]
            score += CompatibilityPoints.CONCERNS_MAX * len(matched) / len(concerns)

        result = int(max(SubScores.MIN, min(SubScores.MAX, round(score))))
        logger.debug(f"호환성 점수: {ingredient_name} → {result}")
        return result
