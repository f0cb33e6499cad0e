"""
피부 타입 판정기
"잘 모르겠다"고 답한 사용자의 피부 타입을 진단 문항 3개로 추정
"""
import logging
from typing import Any, Dict, Mapping, Optional

from matchcare.config.quiz_config import (
    ASSESSMENT_ANSWER_KEYS, CLASSIFIER_DEFAULT, CLASSIFIER_PRIORITY, SKIN_TYPE_POINTS
)

logger = logging.getLogger(__name__)


class SkinTypeClassifier:
    """규칙 기반 피부 타입 분류기"""

    @staticmethod
    def _answer(answers: Mapping[str, Any], question: str) -> Optional[str]:
        for key in ASSESSMENT_ANSWER_KEYS[question]:
            value = answers.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip().lower()
        return None

    def score_buckets(self, answers: Optional[Mapping[str, Any]]) -> Dict[str, int]:
        """버킷별 누적 점수 (인식할 수 없는 응답은 0점)"""
        buckets = {skin_type: 0 for skin_type in CLASSIFIER_PRIORITY}
        if not answers:
            return buckets

        for question, table in SKIN_TYPE_POINTS.items():
            answer = self._answer(answers, question)
            if answer is None:
                continue
            hit = table.get(answer)
            if hit is None:
                logger.debug(f"알 수 없는 진단 응답 무시: {question}={answer!r}")
                continue
            bucket, points = hit
            buckets[bucket] += points
        return buckets

    def classify_skin_type(self, answers: Optional[Mapping[str, Any]]) -> str:
        """
        최고 점수 버킷 반환

        동점이면 dry, oily, normal, combination 순으로 우선하며
        모든 버킷이 0점이면 normal.
        """
        buckets = self.score_buckets(answers)
        best = max(buckets.values())
        if best == 0:
            return CLASSIFIER_DEFAULT

        for skin_type in CLASSIFIER_PRIORITY:
            if buckets[skin_type] == best:
                logger.info(f"피부 타입 판정: {skin_type} (점수 {buckets})")
                return skin_type
        return CLASSIFIER_DEFAULT
