"""
퀴즈 응답 → 프로필 변경분 빌더
평면 응답 맵에서 피부 타입, 고민, 민감 성분, 예산, 피부 분석 벡터를 만든다
"""
import copy
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from matchcare.config.quiz_config import (
    AnalysisDefaults, BUDGET_QUESTION, BUDGET_RANGES, CONCERNS_QUESTION, DEFAULT_BUDGET_RANGE,
    DEFAULT_ROUTINE_COMPLEXITY, FLAKY_PATCHES_QUESTION, MAX_PRIMARY_CONCERNS, MIDDAY_OILINESS_QUESTION,
    MORNING_FEEL_QUESTION, QUIZ_QUESTIONS, ROUTINE_QUESTION, SENSITIVITIES_QUESTION,
    SKIN_TYPE_ANALYSIS, SKIN_TYPE_QUESTION
)
from matchcare.models.profile_models import (
    BudgetRange, ProfilePatch, QuizResponse, RoutineComplexity, SkinAnalysis, SkinProfile,
    calculate_completeness, normalize_tags
)
from matchcare.services.skin_type_classifier import SkinTypeClassifier
from matchcare.shared.constants import SENSITIVITY_NONE, SKIN_TYPE_UNSURE, SKIN_TYPES

logger = logging.getLogger(__name__)

_ROUTINE_VALUES = {item.value for item in RoutineComplexity}


def _token(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip().lower()
    return value or None


class QuizProfileBuilder:
    """퀴즈 응답 처리기"""

    def __init__(
        self,
        classifier: Optional[SkinTypeClassifier] = None,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.classifier = classifier or SkinTypeClassifier()
        self._now = now or datetime.now

    def get_questions(self) -> List[Dict[str, Any]]:
        """퀴즈 질문 카탈로그"""
        return copy.deepcopy(QUIZ_QUESTIONS)

    def build_profile_delta(self, answers: Optional[Mapping[str, Any]]) -> ProfilePatch:
        """
        퀴즈 응답으로 프로필 변경분 생성

        Args:
            answers: 질문 ID → 응답 (단일 선택은 문자열, 다중 선택은 리스트)

        Returns:
            ProfilePatch: 프로필에 병합할 변경분
        """
        answers = answers or {}
        now = self._now()

        declared = _token(answers.get(SKIN_TYPE_QUESTION))
        skin_type, inferred = self._resolve_skin_type(declared, answers)

        concerns = normalize_tags(answers.get(CONCERNS_QUESTION))
        sensitivities = normalize_tags(
            answers.get(SENSITIVITIES_QUESTION) or answers.get("known_sensitivities")
        )

        routine = _token(answers.get(ROUTINE_QUESTION))
        if routine not in _ROUTINE_VALUES:
            routine = DEFAULT_ROUTINE_COMPLEXITY

        budget = self.parse_budget_range(answers.get(BUDGET_QUESTION))
        analysis = self.calculate_skin_analysis(declared, concerns, answers)

        patch = ProfilePatch(
            skin_type=skin_type,
            skin_type_inferred=inferred,
            skin_concerns=concerns,
            known_sensitivities=sensitivities,
            routine_complexity=routine,
            budget_range=budget,
            skin_analysis=analysis,
            profile_completeness=calculate_completeness(skin_type, concerns, sensitivities, routine, budget),
            quiz_responses=[
                QuizResponse(question_id=str(question_id), answer=answer, timestamp=now)
                for question_id, answer in answers.items()
            ],
            last_quiz_date=now,
        )

        logger.info(
            f"퀴즈 처리 완료: skin_type={skin_type} (추정={inferred}), "
            f"고민 {len(concerns)}개, 완성도 {patch.profile_completeness}%"
        )
        return patch

    def _resolve_skin_type(self, declared: Optional[str], answers: Mapping[str, Any]):
        if declared == SKIN_TYPE_UNSURE:
            return self.classifier.classify_skin_type(answers), True
        if declared in SKIN_TYPES:
            return declared, False
        if declared is not None:
            logger.warning(f"알 수 없는 피부 타입 응답 무시: {declared!r}")
        return None, False

    @staticmethod
    def parse_budget_range(token: Any) -> BudgetRange:
        """예산 구간 토큰 → 가격 범위 (알 수 없으면 5-50)"""
        low, high = BUDGET_RANGES.get(_token(token) or "", DEFAULT_BUDGET_RANGE)
        return BudgetRange(min=low, max=high)

    @staticmethod
    def calculate_skin_analysis(
        declared_skin_type: Optional[str],
        concerns: List[str],
        answers: Mapping[str, Any],
    ) -> SkinAnalysis:
        """중립값(3)에서 시작해 선언 타입, 고민, 진단 응답으로 보정"""
        values = {
            "t_zone_oiliness": AnalysisDefaults.T_ZONE_OILINESS,
            "cheek_dryness": AnalysisDefaults.CHEEK_DRYNESS,
            "sensitivity": AnalysisDefaults.SENSITIVITY,
            "acne_proneness": AnalysisDefaults.ACNE_PRONENESS,
            "confidence_score": AnalysisDefaults.CONFIDENCE_SCORE,
        }
        values.update(SKIN_TYPE_ANALYSIS.get(declared_skin_type or "", {}))

        if "acne" in concerns:
            values["acne_proneness"] = 5
        if "sensitivity" in concerns or "redness" in concerns:
            values["sensitivity"] = 5
        if "dryness" in concerns:
            values["cheek_dryness"] = max(values["cheek_dryness"], 4)
        if "oiliness" in concerns:
            values["t_zone_oiliness"] = max(values["t_zone_oiliness"], 4)

        if _token(answers.get(MORNING_FEEL_QUESTION)) == "tight_dry":
            values["cheek_dryness"] = 5
        if _token(answers.get(MIDDAY_OILINESS_QUESTION)) == "often_shiny":
            values["t_zone_oiliness"] = 5
        if _token(answers.get(FLAKY_PATCHES_QUESTION)) == "yes_frequently":
            values["cheek_dryness"] = max(values["cheek_dryness"], 4)

        return SkinAnalysis(**values)

    def skin_analysis_summary(self, profile: SkinProfile) -> Optional[Dict[str, Any]]:
        """피부 분석 요약 (분석 벡터가 없으면 None)"""
        analysis = profile.skin_analysis
        if analysis is None:
            return None

        return {
            "skin_type": profile.skin_type,
            "oiliness_level": analysis.t_zone_oiliness,
            "dryness_level": analysis.cheek_dryness,
            "sensitivity_level": analysis.sensitivity,
            "acne_proneness_level": analysis.acne_proneness,
            "confidence_score": analysis.confidence_score,
            "primary_concerns": profile.skin_concerns[:MAX_PRIMARY_CONCERNS],
            "recommendation_notes": self._recommendation_notes(profile),
        }

    @staticmethod
    def _recommendation_notes(profile: SkinProfile) -> List[str]:
        notes = []
        if profile.skin_type == "sensitive":
            notes.append("Look for gentle, fragrance-free formulations")
        if "acne" in profile.skin_concerns:
            notes.append("Consider products with salicylic acid or benzoyl peroxide")
        if "aging" in profile.skin_concerns or "wrinkles" in profile.skin_concerns:
            notes.append("Retinoids and peptides may be beneficial")

        sensitivities = [s for s in profile.known_sensitivities if s != SENSITIVITY_NONE]
        if sensitivities:
            notes.append(f"Avoid: {', '.join(sensitivities)}")
        return notes

    @staticmethod
    def apply_patch(profile: SkinProfile, patch: ProfilePatch) -> SkinProfile:
        """변경분을 병합한 새 프로필 (값이 없는 필드는 기존 값 유지)"""
        data = profile.model_dump(exclude={"profile_completeness"})
        for name, value in patch.profile_fields().items():
            if value is None:
                continue
            data[name] = value.model_dump() if hasattr(value, "model_dump") else value
        return SkinProfile.model_validate(data)
