"""
QuizProfileBuilder 테스트
"""
from datetime import datetime

import pytest

from matchcare.models.profile_models import SkinAnalysis, SkinProfile
from matchcare.services.quiz_profile_builder import QuizProfileBuilder

QUIZ_TIME = datetime(2024, 3, 1, 12, 0, 0)


@pytest.fixture
def builder():
    return QuizProfileBuilder(now=lambda: QUIZ_TIME)


def test_questions_catalog(builder):
    questions = builder.get_questions()
    ids = [question["id"] for question in questions]

    assert ids == [
        "skin_type", "skin_assessment", "oily_shine", "flaky_patches",
        "skin_concerns", "sensitivities", "routine_complexity", "budget_range",
    ]
    skin_type_values = [option["value"] for option in questions[0]["options"]]
    assert "unsure" in skin_type_values


def test_questions_catalog_is_not_shared(builder):
    questions = builder.get_questions()
    questions[0]["options"].clear()
    questions.pop()

    fresh = builder.get_questions()
    assert len(fresh) == 8
    assert fresh[0]["options"]


def test_full_answers(builder):
    answers = {
        "skin_type": "Oily",
        "skin_concerns": ["acne", "Pores", "acne"],
        "sensitivities": ["fragrance"],
        "routine_complexity": "minimal",
        "budget_range": "luxury",
    }
    patch = builder.build_profile_delta(answers)

    assert patch.skin_type == "oily"
    assert patch.skin_type_inferred is False
    assert patch.skin_concerns == ["acne", "pores"]
    assert patch.known_sensitivities == ["fragrance"]
    assert patch.routine_complexity == "minimal"
    assert (patch.budget_range.min, patch.budget_range.max) == (80, 200)
    assert patch.profile_completeness == 100
    assert patch.last_quiz_date == QUIZ_TIME
    assert [r.question_id for r in patch.quiz_responses] == list(answers)
    assert all(r.timestamp == QUIZ_TIME for r in patch.quiz_responses)

    analysis = patch.skin_analysis
    assert analysis.t_zone_oiliness == 5
    assert analysis.cheek_dryness == 2
    assert analysis.acne_proneness == 5
    assert analysis.sensitivity == 3
    assert analysis.confidence_score == 85


def test_unsure_skin_type_is_classified(builder):
    patch = builder.build_profile_delta({
        "skin_type": "unsure",
        "skin_assessment": "tight_dry",
        "oily_shine": "rarely_dry",
        "flaky_patches": "yes_frequently",
    })

    assert patch.skin_type == "dry"
    assert patch.skin_type_inferred is True
    assert patch.skin_analysis.cheek_dryness == 5
    assert patch.skin_analysis.t_zone_oiliness == 3


def test_unsure_without_assessment_defaults_to_normal(builder):
    patch = builder.build_profile_delta({"skin_type": "unsure"})
    assert patch.skin_type == "normal"
    assert patch.skin_type_inferred is True


def test_invalid_answers_use_defaults(builder):
    patch = builder.build_profile_delta({
        "skin_type": "purple",
        "routine_complexity": "chaotic",
        "budget_range": "priceless",
    })

    assert patch.skin_type is None
    assert patch.routine_complexity == "moderate"
    assert (patch.budget_range.min, patch.budget_range.max) == (5, 50)


def test_only_budget_answered(builder):
    patch = builder.build_profile_delta({"budget_range": "budget"})

    # 루틴 기본값(moderate) 15 + 예산 15
    assert patch.profile_completeness == 30
    assert (patch.budget_range.min, patch.budget_range.max) == (5, 15)


def test_empty_answers(builder):
    patch = builder.build_profile_delta(None)
    assert patch.quiz_responses == []
    assert patch.skin_analysis == SkinAnalysis()


def test_known_sensitivities_alias(builder):
    patch = builder.build_profile_delta({"known_sensitivities": ["Alcohol", "none"]})
    assert patch.known_sensitivities == ["alcohol", "none"]


def test_concerns_nudge_analysis(builder):
    patch = builder.build_profile_delta({
        "skin_type": "combination",
        "skin_concerns": ["redness", "dryness", "oiliness"],
        "oily_shine": "often_shiny",
    })
    analysis = patch.skin_analysis

    assert analysis.sensitivity == 5
    assert analysis.cheek_dryness == 4
    assert analysis.t_zone_oiliness == 5


@pytest.mark.parametrize("token, expected", [
    ("budget", (5, 15)),
    ("MID_RANGE", (15, 40)),
    ("high_end", (40, 80)),
    ("mixed", (5, 80)),
    (None, (5, 50)),
    (42, (5, 50)),
])
def test_parse_budget_range(token, expected):
    budget = QuizProfileBuilder.parse_budget_range(token)
    assert (budget.min, budget.max) == expected


def test_apply_patch_keeps_missing_fields(builder):
    profile = SkinProfile(skin_type="dry", preferred_brands=["CeraVe"])
    patch = builder.build_profile_delta({"skin_concerns": ["dryness"], "budget_range": "mid_range"})

    updated = QuizProfileBuilder.apply_patch(profile, patch)

    assert updated.skin_type == "dry"
    assert updated.skin_concerns == ["dryness"]
    assert updated.preferred_brands == ["CeraVe"]
    assert updated.routine_complexity == "moderate"
    assert updated.profile_completeness == 85
    assert profile.skin_concerns == []


def test_skin_analysis_summary(builder):
    profile = SkinProfile(
        skin_type="sensitive",
        skin_concerns=["acne", "wrinkles", "redness", "dryness"],
        known_sensitivities=["fragrance", "none"],
        skin_analysis=SkinAnalysis(sensitivity=5),
    )
    summary = builder.skin_analysis_summary(profile)

    assert summary["skin_type"] == "sensitive"
    assert summary["sensitivity_level"] == 5
    assert summary["primary_concerns"] == ["acne", "wrinkles", "redness"]
    assert summary["recommendation_notes"] == [
        "Look for gentle, fragrance-free formulations",
        "Consider products with salicylic acid or benzoyl peroxide",
        "Retinoids and peptides may be beneficial",
        "Avoid: fragrance",
    ]


def test_summary_without_analysis(builder):
    assert builder.skin_analysis_summary(SkinProfile(skin_type="oily")) is None
