"""
MatchScoreEngine 테스트 (기본 매핑 모드)
"""
import pytest

from matchcare.models.profile_models import SkinProfile
from matchcare.models.scoring_models import MatchResult
from matchcare.services.match_score_engine import MatchScoreEngine
from tests.conftest import make_product


# === 전체 점수 ===

def test_strong_match(engine, oily_profile, acne_product):
    result = engine.compute(acne_product, oily_profile)

    assert isinstance(result, MatchResult)
    assert result.product_id == "bha-1"
    assert result.score == 93
    assert result.disqualified is False
    assert result.reasons == [
        "Perfect for oily skin",
        "Addresses acne, pores",
        "Contains beneficial ingredients for you",
    ]
    assert result.breakdown.ingredient_score == 90
    assert result.breakdown.matched_concerns == ["acne", "pores"]


def test_avoided_ingredient_vetoes_score(engine, oily_profile, acne_product):
    profile = oily_profile.model_copy(update={"avoided_ingredients": ["glycerin"]})
    result = engine.compute(acne_product, profile)

    assert result.score == 0
    assert result.disqualified is True
    assert result.breakdown.ingredient_score == 0
    assert "Contains beneficial ingredients for you" not in result.reasons


def test_veto_matches_substring_case_insensitively(engine):
    product = make_product(ingredients=["Aqua", "Alcohol Denat."], key_ingredients=["Niacinamide"])
    assert engine.has_avoided_ingredient(product, SkinProfile(avoided_ingredients=["alcohol"]))
    assert engine.has_avoided_ingredient(product, SkinProfile(avoided_ingredients=["AQUA"]))
    assert not engine.has_avoided_ingredient(product, SkinProfile(avoided_ingredients=["fragrance"]))
    assert not engine.has_avoided_ingredient(product, SkinProfile(avoided_ingredients=["  "]))


def test_veto_only_checks_full_ingredient_list(engine):
    product = make_product(ingredients=["Water", "Glycerin"], key_ingredients=["Niacinamide"])
    result = engine.compute(product, SkinProfile(avoided_ingredients=["niacinamide"]))

    assert not engine.has_avoided_ingredient(product, SkinProfile(avoided_ingredients=["niacinamide"]))
    assert result.disqualified is False
    assert result.breakdown.ingredient_score == 70


def test_empty_profile_is_neutral(engine):
    result = engine.compute(make_product(), SkinProfile())

    assert result.score == 50
    assert result.reasons == []
    assert engine.explain(result) == "Good match for your profile"


def test_declared_avoidances_earn_bonus(engine):
    result = engine.compute(make_product(ingredients=["Water"]), SkinProfile(avoided_ingredients=["parabens"]))

    assert result.breakdown.ingredient_score == 70
    assert result.score == 54
    assert result.reasons == ["Contains beneficial ingredients for you"]


def test_score_is_deterministic(engine, oily_profile, acne_product):
    first = engine.compute(acne_product, oily_profile)
    second = engine.compute(acne_product, oily_profile)
    assert first.to_dict() == second.to_dict()


# === 세부 점수 ===

@pytest.mark.parametrize("profile_type, product_types, expected", [
    ("oily", ["oily", "combination"], 100),
    ("oily", ["combination"], 70),
    ("sensitive", ["dry"], 70),
    ("oily", ["dry"], 30),
    ("oily", [], 30),
    (None, ["dry"], 50),
])
def test_skin_type_score(engine, profile_type, product_types, expected):
    product = make_product(suitable_skin_types=product_types)
    assert engine.skin_type_score(product, SkinProfile(skin_type=profile_type)) == expected


def test_concerns_score(engine):
    product = make_product(addresses_concerns=["acne"])

    score, matched = engine.concerns_score(product, SkinProfile(skin_concerns=["acne", "dryness", "redness"]))
    assert score == pytest.approx(38.333, abs=0.01)
    assert matched == ["acne"]

    assert engine.concerns_score(product, SkinProfile(skin_concerns=["dryness"])) == (30, [])
    assert engine.concerns_score(product, SkinProfile()) == (50, [])


def test_matched_concerns_follow_product_order(engine):
    product = make_product(addresses_concerns=["pores", "redness", "acne"])
    profile = SkinProfile(skin_concerns=["acne", "pores", "redness"])

    score, matched = engine.concerns_score(product, profile)
    assert score == 100
    assert matched == ["pores", "redness", "acne"]
    assert "Addresses pores, redness" in engine.compute(product, profile).reasons


def test_formulation_score(engine):
    product = make_product(fragrance_free=True)

    profile = SkinProfile(known_sensitivities=["fragrance", "alcohol"])
    assert engine.formulation_score(product, profile) == 55

    profile = SkinProfile(known_sensitivities=["none", "unknown-thing"])
    assert engine.formulation_score(product, profile) == 50


def test_formulation_score_is_clamped(engine):
    sensitivities = ["fragrance", "alcohol", "silicone", "sulfates", "parabens"]
    profile = SkinProfile(known_sensitivities=sensitivities)

    assert engine.formulation_score(make_product(), profile) == 0

    all_free = make_product(
        fragrance_free=True, alcohol_free=True, silicone_free=True, sulfate_free=True, paraben_free=True
    )
    assert engine.formulation_score(all_free, profile) == 100


def test_formulation_reason(engine):
    product = make_product(fragrance_free=True, alcohol_free=True)
    result = engine.compute(product, SkinProfile(known_sensitivities=["fragrance", "alcohol"]))
    assert "Formulated to avoid your sensitivities" in result.reasons


def test_brand_score(engine):
    assert engine.brand_score(make_product(brand="CeraVe"), SkinProfile()) == 50
    assert engine.brand_score(make_product(brand="cerave "), SkinProfile(preferred_brands=["CeraVe"])) == 100
    assert engine.brand_score(make_product(brand="Other"), SkinProfile(preferred_brands=["CeraVe"])) == 30
    assert engine.brand_score(make_product(brand=None), SkinProfile(preferred_brands=["CeraVe"])) == 30


def test_concern_pair_bonus_is_capped(engine):
    product = make_product(key_ingredients=["Niacinamide", "Salicylic Acid", "Retinol"])
    profile = SkinProfile(skin_concerns=["acne", "pores", "oiliness", "redness"])

    # 쌍 7개 × 5 = 35 → 상한 20
    assert engine.ingredient_score(product, profile) == 70


# === 부가 기능 ===

def test_explain():
    assert MatchScoreEngine.explain(["Perfect for dry skin", "Addresses dryness"]) == \
        "Perfect for dry skin • Addresses dryness"
    assert MatchScoreEngine.explain([]) == "Good match for your profile"
    assert MatchScoreEngine.explain(None) == "Good match for your profile"


def test_ingredient_similarity(engine):
    assert engine.ingredient_similarity(["A", "B"], ["b", "C"]) == pytest.approx(33.33, abs=0.01)
    assert engine.ingredient_similarity(["A"], ["a "]) == 100
    assert engine.ingredient_similarity([], []) == 0
    assert engine.ingredient_similarity(None, ["A"]) == 0
