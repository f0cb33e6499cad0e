"""
피부 퀴즈 설정
질문 카탈로그, 피부 타입 판정 점수표, 예산 구간, 피부 분석 보정값
"""
from typing import Any, Dict, List, Tuple

# 질문 ID (응답 맵의 키)
SKIN_TYPE_QUESTION = "skin_type"
MORNING_FEEL_QUESTION = "skin_assessment"
MIDDAY_OILINESS_QUESTION = "oily_shine"
FLAKY_PATCHES_QUESTION = "flaky_patches"
CONCERNS_QUESTION = "skin_concerns"
SENSITIVITIES_QUESTION = "sensitivities"
ROUTINE_QUESTION = "routine_complexity"
BUDGET_QUESTION = "budget_range"

# 진단 질문별 허용 별칭 (앞쪽 키 우선)
ASSESSMENT_ANSWER_KEYS: Dict[str, Tuple[str, ...]] = {
    "morning": (MORNING_FEEL_QUESTION, "morning"),
    "midday": (MIDDAY_OILINESS_QUESTION, "midday"),
    "flaky": (FLAKY_PATCHES_QUESTION, "flaky"),
}

# 피부 타입 판정 점수표: 질문 → 응답 → (버킷, 점수)
SKIN_TYPE_POINTS: Dict[str, Dict[str, Tuple[str, int]]] = {
    "morning": {
        "tight_dry": ("dry", 3),
        "normal_balanced": ("normal", 3),
        "oily_shiny": ("oily", 3),
        "combination": ("combination", 3),
    },
    "midday": {
        "rarely_dry": ("dry", 2),
        "rarely_balanced": ("normal", 2),
        "often_shiny": ("oily", 2),
        "tzone_only": ("combination", 2),
    },
    "flaky": {
        "yes_frequently": ("dry", 2),
        "rarely": ("normal", 1),
        "almost_never": ("oily", 1),
        "sometimes_cheeks": ("combination", 1),
    },
}

# 동점일 때 우선순위
CLASSIFIER_PRIORITY: Tuple[str, ...] = ("dry", "oily", "normal", "combination")
CLASSIFIER_DEFAULT = "normal"

# 예산 구간 → (min, max)
BUDGET_RANGES: Dict[str, Tuple[int, int]] = {
    "budget": (5, 15),
    "mid_range": (15, 40),
    "high_end": (40, 80),
    "luxury": (80, 200),
    "mixed": (5, 80),
}
DEFAULT_BUDGET_RANGE: Tuple[int, int] = (5, 50)

DEFAULT_ROUTINE_COMPLEXITY = "moderate"


class AnalysisDefaults:
    T_ZONE_OILINESS = 3
    CHEEK_DRYNESS = 3
    SENSITIVITY = 3
    ACNE_PRONENESS = 3
    CONFIDENCE_SCORE = 85


# 선언된 피부 타입별 분석 벡터 고정값
SKIN_TYPE_ANALYSIS: Dict[str, Dict[str, int]] = {
    "oily": {"t_zone_oiliness": 5, "cheek_dryness": 2},
    "dry": {"t_zone_oiliness": 2, "cheek_dryness": 5},
    "combination": {"t_zone_oiliness": 4, "cheek_dryness": 4},
    "sensitive": {"sensitivity": 5},
}

MAX_PRIMARY_CONCERNS = 3


QUIZ_QUESTIONS: List[Dict[str, Any]] = [
    {
        "id": SKIN_TYPE_QUESTION,
        "question": "What is your skin type?",
        "type": "single_choice",
        "options": [
            {"value": "normal", "label": "Normal", "description": "Balanced, not too oily or dry"},
            {"value": "dry", "label": "Dry", "description": "Often feels tight, may have flaky patches"},
            {"value": "oily", "label": "Oily", "description": "Shiny, enlarged pores, prone to breakouts"},
            {"value": "combination", "label": "Combination", "description": "Oily T-zone, dry or normal cheeks"},
            {"value": "sensitive", "label": "Sensitive", "description": "Easily irritated, reactive to products"},
            {"value": "unsure", "label": "I'm not sure", "description": "Take a quick assessment"},
        ],
    },
    {
        "id": MORNING_FEEL_QUESTION,
        "question": "How does your skin feel when you wake up in the morning?",
        "type": "single_choice",
        "condition": {SKIN_TYPE_QUESTION: "unsure"},
        "options": [
            {"value": "tight_dry", "label": "Tight, dry, maybe flaky"},
            {"value": "normal_balanced", "label": "Normal, comfortable, balanced"},
            {"value": "oily_shiny", "label": "Oily or shiny, especially on forehead, nose, and chin"},
            {"value": "combination", "label": "Dry or normal on cheeks, oily in T-zone"},
        ],
    },
    {
        "id": MIDDAY_OILINESS_QUESTION,
        "question": "How often do you get oily shine during the day?",
        "type": "single_choice",
        "condition": {SKIN_TYPE_QUESTION: "unsure"},
        "options": [
            {"value": "rarely_dry", "label": "Rarely, skin feels dry"},
            {"value": "rarely_balanced", "label": "Rarely, skin looks balanced"},
            {"value": "often_shiny", "label": "Often, skin looks shiny or greasy"},
            {"value": "tzone_only", "label": "Only in some areas, mostly T-zone"},
        ],
    },
    {
        "id": FLAKY_PATCHES_QUESTION,
        "question": "Do you experience flaky or rough patches?",
        "type": "single_choice",
        "condition": {SKIN_TYPE_QUESTION: "unsure"},
        "options": [
            {"value": "yes_frequently", "label": "Yes, frequently"},
            {"value": "rarely", "label": "Rarely"},
            {"value": "almost_never", "label": "Almost never"},
            {"value": "sometimes_cheeks", "label": "Sometimes on cheeks only"},
        ],
    },
    {
        "id": CONCERNS_QUESTION,
        "question": "What are your main skin concerns? (Select all that apply)",
        "type": "multiple_choice",
        "options": [
            {"value": "acne", "label": "Acne", "description": "Pimples, blackheads, whiteheads"},
            {"value": "wrinkles", "label": "Wrinkles", "description": "Deep lines and creases"},
            {"value": "fine_lines", "label": "Fine Lines", "description": "Small, surface-level lines"},
            {"value": "sensitivity", "label": "Sensitivity", "description": "Redness, irritation, reactions"},
            {"value": "dryness", "label": "Dryness", "description": "Flaky, tight, rough patches"},
            {"value": "oiliness", "label": "Excess Oil", "description": "Shiny, greasy appearance"},
            {"value": "redness", "label": "Redness", "description": "Persistent red areas"},
            {"value": "pores", "label": "Large Pores", "description": "Visible, enlarged pores"},
            {"value": "dullness", "label": "Dullness", "description": "Lack of radiance or glow"},
            {"value": "texture", "label": "Uneven Texture", "description": "Bumps, roughness"},
            {"value": "dark_spots", "label": "Dark Spots", "description": "Hyperpigmentation, age spots"},
            {"value": "dark_undereyes", "label": "Dark Under Eyes", "description": "Dark circles"},
            {"value": "fungal_acne", "label": "Fungal Acne", "description": "Small, itchy bumps"},
            {"value": "eczema", "label": "Eczema", "description": "Dry, itchy, inflamed skin"},
        ],
    },
    {
        "id": SENSITIVITIES_QUESTION,
        "question": "Do you have any known sensitivities or allergies?",
        "type": "multiple_choice",
        "options": [
            {"value": "fragrance", "label": "Fragrance", "description": "Perfumes, essential oils"},
            {"value": "alcohol", "label": "Alcohol", "description": "Drying alcohols like denatured alcohol"},
            {"value": "silicone", "label": "Silicones", "description": "Dimethicone, cyclomethicone"},
            {"value": "sulfates", "label": "Sulfates", "description": "SLS, SLES in cleansers"},
            {"value": "parabens", "label": "Parabens", "description": "Preservatives like methylparaben"},
            {"value": "none", "label": "No Known Sensitivities", "description": "No known reactions"},
        ],
    },
    {
        "id": ROUTINE_QUESTION,
        "question": "How complex would you like your routine to be?",
        "type": "single_choice",
        "options": [
            {"value": "minimal", "label": "Minimal (3-4 steps)", "description": "Simple, time-efficient routine"},
            {"value": "moderate", "label": "Moderate (5-7 steps)", "description": "Balanced approach with variety"},
            {"value": "extensive", "label": "Extensive (8+ steps)", "description": "Comprehensive, detailed routine"},
        ],
    },
    {
        "id": BUDGET_QUESTION,
        "question": "What is your budget range per product?",
        "type": "single_choice",
        "options": [
            {"value": "budget", "label": "Budget ($5-15)", "description": "Affordable drugstore options"},
            {"value": "mid_range", "label": "Mid-range ($15-40)", "description": "Quality mid-tier products"},
            {"value": "high_end", "label": "High-end ($40-80)", "description": "Premium skincare products"},
            {"value": "luxury", "label": "Luxury ($80+)", "description": "Top-tier luxury brands"},
            {"value": "mixed", "label": "Mixed Budget", "description": "Varies by product category"},
        ],
    },
]
