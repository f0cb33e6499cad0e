"""
지식 베이스 정적 매핑 테이블
지식 그래프가 없거나 매칭이 부족할 때 쓰는 키워드 규칙과 카테고리 매핑을 중앙 집중 관리
"""
from typing import Dict, Tuple


class KeywordRules:
    """성분명 부분 문자열 기반 규칙 (소문자 키)"""

    # 성분 키워드 → 기능
    FUNCTIONS: Dict[str, Tuple[str, ...]] = {
        "hyaluronic": ("humectant", "hydrating"),
        "hyaluronate": ("humectant", "hydrating"),
        "glycerin": ("humectant", "hydrating"),
        "niacinamide": ("brightening", "sebum_regulating", "barrier_repair"),
        "salicylic": ("exfoliant", "anti_acne"),
        "glycolic": ("exfoliant",),
        "lactic": ("exfoliant", "humectant"),
        "mandelic": ("exfoliant",),
        "ceramide": ("barrier_repair", "emollient"),
        "retinol": ("anti_aging", "cell_renewal"),
        "retinal": ("anti_aging", "cell_renewal"),
        "retinoid": ("anti_aging", "cell_renewal"),
        "ascorbic": ("antioxidant", "brightening"),
        "vitamin c": ("antioxidant", "brightening"),
        "tocopherol": ("antioxidant",),
        "vitamin e": ("antioxidant",),
        "peptide": ("anti_aging",),
        "centella": ("soothing",),
        "cica": ("soothing",),
        "panthenol": ("soothing", "humectant"),
        "aloe": ("soothing", "hydrating"),
        "allantoin": ("soothing",),
        "squalane": ("emollient",),
        "shea": ("emollient",),
        "dimethicone": ("emollient",),
        "zinc oxide": ("uv_filter",),
        "titanium dioxide": ("uv_filter",),
        "benzoyl peroxide": ("anti_acne", "antibacterial"),
        "tea tree": ("antibacterial",),
        "azelaic": ("anti_acne", "brightening"),
        "arbutin": ("brightening",),
        "kaolin": ("oil_absorbing",),
        "alcohol denat": ("solvent",),
        "fragrance": ("fragrance",),
        "parfum": ("fragrance",),
    }

    # 성분 키워드 → 적합 피부 타입
    SKIN_TYPES: Dict[str, Tuple[str, ...]] = {
        "hyaluronic": ("normal", "dry", "oily", "combination", "sensitive"),
        "niacinamide": ("normal", "dry", "oily", "combination", "sensitive"),
        "salicylic": ("oily", "combination"),
        "glycolic": ("normal", "oily", "combination"),
        "lactic": ("normal", "dry", "combination"),
        "ceramide": ("dry", "sensitive", "normal"),
        "retinol": ("normal", "oily", "combination"),
        "ascorbic": ("normal", "dry", "oily", "combination"),
        "vitamin c": ("normal", "dry", "oily", "combination"),
        "centella": ("normal", "dry", "oily", "combination", "sensitive"),
        "panthenol": ("normal", "dry", "sensitive"),
        "aloe": ("normal", "dry", "sensitive"),
        "squalane": ("normal", "dry", "sensitive"),
        "shea": ("dry",),
        "benzoyl peroxide": ("oily",),
        "tea tree": ("oily", "combination"),
        "zinc oxide": ("normal", "dry", "oily", "combination", "sensitive"),
        "kaolin": ("oily", "combination"),
    }

    # 성분 키워드 → 개선 피부 고민
    CONCERNS: Dict[str, Tuple[str, ...]] = {
        "salicylic acid": ("acne", "pores", "oiliness"),
        "hyaluronic acid": ("dryness", "fine_lines"),
        "sodium hyaluronate": ("dryness", "fine_lines"),
        "niacinamide": ("pores", "dark_spots", "oiliness", "redness"),
        "glycolic acid": ("texture", "dullness", "dark_spots"),
        "lactic acid": ("texture", "dryness", "dullness"),
        "mandelic acid": ("texture", "acne"),
        "azelaic acid": ("acne", "redness", "dark_spots"),
        "ascorbic acid": ("dark_spots", "dullness"),
        "vitamin c": ("dark_spots", "dullness"),
        "retinol": ("wrinkles", "fine_lines", "acne", "texture"),
        "retinal": ("wrinkles", "fine_lines", "acne", "texture"),
        "ceramide": ("dryness", "sensitivity", "eczema"),
        "centella": ("redness", "sensitivity"),
        "panthenol": ("dryness", "sensitivity"),
        "aloe": ("redness", "sensitivity"),
        "peptide": ("wrinkles", "fine_lines"),
        "benzoyl peroxide": ("acne",),
        "tea tree": ("acne", "oiliness"),
        "zinc pca": ("acne", "oiliness"),
        "arbutin": ("dark_spots",),
        "caffeine": ("dark_undereyes",),
        "squalane": ("dryness",),
        "kaolin": ("oiliness", "pores"),
    }


class BenefitTables:
    """기능/고민 → 효능 매핑"""

    FUNCTION_BENEFITS: Dict[str, str] = {
        "humectant": "hydrating",
        "hydrating": "hydrating",
        "emollient": "skin conditioning",
        "barrier_repair": "skin conditioning",
        "exfoliant": "good for texture",
        "cell_renewal": "good for texture",
        "brightening": "brightening",
        "antioxidant": "helps with anti aging",
        "anti_aging": "helps with anti aging",
        "soothing": "reduces irritation",
        "sebum_regulating": "reduces large pores",
        "oil_absorbing": "reduces large pores",
        "anti_acne": "acne fighting",
        "antibacterial": "acne fighting",
        "uv_filter": "sun protection",
    }

    CONCERN_BENEFITS: Dict[str, str] = {
        "acne": "acne fighting",
        "pores": "reduces large pores",
        "oiliness": "reduces large pores",
        "dryness": "hydrating",
        "fine_lines": "helps with anti aging",
        "wrinkles": "helps with anti aging",
        "dark_spots": "brightening",
        "dullness": "brightening",
        "texture": "good for texture",
        "redness": "reduces redness",
        "sensitivity": "reduces irritation",
        "eczema": "reduces irritation",
        "dark_undereyes": "reduces dark circles",
    }


class CategoryTables:
    """제품 카테고리 매핑 (카탈로그 보강용)"""

    SKIN_TYPES: Dict[str, Tuple[str, ...]] = {
        "cleanser": ("normal", "oily", "combination", "dry", "sensitive"),
        "moisturizer": ("normal", "dry", "combination", "sensitive"),
        "serum": ("normal", "oily", "combination", "dry"),
        "toner": ("normal", "oily", "combination"),
        "treatment": ("normal", "oily", "combination", "dry"),
        "suncare": ("normal", "oily", "combination", "dry", "sensitive"),
        "eye care": ("normal", "dry", "combination", "sensitive"),
        "face mask": ("normal", "oily", "combination", "dry"),
    }
    DEFAULT_SKIN_TYPES: Tuple[str, ...] = ("normal", "combination")

    CONCERNS: Dict[str, Tuple[str, ...]] = {
        "cleanser": ("acne", "oiliness", "dullness"),
        "moisturizer": ("dryness", "sensitivity", "fine_lines"),
        "serum": ("acne", "dark_spots", "fine_lines", "dullness"),
        "toner": ("acne", "oiliness", "pores"),
        "treatment": ("acne", "wrinkles", "dark_spots", "texture"),
        "suncare": ("dark_spots", "fine_lines", "sensitivity"),
        "eye care": ("dark_undereyes", "fine_lines", "wrinkles"),
        "face mask": ("dullness", "dryness", "acne", "texture"),
    }

    BENEFITS: Dict[str, Tuple[str, ...]] = {
        "cleanser": ("skin conditioning",),
        "moisturizer": ("hydrating", "skin conditioning"),
        "serum": ("brightening", "hydrating", "helps with anti aging"),
        "toner": ("reduces large pores", "hydrating"),
        "treatment": ("brightening", "good for texture", "helps with anti aging"),
        "suncare": ("skin conditioning",),
        "eye care": ("hydrating", "helps with anti aging"),
        "face mask": ("hydrating", "brightening", "good for texture"),
    }


class DefaultMappings:
    """지식 그래프 로드 실패 시 사용하는 큐레이션 데이터"""

    SKIN_TYPES: Dict[str, str] = {
        "normal": "Normal",
        "dry": "Dry",
        "oily": "Oily",
        "combination": "Combination",
        "sensitive": "Sensitive",
    }

    CONCERNS: Dict[str, str] = {
        "acne": "Acne",
        "wrinkles": "Wrinkles",
        "fine_lines": "Fine Lines",
        "dark_spots": "Dark Spots",
        "dryness": "Dryness",
        "oiliness": "Oiliness",
        "sensitivity": "Sensitivity",
        "pores": "Large Pores",
        "dullness": "Dullness",
        "redness": "Redness",
    }

    KEY_INGREDIENTS: Dict[str, str] = {
        "hyaluronic acid": "Hyaluronic Acid",
        "niacinamide": "Niacinamide",
        "vitamin c": "Vitamin C",
        "retinoid": "Retinoid",
        "ceramides": "Ceramides",
        "aha": "Alpha Hydroxy Acid",
        "bha": "Beta Hydroxy Acid",
    }

    SYNERGIES: Dict[str, Tuple[str, ...]] = {
        "vitamin c": ("vitamin e",),
        "hyaluronic acid": ("niacinamide", "ceramides", "peptides"),
        "niacinamide": ("hyaluronic acid",),
    }

    INCOMPATIBILITIES: Dict[str, Tuple[str, ...]] = {
        "retinoid": ("aha", "bha", "vitamin c"),
        "aha": ("retinoid", "bha"),
        "bha": ("retinoid",),
    }


# 지식 그래프 술어 어휘
class Predicates:
    HAS_FUNCTION = "hasFunction"
    RECOMMENDED_FOR = "recommendedFor"
    TREATS_CONCERN = "treatsConcern"
    PROVIDES_BENEFIT = "providesIngredientBenefit"
    SYNERGISTIC_WITH = "synergisticWith"
    INCOMPATIBLE_WITH = "incompatibleWith"
    LABEL = "label"
    TYPE = "type"

    VOCABULARY = (
        HAS_FUNCTION,
        RECOMMENDED_FOR,
        TREATS_CONCERN,
        PROVIDES_BENEFIT,
        SYNERGISTIC_WITH,
        INCOMPATIBLE_WITH,
    )


# type 술어의 객체 클래스
class NodeClasses:
    SKIN_TYPE = "SkinType"
    SKIN_CONCERN = "SkinConcern"
    KEY_INGREDIENT = "KeyIngredient"
