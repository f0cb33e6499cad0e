"""
테스트 공용 픽스처
"""
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from matchcare.models.profile_models import ProductRecord, SkinProfile
from matchcare.services.knowledge_service import KnowledgeService
from matchcare.services.match_score_engine import MatchScoreEngine

GRAPH_PATH = Path(__file__).resolve().parents[1] / "data" / "knowledge" / "skincare_knowledge.json"


class FakeClock:
    """수동으로 진행시키는 단조 시계 (초)"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeDateTimeClock:
    """수동으로 진행시키는 datetime 시계"""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 9, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta):
        self.now += delta


def make_product(product_id="p1", **overrides) -> ProductRecord:
    data = {
        "product_id": product_id,
        "product_name": f"Product {product_id}",
        "brand": "TestBrand",
        "main_category": "serum",
    }
    data.update(overrides)
    return ProductRecord(**data)


@pytest.fixture
def graph_path() -> Path:
    return GRAPH_PATH


@pytest.fixture
def fallback_knowledge() -> KnowledgeService:
    knowledge = KnowledgeService()
    knowledge.load()
    return knowledge


@pytest.fixture
def graph_knowledge(graph_path) -> KnowledgeService:
    knowledge = KnowledgeService(graph_path=str(graph_path))
    assert knowledge.load() is True
    return knowledge


@pytest.fixture
def engine(fallback_knowledge) -> MatchScoreEngine:
    return MatchScoreEngine(fallback_knowledge)


@pytest.fixture
def oily_profile() -> SkinProfile:
    return SkinProfile(
        skin_type="oily",
        skin_concerns=["acne", "pores"],
        preferred_ingredients=["salicylic acid"],
        preferred_brands=["cerave"],
    )


@pytest.fixture
def acne_product() -> ProductRecord:
    return make_product(
        "bha-1",
        product_name="BHA Clarifying Serum",
        brand="CeraVe",
        suitable_skin_types=["oily"],
        addresses_concerns=["acne", "pores"],
        ingredients=["Water", "Salicylic Acid", "Glycerin"],
        key_ingredients=["Salicylic Acid"],
        fragrance_free=True,
    )
