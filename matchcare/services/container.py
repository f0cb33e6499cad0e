"""
서비스 조립
설정에서 매칭 서비스들을 한 번 생성해 묶어 둔다 (전역 싱글톤 없음)
"""
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from matchcare.config.settings import Settings
from matchcare.services.compatibility_scorer import CompatibilityScorer
from matchcare.services.knowledge_service import KnowledgeService
from matchcare.services.match_score_engine import MatchScoreEngine
from matchcare.services.quiz_profile_builder import QuizProfileBuilder
from matchcare.services.recommendation_service import RecommendationService
from matchcare.services.score_cache import MemoryScoreStore, RedisScoreStore, ScoreCache, ScoreStore
from matchcare.services.skin_type_classifier import SkinTypeClassifier

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    settings: Settings
    knowledge: KnowledgeService
    compatibility: CompatibilityScorer
    engine: MatchScoreEngine
    classifier: SkinTypeClassifier
    quiz: QuizProfileBuilder
    score_cache: ScoreCache
    recommendations: RecommendationService


def build_score_store(settings: Settings) -> ScoreStore:
    if settings.redis_url:
        logger.info("점수 캐시 저장소: Redis")
        return RedisScoreStore(
            redis_url=settings.redis_url,
            ttl=timedelta(days=settings.score_freshness_days),
        )
    logger.info("점수 캐시 저장소: 메모리")
    return MemoryScoreStore()


def build_container(settings: Settings, score_store: Optional[ScoreStore] = None) -> ServiceContainer:
    """
    서비스 컨테이너 생성 (지식 그래프 로드는 호출자가 수행)

    Args:
        settings: 서비스 설정
        score_store: 점수 저장소 (None이면 설정에 따라 생성)
    """
    knowledge = KnowledgeService(
        graph_path=settings.knowledge_graph_path,
        cache_ttl_seconds=settings.knowledge_cache_ttl_seconds,
        cache_max_size=settings.knowledge_cache_max_size,
    )
    engine = MatchScoreEngine(knowledge)
    classifier = SkinTypeClassifier()
    score_cache = ScoreCache(
        store=score_store or build_score_store(settings),
        freshness=timedelta(days=settings.score_freshness_days),
    )

    return ServiceContainer(
        settings=settings,
        knowledge=knowledge,
        compatibility=CompatibilityScorer(knowledge),
        engine=engine,
        classifier=classifier,
        quiz=QuizProfileBuilder(classifier),
        score_cache=score_cache,
        recommendations=RecommendationService(
            engine,
            score_cache,
            max_scored_candidates=settings.max_scored_candidates,
        ),
    )
