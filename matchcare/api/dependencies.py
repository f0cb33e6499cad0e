"""
요청 범위 의존성
lifespan에서 만든 서비스 컨테이너를 라우터에 주입
"""
from fastapi import Depends, HTTPException, Request

from matchcare.services.container import ServiceContainer
from matchcare.services.knowledge_service import KnowledgeService
from matchcare.services.match_score_engine import MatchScoreEngine
from matchcare.services.quiz_profile_builder import QuizProfileBuilder
from matchcare.services.recommendation_service import RecommendationService


def get_container(request: Request) -> ServiceContainer:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise HTTPException(
            status_code=503,
            detail={"code": "SERVICE_NOT_READY", "message": "서비스가 아직 초기화되지 않았습니다"},
        )
    return container


def get_knowledge(container: ServiceContainer = Depends(get_container)) -> KnowledgeService:
    return container.knowledge


def get_engine(container: ServiceContainer = Depends(get_container)) -> MatchScoreEngine:
    return container.engine


def get_quiz_builder(container: ServiceContainer = Depends(get_container)) -> QuizProfileBuilder:
    return container.quiz


def get_recommendation_service(
    container: ServiceContainer = Depends(get_container),
) -> RecommendationService:
    return container.recommendations
