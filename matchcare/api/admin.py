"""
관리자 API 엔드포인트
지식 그래프 상태, 점수 캐시 관리, 프로세스 상태
"""
import asyncio
import logging
from datetime import datetime
from typing import Any, Dict

import psutil
from fastapi import APIRouter, Depends

from matchcare.api.dependencies import get_container
from matchcare.models.response import ErrorResponse, HealthResponse
from matchcare.services.container import ServiceContainer

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/admin",
    tags=["admin"],
    responses={500: {"model": ErrorResponse, "description": "서버 내부 오류"}},
)


def _process_metrics() -> Dict[str, Any]:
    """현재 프로세스 메모리/CPU"""
    process = psutil.Process()
    with process.oneshot():
        memory = process.memory_info()
        return {
            "pid": process.pid,
            "memory_rss_mb": round(memory.rss / 1024 / 1024, 2),
            "memory_percent": round(process.memory_percent(), 2),
            "cpu_percent": process.cpu_percent(interval=None),
            "threads": process.num_threads(),
        }


@router.get("/health", response_model=HealthResponse, summary="매칭 서비스 상태")
async def system_health(container: ServiceContainer = Depends(get_container)):
    """
    지식 그래프 로드 상태, 점수 캐시 통계, 프로세스 메모리

    지식 그래프가 없으면 기본 매핑으로 동작 중이므로 degraded로 표시한다.
    """
    knowledge_status = container.knowledge.status()
    status = "healthy" if knowledge_status["source"] == "graph" else "degraded"

    return HealthResponse(
        status=status,
        knowledge=knowledge_status,
        score_cache=await container.score_cache.stats(),
        process=_process_metrics(),
        timestamp=datetime.now(),
    )


@router.post("/cache/clear", summary="점수 캐시 초기화")
async def clear_score_cache(container: ServiceContainer = Depends(get_container)):
    cleared = await container.score_cache.clear()
    logger.info(f"관리자 요청으로 점수 캐시 삭제: {cleared}개")
    return {
        "message": "점수 캐시가 초기화되었습니다",
        "cleared_entries": cleared,
        "timestamp": datetime.now().isoformat(),
    }


@router.post("/knowledge/reload", summary="지식 그래프 다시 로드")
async def reload_knowledge(container: ServiceContainer = Depends(get_container)):
    graph_loaded = await asyncio.to_thread(container.knowledge.reload)
    if not graph_loaded:
        logger.warning("⚠️  지식 그래프 재로드 실패, 기본 매핑 사용 중")
    return {
        "graph_loaded": graph_loaded,
        "status": container.knowledge.status(),
        "timestamp": datetime.now().isoformat(),
    }
