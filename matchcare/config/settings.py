"""
서비스 설정
환경변수(.env 포함)에서 매칭 서비스 설정을 읽어온다
"""
import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    """정수 환경변수 조회 (잘못된 값이면 기본값)"""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"환경변수 {name} 값이 정수가 아닙니다: {raw!r} (기본값 {default} 사용)")
        return default


@dataclass(frozen=True)
class Settings:
    """매칭 서비스 설정값"""
    knowledge_graph_path: Optional[str] = None
    knowledge_cache_ttl_seconds: int = 300
    knowledge_cache_max_size: int = 2048
    score_freshness_days: int = 7
    max_scored_candidates: int = 200
    redis_url: Optional[str] = None
    log_level: str = "INFO"
    debug: bool = False
    environment: str = "development"


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    환경변수에서 설정 로드

    Args:
        env_file: .env 파일 경로 (None이면 현재 디렉토리 탐색)
    """
    load_dotenv(env_file)

    settings = Settings(
        knowledge_graph_path=os.getenv("KNOWLEDGE_GRAPH_PATH") or None,
        knowledge_cache_ttl_seconds=_env_int("KNOWLEDGE_CACHE_TTL_SECONDS", 300),
        knowledge_cache_max_size=_env_int("KNOWLEDGE_CACHE_MAX_SIZE", 2048),
        score_freshness_days=_env_int("SCORE_FRESHNESS_DAYS", 7),
        max_scored_candidates=_env_int("MAX_SCORED_CANDIDATES", 200),
        redis_url=os.getenv("REDIS_URL") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        debug=os.getenv("DEBUG", "False").lower() == "true",
        environment=os.getenv("ENVIRONMENT", "development"),
    )

    logger.debug(f"설정 로드 완료: {settings}")
    return settings
