"""
매칭 점수 캐시
(user_id, product_id) 복합 키로 점수를 저장하고 신선도 기간(기본 7일) 안에서만 재사용

저장소는 교체 가능:
- MemoryScoreStore: 튜플 키 딕셔너리 (기본값)
- RedisScoreStore: redis.asyncio, JSON 값 (REDIS_URL 설정 시)
"""

import json
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

import redis.asyncio as redis
from redis.exceptions import RedisError

from matchcare.models.scoring_models import MatchScoreRecord, ScoreStoreError
from matchcare.shared.constants import ScoreCacheConfig

logger = logging.getLogger(__name__)


class ScoreStore(ABC):
    """점수 저장소 인터페이스 (실패 시 ScoreStoreError)"""

    name = "score_store"

    @abstractmethod
    async def get(self, user_id: str, product_id: str) -> Optional[MatchScoreRecord]:
        pass

    @abstractmethod
    async def put(self, record: MatchScoreRecord) -> None:
        """복합 키 기준 덮어쓰기 (upsert)"""
        pass

    @abstractmethod
    async def clear(self) -> int:
        pass

    @abstractmethod
    async def count(self) -> int:
        pass


class MemoryScoreStore(ScoreStore):
    """프로세스 메모리 저장소"""

    name = "memory"

    def __init__(self):
        self._records: Dict[Tuple[str, str], MatchScoreRecord] = {}
        self._lock = threading.Lock()

    async def get(self, user_id: str, product_id: str) -> Optional[MatchScoreRecord]:
        with self._lock:
            return self._records.get((user_id, product_id))

    async def put(self, record: MatchScoreRecord) -> None:
        with self._lock:
            self._records[record.key] = record

    async def clear(self) -> int:
        with self._lock:
            count = len(self._records)
            self._records.clear()
            return count

    async def count(self) -> int:
        with self._lock:
            return len(self._records)


class RedisScoreStore(ScoreStore):
    """Redis 저장소 (키: match_score:<user>:<product>)"""

    name = "redis"

    def __init__(
        self,
        redis_url: Optional[str] = None,
        client: Optional[Any] = None,
        ttl: timedelta = ScoreCacheConfig.FRESHNESS_WINDOW,
        key_prefix: str = ScoreCacheConfig.REDIS_KEY_PREFIX,
    ):
        """
        Args:
            redis_url: Redis 접속 URL (client가 없을 때 사용)
            client: 이미 생성된 redis.asyncio 클라이언트 (테스트 주입용)
            ttl: 키 만료 시간
            key_prefix: 키 접두어
        """
        if client is None and not redis_url:
            raise ValueError("redis_url 또는 client가 필요합니다")
        self.redis_url = redis_url
        self._client = client
        self.ttl_seconds = max(1, int(ttl.total_seconds()))
        self.key_prefix = key_prefix

        logger.info(f"Redis 점수 저장소 초기화: {redis_url or '주입된 클라이언트'}")

    def _get_client(self):
        """클라이언트 지연 생성"""
        if self._client is None:
            self._client = redis.from_url(self.redis_url, decode_responses=True)
        return self._client

    def _key(self, user_id: str, product_id: str) -> str:
        return f"{self.key_prefix}:{user_id}:{product_id}"

    async def get(self, user_id: str, product_id: str) -> Optional[MatchScoreRecord]:
        key = self._key(user_id, product_id)
        try:
            raw = await self._get_client().get(key)
        except (RedisError, OSError) as e:
            raise ScoreStoreError(f"Redis 조회 오류: {key} - {e}") from e

        if raw is None:
            return None
        try:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            return MatchScoreRecord.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            raise ScoreStoreError(f"Redis 값 파싱 오류: {key} - {e}") from e

    async def put(self, record: MatchScoreRecord) -> None:
        key = self._key(record.user_id, record.product_id)
        try:
            await self._get_client().setex(key, self.ttl_seconds, json.dumps(record.to_dict()))
        except (RedisError, OSError) as e:
            raise ScoreStoreError(f"Redis 저장 오류: {key} - {e}") from e

    async def _keys(self) -> List[str]:
        client = self._get_client()
        return [key async for key in client.scan_iter(match=f"{self.key_prefix}:*")]

    async def clear(self) -> int:
        # 접두어 키만 삭제 (DB 전체 flush 금지)
        try:
            keys = await self._keys()
            if keys:
                await self._get_client().delete(*keys)
            return len(keys)
        except (RedisError, OSError) as e:
            raise ScoreStoreError(f"Redis 삭제 오류: {e}") from e

    async def count(self) -> int:
        try:
            return len(await self._keys())
        except (RedisError, OSError) as e:
            raise ScoreStoreError(f"Redis 키 조회 오류: {e}") from e


@dataclass
class ScoreCacheStats:
    """점수 캐시 통계"""
    total_requests: int = 0
    hits: int = 0
    misses: int = 0
    stale: int = 0
    forced: int = 0
    writes: int = 0
    store_errors: int = 0

    @property
    def hit_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return (self.hits / self.total_requests) * 100


class ScoreCache:
    """신선도 기간이 있는 점수 캐시 (저장소 오류는 미스로 처리)"""

    def __init__(
        self,
        store: Optional[ScoreStore] = None,
        freshness: timedelta = ScoreCacheConfig.FRESHNESS_WINDOW,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store or MemoryScoreStore()
        self.freshness = freshness
        self._clock = clock or datetime.now
        self._stats = ScoreCacheStats()

    async def get(
        self, user_id: str, product_id: str, force_recalculate: bool = False
    ) -> Optional[MatchScoreRecord]:
        """
        신선한 점수 조회

        Returns:
            Optional[MatchScoreRecord]: 기록이 있고 신선도 기간 안이며 강제 재계산이 아니면 기록, 아니면 None
        """
        self._stats.total_requests += 1
        if force_recalculate:
            self._stats.forced += 1
            self._stats.misses += 1
            return None

        try:
            record = await self.store.get(str(user_id), str(product_id))
        except ScoreStoreError as e:
            self._stats.store_errors += 1
            self._stats.misses += 1
            logger.warning(f"⚠️  점수 캐시 조회 실패, 재계산으로 대체: {e}")
            return None

        if record is None:
            self._stats.misses += 1
            return None

        if self._clock() - record.calculated_at >= self.freshness:
            self._stats.stale += 1
            self._stats.misses += 1
            logger.debug(f"점수 캐시 만료: ({user_id}, {product_id}) {record.calculated_at.isoformat()}")
            return None

        self._stats.hits += 1
        return record

    async def put(
        self, user_id: str, product_id: str, score: int, reasons: Optional[List[str]] = None
    ) -> MatchScoreRecord:
        """점수 저장 (복합 키 덮어쓰기), 저장 실패해도 레코드는 반환"""
        record = MatchScoreRecord(
            user_id=str(user_id),
            product_id=str(product_id),
            score=int(score),
            reasons=list(reasons or []),
            calculated_at=self._clock(),
        )
        try:
            await self.store.put(record)
            self._stats.writes += 1
        except ScoreStoreError as e:
            self._stats.store_errors += 1
            logger.warning(f"⚠️  점수 캐시 저장 실패: {e}")
        return record

    async def clear(self) -> int:
        """관리자용 전체 삭제"""
        try:
            count = await self.store.clear()
        except ScoreStoreError as e:
            self._stats.store_errors += 1
            logger.error(f"❌ 점수 캐시 삭제 실패: {e}")
            return 0
        logger.info(f"🗑️  점수 캐시 전체 삭제: {count}개")
        return count

    async def stats(self) -> Dict[str, Any]:
        try:
            entries = await self.store.count()
        except ScoreStoreError as e:
            logger.warning(f"⚠️  점수 캐시 크기 조회 실패: {e}")
            entries = None

        return {
            "store": self.store.name,
            "entries": entries,
            "freshness_days": self.freshness.total_seconds() / 86400,
            "hit_rate": round(self._stats.hit_rate, 2),
            "total_requests": self._stats.total_requests,
            "hits": self._stats.hits,
            "misses": self._stats.misses,
            "stale": self._stats.stale,
            "forced": self._stats.forced,
            "writes": self._stats.writes,
            "store_errors": self._stats.store_errors,
        }
