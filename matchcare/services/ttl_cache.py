"""
TTL 기반 메모리 캐시
크기 제한(LRU), 만료 시간, 히트율 통계를 갖는 스레드 안전 맵
"""

import time
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass
class CacheEntry:
    """캐시 엔트리"""
    data: Any
    created_at: float
    ttl_seconds: float
    access_count: int = 0

    def is_expired(self, now: float) -> bool:
        """캐시 만료 여부 확인"""
        return now - self.created_at >= self.ttl_seconds


@dataclass
class CacheStats:
    """캐시 통계"""
    total_requests: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    evictions: int = 0
    expired_entries: int = 0
    clears: int = 0

    @property
    def hit_rate(self) -> float:
        """캐시 히트율 (%)"""
        if self.total_requests == 0:
            return 0.0
        return (self.cache_hits / self.total_requests) * 100


class TTLCache:
    """TTL + LRU 메모리 캐시"""

    def __init__(
        self,
        max_size: int = 2048,
        default_ttl: float = 300,
        clock: Optional[Callable[[], float]] = None,
        name: str = "ttl_cache",
    ):
        """
        캐시 초기화

        Args:
            max_size: 최대 캐시 엔트리 수
            default_ttl: 기본 TTL (초)
            clock: 현재 시각(초)을 반환하는 함수 (테스트 주입용)
            name: 로그에 표시할 캐시 이름
        """
        if max_size <= 0:
            raise ValueError("max_size는 1 이상이어야 합니다")
        self.max_size = max_size
        self.default_ttl = default_ttl
        self.name = name
        self._clock = clock or time.monotonic
        self._cache: "OrderedDict[Hashable, CacheEntry]" = OrderedDict()
        self._stats = CacheStats()
        self._lock = threading.RLock()

        logger.info(f"{name} 초기화: max_size={max_size}, default_ttl={default_ttl}s")

    def get(self, key: Hashable, default: Any = None) -> Any:
        """캐시 조회 (없거나 만료되면 default)"""
        with self._lock:
            self._stats.total_requests += 1
            entry = self._cache.get(key)

            if entry is None:
                self._stats.cache_misses += 1
                return default

            if entry.is_expired(self._clock()):
                del self._cache[key]
                self._stats.cache_misses += 1
                self._stats.expired_entries += 1
                logger.debug(f"{self.name} 만료: {key}")
                return default

            entry.access_count += 1
            self._stats.cache_hits += 1
            self._cache.move_to_end(key)
            return entry.data

    def set(self, key: Hashable, data: Any, ttl: Optional[float] = None) -> None:
        """캐시 저장 (기존 엔트리는 교체)"""
        with self._lock:
            self._cache[key] = CacheEntry(
                data=data,
                created_at=self._clock(),
                ttl_seconds=self.default_ttl if ttl is None else ttl,
            )
            self._cache.move_to_end(key)
            self._evict_if_needed()

    def get_or_set(self, key: Hashable, factory: Callable[[], Any], ttl: Optional[float] = None) -> Any:
        """조회 후 없으면 factory 결과를 저장하고 반환"""
        with self._lock:
            value = self.get(key, _MISSING)
            if value is _MISSING:
                value = factory()
                self.set(key, value, ttl)
            return value

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            entry = self._cache.get(key)
            return entry is not None and not entry.is_expired(self._clock())

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def clear(self) -> int:
        """모든 캐시 삭제"""
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            self._stats.clears += 1
            logger.info(f"{self.name} 전체 삭제: {count}개 엔트리")
            return count

    def cleanup_expired(self) -> int:
        """만료된 엔트리 정리"""
        with self._lock:
            now = self._clock()
            expired_keys = [key for key, entry in self._cache.items() if entry.is_expired(now)]
            for key in expired_keys:
                del self._cache[key]
            self._stats.expired_entries += len(expired_keys)
            return len(expired_keys)

    def get_cache_info(self) -> Dict[str, Any]:
        """캐시 상태 정보"""
        with self._lock:
            return {
                "name": self.name,
                "cache_size": len(self._cache),
                "max_size": self.max_size,
                "default_ttl": self.default_ttl,
                "hit_rate": round(self._stats.hit_rate, 2),
                "total_requests": self._stats.total_requests,
                "cache_hits": self._stats.cache_hits,
                "cache_misses": self._stats.cache_misses,
                "evictions": self._stats.evictions,
                "expired_entries": self._stats.expired_entries,
                "clears": self._stats.clears,
            }

    def _evict_if_needed(self):
        """크기 초과 시 가장 오래 사용되지 않은 엔트리 제거"""
        while len(self._cache) > self.max_size:
            oldest_key = next(iter(self._cache))
            del self._cache[oldest_key]
            self._stats.evictions += 1
            logger.debug(f"{self.name} 제거 (LRU): {oldest_key}")
