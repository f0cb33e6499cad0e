"""
시간 측정 유틸리티
추천 파이프라인 단계별 소요 시간 측정
"""
import time
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

logger = logging.getLogger(__name__)

# 이 시간(ms)을 넘으면 느린 작업으로 경고
SLOW_OPERATION_MS = 1000.0


@dataclass
class TimeMetrics:
    """시간 측정 결과"""
    name: str
    total_ms: float = 0.0
    step_times: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, float]:
        """응답에 싣는 형태 ({step}_ms, total_ms)"""
        result = {f"{step}_ms": round(ms, 3) for step, ms in self.step_times.items()}
        result["total_ms"] = round(self.total_ms, 3)
        return result


class TimeTracker:
    """
    단계별 시간 측정기

    Usage:
        tracker = TimeTracker("recommend").start()
        tracker.step("filter")
        tracker.step("score")
        metrics = tracker.finish()
    """

    def __init__(self, name: str = "operation"):
        self.name = name
        self._started: Optional[float] = None
        self._last_step: Optional[float] = None
        self.step_times: Dict[str, float] = {}

    def start(self) -> "TimeTracker":
        self._started = time.perf_counter()
        self._last_step = self._started
        self.step_times = {}
        return self

    def step(self, step_name: str) -> float:
        """직전 단계 이후 경과 시간(ms) 기록"""
        if self._started is None:
            raise ValueError("start()를 먼저 호출해야 합니다")

        now = time.perf_counter()
        duration_ms = (now - self._last_step) * 1000
        self.step_times[step_name] = duration_ms
        self._last_step = now

        logger.debug(f"📊 {self.name}.{step_name}: {duration_ms:.2f}ms")
        return duration_ms

    def finish(self) -> TimeMetrics:
        if self._started is None:
            raise ValueError("start()를 먼저 호출해야 합니다")

        total_ms = (time.perf_counter() - self._started) * 1000
        metrics = TimeMetrics(name=self.name, total_ms=total_ms, step_times=dict(self.step_times))

        if total_ms > SLOW_OPERATION_MS:
            logger.warning(f"🐌 느린 작업: {self.name} ({total_ms:.2f}ms)")
        else:
            logger.debug(f"✅ {self.name} 완료: {total_ms:.2f}ms")
        return metrics


@contextmanager
def measure_time(name: str) -> Iterator[TimeTracker]:
    """with 블록 전체를 측정"""
    tracker = TimeTracker(name).start()
    try:
        yield tracker
    finally:
        tracker.finish()
