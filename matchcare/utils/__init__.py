"""
유틸리티 패키지
"""

from .time_tracker import TimeTracker, TimeMetrics, measure_time

__all__ = [
    "TimeTracker",
    "TimeMetrics",
    "measure_time",
]
