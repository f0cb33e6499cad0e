"""
TimeTracker 테스트
"""
import pytest

from matchcare.utils.time_tracker import TimeTracker, measure_time


def test_steps_and_total():
    tracker = TimeTracker("pipeline").start()
    tracker.step("filter")
    tracker.step("score")
    metrics = tracker.finish()

    data = metrics.to_dict()
    assert set(data) == {"filter_ms", "score_ms", "total_ms"}
    assert data["total_ms"] >= data["filter_ms"]
    assert all(value >= 0 for value in data.values())


def test_step_before_start_raises():
    with pytest.raises(ValueError):
        TimeTracker("pipeline").step("filter")


def test_measure_time_yields_started_tracker():
    with measure_time("block") as tracker:
        tracker.step("inner")
    assert "inner" in tracker.step_times
