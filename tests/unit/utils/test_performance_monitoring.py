"""Tests for pyvalidation.utils.performance_monitoring module."""

from __future__ import annotations

import pytest

from pyvalidation.utils.performance_monitoring import (
    CSV_HEADER,
    PerformanceMetric,
    PerformanceMonitor,
    process_memory_mb,
)


class TestPerformanceMetric:
    """Tests for PerformanceMetric dataclass."""

    def test_empty(self):
        metric = PerformanceMetric()
        assert metric.avg_time == 0.0
        data = metric.to_dict()
        assert data["min_time"] == 0.0
        assert data["count"] == 0

    def test_formatted_fields(self):
        monitor = PerformanceMonitor()
        monitor.record("IsMobile", 1.234)
        data = monitor.get_report()["IsMobile"]
        assert data["avg_time_formatted"] == "1.23ms"
        assert data["total_time_formatted"] == "1.23ms"


class TestPerformanceMonitor:
    """Tests for PerformanceMonitor class."""

    def test_stop_returns_elapsed_ms(self, stepping_clock):
        monitor = PerformanceMonitor(clock=stepping_clock(0.005))
        stop = monitor.start_timer("IsMobile")
        assert stop() == pytest.approx(5.0)

    def test_aggregates_three_samples(self):
        monitor = PerformanceMonitor()
        for duration in (5.0, 10.0, 15.0):
            monitor.record("IsMobile", duration)
        metric = monitor.get_metric("IsMobile")
        assert metric.count == 3
        assert metric.total_time == pytest.approx(30.0)
        assert metric.avg_time == pytest.approx(10.0)
        assert metric.min_time == pytest.approx(5.0)
        assert metric.max_time == pytest.approx(15.0)
        assert metric.last_execution_time is not None

    def test_timer_samples_with_clock(self):
        ticks = iter([0.0, 0.005, 1.0, 1.010, 2.0, 2.015])
        monitor = PerformanceMonitor(clock=lambda: next(ticks))
        for _ in range(3):
            monitor.start_timer("IsEmail")()
        report = monitor.get_report()["IsEmail"]
        assert report["count"] == 3
        assert report["avg_time"] == pytest.approx(10.0)
        assert report["min_time"] == pytest.approx(5.0)
        assert report["max_time"] == pytest.approx(15.0)

    def test_zero_duration_is_recorded(self, fake_clock):
        monitor = PerformanceMonitor(clock=fake_clock)
        assert monitor.start_timer("Fast")() == 0.0
        metric = monitor.get_metric("Fast")
        assert metric.count == 1
        assert metric.min_time == 0.0

    def test_stop_records_once(self, stepping_clock):
        monitor = PerformanceMonitor(clock=stepping_clock(0.001))
        stop = monitor.start_timer("IsMobile")
        first = stop()
        second = stop()
        assert first == second
        assert monitor.get_metric("IsMobile").count == 1

    def test_track_records_on_exception(self):
        monitor = PerformanceMonitor()
        with pytest.raises(RuntimeError):
            with monitor.track("Broken"):
                raise RuntimeError("boom")
        assert monitor.get_metric("Broken").count == 1

    def test_record_rejects_negative(self):
        monitor = PerformanceMonitor()
        with pytest.raises(ValueError):
            monitor.record("x", -1.0)

    def test_unknown_metric(self):
        assert PerformanceMonitor().get_metric("nope") is None

    def test_hotspots_sorted_by_average(self):
        monitor = PerformanceMonitor()
        monitor.record("fast", 1.0)
        monitor.record("slow", 20.0)
        monitor.record("medium", 5.0)
        monitor.record("medium", 7.0)
        hotspots = monitor.get_hotspots()
        assert [h["name"] for h in hotspots] == ["slow", "medium", "fast"]
        assert hotspots[1]["count"] == 2
        assert hotspots[1]["avg_time"] == pytest.approx(6.0)
        assert [h["name"] for h in monitor.get_hotspots(limit=1)] == ["slow"]
        assert monitor.get_hotspots(limit=0) == []

    def test_export_to_csv(self):
        monitor = PerformanceMonitor()
        for duration in (5.0, 10.0, 15.0):
            monitor.record("IsMobile", duration)
        lines = monitor.export_to_csv().splitlines()
        assert lines[0] == ",".join(CSV_HEADER)
        fields = lines[1].split(",")
        assert fields[:6] == ["IsMobile", "3", "30.00", "10.00", "15.00", "5.00"]
        assert "T" in fields[6]

    def test_export_empty(self):
        assert PerformanceMonitor().export_to_csv().strip() == ",".join(CSV_HEADER)

    def test_clear(self):
        monitor = PerformanceMonitor()
        monitor.record("x", 1.0)
        monitor.clear()
        assert len(monitor) == 0
        assert monitor.get_report() == {}


def test_process_memory_mb():
    assert process_memory_mb() > 0
