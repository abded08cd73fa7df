"""
Performance monitoring for cached validators.

Every cache miss in :func:`pyvalidation.cache.manager.with_cache` runs the
wrapped validator under a timer started here, so the monitor ends up with one
aggregate per validator name. The aggregates can be read as a report, ranked
as hotspots or exported as CSV for spreadsheets.

Classes:
    PerformanceMetric: Aggregated timings for one named operation
    PerformanceMonitor: Thread-safe collector of named timings

Functions:
    process_memory_mb: Resident memory of the current process

Features:
    - High-resolution timers with an injectable clock
    - count/total/avg/min/max/last-run aggregation
    - Hotspot ranking by average time
    - CSV export

Example:
    Timing an operation:
        >>> from pyvalidation.utils.performance_monitoring import PerformanceMonitor
        >>> monitor = PerformanceMonitor()
        >>> stop = monitor.start_timer("IsMobile")
        >>> ...  # run the validator
        >>> elapsed_ms = stop()
        >>> monitor.get_report()["IsMobile"]["count"]
        1

    Using the context manager:
        >>> with monitor.track("IsEmail"):
        ...     is_email("a@b.co")
"""

from __future__ import annotations

import csv
import io
import math
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import psutil

CSV_HEADER = [
    "Name",
    "Count",
    "Total Time (ms)",
    "Avg Time (ms)",
    "Max Time (ms)",
    "Min Time (ms)",
    "Last Execution",
]


@dataclass
class PerformanceMetric:
    """Aggregated timings (milliseconds) for one named operation."""

    count: int = 0
    total_time: float = 0.0
    max_time: float = 0.0
    min_time: float = math.inf
    last_execution_time: datetime | None = None

    @property
    def avg_time(self) -> float:
        return self.total_time / self.count if self.count else 0.0

    def add_sample(self, duration_ms: float, when: datetime) -> None:
        self.count += 1
        self.total_time += duration_ms
        self.max_time = max(self.max_time, duration_ms)
        self.min_time = min(self.min_time, duration_ms)
        self.last_execution_time = when

    def to_dict(self) -> dict[str, Any]:
        min_time = 0.0 if math.isinf(self.min_time) else self.min_time
        return {
            "count": self.count,
            "total_time": self.total_time,
            "avg_time": self.avg_time,
            "max_time": self.max_time,
            "min_time": min_time,
            "last_execution_time": self.last_execution_time,
            "avg_time_formatted": f"{self.avg_time:.2f}ms",
            "total_time_formatted": f"{self.total_time:.2f}ms",
        }


class PerformanceMonitor:
    """
    Collects named timings.

    ``clock`` returns seconds as a float (``time.perf_counter`` by default);
    tests pass a fake clock to get deterministic durations.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.perf_counter
        self._metrics: dict[str, PerformanceMetric] = {}
        self._lock = threading.RLock()

    def start_timer(self, name: str) -> Callable[[], float]:
        """
        Start timing ``name``.

        Returns a stop function. Calling it records the elapsed time and
        returns it in milliseconds; later calls return the same value
        without recording again.
        """
        start = self._clock()
        recorded: list[float] = []

        def stop() -> float:
            with self._lock:
                if recorded:
                    return recorded[0]
                elapsed_ms = max(0.0, (self._clock() - start) * 1000.0)
                self._record_locked(name, elapsed_ms)
                recorded.append(elapsed_ms)
                return elapsed_ms

        return stop

    @contextmanager
    def track(self, name: str) -> Iterator[None]:
        """Time the body of a ``with`` block, even when it raises."""
        stop = self.start_timer(name)
        try:
            yield
        finally:
            stop()

    def record(self, name: str, duration_ms: float) -> None:
        """Fold an externally measured duration into the metric for ``name``."""
        if duration_ms < 0:
            raise ValueError("duration_ms must be non-negative")
        with self._lock:
            self._record_locked(name, duration_ms)

    def _record_locked(self, name: str, duration_ms: float) -> None:
        metric = self._metrics.get(name)
        if metric is None:
            metric = self._metrics[name] = PerformanceMetric()
        metric.add_sample(duration_ms, datetime.now(timezone.utc))

    def get_metric(self, name: str) -> PerformanceMetric | None:
        with self._lock:
            return self._metrics.get(name)

    def get_report(self) -> dict[str, dict[str, Any]]:
        """Get every metric with its derived average and formatted times."""
        with self._lock:
            return {name: metric.to_dict() for name, metric in self._metrics.items()}

    def get_hotspots(self, limit: int = 10) -> list[dict[str, Any]]:
        """Get the slowest operations by average time, slowest first."""
        with self._lock:
            ranked = sorted(
                self._metrics.items(), key=lambda item: item[1].avg_time, reverse=True
            )
            return [
                {"name": name, "avg_time": metric.avg_time, "count": metric.count}
                for name, metric in ranked[: max(0, limit)]
            ]

    def export_to_csv(self) -> str:
        """Export all metrics as CSV text with two-decimal numeric fields."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        with self._lock:
            for name, metric in self._metrics.items():
                min_time = 0.0 if math.isinf(metric.min_time) else metric.min_time
                last = metric.last_execution_time.isoformat() if metric.last_execution_time else ""
                writer.writerow(
                    [
                        name,
                        metric.count,
                        f"{metric.total_time:.2f}",
                        f"{metric.avg_time:.2f}",
                        f"{metric.max_time:.2f}",
                        f"{min_time:.2f}",
                        last,
                    ]
                )
        return buffer.getvalue()

    def clear(self) -> None:
        """Drop all metrics."""
        with self._lock:
            self._metrics.clear()

    def __len__(self) -> int:
        return len(self._metrics)


def process_memory_mb() -> float:
    """Resident set size of the current process in megabytes."""
    return psutil.Process().memory_info().rss / 1024 / 1024
