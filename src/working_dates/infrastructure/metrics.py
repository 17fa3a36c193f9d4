"""
Application Metrics.

In-process counters and histograms exported in Prometheus text format.
"""

import time
from collections import defaultdict
from threading import Lock
from typing import Dict, Iterator, List, Optional, Tuple

from flask import Flask, Response, g, request


LabelKey = Tuple[Tuple[str, str], ...]


def _labels_key(labels: Dict[str, str]) -> LabelKey:
    return tuple(sorted(labels.items()))


def _render_labels(key: LabelKey, **more: str) -> str:
    pairs = list(key) + sorted(more.items())
    if not pairs:
        return ""
    return "{" + ",".join(f'{k}="{v}"' for k, v in pairs) + "}"


class Counter:
    """A monotonically increasing counter metric."""

    kind = "counter"

    def __init__(self, name: str, description: str) -> None:
        self.name = name
        self.description = description
        self._values: Dict[LabelKey, float] = defaultdict(float)
        self._lock = Lock()

    def inc(self, value: float = 1.0, **labels: str) -> None:
        """Increment the counter."""
        with self._lock:
            self._values[_labels_key(labels)] += value

    def samples(self) -> Iterator[str]:
        with self._lock:
            items = list(self._values.items())
        for key, value in items:
            yield f"{self.name}{_render_labels(key)} {value}"


class Histogram:
    """A histogram metric for tracking distributions."""

    kind = "histogram"

    DEFAULT_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)

    def __init__(
        self,
        name: str,
        description: str,
        buckets: tuple = DEFAULT_BUCKETS,
    ) -> None:
        self.name = name
        self.description = description
        self.buckets = buckets
        self._counts: Dict[LabelKey, Dict[float, int]] = defaultdict(lambda: defaultdict(int))
        self._sums: Dict[LabelKey, float] = defaultdict(float)
        self._totals: Dict[LabelKey, int] = defaultdict(int)
        self._lock = Lock()

    def observe(self, value: float, **labels: str) -> None:
        """Record an observation."""
        key = _labels_key(labels)
        with self._lock:
            self._sums[key] += value
            self._totals[key] += 1
            for bucket in self.buckets:
                if value <= bucket:
                    self._counts[key][bucket] += 1

    def samples(self) -> Iterator[str]:
        with self._lock:
            keys = list(self._totals)
            snapshot = [
                (key, dict(self._counts[key]), self._sums[key], self._totals[key])
                for key in keys
            ]
        for key, counts, total_sum, total in snapshot:
            for bucket in self.buckets:
                le = _render_labels(key, le=str(bucket))
                yield f"{self.name}_bucket{le} {counts.get(bucket, 0)}"
            yield f"{self.name}_bucket{_render_labels(key, le='+Inf')} {total}"
            yield f"{self.name}_sum{_render_labels(key)} {total_sum}"
            yield f"{self.name}_count{_render_labels(key)} {total}"


class MetricsRegistry:
    """Registry for all application metrics."""

    def __init__(self) -> None:
        # HTTP metrics
        self.http_requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
        )
        self.http_request_duration_seconds = Histogram(
            "http_request_duration_seconds",
            "HTTP request latency in seconds",
        )

        # Business metrics
        self.calculations_total = Counter(
            "working_date_calculations_total",
            "Total number of working date calculations",
        )

        # External service metrics
        self.holiday_fetch_total = Counter(
            "holiday_fetch_total",
            "Total number of holiday calendar fetches",
        )

    @property
    def metrics(self) -> List:
        return [
            self.http_requests_total,
            self.http_request_duration_seconds,
            self.calculations_total,
            self.holiday_fetch_total,
        ]

    def to_prometheus_format(self) -> str:
        """Export metrics in Prometheus text format."""
        lines = []
        for metric in self.metrics:
            lines.append(f"# HELP {metric.name} {metric.description}")
            lines.append(f"# TYPE {metric.name} {metric.kind}")
            lines.extend(metric.samples())
        return "\n".join(lines) + "\n"


# Global metrics registry
_metrics: Optional[MetricsRegistry] = None


def get_metrics() -> MetricsRegistry:
    """Get global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics


def setup_metrics_middleware(app: Flask) -> None:
    """
    Setup Flask middleware for automatic HTTP metrics collection.

    Args:
        app: Flask application instance.
    """
    @app.before_request
    def before_request() -> None:
        g.metrics_start_time = time.time()

    @app.after_request
    def after_request(response):
        metrics = get_metrics()
        duration = time.time() - g.get("metrics_start_time", time.time())
        endpoint = request.endpoint or "unknown"

        metrics.http_requests_total.inc(
            method=request.method,
            endpoint=endpoint,
            status=str(response.status_code),
        )
        metrics.http_request_duration_seconds.observe(
            duration,
            method=request.method,
            endpoint=endpoint,
        )

        return response


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint handler."""
    return Response(
        get_metrics().to_prometheus_format(),
        mimetype="text/plain; charset=utf-8",
    )
