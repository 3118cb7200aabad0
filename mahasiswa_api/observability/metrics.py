from __future__ import annotations

from prometheus_client import (
    CollectorRegistry,
    Counter,
    GCCollector,
    Histogram,
    PlatformCollector,
    ProcessCollector,
)
from prometheus_client.exposition import choose_encoder

HTTP_LABELS = ("method", "route", "status")


class PrometheusMetrics:
    """Process-wide instruments on a private registry (resets on restart)."""

    def __init__(self) -> None:
        self.registry = CollectorRegistry(auto_describe=True)

        # Default runtime metrics: process_*, python_info, python_gc_*.
        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)
        GCCollector(registry=self.registry)

        self.http_requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            HTTP_LABELS,
            registry=self.registry,
        )
        self.http_request_duration_seconds = Histogram(
            "http_request_duration_seconds",
            "Duration of HTTP requests in seconds",
            HTTP_LABELS,
            registry=self.registry,
        )
        self.db_queries_total = Counter(
            "db_queries_total",
            "Total database queries",
            ("operation",),
            registry=self.registry,
        )

    def observe_http_request(self, method: str, route: str, status: int, elapsed_s: float) -> None:
        labels = (method, route, str(status))
        self.http_requests_total.labels(*labels).inc()
        self.http_request_duration_seconds.labels(*labels).observe(elapsed_s)

    def observe_db_query(self, operation: str) -> None:
        self.db_queries_total.labels(operation).inc()

    def render(self, accept_header: str | None) -> tuple[bytes, str]:
        """Encode the registry for a scrape, honouring OpenMetrics if the scraper asks for it."""

        encoder, content_type = choose_encoder(accept_header or "")
        return encoder(self.registry), content_type


_METRICS: PrometheusMetrics | None = None


def get_metrics() -> PrometheusMetrics:
    global _METRICS
    if _METRICS is None:
        _METRICS = PrometheusMetrics()
    return _METRICS


def reset_metrics() -> None:
    """Drop every instrument and start from a fresh registry (used by tests)."""

    global _METRICS
    _METRICS = None
