"""Observability helpers.

Request IDs + structlog contextvars for JSON logs, plus a process-wide
Prometheus registry scraped from ``/metrics``.
"""

from __future__ import annotations

from mahasiswa_api.observability.logging import configure_logging
from mahasiswa_api.observability.metrics import get_metrics, reset_metrics
from mahasiswa_api.observability.middleware import RequestContextMiddleware

__all__ = [
    "RequestContextMiddleware",
    "configure_logging",
    "get_metrics",
    "reset_metrics",
]
