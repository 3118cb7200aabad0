from __future__ import annotations

import re
import uuid
from collections.abc import Iterable
from time import perf_counter
from typing import Any, Callable

import structlog
from fastapi import APIRouter
from starlette.datastructures import MutableHeaders
from starlette.responses import JSONResponse
from starlette.routing import compile_path

from mahasiswa_api.observability.metrics import get_metrics

RouteTemplates = list[tuple[re.Pattern[str], str]]


def route_templates(routers: Iterable[APIRouter]) -> RouteTemplates:
    """Compile the path template of every route declared on ``routers``."""

    templates: RouteTemplates = []
    for router in routers:
        for route in router.routes:
            path = getattr(route, "path", None)
            if path:
                regex, _, _ = compile_path(path)
                templates.append((regex, path))
    return templates


def resolve_route(path: str, templates: RouteTemplates) -> str:
    """Return the template matching ``path``, or ``path`` itself when none does."""

    for regex, template in templates:
        if regex.match(path):
            return template
    return path


class RequestContextMiddleware:
    """Adds request_id context, access logs, and Prometheus HTTP metrics."""

    def __init__(self, app: Callable[..., Any], route_templates: RouteTemplates | None = None) -> None:
        self.app = app
        self._route_templates = route_templates or []
        # Avoid self-observing the scrape endpoint.
        self._excluded_metric_paths = {"/metrics"}

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())
        path = scope.get("path", "")
        method = scope.get("method")

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=path,
            method=method,
        )

        start = perf_counter()
        status_code: int = 500
        response_started = False

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code, response_started

            if message.get("type") == "http.response.start":
                response_started = True
                status_code = int(message.get("status", 500))
                headers = MutableHeaders(scope=message)
                headers["X-Request-ID"] = request_id

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            if response_started:
                raise
            # Answered here rather than by ServerErrorMiddleware so the 500 still carries X-Request-ID.
            structlog.get_logger("api").exception("unhandled_exception")
            response = JSONResponse(status_code=500, content={"error": "Server error"})
            await response(scope, receive, send_wrapper)
        finally:
            # The inner app only returns once the last body chunk went out.
            elapsed_s = perf_counter() - start

            if path not in self._excluded_metric_paths:
                get_metrics().observe_http_request(
                    method=str(method),
                    route=resolve_route(path, self._route_templates),
                    status=status_code,
                    elapsed_s=elapsed_s,
                )

            structlog.get_logger("access").info(
                "http_request",
                status_code=status_code,
                elapsed_ms=round(elapsed_s * 1000.0, 2),
            )

            structlog.contextvars.clear_contextvars()
