from __future__ import annotations

"""Prometheus metrics for the Marketing Mavericks backend.

Adds an HTTP middleware that records request latency per method/path/status
and a counter of upstream model attempts by outcome.
"""

import time
from typing import Callable, Awaitable

from prometheus_client import Counter, Histogram
from starlette.requests import Request
from starlette.responses import Response

# Generation can take tens of seconds, so the buckets reach the 30s deadline
REQUEST_LATENCY = Histogram(
    "mavericks_request_latency_seconds",
    "HTTP request latency in seconds",
    labelnames=("method", "path", "status"),
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0),
)

LLM_ATTEMPTS = Counter(
    "mavericks_llm_attempts_total",
    "Upstream completion attempts by outcome",
    labelnames=("outcome",),
)


def sanitize_path(path: str) -> str:
    """Reduce paths to their first two segments (e.g. /api/chat).

    Static SPA paths would otherwise explode label cardinality.
    """
    if not path:
        return "/"
    segs = [s for s in path.split("?")[0].split("/") if s]
    if not segs:
        return "/"
    if segs[0] == "api":
        return "/" + "/".join(segs[:2])
    return "/" + segs[0]


def record_attempt(outcome: str) -> None:
    try:
        LLM_ATTEMPTS.labels(outcome=outcome).inc()
    except Exception:
        # Never fail a generation because of metrics
        pass


def metrics_middleware_factory() -> Callable[[Request, Callable[[Request], Awaitable[Response]]], Awaitable[Response]]:
    async def middleware(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        if request.url.path.endswith("/metrics"):
            return await call_next(request)
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        try:
            REQUEST_LATENCY.labels(
                method=request.method,
                path=sanitize_path(request.url.path),
                status=str(response.status_code),
            ).observe(elapsed)
        except Exception:
            # Never block the request due to metrics; fail closed
            pass
        return response

    return middleware
