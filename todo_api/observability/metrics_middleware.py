"""
请求级指标采集中间件：方法、路径、状态码、耗时
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from todo_api.observability.metrics import REQUEST_DURATION, REQUEST_TOTAL

_SKIP_PATHS = ("/metrics", "/health")
_KNOWN_PATHS = ("/create", "/read", "/update", "/delete")


class MetricsMiddleware(BaseHTTPMiddleware):
    """HTTP 请求指标采集"""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if path.startswith(_SKIP_PATHS):
            return await call_next(request)

        start = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000

        # 未知路径归为一类，避免标签基数失控
        endpoint = path if path in _KNOWN_PATHS else "other"
        REQUEST_TOTAL.labels(
            method=request.method, endpoint=endpoint, status_code=str(response.status_code)
        ).inc()
        REQUEST_DURATION.labels(method=request.method, endpoint=endpoint).observe(duration_ms)

        return response
