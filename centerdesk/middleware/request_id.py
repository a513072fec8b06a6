# middleware/request_id.py
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from centerdesk.core.logging import logger


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ):
        request.state.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request.state.request_id
        logger.debug(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "request_id": request.state.request_id,
                "duration": round((time.perf_counter() - start) * 1000, 2)
            }
        )
        return response
