# foodshare/core/middleware.py
"""Custom middleware for request handling"""
import uuid
import time
import logging
from starlette.requests import Request

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
BUSINESS_HEADER = "X-Business-ID"


async def correlation_id_middleware(request: Request, call_next):
    """Add correlation ID to all requests for tracing"""
    correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
    request.state.correlation_id = correlation_id

    response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    """Log every request with its tenant, status and duration"""
    start_time = time.time()
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    context = {
        "correlation_id": correlation_id,
        "business_id": request.headers.get(BUSINESS_HEADER, "default"),
        "method": request.method,
        "path": request.url.path,
    }

    logger.debug("Request started", extra=context)

    response = await call_next(request)

    duration_ms = round((time.time() - start_time) * 1000, 2)
    response.headers["X-Response-Time-ms"] = str(duration_ms)

    level = logging.WARNING if response.status_code >= 400 else logging.INFO
    logger.log(
        level,
        f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms}ms)",
        extra={**context, "status_code": response.status_code, "duration_ms": duration_ms},
    )

    return response
