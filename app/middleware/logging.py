import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("app.requests")

# Never written to the request log
REDACTED_PARAMS = {"password"}


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its status and latency."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        action = next((v for k, v in request.query_params.items() if k.lower() == "action"), None)
        logger.info(f"{request.method} {request.url.path}" + (f" action={action}" if action else ""))

        params = {
            k: ("***" if k.lower() in REDACTED_PARAMS else v)
            for k, v in request.query_params.items()
        }
        logger.debug(f"   Query params: {params}")

        response = await call_next(request)

        elapsed_ms = (time.time() - start_time) * 1000
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
        return response
