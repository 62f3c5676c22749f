"""HTTP middleware: request IDs, access logging and crash recovery."""

import logging
import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

REQUEST_ID_HEADER = "X-Request-ID"

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("starter.access")

CallNext = Callable[[Request], Awaitable[Response]]


async def request_id_middleware(request: Request, call_next: CallNext) -> Response:
    """Tag each request with an ID, reusing the client's if it sent one."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


async def access_log_middleware(request: Request, call_next: CallNext) -> Response:
    """Log one line per request."""
    start = time.perf_counter()
    response = await call_next(request)
    latency_ms = (time.perf_counter() - start) * 1000
    client_ip = request.client.host if request.client else "-"
    access_logger.info(
        f"{response.status_code} {request.method} {request.url.path} ({client_ip}) "
        f"{latency_ms:.2f}ms [{getattr(request.state, 'request_id', '-')}]"
    )
    return response


async def recover_middleware(request: Request, call_next: CallNext) -> Response:
    """Turn unhandled exceptions into a generic 500 response."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal Server Error"},
        )


def init_middlewares(app: FastAPI) -> None:
    """Install the middleware chain. The last one added runs outermost."""
    app.middleware("http")(recover_middleware)
    app.middleware("http")(access_log_middleware)
    app.middleware("http")(request_id_middleware)
