import logging
import time
from typing import Callable

from fastapi import Request

from .config import Config


logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def cors_allowed_origins() -> list[str]:
    return Config.allowed_origins()


def cors_headers(origin: str | None) -> dict[str, str]:
    """CORS headers for responses produced outside ``CORSMiddleware``."""
    if not origin or origin not in cors_allowed_origins():
        return {}
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "*",
    }


async def log_requests(request: Request, call_next: Callable):
    start_time = time.time()
    request_id = request.headers.get(REQUEST_ID_HEADER) or f"{int(time.time() * 1000)}-{id(request)}"
    request.state.request_id = request_id

    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        # Only log slow requests (>1s) or errors
        if process_time > 1.0 or response.status_code >= 400:
            logger.info(f"[{request_id}] {request.method} {request.url.path} - {response.status_code} - {process_time:.2f}s")
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(f"[{request_id}] {request.method} {request.url.path} - ERROR: {str(e)} - {process_time:.2f}s")
        raise


async def assign_language(request: Request, call_next: Callable):
    """Expose a ``?lang=`` query parameter as ``request.state.lang``."""
    lang = request.query_params.get("lang")
    if lang:
        request.state.lang = lang
    return await call_next(request)
