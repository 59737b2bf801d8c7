import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.middleware import REQUEST_ID_HEADER, cors_headers
from .errors import AppError, ErrorDescriptor, RequestContext
from .messages import MessageStore
from .renderers import Renderer
from .resolver import handle_error


logger = logging.getLogger(__name__)


def build_error_handler(store: Optional[MessageStore] = None, renderer: Optional[Renderer] = None):
    """Create a terminal exception handler bound to ``store`` and ``renderer``.

    The handler always answers with ``{"status": "error", "code", "message"}``
    and the resolved HTTP status; it never re-raises.
    """

    async def _error_handler(request: Request, exc: Exception) -> JSONResponse:
        descriptor = ErrorDescriptor.from_exception(exc)
        context = RequestContext.from_request(request)
        resolution = handle_error(descriptor, context, store=store, renderer=renderer)
        if resolution.is_user_caused:
            logger.info(f"[{context.request_id}] {context.route} - {resolution.status_code} {resolution.code}")
        headers = {}
        if isinstance(exc, StarletteHTTPException) and exc.headers:
            headers.update(exc.headers)
        # 5xx responses are built by the outermost middleware, past CORS and request logging
        if resolution.status_code >= 500:
            headers.update(cors_headers(request.headers.get("origin")))
            if context.request_id:
                headers[REQUEST_ID_HEADER] = context.request_id
        return JSONResponse(status_code=resolution.status_code, content=resolution.body(), headers=headers or None)

    return _error_handler


error_handler = build_error_handler()


def install_error_handler(
    app: FastAPI,
    store: Optional[MessageStore] = None,
    renderer: Optional[Renderer] = None,
) -> None:
    """Register the error handler for every exception the app can surface."""
    handler = build_error_handler(store, renderer)
    app.add_exception_handler(AppError, handler)
    app.add_exception_handler(StarletteHTTPException, handler)
    app.add_exception_handler(RequestValidationError, handler)
    app.add_exception_handler(Exception, handler)
