import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Config
from .core.middleware import assign_language, cors_allowed_origins, log_requests
from .services.handler import install_error_handler
from .services.messages import MessageStore, default_store
from .services.renderers import Renderer

logger = logging.getLogger(__name__)


def create_app(store: Optional[MessageStore] = None, renderer: Optional[Renderer] = None) -> FastAPI:
    """Build a FastAPI app with request logging and localized error responses.

    Responses are loaded from ``ERRORKIT_RESPONSES_FILE`` when it is set.
    The error handler is registered last so it sees every failure.
    """
    Config.validate()
    store = store or default_store

    responses_file = Config.responses_file()
    if responses_file:
        store.load_file(responses_file)
        logger.info(f"Loaded responses from {responses_file}")

    app = FastAPI(title="errorkit")
    app.state.messages = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _assign_language(request, call_next):
        return await assign_language(request, call_next)

    @app.middleware("http")
    async def _log_requests(request, call_next):
        return await log_requests(request, call_next)

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "service": "errorkit",
            "timestamp": datetime.now().isoformat(),
            "languages": sorted(store.get_responses()),
        }

    install_error_handler(app, store, renderer)
    return app
