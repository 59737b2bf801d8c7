"""
Pytest configuration and shared test fixtures.

Provides a fresh message store per test, a sample response catalog and a
FastAPI test client whose routes raise the kinds of errors the handler
has to translate.
"""

from typing import Generator

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from errorkit.app import create_app
from errorkit.core.validation import ensure_allowed_keys
from errorkit.services import messages
from errorkit.services.errors import AppError
from errorkit.services.messages import MessageStore
from errorkit.services.renderers import PlainRenderer


class SignupBody(BaseModel):
    email: str
    age: int


@pytest.fixture
def catalog() -> dict:
    """Sample catalog with English and Spanish packs."""
    return {
        "en": {
            "NOT_FOUND": "Resource not found.",
            "DATABASE_ERROR": "Database is having a moment.",
            "dupes": {"email": "Email exists.", "username": "Username taken."},
            "validation": {"email": "Email is invalid.", "age": "Age must be a number."},
            "general": {"error": "Something went wrong."},
        },
        "es": {
            "NOT_FOUND": "Recurso no encontrado.",
            "dupes": {"email": "El correo ya existe."},
        },
    }


@pytest.fixture
def store(catalog) -> MessageStore:
    return MessageStore(catalog, {"noDupesAllowedof": ["email", "username"], "acceptedLanguages": ["en", "es"]})


@pytest.fixture(autouse=True)
def reset_default_store(monkeypatch) -> Generator[None, None, None]:
    """Keep the process-wide store and environment isolated between tests."""
    monkeypatch.delenv("ERRORKIT_RESPONSES_FILE", raising=False)
    monkeypatch.delenv("COLOR_RENDERER", raising=False)
    messages.configure({}, None)
    yield
    messages.configure({}, None)


@pytest.fixture
def app(store):
    application = create_app(store=store, renderer=PlainRenderer())

    @application.get("/missing")
    async def missing():
        raise HTTPException(status_code=404)

    @application.get("/gone")
    async def gone():
        raise HTTPException(status_code=404, detail="That order was archived.")

    @application.get("/private")
    async def private():
        raise HTTPException(status_code=401, headers={"WWW-Authenticate": "Bearer"})

    @application.get("/duplicate")
    async def duplicate():
        raise AppError(409, "ER_DUP_ENTRY", "ER_DUP_ENTRY: Duplicate entry 'a@b.c' for key 'email'")

    @application.get("/database")
    async def database():
        raise AppError(500, "DATABASE_ERROR", "conn timeout")

    @application.get("/crash")
    async def crash():
        raise ValueError("division by zero in totals")

    @application.post("/signup")
    async def signup(body: SignupBody):
        return {"email": body.email}

    @application.post("/profile")
    async def profile(payload: dict):
        ensure_allowed_keys(payload, ["name"], ["bio"])
        return {"ok": True}

    return application


@pytest.fixture
def test_client(app) -> Generator[TestClient, None, None]:
    """
    Synchronous test client that returns 500 responses instead of raising.

    Starlette re-raises unhandled exceptions after the error handler has
    produced its response, so server exceptions are turned off here.
    """
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
