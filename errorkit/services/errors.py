import traceback
from collections.abc import Iterable
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Dict, List, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException


DEFAULT_STATUS = 500
DEFAULT_CODE = "INTERNAL_SERVER_ERROR"


class AppError(Exception):
    """Application error carrying an HTTP status, a stable code and field errors.

    Raise it from route handlers; the error handler turns it into the
    localized JSON response.
    """

    def __init__(
        self,
        status: int = DEFAULT_STATUS,
        code: str = DEFAULT_CODE,
        message: str = "",
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        self.status = status
        self.code = code
        self.message = message
        self.errors = errors
        super().__init__(message or code)


@dataclass(frozen=True)
class FieldError:
    field: str
    code: str = ""


@dataclass(frozen=True)
class ErrorDescriptor:
    status: int = DEFAULT_STATUS
    code: str = DEFAULT_CODE
    message: str = ""
    field_errors: Optional[List[FieldError]] = None
    stack: Optional[str] = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorDescriptor":
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)) if exc.__traceback__ else None

        if isinstance(exc, RequestValidationError):
            field_errors = [
                FieldError(field=str((err.get("loc") or ("",))[-1]), code=str(err.get("type", "")))
                for err in exc.errors()
            ]
            return cls(
                status=422,
                code="VALIDATION_ERROR",
                message="Request validation failed",
                field_errors=field_errors,
                stack=stack,
            )

        status = _status_of(exc)
        code = getattr(exc, "code", None)
        if not isinstance(code, str) or not code:
            code = _code_for_status(status)

        return cls(
            status=status,
            code=code,
            message=_message_of(exc, status),
            field_errors=_field_errors_of(getattr(exc, "errors", None)),
            stack=stack,
        )


def _status_of(exc: BaseException) -> int:
    for attr in ("status", "status_code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool) and value:
            return value
    return DEFAULT_STATUS


def _code_for_status(status: int) -> str:
    if status == DEFAULT_STATUS:
        return DEFAULT_CODE
    try:
        return HTTPStatus(status).name
    except ValueError:
        return DEFAULT_CODE


def _default_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def _message_of(exc: BaseException, status: int) -> str:
    for attr in ("message", "detail"):
        value = getattr(exc, attr, None)
        if isinstance(value, str):
            # Starlette fills in the bare status phrase when no detail is given
            if attr == "detail" and isinstance(exc, StarletteHTTPException) and value == _default_phrase(status):
                return ""
            return value
        if value is not None:
            return str(value)
    return str(exc)


def _field_errors_of(errors: Any) -> Optional[List[FieldError]]:
    if callable(errors):
        errors = errors()
    if not isinstance(errors, Iterable) or isinstance(errors, (str, bytes, dict)):
        return None
    result = []
    for item in errors:
        if isinstance(item, dict):
            name = item.get("param") or item.get("path") or ""
            result.append(FieldError(field=str(name), code=str(item.get("code", ""))))
        elif isinstance(item, FieldError):
            result.append(item)
    return result


@dataclass(frozen=True)
class RequestContext:
    lang: Optional[str] = None
    language: Optional[str] = None
    accept_language: Optional[str] = None
    method: str = ""
    path: str = ""
    request_id: str = ""

    @property
    def route(self) -> str:
        return f"{self.method} {self.path}".strip()

    @classmethod
    def from_request(cls, request: Request) -> "RequestContext":
        state = request.state
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        request_id = (
            getattr(state, "request_id", None)
            or getattr(state, "id", None)
            or request.headers.get("x-request-id")
            or ""
        )
        return cls(
            lang=getattr(state, "lang", None),
            language=getattr(state, "language", None),
            accept_language=request.headers.get("accept-language"),
            method=request.method,
            path=path,
            request_id=str(request_id),
        )


@dataclass(frozen=True)
class Resolution:
    status_code: int
    code: str
    message: str
    is_user_caused: bool = False

    def body(self) -> Dict[str, str]:
        return {"status": "error", "code": self.code, "message": self.message}
