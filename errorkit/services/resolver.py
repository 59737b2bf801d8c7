"""Resolution of application errors into user-facing messages.

Given an error descriptor and the request it belongs to, pick the
localized message the client should see, decide whether the error was
caused by the user, and print a diagnostic report for server-side
failures. Nothing in here raises: every path ends in a message, at
worst the built-in generic server error text.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, TextIO

from .colorlog import colorlog
from .errors import DEFAULT_CODE, ErrorDescriptor, RequestContext, Resolution
from .messages import FALLBACK_LANGUAGE, LanguagePack, MessageStore, default_store
from .renderers import Renderer, get_renderer


logger = logging.getLogger(__name__)

DUPLICATE_ENTRY = "ER_DUP_ENTRY"
VALIDATION_ERROR = "VALIDATION_ERROR"

SERVER_DEFAULT_MESSAGES = {
    "INTERNAL_SERVER_ERROR": "An internal server error occurred.",
    "DATABASE_ERROR": "A database error occurred.",
    "SERVICE_UNAVAILABLE": "Service is temporarily unavailable.",
    "BAD_GATEWAY": "Bad gateway.",
    "GATEWAY_TIMEOUT": "Gateway timed out.",
    "NOT_IMPLEMENTED": "This feature is not implemented.",
    "NETWORK_ERROR": "A network error occurred.",
    "TIMEOUT": "The operation timed out.",
}

USER_CAUSED_CODES = frozenset({
    "VALIDATION_ERROR",
    "ER_DUP_ENTRY",
    "BAD_REQUEST",
    "UNAUTHORIZED",
    "FORBIDDEN",
    "NOT_FOUND",
    "CONFLICT",
    "METHOD_NOT_ALLOWED",
    "NOT_ACCEPTABLE",
    "UNSUPPORTED_MEDIA_TYPE",
    "PAYLOAD_TOO_LARGE",
    "UNPROCESSABLE_ENTITY",
    "TOO_MANY_REQUESTS",
})

BANNER = "===================== ERROR REPORT ====================="
FOOTER = "========================================================"

REPORT_COLORS = {
    "border": "red",
    "context": "yellow",
    "error": "magenta",
    "user_message": "cyan",
    "raw_message": "white",
    "stack": "gray",
}


def detect_language(context: Optional[RequestContext]) -> str:
    if context is None:
        return FALLBACK_LANGUAGE
    if context.lang:
        return context.lang
    if context.language:
        return context.language
    if context.accept_language:
        first = context.accept_language.split(",")[0].split(";")[0].strip()
        if first:
            return first
    return FALLBACK_LANGUAGE


def is_user_caused(status: int, code: str) -> bool:
    return 400 <= status < 500 or code in USER_CAUSED_CODES


def _primary_message(descriptor: ErrorDescriptor, pack: LanguagePack, store: MessageStore) -> Optional[str]:
    raw = descriptor.message or ""

    if descriptor.code == DUPLICATE_ENTRY or DUPLICATE_ENTRY in raw:
        for field_name in store.get_prefs().no_dupes_allowed_of:
            if field_name in raw:
                return pack.duplicate(field_name)
        return None

    if descriptor.code == VALIDATION_ERROR and descriptor.field_errors is not None:
        for field_error in descriptor.field_errors:
            message = pack.validation(field_error.field)
            if message:
                return message
        return None

    # Raw text of server-side failures only ever reaches the report
    if is_user_caused(descriptor.status, descriptor.code):
        return raw
    return None


def _fallback_message(descriptor: ErrorDescriptor, pack: LanguagePack) -> str:
    by_code = pack.message(descriptor.code)
    if by_code:
        return by_code
    if descriptor.status >= 500 and descriptor.code in SERVER_DEFAULT_MESSAGES:
        return SERVER_DEFAULT_MESSAGES[descriptor.code]
    return pack.general_error() or SERVER_DEFAULT_MESSAGES[DEFAULT_CODE]


def resolve_error(
    descriptor: ErrorDescriptor,
    context: Optional[RequestContext] = None,
    store: Optional[MessageStore] = None,
) -> Resolution:
    """Pick the client-facing message for ``descriptor`` and classify it.

    Lookup order: duplicate-entry field messages, then per-field validation
    messages, then the raw error message of user-caused errors. If none of
    those produced text: the message for the error code, the built-in server
    default (5xx only), the language's ``general.error`` and finally the
    generic server error.
    """
    store = store or default_store
    lang = detect_language(context)
    pack = store.language_pack(lang)

    message = _primary_message(descriptor, pack, store)
    if not message:
        message = _fallback_message(descriptor, pack)

    user_caused = is_user_caused(descriptor.status, descriptor.code)
    logger.debug(f"Resolved {descriptor.status} {descriptor.code} (lang={lang}, user_caused={user_caused})")
    return Resolution(
        status_code=descriptor.status,
        code=descriptor.code,
        message=message,
        is_user_caused=user_caused,
    )


def report_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.replace(tzinfo=None).isoformat(sep=" ", timespec="milliseconds")


def emit_report(
    resolution: Resolution,
    descriptor: ErrorDescriptor,
    context: Optional[RequestContext] = None,
    renderer: Optional[Renderer] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Print the color-coded error report maintainers read for server-side failures."""
    renderer = renderer or get_renderer()

    def line(text: str, role: str) -> None:
        colorlog(text, REPORT_COLORS[role], renderer=renderer, stream=stream)

    line(BANNER, "border")
    line(f"Time: {report_timestamp()}", "context")
    if context is not None and context.route:
        line(f"Route: {context.route}", "context")
    if context is not None and context.request_id:
        line(f"RequestId: {context.request_id}", "context")
    line(f"Status: {resolution.status_code}", "error")
    line(f"Code: {resolution.code}", "error")
    line(f"UserMessage: {resolution.message}", "user_message")
    line(f"RawMessage: {descriptor.message}", "raw_message")
    line("Stack:", "stack")
    line(descriptor.stack or "N/A", "stack")
    line(FOOTER, "border")


def handle_error(
    descriptor: ErrorDescriptor,
    context: Optional[RequestContext] = None,
    store: Optional[MessageStore] = None,
    renderer: Optional[Renderer] = None,
    stream: Optional[TextIO] = None,
) -> Resolution:
    resolution = resolve_error(descriptor, context, store)
    if not resolution.is_user_caused:
        emit_report(resolution, descriptor, context, renderer, stream)
    return resolution
