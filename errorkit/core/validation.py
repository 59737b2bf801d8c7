import logging
from typing import Any, Iterable, Mapping, Optional

from ..services.errors import AppError


logger = logging.getLogger(__name__)


def keys_amount(obj: Mapping[str, Any]) -> int:
    return len(obj)


def keys_in_range(obj: Mapping[str, Any], min_keys: int, max_keys: Optional[int] = None) -> bool:
    """True if the key count lies in ``[min_keys, max_keys]``; exact match when ``max_keys`` is omitted."""
    if max_keys is None:
        max_keys = min_keys
    return min_keys <= keys_amount(obj) <= max_keys


def keys_in_range_detailed(obj: Mapping[str, Any], min_keys: int, max_keys: Optional[int] = None) -> int:
    """Return -1 below ``min_keys``, 1 above ``max_keys`` and 0 inside the range."""
    if max_keys is None:
        max_keys = min_keys
    count = keys_amount(obj)
    if count < min_keys:
        return -1
    if count > max_keys:
        return 1
    return 0


def allowed_keys(obj: Mapping[str, Any], required: Iterable[str], optional: Iterable[str] = ()) -> bool:
    """Check that ``obj`` has every required key and nothing outside required + optional."""
    required = list(required)
    allowed = set(required) | set(optional)

    if len(obj) > len(allowed):
        return False

    for key in required:
        if key not in obj:
            return False

    for key in obj:
        if key not in allowed:
            return False

    return True


def ensure_allowed_keys(payload: Any, required: Iterable[str], optional: Iterable[str] = ()) -> None:
    required = list(required)
    optional = list(optional)
    if not isinstance(payload, Mapping):
        raise AppError(400, "BAD_REQUEST", "Request body must be a JSON object")

    if not allowed_keys(payload, required, optional):
        missing = [key for key in required if key not in payload]
        unexpected = [key for key in payload if key not in required and key not in optional]
        logger.warning(f"Rejected payload keys: missing={missing} unexpected={unexpected}")
        errors = [{"param": key, "code": "missing"} for key in missing]
        errors += [{"param": key, "code": "unexpected"} for key in unexpected]
        raise AppError(400, "BAD_REQUEST", "Invalid request body keys", errors=errors)
