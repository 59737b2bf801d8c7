"""Localized error responses, colored console output and key-set checks for FastAPI apps."""

from .core import validation as objects
from .core.validation import allowed_keys, keys_amount, keys_in_range, keys_in_range_detailed
from .services import messages as config
from .services.colorlog import colorlog, format_colored
from .services.errors import AppError
from .services.handler import error_handler, install_error_handler
from .services.messages import MessageStore, Preferences, conf, configure, get_message, set_message

__all__ = [
    "AppError",
    "MessageStore",
    "Preferences",
    "allowed_keys",
    "colorlog",
    "conf",
    "config",
    "configure",
    "error_handler",
    "format_colored",
    "get_message",
    "install_error_handler",
    "keys_amount",
    "keys_in_range",
    "keys_in_range_detailed",
    "objects",
    "set_message",
]
