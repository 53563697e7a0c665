from .kinds import AppError, ErrorKind, to_http
from .handlers import error_response, register_error_handlers
from .persistence import classify_store_error, is_unique_violation, store_errors

__all__ = [
    "AppError",
    "ErrorKind",
    "to_http",
    "error_response",
    "register_error_handlers",
    "classify_store_error",
    "is_unique_violation",
    "store_errors",
]
