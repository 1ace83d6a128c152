"""Request middleware: error envelope and structured request logging."""

from core.middleware.error_handling import (
    ErrorHandlingMiddleware,
    sanitize_error_message,
    setup_error_handlers,
)
from core.middleware.logging import (
    StructuredLoggingMiddleware,
    setup_logging,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "StructuredLoggingMiddleware",
    "sanitize_error_message",
    "setup_error_handlers",
    "setup_logging",
]
