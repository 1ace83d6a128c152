"""
Error handling middleware with error message sanitization.
Maps exceptions to a single JSON error envelope without leaking secrets or PII.
"""

import logging
import traceback
from typing import Any, Callable, NamedTuple, Optional
from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError, IntegrityError, OperationalError
from core.exceptions import ConflictError, NotFoundError
import re

logger = logging.getLogger(__name__)

# Patterns for sensitive data that should never reach a client or a log line
SENSITIVE_PATTERNS = [
    re.compile(r'password["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'token["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'api[_-]?key["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'secret["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'authorization["\s:]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}'),  # bcrypt hash
    re.compile(r'\b[2-9]\d{3}\s?\d{4}\s?\d{4}\b'),  # Aadhaar
]


def sanitize_error_message(message: Any) -> str:
    """
    Remove sensitive information from error messages.

    Args:
        message: Original error message (non-strings are stringified)

    Returns:
        Sanitized error message
    """
    sanitized = str(message)
    for pattern in SENSITIVE_PATTERNS:
        sanitized = pattern.sub('[REDACTED]', sanitized)
    return sanitized


def get_safe_error_details(exc: Exception, include_details: bool = False) -> dict[str, Any]:
    """
    Extract safe error details without exposing sensitive information.

    Args:
        exc: The exception to extract details from
        include_details: Whether to include the traceback (only in debug)

    Returns:
        Dictionary with safe error details
    """
    details = {
        "type": type(exc).__name__,
        "message": sanitize_error_message(str(exc)),
    }

    if include_details:
        details["traceback"] = traceback.format_exc()

    return details


def format_validation_errors(errors: list[dict[str, Any]], include_input: bool = False) -> list[dict[str, Any]]:
    """
    Flatten pydantic errors into ``{"field", "message", "type"}`` items.

    The ``body``/``query``/``path`` prefix FastAPI adds to ``loc`` is kept so
    clients can tell where the bad value came from.
    """
    formatted = []
    for error in errors:
        error_dict = {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": sanitize_error_message(error["msg"]),
            "type": error["type"],
        }

        # Echo the input back only for simple, non-sensitive values
        if include_input and "input" in error:
            input_value = error["input"]
            if isinstance(input_value, (str, int, float, bool)):
                input_str = str(input_value)
                if not any(pattern.search(input_str) for pattern in SENSITIVE_PATTERNS):
                    error_dict["input"] = input_value

        formatted.append(error_dict)

    return formatted


def error_envelope(
    code: str,
    message: str,
    path: str,
    method: str,
    details: Any = None,
    request_id: Optional[str] = None,
) -> dict[str, Any]:
    error: dict[str, Any] = {
        "code": code,
        "message": message,
        "path": path,
        "method": method,
    }
    if details is not None:
        error["details"] = details
    if request_id:
        error["request_id"] = request_id
    return {"error": error}


class ErrorRule(NamedTuple):
    """How one exception family is reported to the client."""

    exc_type: type
    status_code: int
    code: str
    message: str
    log_level: int
    # Use str(exc) as the client message, falling back to ``message``
    echo: bool = False


# First match wins, so subclasses come before their bases
ERROR_RULES = (
    ErrorRule(IntegrityError, status.HTTP_409_CONFLICT, "INTEGRITY_ERROR",
              "Resource conflicts with existing data", logging.WARNING),
    ErrorRule(OperationalError, status.HTTP_503_SERVICE_UNAVAILABLE, "DATABASE_ERROR",
              "Database service temporarily unavailable", logging.ERROR),
    ErrorRule(SQLAlchemyError, status.HTTP_500_INTERNAL_SERVER_ERROR, "DATABASE_ERROR",
              "A database error occurred", logging.ERROR),
    ErrorRule(ConflictError, status.HTTP_409_CONFLICT, "CONFLICT",
              "Resource already exists", logging.INFO, echo=True),
    ErrorRule(NotFoundError, status.HTTP_404_NOT_FOUND, "NOT_FOUND",
              "Resource not found", logging.INFO, echo=True),
    ErrorRule(PermissionError, status.HTTP_403_FORBIDDEN, "PERMISSION_DENIED",
              "You don't have permission to perform this action", logging.WARNING, echo=True),
    ErrorRule(ValueError, status.HTTP_400_BAD_REQUEST, "INVALID_INPUT",
              "Invalid input provided", logging.WARNING, echo=True),
    ErrorRule(TimeoutError, status.HTTP_504_GATEWAY_TIMEOUT, "TIMEOUT",
              "The request timed out", logging.ERROR),
)

UNHANDLED = ErrorRule(Exception, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR",
                      "An unexpected error occurred", logging.ERROR)


def match_rule(exc: Exception) -> ErrorRule:
    for rule in ERROR_RULES:
        if isinstance(exc, rule.exc_type):
            return rule
    return UNHANDLED


def request_id_from_scope(scope: dict) -> Optional[str]:
    for name, value in scope.get("headers", []):
        if name == b"x-request-id":
            return value.decode("latin-1")
    return None


class ErrorHandlingMiddleware:
    """
    Outer ASGI guard that turns exceptions escaping the routes into the
    error envelope.

    Service code raises plain exceptions (``ValueError``, ``PermissionError``,
    ``NotFoundError``, ``ConflictError``) and database errors bubble up from
    SQLAlchemy; ``ERROR_RULES`` decides the status, code and log level.
    Messages of unexpected errors never reach the client.
    """

    def __init__(self, app: Callable, debug: bool = False):
        self.app = app
        self.debug = debug

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        try:
            await self.app(scope, receive, send)
        except Exception as exc:
            response = self.build_response(exc, scope)
            await response(scope, receive, send)

    def build_response(self, exc: Exception, scope: dict) -> Response:
        path = scope.get("path", "unknown")
        method = scope.get("method", "unknown")
        details = None

        if isinstance(exc, StarletteHTTPException):
            status_code, code = exc.status_code, "HTTP_EXCEPTION"
            message = sanitize_error_message(exc.detail)
            logger.warning(f"{method} {path} -> {status_code}: {message}")

        elif isinstance(exc, RequestValidationError):
            status_code, code = status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR"
            message = "Request validation failed"
            details = format_validation_errors(exc.errors(), include_input=True)
            logger.warning(f"{method} {path} -> validation failed: {details}")

        else:
            rule = match_rule(exc)
            status_code, code = rule.status_code, rule.code
            message = (sanitize_error_message(str(exc)) if rule.echo else "") or rule.message

            if not rule.echo and self.debug:
                details = get_safe_error_details(exc, include_details=True)

            logger.log(
                rule.log_level,
                f"{method} {path} -> {status_code} {code}: "
                f"{type(exc).__name__}: {sanitize_error_message(str(exc))}",
                exc_info=rule.log_level >= logging.ERROR,
            )

        return JSONResponse(
            status_code=status_code,
            content=error_envelope(
                code, message, path, method, details, request_id_from_scope(scope)
            ),
        )


def setup_error_handlers(app):
    """
    Register exception handlers that produce the same envelope as the middleware.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(
                "HTTP_EXCEPTION",
                sanitize_error_message(exc.detail),
                str(request.url.path),
                request.method,
                request_id=request.headers.get("x-request-id"),
            ),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=error_envelope(
                "VALIDATION_ERROR",
                "Request validation failed",
                str(request.url.path),
                request.method,
                details=format_validation_errors(exc.errors()),
                request_id=request.headers.get("x-request-id"),
            ),
        )
