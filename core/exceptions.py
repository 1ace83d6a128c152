"""Exceptions raised by the service layer and mapped to HTTP errors by the middleware.

Business-rule violations use the builtins the error middleware already maps:
``ValueError`` (400) and ``PermissionError`` (403).
"""


class NotFoundError(LookupError):
    """A referenced row does not exist (404)."""


class ConflictError(Exception):
    """The write would duplicate an existing row (409)."""
