"""Common Pydantic schemas and validation helpers shared across the API."""

from datetime import datetime, timezone
from typing import Generic, TypeVar, Optional
from pydantic import BaseModel, Field


T = TypeVar("T")


def strip_if_str(value):
    """Trim surrounding whitespace from strings, pass anything else through."""
    if isinstance(value, str):
        return value.strip()
    return value


def check_length(
    value: str,
    label: str,
    min_length: int = 0,
    max_length: Optional[int] = None,
    min_message: Optional[str] = None,
) -> str:
    """
    Enforce length bounds with human-readable messages.

    Args:
        value: String to check
        label: Field label used in the message ("Title", "Name", ...)
        min_length: Minimum number of characters
        max_length: Maximum number of characters (None for unbounded)
        min_message: Override for the too-short message

    Returns:
        The value unchanged
    """
    if len(value) < min_length:
        raise ValueError(min_message or f"{label} must be at least {min_length} characters")
    if max_length is not None and len(value) > max_length:
        raise ValueError(f"{label} cannot exceed {max_length} characters")
    return value


def check_range(
    value: float,
    minimum: float,
    maximum: float,
    min_message: str,
    max_message: str,
):
    """Enforce an inclusive numeric range with custom messages."""
    if value < minimum:
        raise ValueError(min_message)
    if value > maximum:
        raise ValueError(max_message)
    return value


def parse_iso_datetime(value, message: str):
    """Parse an ISO-8601 string into a datetime, raising ``message`` on failure."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            pass
    raise ValueError(message)


class PaginationParams(BaseModel):
    """Pagination query parameters."""

    page: int = Field(default=1, ge=1, description="Page number (1-indexed)")
    page_size: int = Field(default=20, ge=1, le=100, description="Items per page")

    @property
    def offset(self) -> int:
        """Calculate offset from page and page_size."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated response wrapper."""

    items: list[T] = Field(description="List of items for this page")
    total: int = Field(ge=0, description="Total number of items across all pages")
    page: int = Field(ge=1, description="Current page number")
    page_size: int = Field(ge=1, le=100, description="Items per page")
    total_pages: int = Field(ge=0, description="Total number of pages")

    @classmethod
    def create(
        cls,
        items: list[T],
        total: int,
        pagination: PaginationParams,
    ) -> "PaginatedResponse[T]":
        """Create a paginated response."""
        total_pages = (total + pagination.page_size - 1) // pagination.page_size
        return cls(
            items=items,
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
            total_pages=total_pages,
        )


class TimestampMixin(BaseModel):
    """Mixin for timestamp fields."""

    created_at: datetime = Field(description="Timestamp when the resource was created")
    updated_at: datetime = Field(description="Timestamp when the resource was last updated")


class ErrorBody(BaseModel):
    code: str = Field(description="Error code for programmatic handling")
    message: str = Field(description="Human-readable error message")
    path: str
    method: str
    details: Optional[list[dict] | dict] = None
    request_id: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error envelope returned by the error handlers."""

    error: ErrorBody


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so mixed inputs can be compared."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
