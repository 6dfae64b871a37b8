"""Response envelopes shared by every endpoint."""

from datetime import UTC, datetime
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


def utc_timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


class SuccessResponse(BaseModel, Generic[T]):
    """Successful response: {success: true, data, message, timestamp}."""

    success: Literal[True] = True
    data: T
    message: str | None = None
    timestamp: str = Field(default_factory=utc_timestamp)


class ErrorBody(BaseModel):
    code: str = Field(..., description="Stable machine-readable error code")
    message: str = Field(..., description="Human-readable message")
    details: Any | None = None


class ErrorResponse(BaseModel):
    """Failure response: {success: false, error: {code, message}, timestamp}."""

    success: Literal[False] = False
    error: ErrorBody
    timestamp: str = Field(default_factory=utc_timestamp)


class PaginationInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(..., alias="totalPages")


class PaginatedData(BaseModel, Generic[T]):
    items: list[T]
    pagination: PaginationInfo
