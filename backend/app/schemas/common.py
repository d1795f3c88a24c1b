"""
VeggieFresh Admin API — Shared Schemas & Response Envelopes
=============================================================

What:  The camelCase base model, the success/error envelopes and small
       validation helpers reused by every resource schema.
How:   Responses are wrapped as {"success": true, "data": ...} (plus "meta"
       for paginated lists); errors as {"success": false, "error": ...}.
"""

import math
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

T = TypeVar("T")

_url_adapter = TypeAdapter(AnyUrl)


class CamelModel(BaseModel):
    """
    Base for every API model.

    Serialized with camelCase keys (`isActive`, `unitPrices`); input accepts
    both camelCase and snake_case. `from_attributes` lets ORM rows be passed
    straight to `model_validate`.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Validation helpers
# ══════════════════════════════════════════════════════════════════════════

def require_name(value: str) -> str:
    """Trims a name and rejects blank values."""
    value = value.strip()
    if not value:
        raise ValueError("Name is required")
    return value


def require_url(value: str, message: str = "Invalid URL") -> str:
    """Accepts absolute URLs with a scheme; returns the original string."""
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        raise ValueError(message)
    return value


# ══════════════════════════════════════════════════════════════════════════
# Envelopes
# ══════════════════════════════════════════════════════════════════════════

class PageMeta(BaseModel):
    """Pagination block of list responses; `pages` is ceil(total / limit)."""

    total: int = Field(description="Records matching the filters")
    page: int = Field(description="1-based page number")
    limit: int = Field(description="Page size")
    pages: int = Field(description="Number of pages")

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PageMeta":
        return cls(total=total, page=page, limit=limit, pages=math.ceil(total / limit))


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T
    message: Optional[str] = None


class PaginatedResponse(BaseModel, Generic[T]):
    success: bool = True
    data: List[T]
    meta: PageMeta


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(CamelModel):
    """
    Error format shared by every endpoint.

    Example:
        {
            "success": false,
            "error": "Category with this name already exists",
            "code": "validation_error",
            "details": {"field": "name"},
            "requestId": "1f2e3d4c"
        }
    """

    success: bool = False
    error: str = Field(description="Human-readable error description")
    code: str = Field(description="Machine-readable error code")
    details: Optional[Dict[str, Any]] = Field(default=None)
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(CamelModel):
    status: str = Field(description="healthy or unhealthy")
    version: str
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float
    checked_at: datetime
