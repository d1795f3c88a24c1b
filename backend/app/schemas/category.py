"""
VeggieFresh Admin API — Category Schemas
==========================================
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import field_validator

from app.schemas.common import CamelModel, require_name, require_url


def _icon_url(v: Optional[str]) -> Optional[str]:
    # empty string clears the icon
    if v is None or v == "":
        return v
    return require_url(v)


class CategoryCreate(CamelModel):
    name: str
    icon_url: Optional[str] = None
    sort: int = 0
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_name(v)

    @field_validator("icon_url")
    @classmethod
    def validate_icon_url(cls, v: Optional[str]) -> Optional[str]:
        return _icon_url(v)


class CategoryUpdate(CamelModel):
    """Partial update; only fields present in the body are applied."""

    name: Optional[str] = None
    icon_url: Optional[str] = None
    sort: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else require_name(v)

    @field_validator("icon_url")
    @classmethod
    def validate_icon_url(cls, v: Optional[str]) -> Optional[str]:
        return _icon_url(v)


class CategoryOut(CamelModel):
    id: uuid.UUID
    name: str
    icon_url: Optional[str] = None
    sort: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CategoryRef(CamelModel):
    """Populated category inside a product."""

    id: uuid.UUID
    name: str
