"""
VeggieFresh Admin API — Product Schemas
=========================================

What:  Create/update bodies, the embedded unit price tier and the product
       response with its populated category.

Unit price tiers are persisted in their camelCase wire form, e.g.
    {"unit": "kg", "step": 0.5, "baseQty": 1, "price": 120, "stock": 40}
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, field_validator

from app.schemas.category import CategoryRef
from app.schemas.common import CamelModel, require_name, require_url

Unit = Literal["kg", "g", "pcs", "bundle"]


class UnitPrice(CamelModel):
    unit: Unit
    step: float = Field(gt=0)
    base_qty: float = Field(gt=0)
    price: float = Field(gt=0)
    compare_at: Optional[float] = Field(default=None, gt=0)
    stock: float = Field(ge=0)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def _category_id(v: Any) -> Any:
    if v is None or isinstance(v, uuid.UUID):
        return v
    try:
        return uuid.UUID(str(v))
    except ValueError:
        raise ValueError("Invalid category ID")


def _images(v: Optional[List[str]]) -> Optional[List[str]]:
    if v is None:
        return v
    if not v:
        raise ValueError("At least one image is required")
    return [require_url(url, "Invalid image URL") for url in v]


def _unit_prices(v: Optional[List[UnitPrice]]) -> Optional[List[UnitPrice]]:
    if v is not None and not v:
        raise ValueError("At least one unit price is required")
    return v


class ProductCreate(CamelModel):
    name: str
    category_id: uuid.UUID
    images: List[str]
    description: Optional[str] = None
    unit_prices: List[UnitPrice]
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_name(v)

    @field_validator("category_id", mode="before")
    @classmethod
    def validate_category_id(cls, v: Any) -> Any:
        return _category_id(v)

    @field_validator("images")
    @classmethod
    def validate_images(cls, v: List[str]) -> List[str]:
        return _images(v)

    @field_validator("unit_prices")
    @classmethod
    def validate_unit_prices(cls, v: List[UnitPrice]) -> List[UnitPrice]:
        return _unit_prices(v)


class ProductUpdate(CamelModel):
    """Partial update; lists, when present, replace the stored list and must be non-empty."""

    name: Optional[str] = None
    category_id: Optional[uuid.UUID] = None
    images: Optional[List[str]] = None
    description: Optional[str] = None
    unit_prices: Optional[List[UnitPrice]] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else require_name(v)

    @field_validator("category_id", mode="before")
    @classmethod
    def validate_category_id(cls, v: Any) -> Any:
        return _category_id(v)

    @field_validator("images")
    @classmethod
    def validate_images(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _images(v)

    @field_validator("unit_prices")
    @classmethod
    def validate_unit_prices(cls, v: Optional[List[UnitPrice]]) -> Optional[List[UnitPrice]]:
        return _unit_prices(v)


class ProductOut(CamelModel):
    id: uuid.UUID
    name: str
    category_id: uuid.UUID
    category: Optional[CategoryRef] = None
    images: List[str]
    description: Optional[str] = None
    unit_prices: List[UnitPrice]
    rating: Optional[float] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
