"""
VeggieFresh Admin API — Product Model
=======================================

What:  ORM model for the `products` table.
How:   Images and price tiers are embedded JSON documents. The owning
       category is eager-loaded (selectin) so responses can include
       `category {id, name}` without lazy loading under asyncio.

unit_prices element shape (camelCase, as sent by the admin panel):
    {"unit": "kg", "step": 0.5, "baseQty": 1, "price": 120.0,
     "compareAt": 150.0, "stock": 40}
"""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import Boolean, Float, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.base import JSONDocument, RecordMixin
from app.models.category import Category


class Product(RecordMixin, Base):
    """A sellable item with one or more unit price tiers."""

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)

    # RESTRICT: a category with products cannot be deleted
    category_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    category: Mapped[Category] = relationship(lazy="selectin")

    images: Mapped[List[str]] = mapped_column(JSONDocument, nullable=False, default=list)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    unit_prices: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSONDocument, nullable=False, default=list
    )

    # 0..5
    rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    __table_args__ = (
        Index("idx_products_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', category_id={self.category_id})>"
