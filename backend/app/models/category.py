"""
VeggieFresh Admin API — Category Model
========================================

What:  ORM model for the `categories` table.
Query patterns:
    - Admin list: ORDER BY sort ASC, name ASC (idx_categories_sort_name)
    - Duplicate check: WHERE name = :name (unique index)
"""

from typing import Optional

from sqlalchemy import Boolean, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.base import RecordMixin


class Category(RecordMixin, Base):
    """A product category shown in the storefront navigation."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)

    # URL or empty string
    icon_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    # Display position; ties broken by name
    sort: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    __table_args__ = (
        Index("idx_categories_sort_name", "sort", "name"),
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}', sort={self.sort})>"
