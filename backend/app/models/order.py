"""
VeggieFresh Admin API — Order Model
=====================================

What:  ORM model for the `orders` table.
How:   Line items and the delivery address are snapshots stored as JSON, so
       later product edits never rewrite order history. The owning user is
       eager-loaded (selectin) for `user {id, name, email, phone}`.

Status lifecycle:
    placed → confirmed → preparing → out_for_delivery → delivered
    (any non-final state) → cancelled
"""

import enum
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import Float, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.base import JSONDocument, RecordMixin
from app.models.user import User


class OrderStatus(str, enum.Enum):
    PLACED = "placed"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Statuses counted as "pending" in order stats
PENDING_STATUSES = (
    OrderStatus.PLACED.value,
    OrderStatus.CONFIRMED.value,
    OrderStatus.PREPARING.value,
)


class Order(RecordMixin, Base):
    """A customer order as seen by the admin panel."""

    __tablename__ = "orders"

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    user: Mapped[User] = relationship(lazy="selectin")

    # [{"productId", "name", "unit", "qty", "price", "lineTotal"}]
    items: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSONDocument, nullable=False, default=list
    )

    subtotal: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    delivery_fee: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    discount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=OrderStatus.PLACED.value,
        server_default=text("'placed'"),
    )

    payment_method: Mapped[str] = mapped_column(
        String(32), nullable=False, default="cod", server_default=text("'cod'")
    )
    payment_status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="pending", server_default=text("'pending'")
    )

    address: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSONDocument, nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("idx_orders_created_at", "created_at"),
        Index("idx_orders_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, status='{self.status}', total={self.total})>"
