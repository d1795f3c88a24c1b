"""
VeggieFresh Admin API — Order Schemas
=======================================

Orders are read-only for admins except for their status.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from app.models.order import OrderStatus
from app.schemas.common import CamelModel


class OrderItem(CamelModel):
    """Line item snapshot taken when the order was placed."""

    product_id: Optional[str] = None
    name: str
    unit: Optional[str] = None
    qty: float
    price: float
    line_total: Optional[float] = None


class UserRef(CamelModel):
    """Populated order owner."""

    id: uuid.UUID
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None


class OrderOut(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    user: Optional[UserRef] = None
    items: List[OrderItem]
    subtotal: float
    delivery_fee: float
    discount: float
    total: float
    status: OrderStatus
    payment_method: str
    payment_status: str
    address: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class OrderStats(CamelModel):
    total_orders: int
    pending_orders: int = Field(description="placed + confirmed + preparing")
    delivered_orders: int
    cancelled_orders: int
    revenue: float = Field(description="Sum of totals over delivered orders")
