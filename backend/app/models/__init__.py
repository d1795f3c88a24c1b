"""
ORM models. Importing this package registers every table on Base.metadata
(used by Alembic and by relationship resolution).
"""

from app.models.category import Category
from app.models.order import Order, OrderStatus, PENDING_STATUSES
from app.models.product import Product
from app.models.user import User, UserRole

__all__ = [
    "Category",
    "Order",
    "OrderStatus",
    "PENDING_STATUSES",
    "Product",
    "User",
    "UserRole",
]
