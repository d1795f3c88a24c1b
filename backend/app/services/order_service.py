"""
VeggieFresh Admin API — Order Service
=======================================

What:  Order listing, detail, status changes and dashboard statistics.
How:   Orders always come back with their owner populated
       ({id, name, email, phone}). Statistics are computed in a single
       aggregate query with FILTER clauses.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError
from app.models.order import Order, OrderStatus, PENDING_STATUSES
from app.schemas.common import PageMeta, PaginatedResponse
from app.schemas.order import OrderOut, OrderStats

logger = logging.getLogger(__name__)


class OrderService:
    """Business logic for orders; stateless."""

    async def list_orders(
        self,
        db: AsyncSession,
        status: Optional[OrderStatus] = None,
        user_id: Optional[uuid.UUID] = None,
        page: int = 1,
        limit: int = 20,
    ) -> PaginatedResponse[OrderOut]:
        conditions = []
        if status is not None:
            conditions.append(Order.status == status.value)
        if user_id is not None:
            conditions.append(Order.user_id == user_id)

        query = select(Order)
        count_query = select(func.count(Order.id))
        if conditions:
            query = query.where(*conditions)
            count_query = count_query.where(*conditions)

        query = (
            query.order_by(desc(Order.created_at))
            .limit(limit)
            .offset((page - 1) * limit)
        )

        try:
            result = await db.execute(query)
            orders = list(result.scalars().all())

            count_result = await db.execute(count_query)
            total = count_result.scalar() or 0
        except SQLAlchemyError as e:
            logger.error("Database error listing orders: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to fetch orders")

        return PaginatedResponse[OrderOut](
            data=[OrderOut.model_validate(o) for o in orders],
            meta=PageMeta.build(total=total, page=page, limit=limit),
        )

    async def get_order(self, db: AsyncSession, order_id: uuid.UUID) -> OrderOut:
        order = await self._get_or_404(db, order_id)
        return OrderOut.model_validate(order)

    async def update_status(
        self,
        db: AsyncSession,
        order_id: uuid.UUID,
        status: OrderStatus,
    ) -> OrderOut:
        order = await self._get_or_404(db, order_id)
        previous = order.status
        try:
            order.status = status.value
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating order %s: %s", order_id, str(e))
            raise DatabaseError(message="Failed to update order status")

        logger.info("Order %s status: %s -> %s", order.id, previous, status.value)
        return OrderOut.model_validate(order)

    async def get_stats(self, db: AsyncSession) -> OrderStats:
        """
        Dashboard counters.

        pending   = placed + confirmed + preparing
        revenue   = sum(total) over delivered orders (0 when there are none)
        """
        delivered = Order.status == OrderStatus.DELIVERED.value
        query = select(
            func.count(Order.id),
            func.count(Order.id).filter(Order.status.in_(PENDING_STATUSES)),
            func.count(Order.id).filter(delivered),
            func.count(Order.id).filter(Order.status == OrderStatus.CANCELLED.value),
            func.coalesce(func.sum(Order.total).filter(delivered), 0),
        )
        try:
            result = await db.execute(query)
            total, pending, delivered_count, cancelled, revenue = result.one()
        except SQLAlchemyError as e:
            logger.error("Database error computing order stats: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to fetch order stats")

        return OrderStats(
            total_orders=total or 0,
            pending_orders=pending or 0,
            delivered_orders=delivered_count or 0,
            cancelled_orders=cancelled or 0,
            revenue=float(revenue or 0),
        )

    async def _get_or_404(self, db: AsyncSession, order_id: uuid.UUID) -> Order:
        try:
            result = await db.execute(select(Order).where(Order.id == order_id))
            order = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching order %s: %s", order_id, str(e))
            raise DatabaseError(message="Failed to fetch order")

        if order is None:
            raise NotFoundError(resource="order", resource_id=str(order_id))
        return order


order_service = OrderService()
