"""
VeggieFresh Admin API — Order Route Handlers
==============================================

Endpoints (admin only):
    GET   /api/admin/orders?status=&userId=&page=1&limit=20
    GET   /api/admin/orders/stats
    GET   /api/admin/orders/{id}
    PATCH /api/admin/orders/{id}/status

/stats is declared before /{order_id} so it is never parsed as an id.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_admin
from app.models.order import OrderStatus
from app.schemas.common import DataResponse, ErrorResponse, PaginatedResponse
from app.schemas.order import OrderOut, OrderStats, OrderStatusUpdate
from app.services.order_service import order_service

router = APIRouter(
    prefix="/api/admin/orders",
    tags=["Orders"],
    dependencies=[Depends(get_current_admin)],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Not an admin", "model": ErrorResponse},
    },
)


@router.get("", response_model=PaginatedResponse[OrderOut], summary="List orders")
async def list_orders(
    response: Response,
    status: Optional[OrderStatus] = Query(default=None),
    user_id: Optional[uuid.UUID] = Query(default=None, alias="userId"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[OrderOut]:
    result = await order_service.list_orders(
        db, status=status, user_id=user_id, page=page, limit=limit
    )
    response.headers["X-Total-Count"] = str(result.meta.total)
    return result


@router.get("/stats", response_model=DataResponse[OrderStats], summary="Order statistics")
async def get_order_stats(
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[OrderStats]:
    stats = await order_service.get_stats(db)
    return DataResponse[OrderStats](data=stats)


@router.get(
    "/{order_id}",
    response_model=DataResponse[OrderOut],
    responses={404: {"description": "Order not found", "model": ErrorResponse}},
    summary="Get an order",
)
async def get_order(
    order_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[OrderOut]:
    order = await order_service.get_order(db, order_id)
    return DataResponse[OrderOut](data=order)


@router.patch(
    "/{order_id}/status",
    response_model=DataResponse[OrderOut],
    responses={
        400: {"description": "Invalid status", "model": ErrorResponse},
        404: {"description": "Order not found", "model": ErrorResponse},
    },
    summary="Change an order's status",
)
async def update_order_status(
    order_id: uuid.UUID,
    body: OrderStatusUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[OrderOut]:
    order = await order_service.update_status(db, order_id, body.status)
    return DataResponse[OrderOut](data=order, message="Order status updated successfully")
