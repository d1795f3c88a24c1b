"""
VeggieFresh Admin API — Product Route Handlers
================================================

Endpoints (admin only):
    GET    /api/admin/products?category=&q=&isActive=&page=1&limit=50
    GET    /api/admin/products/{id}
    POST   /api/admin/products
    PUT    /api/admin/products/{id}
    DELETE /api/admin/products/{id}

List responses also carry the total in the X-Total-Count header.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_admin
from app.schemas.common import DataResponse, ErrorResponse, MessageResponse, PaginatedResponse
from app.schemas.product import ProductCreate, ProductOut, ProductUpdate
from app.services.product_service import product_service

router = APIRouter(
    prefix="/api/admin/products",
    tags=["Products"],
    dependencies=[Depends(get_current_admin)],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Not an admin", "model": ErrorResponse},
    },
)


@router.get(
    "",
    response_model=PaginatedResponse[ProductOut],
    summary="List products with filters and pagination",
)
async def list_products(
    response: Response,
    category: Optional[uuid.UUID] = Query(default=None, description="Category id filter"),
    q: Optional[str] = Query(default=None, max_length=200, description="Search in name and description"),
    is_active: Optional[bool] = Query(default=None, alias="isActive"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=100),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[ProductOut]:
    result = await product_service.list_products(
        db,
        category_id=category,
        q=q,
        is_active=is_active,
        page=page,
        limit=limit,
    )
    response.headers["X-Total-Count"] = str(result.meta.total)
    return result


@router.get(
    "/{product_id}",
    response_model=DataResponse[ProductOut],
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Get a product",
)
async def get_product(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[ProductOut]:
    product = await product_service.get_product(db, product_id)
    return DataResponse[ProductOut](data=product)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=DataResponse[ProductOut],
    responses={400: {"description": "Invalid body, unknown category or duplicate name", "model": ErrorResponse}},
    summary="Create a product",
)
async def create_product(
    body: ProductCreate,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[ProductOut]:
    product = await product_service.create_product(db, body)
    return DataResponse[ProductOut](data=product)


@router.put(
    "/{product_id}",
    response_model=DataResponse[ProductOut],
    responses={
        400: {"description": "Invalid body, unknown category or duplicate name", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
    },
    summary="Update a product",
)
async def update_product(
    product_id: uuid.UUID,
    body: ProductUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[ProductOut]:
    product = await product_service.update_product(db, product_id, body)
    return DataResponse[ProductOut](data=product)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Delete a product",
)
async def delete_product(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await product_service.delete_product(db, product_id)
    return MessageResponse(message="Product deleted successfully")
