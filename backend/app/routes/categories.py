"""
VeggieFresh Admin API — Category Route Handlers
=================================================

Endpoints (admin only):
    GET    /api/admin/categories
    GET    /api/admin/categories/{id}
    POST   /api/admin/categories
    PUT    /api/admin/categories/{id}
    DELETE /api/admin/categories/{id}
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_admin
from app.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from app.schemas.common import DataResponse, ErrorResponse, MessageResponse
from app.services.category_service import category_service

router = APIRouter(
    prefix="/api/admin/categories",
    tags=["Categories"],
    dependencies=[Depends(get_current_admin)],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Not an admin", "model": ErrorResponse},
    },
)


@router.get("", response_model=DataResponse[List[CategoryOut]], summary="List categories")
async def list_categories(
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[List[CategoryOut]]:
    categories = await category_service.list_categories(db)
    return DataResponse[List[CategoryOut]](data=categories)


@router.get(
    "/{category_id}",
    response_model=DataResponse[CategoryOut],
    responses={404: {"description": "Category not found", "model": ErrorResponse}},
    summary="Get a category",
)
async def get_category(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[CategoryOut]:
    category = await category_service.get_category(db, category_id)
    return DataResponse[CategoryOut](data=category)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=DataResponse[CategoryOut],
    responses={400: {"description": "Invalid body or duplicate name", "model": ErrorResponse}},
    summary="Create a category",
)
async def create_category(
    body: CategoryCreate,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[CategoryOut]:
    category = await category_service.create_category(db, body)
    return DataResponse[CategoryOut](data=category)


@router.put(
    "/{category_id}",
    response_model=DataResponse[CategoryOut],
    responses={
        400: {"description": "Invalid body or duplicate name", "model": ErrorResponse},
        404: {"description": "Category not found", "model": ErrorResponse},
    },
    summary="Update a category",
)
async def update_category(
    category_id: uuid.UUID,
    body: CategoryUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[CategoryOut]:
    category = await category_service.update_category(db, category_id, body)
    return DataResponse[CategoryOut](data=category)


@router.delete(
    "/{category_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Category still has products", "model": ErrorResponse},
        404: {"description": "Category not found", "model": ErrorResponse},
    },
    summary="Delete a category",
)
async def delete_category(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await category_service.delete_category(db, category_id)
    return MessageResponse(message="Category deleted successfully")
