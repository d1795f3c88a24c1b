"""
VeggieFresh Admin API — Category Service
==========================================

What:  CRUD for categories.
How:   Query-then-write checks for the unique name (backed by the unique
       constraint: a violation at flush is reported as the same duplicate
       error). Deleting a category that still has products is refused.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import asc, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.category import Category
from app.models.product import Product
from app.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "Category with this name already exists"


class CategoryService:
    """Business logic for categories; stateless."""

    async def list_categories(self, db: AsyncSession) -> List[CategoryOut]:
        """All categories, ordered by `sort` then `name`."""
        try:
            result = await db.execute(
                select(Category).order_by(asc(Category.sort), asc(Category.name))
            )
            return [CategoryOut.model_validate(c) for c in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing categories: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to fetch categories")

    async def get_category(self, db: AsyncSession, category_id: uuid.UUID) -> CategoryOut:
        category = await self._get_or_404(db, category_id)
        return CategoryOut.model_validate(category)

    async def create_category(self, db: AsyncSession, payload: CategoryCreate) -> CategoryOut:
        try:
            if await self._find_by_name(db, payload.name) is not None:
                raise ValidationError(message=DUPLICATE_NAME, field="name")

            category = Category(
                name=payload.name,
                icon_url=payload.icon_url,
                sort=payload.sort,
                is_active=payload.is_active,
            )
            db.add(category)
            await db.flush()
        except IntegrityError:
            raise ValidationError(message=DUPLICATE_NAME, field="name")
        except SQLAlchemyError as e:
            logger.error("Database error creating category: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to create category")

        logger.info("Category created: %s (%s)", category.id, category.name)
        return CategoryOut.model_validate(category)

    async def update_category(
        self,
        db: AsyncSession,
        category_id: uuid.UUID,
        payload: CategoryUpdate,
    ) -> CategoryOut:
        category = await self._get_or_404(db, category_id)

        # explicit nulls only make sense for nullable columns
        changes = {
            k: v for k, v in payload.model_dump(exclude_unset=True).items()
            if v is not None or k == "icon_url"
        }

        try:
            new_name = changes.get("name")
            if new_name and new_name != category.name:
                if await self._find_by_name(db, new_name) is not None:
                    raise ValidationError(message=DUPLICATE_NAME, field="name")

            for field, value in changes.items():
                setattr(category, field, value)
            await db.flush()
        except IntegrityError:
            raise ValidationError(message=DUPLICATE_NAME, field="name")
        except SQLAlchemyError as e:
            logger.error("Database error updating category %s: %s", category_id, str(e))
            raise DatabaseError(message="Failed to update category")

        logger.info("Category updated: %s fields=%s", category.id, sorted(changes))
        return CategoryOut.model_validate(category)

    async def delete_category(self, db: AsyncSession, category_id: uuid.UUID) -> None:
        category = await self._get_or_404(db, category_id)
        try:
            count_result = await db.execute(
                select(func.count(Product.id)).where(Product.category_id == category.id)
            )
            product_count = count_result.scalar() or 0
            if product_count:
                raise ValidationError(
                    message="Category has products assigned and cannot be deleted",
                    context={"product_count": product_count},
                )

            await db.delete(category)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting category %s: %s", category_id, str(e))
            raise DatabaseError(message="Failed to delete category")

        logger.info("Category deleted: %s", category_id)

    async def _get_or_404(self, db: AsyncSession, category_id: uuid.UUID) -> Category:
        try:
            result = await db.execute(select(Category).where(Category.id == category_id))
            category = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching category %s: %s", category_id, str(e))
            raise DatabaseError(message="Failed to fetch category")

        if category is None:
            raise NotFoundError(resource="category", resource_id=str(category_id))
        return category

    async def _find_by_name(self, db: AsyncSession, name: str) -> Optional[uuid.UUID]:
        result = await db.execute(select(Category.id).where(Category.name == name))
        return result.scalar_one_or_none()


category_service = CategoryService()
