"""
VeggieFresh Admin API — Product Service
=========================================

What:  Filtered/paginated listing and CRUD for products.
How:   Every product response carries its populated category {id, name}
       (eager-loaded through the relationship). The referenced category must
       exist on create/update and product names are unique.

Listing filters:
    category  → exact category id
    q         → case-insensitive substring of name OR description; LIKE
                wildcards in the input are matched literally
    is_active → true/false
    Ordered newest first; offset pagination with total/page/limit/pages.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import desc, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.category import Category
from app.models.product import Product
from app.schemas.common import PageMeta, PaginatedResponse
from app.schemas.product import ProductCreate, ProductOut, ProductUpdate

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "Product with this name already exists"

# Columns that may be explicitly cleared with null in an update
NULLABLE_FIELDS = {"description", "rating"}


def escape_like(value: str) -> str:
    """Escapes LIKE wildcards so user input matches literally (escape char `\\`)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def integrity_error_to_validation(e: IntegrityError) -> ValidationError:
    """Maps a constraint violation on flush to the matching field error."""
    if "foreign key" in str(e.orig).lower():
        return ValidationError(message="Category not found", field="categoryId")
    return ValidationError(message=DUPLICATE_NAME, field="name")


class ProductService:
    """Business logic for products; stateless."""

    async def list_products(
        self,
        db: AsyncSession,
        category_id: Optional[uuid.UUID] = None,
        q: Optional[str] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: int = 50,
    ) -> PaginatedResponse[ProductOut]:
        conditions = []
        if category_id is not None:
            conditions.append(Product.category_id == category_id)
        if q:
            pattern = f"%{escape_like(q)}%"
            conditions.append(
                or_(
                    Product.name.ilike(pattern, escape="\\"),
                    Product.description.ilike(pattern, escape="\\"),
                )
            )
        if is_active is not None:
            conditions.append(Product.is_active == is_active)

        query = select(Product)
        count_query = select(func.count(Product.id))
        if conditions:
            query = query.where(*conditions)
            count_query = count_query.where(*conditions)

        query = (
            query.order_by(desc(Product.created_at))
            .limit(limit)
            .offset((page - 1) * limit)
        )

        try:
            result = await db.execute(query)
            products = list(result.scalars().all())

            count_result = await db.execute(count_query)
            total = count_result.scalar() or 0
        except SQLAlchemyError as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to fetch products")

        return PaginatedResponse[ProductOut](
            data=[ProductOut.model_validate(p) for p in products],
            meta=PageMeta.build(total=total, page=page, limit=limit),
        )

    async def get_product(self, db: AsyncSession, product_id: uuid.UUID) -> ProductOut:
        product = await self._get_or_404(db, product_id)
        return ProductOut.model_validate(product)

    async def create_product(self, db: AsyncSession, payload: ProductCreate) -> ProductOut:
        try:
            category = await self._find_category(db, payload.category_id)
            if category is None:
                raise ValidationError(message="Category not found", field="categoryId")

            if await self._find_by_name(db, payload.name) is not None:
                raise ValidationError(message=DUPLICATE_NAME, field="name")

            product = Product(
                name=payload.name,
                category_id=category.id,
                category=category,
                images=list(payload.images),
                description=payload.description,
                unit_prices=[tier.to_document() for tier in payload.unit_prices],
                rating=payload.rating,
                is_active=payload.is_active,
            )
            db.add(product)
            await db.flush()
        except IntegrityError as e:
            raise integrity_error_to_validation(e)
        except SQLAlchemyError as e:
            logger.error("Database error creating product: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to create product")

        logger.info("Product created: %s (%s)", product.id, product.name)
        return ProductOut.model_validate(product)

    async def update_product(
        self,
        db: AsyncSession,
        product_id: uuid.UUID,
        payload: ProductUpdate,
    ) -> ProductOut:
        product = await self._get_or_404(db, product_id)

        changes = {
            k: v for k, v in payload.model_dump(exclude_unset=True).items()
            if v is not None or k in NULLABLE_FIELDS
        }
        if "unit_prices" in changes:
            changes["unit_prices"] = [tier.to_document() for tier in payload.unit_prices]

        try:
            if "category_id" in changes:
                category = await self._find_category(db, changes["category_id"])
                if category is None:
                    raise ValidationError(message="Category not found", field="categoryId")
                # keep the loaded relationship in step with the new foreign key
                product.category = category

            new_name = changes.get("name")
            if new_name and new_name != product.name:
                if await self._find_by_name(db, new_name) is not None:
                    raise ValidationError(message=DUPLICATE_NAME, field="name")

            for field, value in changes.items():
                setattr(product, field, value)
            await db.flush()
        except IntegrityError as e:
            raise integrity_error_to_validation(e)
        except SQLAlchemyError as e:
            logger.error("Database error updating product %s: %s", product_id, str(e))
            raise DatabaseError(message="Failed to update product")

        logger.info("Product updated: %s fields=%s", product.id, sorted(changes))
        return ProductOut.model_validate(product)

    async def delete_product(self, db: AsyncSession, product_id: uuid.UUID) -> None:
        product = await self._get_or_404(db, product_id)
        try:
            await db.delete(product)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting product %s: %s", product_id, str(e))
            raise DatabaseError(message="Failed to delete product")

        logger.info("Product deleted: %s", product_id)

    async def _get_or_404(self, db: AsyncSession, product_id: uuid.UUID) -> Product:
        try:
            result = await db.execute(select(Product).where(Product.id == product_id))
            product = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching product %s: %s", product_id, str(e))
            raise DatabaseError(message="Failed to fetch product")

        if product is None:
            raise NotFoundError(resource="product", resource_id=str(product_id))
        return product

    async def _find_category(self, db: AsyncSession, category_id: uuid.UUID) -> Optional[Category]:
        result = await db.execute(select(Category).where(Category.id == category_id))
        return result.scalar_one_or_none()

    async def _find_by_name(self, db: AsyncSession, name: str) -> Optional[uuid.UUID]:
        result = await db.execute(select(Product.id).where(Product.name == name))
        return result.scalar_one_or_none()


product_service = ProductService()
