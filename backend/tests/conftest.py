"""
VeggieFresh Admin API — Test Configuration (conftest.py)
==========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── make_user / make_category / make_product / make_order: ORM row factories
    ├── admin_user: An admin User row
    ├── test_client: HTTPX AsyncClient, DB mocked, admin guard bypassed
    └── anon_client: HTTPX AsyncClient, DB mocked, real admin guard
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["JWT_SECRET"] = "test-secret-not-for-production-use"
os.environ["BCRYPT_ROUNDS"] = "4"  # fast hashes
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects import postgresql

from app.database import get_db_session
from app.dependencies import get_current_admin
from app.models import Category, Order, Product, User, UserRole


# ══════════════════════════════════════════════════════════════════════════
# Helpers
# ══════════════════════════════════════════════════════════════════════════

BASE_TIME = datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc)


def make_result(
    first: Any = None,
    rows: Optional[List[Any]] = None,
    scalar: Any = None,
    one: Any = None,
) -> MagicMock:
    """
    Builds a fake `Result` for `db.execute`.

    first  → .scalar_one_or_none()
    rows   → .scalars().all()
    scalar → .scalar()
    one    → .one()
    """
    result = MagicMock()
    result.scalar_one_or_none.return_value = first
    result.scalars.return_value.all.return_value = rows or []
    result.scalar.return_value = scalar
    result.one.return_value = one
    return result


def executed_sql(session, call_index: int = 0) -> Tuple[str, List[Any]]:
    """Compiles the statement of the Nth `db.execute` call for PostgreSQL."""
    statement = session.execute.call_args_list[call_index].args[0]
    compiled = statement.compile(dialect=postgresql.dialect())
    return str(compiled), list(compiled.params.values())


def assign_defaults_on_flush(session) -> None:
    """Makes session.flush() fill id/timestamps on added rows, like INSERT would."""

    async def flush():
        for call in session.add.call_args_list:
            row = call.args[0]
            if row.id is None:
                row.id = uuid.uuid4()
            if getattr(row, "created_at", None) is None:
                row.created_at = BASE_TIME
                row.updated_at = BASE_TIME

    session.flush = AsyncMock(side_effect=flush)


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_category(mock_db_session, make_category):
            mock_db_session.execute.return_value = make_result(first=make_category())
            result = await category_service.get_category(mock_db_session, some_id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_user():
    def factory(**overrides) -> User:
        fields = dict(
            id=uuid.uuid4(),
            name="Asha Rao",
            email="asha@example.com",
            phone="+919800000001",
            password_hash=None,
            avatar_url=None,
            role=UserRole.CUSTOMER.value,
            is_phone_verified=True,
            created_at=BASE_TIME,
            updated_at=BASE_TIME,
        )
        fields.update(overrides)
        return User(**fields)

    return factory


@pytest.fixture
def admin_user(make_user):
    return make_user(
        name="Admin User",
        email="admin@veggiefresh.com",
        phone=None,
        role=UserRole.ADMIN.value,
    )


@pytest.fixture
def make_category():
    def factory(**overrides) -> Category:
        fields = dict(
            id=uuid.uuid4(),
            name="Leafy Greens",
            icon_url="https://cdn.example.com/icons/greens.png",
            sort=1,
            is_active=True,
            created_at=BASE_TIME,
            updated_at=BASE_TIME,
        )
        fields.update(overrides)
        return Category(**fields)

    return factory


@pytest.fixture
def make_product(make_category):
    def factory(category: Optional[Category] = None, **overrides) -> Product:
        category = category or make_category()
        fields = dict(
            id=uuid.uuid4(),
            name="Spinach",
            category_id=category.id,
            category=category,
            images=["https://cdn.example.com/products/spinach.jpg"],
            description="Fresh farm spinach",
            unit_prices=[
                {"unit": "bundle", "step": 1, "baseQty": 1, "price": 30, "stock": 50},
            ],
            rating=4.5,
            is_active=True,
            created_at=BASE_TIME,
            updated_at=BASE_TIME,
        )
        fields.update(overrides)
        return Product(**fields)

    return factory


@pytest.fixture
def make_order(make_user):
    def factory(user: Optional[User] = None, **overrides) -> Order:
        user = user or make_user()
        fields = dict(
            id=uuid.uuid4(),
            user_id=user.id,
            user=user,
            items=[
                {
                    "productId": str(uuid.uuid4()),
                    "name": "Tomato",
                    "unit": "kg",
                    "qty": 2,
                    "price": 40,
                    "lineTotal": 80,
                },
            ],
            subtotal=80.0,
            delivery_fee=20.0,
            discount=0.0,
            total=100.0,
            status="placed",
            payment_method="cod",
            payment_status="pending",
            address={"line1": "12 MG Road", "city": "Bengaluru", "pincode": "560001"},
            notes=None,
            created_at=BASE_TIME,
            updated_at=BASE_TIME + timedelta(minutes=5),
        )
        fields.update(overrides)
        return Order(**fields)

    return factory


def _client_for(app):
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(mock_db_session, admin_user):
    """
    HTTPX AsyncClient against the app with the DB session mocked and the
    admin guard resolved to `admin_user`.

    Usage:
        async def test_list(test_client, mock_db_session):
            mock_db_session.execute.return_value = make_result(rows=[])
            response = await test_client.get("/api/admin/categories")
    """
    from app.main import app

    async def override_db():
        yield mock_db_session

    app.dependency_overrides[get_db_session] = override_db
    app.dependency_overrides[get_current_admin] = lambda: admin_user
    async with _client_for(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def anon_client(mock_db_session):
    """Like test_client, but requests go through the real bearer-token guard."""
    from app.main import app

    async def override_db():
        yield mock_db_session

    app.dependency_overrides[get_db_session] = override_db
    async with _client_for(app) as client:
        yield client
    app.dependency_overrides.clear()
