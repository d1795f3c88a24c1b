"""
VeggieFresh Admin API — HTTP Endpoint Tests
=============================================

What:  Request/response behaviour through the full FastAPI stack
       (middleware, admin guard, validation, exception handlers).
How:   HTTPX AsyncClient over ASGITransport; the DB session is a mock.

What we test:
    ✅ Success and error envelopes, camelCase keys
    ✅ Missing/invalid token → 401, customer token → 403
    ✅ Validation failures → 400 with the first message as `error`
    ✅ Unknown ids → 404; malformed ids → 400
    ✅ Health check reports database state
"""

import uuid
from unittest.mock import AsyncMock, patch

import pytest

from app.security import create_token_pair, hash_password
from conftest import assign_defaults_on_flush, make_result


# ══════════════════════════════════════════════════════════════════════════
# Auth
# ══════════════════════════════════════════════════════════════════════════

class TestAuthEndpoints:

    @pytest.mark.asyncio
    async def test_login(self, anon_client, mock_db_session, admin_user):
        admin_user.password_hash = hash_password("admin123", rounds=4)
        mock_db_session.execute.return_value = make_result(first=admin_user)

        response = await anon_client.post(
            "/api/admin/auth/login",
            json={"email": "admin@veggiefresh.com", "password": "admin123"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["user"]["email"] == "admin@veggiefresh.com"
        assert body["data"]["user"]["role"] == "admin"
        assert body["data"]["accessToken"]
        assert body["data"]["refreshToken"]

    @pytest.mark.asyncio
    async def test_login_invalid_email(self, anon_client):
        response = await anon_client.post(
            "/api/admin/auth/login", json={"email": "nope", "password": "x"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Invalid email format"
        assert body["code"] == "validation_error"

    @pytest.mark.asyncio
    async def test_login_bad_credentials(self, anon_client, mock_db_session):
        mock_db_session.execute.return_value = make_result(first=None)

        response = await anon_client.post(
            "/api/admin/auth/login",
            json={"email": "ghost@veggiefresh.com", "password": "x"},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_me(self, anon_client, mock_db_session, admin_user):
        access_token, _ = create_token_pair(str(admin_user.id))
        mock_db_session.execute.return_value = make_result(first=admin_user)

        response = await anon_client.get(
            "/api/admin/auth/me", headers={"Authorization": f"Bearer {access_token}"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["user"]["id"] == str(admin_user.id)

    @pytest.mark.asyncio
    async def test_refresh(self, anon_client, mock_db_session, admin_user):
        _, refresh_token = create_token_pair(str(admin_user.id))
        mock_db_session.execute.return_value = make_result(first=admin_user)

        response = await anon_client.post(
            "/api/admin/auth/refresh", json={"refreshToken": refresh_token}
        )

        assert response.status_code == 200
        assert response.json()["data"]["accessToken"]


class TestAdminGuard:

    @pytest.mark.asyncio
    async def test_missing_token(self, anon_client):
        response = await anon_client.get("/api/admin/categories")

        assert response.status_code == 401
        body = response.json()
        assert body == {
            "success": False,
            "error": "Access token required",
            "code": "unauthorized",
            "requestId": response.headers["X-Request-ID"],
        }

    @pytest.mark.asyncio
    async def test_invalid_token(self, anon_client):
        response = await anon_client.get(
            "/api/admin/products", headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid or expired token"

    @pytest.mark.asyncio
    async def test_refresh_token_not_accepted_as_access(self, anon_client, admin_user):
        _, refresh_token = create_token_pair(str(admin_user.id))

        response = await anon_client.get(
            "/api/admin/orders", headers={"Authorization": f"Bearer {refresh_token}"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_customer_forbidden(self, anon_client, mock_db_session, make_user):
        customer = make_user()
        access_token, _ = create_token_pair(str(customer.id))
        mock_db_session.execute.return_value = make_result(first=customer)

        response = await anon_client.get(
            "/api/admin/orders/stats", headers={"Authorization": f"Bearer {access_token}"}
        )

        assert response.status_code == 403
        assert response.json()["error"] == "Admin access required"
        assert response.json()["code"] == "forbidden"

    @pytest.mark.asyncio
    async def test_deleted_user(self, anon_client, mock_db_session):
        access_token, _ = create_token_pair(str(uuid.uuid4()))
        mock_db_session.execute.return_value = make_result(first=None)

        response = await anon_client.get(
            "/api/admin/categories", headers={"Authorization": f"Bearer {access_token}"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "User not found"


# ══════════════════════════════════════════════════════════════════════════
# Categories
# ══════════════════════════════════════════════════════════════════════════

class TestCategoryEndpoints:

    @pytest.mark.asyncio
    async def test_list(self, test_client, mock_db_session, make_category):
        category = make_category(name="Herbs", icon_url="")
        mock_db_session.execute.return_value = make_result(rows=[category])

        response = await test_client.get("/api/admin/categories")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data[0]["id"] == str(category.id)
        assert data[0]["iconUrl"] == ""
        assert data[0]["isActive"] is True
        assert "createdAt" in data[0]

    @pytest.mark.asyncio
    async def test_create(self, test_client, mock_db_session):
        mock_db_session.execute.return_value = make_result(first=None)
        assign_defaults_on_flush(mock_db_session)

        response = await test_client.post(
            "/api/admin/categories", json={"name": "Dairy", "sort": 3}
        )

        assert response.status_code == 201
        assert response.json()["data"]["name"] == "Dairy"
        assert response.json()["data"]["sort"] == 3

    @pytest.mark.asyncio
    async def test_create_blank_name(self, test_client):
        response = await test_client.post("/api/admin/categories", json={"name": "  "})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Name is required"
        assert body["details"]["errors"][0]["field"] == "name"

    @pytest.mark.asyncio
    async def test_create_duplicate(self, test_client, mock_db_session):
        mock_db_session.execute.return_value = make_result(first=uuid.uuid4())

        response = await test_client.post("/api/admin/categories", json={"name": "Dairy"})

        assert response.status_code == 400
        assert response.json()["error"] == "Category with this name already exists"

    @pytest.mark.asyncio
    async def test_get_unknown(self, test_client, mock_db_session):
        mock_db_session.execute.return_value = make_result(first=None)

        response = await test_client.get(f"/api/admin/categories/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "Category not found"
        assert response.json()["code"] == "not_found"

    @pytest.mark.asyncio
    async def test_update(self, test_client, mock_db_session, make_category):
        category = make_category(name="Leafy Greens", sort=1)
        mock_db_session.execute.return_value = make_result(first=category)

        response = await test_client.put(
            f"/api/admin/categories/{category.id}", json={"sort": 5, "isActive": False}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == str(category.id)
        assert data["name"] == "Leafy Greens"
        assert data["sort"] == 5
        assert data["isActive"] is False
        mock_db_session.flush.assert_awaited()

    @pytest.mark.asyncio
    async def test_update_rename_to_existing(self, test_client, mock_db_session, make_category):
        category = make_category(name="Leafy Greens")
        mock_db_session.execute.side_effect = [
            make_result(first=category),
            make_result(first=uuid.uuid4()),
        ]

        response = await test_client.put(
            f"/api/admin/categories/{category.id}", json={"name": "Herbs"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Category with this name already exists"

    @pytest.mark.asyncio
    async def test_malformed_id(self, test_client):
        response = await test_client.get("/api/admin/categories/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    @pytest.mark.asyncio
    async def test_delete_with_products(self, test_client, mock_db_session, make_category):
        category = make_category()
        mock_db_session.execute.side_effect = [make_result(first=category), make_result(scalar=2)]

        response = await test_client.delete(f"/api/admin/categories/{category.id}")

        assert response.status_code == 400
        assert response.json()["error"] == "Category has products assigned and cannot be deleted"

    @pytest.mark.asyncio
    async def test_delete(self, test_client, mock_db_session, make_category):
        category = make_category()
        mock_db_session.execute.side_effect = [make_result(first=category), make_result(scalar=0)]

        response = await test_client.delete(f"/api/admin/categories/{category.id}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Category deleted successfully"}


# ══════════════════════════════════════════════════════════════════════════
# Products
# ══════════════════════════════════════════════════════════════════════════

class TestProductEndpoints:

    @pytest.mark.asyncio
    async def test_list_with_meta(self, test_client, mock_db_session, make_product):
        product = make_product()
        mock_db_session.execute.side_effect = [make_result(rows=[product]), make_result(scalar=51)]

        response = await test_client.get("/api/admin/products?isActive=true&page=1&limit=50")

        assert response.status_code == 200
        body = response.json()
        assert body["meta"] == {"total": 51, "page": 1, "limit": 50, "pages": 2}
        assert response.headers["X-Total-Count"] == "51"
        item = body["data"][0]
        assert item["category"] == {"id": str(product.category.id), "name": product.category.name}
        assert item["unitPrices"][0]["baseQty"] == 1

    @pytest.mark.asyncio
    async def test_limit_is_capped(self, test_client):
        response = await test_client.get("/api/admin/products?limit=500")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_unknown_category(self, test_client, mock_db_session):
        mock_db_session.execute.return_value = make_result(first=None)

        response = await test_client.post(
            "/api/admin/products",
            json={
                "name": "Beetroot",
                "categoryId": str(uuid.uuid4()),
                "images": ["https://cdn.example.com/beet.jpg"],
                "unitPrices": [{"unit": "kg", "step": 1, "baseQty": 1, "price": 45, "stock": 12}],
            },
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Category not found"

    @pytest.mark.asyncio
    async def test_create_without_prices(self, test_client):
        response = await test_client.post(
            "/api/admin/products",
            json={
                "name": "Beetroot",
                "categoryId": str(uuid.uuid4()),
                "images": ["https://cdn.example.com/beet.jpg"],
                "unitPrices": [],
            },
        )

        assert response.status_code == 400
        assert response.json()["error"] == "At least one unit price is required"

    @pytest.mark.asyncio
    async def test_delete_unknown(self, test_client, mock_db_session):
        mock_db_session.execute.return_value = make_result(first=None)

        response = await test_client.delete(f"/api/admin/products/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "Product not found"


# ══════════════════════════════════════════════════════════════════════════
# Orders
# ══════════════════════════════════════════════════════════════════════════

class TestOrderEndpoints:

    @pytest.mark.asyncio
    async def test_stats(self, test_client, mock_db_session):
        mock_db_session.execute.return_value = make_result(one=(3, 1, 1, 1, 250.0))

        response = await test_client.get("/api/admin/orders/stats")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "totalOrders": 3,
            "pendingOrders": 1,
            "deliveredOrders": 1,
            "cancelledOrders": 1,
            "revenue": 250.0,
        }

    @pytest.mark.asyncio
    async def test_list_filter_by_status(self, test_client, mock_db_session, make_order):
        mock_db_session.execute.side_effect = [make_result(rows=[make_order()]), make_result(scalar=1)]

        response = await test_client.get("/api/admin/orders?status=placed")

        assert response.status_code == 200
        order = response.json()["data"][0]
        assert order["status"] == "placed"
        assert order["user"]["name"] == "Asha Rao"
        assert order["deliveryFee"] == 20.0

    @pytest.mark.asyncio
    async def test_list_unknown_status(self, test_client):
        response = await test_client.get("/api/admin/orders?status=lost")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_status(self, test_client, mock_db_session, make_order):
        order = make_order()
        mock_db_session.execute.return_value = make_result(first=order)

        response = await test_client.patch(
            f"/api/admin/orders/{order.id}/status", json={"status": "delivered"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["data"]["status"] == "delivered"
        assert body["message"] == "Order status updated successfully"

    @pytest.mark.asyncio
    async def test_update_invalid_status(self, test_client):
        response = await test_client.patch(
            f"/api/admin/orders/{uuid.uuid4()}/status", json={"status": "shipped"}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"


# ══════════════════════════════════════════════════════════════════════════
# Health & Middleware
# ══════════════════════════════════════════════════════════════════════════

class TestHealthAndMiddleware:

    @pytest.mark.asyncio
    async def test_health_ok(self, anon_client):
        with patch("app.routes.health.ping_database", AsyncMock()):
            response = await anon_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert "uptimeSeconds" in body

    @pytest.mark.asyncio
    async def test_health_database_down(self, anon_client):
        with patch("app.routes.health.ping_database", AsyncMock(side_effect=OSError("refused"))):
            response = await anon_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, anon_client):
        with patch("app.routes.health.ping_database", AsyncMock()):
            response = await anon_client.get("/health", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"

    @pytest.mark.asyncio
    async def test_unknown_route(self, anon_client):
        response = await anon_client.get("/api/admin/nothing-here")

        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["code"] == "not_found"

    @pytest.mark.asyncio
    async def test_rate_limit(self, monkeypatch, mock_db_session):
        from httpx import ASGITransport, AsyncClient

        from app.config import settings
        from app.database import get_db_session
        from app.main import create_app

        monkeypatch.setattr(settings, "rate_limit_requests", 2)
        app = create_app()

        async def override_db():
            yield mock_db_session

        app.dependency_overrides[get_db_session] = override_db

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            statuses = [
                (await client.get("/api/admin/categories")).status_code for _ in range(3)
            ]
            limited = await client.get("/api/admin/categories")

        assert statuses[:2] == [401, 401]
        assert statuses[2] == 429
        assert limited.json()["code"] == "rate_limit_exceeded"
        assert "Retry-After" in limited.headers

    @pytest.mark.asyncio
    async def test_rate_limited_response_carries_request_id(self, monkeypatch, mock_db_session):
        from httpx import ASGITransport, AsyncClient

        from app.config import settings
        from app.database import get_db_session
        from app.main import create_app

        monkeypatch.setattr(settings, "rate_limit_requests", 1)
        app = create_app()

        async def override_db():
            yield mock_db_session

        app.dependency_overrides[get_db_session] = override_db

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            await client.get("/api/admin/categories")
            limited = await client.get("/api/admin/categories", headers={"X-Request-ID": "rl-trace-1"})

        assert limited.status_code == 429
        assert limited.headers["X-Request-ID"] == "rl-trace-1"
        assert limited.json()["requestId"] == "rl-trace-1"
