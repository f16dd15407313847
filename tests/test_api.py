"""
==============================================================================
API Integration Tests
==============================================================================

Tests for REST API endpoints.

==============================================================================
"""

import logging

import pytest
from fastapi.testclient import TestClient

from app.db.models import Product, User
from app.utils.audit_logger import AUDIT_LOGGER_NAME


PRODUCTS_URL = "/api/v1/products"


def _names(response) -> set:
    return {p["name"] for p in response.json()}


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client: TestClient, products: list):
        """Test health check returns status and product count."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["components"]["database"] == "healthy"
        assert data["details"]["products"] == 3

    def test_readiness_probe(self, client: TestClient):
        """Test readiness probe."""
        response = client.get("/api/v1/health/ready")
        assert response.status_code == 200
        assert response.json()["ready"] is True

    def test_liveness_probe(self, client: TestClient):
        """Test liveness probe."""
        response = client.get("/api/v1/health/live")
        assert response.status_code == 200
        assert response.json()["alive"] is True


class TestAuthEndpoints:
    """Tests for authentication endpoints."""

    def test_login_success(self, client: TestClient, admin_user: User):
        """Test successful login."""
        response = client.post(
            "/api/v1/auth/login",
            json={"username": admin_user.username, "password": "admin123"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert "access_token" in data
        assert "refresh_token" in data
        assert data["user"]["role"] == "admin"

    def test_login_invalid_password(self, client: TestClient, admin_user: User):
        """Test login with invalid password."""
        response = client.post(
            "/api/v1/auth/login",
            json={"username": admin_user.username, "password": "wrongpassword"}
        )
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"

    def test_login_user_not_found(self, client: TestClient):
        """Test login with nonexistent user."""
        response = client.post(
            "/api/v1/auth/login",
            json={"username": "nonexistent", "password": "password123"}
        )
        assert response.status_code == 401

    def test_refresh_issues_usable_access_token(self, client: TestClient, standard_user: User):
        """Test refresh token exchange."""
        login = client.post(
            "/api/v1/auth/login",
            json={"username": "user", "password": "user1234"}
        ).json()

        response = client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": login["refresh_token"]}
        )
        assert response.status_code == 200

        token = response.json()["access_token"]
        listing = client.get(PRODUCTS_URL, headers={"Authorization": f"Bearer {token}"})
        assert listing.status_code == 200

    def test_access_token_rejected_as_refresh(self, client: TestClient, admin_token: str):
        response = client.post("/api/v1/auth/refresh", json={"refresh_token": admin_token})
        assert response.status_code == 401

    def test_get_current_user(self, client: TestClient, user_headers: dict, standard_user: User):
        """Test getting current user info."""
        response = client.get("/api/v1/auth/me", headers=user_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["user"]["username"] == standard_user.username
        assert data["user"]["role"] == "user"

    def test_get_current_user_no_token(self, client: TestClient):
        """Test getting current user without token."""
        response = client.get("/api/v1/auth/me")
        assert response.status_code == 401


class TestProductAccess:
    """Role gating on catalog routes."""

    def test_read_requires_token(self, client: TestClient):
        assert client.get(PRODUCTS_URL).status_code == 401

    def test_invalid_token_rejected(self, client: TestClient):
        response = client.get(PRODUCTS_URL, headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_user_can_read(self, client: TestClient, user_headers: dict, products: list):
        response = client.get(PRODUCTS_URL, headers=user_headers)
        assert response.status_code == 200
        assert len(response.json()) == 3

    @pytest.mark.parametrize("method,path", [
        ("post", PRODUCTS_URL),
        ("put", f"{PRODUCTS_URL}/1"),
        ("delete", f"{PRODUCTS_URL}/1"),
    ])
    def test_user_cannot_write(
        self,
        client: TestClient,
        user_headers: dict,
        products: list,
        method: str,
        path: str
    ):
        kwargs = {"headers": user_headers}
        if method != "delete":
            kwargs["json"] = {"name": "X", "price": 1, "stock": 1}

        response = getattr(client, method)(path, **kwargs)
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "ADMIN_REQUIRED"

    def test_write_requires_token(self, client: TestClient):
        response = client.post(PRODUCTS_URL, json={"name": "X", "price": 1, "stock": 1})
        assert response.status_code == 401


class TestProductCrud:
    """Create, read, update and delete through the API."""

    def test_create_product(self, client: TestClient, admin_headers: dict):
        response = client.post(
            PRODUCTS_URL,
            headers=admin_headers,
            json={"name": "Widget", "description": "Blue", "price": 10.00, "stock": 5}
        )
        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], int)
        assert data["name"] == "Widget"
        assert data["description"] == "Blue"
        assert data["price"] == 10.0
        assert data["stock"] == 5

    def test_create_ignores_supplied_id(self, client: TestClient, admin_headers: dict, products: list):
        response = client.post(
            PRODUCTS_URL,
            headers=admin_headers,
            json={"id": products[0].id, "name": "Copy", "price": 1, "stock": 1}
        )
        assert response.status_code == 201
        assert response.json()["id"] not in {p.id for p in products}

    def test_create_writes_audit_entry(
        self,
        client: TestClient,
        admin_headers: dict,
        caplog: pytest.LogCaptureFixture
    ):
        with caplog.at_level(logging.INFO, logger=AUDIT_LOGGER_NAME):
            response = client.post(
                PRODUCTS_URL,
                headers=admin_headers,
                json={"name": "Widget", "price": 10, "stock": 5}
            )

        product_id = response.json()["id"]
        audit = [r.getMessage() for r in caplog.records if r.name == AUDIT_LOGGER_NAME]
        assert audit == [f"Product added: id={product_id}, name='Widget', by user='admin'"]

    def test_invalid_create_returns_field_errors(self, client: TestClient, admin_headers: dict):
        response = client.post(
            PRODUCTS_URL,
            headers=admin_headers,
            json={"name": "", "price": 0, "stock": -1}
        )
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"] == {
            "name": "Product name is required",
            "price": "Price must be greater than 0",
            "stock": "Stock cannot be negative",
        }

    def test_missing_fields_reported(self, client: TestClient, admin_headers: dict):
        response = client.post(PRODUCTS_URL, headers=admin_headers, json={})
        assert response.status_code == 400
        assert response.json()["error"]["details"] == {
            "name": "Product name is required",
            "price": "Price is required",
            "stock": "Stock is required",
        }

    def test_malformed_body_is_bad_request(self, client: TestClient, admin_headers: dict):
        response = client.post(
            PRODUCTS_URL,
            headers=admin_headers,
            json={"name": "Widget", "price": "lots", "stock": 1}
        )
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "price" in error["details"]

    @pytest.mark.parametrize("stock", [True, "5", 2.5])
    def test_stock_must_be_a_json_integer(self, client: TestClient, admin_headers: dict, db, stock):
        response = client.post(
            PRODUCTS_URL,
            headers=admin_headers,
            json={"name": "Widget", "price": 1, "stock": stock}
        )
        assert response.status_code == 400
        assert "stock" in response.json()["error"]["details"]
        assert db.query(Product).count() == 0

    def test_oversized_stock_is_a_validation_error(self, client: TestClient, admin_headers: dict):
        response = client.post(
            PRODUCTS_URL,
            headers=admin_headers,
            json={"name": "Widget", "price": 1, "stock": 10 ** 20}
        )
        assert response.status_code == 400
        assert response.json()["error"]["details"] == {"stock": "Stock must be at most 2147483647"}

    def test_invalid_create_persists_nothing(self, client: TestClient, admin_headers: dict, db):
        client.post(PRODUCTS_URL, headers=admin_headers, json={"name": "X", "price": 19.999, "stock": 1})
        assert db.query(Product).count() == 0

    def test_get_product(self, client: TestClient, user_headers: dict, products: list):
        widget = products[0]
        response = client.get(f"{PRODUCTS_URL}/{widget.id}", headers=user_headers)
        assert response.status_code == 200
        assert response.json()["name"] == "Widget"

    def test_get_missing_product_is_404(self, client: TestClient, user_headers: dict):
        response = client.get(f"{PRODUCTS_URL}/999", headers=user_headers)
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "PRODUCT_NOT_FOUND"

    def test_update_product(self, client: TestClient, admin_headers: dict, products: list):
        widget = products[0]
        response = client.put(
            f"{PRODUCTS_URL}/{widget.id}",
            headers=admin_headers,
            json={"id": 12345, "name": "Widget v2", "description": None, "price": 12.5, "stock": 7}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == widget.id
        assert data["name"] == "Widget v2"
        assert data["description"] is None
        assert data["price"] == 12.5
        assert data["stock"] == 7

    def test_update_missing_product(self, client: TestClient, admin_headers: dict):
        response = client.put(
            f"{PRODUCTS_URL}/999",
            headers=admin_headers,
            json={"name": "Ghost", "price": 1, "stock": 1}
        )
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "PRODUCT_NOT_FOUND"
        assert error["message"] == "Product not found with id: 999"

    def test_update_invalid_payload_checked_first(self, client: TestClient, admin_headers: dict):
        response = client.put(
            f"{PRODUCTS_URL}/999",
            headers=admin_headers,
            json={"name": "Ghost", "price": -1, "stock": 1}
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_delete_product(self, client: TestClient, admin_headers: dict, products: list):
        gadget = products[1]
        response = client.delete(f"{PRODUCTS_URL}/{gadget.id}", headers=admin_headers)
        assert response.status_code == 204
        assert response.content == b""

        follow_up = client.get(f"{PRODUCTS_URL}/{gadget.id}", headers=admin_headers)
        assert follow_up.status_code == 404

    def test_delete_missing_product(self, client: TestClient, admin_headers: dict, products: list, db):
        response = client.delete(f"{PRODUCTS_URL}/999", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Product not found with id: 999"
        assert db.query(Product).count() == 3


class TestProductSearch:
    """Filter and search endpoints."""

    def test_search_by_name_is_case_insensitive(
        self,
        client: TestClient,
        user_headers: dict,
        products: list
    ):
        response = client.get(f"{PRODUCTS_URL}/search", params={"name": "WIDGET"}, headers=user_headers)
        assert response.status_code == 200
        assert _names(response) == {"Widget", "Super Widget"}

    def test_search_treats_wildcards_literally(
        self,
        client: TestClient,
        user_headers: dict,
        products: list
    ):
        response = client.get(f"{PRODUCTS_URL}/search", params={"name": "%"}, headers=user_headers)
        assert response.json() == []

    def test_search_requires_name(self, client: TestClient, user_headers: dict):
        response = client.get(f"{PRODUCTS_URL}/search", headers=user_headers)
        assert response.status_code == 400
        assert "name" in response.json()["error"]["details"]

    def test_min_price_is_inclusive(self, client: TestClient, user_headers: dict, products: list):
        response = client.get(f"{PRODUCTS_URL}/price/min", params={"price": "25.50"}, headers=user_headers)
        assert _names(response) == {"Gadget", "Super Widget"}

    def test_max_stock_is_exclusive(self, client: TestClient, user_headers: dict, products: list):
        response = client.get(f"{PRODUCTS_URL}/stock/max", params={"stock": 5}, headers=user_headers)
        assert _names(response) == {"Gadget"}

    def test_price_range_is_inclusive(self, client: TestClient, user_headers: dict, products: list):
        response = client.get(
            f"{PRODUCTS_URL}/price/range",
            params={"minPrice": "10.00", "maxPrice": "25.50"},
            headers=user_headers
        )
        assert _names(response) == {"Widget", "Gadget"}

    def test_inverted_price_range_is_empty(self, client: TestClient, user_headers: dict, products: list):
        response = client.get(
            f"{PRODUCTS_URL}/price/range",
            params={"minPrice": "50", "maxPrice": "10"},
            headers=user_headers
        )
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.parametrize("path,params", [
        ("/stock/max", {"stock": 10 ** 20}),
        ("/search/stock", {"name": "widget", "stock": 10 ** 20}),
        ("/search/stock", {"name": "widget", "stock": -(10 ** 20)}),
    ])
    def test_out_of_range_stock_parameter(self, client: TestClient, user_headers: dict, path: str, params: dict):
        response = client.get(f"{PRODUCTS_URL}{path}", params=params, headers=user_headers)
        assert response.status_code == 400
        assert "stock" in response.json()["error"]["details"]

    def test_largest_stock_parameter_is_accepted(self, client: TestClient, user_headers: dict, products: list):
        response = client.get(f"{PRODUCTS_URL}/stock/max", params={"stock": 2 ** 31 - 1}, headers=user_headers)
        assert response.status_code == 200
        assert len(response.json()) == 3

    def test_out_of_range_product_id(self, client: TestClient, admin_headers: dict):
        response = client.delete(f"{PRODUCTS_URL}/{10 ** 20}", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_name_and_stock(self, client: TestClient, user_headers: dict, products: list):
        response = client.get(
            f"{PRODUCTS_URL}/search/stock",
            params={"name": "widget", "stock": 5},
            headers=user_headers
        )
        assert _names(response) == {"Super Widget"}


class TestCatalogScenario:
    """End-to-end walk through the catalog lifecycle."""

    def test_lifecycle(self, client: TestClient, admin_headers: dict):
        created = client.post(
            PRODUCTS_URL,
            headers=admin_headers,
            json={"name": "Widget", "price": "10.00", "stock": 5}
        ).json()
        product_id = created["id"]

        client.post(PRODUCTS_URL, headers=admin_headers, json={"name": "Gizmo", "price": "3.25", "stock": 50})

        cheap = client.get(f"{PRODUCTS_URL}/price/min", params={"price": 5}, headers=admin_headers)
        assert _names(cheap) == {"Widget"}

        updated = client.put(
            f"{PRODUCTS_URL}/{product_id}",
            headers=admin_headers,
            json={"name": "Widget", "price": "4.00", "stock": 5}
        )
        assert updated.json()["price"] == 4.0

        cheap = client.get(f"{PRODUCTS_URL}/price/min", params={"price": 5}, headers=admin_headers)
        assert cheap.json() == []

        assert client.delete(f"{PRODUCTS_URL}/{product_id}", headers=admin_headers).status_code == 204
        assert _names(client.get(PRODUCTS_URL, headers=admin_headers)) == {"Gizmo"}
