"""Tests for the HTTP endpoints, with repositories and Gemini replaced by fakes."""
import pytest
from fastapi.testclient import TestClient
from openai import AsyncOpenAI
from pymongo.errors import ServerSelectionTimeoutError

from app.api import deps
from app.api.v1.routers import ai as ai_router
from app.domain.models.shop import WishlistItem
from app.domain.services.constants import MSG_AI, MSG_AI_NOT_CONFIGURED, MSG_DB_NOT_AVAILABLE
from app.domain.services.recommendation_svc import RecommendationResolver
from app.main import app
from tests.fakes import (
    FakeCartRepo,
    FakeOrderRepo,
    FakeProductRepo,
    FakeRanker,
    FakeUserRepo,
    FakeWishlistRepo,
)


@pytest.fixture
def repos(catalog):
    return {
        "products": FakeProductRepo(catalog),
        "orders": FakeOrderRepo(),
        "wishlist": FakeWishlistRepo(),
        "cart": FakeCartRepo(),
        "users": FakeUserRepo(),
    }


@pytest.fixture
def client(repos):
    app.dependency_overrides[deps.redis_dep] = lambda: None
    app.dependency_overrides[deps.product_repo_dep] = lambda: repos["products"]
    app.dependency_overrides[deps.order_repo_dep] = lambda: repos["orders"]
    app.dependency_overrides[deps.wishlist_repo_dep] = lambda: repos["wishlist"]
    app.dependency_overrides[deps.cart_repo_dep] = lambda: repos["cart"]
    app.dependency_overrides[deps.user_repo_dep] = lambda: repos["users"]
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use_resolver(repos, ranker):
    app.dependency_overrides[deps.recommendation_resolver_dep] = lambda: RecommendationResolver(
        products=repos["products"],
        orders=repos["orders"],
        wishlist=repos["wishlist"],
        ranker=ranker,
    )


# ------- Recommendations -------

def test_recommendations_response_shape(client, repos):
    repos["wishlist"].items.append(WishlistItem(user_id="u1", product_id="p1"))
    _use_resolver(repos, FakeRanker(ids=["p3", "p2"]))

    response = client.post("/recommendations", json={"userId": "u1"})

    assert response.status_code == 200
    data = response.json()
    assert data["isDemoMode"] is False
    assert data["message"] == MSG_AI
    assert [p["id"] for p in data["recommendations"]] == ["p3", "p2"]
    first = data["recommendations"][0]
    assert set(first) == {"id", "name", "description", "price", "imageUrl", "category"}
    assert first["imageUrl"] == "https://img.example.com/p3.png"


def test_recommendations_requires_user_id(client):
    response = client.post("/recommendations", json={})
    assert response.status_code == 422


def test_user_recommendations_without_ai_key(client, repos):
    _use_resolver(repos, None)

    response = client.get("/users/u1/recommendations")

    assert response.status_code == 200
    data = response.json()
    assert data["isDemoMode"] is True
    assert data["message"] == MSG_AI_NOT_CONFIGURED
    assert len(data["recommendations"]) == 4


def test_recommendations_without_database(client):
    app.dependency_overrides[deps.mongo_db] = lambda: None
    app.dependency_overrides[deps.ai_ranker_dep] = lambda: FakeRanker(ids=["p1"])

    response = client.post("/recommendations", json={"userId": "u1"})

    assert response.status_code == 200
    assert response.json()["message"] == MSG_DB_NOT_AVAILABLE
    assert response.json()["isDemoMode"] is True


# ------- Products / admin -------

def test_list_and_get_products(client):
    response = client.get("/products", params={"category": "Electronics"})
    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == ["p1", "p2", "p3", "p4"]

    assert client.get("/products/p6").json()["name"] == "Electric Kettle"
    assert client.get("/products/missing").status_code == 404


def test_admin_product_crud(client):
    created = client.post(
        "/admin/products",
        json={"name": "Desk Lamp", "description": "LED", "price": 19.5, "category": "Home", "imageUrl": "https://img/x.png"},
    )
    assert created.status_code == 201
    product_id = created.json()["id"]
    assert created.json()["imageUrl"] == "https://img/x.png"

    updated = client.put(f"/admin/products/{product_id}", json={"price": 21.0})
    assert updated.status_code == 200
    assert updated.json()["price"] == 21.0
    assert updated.json()["name"] == "Desk Lamp"

    assert client.delete(f"/admin/products/{product_id}").status_code == 204
    assert client.delete(f"/admin/products/{product_id}").status_code == 404
    assert client.put(f"/admin/products/{product_id}", json={"price": 1}).status_code == 404


def test_admin_product_validation(client):
    assert client.post("/admin/products", json={"name": "X", "price": -1}).status_code == 422
    assert client.post("/admin/products", json={"name": "", "price": 1}).status_code == 422


def test_crud_without_database_is_503():
    app.dependency_overrides[deps.mongo_db] = lambda: None
    try:
        response = TestClient(app).get("/products")
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 503
    assert response.json()["detail"] == "Database not available"


def test_mongo_connection_failure_is_503(client, repos):
    repos["products"].fail = ServerSelectionTimeoutError("no servers")

    response = client.get("/products")

    assert response.status_code == 503


# ------- Cart / orders -------

def test_cart_flow_and_checkout(client, repos):
    assert client.post("/users/u1/cart", json={"productId": "p2"}).status_code == 201
    again = client.post("/users/u1/cart", json={"productId": "p2", "quantity": 2})
    assert again.json()["quantity"] == 3
    client.post("/users/u1/cart", json={"productId": "p4"})

    cart = client.get("/users/u1/cart").json()
    assert cart["count"] == 2
    assert cart["total"] == round(3 * 59.0 + 9.99, 2)

    order = client.post("/users/u1/cart/checkout")
    assert order.status_code == 201
    assert order.json()["total"] == cart["total"]
    assert order.json()["userId"] == "u1"
    assert client.get("/users/u1/cart").json()["count"] == 0

    orders = client.get("/users/u1/orders").json()
    assert [o["orderId"] for o in orders] == [order.json()["orderId"]]

    assert client.post("/users/u1/cart/checkout").status_code == 400


def test_cart_unknown_product_and_remove(client):
    assert client.post("/users/u1/cart", json={"productId": "nope"}).status_code == 404
    client.post("/users/u1/cart", json={"productId": "p1"})
    assert client.delete("/users/u1/cart/p1").status_code == 204
    assert client.delete("/users/u1/cart/p1").status_code == 404


# ------- Wishlist -------

def test_wishlist_flow(client):
    assert client.post("/users/u1/wishlist", json={"productId": "p5"}).status_code == 201
    assert client.post("/users/u1/wishlist", json={"productId": "p5"}).status_code == 201
    assert client.post("/users/u1/wishlist", json={"productId": "nope"}).status_code == 404

    wishlist = client.get("/users/u1/wishlist").json()
    assert wishlist["count"] == 1
    assert wishlist["items"][0]["id"] == "p5"

    assert client.delete("/users/u1/wishlist/p5").status_code == 204
    assert client.get("/users/u1/wishlist").json()["count"] == 0


# ------- Profile -------

def test_profile_upsert_and_get(client):
    assert client.get("/users/u1/profile").status_code == 404

    saved = client.put("/users/u1/profile", json={"displayName": "Sam", "email": "sam@example.com"})
    assert saved.status_code == 200
    assert saved.json()["displayName"] == "Sam"

    profile = client.get("/users/u1/profile").json()
    assert profile["userId"] == "u1"
    assert profile["email"] == "sam@example.com"
    assert profile["updatedAt"] is not None


# ------- AI key test / status / health -------

def test_ai_key_test_requires_key(client):
    response = client.post("/ai/test", json={"apiKey": "  "})
    assert response.status_code == 400
    assert response.json()["detail"] == "API key is required"


def test_ai_key_test_success(client, monkeypatch):
    async def fake_check(self):
        return "API key is working"

    monkeypatch.setattr(ai_router.GeminiRanker, "check", fake_check)

    response = client.post("/ai/test", json={"apiKey": "candidate"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "API key is valid and working", "response": "API key is working"}


def test_ai_key_test_invalid_key(client, monkeypatch):
    async def fake_check(self):
        raise RuntimeError("400 API_KEY_INVALID")

    monkeypatch.setattr(ai_router.GeminiRanker, "check", fake_check)

    response = client.post("/ai/test", json={"apiKey": "bad"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid API key. Please check your Gemini API key."


def test_ai_status(client):
    data = client.get("/ai/status").json()
    assert isinstance(data["configured"], bool)
    assert data["model"]


def test_health_without_backends(client):
    data = client.get("/health").json()
    assert data["status"] == "ok"
    assert data["checks"]["mongodb"] == "skipped"
    assert data["checks"]["redis"] == "skipped"


@pytest.mark.parametrize("outcome", ["ok", "error"])
def test_ai_key_test_closes_its_client(client, monkeypatch, outcome):
    closed = []

    async def fake_check(self):
        if outcome == "error":
            raise RuntimeError("quota exceeded")
        return "API key is working"

    async def fake_close(self):
        closed.append(self)

    monkeypatch.setattr(ai_router.GeminiRanker, "check", fake_check)
    monkeypatch.setattr(AsyncOpenAI, "close", fake_close)

    client.post("/ai/test", json={"apiKey": "candidate"})

    assert len(closed) == 1
