"""Shared test fixtures and configuration."""
import os
import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing app
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from main import app
from core.dependencies import get_order_store, get_restaurant_store
from db.order_store import InMemoryOrderStore
from db.restaurant_store import InMemoryRestaurantStore
from models.restaurant import Category, GeoPoint, MenuItem, Restaurant
from utils.jwt_handler import create_access_token

# Spice Garden sits at MG Road, Bengaluru ([lon, lat])
SPICE_GARDEN_LOCATION = [77.6066, 12.9756]


def make_spice_garden(**overrides):
    data = dict(
        id="spice-garden",
        name="Spice Garden",
        address="12 MG Road",
        location=GeoPoint(coordinates=list(SPICE_GARDEN_LOCATION)),
        is_approved=True,
        owner_id="owner-1",
        categories=[
            Category(name="Mains", items=[
                MenuItem(id="paneer-tikka", name="Paneer Tikka", price=220, image="paneer.jpg", vegetarian=True),
                MenuItem(id="butter-chicken", name="Butter Chicken", price=280, image="chicken.jpg"),
            ]),
            Category(name="Breads", items=[
                MenuItem(id="garlic-naan", name="Garlic Naan", price=60, vegetarian=True),
            ]),
        ],
    )
    data.update(overrides)
    return Restaurant(**data)


def make_dosa_corner(**overrides):
    data = dict(
        id="dosa-corner",
        name="Dosa Corner",
        address="4 Church Street",
        is_approved=True,
        owner_id="owner-2",
        categories=[
            Category(name="Dosas", items=[
                MenuItem(id="masala-dosa", name="Masala Dosa", price=90, vegetarian=True),
            ]),
        ],
    )
    data.update(overrides)
    return Restaurant(**data)


@pytest.fixture
def restaurant_store():
    """Two approved restaurants (one without a location), one awaiting approval, one empty."""
    store = InMemoryRestaurantStore()
    store.save(make_spice_garden())
    store.save(make_dosa_corner())
    store.save(Restaurant(id="pending-place", name="Pending Place", is_approved=False, categories=[
        Category(name="Snacks", items=[MenuItem(id="samosa", name="Samosa", price=20)]),
    ]))
    store.save(Restaurant(id="empty-kitchen", name="Empty Kitchen", is_approved=True))
    return store


@pytest.fixture
def order_store():
    return InMemoryOrderStore()


@pytest.fixture
def test_client(order_store, restaurant_store):
    """Create FastAPI test client with in-memory stores."""
    app.dependency_overrides[get_order_store] = lambda: order_store
    app.dependency_overrides[get_restaurant_store] = lambda: restaurant_store

    client = TestClient(app)

    yield client

    app.dependency_overrides.clear()


def auth_headers(user_id, role, restaurant_id=None, email=None):
    claims = {"sub": user_id, "role": role, "email": email or f"{user_id}@example.com"}
    if restaurant_id:
        claims["restaurant_id"] = restaurant_id
    return {"Authorization": f"Bearer {create_access_token(claims)}"}


@pytest.fixture
def customer_headers():
    return auth_headers("customer-1", "customer")


@pytest.fixture
def other_customer_headers():
    return auth_headers("customer-2", "customer")


@pytest.fixture
def owner_headers():
    return auth_headers("owner-1", "restaurant_owner", restaurant_id="spice-garden")


@pytest.fixture
def dosa_owner_headers():
    return auth_headers("owner-2", "restaurant_owner", restaurant_id="dosa-corner")


@pytest.fixture
def admin_headers():
    return auth_headers("admin-1", "admin")


@pytest.fixture
def place_order(test_client, customer_headers):
    """Place an order through the API and return the response JSON."""
    def _place_order(headers=None, **overrides):
        body = {
            "items": [{"itemId": "paneer-tikka", "restaurantId": "spice-garden", "quantity": 2}],
            "mode": "delivery",
            "address": "221B Residency Road",
            "paymentMethod": "cod",
        }
        body.update(overrides)
        response = test_client.post("/orders", json=body, headers=headers or customer_headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _place_order


# Pytest configuration
def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test"
    )
