from typing import Optional

import httpx
import pytest
from fastapi import FastAPI, Response
from fastapi.responses import JSONResponse

from restaurant_client.core.config import DataMode, Settings
from restaurant_client.schemas import (
    Customization,
    CustomizationKind,
    MenuItem,
)
from restaurant_client.services.mock import MockStore

API_BASE = "http://testserver/api"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


def make_settings(**overrides) -> Settings:
    values = {
        "mock_min_latency": 0.0,
        "mock_max_latency": 0.0,
        "data_mode": DataMode.MOCK,
        "api_base_url": API_BASE,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def store() -> MockStore:
    store = MockStore(min_latency=0.0, max_latency=0.0)
    yield store
    store.close()


@pytest.fixture
def empty_store() -> MockStore:
    return MockStore(min_latency=0.0, max_latency=0.0, seed=False)


def make_menu_item(
    item_id: str = "A",
    price: float = 10.0,
    restaurant_id: str = "r1",
    is_available: bool = True,
    name: Optional[str] = None,
) -> MenuItem:
    return MenuItem(
        id=item_id,
        restaurant_id=restaurant_id,
        name=name or f"Item {item_id}",
        price=price,
        is_available=is_available,
        customizations=[
            Customization(id="size", name="Size", kind=CustomizationKind.SINGLE_CHOICE,
                          options=["Small", "Large"]),
            Customization(id="toppings", name="Toppings",
                          kind=CustomizationKind.MULTI_CHOICE,
                          options=["Basil", "Olives", "Mushrooms"]),
        ],
    )


@pytest.fixture
def menu_item_factory():
    return make_menu_item


# =============================================================================
# FAKE BACKEND
# =============================================================================

FAKE_RESTAURANT = {
    "id": "r-remote",
    "name": "Remote Bistro",
    "description": "Served by the API",
    "cuisine": "French",
    "rating": 4.1,
    "totalRatings": 12,
    "isActive": True,
}

FAKE_USER = {
    "id": "u-remote",
    "email": "remote@test.com",
    "name": "Remote User",
    "role": "employee",
}


def build_fake_backend() -> FastAPI:
    """Minimal stand-in for the ordering REST API, mounted under /api."""
    app = FastAPI()
    app.state.seen_tokens = []

    @app.middleware("http")
    async def record_auth(request, call_next):
        app.state.seen_tokens.append(request.headers.get("authorization"))
        return await call_next(request)

    @app.post("/api/auth/login")
    async def login(body: dict):
        if body.get("password") != "secret":
            return JSONResponse({"message": "Invalid credentials"}, status_code=401)
        return {"data": {"user": FAKE_USER, "token": "remote-token"}}

    @app.post("/api/auth/logout")
    async def logout():
        return Response(status_code=204)

    @app.get("/api/restaurant")
    async def list_restaurants():
        return {"data": [FAKE_RESTAURANT]}

    @app.get("/api/restaurant/{restaurant_id}")
    async def get_restaurant(restaurant_id: str):
        if restaurant_id == "garbled":
            return {"data": {"unexpected": True}}
        if restaurant_id != FAKE_RESTAURANT["id"]:
            return JSONResponse({"message": "Restaurant not found"}, status_code=404)
        return {"data": FAKE_RESTAURANT}

    @app.get("/api/restaurant/{restaurant_id}/menu")
    async def get_menu(restaurant_id: str):
        return JSONResponse({"message": "Internal error"}, status_code=500)

    @app.get("/api/cart/{user_id}")
    async def get_cart(user_id: str):
        if user_id == "nobody":
            return JSONResponse({"message": "Cart not found"}, status_code=404)
        item = {
            "id": "A", "restaurantId": "r1", "name": "Item A", "price": 10.0,
        }
        quantity = 120 if user_id == "bulk" else 3
        return {
            "data": {
                "id": "cart-remote",
                "userId": user_id,
                "restaurantId": "r1",
                "items": [{"id": "line-1", "menuItem": item, "quantity": quantity}],
                "totalAmount": 999.0,
            }
        }

    @app.get("/api/order/{order_id}")
    async def get_order(order_id: str):
        if order_id == "missing":
            return JSONResponse({"message": "Order not found"}, status_code=404)
        return JSONResponse({"message": "Token expired"}, status_code=401)

    @app.delete("/api/order/{order_id}")
    async def cancel_order(order_id: str):
        return JSONResponse({"message": "Order cannot be cancelled"}, status_code=400)

    @app.put("/api/order/{order_id}/status")
    async def update_order_status(order_id: str):
        return JSONResponse({"message": "Invalid status transition"}, status_code=409)

    @app.get("/api/inbox/{user_id}/unread-count")
    async def unread_count(user_id: str):
        return {"data": {"count": 7}}

    @app.get("/api/dish-rating/{dish_id}/average")
    async def dish_average(dish_id: str):
        return {"data": {"rating": 3.5, "count": 2}}

    return app


@pytest.fixture
def backend() -> FastAPI:
    return build_fake_backend()


@pytest.fixture
def asgi_transport(backend) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=backend)


@pytest.fixture
def offline_transport() -> httpx.MockTransport:
    """Transport whose every request fails to connect."""

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    return httpx.MockTransport(refuse)
