import pytest

from restaurant_client import create_client
from restaurant_client.core.config import DataMode
from restaurant_client.core.exceptions import (
    AuthenticationError,
    InvalidTransitionError,
    ValidationError,
)
from restaurant_client.schemas import (
    CartItemCreate,
    MenuItemCreate,
    OrderStatus,
    PaymentStatus,
    RestaurantCreate,
)


@pytest.mark.anyio
async def test_cart_to_paid_order_scenario(anyio_backend, settings):
    async with create_client(settings) as client:
        restaurant = await client.restaurants.create_restaurant(
            RestaurantCreate(name="Scenario Diner", cuisine="Diner")
        )
        item_a = await client.restaurants.create_menu_item(
            restaurant.id, MenuItemCreate(name="Item A", price=10)
        )
        item_b = await client.restaurants.create_menu_item(
            restaurant.id, MenuItemCreate(name="Item B", price=5)
        )

        await client.carts.add_to_cart("u1", CartItemCreate(menu_item=item_a, quantity=2))
        cart = await client.carts.add_to_cart("u1", CartItemCreate(menu_item=item_b, quantity=1))
        assert cart.total_amount == 25

        order = await client.checkout("u1", payment_method="card")
        assert order.total_amount == 25
        assert order.status == OrderStatus.PENDING
        assert order.payment_status == PaymentStatus.PENDING
        assert order.restaurant_name == "Scenario Diner"
        assert await client.carts.get_cart("u1") is None

        paid = await client.orders.update_payment_status(order.id, PaymentStatus.PAID)
        assert paid.payment_status == PaymentStatus.PAID
        assert paid.status == OrderStatus.PENDING

        cancelled = await client.orders.cancel_order(order.id)
        assert cancelled.status == OrderStatus.CANCELLED
        assert cancelled.payment_status == PaymentStatus.PAID

        with pytest.raises(InvalidTransitionError):
            await client.orders.update_order_status(order.id, OrderStatus.CONFIRMED)


@pytest.mark.anyio
async def test_checkout_with_empty_cart(anyio_backend, settings):
    async with create_client(settings) as client:
        with pytest.raises(ValidationError):
            await client.checkout("nobody")


@pytest.mark.anyio
async def test_login_persists_auth_state(anyio_backend, settings_factory, tmp_path):
    path = tmp_path / "credentials.json"
    settings = settings_factory(credentials_path=str(path))

    async with create_client(settings) as client:
        with pytest.raises(AuthenticationError):
            await client.login("employee@test.com", "wrong")

        response = await client.login("employee@test.com", "password123")
        assert client.auth_state.is_authenticated
        assert client.auth_state.user.id == response.user.id
        assert path.exists()

        await client.logout()
        assert client.auth_state.is_authenticated is False
        assert client.credentials.token is None


@pytest.mark.anyio
async def test_fallback_client_survives_offline_api(anyio_backend, settings_factory,
                                                    offline_transport):
    settings = settings_factory(data_mode=DataMode.FALLBACK)

    async with create_client(settings, transport=offline_transport) as client:
        restaurants = await client.restaurants.get_restaurants(search="sushi")
        assert [r.name for r in restaurants] == ["Sushi Zen"]
        assert client.restaurants.provider_name == "resilient:fallback"


@pytest.mark.anyio
async def test_client_requires_start(settings):
    client = create_client(settings)
    with pytest.raises(RuntimeError):
        client.carts
