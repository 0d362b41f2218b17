"""
Resilience Policy

Every public data-access operation goes through `with_fallback`, which
decides per DataMode whether the REST API, the MockStore, or the API with
the MockStore as a safety net answers the call.

    FALLBACK: try remote; on TransportError log a warning and use the mock
    STRICT:   remote only; TransportError reaches the caller
    MOCK:     mock only; no network traffic at all

Only TransportError is absorbed. NotFoundError, InvalidTransitionError,
ValidationError and AuthenticationError always propagate.

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from restaurant_client import broadcaster, cart_engine
from restaurant_client.core.config import DataMode
from restaurant_client.core.exceptions import TransportError
from restaurant_client.schemas import (
    Cart,
    CartItemCreate,
    CartItemUpdate,
    CreateDishRatingRequest,
    CreateOrderRequest,
    CreateRestaurantRatingRequest,
    DishAverage,
    DishRating,
    InboxMessage,
    LoginResponse,
    MenuItem,
    MenuItemCreate,
    MenuItemUpdate,
    MessageType,
    Order,
    OrderStatus,
    PaymentStatus,
    RatingSummary,
    Restaurant,
    RestaurantCreate,
    RestaurantRating,
    RestaurantUpdate,
    UpdateDishRatingRequest,
    UpdateRestaurantRatingRequest,
)
from restaurant_client.services.base import (
    BaseAuthService,
    BaseCartService,
    BaseInboxService,
    BaseOrderService,
    BaseRatingService,
    BaseRestaurantService,
    DataService,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_fallback(
    remote_call: Callable[[], Awaitable[T]],
    fallback_call: Callable[[], Awaitable[T]],
    mode: DataMode = DataMode.FALLBACK,
    operation: str = "request",
) -> T:
    """
    Run one operation under the configured data mode.

    Args:
        remote_call: Zero-argument coroutine factory hitting the API
        fallback_call: Zero-argument coroutine factory hitting the mock store
        mode: Active DataMode
        operation: Name used in log lines

    Raises:
        TransportError: remote failed and mode is STRICT
    """
    if mode == DataMode.MOCK:
        return await fallback_call()

    try:
        return await remote_call()
    except TransportError as exc:
        if mode == DataMode.STRICT:
            logger.error(f"{operation} failed against API: {exc}")
            raise
        logger.warning(f"{operation}: API unavailable ({exc}), serving from mock store")
        return await fallback_call()


class ResilientService(DataService):
    """
    Routes each call to `remote` and/or `fallback` per `mode`.

    Attributes:
        remote: REST implementation of the same contract
        fallback: MockStore table of the same contract
        mode: Active DataMode
    """

    def __init__(self, remote: DataService, fallback: DataService, mode: DataMode):
        self.remote = remote
        self.fallback = fallback
        self.mode = mode

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return f"resilient:{self.mode.value}"

    async def _dispatch(self, operation: str, *args: Any, **kwargs: Any) -> Any:
        return await with_fallback(
            lambda: getattr(self.remote, operation)(*args, **kwargs),
            lambda: getattr(self.fallback, operation)(*args, **kwargs),
            self.mode,
            operation,
        )


class ResilientAuthService(ResilientService, BaseAuthService):

    async def login(self, email: str, password: str) -> LoginResponse:
        return await self._dispatch("login", email, password)

    async def logout(self) -> None:
        await self._dispatch("logout")


class ResilientRestaurantService(ResilientService, BaseRestaurantService):

    async def get_restaurants(
        self,
        search: Optional[str] = None,
        cuisine: Optional[str] = None,
    ) -> list[Restaurant]:
        return await self._dispatch("get_restaurants", search, cuisine)

    async def get_restaurant(self, restaurant_id: str) -> Restaurant:
        return await self._dispatch("get_restaurant", restaurant_id)

    async def get_menu(self, restaurant_id: str) -> list[MenuItem]:
        return await self._dispatch("get_menu", restaurant_id)

    async def get_menu_item(self, restaurant_id: str, item_id: str) -> MenuItem:
        return await self._dispatch("get_menu_item", restaurant_id, item_id)

    async def create_restaurant(self, data: RestaurantCreate) -> Restaurant:
        return await self._dispatch("create_restaurant", data)

    async def update_restaurant(
        self,
        restaurant_id: str,
        data: RestaurantUpdate,
    ) -> Restaurant:
        return await self._dispatch("update_restaurant", restaurant_id, data)

    async def delete_restaurant(self, restaurant_id: str) -> None:
        await self._dispatch("delete_restaurant", restaurant_id)

    async def create_menu_item(
        self,
        restaurant_id: str,
        data: MenuItemCreate,
    ) -> MenuItem:
        return await self._dispatch("create_menu_item", restaurant_id, data)

    async def update_menu_item(
        self,
        restaurant_id: str,
        item_id: str,
        data: MenuItemUpdate,
    ) -> MenuItem:
        return await self._dispatch("update_menu_item", restaurant_id, item_id, data)

    async def delete_menu_item(self, restaurant_id: str, item_id: str) -> None:
        await self._dispatch("delete_menu_item", restaurant_id, item_id)


class ResilientCartService(ResilientService, BaseCartService):
    """Cart totals are recomputed here whichever side answered."""

    @staticmethod
    def _settle(cart: Optional[Cart]) -> Optional[Cart]:
        return cart_engine.recompute_total(cart) if cart is not None else None

    async def get_cart(self, user_id: str) -> Optional[Cart]:
        return self._settle(await self._dispatch("get_cart", user_id))

    async def add_to_cart(self, user_id: str, item: CartItemCreate) -> Cart:
        return self._settle(await self._dispatch("add_to_cart", user_id, item))

    async def update_cart_item(
        self,
        user_id: str,
        cart_item_id: str,
        updates: CartItemUpdate,
    ) -> Cart:
        return self._settle(
            await self._dispatch("update_cart_item", user_id, cart_item_id, updates)
        )

    async def remove_from_cart(self, user_id: str, cart_item_id: str) -> Cart:
        return self._settle(
            await self._dispatch("remove_from_cart", user_id, cart_item_id)
        )

    async def clear_cart(self, user_id: str) -> None:
        await self._dispatch("clear_cart", user_id)


class ResilientOrderService(ResilientService, BaseOrderService):

    async def create_order(self, user_id: str, request: CreateOrderRequest) -> Order:
        return await self._dispatch("create_order", user_id, request)

    async def get_order(self, order_id: str) -> Order:
        return await self._dispatch("get_order", order_id)

    async def get_ongoing_orders(self, user_id: str) -> list[Order]:
        return await self._dispatch("get_ongoing_orders", user_id)

    async def get_order_history(self, user_id: str) -> list[Order]:
        return await self._dispatch("get_order_history", user_id)

    async def get_all_orders(
        self,
        status: Optional[OrderStatus] = None,
        user_id: Optional[str] = None,
        restaurant_id: Optional[str] = None,
        payment_status: Optional[PaymentStatus] = None,
    ) -> list[Order]:
        return await self._dispatch(
            "get_all_orders",
            status=status,
            user_id=user_id,
            restaurant_id=restaurant_id,
            payment_status=payment_status,
        )

    async def cancel_order(self, order_id: str) -> Order:
        return await self._dispatch("cancel_order", order_id)

    async def update_order_status(self, order_id: str, status: OrderStatus) -> Order:
        return await self._dispatch("update_order_status", order_id, status)

    async def update_payment_status(
        self,
        order_id: str,
        payment_status: PaymentStatus,
    ) -> Order:
        return await self._dispatch("update_payment_status", order_id, payment_status)


class ResilientRatingService(ResilientService, BaseRatingService):

    async def get_restaurant_ratings(self, restaurant_id: str) -> list[RestaurantRating]:
        return await self._dispatch("get_restaurant_ratings", restaurant_id)

    async def create_restaurant_rating(
        self,
        user_id: str,
        request: CreateRestaurantRatingRequest,
    ) -> RestaurantRating:
        return await self._dispatch("create_restaurant_rating", user_id, request)

    async def update_rating(
        self,
        rating_id: str,
        request: UpdateRestaurantRatingRequest,
    ) -> RestaurantRating:
        return await self._dispatch("update_rating", rating_id, request)

    async def delete_rating(self, rating_id: str) -> None:
        await self._dispatch("delete_rating", rating_id)

    async def get_restaurant_rating_summary(self, restaurant_id: str) -> RatingSummary:
        return await self._dispatch("get_restaurant_rating_summary", restaurant_id)

    async def get_dish_ratings(self, dish_id: str) -> list[DishRating]:
        return await self._dispatch("get_dish_ratings", dish_id)

    async def create_dish_rating(
        self,
        user_id: str,
        request: CreateDishRatingRequest,
    ) -> DishRating:
        return await self._dispatch("create_dish_rating", user_id, request)

    async def update_dish_rating(
        self,
        rating_id: str,
        request: UpdateDishRatingRequest,
    ) -> DishRating:
        return await self._dispatch("update_dish_rating", rating_id, request)

    async def delete_dish_rating(self, rating_id: str) -> None:
        await self._dispatch("delete_dish_rating", rating_id)

    async def get_dish_average_rating(self, dish_id: str) -> DishAverage:
        return await self._dispatch("get_dish_average_rating", dish_id)


class ResilientInboxService(ResilientService, BaseInboxService):
    """Notifications are validated before either side sees them."""

    async def get_messages(self, user_id: str) -> list[InboxMessage]:
        return await self._dispatch("get_messages", user_id)

    async def mark_as_read(self, message_id: str) -> InboxMessage:
        return await self._dispatch("mark_as_read", message_id)

    async def mark_all_as_read(self, user_id: str) -> None:
        await self._dispatch("mark_all_as_read", user_id)

    async def delete_message(self, message_id: str) -> None:
        await self._dispatch("delete_message", message_id)

    async def get_unread_count(self, user_id: str) -> int:
        return await self._dispatch("get_unread_count", user_id)

    async def send_to_all_employees(
        self,
        title: str,
        message: str,
        message_type: MessageType = MessageType.INFO,
    ) -> int:
        title, message = broadcaster.validate_notification(title, message)
        return await self._dispatch("send_to_all_employees", title, message, message_type)

    async def send_to_employee(
        self,
        employee_id: str,
        title: str,
        message: str,
        message_type: MessageType = MessageType.INFO,
    ) -> InboxMessage:
        title, message = broadcaster.validate_notification(title, message)
        return await self._dispatch(
            "send_to_employee", employee_id, title, message, message_type
        )
