"""
Data Service Abstract Base Classes

Defines the interface contract for every data-access service.
Each domain has three implementations that must honor the same contract:

    - Mock*Service: in-memory tables of the MockStore (simulated latency)
    - Remote*Service: REST calls through the TransportGateway
    - Resilient*Service: tries Remote, falls back to Mock per DataMode

Design Pattern: Strategy Pattern
    - Callers never know which implementation answered
    - Switching data modes needs no caller changes
    - Mocks make every flow testable offline

Author: Khalil Bannouri
Version: 1.0.0
"""

from abc import ABC, abstractmethod
from typing import Optional

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


class DataService(ABC):
    """Common surface of every data service."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the name of the data provider.

        Returns:
            str: "mock", "remote" or "resilient"
        """
        pass


# =============================================================================
# AUTH
# =============================================================================

class BaseAuthService(DataService):

    @abstractmethod
    async def login(self, email: str, password: str) -> LoginResponse:
        """
        Authenticate a user.

        Raises:
            AuthenticationError: unknown email or wrong password
        """
        pass

    @abstractmethod
    async def logout(self) -> None:
        """End the current session."""
        pass


# =============================================================================
# RESTAURANTS & MENU
# =============================================================================

class BaseRestaurantService(DataService):

    @abstractmethod
    async def get_restaurants(
        self,
        search: Optional[str] = None,
        cuisine: Optional[str] = None,
    ) -> list[Restaurant]:
        """
        List restaurants.

        Args:
            search: Case-insensitive match on name, cuisine or description
            cuisine: Exact (case-insensitive) cuisine; "all" disables it
        """
        pass

    @abstractmethod
    async def get_restaurant(self, restaurant_id: str) -> Restaurant:
        pass

    @abstractmethod
    async def get_menu(self, restaurant_id: str) -> list[MenuItem]:
        pass

    @abstractmethod
    async def get_menu_item(self, restaurant_id: str, item_id: str) -> MenuItem:
        pass

    @abstractmethod
    async def create_restaurant(self, data: RestaurantCreate) -> Restaurant:
        pass

    @abstractmethod
    async def update_restaurant(
        self,
        restaurant_id: str,
        data: RestaurantUpdate,
    ) -> Restaurant:
        pass

    @abstractmethod
    async def delete_restaurant(self, restaurant_id: str) -> None:
        """Delete a restaurant together with the menu it owns."""
        pass

    @abstractmethod
    async def create_menu_item(
        self,
        restaurant_id: str,
        data: MenuItemCreate,
    ) -> MenuItem:
        pass

    @abstractmethod
    async def update_menu_item(
        self,
        restaurant_id: str,
        item_id: str,
        data: MenuItemUpdate,
    ) -> MenuItem:
        pass

    @abstractmethod
    async def delete_menu_item(self, restaurant_id: str, item_id: str) -> None:
        pass


# =============================================================================
# CART
# =============================================================================

class BaseCartService(DataService):

    @abstractmethod
    async def get_cart(self, user_id: str) -> Optional[Cart]:
        """Return the user's cart, or None if they have none."""
        pass

    @abstractmethod
    async def add_to_cart(self, user_id: str, item: CartItemCreate) -> Cart:
        """
        Add a line, merging it with an identical line when one exists.

        Creates the cart (bound to the item's restaurant) on first use.
        """
        pass

    @abstractmethod
    async def update_cart_item(
        self,
        user_id: str,
        cart_item_id: str,
        updates: CartItemUpdate,
    ) -> Cart:
        pass

    @abstractmethod
    async def remove_from_cart(self, user_id: str, cart_item_id: str) -> Cart:
        """Remove a line; the cart stays even when it becomes empty."""
        pass

    @abstractmethod
    async def clear_cart(self, user_id: str) -> None:
        """Delete the cart entity."""
        pass


# =============================================================================
# ORDERS
# =============================================================================

class BaseOrderService(DataService):

    @abstractmethod
    async def create_order(self, user_id: str, request: CreateOrderRequest) -> Order:
        """Place an order; it always starts pending / payment pending."""
        pass

    @abstractmethod
    async def get_order(self, order_id: str) -> Order:
        pass

    @abstractmethod
    async def get_ongoing_orders(self, user_id: str) -> list[Order]:
        """Orders that have not reached a terminal status."""
        pass

    @abstractmethod
    async def get_order_history(self, user_id: str) -> list[Order]:
        """Completed and cancelled orders, newest first."""
        pass

    @abstractmethod
    async def get_all_orders(
        self,
        status: Optional[OrderStatus] = None,
        user_id: Optional[str] = None,
        restaurant_id: Optional[str] = None,
        payment_status: Optional[PaymentStatus] = None,
    ) -> list[Order]:
        """Admin listing, newest first."""
        pass

    @abstractmethod
    async def cancel_order(self, order_id: str) -> Order:
        pass

    @abstractmethod
    async def update_order_status(self, order_id: str, status: OrderStatus) -> Order:
        pass

    @abstractmethod
    async def update_payment_status(
        self,
        order_id: str,
        payment_status: PaymentStatus,
    ) -> Order:
        pass


# =============================================================================
# RATINGS
# =============================================================================

class BaseRatingService(DataService):

    @abstractmethod
    async def get_restaurant_ratings(self, restaurant_id: str) -> list[RestaurantRating]:
        pass

    @abstractmethod
    async def create_restaurant_rating(
        self,
        user_id: str,
        request: CreateRestaurantRatingRequest,
    ) -> RestaurantRating:
        pass

    @abstractmethod
    async def update_rating(
        self,
        rating_id: str,
        request: UpdateRestaurantRatingRequest,
    ) -> RestaurantRating:
        pass

    @abstractmethod
    async def delete_rating(self, rating_id: str) -> None:
        pass

    @abstractmethod
    async def get_restaurant_rating_summary(self, restaurant_id: str) -> RatingSummary:
        pass

    @abstractmethod
    async def get_dish_ratings(self, dish_id: str) -> list[DishRating]:
        pass

    @abstractmethod
    async def create_dish_rating(
        self,
        user_id: str,
        request: CreateDishRatingRequest,
    ) -> DishRating:
        pass

    @abstractmethod
    async def update_dish_rating(
        self,
        rating_id: str,
        request: UpdateDishRatingRequest,
    ) -> DishRating:
        pass

    @abstractmethod
    async def delete_dish_rating(self, rating_id: str) -> None:
        pass

    @abstractmethod
    async def get_dish_average_rating(self, dish_id: str) -> DishAverage:
        pass


# =============================================================================
# INBOX
# =============================================================================

class BaseInboxService(DataService):

    @abstractmethod
    async def get_messages(self, user_id: str) -> list[InboxMessage]:
        """Recipient's messages, newest first."""
        pass

    @abstractmethod
    async def mark_as_read(self, message_id: str) -> InboxMessage:
        pass

    @abstractmethod
    async def mark_all_as_read(self, user_id: str) -> None:
        pass

    @abstractmethod
    async def delete_message(self, message_id: str) -> None:
        pass

    @abstractmethod
    async def get_unread_count(self, user_id: str) -> int:
        pass

    @abstractmethod
    async def send_to_all_employees(
        self,
        title: str,
        message: str,
        message_type: MessageType = MessageType.INFO,
    ) -> int:
        """
        Deliver one message to every employee.

        Returns:
            int: Number of recipients reached
        """
        pass

    @abstractmethod
    async def send_to_employee(
        self,
        employee_id: str,
        title: str,
        message: str,
        message_type: MessageType = MessageType.INFO,
    ) -> InboxMessage:
        pass
