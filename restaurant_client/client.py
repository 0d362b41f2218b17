"""
Ordering Client

Application root of the data layer. Owns the MockStore, the
TransportGateway and the credential store, and exposes one service per
domain plus the flows that span several of them (login, checkout).

Usage:
    async with create_client() as client:
        await client.login("employee@test.com", "password123")
        cart = await client.carts.add_to_cart(user_id, item)
        order = await client.checkout(user_id)

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
from typing import Callable, Optional

import httpx

from restaurant_client import cart_engine
from restaurant_client.core.config import Settings, get_settings
from restaurant_client.core.exceptions import NotFoundError, ValidationError
from restaurant_client.schemas import (
    AuthState,
    CreateOrderRequest,
    DeliveryType,
    LoginResponse,
    Order,
)
from restaurant_client.services import ServiceSet, build_services
from restaurant_client.services.mock import MockStore
from restaurant_client.services.transport import CredentialStore, TransportGateway

logger = logging.getLogger(__name__)


class OrderingClient:
    """
    Entry point for every data-access operation.

    Attributes:
        settings: Active configuration
        store: MockStore backing fallback and mock-mode calls
        gateway: REST gateway (None until started)
        credentials: Persisted auth state
        services: ServiceSet (None until started)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport
        self._on_unauthorized = on_unauthorized
        self.credentials = CredentialStore(
            self.settings.credentials_path,
            lock_timeout=self.settings.credentials_lock_timeout,
        )
        self.store: Optional[MockStore] = None
        self.gateway: Optional[TransportGateway] = None
        self.services: Optional[ServiceSet] = None

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def start(self) -> "OrderingClient":
        """Build the store, the gateway and the services."""
        if self.services is not None:
            return self

        settings = self.settings
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {settings.app_name}")
        logger.info(f"   Version: {settings.app_version}")
        logger.info(f"   Environment: {settings.env_mode.value}")
        logger.info(f"   Data mode: {settings.data_mode.value}")
        logger.info("=" * 60)

        self.store = MockStore.from_settings(settings)
        logger.info("✅ Mock store ready")

        self.gateway = TransportGateway(
            settings.api_base_url,
            timeout=settings.api_timeout,
            credentials=self.credentials,
            on_unauthorized=self._handle_unauthorized,
            transport=self._transport,
        )
        self.services = build_services(settings.data_mode, self.store, self.gateway)
        logger.info(f"✅ Services: {self.services.restaurants.provider_name}")

        if settings.is_production:
            problems = settings.validate_production_config()
            if problems:
                logger.warning(f"⚠️ Production config issues: {problems}")

        logger.info("✅ Client ready!")
        return self

    async def close(self) -> None:
        """Tear down the gateway and clear the store."""
        logger.info("Shutting down...")
        if self.gateway is not None:
            await self.gateway.close()
        if self.store is not None:
            self.store.close()
        self.gateway = None
        self.store = None
        self.services = None
        logger.info("✅ Cleanup complete")

    async def __aenter__(self) -> "OrderingClient":
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _require_services(self) -> ServiceSet:
        if self.services is None:
            raise RuntimeError("OrderingClient is not started; use 'async with' or start()")
        return self.services

    def _handle_unauthorized(self) -> None:
        logger.warning("Session rejected by API - re-authentication required")
        if self._on_unauthorized is not None:
            self._on_unauthorized()

    # =========================================================================
    # SERVICES
    # =========================================================================

    @property
    def auth(self):
        return self._require_services().auth

    @property
    def restaurants(self):
        return self._require_services().restaurants

    @property
    def carts(self):
        return self._require_services().carts

    @property
    def orders(self):
        return self._require_services().orders

    @property
    def ratings(self):
        return self._require_services().ratings

    @property
    def inbox(self):
        return self._require_services().inbox

    # =========================================================================
    # AUTH
    # =========================================================================

    @property
    def auth_state(self) -> AuthState:
        return self.credentials.state

    async def login(self, email: str, password: str) -> LoginResponse:
        """
        Authenticate and persist `{ user, token, isAuthenticated }`.

        Raises:
            AuthenticationError: credentials rejected
        """
        response = await self.auth.login(email, password)
        self.credentials.store_login(response)
        logger.info(f"Logged in as {response.user.email} ({response.user.role.value})")
        return response

    async def logout(self) -> None:
        """Log out remotely (best effort through the policy) and drop credentials."""
        try:
            await self.auth.logout()
        finally:
            self.credentials.clear()
        logger.info("Logged out")

    # =========================================================================
    # CHECKOUT
    # =========================================================================

    async def checkout(
        self,
        user_id: str,
        delivery_type: DeliveryType = DeliveryType.PICKUP,
        payment_method: Optional[str] = None,
        notes: Optional[str] = None,
        restaurant_name: Optional[str] = None,
        delivery_address: Optional[str] = None,
    ) -> Order:
        """
        Turn the user's cart into an order, then clear the cart.

        The order total is the cart total at checkout time.

        Raises:
            ValidationError: the user has no cart or it is empty
        """
        cart = await self.carts.get_cart(user_id)
        if cart is None or cart.is_empty:
            raise ValidationError(f"Cart for user {user_id} is empty")

        if restaurant_name is None:
            try:
                restaurant = await self.restaurants.get_restaurant(cart.restaurant_id)
                restaurant_name = restaurant.name
            except NotFoundError:
                logger.debug(f"Restaurant {cart.restaurant_id} not found for checkout")

        request = CreateOrderRequest(
            restaurant_id=cart.restaurant_id,
            restaurant_name=restaurant_name,
            items=cart_engine.to_order_items(cart),
            total_amount=cart.total_amount,
            delivery_type=delivery_type,
            delivery_address=delivery_address,
            payment_method=payment_method,
            notes=notes,
        )
        order = await self.orders.create_order(user_id, request)
        await self.carts.clear_cart(user_id)

        logger.info(
            f"Checkout: user {user_id} placed order {order.id} "
            f"for ${order.total_amount:.2f}"
        )
        return order


def create_client(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    on_unauthorized: Optional[Callable[[], None]] = None,
) -> OrderingClient:
    """
    Create an unstarted client; use it as an async context manager.

    Example:
        >>> async with create_client() as client:
        ...     restaurants = await client.restaurants.get_restaurants()
    """
    return OrderingClient(settings, transport=transport, on_unauthorized=on_unauthorized)
