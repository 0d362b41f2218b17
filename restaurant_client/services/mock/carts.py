"""
Mock Cart Service

Carts table of the MockStore, one cart per user.

Every mutation runs under the owning user's lock, so two concurrent
add_to_cart calls for the same user can never read the same cart state and
overwrite each other's result.
"""

import logging
from typing import Optional

from restaurant_client import cart_engine
from restaurant_client.core.exceptions import NotFoundError
from restaurant_client.schemas import Cart, CartItemCreate, CartItemUpdate
from restaurant_client.services.base import BaseCartService
from restaurant_client.services.mock.base import MockTable

logger = logging.getLogger(__name__)


class MockCartService(MockTable, BaseCartService):
    """In-memory carts keyed by user id."""

    def __init__(self, min_latency: float = 0.1, max_latency: float = 0.4):
        super().__init__(min_latency, max_latency)
        self._carts: dict[str, Cart] = {}

    def reset(self) -> None:
        self._carts.clear()

    def _require_cart(self, user_id: str) -> Cart:
        cart = self._carts.get(user_id)
        if cart is None:
            raise NotFoundError("Cart", user_id)
        return cart

    def _snapshot(self, cart: Cart) -> Cart:
        cart_engine.recompute_total(cart)
        return self._copy(cart)

    async def get_cart(self, user_id: str) -> Optional[Cart]:
        await self._simulate_latency()
        cart = self._carts.get(user_id)
        return self._snapshot(cart) if cart else None

    async def add_to_cart(self, user_id: str, item: CartItemCreate) -> Cart:
        async with self._locks.hold(user_id):
            await self._simulate_latency()

            cart = self._carts.get(user_id)
            cart_engine.ensure_addable(cart, item.menu_item)

            if cart is None:
                cart = Cart(
                    id=self._new_id("cart"),
                    user_id=user_id,
                    restaurant_id=item.menu_item.restaurant_id,
                )
                self._carts[user_id] = cart
                logger.info(f"Mock: Created cart {cart.id} for user {user_id}")

            line = cart_engine.merge_item(
                cart, item, id_factory=lambda: self._new_id("cart_item")
            )
            logger.debug(
                f"Mock: Cart {cart.id} line {line.id} now x{line.quantity}, "
                f"total ${cart.total_amount:.2f}"
            )
            return self._snapshot(cart)

    async def update_cart_item(
        self,
        user_id: str,
        cart_item_id: str,
        updates: CartItemUpdate,
    ) -> Cart:
        async with self._locks.hold(user_id):
            await self._simulate_latency()

            cart = self._require_cart(user_id)
            line = cart_engine.find_item(cart, cart_item_id)
            if line is None:
                raise NotFoundError("Cart item", cart_item_id)

            cart_engine.apply_update(cart, line, updates)
            return self._snapshot(cart)

    async def remove_from_cart(self, user_id: str, cart_item_id: str) -> Cart:
        async with self._locks.hold(user_id):
            await self._simulate_latency()

            cart = self._require_cart(user_id)
            line = cart_engine.find_item(cart, cart_item_id)
            if line is None:
                raise NotFoundError("Cart item", cart_item_id)

            cart.items.remove(line)
            return self._snapshot(cart)

    async def clear_cart(self, user_id: str) -> None:
        async with self._locks.hold(user_id):
            await self._simulate_latency()

            if self._carts.pop(user_id, None) is not None:
                logger.info(f"Mock: Cleared cart for user {user_id}")
