"""
Mock Order Service

Orders table of the MockStore. Status and payment changes go through the
Order Lifecycle Manager; creation trusts the caller's checkout total unless
total verification is switched on.
"""

import logging
from typing import Optional

from restaurant_client import order_lifecycle
from restaurant_client.core.exceptions import NotFoundError
from restaurant_client.schemas import (
    CreateOrderRequest,
    Order,
    OrderStatus,
    PaymentStatus,
)
from restaurant_client.services.base import BaseOrderService
from restaurant_client.services.mock.base import MockTable

logger = logging.getLogger(__name__)


def _newest_first(orders: list[Order]) -> list[Order]:
    return sorted(orders, key=lambda o: o.order_date, reverse=True)


class MockOrderService(MockTable, BaseOrderService):
    """In-memory orders keyed by order id."""

    def __init__(
        self,
        min_latency: float = 0.1,
        max_latency: float = 0.4,
        verify_totals: bool = False,
    ):
        super().__init__(min_latency, max_latency)
        self.verify_totals = verify_totals
        self._orders: dict[str, Order] = {}

    def load(self, orders: list[Order]) -> None:
        for order in orders:
            self._orders[order.id] = self._copy(order)

    def reset(self) -> None:
        self._orders.clear()

    def _require_order(self, order_id: str) -> Order:
        order = self._orders.get(order_id)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    # =========================================================================
    # CREATION & READS
    # =========================================================================

    async def create_order(self, user_id: str, request: CreateOrderRequest) -> Order:
        await self._simulate_latency()

        order = order_lifecycle.new_order(
            user_id,
            request,
            verify_total=self.verify_totals,
            order_id=self._new_id("order"),
        )
        self._orders[order.id] = order

        logger.info(
            f"Mock: Created order {order.id} for user {user_id} - "
            f"${order.total_amount:.2f} ({len(order.items)} line(s))"
        )
        return self._copy(order)

    async def get_order(self, order_id: str) -> Order:
        await self._simulate_latency()
        return self._copy(self._require_order(order_id))

    async def get_ongoing_orders(self, user_id: str) -> list[Order]:
        await self._simulate_latency()
        orders = [
            o for o in self._orders.values()
            if o.user_id == user_id and order_lifecycle.is_ongoing(o)
        ]
        return self._copy_all(_newest_first(orders))

    async def get_order_history(self, user_id: str) -> list[Order]:
        await self._simulate_latency()
        orders = [
            o for o in self._orders.values()
            if o.user_id == user_id and not order_lifecycle.is_ongoing(o)
        ]
        return self._copy_all(_newest_first(orders))

    async def get_all_orders(
        self,
        status: Optional[OrderStatus] = None,
        user_id: Optional[str] = None,
        restaurant_id: Optional[str] = None,
        payment_status: Optional[PaymentStatus] = None,
    ) -> list[Order]:
        await self._simulate_latency()

        orders = list(self._orders.values())
        if status is not None:
            orders = [o for o in orders if o.status == status]
        if user_id is not None:
            orders = [o for o in orders if o.user_id == user_id]
        if restaurant_id is not None:
            orders = [o for o in orders if o.restaurant_id == restaurant_id]
        if payment_status is not None:
            orders = [o for o in orders if o.payment_status == payment_status]

        return self._copy_all(_newest_first(orders))

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    async def cancel_order(self, order_id: str) -> Order:
        async with self._locks.hold(order_id):
            await self._simulate_latency()
            order = self._require_order(order_id)
            order_lifecycle.cancel(order)
            return self._copy(order)

    async def update_order_status(self, order_id: str, status: OrderStatus) -> Order:
        async with self._locks.hold(order_id):
            await self._simulate_latency()
            order = self._require_order(order_id)
            order_lifecycle.transition_status(order, status)
            return self._copy(order)

    async def update_payment_status(
        self,
        order_id: str,
        payment_status: PaymentStatus,
    ) -> Order:
        async with self._locks.hold(order_id):
            await self._simulate_latency()
            order = self._require_order(order_id)
            order_lifecycle.transition_payment(order, payment_status)
            return self._copy(order)
