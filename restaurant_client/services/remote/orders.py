"""
Remote Order Service - `/order` endpoints.

Transition rules are enforced by the backend; a refusal (400/409) comes
back as RemoteTransitionError.
"""

from typing import Optional

from restaurant_client.schemas import (
    CreateOrderRequest,
    Order,
    OrderStatus,
    PaymentStatus,
)
from restaurant_client.services.base import BaseOrderService
from restaurant_client.services.remote.base import RemoteService


def _value(enum_member):
    return enum_member.value if enum_member is not None else None


class RemoteOrderService(RemoteService, BaseOrderService):

    entity = "Order"

    async def create_order(self, user_id: str, request: CreateOrderRequest) -> Order:
        body = {**request.to_wire(), "userId": user_id}
        data = await self._call("POST", "/order", json=body)
        return self._parse(Order, data)

    async def get_order(self, order_id: str) -> Order:
        data = await self._call("GET", f"/order/{order_id}")
        return self._parse(Order, data)

    async def get_ongoing_orders(self, user_id: str) -> list[Order]:
        data = await self._call("GET", "/order/ongoing", params={"userId": user_id})
        return self._parse_list(Order, data)

    async def get_order_history(self, user_id: str) -> list[Order]:
        data = await self._call("GET", "/order/history", params={"userId": user_id})
        return self._parse_list(Order, data)

    async def get_all_orders(
        self,
        status: Optional[OrderStatus] = None,
        user_id: Optional[str] = None,
        restaurant_id: Optional[str] = None,
        payment_status: Optional[PaymentStatus] = None,
    ) -> list[Order]:
        data = await self._call(
            "GET",
            "/order/admin/all",
            params={
                "status": _value(status),
                "userId": user_id,
                "restaurantId": restaurant_id,
                "paymentStatus": _value(payment_status),
            },
        )
        return self._parse_list(Order, data)

    async def cancel_order(self, order_id: str) -> Order:
        data = await self._call(
            "DELETE", f"/order/{order_id}", transition=OrderStatus.CANCELLED.value
        )
        if not data:
            # 204 carries no body; read the cancelled order back
            data = await self._call("GET", f"/order/{order_id}")
        return self._parse(Order, data)

    async def update_order_status(self, order_id: str, status: OrderStatus) -> Order:
        data = await self._call(
            "PUT", f"/order/{order_id}/status", json={"status": status.value},
            transition=status.value,
        )
        return self._parse(Order, data)

    async def update_payment_status(
        self,
        order_id: str,
        payment_status: PaymentStatus,
    ) -> Order:
        data = await self._call(
            "PUT",
            f"/order/{order_id}/payment",
            json={"paymentStatus": payment_status.value},
            transition=payment_status.value,
        )
        return self._parse(Order, data)
