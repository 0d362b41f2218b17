"""
Remote Cart Service - `/cart` endpoints.

The backend identifies the cart owner from the bearer token for writes;
`userId` is still sent so a shared admin session targets the right cart.
"""

from typing import Optional

from restaurant_client.core.exceptions import RemoteNotFoundError
from restaurant_client.schemas import Cart, CartItemCreate, CartItemUpdate
from restaurant_client.services.base import BaseCartService
from restaurant_client.services.remote.base import RemoteService


class RemoteCartService(RemoteService, BaseCartService):

    entity = "Cart"

    async def get_cart(self, user_id: str) -> Optional[Cart]:
        try:
            data = await self._call("GET", f"/cart/{user_id}")
        except RemoteNotFoundError:
            return None
        return self._parse(Cart, data) if data else None

    async def add_to_cart(self, user_id: str, item: CartItemCreate) -> Cart:
        body = {**item.to_wire(), "userId": user_id}
        data = await self._call("POST", "/cart", json=body)
        return self._parse(Cart, data)

    async def update_cart_item(
        self,
        user_id: str,
        cart_item_id: str,
        updates: CartItemUpdate,
    ) -> Cart:
        body = {
            **updates.model_dump(by_alias=True, mode="json", exclude_unset=True),
            "userId": user_id,
        }
        data = await self._call("PUT", f"/cart/{cart_item_id}", json=body)
        return self._parse(Cart, data)

    async def remove_from_cart(self, user_id: str, cart_item_id: str) -> Cart:
        data = await self._call(
            "DELETE", f"/cart/{cart_item_id}", params={"userId": user_id}
        )
        return self._parse(Cart, data)

    async def clear_cart(self, user_id: str) -> None:
        await self._call("DELETE", "/cart", params={"userId": user_id})
