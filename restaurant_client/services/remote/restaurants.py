"""
Remote Restaurant Service - `/restaurant` endpoints (restaurants and menus).
"""

from typing import Optional

from restaurant_client.schemas import (
    MenuItem,
    MenuItemCreate,
    MenuItemUpdate,
    Restaurant,
    RestaurantCreate,
    RestaurantUpdate,
)
from restaurant_client.services.base import BaseRestaurantService
from restaurant_client.services.remote.base import RemoteService


class RemoteRestaurantService(RemoteService, BaseRestaurantService):

    entity = "Restaurant"

    async def get_restaurants(
        self,
        search: Optional[str] = None,
        cuisine: Optional[str] = None,
    ) -> list[Restaurant]:
        data = await self._call(
            "GET", "/restaurant", params={"search": search, "cuisine": cuisine}
        )
        return self._parse_list(Restaurant, data)

    async def get_restaurant(self, restaurant_id: str) -> Restaurant:
        data = await self._call("GET", f"/restaurant/{restaurant_id}")
        return self._parse(Restaurant, data)

    async def get_menu(self, restaurant_id: str) -> list[MenuItem]:
        data = await self._call("GET", f"/restaurant/{restaurant_id}/menu")
        return self._parse_list(MenuItem, data)

    async def get_menu_item(self, restaurant_id: str, item_id: str) -> MenuItem:
        data = await self._call("GET", f"/restaurant/{restaurant_id}/menu/{item_id}")
        return self._parse(MenuItem, data)

    async def create_restaurant(self, data: RestaurantCreate) -> Restaurant:
        payload = await self._call("POST", "/restaurant", json=data.to_wire())
        return self._parse(Restaurant, payload)

    async def update_restaurant(
        self,
        restaurant_id: str,
        data: RestaurantUpdate,
    ) -> Restaurant:
        payload = await self._call(
            "PUT",
            f"/restaurant/{restaurant_id}",
            json=data.model_dump(by_alias=True, mode="json", exclude_unset=True),
        )
        return self._parse(Restaurant, payload)

    async def delete_restaurant(self, restaurant_id: str) -> None:
        await self._call("DELETE", f"/restaurant/{restaurant_id}")

    async def create_menu_item(
        self,
        restaurant_id: str,
        data: MenuItemCreate,
    ) -> MenuItem:
        payload = await self._call(
            "POST", f"/restaurant/{restaurant_id}/menu", json=data.to_wire()
        )
        return self._parse(MenuItem, payload)

    async def update_menu_item(
        self,
        restaurant_id: str,
        item_id: str,
        data: MenuItemUpdate,
    ) -> MenuItem:
        payload = await self._call(
            "PUT",
            f"/restaurant/{restaurant_id}/menu/{item_id}",
            json=data.model_dump(by_alias=True, mode="json", exclude_unset=True),
        )
        return self._parse(MenuItem, payload)

    async def delete_menu_item(self, restaurant_id: str, item_id: str) -> None:
        await self._call("DELETE", f"/restaurant/{restaurant_id}/menu/{item_id}")
