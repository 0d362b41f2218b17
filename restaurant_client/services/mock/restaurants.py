"""
Mock Restaurant Service

Restaurants + menu table of the MockStore. Menu items are owned by their
restaurant: deleting a restaurant drops its menu too.
"""

import logging
from typing import Optional

from restaurant_client.core.exceptions import NotFoundError
from restaurant_client.schemas import (
    MenuItem,
    MenuItemCreate,
    MenuItemUpdate,
    Restaurant,
    RestaurantCreate,
    RestaurantUpdate,
    utcnow,
)
from restaurant_client.services.base import BaseRestaurantService
from restaurant_client.services.mock.base import MockTable

logger = logging.getLogger(__name__)


class MockRestaurantService(MockTable, BaseRestaurantService):
    """In-memory restaurants and their menus."""

    def __init__(self, min_latency: float = 0.1, max_latency: float = 0.4):
        super().__init__(min_latency, max_latency)
        self._restaurants: dict[str, Restaurant] = {}
        self._menus: dict[str, list[MenuItem]] = {}

    def load(
        self,
        restaurants: list[Restaurant],
        menus: dict[str, list[MenuItem]],
    ) -> None:
        for restaurant in restaurants:
            self._restaurants[restaurant.id] = self._copy(restaurant)
            self._menus.setdefault(restaurant.id, [])
        for restaurant_id, items in menus.items():
            self._menus[restaurant_id] = self._copy_all(items)

    def reset(self) -> None:
        self._restaurants.clear()
        self._menus.clear()

    def _require_restaurant(self, restaurant_id: str) -> Restaurant:
        restaurant = self._restaurants.get(restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant", restaurant_id)
        return restaurant

    def _find_menu_item(self, restaurant_id: str, item_id: str) -> Optional[MenuItem]:
        for item in self._menus.get(restaurant_id, []):
            if item.id == item_id:
                return item
        return None

    # =========================================================================
    # READS
    # =========================================================================

    async def get_restaurants(
        self,
        search: Optional[str] = None,
        cuisine: Optional[str] = None,
    ) -> list[Restaurant]:
        await self._simulate_latency()

        restaurants = list(self._restaurants.values())

        if search:
            needle = search.lower()
            restaurants = [
                r for r in restaurants
                if needle in r.name.lower()
                or (r.cuisine and needle in r.cuisine.lower())
                or needle in r.description.lower()
            ]

        if cuisine and cuisine.lower() != "all":
            restaurants = [
                r for r in restaurants
                if r.cuisine and r.cuisine.lower() == cuisine.lower()
            ]

        return self._copy_all(restaurants)

    async def get_restaurant(self, restaurant_id: str) -> Restaurant:
        await self._simulate_latency()
        return self._copy(self._require_restaurant(restaurant_id))

    async def get_menu(self, restaurant_id: str) -> list[MenuItem]:
        await self._simulate_latency()
        return self._copy_all(self._menus.get(restaurant_id, []))

    async def get_menu_item(self, restaurant_id: str, item_id: str) -> MenuItem:
        await self._simulate_latency()
        item = self._find_menu_item(restaurant_id, item_id)
        if item is None:
            raise NotFoundError("Menu item", item_id)
        return self._copy(item)

    # =========================================================================
    # ADMIN WRITES
    # =========================================================================

    async def create_restaurant(self, data: RestaurantCreate) -> Restaurant:
        await self._simulate_latency()

        now = utcnow()
        restaurant = Restaurant(
            **data.model_dump(),
            id=self._new_id("restaurant"),
            created_at=now,
            updated_at=now,
        )
        self._restaurants[restaurant.id] = restaurant
        self._menus[restaurant.id] = []

        logger.info(f"Mock: Created restaurant {restaurant.id} ({restaurant.name})")
        return self._copy(restaurant)

    async def update_restaurant(
        self,
        restaurant_id: str,
        data: RestaurantUpdate,
    ) -> Restaurant:
        async with self._locks.hold(restaurant_id):
            await self._simulate_latency()

            current = self._require_restaurant(restaurant_id)
            merged = {
                **current.model_dump(),
                **data.model_dump(exclude_unset=True),
                "updated_at": utcnow(),
            }
            self._restaurants[restaurant_id] = Restaurant.model_validate(merged)

            logger.info(f"Mock: Updated restaurant {restaurant_id}")
            return self._copy(self._restaurants[restaurant_id])

    async def delete_restaurant(self, restaurant_id: str) -> None:
        async with self._locks.hold(restaurant_id):
            await self._simulate_latency()

            self._require_restaurant(restaurant_id)
            del self._restaurants[restaurant_id]
            dropped = self._menus.pop(restaurant_id, [])

            logger.info(
                f"Mock: Deleted restaurant {restaurant_id} "
                f"and {len(dropped)} menu item(s)"
            )

    async def create_menu_item(
        self,
        restaurant_id: str,
        data: MenuItemCreate,
    ) -> MenuItem:
        async with self._locks.hold(restaurant_id):
            await self._simulate_latency()

            self._require_restaurant(restaurant_id)
            item = MenuItem(
                **data.model_dump(),
                id=self._new_id("item"),
                restaurant_id=restaurant_id,
            )
            self._menus.setdefault(restaurant_id, []).append(item)

            logger.info(f"Mock: Added menu item {item.id} to restaurant {restaurant_id}")
            return self._copy(item)

    async def update_menu_item(
        self,
        restaurant_id: str,
        item_id: str,
        data: MenuItemUpdate,
    ) -> MenuItem:
        async with self._locks.hold(restaurant_id):
            await self._simulate_latency()

            menu = self._menus.get(restaurant_id, [])
            for index, item in enumerate(menu):
                if item.id == item_id:
                    merged = {**item.model_dump(), **data.model_dump(exclude_unset=True)}
                    menu[index] = MenuItem.model_validate(merged)
                    logger.info(f"Mock: Updated menu item {item_id}")
                    return self._copy(menu[index])

            raise NotFoundError("Menu item", item_id)

    async def delete_menu_item(self, restaurant_id: str, item_id: str) -> None:
        async with self._locks.hold(restaurant_id):
            await self._simulate_latency()

            menu = self._menus.get(restaurant_id, [])
            for index, item in enumerate(menu):
                if item.id == item_id:
                    del menu[index]
                    logger.info(f"Mock: Deleted menu item {item_id}")
                    return

            raise NotFoundError("Menu item", item_id)
