"""
Remote Rating Service - `/rating` and `/dish-rating` endpoints.

The API has no summary endpoint, so the restaurant summary is aggregated
locally from the fetched reviews.
"""

from restaurant_client import rating_aggregator
from restaurant_client.schemas import (
    CreateDishRatingRequest,
    CreateRestaurantRatingRequest,
    DishAverage,
    DishRating,
    RatingSummary,
    RestaurantRating,
    UpdateDishRatingRequest,
    UpdateRestaurantRatingRequest,
)
from restaurant_client.services.base import BaseRatingService
from restaurant_client.services.remote.base import RemoteService


class RemoteRatingService(RemoteService, BaseRatingService):

    entity = "Rating"

    # Restaurant reviews

    async def get_restaurant_ratings(self, restaurant_id: str) -> list[RestaurantRating]:
        data = await self._call("GET", f"/rating/{restaurant_id}")
        return self._parse_list(RestaurantRating, data)

    async def create_restaurant_rating(
        self,
        user_id: str,
        request: CreateRestaurantRatingRequest,
    ) -> RestaurantRating:
        body = {**request.to_wire(), "userId": user_id}
        data = await self._call("POST", "/rating", json=body)
        return self._parse(RestaurantRating, data)

    async def update_rating(
        self,
        rating_id: str,
        request: UpdateRestaurantRatingRequest,
    ) -> RestaurantRating:
        data = await self._call("PUT", f"/rating/{rating_id}", json=request.to_wire())
        return self._parse(RestaurantRating, data)

    async def delete_rating(self, rating_id: str) -> None:
        await self._call("DELETE", f"/rating/{rating_id}")

    async def get_restaurant_rating_summary(self, restaurant_id: str) -> RatingSummary:
        ratings = await self.get_restaurant_ratings(restaurant_id)
        return rating_aggregator.restaurant_summary(restaurant_id, ratings)

    # Dish ratings

    async def get_dish_ratings(self, dish_id: str) -> list[DishRating]:
        data = await self._call("GET", f"/dish-rating/{dish_id}")
        return self._parse_list(DishRating, data)

    async def create_dish_rating(
        self,
        user_id: str,
        request: CreateDishRatingRequest,
    ) -> DishRating:
        body = {**request.to_wire(), "userId": user_id}
        data = await self._call("POST", "/dish-rating", json=body)
        return self._parse(DishRating, data)

    async def update_dish_rating(
        self,
        rating_id: str,
        request: UpdateDishRatingRequest,
    ) -> DishRating:
        data = await self._call(
            "PUT", f"/dish-rating/{rating_id}", json=request.to_wire()
        )
        return self._parse(DishRating, data)

    async def delete_dish_rating(self, rating_id: str) -> None:
        await self._call("DELETE", f"/dish-rating/{rating_id}")

    async def get_dish_average_rating(self, dish_id: str) -> DishAverage:
        data = await self._call("GET", f"/dish-rating/{dish_id}/average")
        return self._parse(DishAverage, data)
