"""
Mock Rating Service

Ratings table of the MockStore: restaurant reviews grouped by restaurant,
dish ratings grouped by dish.

Creating a restaurant review never touches Restaurant.rating; that cached
summary belongs to the restaurants table. Live averages come from the
Rating Aggregator instead.
"""

import logging

from restaurant_client import rating_aggregator
from restaurant_client.core.exceptions import NotFoundError, ValidationError
from restaurant_client.schemas import (
    CreateDishRatingRequest,
    CreateRestaurantRatingRequest,
    DishAverage,
    DishRating,
    RatingSummary,
    RestaurantRating,
    UpdateDishRatingRequest,
    UpdateRestaurantRatingRequest,
    utcnow,
)
from restaurant_client.services.base import BaseRatingService
from restaurant_client.services.mock.base import MockTable

logger = logging.getLogger(__name__)


class MockRatingService(MockTable, BaseRatingService):
    """In-memory restaurant and dish ratings."""

    def __init__(self, min_latency: float = 0.1, max_latency: float = 0.4):
        super().__init__(min_latency, max_latency)
        self._restaurant_ratings: dict[str, list[RestaurantRating]] = {}
        self._dish_ratings: dict[str, list[DishRating]] = {}

    def load(
        self,
        restaurant_ratings: list[RestaurantRating],
        dish_ratings: list[DishRating],
    ) -> None:
        for rating in restaurant_ratings:
            self._restaurant_ratings.setdefault(rating.restaurant_id, []).append(
                self._copy(rating)
            )
        for rating in dish_ratings:
            self._dish_ratings.setdefault(rating.dish_id, []).append(self._copy(rating))

    def reset(self) -> None:
        self._restaurant_ratings.clear()
        self._dish_ratings.clear()

    def _locate_restaurant_rating(
        self, rating_id: str
    ) -> tuple[list[RestaurantRating], int]:
        for ratings in self._restaurant_ratings.values():
            for index, rating in enumerate(ratings):
                if rating.id == rating_id:
                    return ratings, index
        raise NotFoundError("Rating", rating_id)

    def _locate_dish_rating(self, rating_id: str) -> tuple[list[DishRating], int]:
        for ratings in self._dish_ratings.values():
            for index, rating in enumerate(ratings):
                if rating.id == rating_id:
                    return ratings, index
        raise NotFoundError("Dish rating", rating_id)

    # =========================================================================
    # RESTAURANT REVIEWS
    # =========================================================================

    async def get_restaurant_ratings(self, restaurant_id: str) -> list[RestaurantRating]:
        await self._simulate_latency()
        return self._copy_all(self._restaurant_ratings.get(restaurant_id, []))

    async def create_restaurant_rating(
        self,
        user_id: str,
        request: CreateRestaurantRatingRequest,
    ) -> RestaurantRating:
        async with self._locks.hold(("restaurant", request.restaurant_id)):
            await self._simulate_latency()

            ratings = self._restaurant_ratings.setdefault(request.restaurant_id, [])
            if any(
                r.user_id == user_id and r.order_id == request.order_id
                for r in ratings
            ):
                raise ValidationError(
                    f"Order {request.order_id} already has a review "
                    f"for restaurant {request.restaurant_id}"
                )

            rating = RestaurantRating(
                id=self._new_id("rating"),
                user_id=user_id,
                order_id=request.order_id,
                restaurant_id=request.restaurant_id,
                taste_rating=request.taste_rating,
                value_rating=request.value_rating,
                overall_rating=rating_aggregator.overall_rating(
                    request.taste_rating, request.value_rating
                ),
                comment=request.comment,
                created_at=utcnow(),
            )
            ratings.append(rating)

            logger.info(
                f"Mock: Restaurant {request.restaurant_id} rated "
                f"{rating.overall_rating} by user {user_id}"
            )
            return self._copy(rating)

    async def update_rating(
        self,
        rating_id: str,
        request: UpdateRestaurantRatingRequest,
    ) -> RestaurantRating:
        async with self._locks.hold(("rating", rating_id)):
            await self._simulate_latency()

            ratings, index = self._locate_restaurant_rating(rating_id)
            current = ratings[index]
            taste = request.taste_rating if request.taste_rating is not None else current.taste_rating
            value = request.value_rating if request.value_rating is not None else current.value_rating
            comment = request.comment if request.comment is not None else current.comment

            ratings[index] = current.model_copy(update={
                "taste_rating": taste,
                "value_rating": value,
                "comment": comment,
                "overall_rating": rating_aggregator.overall_rating(taste, value),
            })
            return self._copy(ratings[index])

    async def delete_rating(self, rating_id: str) -> None:
        async with self._locks.hold(("rating", rating_id)):
            await self._simulate_latency()
            ratings, index = self._locate_restaurant_rating(rating_id)
            del ratings[index]
            logger.info(f"Mock: Deleted rating {rating_id}")

    async def get_restaurant_rating_summary(self, restaurant_id: str) -> RatingSummary:
        await self._simulate_latency()
        return rating_aggregator.restaurant_summary(
            restaurant_id, self._restaurant_ratings.get(restaurant_id, [])
        )

    # =========================================================================
    # DISH RATINGS
    # =========================================================================

    async def get_dish_ratings(self, dish_id: str) -> list[DishRating]:
        await self._simulate_latency()
        return self._copy_all(self._dish_ratings.get(dish_id, []))

    async def create_dish_rating(
        self,
        user_id: str,
        request: CreateDishRatingRequest,
    ) -> DishRating:
        async with self._locks.hold(("dish", request.dish_id)):
            await self._simulate_latency()

            ratings = self._dish_ratings.setdefault(request.dish_id, [])
            if any(
                r.user_id == user_id and r.order_id == request.order_id
                for r in ratings
            ):
                raise ValidationError(
                    f"Order {request.order_id} already has a rating "
                    f"for dish {request.dish_id}"
                )

            rating = DishRating(
                id=self._new_id("dish_rating"),
                user_id=user_id,
                order_id=request.order_id,
                dish_id=request.dish_id,
                restaurant_id=request.restaurant_id,
                rating=request.rating,
                created_at=utcnow(),
            )
            ratings.append(rating)

            logger.info(f"Mock: Dish {request.dish_id} rated {rating.rating} by user {user_id}")
            return self._copy(rating)

    async def update_dish_rating(
        self,
        rating_id: str,
        request: UpdateDishRatingRequest,
    ) -> DishRating:
        async with self._locks.hold(("dish_rating", rating_id)):
            await self._simulate_latency()
            ratings, index = self._locate_dish_rating(rating_id)
            ratings[index] = ratings[index].model_copy(update={"rating": request.rating})
            return self._copy(ratings[index])

    async def delete_dish_rating(self, rating_id: str) -> None:
        async with self._locks.hold(("dish_rating", rating_id)):
            await self._simulate_latency()
            ratings, index = self._locate_dish_rating(rating_id)
            del ratings[index]
            logger.info(f"Mock: Deleted dish rating {rating_id}")

    async def get_dish_average_rating(self, dish_id: str) -> DishAverage:
        await self._simulate_latency()
        return rating_aggregator.dish_average(self._dish_ratings.get(dish_id, []))

    def ratings_for_order(self, order_id: str) -> list[RestaurantRating | DishRating]:
        """Every rating authorized by an order (lookup only)."""
        found: list[RestaurantRating | DishRating] = []
        for ratings in self._restaurant_ratings.values():
            found.extend(r for r in ratings if r.order_id == order_id)
        for dish_ratings in self._dish_ratings.values():
            found.extend(r for r in dish_ratings if r.order_id == order_id)
        return self._copy_all(found)
