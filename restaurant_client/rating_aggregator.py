"""
Rating Aggregator

Averages published from a growing set of individual ratings. These live
figures are kept apart from Restaurant.rating / Restaurant.total_ratings,
which are a cached summary maintained by restaurant management.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from restaurant_client.schemas import (
    DishAverage,
    DishRating,
    RatingSummary,
    RestaurantRating,
)


def round_half_up(value: float, places: int = 1) -> float:
    """Round like a cashier: 4.65 -> 4.7, never banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def overall_rating(taste_rating: int, value_rating: int) -> float:
    """Arithmetic mean of the taste and value scores."""
    return (taste_rating + value_rating) / 2


def dish_average(ratings: Sequence[DishRating]) -> DishAverage:
    """Mean dish rating to one decimal, or (0, 0) when unrated."""
    if not ratings:
        return DishAverage(rating=0.0, count=0)

    mean = sum(r.rating for r in ratings) / len(ratings)
    return DishAverage(rating=round_half_up(mean), count=len(ratings))


def restaurant_summary(
    restaurant_id: str,
    ratings: Sequence[RestaurantRating],
) -> RatingSummary:
    if not ratings:
        return RatingSummary(restaurant_id=restaurant_id)

    count = len(ratings)
    return RatingSummary(
        restaurant_id=restaurant_id,
        count=count,
        average_taste=round_half_up(sum(r.taste_rating for r in ratings) / count),
        average_value=round_half_up(sum(r.value_rating for r in ratings) / count),
        average_overall=round_half_up(sum(r.overall_rating for r in ratings) / count),
    )
