import pytest

from restaurant_client import rating_aggregator
from restaurant_client.core.exceptions import NotFoundError, ValidationError
from restaurant_client.schemas import (
    CreateDishRatingRequest,
    CreateRestaurantRatingRequest,
    UpdateDishRatingRequest,
    UpdateRestaurantRatingRequest,
)


def test_round_half_up():
    assert rating_aggregator.round_half_up(4.65) == 4.7
    assert rating_aggregator.round_half_up(14 / 3) == 4.7
    assert rating_aggregator.round_half_up(4.25) == 4.3


@pytest.mark.anyio
async def test_dish_average_of_seeded_ratings(store):
    average = await store.ratings.get_dish_average_rating("1")
    assert (average.rating, average.count) == (4.7, 3)


@pytest.mark.anyio
async def test_dish_average_without_ratings(store):
    average = await store.ratings.get_dish_average_rating("no-such-dish")
    assert (average.rating, average.count) == (0, 0)


@pytest.mark.anyio
async def test_restaurant_rating_leaves_cached_summary_alone(store):
    before = await store.restaurants.get_restaurant("3")

    rating = await store.ratings.create_restaurant_rating(
        "u42",
        CreateRestaurantRatingRequest(order_id="o42", restaurant_id="3",
                                      taste_rating=4, value_rating=1),
    )

    after = await store.restaurants.get_restaurant("3")
    assert rating.overall_rating == 2.5
    assert (after.rating, after.total_ratings) == (before.rating, before.total_ratings)

    summary = await store.ratings.get_restaurant_rating_summary("3")
    assert summary.count == 2
    assert summary.average_overall == 3.8


@pytest.mark.anyio
async def test_duplicate_rating_for_same_order_rejected(store):
    request = CreateRestaurantRatingRequest(order_id="o1", restaurant_id="2",
                                            taste_rating=5, value_rating=5)
    await store.ratings.create_restaurant_rating("u1", request)

    with pytest.raises(ValidationError):
        await store.ratings.create_restaurant_rating("u1", request)


@pytest.mark.anyio
async def test_update_recomputes_overall_and_delete(store):
    updated = await store.ratings.update_rating("1", UpdateRestaurantRatingRequest(value_rating=2))
    assert (updated.taste_rating, updated.value_rating, updated.overall_rating) == (5, 2, 3.5)

    await store.ratings.delete_rating("1")
    remaining = await store.ratings.get_restaurant_ratings("1")
    assert "1" not in {r.id for r in remaining}

    with pytest.raises(NotFoundError):
        await store.ratings.delete_rating("1")


@pytest.mark.anyio
async def test_dish_rating_crud(empty_store):
    ratings = empty_store.ratings
    created = await ratings.create_dish_rating(
        "u1", CreateDishRatingRequest(order_id="o1", dish_id="d1",
                                      restaurant_id="r1", rating=5),
    )
    await ratings.create_dish_rating(
        "u2", CreateDishRatingRequest(order_id="o2", dish_id="d1",
                                      restaurant_id="r1", rating=4),
    )
    assert (await ratings.get_dish_average_rating("d1")).rating == 4.5

    await ratings.update_dish_rating(created.id, UpdateDishRatingRequest(rating=2))
    assert (await ratings.get_dish_average_rating("d1")).rating == 3.0

    await ratings.delete_dish_rating(created.id)
    average = await ratings.get_dish_average_rating("d1")
    assert (average.rating, average.count) == (4.0, 1)

    with pytest.raises(NotFoundError):
        await ratings.update_dish_rating("missing", UpdateDishRatingRequest(rating=1))


@pytest.mark.anyio
async def test_ratings_outlive_order_cancellation(store):
    before = store.ratings.ratings_for_order("3")
    review = await store.ratings.create_restaurant_rating(
        "u9", CreateRestaurantRatingRequest(order_id="3", restaurant_id="3",
                                            taste_rating=4, value_rating=3),
    )
    dish = await store.ratings.create_dish_rating(
        "u9", CreateDishRatingRequest(order_id="3", dish_id="8",
                                      restaurant_id="3", rating=5),
    )

    await store.orders.cancel_order("3")

    found = store.ratings.ratings_for_order("3")
    assert len(found) == len(before) + 2
    assert {review.id, dish.id} <= {r.id for r in found}
    assert store.ratings.ratings_for_order("unknown") == []
