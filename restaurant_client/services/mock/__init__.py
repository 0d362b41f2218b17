"""
Mock Persistence Store

In-memory stand-in for the backend. Each table honors the same service
contract as its Remote counterpart, so any caller can run fully offline.
"""

import logging

from restaurant_client.core.config import Settings
from restaurant_client.services.mock import seed as sample_data
from restaurant_client.services.mock.accounts import MockAuthService
from restaurant_client.services.mock.carts import MockCartService
from restaurant_client.services.mock.inbox import MockInboxService
from restaurant_client.services.mock.orders import MockOrderService
from restaurant_client.services.mock.ratings import MockRatingService
from restaurant_client.services.mock.restaurants import MockRestaurantService

logger = logging.getLogger(__name__)


class MockStore:
    """
    Owns one instance of every mock table.

    Attributes:
        auth: Accounts and simulated login
        restaurants: Restaurants and menus
        carts: One cart per user
        orders: Orders with lifecycle enforcement
        ratings: Restaurant reviews and dish ratings
        inbox: Per-recipient messages and unread counts
    """

    def __init__(
        self,
        min_latency: float = 0.1,
        max_latency: float = 0.4,
        verify_totals: bool = False,
        seed: bool = True,
    ):
        self.auth = MockAuthService(min_latency, max_latency)
        self.restaurants = MockRestaurantService(min_latency, max_latency)
        self.carts = MockCartService(min_latency, max_latency)
        self.orders = MockOrderService(min_latency, max_latency, verify_totals)
        self.ratings = MockRatingService(min_latency, max_latency)
        self.inbox = MockInboxService(self.auth, min_latency, max_latency)

        if seed:
            self.seed()

    @classmethod
    def from_settings(cls, settings: Settings) -> "MockStore":
        return cls(
            min_latency=settings.mock_min_latency,
            max_latency=settings.mock_max_latency,
            verify_totals=settings.verify_order_totals,
            seed=settings.mock_seed_data,
        )

    @property
    def tables(self) -> tuple:
        return (
            self.auth,
            self.restaurants,
            self.carts,
            self.orders,
            self.ratings,
            self.inbox,
        )

    def seed(self) -> None:
        """Load the sample accounts, restaurants, orders, ratings and inbox."""
        self.auth.load(sample_data.seed_accounts())
        self.restaurants.load(sample_data.seed_restaurants(), sample_data.seed_menus())
        self.orders.load(sample_data.seed_orders())
        self.ratings.load(
            sample_data.seed_restaurant_ratings(),
            sample_data.seed_dish_ratings(),
        )
        self.inbox.load(sample_data.seed_inbox())
        logger.debug("Mock store seeded with sample data")

    def reset(self, reseed: bool = True) -> None:
        for table in self.tables:
            table.reset()
        if reseed:
            self.seed()

    def close(self) -> None:
        self.reset(reseed=False)


__all__ = [
    "MockStore",
    "MockAuthService",
    "MockRestaurantService",
    "MockCartService",
    "MockOrderService",
    "MockRatingService",
    "MockInboxService",
]
