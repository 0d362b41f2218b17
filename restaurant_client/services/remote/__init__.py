"""
REST-backed service implementations.
"""

from restaurant_client.services.remote.auth import RemoteAuthService
from restaurant_client.services.remote.carts import RemoteCartService
from restaurant_client.services.remote.inbox import RemoteInboxService
from restaurant_client.services.remote.orders import RemoteOrderService
from restaurant_client.services.remote.ratings import RemoteRatingService
from restaurant_client.services.remote.restaurants import RemoteRestaurantService

__all__ = [
    "RemoteAuthService",
    "RemoteRestaurantService",
    "RemoteCartService",
    "RemoteOrderService",
    "RemoteRatingService",
    "RemoteInboxService",
]
