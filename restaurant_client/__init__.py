"""
Restaurant Ordering Client

Async data layer for the restaurant ordering app: restaurants and menus,
carts, orders, ratings and the employee inbox, served by the REST API with
an in-memory mock store as fallback.
"""

from restaurant_client.client import OrderingClient, create_client
from restaurant_client.core.config import DataMode, Settings, get_settings

__version__ = "1.0.0"

__all__ = [
    "OrderingClient",
    "create_client",
    "DataMode",
    "Settings",
    "get_settings",
    "__version__",
]
