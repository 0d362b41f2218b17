"""
Core module initialization.
Exports configuration, logging utilities and the error taxonomy.
"""

from restaurant_client.core.config import (
    get_settings,
    setup_logging,
    Settings,
    EnvironmentMode,
    DataMode,
)
from restaurant_client.core.exceptions import (
    OrderingClientError,
    NotFoundError,
    InvalidTransitionError,
    TransportError,
    ValidationError,
    AuthenticationError,
    RemoteNotFoundError,
    RemoteTransitionError,
)

__all__ = [
    "get_settings",
    "setup_logging",
    "Settings",
    "EnvironmentMode",
    "DataMode",
    "OrderingClientError",
    "NotFoundError",
    "InvalidTransitionError",
    "TransportError",
    "ValidationError",
    "AuthenticationError",
    "RemoteNotFoundError",
    "RemoteTransitionError",
]
