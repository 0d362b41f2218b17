"""
Data Service Factory

Single entry point for wiring the services a client exposes. The rest of
the application only sees the Base*Service contracts and never needs to
know whether the API, the MockStore or both are answering.

Usage:
    store = MockStore.from_settings(settings)
    gateway = TransportGateway(settings.api_base_url, settings.api_timeout)
    services = build_services(settings.data_mode, store, gateway)

    restaurants = await services.restaurants.get_restaurants()

Data Mode Switching:
    - DATA_MODE=fallback → API first, MockStore when the API fails
    - DATA_MODE=strict → API only, transport errors surface
    - DATA_MODE=mock → MockStore only (no network traffic)

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
from dataclasses import dataclass

from restaurant_client.core.config import DataMode
from restaurant_client.services.base import (
    BaseAuthService,
    BaseCartService,
    BaseInboxService,
    BaseOrderService,
    BaseRatingService,
    BaseRestaurantService,
)
from restaurant_client.services.mock import MockStore
from restaurant_client.services.remote import (
    RemoteAuthService,
    RemoteCartService,
    RemoteInboxService,
    RemoteOrderService,
    RemoteRatingService,
    RemoteRestaurantService,
)
from restaurant_client.services.resilience import (
    ResilientAuthService,
    ResilientCartService,
    ResilientInboxService,
    ResilientOrderService,
    ResilientRatingService,
    ResilientRestaurantService,
    with_fallback,
)
from restaurant_client.services.transport import (
    CredentialStore,
    TransportGateway,
    TransportResult,
)

logger = logging.getLogger(__name__)


@dataclass
class ServiceSet:
    """One service per domain, all honoring the Base*Service contracts."""
    auth: BaseAuthService
    restaurants: BaseRestaurantService
    carts: BaseCartService
    orders: BaseOrderService
    ratings: BaseRatingService
    inbox: BaseInboxService


def build_services(
    mode: DataMode,
    store: MockStore,
    gateway: TransportGateway,
) -> ServiceSet:
    """
    Wrap every Remote/Mock pair in its Resilient service.

    Args:
        mode: Policy applied to every call
        store: MockStore serving fallback and mock-mode calls
        gateway: TransportGateway shared by the remote services

    Returns:
        ServiceSet: Services ready to use
    """
    mode = DataMode(mode)
    logger.info(f"Data services: {mode.value} mode against {gateway.base_url}")

    return ServiceSet(
        auth=ResilientAuthService(RemoteAuthService(gateway), store.auth, mode),
        restaurants=ResilientRestaurantService(
            RemoteRestaurantService(gateway), store.restaurants, mode
        ),
        carts=ResilientCartService(RemoteCartService(gateway), store.carts, mode),
        orders=ResilientOrderService(RemoteOrderService(gateway), store.orders, mode),
        ratings=ResilientRatingService(
            RemoteRatingService(gateway), store.ratings, mode
        ),
        inbox=ResilientInboxService(RemoteInboxService(gateway), store.inbox, mode),
    )


__all__ = [
    "ServiceSet",
    "build_services",
    "with_fallback",
    "MockStore",
    "CredentialStore",
    "TransportGateway",
    "TransportResult",
]
