"""
Transport package: REST gateway, its result type and the credential store.
"""

from restaurant_client.services.transport.credentials import CredentialStore
from restaurant_client.services.transport.gateway import TransportGateway
from restaurant_client.services.transport.result import TransportResult

__all__ = [
    "CredentialStore",
    "TransportGateway",
    "TransportResult",
]
