"""
Client Error Taxonomy

Every failure the data layer raises derives from OrderingClientError so
callers can catch the whole family or one kind at a time:

    - NotFoundError: operation targets an id that does not exist
    - InvalidTransitionError: order status / payment change not allowed
    - TransportError: network, timeout or non-2xx response
    - ValidationError: malformed input rejected before the store
    - AuthenticationError: bad or missing credentials

TransportError is the only one the fallback policy absorbs. A 404 or a
rejected state change reported by the API is raised as RemoteNotFoundError
or RemoteTransitionError: still a TransportError, so FALLBACK can serve the
mock store, but catchable as NotFoundError or InvalidTransitionError when
the error reaches the caller.

Author: Khalil Bannouri
Version: 1.0.0
"""

from typing import Optional

__all__ = [
    "OrderingClientError",
    "NotFoundError",
    "InvalidTransitionError",
    "TransportError",
    "ValidationError",
    "AuthenticationError",
    "RemoteNotFoundError",
    "RemoteTransitionError",
]


class OrderingClientError(Exception):
    """Base class for all data-layer errors."""


class NotFoundError(OrderingClientError):
    """Raised when an entity id does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class InvalidTransitionError(OrderingClientError):
    """Raised when a state change is not permitted from the current state."""

    def __init__(self, current: str, requested: str, message: Optional[str] = None):
        self.current = current
        self.requested = requested
        super().__init__(
            message or f"Cannot move from '{current}' to '{requested}'"
        )


class TransportError(OrderingClientError):
    """Raised when a remote call fails at the transport level."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ValidationError(OrderingClientError):
    """Raised for malformed input caught before reaching the store."""


class AuthenticationError(OrderingClientError):
    """Raised when login fails or credentials are missing."""


class RemoteNotFoundError(TransportError, NotFoundError):
    """The API answered 404 for the requested entity."""

    def __init__(
        self,
        message: str,
        entity: str = "Resource",
        entity_id: str = "",
        status_code: int = 404,
    ):
        self.status_code = status_code
        self.entity = entity
        self.entity_id = entity_id
        OrderingClientError.__init__(self, message)


class RemoteTransitionError(TransportError, InvalidTransitionError):
    """The API refused an order status or payment change (400/409)."""

    def __init__(
        self,
        message: str,
        requested: str,
        current: str = "unknown",
        status_code: Optional[int] = None,
    ):
        self.status_code = status_code
        self.current = current
        self.requested = requested
        OrderingClientError.__init__(self, message)
