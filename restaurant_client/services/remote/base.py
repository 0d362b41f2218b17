"""
Remote Service Base

Shared plumbing for the REST-backed services: issue the call through the
TransportGateway, unwrap the result, and parse the payload into schema
models. A payload that does not fit the schema is a transport failure,
not a domain error. A 404, or a refused order transition, is raised as a
TransportError that is also the matching domain error.
"""

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as SchemaError

from restaurant_client.core.exceptions import (
    RemoteNotFoundError,
    RemoteTransitionError,
    TransportError,
)
from restaurant_client.services.transport import TransportGateway

ModelT = TypeVar("ModelT", bound=BaseModel)


class RemoteService:
    """
    Base class for Remote*Service implementations.

    Attributes:
        gateway: Shared TransportGateway
    """

    entity = "Resource"

    def __init__(self, gateway: TransportGateway):
        self.gateway = gateway

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "remote"

    async def _call(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[dict] = None,
        transition: Optional[str] = None,
    ) -> Any:
        """
        Issue one request and return the unwrapped payload.

        Args:
            transition: Requested state for order status/payment changes;
                a 400/409 then means the backend refused the transition

        Raises:
            RemoteNotFoundError: 404
            RemoteTransitionError: 400/409 on a transition call
            TransportError: any other failure
        """
        result = await self.gateway.request(method, path, json=json, params=params)

        if result.status_code == 404:
            raise RemoteNotFoundError(
                result.error or f"{self.entity} not found",
                entity=self.entity,
                entity_id=path,
            )
        if transition is not None and result.status_code in (400, 409):
            raise RemoteTransitionError(
                result.error or f"Cannot move to '{transition}'",
                requested=transition,
                status_code=result.status_code,
            )
        return result.unwrap()

    @staticmethod
    def _parse(model: type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except SchemaError as exc:
            raise TransportError(f"Undecodable {model.__name__} payload: {exc}") from exc

    @staticmethod
    def _parse_list(model: type[ModelT], data: Any) -> list[ModelT]:
        try:
            return TypeAdapter(list[model]).validate_python(data or [])
        except SchemaError as exc:
            raise TransportError(f"Undecodable {model.__name__} list: {exc}") from exc

    @staticmethod
    def _parse_count(data: Any, key: str = "count") -> int:
        """Counts arrive either bare or wrapped in an object."""
        if isinstance(data, dict):
            data = data.get(key)
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            raise TransportError(f"Undecodable count payload: {data!r}")
        return int(data)
