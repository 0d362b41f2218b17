"""
Transport Gateway

Thin async HTTP layer over the REST API.

Responsibilities:
    - Attach the bearer token held by the CredentialStore
    - Unwrap the `{"data": ...}` response envelope
    - Turn every network error, timeout, non-2xx and undecodable body into
      a failed TransportResult instead of an exception
    - On 401 outside login, drop the stored credential and fire
      `on_unauthorized`

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
import time
from typing import Any, Callable, Optional

import httpx

from restaurant_client.services.transport.credentials import CredentialStore
from restaurant_client.services.transport.result import TransportResult

logger = logging.getLogger(__name__)


class TransportGateway:
    """
    REST client used by every Remote*Service.

    Example:
        >>> gateway = TransportGateway("http://localhost:3001/api")
        >>> result = await gateway.get("/restaurant")
        >>> restaurants = result.unwrap()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        credentials: Optional[CredentialStore] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.credentials = credentials or CredentialStore()
        self.on_unauthorized = on_unauthorized
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def _headers(self) -> dict[str, str]:
        token = self.credentials.token
        return {"Authorization": f"Bearer {token}"} if token else {}

    @staticmethod
    def _unwrap(body: Any) -> Any:
        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return f"HTTP {response.status_code}"

    def _handle_unauthorized(self) -> None:
        logger.warning("Received 401 from API - clearing stored credentials")
        self.credentials.clear()
        if self.on_unauthorized is not None:
            self.on_unauthorized()

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[dict] = None,
        clear_on_unauthorized: bool = True,
    ) -> TransportResult:
        """
        Perform one API call.

        Args:
            method: HTTP verb
            path: Path relative to the API base URL
            json: Request body
            params: Query parameters; None values are dropped
            clear_on_unauthorized: Treat a 401 as an expired session; off for
                the login call, where 401 only means wrong credentials

        Returns:
            TransportResult: Never raises for transport-level failures
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        start_time = time.perf_counter()
        try:
            response = await self._client.request(
                method,
                path,
                json=json,
                params=params or None,
                headers=self._headers(),
            )
        except httpx.TimeoutException as exc:
            elapsed = (time.perf_counter() - start_time) * 1000
            logger.warning(f"{method} {path} timed out after {elapsed:.0f}ms")
            return TransportResult(
                success=False,
                error=f"Request timed out: {exc}",
                response_time_ms=elapsed,
            )
        except httpx.HTTPError as exc:
            elapsed = (time.perf_counter() - start_time) * 1000
            logger.warning(f"{method} {path} failed: {exc}")
            return TransportResult(
                success=False,
                error=f"Network error: {exc}",
                response_time_ms=elapsed,
            )

        elapsed = (time.perf_counter() - start_time) * 1000

        if response.status_code == 401 and clear_on_unauthorized:
            self._handle_unauthorized()

        if not response.is_success:
            error = self._error_message(response)
            logger.debug(f"{method} {path} -> {response.status_code} ({error})")
            return TransportResult(
                success=False,
                status_code=response.status_code,
                error=error,
                response_time_ms=elapsed,
            )

        data = None
        if response.content:
            try:
                data = self._unwrap(response.json())
            except ValueError as exc:
                return TransportResult(
                    success=False,
                    status_code=response.status_code,
                    error=f"Undecodable response body: {exc}",
                    response_time_ms=elapsed,
                )

        logger.debug(f"{method} {path} -> {response.status_code} in {elapsed:.0f}ms")
        return TransportResult(
            success=True,
            data=data,
            status_code=response.status_code,
            response_time_ms=elapsed,
        )

    async def get(self, path: str, params: Optional[dict] = None) -> TransportResult:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> TransportResult:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> TransportResult:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> TransportResult:
        return await self.request("DELETE", path)

    async def close(self) -> None:
        await self._client.aclose()
