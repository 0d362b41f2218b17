"""
Remote Auth Service - `/auth` endpoints.
"""

import logging

from restaurant_client.core.exceptions import AuthenticationError
from restaurant_client.schemas import LoginRequest, LoginResponse
from restaurant_client.services.base import BaseAuthService
from restaurant_client.services.remote.base import RemoteService

logger = logging.getLogger(__name__)


class RemoteAuthService(RemoteService, BaseAuthService):

    async def login(self, email: str, password: str) -> LoginResponse:
        body = LoginRequest(email=email, password=password).to_wire()
        result = await self.gateway.request(
            "POST", "/auth/login", json=body, clear_on_unauthorized=False
        )

        # A rejected login is a credentials problem, never a reason to fall back
        if result.status_code in (400, 401):
            raise AuthenticationError(result.error or "Invalid credentials")

        response = self._parse(LoginResponse, result.unwrap())
        logger.info(f"Logged in {response.user.email} via API")
        return response

    async def logout(self) -> None:
        await self._call("POST", "/auth/logout")
