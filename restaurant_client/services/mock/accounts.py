"""
Mock Auth Service

Accounts table of the MockStore. Serves logins without a backend and
answers "who are the employees?" for inbox broadcasts.

Behavior:
    - Every seeded account accepts the shared mock password
    - Tokens look like the backend's but are never verified anywhere
"""

import logging
import time
from typing import Optional

from restaurant_client.core.exceptions import AuthenticationError
from restaurant_client.schemas import LoginResponse, User, UserRole
from restaurant_client.services.base import BaseAuthService
from restaurant_client.services.mock.base import MockTable
from restaurant_client.services.mock.seed import MOCK_PASSWORD

logger = logging.getLogger(__name__)


class MockAuthService(MockTable, BaseAuthService):
    """In-memory accounts with simulated login/logout."""

    def __init__(self, min_latency: float = 0.1, max_latency: float = 0.4):
        super().__init__(min_latency, max_latency)
        self._accounts: dict[str, User] = {}
        self._passwords: dict[str, str] = {}

    def load(self, accounts: list[User], password: str = MOCK_PASSWORD) -> None:
        for user in accounts:
            self.add_account(user, password)

    def add_account(self, user: User, password: str = MOCK_PASSWORD) -> User:
        self._accounts[user.id] = self._copy(user)
        self._passwords[user.email.lower()] = password
        return self._copy(user)

    def reset(self) -> None:
        self._accounts.clear()
        self._passwords.clear()

    # =========================================================================
    # LOOKUPS (synchronous, used by other tables)
    # =========================================================================

    def get_account(self, user_id: str) -> Optional[User]:
        user = self._accounts.get(user_id)
        return self._copy(user) if user else None

    def find_by_email(self, email: str) -> Optional[User]:
        email = email.lower()
        for user in self._accounts.values():
            if user.email.lower() == email:
                return self._copy(user)
        return None

    def list_employees(self) -> list[User]:
        return [
            self._copy(user) for user in self._accounts.values()
            if user.role == UserRole.EMPLOYEE
        ]

    # =========================================================================
    # SERVICE INTERFACE
    # =========================================================================

    async def login(self, email: str, password: str) -> LoginResponse:
        await self._simulate_latency()

        user = self.find_by_email(email)
        if user is None or self._passwords.get(email.lower()) != password:
            logger.debug(f"Mock: Rejected login for {email}")
            raise AuthenticationError("Invalid credentials")

        stamp = int(time.time() * 1000)
        logger.info(f"Mock: Logged in {user.email} ({user.role.value})")
        return LoginResponse(
            user=user,
            token=f"mock-token-{user.id}-{stamp}",
            refresh_token=f"mock-refresh-token-{user.id}-{stamp}",
        )

    async def logout(self) -> None:
        await self._simulate_latency()
        logger.debug("Mock: Logged out")
