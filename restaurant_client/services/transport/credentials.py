"""
Credential Store

Holds the persisted auth state `{ user, token, isAuthenticated }`.

Without a path the state lives in memory only. With a path it is written
as JSON and every read/write is guarded by a sibling `.lock` file, so
several processes sharing one credentials file never see a torn write.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from filelock import FileLock

from restaurant_client.schemas import AuthState, LoginResponse

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Auth state holder backing the gateway's bearer token.

    Attributes:
        path: JSON file the state is persisted to, or None for memory only
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        lock_timeout: float = 5,
    ):
        self.path = Path(path) if path else None
        self._state = AuthState()
        self._lock = None
        if self.path:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._lock = FileLock(f"{self.path}.lock", timeout=lock_timeout)
            self.load()

    @property
    def state(self) -> AuthState:
        return self._state.model_copy(deep=True)

    @property
    def token(self) -> Optional[str]:
        return self._state.token if self._state.is_authenticated else None

    @property
    def is_authenticated(self) -> bool:
        return self._state.is_authenticated

    def load(self) -> AuthState:
        """Re-read the persisted state. A missing or corrupt file means logged out."""
        if self.path is None:
            return self.state

        with self._lock:
            if not self.path.exists():
                self._state = AuthState()
                return self.state
            raw = self.path.read_text(encoding="utf-8")

        try:
            self._state = AuthState.model_validate_json(raw)
        except ValueError as exc:
            logger.warning(f"Ignoring unreadable credentials file {self.path}: {exc}")
            self._state = AuthState()
        return self.state

    def save(self, state: AuthState) -> None:
        self._state = state.model_copy(deep=True)
        if self.path is None:
            return

        payload = self._state.model_dump_json(by_alias=True)
        with self._lock:
            self.path.write_text(payload, encoding="utf-8")
        logger.debug(f"Credentials saved to {self.path}")

    def store_login(self, response: LoginResponse) -> AuthState:
        state = AuthState(user=response.user, token=response.token, is_authenticated=True)
        self.save(state)
        return self.state

    def clear(self) -> None:
        self.save(AuthState())
