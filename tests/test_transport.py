import json

import pytest

from restaurant_client.core.exceptions import AuthenticationError, TransportError
from restaurant_client.schemas import AuthState, User, UserRole
from restaurant_client.services.remote import (
    RemoteAuthService,
    RemoteCartService,
    RemoteInboxService,
    RemoteRestaurantService,
)
from restaurant_client.services.transport import (
    CredentialStore,
    TransportGateway,
    TransportResult,
)

API_BASE = "http://testserver/api"


def _logged_in_state() -> AuthState:
    user = User(id="1", email="employee@test.com", name="John", role=UserRole.EMPLOYEE)
    return AuthState(user=user, token="abc", is_authenticated=True)


def test_unwrap_raises_on_failure():
    result = TransportResult(success=False, status_code=503, error="HTTP 503")
    with pytest.raises(TransportError) as exc_info:
        result.unwrap()
    assert exc_info.value.status_code == 503
    assert TransportResult(success=True, data=[1]).unwrap() == [1]


def test_credential_file_round_trip(tmp_path):
    path = tmp_path / "auth" / "credentials.json"
    store = CredentialStore(path)
    store.save(_logged_in_state())

    raw = json.loads(path.read_text())
    assert raw["isAuthenticated"] is True
    assert raw["token"] == "abc"

    reopened = CredentialStore(path)
    assert reopened.token == "abc"
    assert reopened.state.user.email == "employee@test.com"

    reopened.clear()
    assert CredentialStore(path).token is None


def test_corrupt_credential_file_means_logged_out(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text("{not json")
    assert CredentialStore(path).is_authenticated is False


@pytest.mark.anyio
async def test_envelope_is_unwrapped(asgi_transport):
    gateway = TransportGateway(API_BASE, transport=asgi_transport)
    try:
        restaurants = await RemoteRestaurantService(gateway).get_restaurants()
    finally:
        await gateway.close()

    assert [r.name for r in restaurants] == ["Remote Bistro"]
    assert restaurants[0].total_ratings == 12


@pytest.mark.anyio
async def test_bearer_token_is_attached(asgi_transport, backend):
    credentials = CredentialStore()
    credentials.save(_logged_in_state())
    gateway = TransportGateway(API_BASE, credentials=credentials, transport=asgi_transport)
    try:
        await gateway.get("/restaurant")
    finally:
        await gateway.close()

    assert backend.state.seen_tokens == ["Bearer abc"]


@pytest.mark.anyio
async def test_non_2xx_is_a_failed_result(asgi_transport):
    gateway = TransportGateway(API_BASE, transport=asgi_transport)
    try:
        result = await gateway.get("/restaurant/1/menu")
        missing = await gateway.get("/restaurant/unknown")
    finally:
        await gateway.close()

    assert result.success is False
    assert result.status_code == 500
    assert result.error == "Internal error"
    assert missing.status_code == 404


@pytest.mark.anyio
async def test_undecodable_payload_raises_transport_error(asgi_transport):
    gateway = TransportGateway(API_BASE, transport=asgi_transport)
    try:
        with pytest.raises(TransportError):
            await RemoteRestaurantService(gateway).get_restaurant("garbled")
    finally:
        await gateway.close()


@pytest.mark.anyio
async def test_unauthorized_clears_credentials_and_fires_hook(asgi_transport):
    credentials = CredentialStore()
    credentials.save(_logged_in_state())
    fired = []
    gateway = TransportGateway(
        API_BASE,
        credentials=credentials,
        on_unauthorized=lambda: fired.append(True),
        transport=asgi_transport,
    )
    try:
        result = await gateway.get("/order/1")
    finally:
        await gateway.close()

    assert result.status_code == 401
    assert credentials.is_authenticated is False
    assert credentials.token is None
    assert fired == [True]


@pytest.mark.anyio
async def test_network_error_is_a_failed_result(offline_transport):
    gateway = TransportGateway(API_BASE, transport=offline_transport)
    try:
        result = await gateway.get("/restaurant")
    finally:
        await gateway.close()

    assert result.success is False
    assert result.status_code is None
    assert "Connection refused" in result.error


@pytest.mark.anyio
async def test_remote_login(asgi_transport):
    gateway = TransportGateway(API_BASE, transport=asgi_transport)
    auth = RemoteAuthService(gateway)
    try:
        response = await auth.login("remote@test.com", "secret")
        with pytest.raises(AuthenticationError):
            await auth.login("remote@test.com", "wrong")
        await auth.logout()
    finally:
        await gateway.close()

    assert response.token == "remote-token"
    assert response.user.role == UserRole.EMPLOYEE


@pytest.mark.anyio
async def test_remote_counts_and_carts(asgi_transport):
    gateway = TransportGateway(API_BASE, transport=asgi_transport)
    try:
        unread = await RemoteInboxService(gateway).get_unread_count("1")
        cart = await RemoteCartService(gateway).get_cart("1")
    finally:
        await gateway.close()

    assert unread == 7
    assert cart.items[0].quantity == 3
    # raw payload, not yet recomputed
    assert cart.total_amount == 999.0


@pytest.mark.anyio
async def test_wrong_password_keeps_existing_session(asgi_transport):
    credentials = CredentialStore()
    credentials.save(_logged_in_state())
    fired = []
    gateway = TransportGateway(
        API_BASE,
        credentials=credentials,
        on_unauthorized=lambda: fired.append(True),
        transport=asgi_transport,
    )
    try:
        with pytest.raises(AuthenticationError):
            await RemoteAuthService(gateway).login("remote@test.com", "wrong")
    finally:
        await gateway.close()

    assert credentials.token == "abc"
    assert credentials.is_authenticated is True
    assert fired == []
