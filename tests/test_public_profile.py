"""Tests for the public profile disclosure endpoint."""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from medtag.core.data_client import DataClient
from medtag.dependencies import get_data_client, get_disclosure_service
from medtag.main import app
from medtag.models.profiles import PAID_TIER_FIELDS
from medtag.services.disclosure_assembler import calculate_age

BASIC_KEYS = {"first_name", "last_name", "age", "emergency_contact", "is_paid"}


@pytest.mark.asyncio
async def test_free_profile_end_to_end(client: AsyncClient, create_profile):
    """Test the free-tier payload for a token with no subscription row."""
    await create_profile(token="abc", first_name="Jo", last_name="Doe")

    response = await client.get("/api/public-profile", params={"token": "abc"})

    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-store"
    assert response.json() == {
        "first_name": "Jo",
        "last_name": "Doe",
        "age": calculate_age("1990-01-01"),
        "emergency_contact": None,
        "is_paid": False,
    }


@pytest.mark.asyncio
async def test_paid_profile_includes_medical_block(
    client: AsyncClient,
    create_profile,
    add_contact,
    add_subscription,
    full_medical_fields,
):
    """Test an active subscription adds the medical block and secondary contact."""
    created = await create_profile(token="paid-token", **full_medical_fields)
    await add_contact(created["id"], 2, "Alex", "222")
    await add_contact(created["id"], 1, "Sam", "111")
    await add_subscription(created["user_id"], "active", datetime.now(UTC) + timedelta(days=30))

    response = await client.get("/api/public-profile", params={"token": "paid-token"})

    assert response.status_code == 200
    body = response.json()
    assert set(body) == BASIC_KEYS | {"medical"}
    assert body["is_paid"] is True
    assert body["emergency_contact"] == {"name": "Sam", "phone": "111"}
    assert set(body["medical"]) == set(PAID_TIER_FIELDS) | {"emergency_contact_2"}
    assert body["medical"]["blood_type"] == "O-"
    assert body["medical"]["emergency_contact_2"] == {"name": "Alex", "phone": "222"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "offset"),
    [
        ("active", timedelta(seconds=-1)),
        ("canceled", timedelta(days=30)),
        ("active", None),
    ],
)
async def test_unentitled_subscription_omits_medical_key(
    client: AsyncClient,
    create_profile,
    add_contact,
    add_subscription,
    full_medical_fields,
    status,
    offset,
):
    """Test lapsed, cancelled and open-ended subscriptions stay on the free tier."""
    created = await create_profile(token="abc", **full_medical_fields)
    await add_contact(created["id"], 1, "Sam", "111")
    await add_contact(created["id"], 2, "Alex", "222")
    period_end = datetime.now(UTC) + offset if offset is not None else None
    await add_subscription(created["user_id"], status, period_end)

    response = await client.get("/api/public-profile", params={"token": "abc"})

    assert response.status_code == 200
    body = response.json()
    assert set(body) == BASIC_KEYS
    assert body["is_paid"] is False
    assert body["emergency_contact"] == {"name": "Sam", "phone": "111"}
    assert "Penicillin" not in response.text
    assert "Alex" not in response.text


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", "?token=", "?other=abc"])
async def test_missing_token_returns_400(client: AsyncClient, create_profile, query):
    """Test a missing or empty token is rejected before any lookup."""
    await create_profile(token="abc")

    response = await client.get(f"/api/public-profile{query}")

    assert response.status_code == 400
    assert response.json() == {"error": "Missing token"}
    assert response.headers["cache-control"] == "no-store"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("token", "token_status"),
    [("unknown", "active"), ("abc", "revoked"), ("\x00", "active"), ("a\x00b", "active")],
)
async def test_unresolvable_token_returns_404(
    client: AsyncClient, create_profile, token, token_status
):
    """Test unknown and revoked tokens look identical and leak nothing."""
    await create_profile(token="abc", token_status=token_status)

    response = await client.get("/api/public-profile", params={"token": token})

    assert response.status_code == 404
    assert response.json() == {"error": "Profile not found"}
    assert response.headers["cache-control"] == "no-store"
    assert "Jo" not in response.text


@pytest.mark.asyncio
async def test_repeated_requests_are_identical(
    client: AsyncClient, create_profile, add_contact, add_subscription
):
    """Test two requests with no data change in between return the same bytes."""
    created = await create_profile(token="abc")
    await add_contact(created["id"], 1, "Sam", "111")
    await add_subscription(created["user_id"], "active", datetime.now(UTC) + timedelta(days=1))

    first = await client.get("/api/public-profile", params={"token": "abc"})
    second = await client.get("/api/public-profile", params={"token": "abc"})

    assert first.status_code == second.status_code == 200
    assert first.content == second.content


@pytest.mark.asyncio
async def test_missing_birth_date_does_not_fail_request(
    client: AsyncClient, create_profile
):
    """Test a profile with no birth date still discloses the rest."""
    await create_profile(token="abc", date_of_birth=None)

    response = await client.get("/api/public-profile", params={"token": "abc"})

    assert response.status_code == 200
    assert response.json()["age"] is None
    assert response.json()["first_name"] == "Jo"


@pytest.mark.asyncio
async def test_store_timeout_returns_503(client: AsyncClient):
    """Test a hung store surfaces as a generic 503 with no partial payload."""

    class _HangingSession:
        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc_info):
            return False

        async def execute(self, query):
            await asyncio.sleep(5)

    app.dependency_overrides[get_data_client] = lambda: DataClient(
        lambda: _HangingSession(), timeout=0.01
    )

    response = await client.get("/api/public-profile", params={"token": "abc"})

    assert response.status_code == 503
    assert response.json() == {"error": "Service unavailable"}
    assert response.headers["cache-control"] == "no-store"


@pytest.mark.asyncio
async def test_write_methods_not_allowed(client: AsyncClient, create_profile):
    """Test the public path is read-only."""
    await create_profile(token="abc")

    response = await client.post("/api/public-profile", params={"token": "abc"})

    assert response.status_code == 405
    assert response.json() == {"error": "Method Not Allowed"}


@pytest.mark.asyncio
async def test_unexpected_error_returns_generic_500():
    """Test an unexpected failure is rendered without internal detail."""

    class _BrokenService:
        async def disclose(self, token):
            raise RuntimeError("secret internal detail")

    app.dependency_overrides[get_disclosure_service] = lambda: _BrokenService()
    transport = ASGITransport(app=app, raise_app_exceptions=False)

    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/public-profile", params={"token": "abc"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert response.headers["cache-control"] == "no-store"
    assert "secret" not in response.text
