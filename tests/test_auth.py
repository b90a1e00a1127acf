import re

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.models import User
from stayhub.security import create_access_token
from tests.factories import DEFAULT_PASSWORD, auth_headers
from tests.fakes import FakeMailer

REGISTER_URL = "/api/auth/register"
LOGIN_URL = "/api/auth/login"
FORGOT_URL = "/api/auth/forgotpassword"
RESET_URL = "/api/auth/resetpassword"


def _register_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "name": "Nora New",
        "email": "nora@example.com",
        "password": "secret123",
    }
    payload.update(overrides)
    return payload


# ---------------------------------------------------------------------------
# 1. Registration
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_register_customer_returns_token(client: AsyncClient) -> None:
    resp = await client.post(REGISTER_URL, json=_register_payload(email="Nora@Example.com"))

    assert resp.status_code == 201
    body = resp.json()
    assert body["token"]
    assert body["approval_pending"] is False
    assert body["user"]["email"] == "nora@example.com"
    assert body["user"]["role"] == "customer"
    assert "password_hash" not in body["user"]


@pytest.mark.asyncio
async def test_register_hotel_owner_is_pending(client: AsyncClient) -> None:
    resp = await client.post(REGISTER_URL, json=_register_payload(role="hotel_owner"))

    assert resp.status_code == 201
    body = resp.json()
    assert body["approval_pending"] is True
    assert body["user"]["is_approved"] is False
    assert "pending admin approval" in body["message"]


@pytest.mark.asyncio
async def test_register_unknown_role_falls_back_to_customer(client: AsyncClient) -> None:
    resp = await client.post(REGISTER_URL, json=_register_payload(role="superuser"))

    assert resp.status_code == 201
    assert resp.json()["user"]["role"] == "customer"


@pytest.mark.asyncio
async def test_register_duplicate_email_is_case_insensitive(
    client: AsyncClient, customer: User
) -> None:
    resp = await client.post(REGISTER_URL, json=_register_payload(email="GUEST@example.com"))

    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "conflict"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [{"password": "123"}, {"email": "not-an-email"}, {"name": ""}],
    ids=["short_password", "bad_email", "empty_name"],
)
async def test_register_rejects_invalid_input(
    client: AsyncClient, overrides: dict[str, object]
) -> None:
    resp = await client.post(REGISTER_URL, json=_register_payload(**overrides))
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# 2. Login
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, customer: User) -> None:
    resp = await client.post(
        LOGIN_URL, json={"email": "guest@example.com", "password": DEFAULT_PASSWORD}
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["user"]["id"] == customer.id
    assert body["approval_pending"] is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email, password",
    [("guest@example.com", "wrong-password"), ("nobody@example.com", DEFAULT_PASSWORD)],
    ids=["wrong_password", "unknown_email"],
)
async def test_login_failure_is_uniform(
    client: AsyncClient, customer: User, email: str, password: str
) -> None:
    resp = await client.post(LOGIN_URL, json={"email": email, "password": password})

    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_pending_owner_can_log_in_flagged(
    client: AsyncClient, pending_owner: User
) -> None:
    resp = await client.post(
        LOGIN_URL, json={"email": pending_owner.email, "password": DEFAULT_PASSWORD}
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["approval_pending"] is True
    assert body["message"] == "Your account is pending admin approval."


# ---------------------------------------------------------------------------
# 3. Token handling
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_me_returns_current_user(client: AsyncClient, customer: User) -> None:
    resp = await client.get("/api/auth/me", headers=auth_headers(customer))

    assert resp.status_code == 200
    assert resp.json()["email"] == customer.email


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer not-a-jwt"}],
    ids=["missing", "malformed"],
)
async def test_me_requires_valid_token(
    client: AsyncClient, db: AsyncSession, headers: dict[str, str]
) -> None:
    resp = await client.get("/api/auth/me", headers=headers)

    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "not_authenticated"


@pytest.mark.asyncio
async def test_token_for_deleted_user_is_rejected(client: AsyncClient, db: AsyncSession) -> None:
    token = create_access_token(9999)
    resp = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_logout(client: AsyncClient, customer: User) -> None:
    resp = await client.post("/api/auth/logout", headers=auth_headers(customer))
    assert resp.status_code == 200


# ---------------------------------------------------------------------------
# 4. Profile
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_update_profile(client: AsyncClient, customer: User) -> None:
    resp = await client.put(
        "/api/auth/profile",
        json={"name": "Grace G.", "phone": "+49 30 1234", "address": {"city": "Potsdam"}},
        headers=auth_headers(customer),
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Grace G."
    assert body["phone"] == "+49 30 1234"
    assert body["address"]["city"] == "Potsdam"
    assert body["email"] == customer.email


# ---------------------------------------------------------------------------
# 5. OAuth
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_oauth_creates_customer(client: AsyncClient, db: AsyncSession) -> None:
    resp = await client.post(
        "/api/auth/oauth/callback",
        json={
            "provider": "google",
            "oauth_id": "g-123",
            "email": "oauth@example.com",
            "name": "Olli Auth",
        },
    )

    assert resp.status_code == 200
    user = resp.json()["user"]
    assert user["role"] == "customer"
    assert user["is_verified"] is True
    assert user["oauth_provider"] == "google"


@pytest.mark.asyncio
async def test_oauth_links_existing_account(client: AsyncClient, customer: User) -> None:
    resp = await client.post(
        "/api/auth/oauth/callback",
        json={
            "provider": "github",
            "oauth_id": "gh-7",
            "email": customer.email,
            "name": "Grace",
        },
    )

    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == customer.id
    assert customer.oauth_provider == "github"


@pytest.mark.asyncio
async def test_oauth_rejects_unknown_provider(client: AsyncClient, db: AsyncSession) -> None:
    resp = await client.post(
        "/api/auth/oauth/callback",
        json={"provider": "myspace", "oauth_id": "1", "email": "x@example.com", "name": "X"},
    )
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# 6. Password reset
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_forgot_and_reset_password(
    client: AsyncClient, customer: User, outbox: FakeMailer
) -> None:
    resp = await client.post(FORGOT_URL, json={"email": customer.email})
    assert resp.status_code == 200
    assert len(outbox.sent) == 1
    assert outbox.sent[0]["to"] == customer.email

    match = re.search(r"/reset-password/([0-9a-f]+)", outbox.sent[0]["text"])
    assert match is not None
    token = match.group(1)
    # only the hash is stored
    assert customer.reset_password_token != token

    resp = await client.patch(f"{RESET_URL}/{token}", json={"password": "newpass1"})
    assert resp.status_code == 200
    assert customer.reset_password_token is None

    resp = await client.post(LOGIN_URL, json={"email": customer.email, "password": "newpass1"})
    assert resp.status_code == 200

    # single use
    resp = await client.patch(f"{RESET_URL}/{token}", json={"password": "again12"})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_forgot_password_unknown_email_succeeds_silently(
    client: AsyncClient, db: AsyncSession, outbox: FakeMailer
) -> None:
    resp = await client.post(FORGOT_URL, json={"email": "ghost@example.com"})

    assert resp.status_code == 200
    assert outbox.sent == []


@pytest.mark.asyncio
async def test_forgot_password_mail_failure_clears_token(
    client: AsyncClient, customer: User, outbox: FakeMailer
) -> None:
    outbox.fail = True

    resp = await client.post(FORGOT_URL, json={"email": customer.email})

    assert resp.status_code == 502
    assert resp.json()["error"]["code"] == "upstream_unavailable"
    assert customer.reset_password_token is None
    assert customer.reset_password_expire is None


@pytest.mark.asyncio
async def test_reset_with_unknown_token(client: AsyncClient, db: AsyncSession) -> None:
    resp = await client.patch(f"{RESET_URL}/deadbeef", json={"password": "newpass1"})

    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Invalid or expired reset token"
