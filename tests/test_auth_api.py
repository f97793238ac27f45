"""Auth API tests.

Learn: Tests cover:
1. Sign-up, role-specific fields, duplicate phones (formatting-insensitive)
2. Sign-in, identical failures for unknown phone and wrong password
3. check-phone
4. Bearer gate: missing token (401) vs bad token (403)
5. Profile update and password change
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from kazi.auth.jwt import TokenIssuer
from kazi.auth.password import verify_password
from kazi.db.models import User
from kazi.services.user_service import UserService

from conftest import TEST_SECRET, unique_phone


def _signup_body(**overrides) -> dict:
    body = {
        "name": "Amina Otieno",
        "phone": unique_phone(),
        "location": "Mombasa",
        "password": "pass-1234",
        "role": "employee",
        "specialization": "Tailoring",
    }
    body.update(overrides)
    return body


# ═══════════════════════════════════════════════════════════
# Sign-up
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_signup_returns_token_and_user(client, app):
    body = _signup_body(phone="+254 700 111 222")
    r = await client.post("/api/auth/signup", json=body)
    assert r.status_code == 201
    data = r.json()
    assert data["success"] is True
    user = data["user"]
    assert user["phone"] == "254700111222"
    assert user["role"] == "employee"
    assert user["specialization"] == "Tailoring"
    assert user["jobType"] == ""
    assert "joinDate" in user and "lastLogin" in user
    assert "password" not in user
    assert "passwordHash" not in user

    claims = app.state.token_issuer.verify(data["token"])
    assert claims.subject_id == user["id"]
    assert claims.role == "employee"
    assert claims.phone == "254700111222"


@pytest.mark.asyncio
async def test_signup_stores_only_digest(client, app):
    body = _signup_body()
    r = await client.post("/api/auth/signup", json=body)
    assert r.status_code == 201

    async with app.state.session_factory() as session:
        user_id = uuid.UUID(r.json()["user"]["id"])
        result = await session.execute(select(User).where(User.id == user_id))
        stored = result.scalars().one()
    assert stored.password_hash != body["password"]
    assert verify_password(body["password"], stored.password_hash)
    assert not verify_password("something-else", stored.password_hash)


@pytest.mark.asyncio
async def test_signup_employer_keeps_job_type_only(client):
    body = _signup_body(role="employer", jobType="Farming", specialization="Ignored")
    r = await client.post("/api/auth/signup", json=body)
    assert r.status_code == 201
    user = r.json()["user"]
    assert user["role"] == "employer"
    assert user["jobType"] == "Farming"
    assert user["specialization"] == ""


@pytest.mark.asyncio
async def test_signup_duplicate_phone_conflicts(client):
    body = _signup_body(phone="254712345678")
    r1 = await client.post("/api/auth/signup", json=body)
    assert r1.status_code == 201

    # Same digits, different formatting
    r2 = await client.post(
        "/api/auth/signup", json=_signup_body(phone="+254 712-345 678", role="employer")
    )
    assert r2.status_code == 409
    assert r2.json() == {
        "success": False,
        "error": "User already exists with this phone number",
    }


@pytest.mark.asyncio
async def test_signup_duplicate_caught_at_insert(client, monkeypatch):
    """Two sign-ups that both pass the existence check still yield one user."""

    async def never_exists(self, phone):
        return False

    monkeypatch.setattr(UserService, "phone_exists", never_exists)
    body = _signup_body()
    r1 = await client.post("/api/auth/signup", json=body)
    r2 = await client.post("/api/auth/signup", json=body)
    assert r1.status_code == 201
    assert r2.status_code == 409
    assert r2.json() == {
        "success": False,
        "error": "User already exists with this phone number",
    }


@pytest.mark.asyncio
async def test_signup_dates_carry_utc_offset(client):
    r = await client.post("/api/auth/signup", json=_signup_body())
    user = r.json()["user"]
    for key in ("joinDate", "lastLogin"):
        stamp = datetime.fromisoformat(user[key].replace("Z", "+00:00"))
        assert stamp.utcoffset() == timedelta(0)


@pytest.mark.asyncio
async def test_signup_local_and_international_forms_are_distinct(client):
    """No country-code folding: 07... and +2547... are different digit strings."""
    r1 = await client.post("/api/auth/signup", json=_signup_body(phone="0712345678"))
    r2 = await client.post("/api/auth/signup", json=_signup_body(phone="+254 712 345 678"))
    assert r1.status_code == 201
    assert r2.status_code == 201


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["name", "phone", "location", "password", "role"])
async def test_signup_missing_field(client, missing):
    body = _signup_body()
    del body[missing]
    r = await client.post("/api/auth/signup", json=body)
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert missing in r.json()["error"]


@pytest.mark.asyncio
async def test_signup_blank_name_rejected(client):
    r = await client.post("/api/auth/signup", json=_signup_body(name="   "))
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_signup_invalid_role(client):
    r = await client.post("/api/auth/signup", json=_signup_body(role="admin"))
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_signup_phone_without_digits(client):
    r = await client.post("/api/auth/signup", json=_signup_body(phone="call me"))
    assert r.status_code == 400
    assert r.json()["error"] == "Phone number must contain digits"


# ═══════════════════════════════════════════════════════════
# Sign-in
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_signup_then_signin_round_trip(client, app):
    body = _signup_body(phone="0733 000 111")
    r = await client.post("/api/auth/signup", json=body)
    user_id = r.json()["user"]["id"]

    r = await client.post(
        "/api/auth/signin", json={"phone": "0733-000-111", "password": body["password"]}
    )
    assert r.status_code == 200
    data = r.json()
    assert data["success"] is True
    assert data["user"]["id"] == user_id
    claims = app.state.token_issuer.verify(data["token"])
    assert claims.subject_id == user_id


@pytest.mark.asyncio
async def test_signin_updates_last_login(client):
    body = _signup_body()
    r = await client.post("/api/auth/signup", json=body)
    first_login = r.json()["user"]["lastLogin"]

    r = await client.post(
        "/api/auth/signin", json={"phone": body["phone"], "password": body["password"]}
    )
    assert r.status_code == 200
    assert r.json()["user"]["lastLogin"] > first_login


@pytest.mark.asyncio
async def test_signin_failures_are_indistinguishable(client):
    body = _signup_body()
    await client.post("/api/auth/signup", json=body)

    wrong_password = await client.post(
        "/api/auth/signin", json={"phone": body["phone"], "password": "nope"}
    )
    unknown_phone = await client.post(
        "/api/auth/signin", json={"phone": unique_phone(), "password": "nope"}
    )
    assert wrong_password.status_code == unknown_phone.status_code == 401
    assert wrong_password.json() == unknown_phone.json()
    assert wrong_password.json()["success"] is False


@pytest.mark.asyncio
async def test_signin_missing_fields(client):
    r = await client.post("/api/auth/signin", json={"phone": "0712345678"})
    assert r.status_code == 400
    r = await client.post("/api/auth/signin", json={"phone": "", "password": "x"})
    assert r.status_code == 400


# ═══════════════════════════════════════════════════════════
# check-phone
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_check_phone(client, employee):
    phone = employee["user"]["phone"]
    formatted = f"{phone[:4]} {phone[4:7]} {phone[7:]}"
    r = await client.post("/api/auth/check-phone", json={"phone": formatted})
    assert r.status_code == 200
    assert r.json() == {"exists": True}

    r = await client.post("/api/auth/check-phone", json={"phone": unique_phone()})
    assert r.json() == {"exists": False}

    r = await client.post("/api/auth/check-phone", json={})
    assert r.json() == {"exists": False}


# ═══════════════════════════════════════════════════════════
# Bearer gate
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_me_with_token(client, employee):
    r = await client.get("/api/auth/me", headers=employee["headers"])
    assert r.status_code == 200
    assert r.json()["user"]["id"] == employee["user"]["id"]


@pytest.mark.asyncio
async def test_me_without_token(client):
    r = await client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.headers["WWW-Authenticate"] == "Bearer"
    assert r.json()["success"] is False


@pytest.mark.asyncio
async def test_me_with_non_bearer_header(client, employee):
    r = await client.get(
        "/api/auth/me", headers={"Authorization": f"Token {employee['token']}"}
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_me_with_invalid_token(client):
    r = await client.get(
        "/api/auth/me", headers={"Authorization": "Bearer invalid_token_here"}
    )
    assert r.status_code == 403
    assert r.json()["success"] is False


@pytest.mark.asyncio
async def test_me_with_foreign_token(client, employee):
    token = TokenIssuer("someone-elses-secret").issue(
        employee["user"]["id"], employee["user"]["phone"], "employee"
    )
    r = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_me_with_expired_token(client, employee):
    token = TokenIssuer(TEST_SECRET).issue(
        employee["user"]["id"],
        employee["user"]["phone"],
        "employee",
        now=datetime.now(timezone.utc) - timedelta(hours=25),
    )
    r = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 403


# ═══════════════════════════════════════════════════════════
# Profile and password
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_update_profile_requires_auth(client):
    r = await client.put("/api/auth/profile", json={"name": "X"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_update_profile_employee(client, employee):
    r = await client.put(
        "/api/auth/profile",
        json={
            "name": "New Name",
            "location": "Nakuru",
            "specialization": "Welding",
            "jobType": "ignored for employees",
            "role": "employer",
        },
        headers=employee["headers"],
    )
    assert r.status_code == 200
    user = r.json()["user"]
    assert user["name"] == "New Name"
    assert user["location"] == "Nakuru"
    assert user["specialization"] == "Welding"
    assert user["jobType"] == ""
    assert user["role"] == "employee"
    assert user["phone"] == employee["user"]["phone"]


@pytest.mark.asyncio
async def test_update_profile_employer_job_type(client, employer):
    r = await client.put(
        "/api/auth/profile",
        json={"jobType": "Retail", "specialization": "ignored"},
        headers=employer["headers"],
    )
    assert r.status_code == 200
    user = r.json()["user"]
    assert user["jobType"] == "Retail"
    assert user["specialization"] == ""
    assert user["name"] == employer["user"]["name"]


@pytest.mark.asyncio
async def test_update_profile_unknown_user(client):
    token = TokenIssuer(TEST_SECRET).issue(
        "00000000-0000-0000-0000-000000000001", "0700000000", "employee"
    )
    r = await client.put(
        "/api/auth/profile",
        json={"name": "Ghost"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_change_password(client, employee):
    r = await client.put(
        "/api/auth/password",
        json={"currentPassword": employee["password"], "newPassword": "brand-new-pass"},
        headers=employee["headers"],
    )
    assert r.status_code == 200
    assert r.json()["success"] is True

    phone = employee["user"]["phone"]
    old = await client.post(
        "/api/auth/signin", json={"phone": phone, "password": employee["password"]}
    )
    assert old.status_code == 401
    new = await client.post(
        "/api/auth/signin", json={"phone": phone, "password": "brand-new-pass"}
    )
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_change_password_wrong_current(client, employee):
    r = await client.put(
        "/api/auth/password",
        json={"currentPassword": "not-it", "newPassword": "brand-new-pass"},
        headers=employee["headers"],
    )
    assert r.status_code == 401
    assert r.json()["error"] == "Current password is incorrect"


@pytest.mark.asyncio
async def test_change_password_missing_fields(client, employee):
    r = await client.put(
        "/api/auth/password",
        json={"currentPassword": employee["password"]},
        headers=employee["headers"],
    )
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_token_survives_password_change(client, employee):
    """Issued tokens are not revoked by a password change."""
    await client.put(
        "/api/auth/password",
        json={"currentPassword": employee["password"], "newPassword": "brand-new-pass"},
        headers=employee["headers"],
    )
    r = await client.get("/api/auth/me", headers=employee["headers"])
    assert r.status_code == 200
