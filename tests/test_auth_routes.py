"""End-to-end tests for /auth and /user routes over the ASGI app."""

from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from app.common.enums import AuthMessage, PublicMessage
from app.core.config import settings
from app.db.models import Otp, Profile, User
from tests.helpers import REGISTER_PAYLOAD, register_and_verify


def _otp_set_cookie(response) -> list[str]:
    """Return the lower-cased `;`-separated parts of the otp Set-Cookie header."""
    headers = [h for h in response.headers.get_list("set-cookie") if h.startswith("otp=")]
    assert len(headers) == 1, headers
    return [part.strip().lower() for part in headers[0].split(";")]


async def test_healthcheck(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert "running" in response.json()["message"]


async def test_register_sets_otp_cookie_and_returns_code(client, test_db):
    response = await client.post("/auth/register", json=REGISTER_PAYLOAD)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == PublicMessage.SentOtp.value
    assert len(body["code"]) == 5
    assert "otp" in response.cookies

    user = await test_db.scalar(select(User).where(User.username == "sara"))
    assert user.email == "sara@example.com"
    assert user.phone is None
    assert user.password != REGISTER_PAYLOAD["password"]
    assert user.verify_email is False

    profile = await test_db.scalar(select(Profile).where(Profile.user_id == user.id))
    assert profile.fullname == "Sara Ahmadi"
    assert user.profile_id == profile.id

    otp = await test_db.scalar(select(Otp).where(Otp.user_id == user.id))
    assert user.otp_id == otp.id
    assert otp.code == body["code"]


async def test_register_with_phone(client, test_db):
    payload = {**REGISTER_PAYLOAD, "email_or_phone": "09121234567", "method": "phone"}
    response = await client.post("/auth/register", json=payload)
    assert response.status_code == 201

    user = await test_db.scalar(select(User).where(User.username == "sara"))
    assert user.phone == "09121234567"
    assert user.email is None


async def test_register_duplicate_contact_conflicts(client):
    await client.post("/auth/register", json=REGISTER_PAYLOAD)
    response = await client.post("/auth/register", json={**REGISTER_PAYLOAD, "username": "other"})
    assert response.status_code == 409
    assert response.json()["detail"] == AuthMessage.AlreadyExistAccount.value


async def test_register_duplicate_username_conflicts(client):
    await client.post("/auth/register", json=REGISTER_PAYLOAD)
    response = await client.post("/auth/register", json={**REGISTER_PAYLOAD, "email_or_phone": "new@example.com"})
    assert response.status_code == 409
    assert response.json()["detail"] == AuthMessage.AlreadyExistUsername.value


async def test_register_rejects_malformed_email(client):
    response = await client.post("/auth/register", json={**REGISTER_PAYLOAD, "email_or_phone": "sara-at-example"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Email format is incorrect"


async def test_register_rejects_username_method(client):
    response = await client.post("/auth/register", json={**REGISTER_PAYLOAD, "method": "username"})
    assert response.status_code == 422


async def test_register_rejects_short_password(client):
    response = await client.post("/auth/register", json={**REGISTER_PAYLOAD, "password": "123"})
    assert response.status_code == 422


async def test_check_otp_issues_access_token_and_verifies_email(client, test_db):
    response = await client.post("/auth/register", json=REGISTER_PAYLOAD)
    code = response.json()["code"]

    response = await client.post("/auth/check-otp", json={"code": code})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == PublicMessage.LoggedIn.value
    assert body["token_type"] == "bearer"
    assert body["access_token"]

    user = await test_db.scalar(select(User).where(User.username == "sara"))
    assert user.verify_email is True
    assert user.verify_phone is False


async def test_check_otp_with_phone_verifies_phone(client, test_db):
    await register_and_verify(client, email_or_phone="09121234567", method="phone")

    user = await test_db.scalar(select(User).where(User.username == "sara"))
    assert user.verify_phone is True
    assert user.verify_email is False


async def test_check_otp_wrong_code(client):
    response = await client.post("/auth/register", json=REGISTER_PAYLOAD)
    code = response.json()["code"]
    wrong = "10000" if code != "10000" else "10001"

    response = await client.post("/auth/check-otp", json={"code": wrong})
    assert response.status_code == 401
    assert response.json()["detail"] == AuthMessage.TryAgain.value


async def test_otp_cookie_attributes_on_register_and_login(client):
    response = await client.post("/auth/register", json=REGISTER_PAYLOAD)
    attrs = _otp_set_cookie(response)
    assert "httponly" in attrs
    assert "max-age=120" in attrs
    assert "samesite=lax" in attrs

    response = await client.post(
        "/auth/login", json={"username": "sara", "password": REGISTER_PAYLOAD["password"], "method": "username"}
    )
    attrs = _otp_set_cookie(response)
    assert "httponly" in attrs
    assert "max-age=120" in attrs
    assert "samesite=lax" in attrs


async def test_check_otp_clears_otp_cookie(client):
    response = await client.post("/auth/register", json=REGISTER_PAYLOAD)
    code = response.json()["code"]

    response = await client.post("/auth/check-otp", json={"code": code})
    assert response.status_code == 200

    attrs = _otp_set_cookie(response)
    assert attrs[0] == 'otp=""'
    assert "max-age=0" in attrs


async def test_check_otp_locks_after_repeated_wrong_codes(client, monkeypatch):
    monkeypatch.setattr(settings, "OTP_MAX_ATTEMPTS", 2)
    response = await client.post("/auth/register", json=REGISTER_PAYLOAD)
    code = response.json()["code"]
    wrong = "10000" if code != "10000" else "10001"

    for _ in range(2):
        response = await client.post("/auth/check-otp", json={"code": wrong})
        assert response.json()["detail"] == AuthMessage.TryAgain.value

    response = await client.post("/auth/check-otp", json={"code": code})
    assert response.status_code == 401
    assert response.json()["detail"] == AuthMessage.ExpiredCode.value


async def test_check_otp_without_cookie(client):
    response = await client.post("/auth/check-otp", json={"code": "12345"})
    assert response.status_code == 401
    assert response.json()["detail"] == AuthMessage.ExpiredCode.value


async def test_check_otp_rejects_non_numeric_code(client):
    response = await client.post("/auth/check-otp", json={"code": "abcde"})
    assert response.status_code == 422


async def test_check_otp_after_expiry(client, test_db):
    response = await client.post("/auth/register", json=REGISTER_PAYLOAD)
    code = response.json()["code"]

    otp = await test_db.scalar(select(Otp))
    otp.expires_in = datetime.now(timezone.utc) - timedelta(seconds=1)
    await test_db.commit()

    response = await client.post("/auth/check-otp", json={"code": code})
    assert response.status_code == 401
    assert response.json()["detail"] == AuthMessage.ExpiredCode.value


async def test_login_unknown_account(client):
    response = await client.post(
        "/auth/login", json={"username": "ghost@example.com", "password": "whatever", "method": "email"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == AuthMessage.NotFoundAccount.value


async def test_login_wrong_password(client):
    await client.post("/auth/register", json=REGISTER_PAYLOAD)
    response = await client.post(
        "/auth/login", json={"username": "sara@example.com", "password": "bad-password", "method": "email"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "email or password is incorrect"


async def test_login_reissues_otp_in_same_row(client, test_db):
    response = await client.post("/auth/register", json=REGISTER_PAYLOAD)
    first_otp = await test_db.scalar(select(Otp))
    first_id = first_otp.id

    response = await client.post(
        "/auth/login", json={"username": "sara", "password": REGISTER_PAYLOAD["password"], "method": "username"}
    )
    assert response.status_code == 200
    assert "otp" in response.cookies

    test_db.expire_all()
    rows = (await test_db.scalars(select(Otp))).all()
    assert len(rows) == 1
    assert rows[0].id == first_id
    assert rows[0].code == response.json()["code"]
    assert rows[0].method == "username"


async def test_login_by_username_does_not_flip_verification(client, test_db):
    await client.post("/auth/register", json=REGISTER_PAYLOAD)
    response = await client.post(
        "/auth/login", json={"username": "sara", "password": REGISTER_PAYLOAD["password"], "method": "username"}
    )
    response = await client.post("/auth/check-otp", json={"code": response.json()["code"]})
    assert response.status_code == 200

    user = await test_db.scalar(select(User).where(User.username == "sara"))
    assert user.verify_email is False
    assert user.verify_phone is False


async def test_login_hides_code_when_exposure_disabled(client, monkeypatch):
    monkeypatch.setattr(settings, "OTP_EXPOSE_CODE", False)
    response = await client.post("/auth/register", json=REGISTER_PAYLOAD)
    assert response.status_code == 201
    assert "code" not in response.json()


async def test_profile_requires_token(client):
    response = await client.get("/user/profile")
    assert response.status_code == 401
    assert response.json()["detail"] == AuthMessage.LoginIsRequired.value


async def test_profile_rejects_bad_token(client):
    response = await client.get("/user/profile", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401
    assert response.json()["detail"] == AuthMessage.LoginAgain.value


async def test_profile_returns_user_and_profile(client, auth_headers):
    response = await client.get("/user/profile", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "sara"
    assert body["email"] == "sara@example.com"
    assert body["verify_email"] is True
    assert body["profile"]["fullname"] == "Sara Ahmadi"
    assert "password" not in body
