"""Shared request builders for auth tests."""

from httpx import AsyncClient
from starlette.requests import Request

REGISTER_PAYLOAD = {
    "username": "sara",
    "fullname": "Sara Ahmadi",
    "email_or_phone": "sara@example.com",
    "password": "s3cret-pass",
    "method": "email",
}


def make_request(cookies: dict[str, str] | None = None) -> Request:
    """Build a bare Starlette request carrying the given cookies."""
    headers = []
    if cookies:
        cookie_header = "; ".join(f"{k}={v}" for k, v in cookies.items())
        headers.append((b"cookie", cookie_header.encode()))
    return Request({"type": "http", "method": "POST", "path": "/", "headers": headers})


async def register_and_verify(client: AsyncClient, **overrides) -> str:
    """Run register + check-otp and return the bearer access token."""
    payload = {**REGISTER_PAYLOAD, **overrides}
    response = await client.post("/auth/register", json=payload)
    assert response.status_code == 201, response.text
    code = response.json()["code"]
    response = await client.post("/auth/check-otp", json={"code": code})
    assert response.status_code == 200, response.text
    return response.json()["access_token"]
