"""Shared request payloads for API tests."""

SIGNUP = {
    "username": "alice123",
    "email": "a@x.com",
    "phone": "1234567890",
    "password": "secret1",
}
