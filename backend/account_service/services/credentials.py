"""Credential Service — bcrypt password hashing and JWT bearer tokens.

Invariants:
    - hash_password is salted: the same plaintext never hashes to the same string twice
    - verify_password uses bcrypt.checkpw (constant-time); a malformed hash verifies False
    - Plaintext over MAX_PASSWORD_BYTES never reaches bcrypt: hashing raises VALIDATION,
      verification returns False
    - Tokens are HS256 JWTs carrying account_id + email, expiring ttl after issuance
    - verify_token failures are ALWAYS ServiceError(UNAUTHORIZED) — never a jwt exception

Design Decisions:
    - bcrypt work runs in asyncio.to_thread: CPU-bound hashing must not stall the event loop
    - Stateless tokens, no revocation list
    - Clock injectable: expiry is testable without sleeping
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import UUID

import bcrypt
import jwt

from account_service.config import Settings
from account_service.core.domain_types import AccountId
from account_service.core.errors import ErrorKind, ServiceError
from account_service.core.validation_rules import MAX_PASSWORD_BYTES

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Unauthorized: Invalid or expired token"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenClaims:
    """Verified identity carried by a bearer token."""
    account_id: AccountId
    email: str
    expires_at: datetime


class CredentialService:
    """Hashes passwords and signs/verifies bearer tokens."""

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        token_ttl: timedelta = timedelta(hours=1),
        bcrypt_rounds: int = 10,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret:
            raise ValueError("A token signing secret must be provided")
        self._secret = secret
        self._algorithm = algorithm
        self._token_ttl = token_ttl
        self._bcrypt_rounds = bcrypt_rounds
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialService":
        return cls(
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            token_ttl=timedelta(seconds=settings.token_ttl_seconds),
            bcrypt_rounds=settings.bcrypt_rounds,
        )

    @property
    def token_ttl(self) -> timedelta:
        return self._token_ttl

    # ─── Passwords ───────────────────────────────────────────────

    async def hash_password(self, plaintext: str) -> str:
        return await asyncio.to_thread(self._hash_sync, plaintext)

    async def verify_password(self, plaintext: str, hashed: str) -> bool:
        return await asyncio.to_thread(self._verify_sync, plaintext, hashed)

    def _hash_sync(self, plaintext: str) -> str:
        secret = plaintext.encode("utf-8")
        if len(secret) > MAX_PASSWORD_BYTES:
            raise ServiceError(
                ErrorKind.VALIDATION,
                f"Validation error: password: must be at most {MAX_PASSWORD_BYTES} bytes",
                detail="password",
            )
        salt = bcrypt.gensalt(rounds=self._bcrypt_rounds)
        return bcrypt.hashpw(secret, salt).decode("utf-8")

    @staticmethod
    def _verify_sync(plaintext: str, hashed: str) -> bool:
        secret = plaintext.encode("utf-8")
        if len(secret) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(secret, hashed.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            logger.warning("Stored password hash is malformed")
            return False

    # ─── Tokens ──────────────────────────────────────────────────

    def issue_token(self, account_id: AccountId | UUID | str, email: str) -> str:
        """Sign {account_id, email} with iat/exp claims."""
        now = self._clock()
        payload = {
            "account_id": str(account_id),
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int((now + self._token_ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify_token(self, token: str | None) -> TokenClaims:
        """Decode token or raise UNAUTHORIZED (absent, malformed, expired, bad signature)."""
        if token is None or not token.strip():
            raise ServiceError(ErrorKind.UNAUTHORIZED)
        try:
            payload = jwt.decode(
                token.strip(),
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
            claims = TokenClaims(
                account_id=AccountId(UUID(payload["account_id"])),
                email=str(payload["email"]),
                expires_at=datetime.fromtimestamp(payload["exp"], timezone.utc),
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired bearer token")
            raise ServiceError(ErrorKind.UNAUTHORIZED, INVALID_TOKEN_MESSAGE) from None
        except (jwt.InvalidTokenError, KeyError, ValueError, TypeError):
            logger.info("Rejected invalid bearer token")
            raise ServiceError(ErrorKind.UNAUTHORIZED, INVALID_TOKEN_MESSAGE) from None
        return claims
