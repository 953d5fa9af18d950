"""Signed, time-bounded identity tokens (JWT, HS256).

Tokens carry a fixed claim set: subject id, username, role, full name, a unique
token id (jti), issued-at, expires-at, issuer, and audience. Validation checks
signature, issuer, audience, and that ``issued_at <= now < expires_at`` with no
clock-skew allowance.
"""

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, fields
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt

from registrar.core.errors import ConfigError

if TYPE_CHECKING:
    from registrar.core.config import Settings
    from registrar.models.user import User

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"

# Minimum signing-secret length in characters.
MIN_SECRET_LENGTH = 32

DEFAULT_EXPIRE_MINUTES = 60

REQUIRED_CLAIMS = ["sub", "username", "role", "jti", "iat", "exp", "iss", "aud"]


@dataclass(frozen=True)
class TokenClaims:
    """Typed claim set extracted from a validated token."""

    subject_id: int
    username: str
    role: str
    full_name: str
    jti: str
    issued_at: datetime
    expires_at: datetime


CLAIM_NAMES = frozenset(f.name for f in fields(TokenClaims))


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Issues and validates bearer tokens for authenticated users."""

    def __init__(
        self,
        secret: str | None,
        issuer: str,
        audience: str,
        expire_minutes: int = DEFAULT_EXPIRE_MINUTES,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret or not secret.strip():
            raise ConfigError("JWT_SECRET must be set.")
        if len(secret) < MIN_SECRET_LENGTH:
            raise ConfigError(
                f"JWT_SECRET must be at least {MIN_SECRET_LENGTH} characters long."
            )
        if not issuer or not audience:
            raise ConfigError("JWT_ISSUER and JWT_AUDIENCE must be set.")
        if expire_minutes < 1:
            raise ConfigError("JWT_EXPIRE_MINUTES must be positive.")
        self._secret = secret
        self.issuer = issuer
        self.audience = audience
        self.ttl = timedelta(minutes=expire_minutes)
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenService":
        secret = settings.JWT_SECRET.get_secret_value() if settings.JWT_SECRET else None
        return cls(
            secret=secret,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def _now(self) -> datetime:
        # JWT timestamps have one-second resolution
        return self._clock().replace(microsecond=0)

    def issue(self, user: "User") -> tuple[str, datetime]:
        """Create a signed token for ``user``; returns (token, expires_at)."""
        now = self._now()
        expires_at = now + self.ttl
        payload: dict[str, Any] = {
            "sub": str(user.id),
            "username": user.username,
            "role": user.role,
            "name": user.full_name,
            "jti": uuid.uuid4().hex,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "iss": self.issuer,
            "aud": self.audience,
        }
        token = jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)
        logger.debug("Issued token", extra={"user_id": user.id, "jti": payload["jti"]})
        return token, expires_at

    def validate(self, token: str) -> TokenClaims | None:
        """Return the token's claims, or None if it is invalid for any reason."""
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
                # iat/exp are checked below against the service clock
                options={"require": REQUIRED_CLAIMS, "verify_exp": False, "verify_iat": False},
            )
        except jwt.PyJWTError as e:
            logger.debug("Token rejected: %s", type(e).__name__)
            return None

        try:
            issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
            claims = TokenClaims(
                subject_id=int(payload["sub"]),
                username=str(payload["username"]),
                role=str(payload["role"]),
                full_name=str(payload.get("name") or ""),
                jti=str(payload["jti"]),
                issued_at=issued_at,
                expires_at=expires_at,
            )
        except (TypeError, ValueError, OverflowError):
            logger.debug("Token rejected: malformed claims")
            return None

        now = self._now()
        if not (claims.issued_at <= now < claims.expires_at):
            logger.debug("Token rejected: outside validity window")
            return None
        return claims

    def extract_claim(self, token: str, claim_name: str) -> Any | None:
        """Return one claim (by TokenClaims field name) from a valid token, else None."""
        if claim_name not in CLAIM_NAMES:
            return None
        claims = self.validate(token)
        if claims is None:
            return None
        return getattr(claims, claim_name)
