"""Bearer tokens and the principal they resolve to.

Tokens are HS256 JWTs carrying the subject (a user id, or ``admin``), the
admin flag and an expiry. Privileges are modelled as capabilities on the
resolved principal rather than by comparing token contents.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum

import jwt

from bakery.errors import Unauthorized

ALGORITHM = "HS256"
ADMIN_SUBJECT = "admin"


class Capability(Enum):
    ADMIN = "admin"


@dataclass(frozen=True)
class Claims:
    subject: str
    is_admin: bool = False
    email: str | None = None
    expires_at: datetime | None = None


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of a request."""

    subject: str
    capabilities: frozenset[Capability] = field(default_factory=frozenset)
    user: object | None = None

    def has(self, capability: Capability) -> bool:
        return capability in self.capabilities

    @classmethod
    def from_claims(cls, claims: Claims, user=None) -> "Principal":
        capabilities = frozenset({Capability.ADMIN}) if claims.is_admin else frozenset()
        return cls(subject=claims.subject, capabilities=capabilities, user=user)


class TokenIssuer:
    def __init__(self, secret: str, ttl_seconds: int = 86400):
        if not secret:
            raise ValueError("A signing secret is required")
        self.secret = secret
        self.ttl_seconds = ttl_seconds

    def issue(self, subject: str, is_admin: bool = False, email: str | None = None) -> str:
        now = datetime.now(UTC)
        payload = {
            "sub": str(subject),
            "isAdmin": bool(is_admin),
            "iat": now,
            "exp": now + timedelta(seconds=self.ttl_seconds),
        }
        if email:
            payload["email"] = email
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> Claims:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise Unauthorized("Token expired, please login again") from None
        except jwt.InvalidTokenError:
            raise Unauthorized("Invalid token, please login again") from None

        subject = payload.get("sub")
        if not subject:
            raise Unauthorized("Invalid token, please login again")

        exp = payload.get("exp")
        return Claims(
            subject=subject,
            is_admin=bool(payload.get("isAdmin", False)),
            email=payload.get("email"),
            expires_at=datetime.fromtimestamp(exp, UTC) if exp else None,
        )
