"""
SurfSpots Backend — Security Primitives
=========================================

What:  Roles, password hashing and access-token encoding.
How:   bcrypt for password hashes (salt embedded in the hash); python-jose
       for HS256 JWTs carrying sub, email, role, iat and exp claims.
Who:   Used by AuthService / UserService and the require_admin dependency.
"""

import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from surfspots.config import settings
from surfspots.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# bcrypt only considers the first 72 bytes and newer releases reject longer input
BCRYPT_MAX_BYTES = 72


class Role(str, enum.Enum):
    ADMIN = "admin"


ROLE_NAMES = frozenset(role.value for role in Role)


# ══════════════════════════════════════════════════════════════════════════
# Passwords
# ══════════════════════════════════════════════════════════════════════════

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """True if ``password`` matches ``password_hash``; never raises on bad input."""
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


# ══════════════════════════════════════════════════════════════════════════
# Access tokens
# ══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TokenClaims:
    subject: str
    email: str
    role: str
    issued_at: datetime
    expires_at: datetime

    def has_role(self, role: Role) -> bool:
        return self.role == role.value


def _signing_key() -> str:
    """
    The HMAC key for access tokens.

    Raises:
        AuthenticationError: JWT_SECRET is not configured.
    """
    if not settings.jwt_secret:
        logger.error("JWT_SECRET is not set; refusing to issue or accept access tokens")
        raise AuthenticationError(
            message="Invalid or expired access token.",
            context={"reason": "missing_jwt_secret"},
        )
    return settings.jwt_secret


def create_access_token(
    user_id: str,
    email: str,
    role: Role,
    now: Optional[datetime] = None,
) -> str:
    """Sign a token for the given user with the configured expiry."""
    now = now or datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "email": email,
        "role": role.value,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=settings.jwt_expiry_minutes)).timestamp()),
    }
    return jwt.encode(claims, _signing_key(), algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> TokenClaims:
    """
    Verify signature and expiry, then return the claims.

    Raises:
        AuthenticationError: malformed, tampered or expired token, or no
            signing key configured.
    """
    key = _signing_key()
    try:
        payload = jwt.decode(
            token,
            key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        raise AuthenticationError(
            message="Invalid or expired access token.",
            context={"error_type": type(e).__name__},
        )

    try:
        return TokenClaims(
            subject=str(payload["sub"]),
            email=str(payload.get("email", "")),
            role=str(payload.get("role", "")),
            issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
        )
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError(
            message="Invalid or expired access token.",
            context={"reason": "missing_claims"},
        )
