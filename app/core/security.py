"""Password hashing and JWT creation/verification for authentication."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from app.core.config import settings
from app.core.errors import ExpiredToken, MalformedToken, MissingToken
from app.core.roles import Role

# Identifiers bcrypt writes at the start of every hash ($2b$12$<22 salt><31 digest>).
BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
BCRYPT_HASH_LEN = 60
# bcrypt only looks at the first 72 bytes of input.
BCRYPT_MAX_BYTES = 72

# Min/max lengths for email and password validation.
EMAIL_MAX_LEN = 255
NAME_MAX_LEN = 100
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes verify as False."""
    if not hashed:
        return False
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def is_password_hash(value: str | None) -> bool:
    """True if value already looks like a bcrypt hash and must not be hashed again."""
    return bool(value) and len(value) == BCRYPT_HASH_LEN and value.startswith(BCRYPT_PREFIXES)


def prepare_password(value: str) -> str:
    """Hash `value` for storage unless it is already a bcrypt hash."""
    if is_password_hash(value):
        return value
    return hash_password(value)


@dataclass(frozen=True)
class Identity:
    """Verified caller identity extracted from an access token."""

    id: int
    email: str
    role: Role


class TokenService:
    """
    Issues and verifies signed JWTs with a single symmetric secret.

    The secret is passed in at construction; rotating it invalidates every
    token issued under the previous one.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(hours=24),
        refresh_ttl: timedelta = timedelta(days=7),
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    def _encode(self, payload: dict[str, Any]) -> str:
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def issue_access_token(
        self,
        user_id: int,
        email: str,
        role: Role | str,
        now: datetime | None = None,
    ) -> str:
        """Create an access token carrying sub, email, role, iat and exp."""
        if user_id is None or not email or not role:
            raise ValueError("id, email and role are required to issue an access token")
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "email": email,
            "role": Role(role).value,
            "type": ACCESS_TOKEN_TYPE,
            "iat": issued_at,
            "exp": issued_at + self.access_ttl,
        }
        return self._encode(payload)

    def issue_refresh_token(self, user_id: int, now: datetime | None = None) -> str:
        """Create a refresh token carrying only sub and type=refresh."""
        if user_id is None:
            raise ValueError("id is required to issue a refresh token")
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "type": REFRESH_TOKEN_TYPE,
            "iat": issued_at,
            "exp": issued_at + self.refresh_ttl,
        }
        return self._encode(payload)

    def decode(self, token: str | None) -> dict[str, Any]:
        """
        Check signature and expiry; return the raw claims.
        Raises MissingToken, ExpiredToken or MalformedToken.
        """
        if not token:
            raise MissingToken()
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise ExpiredToken() from e
        except jwt.PyJWTError as e:
            raise MalformedToken() from e

    def verify(self, token: str | None) -> Identity:
        """Verify an access token and return the identity it carries."""
        payload = self.decode(token)
        if payload.get("type", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
            raise MalformedToken("Not an access token")
        try:
            return Identity(
                id=int(payload["sub"]),
                email=str(payload["email"]),
                role=Role(payload["role"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedToken("Invalid token payload") from e


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide TokenService built once from settings."""
    return TokenService(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        access_ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
        refresh_ttl=timedelta(minutes=settings.JWT_REFRESH_EXPIRE_MINUTES),
    )
