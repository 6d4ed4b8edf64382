"""Password hashing and JWT issuance/verification for authentication."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

if TYPE_CHECKING:
    from casedesk.core.config import Settings

# Bcrypt cost (rounds) used when callers do not pass one explicitly.
DEFAULT_BCRYPT_ROUNDS = 10


class Role(str, Enum):
    """Account role; ADMIN is the only privileged role."""

    USER = "user"
    ADMIN = "admin"


class InvalidTokenError(Exception):
    """Token could not be verified. Deliberately carries no reason."""


@dataclass(frozen=True)
class TokenIdentity:
    """Identity asserted by a verified token."""

    user_id: str
    role: Role


def hash_password(plain_password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenService:
    """Issues and verifies signed, time-limited session tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 1440) -> None:
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def issue(self, user_id: str, role: Role | str, now: datetime | None = None) -> str:
        """Create a JWT with sub (user id), role, iat and exp."""
        now = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "role": Role(role).value,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenIdentity:
        """
        Decode and validate a token; return the identity it asserts.
        Raises InvalidTokenError for bad signature, expiry, or malformed payload alike.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError() from e
        sub = payload.get("sub")
        if not isinstance(sub, str) or not sub:
            raise InvalidTokenError()
        try:
            role = Role(payload.get("role"))
        except ValueError as e:
            raise InvalidTokenError() from e
        return TokenIdentity(user_id=sub, role=role)
