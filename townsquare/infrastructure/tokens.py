"""Access Tokens — JWT issue/verify for the authenticated-identity cookie.

Invariants:
    - Token subject is the identity key; `name` carries the display name
    - decode_access_token raises UnauthenticatedError for any invalid/expired token
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import JWTError, jwt

from townsquare.config import get_settings
from townsquare.core.domain_types import CurrentIdentity, IdentityKey
from townsquare.core.errors import UnauthenticatedError

ACCESS_TOKEN_COOKIE = "access_token"


def create_access_token(key: UUID, display_name: str) -> str:
    """Create a signed JWT for the given identity."""
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(key),
        "name": display_name,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_expire_minutes),
    }
    return jwt.encode(
        payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> CurrentIdentity:
    """Decode and validate a JWT into the caller's identity."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm],
        )
        return CurrentIdentity(
            key=IdentityKey(UUID(payload["sub"])),
            display_name=payload["name"],
        )
    except (JWTError, KeyError, ValueError):
        raise UnauthenticatedError("Invalid or expired session") from None
