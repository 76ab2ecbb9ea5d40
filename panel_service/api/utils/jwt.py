from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig

ACCESS_TOKEN_LIFETIME = timedelta(minutes=15)
ALGORITHM = "HS256"


def generate_jwt(
    user_id: UUID,
    session_id: Optional[UUID] = None,
    expires_delta: timedelta = ACCESS_TOKEN_LIFETIME,
) -> str:
    """
    Generate JWT access token

    Args:
        user_id: User UUID
        session_id: Session the token was issued for, if any
        expires_delta: Token expiration duration

    Returns:
        JWT token string (HS256, 15-minute expiry by default)
    """
    issued_at = datetime.now(UTC)
    claims = {
        "user_id": str(user_id),
        "exp": issued_at + expires_delta,
        "iat": issued_at,
    }
    if session_id is not None:
        claims["session_id"] = str(session_id)
    return jwt.encode(claims, ApplicationConfig.JWT_SECRET, algorithm=ALGORITHM)


def verify_jwt(token: str) -> Optional[dict]:
    """Decoded claims, or None for a bad signature, expired token or missing user_id."""
    try:
        claims = jwt.decode(token, ApplicationConfig.JWT_SECRET, algorithms=[ALGORITHM])
    except JWTError:
        return None

    if "user_id" not in claims:
        return None
    return claims
