from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from config import ApplicationConfig
from src.app.use_cases.auth.dtos import Identity

ALGORITHM = "HS256"


def create_access_token(identity: Identity, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT access token for an authenticated identity

    Args:
        identity: Identity returned by authentication
        expires_delta: Token lifetime (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        JWT token string (HS256)
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES)

    now = datetime.now(UTC)
    payload = {
        "sub": identity.id,
        "email": identity.email,
        "name": identity.name,
        "role": identity.role,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm=ALGORITHM)


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=[ALGORITHM]
        )
        return payload
    except JWTError:
        return None


def identity_from_token(token: str) -> Optional[Identity]:
    payload = verify_jwt(token)
    if payload is None or "sub" not in payload or "email" not in payload:
        return None
    return Identity(
        id=payload["sub"],
        email=payload["email"],
        name=payload.get("name"),
        role=payload.get("role", ""),
    )
