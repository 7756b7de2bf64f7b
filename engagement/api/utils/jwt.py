from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_jwt(external_id: str, email: str, expires_delta: timedelta = timedelta(minutes=15)) -> str:
    """
    Generate an identity token

    Identity is issued upstream; this helper exists for local tooling and
    tests that need a token the API accepts.

    Args:
        external_id: Opaque identity of the person (the ``sub`` claim)
        email: Verified email address
        expires_delta: Token lifetime

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    payload = {
        "sub": external_id,
        "email": email,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"])
    except JWTError:
        return None
    if not payload.get("sub") or not payload.get("email"):
        return None
    return payload
