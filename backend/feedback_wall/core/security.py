import uuid
from datetime import datetime, timedelta, timezone

import jwt

from feedback_wall.config import get_settings

settings = get_settings()


def create_access_token(
    user_id: uuid.UUID,
    email: str,
    user_metadata: dict | None = None,
) -> str:
    """Create an access token shaped like the identity provider's.

    Only used for local development and tests; in production tokens come from
    the provider and are merely verified here.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "user_metadata": user_metadata or {},
        "role": "authenticated",
        "iat": now,
        "exp": now + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    if settings.JWT_AUDIENCE:
        payload["aud"] = settings.JWT_AUDIENCE
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and verify a JWT token."""
    options = {"require": ["sub", "exp"]}
    if not settings.JWT_AUDIENCE:
        options["verify_aud"] = False
    return jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        options=options,
    )
