"""JWT creation and decoding.

Access tokens are issued by the external identity provider and signed with
the shared project secret. Claims this service relies on:
  - sub:    user ID
  - email:  user e-mail (used as the requester address on requests)
  - aud:    audience, must match `settings.jwt_audience`
  - role:   provider role string ("authenticated")
  - exp:    expiry timestamp

`create_access_token` produces tokens with the same shape; it backs local
development and the test suite.
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from snapaml.config import settings

ALGORITHM = settings.jwt_algorithm


def create_access_token(
    user_id: str,
    email: str | None = None,
    role: str = "authenticated",
    expires_delta: timedelta | None = None,
) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {
        "sub": user_id,
        "role": role,
        "aud": settings.jwt_audience,
        "exp": expire,
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and validate a JWT. Returns empty dict on failure."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[ALGORITHM],
            audience=settings.jwt_audience,
        )
    except JWTError:
        return {}
