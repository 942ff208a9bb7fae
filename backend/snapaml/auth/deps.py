"""FastAPI dependencies for authentication.

Dependencies:
  get_current_user  → decode the bearer JWT and return the caller identity
"""

from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from snapaml.auth.jwt import decode_token
from snapaml.middleware.exceptions import NotAuthenticated

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    id: str
    email: str | None = None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CurrentUser:
    """Return the authenticated caller, or raise NotAuthenticated.

    Users live in the identity provider; there is no local users table,
    so the token claims are the whole identity.
    """
    if credentials is None:
        raise NotAuthenticated()

    payload = decode_token(credentials.credentials)
    user_id: str | None = payload.get("sub")
    if not user_id:
        raise NotAuthenticated("Invalid or expired token")

    return CurrentUser(id=user_id, email=payload.get("email"))
