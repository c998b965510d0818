"""FastAPI dependencies that resolve the caller from a session token.

The token is read from an `Authorization: Bearer ...` header first, then from
the `token` cookie set at login.
"""

from fastapi import Cookie, Depends, Header, HTTPException
from pydantic import BaseModel

from shared.tokens import InvalidToken, decode_token


class AuthenticatedUser(BaseModel):
    id: str
    name: str
    role: str


def _extract_token(authorization: str | None, cookie_token: str | None) -> str | None:
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            return credentials.strip()
    return cookie_token or None


def current_user(
    authorization: str | None = Header(default=None),
    token: str | None = Cookie(default=None),
) -> AuthenticatedUser:
    raw_token = _extract_token(authorization, token)
    if not raw_token:
        raise HTTPException(status_code=401, detail="Please login to access this resource")

    try:
        claims = decode_token(raw_token)
    except InvalidToken as exc:
        raise HTTPException(status_code=401, detail="Invalid or expired session token") from exc

    return AuthenticatedUser(
        id=claims["sub"],
        name=claims.get("name") or "",
        role=claims.get("role") or "user",
    )


def require_roles(*roles: str):
    """Build a dependency that admits only callers holding one of `roles`."""

    def _dependency(user: AuthenticatedUser = Depends(current_user)) -> AuthenticatedUser:
        if user.role not in roles:
            raise HTTPException(
                status_code=403,
                detail=f"Role: {user.role} is not allowed to access this resource",
            )
        return user

    return _dependency
