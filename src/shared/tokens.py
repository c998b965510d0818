"""Session tokens: HS256 JWTs carrying the user's id, name and role.

Identity issues tokens at registration, login and password reset. Every
context verifies them through `shared.auth` without touching the Identity
repository, so the claims carry what the other contexts need to know.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from shared import config


class InvalidToken(Exception):
    """Raised when a session token cannot be decoded or has expired."""


def issue_token(user_id: str, name: str, role: str, now: datetime | None = None) -> str:
    now = now or datetime.now(UTC)
    claims = {
        "sub": str(user_id),
        "name": name,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=config.JWT_EXPIRE_DAYS)).timestamp()),
    }
    return jwt.encode(claims, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Return the verified claims of `token`.

    Raises:
        InvalidToken: signature mismatch, malformed token, expiry, or missing subject.
    """
    try:
        claims = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except JWTError as exc:
        raise InvalidToken(str(exc)) from exc

    if not claims.get("sub"):
        raise InvalidToken("Token has no subject")
    return claims
