"""Token and password primitives for authentication.

Two cooperating JWTs are issued:

- the XSRF token: short lived, returned in the response body and sent back
  by clients in the ``x-xsrf-token`` header; it carries no subject;
- the refresh token: long lived, stored in the HTTP-only ``Authorization``
  cookie; it carries the user id and the XSRF token it was issued with.

A request is authentic only if both verify and the refresh token's
companion value equals the header value.
"""

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from ats_api.core.settings import get_settings


@dataclass(frozen=True)
class Token:
    """A signed token and its lifetime in seconds."""

    token: str
    expires_in: int


def _encode(payload: dict[str, Any]) -> str:
    settings = get_settings()
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_xsrf_token() -> Token:
    """
    Create a short-lived XSRF (access) token.

    Returns:
        Token with the configured access lifetime
    """
    settings = get_settings()
    expires_in = settings.access_token_expire_seconds
    now = datetime.now(UTC)
    payload = {
        # Random id so two tokens issued in the same second still differ
        "jti": secrets.token_urlsafe(16),
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }
    return Token(token=_encode(payload), expires_in=expires_in)


def create_refresh_token(user_id: int, xsrf_token: Token) -> Token:
    """
    Create a refresh token bound to a user and an XSRF token.

    Args:
        user_id: Subject of the token
        xsrf_token: Companion XSRF token issued alongside

    Returns:
        Token with the configured refresh lifetime
    """
    settings = get_settings()
    expires_in = settings.refresh_token_expire_seconds
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "xsrf_token": xsrf_token.token,
        "ttl": expires_in,
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }
    return Token(token=_encode(payload), expires_in=expires_in)


def rotate_refresh_token(claims: dict[str, Any], xsrf_token: Token) -> Token:
    """
    Re-issue a verified refresh token with a new companion XSRF token.

    The subject and the absolute expiry are kept, so rotation never extends
    a session beyond its original lifetime.

    Args:
        claims: Decoded claims of the refresh token being rotated
        xsrf_token: Newly issued XSRF token

    Returns:
        Token whose lifetime is the remaining time of the original
    """
    now = datetime.now(UTC)
    expires_at = int(claims["exp"])
    payload = {
        "sub": claims["sub"],
        "xsrf_token": xsrf_token.token,
        "ttl": claims.get("ttl", get_settings().refresh_token_expire_seconds),
        "iat": now,
        "exp": expires_at,
    }
    remaining = max(expires_at - int(now.timestamp()), 0)
    return Token(token=_encode(payload), expires_in=remaining)


def verify_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry of a token and decode it.

    Raises:
        jwt.ExpiredSignatureError: If token is expired
        jwt.InvalidTokenError: If token is invalid
    """
    settings = get_settings()
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["exp"]},
    )


def create_cookie(token: Token) -> str:
    """Format the refresh token as an HTTP-only, root-scoped cookie."""
    name = get_settings().auth_cookie_name
    return f"{name}={token.token}; Path=/; HttpOnly; Max-Age={token.expires_in}"


def expired_cookie() -> str:
    """Cookie that makes the client drop its refresh token."""
    name = get_settings().auth_cookie_name
    return f"{name}=; Path=/; HttpOnly; Max-Age=0"


def hash_password(password: str) -> str:
    rounds = get_settings().bcrypt_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
