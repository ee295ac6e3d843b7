"""Registration, login and the XSRF/refresh token protocol."""

from dataclasses import dataclass
from typing import Any

import jwt

from ats_api.core.logging import get_logger
from ats_api.core.security import (
    Token,
    create_cookie,
    create_refresh_token,
    create_xsrf_token,
    hash_password,
    rotate_refresh_token,
    verify_password,
    verify_token,
)
from ats_api.exceptions import (
    AuthCredentialsError,
    DuplicateEmailError,
    InvalidTokenError,
    MissingCredentialsError,
)
from ats_api.models.user import User
from ats_api.repositories.users import UserRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class Session:
    """Outcome of a successful login or registration."""

    user: User
    xsrf_token: Token
    cookie: str


@dataclass(frozen=True)
class RefreshedTokens:
    xsrf_token: Token
    cookie: str


class AuthenticationService:
    """
    Issue and check the XSRF/refresh token pair.

    No state is kept server side: everything needed to validate a request is
    inside the two signed tokens.
    """

    def __init__(self, users: UserRepository):
        self.users = users

    def _open_session(self, user: User) -> Session:
        xsrf_token = create_xsrf_token()
        refresh_token = create_refresh_token(user.id, xsrf_token)
        return Session(user=user, xsrf_token=xsrf_token, cookie=create_cookie(refresh_token))

    def register(self, first_name: str, last_name: str, email: str, password: str) -> Session:
        """
        Create a user and log them in.

        Raises:
            DuplicateEmailError: The email is already registered
        """
        if self.users.get_by_email(email) is not None:
            raise DuplicateEmailError(email)

        user = self.users.add(
            User(
                first_name=first_name,
                last_name=last_name,
                email=email,
                password=hash_password(password),
            )
        )
        logger.info(f"Registered user {user.id}")
        return self._open_session(user)

    def login(self, email: str, password: str) -> Session:
        """
        Check credentials and open a session.

        Raises:
            AuthCredentialsError: Unknown email or wrong password (indistinguishable)
        """
        user = self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password):
            logger.info("Rejected login attempt")
            raise AuthCredentialsError()
        logger.info(f"User {user.id} logged in")
        return self._open_session(user)

    def _verify_pair(self, refresh_cookie: str | None, xsrf_header: str | None) -> dict[str, Any]:
        if not refresh_cookie or not xsrf_header:
            raise MissingCredentialsError()

        try:
            verify_token(xsrf_header)
            claims = verify_token(refresh_cookie)
        except jwt.InvalidTokenError as e:
            logger.info(f"Token verification failed: {type(e).__name__}")
            raise InvalidTokenError() from None

        # Same error whichever side is wrong: a mismatch may be a replayed cookie
        if claims.get("sub") is None or claims.get("xsrf_token") != xsrf_header:
            raise InvalidTokenError()
        return claims

    def refresh(self, refresh_cookie: str | None, xsrf_header: str | None) -> RefreshedTokens:
        """
        Rotate the token pair.

        Raises:
            MissingCredentialsError: Cookie or header absent
            InvalidTokenError: Either token fails verification, or they don't match
        """
        claims = self._verify_pair(refresh_cookie, xsrf_header)
        xsrf_token = create_xsrf_token()
        refresh_token = rotate_refresh_token(claims, xsrf_token)
        logger.info(f"Rotated tokens for user {claims['sub']}")
        return RefreshedTokens(xsrf_token=xsrf_token, cookie=create_cookie(refresh_token))

    def authenticate(self, refresh_cookie: str | None, xsrf_header: str | None) -> User:
        """
        Resolve the user behind a request.

        Raises:
            MissingCredentialsError: Cookie or header absent
            InvalidTokenError: Tokens invalid, mismatched, or the user no longer exists
        """
        claims = self._verify_pair(refresh_cookie, xsrf_header)
        try:
            user_id = int(claims["sub"])
        except ValueError:
            raise InvalidTokenError() from None

        user = self.users.get(user_id)
        if user is None:
            raise InvalidTokenError()
        return user
