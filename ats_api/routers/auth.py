"""Authentication endpoints: registration, login, logout and token refresh."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from ats_api.core.deps import get_authentication_service, get_token_pair
from ats_api.core.logging import get_logger
from ats_api.core.security import expired_cookie
from ats_api.routers.models import (
    AuthResponse,
    CreateUserRequest,
    LoginRequest,
    RefreshResponse,
    TokenResponse,
    UserResponse,
)
from ats_api.services.authentication import AuthenticationService, Session

logger = get_logger(__name__)

router = APIRouter(prefix="/authentication", tags=["authentication"])


def _session_response(session: Session, response: Response) -> AuthResponse:
    response.headers["set-cookie"] = session.cookie
    return AuthResponse(
        user=UserResponse.model_validate(session.user),
        xsrf_token=TokenResponse(
            token=session.xsrf_token.token, expires_in=session.xsrf_token.expires_in
        ),
    )


@router.post("/users", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: CreateUserRequest,
    response: Response,
    service: Annotated[AuthenticationService, Depends(get_authentication_service)],
) -> AuthResponse:
    """
    Register a new user and open a session.

    The refresh token is set as an HTTP-only cookie; the XSRF token is
    returned in the body and must be echoed in the ``x-xsrf-token`` header.

    Raises:
        DuplicateEmailError: 400 if the email is already registered
    """
    session = service.register(data.first_name, data.last_name, data.email, data.password)
    return _session_response(session, response)


@router.post("/sessions", response_model=AuthResponse)
def login(
    data: LoginRequest,
    response: Response,
    service: Annotated[AuthenticationService, Depends(get_authentication_service)],
) -> AuthResponse:
    """
    Log in with email and password.

    Raises:
        AuthCredentialsError: 401 on unknown email or wrong password
    """
    session = service.login(data.email, data.password)
    return _session_response(session, response)


@router.delete("/sessions", status_code=status.HTTP_204_NO_CONTENT)
def logout(response: Response) -> None:
    """Expire the refresh cookie. Tokens are stateless, nothing else to revoke."""
    response.headers["set-cookie"] = expired_cookie()


@router.get("/sessions/token", response_model=RefreshResponse)
def refresh_token(
    response: Response,
    tokens: Annotated[tuple[str | None, str | None], Depends(get_token_pair)],
    service: Annotated[AuthenticationService, Depends(get_authentication_service)],
) -> RefreshResponse:
    """
    Rotate the XSRF token and its refresh cookie.

    Raises:
        MissingCredentialsError: 401 if the cookie or the header is absent
        InvalidTokenError: 401 if a token is invalid or they don't belong together
    """
    refresh_cookie, xsrf_header = tokens
    refreshed = service.refresh(refresh_cookie, xsrf_header)
    response.headers["set-cookie"] = refreshed.cookie
    return RefreshResponse(
        xsrf_token=TokenResponse(
            token=refreshed.xsrf_token.token, expires_in=refreshed.xsrf_token.expires_in
        )
    )
