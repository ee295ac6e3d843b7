"""FastAPI dependencies for repositories and authentication."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ats_api.core.db import get_db_session
from ats_api.core.settings import get_settings
from ats_api.models.user import User
from ats_api.repositories.candidates import CandidateRepository
from ats_api.repositories.clients import ClientRepository
from ats_api.repositories.offers import OfferRepository
from ats_api.repositories.users import UserRepository
from ats_api.services.authentication import AuthenticationService


def get_user_repository(db: Annotated[Session, Depends(get_db_session)]) -> UserRepository:
    return UserRepository(db)


def get_client_repository(db: Annotated[Session, Depends(get_db_session)]) -> ClientRepository:
    return ClientRepository(db)


def get_offer_repository(db: Annotated[Session, Depends(get_db_session)]) -> OfferRepository:
    return OfferRepository(db)


def get_candidate_repository(
    db: Annotated[Session, Depends(get_db_session)],
) -> CandidateRepository:
    return CandidateRepository(db)


def get_authentication_service(
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> AuthenticationService:
    return AuthenticationService(users)


def get_token_pair(request: Request) -> tuple[str | None, str | None]:
    """Refresh cookie and XSRF header of the request, either may be missing."""
    settings = get_settings()
    return (
        request.cookies.get(settings.auth_cookie_name),
        request.headers.get(settings.xsrf_header_name),
    )


def get_current_user(
    tokens: Annotated[tuple[str | None, str | None], Depends(get_token_pair)],
    service: Annotated[AuthenticationService, Depends(get_authentication_service)],
) -> User:
    """
    Get the authenticated user from the cookie/header token pair.

    Raises:
        MissingCredentialsError: 401 if the cookie or the header is absent
        InvalidTokenError: 401 if the tokens are invalid or the user is gone
    """
    refresh_cookie, xsrf_header = tokens
    return service.authenticate(refresh_cookie, xsrf_header)
