"""User listing and lookup endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from ats_api.core.deps import get_current_user, get_user_repository
from ats_api.exceptions import NotFoundError
from ats_api.filters.schema import ListQuery, SortParams, StringFilterParam
from ats_api.models.enums import Order
from ats_api.models.user import User
from ats_api.repositories.users import UserRepository
from ats_api.routers.listing import paginate
from ats_api.routers.models import UserDetailResponse, UserListResponse, UserResponse

router = APIRouter(prefix="/users", tags=["users"])


class UserSort(SortParams):
    firstName: Order | None = None
    lastName: Order | None = None
    email: Order | None = None


class UserQuery(ListQuery):
    firstName: StringFilterParam | None = None
    lastName: StringFilterParam | None = None
    email: StringFilterParam | None = None
    order: UserSort | None = None


@router.get("", response_model=UserListResponse, summary="List users")
def list_users(
    request: Request,
    users: Annotated[UserRepository, Depends(get_user_repository)],
    _: Annotated[User, Depends(get_current_user)],
) -> UserListResponse:
    """
    List users.

    Filters: ``firstName``, ``lastName`` and ``email`` (string operators).
    Sort with ``order[firstName|lastName|email]=ASC|DESC``.
    """
    page = paginate(
        request,
        users,
        users,
        collection="users",
        query_model=UserQuery,
    )
    return UserListResponse(
        users=[UserResponse.model_validate(u) for u in page.items], metadata=page.metadata
    )


@router.get("/current", response_model=UserResponse)
def get_current(current_user: Annotated[User, Depends(get_current_user)]) -> UserResponse:
    return UserResponse.model_validate(current_user)


@router.get("/{slug}", response_model=UserDetailResponse)
def get_user(
    slug: str,
    users: Annotated[UserRepository, Depends(get_user_repository)],
    _: Annotated[User, Depends(get_current_user)],
) -> UserDetailResponse:
    user = users.get_by_slug(slug)
    if user is None:
        raise NotFoundError("User", slug)
    return UserDetailResponse.model_validate(user)
