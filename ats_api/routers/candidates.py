"""Candidate endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from ats_api.core.deps import get_candidate_repository, get_current_user, get_user_repository
from ats_api.exceptions import NotFoundError
from ats_api.filters.schema import ListQuery, SlugFilterParam, SortParams, StringFilterParam
from ats_api.models.enums import Order
from ats_api.models.user import User
from ats_api.repositories.candidates import CandidateRepository
from ats_api.repositories.users import UserRepository
from ats_api.routers.listing import paginate
from ats_api.routers.models import (
    CandidateDetailResponse,
    CandidateListResponse,
    CandidateResponse,
)

router = APIRouter(prefix="/candidates", tags=["candidates"])


class CandidateSort(SortParams):
    name: Order | None = None
    email: Order | None = None


class CandidateQuery(ListQuery):
    name: StringFilterParam | None = None
    email: StringFilterParam | None = None
    referrer: SlugFilterParam | None = None
    order: CandidateSort | None = None


@router.get("", response_model=CandidateListResponse, summary="List candidates")
def list_candidates(
    request: Request,
    candidates: Annotated[CandidateRepository, Depends(get_candidate_repository)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
    _: Annotated[User, Depends(get_current_user)],
) -> CandidateListResponse:
    page = paginate(
        request,
        candidates,
        users,
        collection="candidates",
        query_model=CandidateQuery,
    )
    return CandidateListResponse(
        candidates=[CandidateResponse.model_validate(c) for c in page.items],
        metadata=page.metadata,
    )


@router.get("/{slug}", response_model=CandidateDetailResponse)
def get_candidate(
    slug: str,
    candidates: Annotated[CandidateRepository, Depends(get_candidate_repository)],
    _: Annotated[User, Depends(get_current_user)],
) -> CandidateDetailResponse:
    """Candidate with referrer, qualification, hiring processes and interviews."""
    candidate = candidates.get_by_slug(slug)
    if candidate is None:
        raise NotFoundError("Candidate", slug)
    return CandidateDetailResponse.model_validate(candidate)
