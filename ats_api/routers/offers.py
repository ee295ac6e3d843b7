"""Job offer endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from ats_api.core.deps import get_current_user, get_offer_repository, get_user_repository
from ats_api.exceptions import NotFoundError
from ats_api.filters.schema import (
    EnumFilterParam,
    ListQuery,
    NumberFilterParam,
    SlugFilterParam,
    SortParams,
    StringFilterParam,
)
from ats_api.models.enums import Contract, Order
from ats_api.models.user import User
from ats_api.repositories.offers import OfferRepository
from ats_api.repositories.users import UserRepository
from ats_api.routers.listing import paginate
from ats_api.routers.models import OfferDetailResponse, OfferListResponse, OfferResponse

router = APIRouter(prefix="/offers", tags=["offers"])


class ContractFilterParam(EnumFilterParam):
    choices = frozenset(c.value for c in Contract)


class OfferSort(SortParams):
    job: Order | None = None
    annualSalary: Order | None = None
    contractType: Order | None = None


class OfferQuery(ListQuery):
    job: StringFilterParam | None = None
    annualSalary: NumberFilterParam | None = None
    contractType: ContractFilterParam | None = None
    referrer: SlugFilterParam | None = None
    order: OfferSort | None = None


@router.get("", response_model=OfferListResponse, summary="List offers")
def list_offers(
    request: Request,
    offers: Annotated[OfferRepository, Depends(get_offer_repository)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
    _: Annotated[User, Depends(get_current_user)],
) -> OfferListResponse:
    """
    List offers with their owner and referrer.

    Example:
        GET /offers?annualSalary[filter]=morethan&annualSalary[criterias][]=40000
    """
    page = paginate(
        request,
        offers,
        users,
        collection="offers",
        query_model=OfferQuery,
    )
    return OfferListResponse(
        offers=[OfferResponse.model_validate(o) for o in page.items], metadata=page.metadata
    )


@router.get("/{slug}", response_model=OfferDetailResponse)
def get_offer(
    slug: str,
    offers: Annotated[OfferRepository, Depends(get_offer_repository)],
    _: Annotated[User, Depends(get_current_user)],
) -> OfferDetailResponse:
    offer = offers.get_by_slug(slug)
    if offer is None:
        raise NotFoundError("Offer", slug)
    return OfferDetailResponse.model_validate(offer)
