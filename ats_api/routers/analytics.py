"""Acquisition statistics: how many candidates and clients were added per day."""

from typing import Annotated

from fastapi import APIRouter, Depends

from ats_api.core.deps import get_candidate_repository, get_client_repository, get_current_user
from ats_api.exceptions import EmptyCollectionError
from ats_api.models.user import User
from ats_api.repositories.base import SqlRepository
from ats_api.repositories.candidates import CandidateRepository
from ats_api.repositories.clients import ClientRepository
from ats_api.routers.models import AcquisitionPoint

router = APIRouter(prefix="/analytics", tags=["analytics"])


def _acquisition(repository: SqlRepository, collection: str) -> list[AcquisitionPoint]:
    rows = repository.count_created_per_day()
    if not rows:
        raise EmptyCollectionError(collection)
    return [AcquisitionPoint(day=day, count=count) for day, count in rows]


@router.get("/candidate-acquisition-over-time", response_model=list[AcquisitionPoint])
def candidate_acquisition(
    candidates: Annotated[CandidateRepository, Depends(get_candidate_repository)],
    _: Annotated[User, Depends(get_current_user)],
) -> list[AcquisitionPoint]:
    """
    Candidates created per day, oldest day first.

    Raises:
        EmptyCollectionError: 404 when there are no candidates at all
    """
    return _acquisition(candidates, "candidates")


@router.get("/client-acquisition-over-time", response_model=list[AcquisitionPoint])
def client_acquisition(
    clients: Annotated[ClientRepository, Depends(get_client_repository)],
    _: Annotated[User, Depends(get_current_user)],
) -> list[AcquisitionPoint]:
    return _acquisition(clients, "clients")
