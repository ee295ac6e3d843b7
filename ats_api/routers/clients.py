"""Client endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from ats_api.core.deps import get_client_repository, get_current_user, get_user_repository
from ats_api.exceptions import DuplicateNameError, NotFoundError
from ats_api.filters.schema import ListQuery, SlugFilterParam, SortParams, StringFilterParam
from ats_api.models.client import Client
from ats_api.models.enums import Order
from ats_api.models.user import User
from ats_api.repositories.clients import ClientRepository
from ats_api.repositories.users import UserRepository
from ats_api.routers.listing import paginate
from ats_api.routers.models import ClientListResponse, ClientResponse, CreateClientRequest
from ats_api.utils.slugs import slugify

router = APIRouter(prefix="/clients", tags=["clients"])


class ClientSort(SortParams):
    name: Order | None = None


class ClientQuery(ListQuery):
    name: StringFilterParam | None = None
    accountManager: SlugFilterParam | None = None
    order: ClientSort | None = None


@router.get("", response_model=ClientListResponse, summary="List clients")
def list_clients(
    request: Request,
    clients: Annotated[ClientRepository, Depends(get_client_repository)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
    _: Annotated[User, Depends(get_current_user)],
) -> ClientListResponse:
    """
    List clients with their account manager and offers.

    Filters: ``name`` (string operators), ``accountManager`` (user slugs).
    """
    page = paginate(
        request,
        clients,
        users,
        collection="clients",
        query_model=ClientQuery,
    )
    return ClientListResponse(
        clients=[ClientResponse.model_validate(c) for c in page.items], metadata=page.metadata
    )


@router.get("/{slug}", response_model=ClientResponse)
def get_client(
    slug: str,
    clients: Annotated[ClientRepository, Depends(get_client_repository)],
    _: Annotated[User, Depends(get_current_user)],
) -> ClientResponse:
    client = clients.get_by_slug(slug)
    if client is None:
        raise NotFoundError("Client", slug)
    return ClientResponse.model_validate(client)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    data: CreateClientRequest,
    clients: Annotated[ClientRepository, Depends(get_client_repository)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
    _: Annotated[User, Depends(get_current_user)],
) -> ClientResponse:
    """
    Create a client.

    Raises:
        DuplicateNameError: 400 if a client with the same slug exists, hint is that client
        NotFoundError: 404 if ``accountManager`` is not a user slug
    """
    existing = clients.get_by_slug(slugify(data.name))
    if existing is not None:
        raise DuplicateNameError(
            "Client",
            data.name,
            ClientResponse.model_validate(existing).model_dump(mode="json", by_alias=True),
        )

    account_manager = None
    if data.account_manager:
        account_manager = users.get_by_slug(data.account_manager)
        if account_manager is None:
            raise NotFoundError("User", data.account_manager)

    client = clients.add(Client(name=data.name, phone=data.phone, account_manager=account_manager))
    return ClientResponse.model_validate(client)
