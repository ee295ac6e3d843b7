"""Shared pipeline behind every paginated list endpoint."""

from dataclasses import dataclass
from typing import Any

from fastapi import Request

from ats_api.core.logging import get_logger
from ats_api.core.settings import get_settings
from ats_api.exceptions import EmptyCollectionError, ExceededPageIndexError, ValidationError
from ats_api.filters.compiler import compile_filters
from ats_api.filters.params import SlugFilter
from ats_api.filters.schema import ListQuery, validate_query
from ats_api.models.pagination import PaginationMetadata
from ats_api.repositories.base import SqlRepository
from ats_api.repositories.users import UserRepository
from ats_api.utils.pagination import Pagination
from ats_api.utils.query_params import PAGINATION_KEYS, extract_filter_params
from ats_api.utils.query_string import parse_query_string

logger = get_logger(__name__)

ORDER_KEY = "order"


@dataclass(frozen=True)
class Page:
    items: list[Any]
    metadata: PaginationMetadata


def _check_slugs(params: dict[str, Any], users: UserRepository) -> None:
    slugs = [
        criteria
        for param in params.values()
        if isinstance(param, SlugFilter)
        for criteria in param.criterias
    ]
    if slugs and not users.slugs_exist(slugs):
        raise ValidationError("Provided slugs does not match resources.")


def paginate(
    request: Request,
    repository: SqlRepository,
    users: UserRepository,
    *,
    collection: str,
    query_model: type[ListQuery],
) -> Page:
    """
    Run a list request end to end.

    The raw query string is parsed and validated against the route's query
    model, filters are compiled to predicates, rows are counted, the
    requested page is checked against the page count and finally read.

    Args:
        request: Incoming request, its path and query string are used
        repository: Repository of the listed entity
        users: Used to check that slug criterias name existing users
        collection: Plural resource name used in error messages
        query_model: Filterable and sortable fields of the route

    Raises:
        ValidationError: Unknown or malformed query fields, unknown slugs
        ExceededPageIndexError: The page is past the last one
        EmptyCollectionError: Nothing matches the filters
    """
    settings = get_settings()
    raw = parse_query_string(request.url.query)
    query = validate_query(query_model, raw)

    filter_params = query.filter_params()
    _check_slugs(filter_params, users)

    page = query.page
    per_page = query.perPage if query.perPage is not None else settings.default_per_page
    order = query.sort_order()

    predicates = compile_filters(filter_params)
    total = repository.count(predicates)

    path = request.url.path
    additional_params = extract_filter_params(f"{path}?{request.url.query}", path)
    pagination = Pagination(path, page, per_page, total, additional_params)

    if pagination.exceed_page_limit:
        raise ExceededPageIndexError(pagination.exceed_page_limit_hint)

    items = repository.find(predicates, order, skip=pagination.skip, take=pagination.take)
    if not items:
        applied = {
            key: value for key, value in raw.items() if key not in (*PAGINATION_KEYS, ORDER_KEY)
        }
        raise EmptyCollectionError(collection, applied)

    logger.debug(f"Listed {len(items)}/{total} {collection} (page {page})")
    return Page(items=items, metadata=pagination.metadata)
