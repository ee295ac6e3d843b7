"""Offset pagination: slice bounds, page count and navigation links."""

import math

from ats_api.models.pagination import PaginationLinks, PaginationMetadata


class Pagination:
    """Pagination state of one list request.

    Built once the total row count is known. Page indexes are zero based.

    Example:
        >>> pagination = Pagination("/offers", 0, 20, 100)
        >>> pagination.page_count, pagination.next_page_link
        (5, '/offers?page=1&perPage=20')
    """

    def __init__(
        self,
        resource_path: str,
        page: int,
        per_page: int,
        total: int,
        additional_params: str = "",
    ):
        self.resource_path = resource_path
        self.page = page
        self.per_page = per_page
        self.total = total
        self.additional_params = additional_params or ""

    def _link(self, page: int) -> str:
        return f"{self.resource_path}?page={page}&perPage={self.per_page}{self.additional_params}"

    @property
    def page_count(self) -> int:
        return math.ceil(self.total / self.per_page)

    @property
    def take(self) -> int:
        return self.per_page

    @property
    def skip(self) -> int:
        return self.page * self.per_page

    @property
    def exceed_page_limit(self) -> bool:
        # Strictly greater: page == page_count yields an empty page, not an error
        return self.page > self.page_count

    @property
    def exceed_page_limit_hint(self) -> str:
        return (
            f"Page n°{self.page} cannot be found with {self.per_page} items per page. "
            f"Last available page can be retrieved here: {self.last_page_link}"
        )

    @property
    def self_page_link(self) -> str:
        return self._link(self.page)

    @property
    def first_page_link(self) -> str:
        return self._link(0)

    @property
    def previous_page_link(self) -> str | None:
        return None if self.page == 0 else self._link(self.page - 1)

    @property
    def next_page_link(self) -> str | None:
        return None if self.page + 1 >= self.page_count else self._link(self.page + 1)

    @property
    def last_page_link(self) -> str:
        return self._link(max(self.page_count - 1, 0))

    @property
    def metadata(self) -> PaginationMetadata:
        return PaginationMetadata(
            page=self.page,
            per_page=self.per_page,
            page_count=self.page_count or 1,
            total_items=self.total,
            links=PaginationLinks(
                self_=self.self_page_link,
                first=self.first_page_link,
                previous=self.previous_page_link,
                next=self.next_page_link,
                last=self.last_page_link,
            ),
        )
