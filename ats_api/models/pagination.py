"""Pydantic models for pagination metadata."""

from pydantic import Field

from ats_api.models.common import ApiModel


class PaginationLinks(ApiModel):
    """Navigation links, each carrying the caller's extra query parameters."""

    self_: str = Field(..., alias="self", description="Requested route url")
    first: str = Field(..., description="First page route url")
    previous: str | None = Field(None, description="Previous page route url")
    next: str | None = Field(None, description="Next page route url")
    last: str = Field(..., description="Last page route url")


class PaginationMetadata(ApiModel):
    """Everything needed to navigate through a paginated resource."""

    page: int = Field(..., description="The current page")
    per_page: int = Field(..., description="Number of requested items per page")
    page_count: int = Field(..., description="Total number of pages for this configuration")
    total_items: int = Field(..., description="Total number of items matching the filters")
    links: PaginationLinks
