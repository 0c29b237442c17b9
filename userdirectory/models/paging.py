"""Paginated result model."""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PagedResult(BaseModel, Generic[T]):
    """One page of an ordered listing plus navigation metadata.

    Serialized with the short keys (``first``, ``prev``, ``next``, ``last``,
    ``pages``, ``items``) that existing clients of the listing endpoint read.
    """

    data: List[T] = Field(default_factory=list, description="Items on this page")
    first_page: int = Field(1, alias="first", description="Always 1")
    prev_page: Optional[int] = Field(None, alias="prev", description="Previous page, if any")
    next_page: Optional[int] = Field(None, alias="next", description="Next page, if any")
    last_page: int = Field(0, alias="last", description="Last page number")
    total_pages: int = Field(0, alias="pages", description="Number of pages")
    total_items: int = Field(0, alias="items", description="Number of items across all pages")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True
