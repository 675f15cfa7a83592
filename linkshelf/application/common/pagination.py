"""
Pagination types for queries.

Every list query takes a Pagination and returns a PaginatedResult whose
``has_more`` follows one rule: items before this page plus items on this
page are fewer than the total.

Example:
    pagination = Pagination(page=2, limit=10)
    items, total = repo.find_page(pagination.offset, pagination.limit)
    result = PaginatedResult(items=items, total_count=total, pagination=pagination)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

# Maximum allowed page size
MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class Pagination:
    """
    Pagination parameters for list queries.

    Attributes:
        page: Current page number (1-indexed)
        limit: Number of items per page, 1 to MAX_PAGE_SIZE
    """

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("Page must be at least 1")
        if self.limit < 1:
            raise ValueError("Limit must be at least 1")
        if self.limit > MAX_PAGE_SIZE:
            raise ValueError(f"Limit cannot exceed {MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        """Calculate the offset for database queries."""
        return (self.page - 1) * self.limit

    @classmethod
    def from_request(cls, page: int, limit: int) -> "Pagination":
        """
        Build pagination from caller input, clamping oversized limits.

        Raises:
            ValueError: If page or limit is below 1
        """
        return cls(page=page, limit=min(limit, MAX_PAGE_SIZE))


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """
    Paginated result containing items and metadata.

    Attributes:
        items: List of items for the current page
        total_count: Total number of items across all pages
        pagination: The pagination parameters used
    """

    items: list[T]
    total_count: int
    pagination: Pagination

    @property
    def page(self) -> int:
        """Current page number."""
        return self.pagination.page

    @property
    def limit(self) -> int:
        """Number of items per page."""
        return self.pagination.limit

    @property
    def has_more(self) -> bool:
        """Whether items exist beyond this page."""
        return self.pagination.offset + len(self.items) < self.total_count

    @property
    def total_pages(self) -> int:
        """Total number of pages."""
        if self.total_count == 0:
            return 0
        return (self.total_count + self.pagination.limit - 1) // self.pagination.limit
