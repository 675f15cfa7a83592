"""Tests for pagination types."""

import pytest

from linkshelf.application.common.pagination import MAX_PAGE_SIZE, PaginatedResult, Pagination


class TestPagination:
    def test_offset(self) -> None:
        assert Pagination(page=1, limit=10).offset == 0
        assert Pagination(page=3, limit=10).offset == 20

    @pytest.mark.parametrize(("page", "limit"), [(0, 10), (1, 0), (1, MAX_PAGE_SIZE + 1)])
    def test_invalid_values_raise(self, page: int, limit: int) -> None:
        with pytest.raises(ValueError):
            Pagination(page=page, limit=limit)

    def test_from_request_clamps_limit(self) -> None:
        assert Pagination.from_request(2, 500).limit == MAX_PAGE_SIZE

    def test_from_request_rejects_zero_page(self) -> None:
        with pytest.raises(ValueError):
            Pagination.from_request(0, 10)


class TestPaginatedResult:
    def test_has_more_when_items_remain(self) -> None:
        result = PaginatedResult(items=[1, 2], total_count=5, pagination=Pagination(1, 2))
        assert result.has_more
        assert result.total_pages == 3

    def test_last_page_has_no_more(self) -> None:
        result = PaginatedResult(items=[5], total_count=5, pagination=Pagination(3, 2))
        assert not result.has_more

    def test_page_past_the_end(self) -> None:
        result = PaginatedResult[int](items=[], total_count=5, pagination=Pagination(9, 2))
        assert not result.has_more
        assert result.total_count == 5
        assert result.page == 9

    def test_empty_result(self) -> None:
        result = PaginatedResult[int](items=[], total_count=0, pagination=Pagination())
        assert result.total_pages == 0
        assert not result.has_more
