"""
Application common module.

Contains building blocks shared by use cases:
- Pagination / PaginatedResult: Paged list queries
- Result: Success/Failure outcome of use cases
- UnitOfWork: Transaction boundary for commands
"""

from linkshelf.domain.common.result import Failure, Result, Success

from .errors import run_query, to_application_error
from .pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginatedResult, Pagination
from .unit_of_work import UnitOfWork, run_in_unit_of_work

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "Failure",
    "MAX_PAGE_SIZE",
    "PaginatedResult",
    "Pagination",
    "Result",
    "Success",
    "UnitOfWork",
    "run_in_unit_of_work",
    "run_query",
    "to_application_error",
]
