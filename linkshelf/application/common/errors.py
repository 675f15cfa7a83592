"""Mapping of domain failures onto the errors use cases return."""

from collections.abc import Callable
from typing import TypeVar

import structlog

from linkshelf.domain.common.exceptions import (
    AuthorizationError,
    DomainError,
    EntityNotFoundError,
)
from linkshelf.domain.common.exceptions import ValidationError as DomainValidationError
from linkshelf.domain.common.result import Failure, Result
from linkshelf.exceptions import (
    AccessError,
    InfrastructureError,
    LinkshelfError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def to_application_error(error: BaseException) -> LinkshelfError:
    """
    Translate a domain or infrastructure failure into a LinkshelfError.

    Errors that already belong to the application taxonomy pass through
    unchanged, except infrastructure errors which callers see as
    UnexpectedError.
    """
    if isinstance(error, (ValidationError, AccessError, NotFoundError, UnexpectedError)):
        return error
    if isinstance(error, DomainValidationError):
        return ValidationError(error.message)
    if isinstance(error, AuthorizationError):
        return AccessError(error.message)
    if isinstance(error, EntityNotFoundError):
        return NotFoundError(error.entity_type, error.entity_id)
    if isinstance(error, DomainError):
        return ValidationError(error.message)
    return UnexpectedError.create(error)


def run_query(operation: Callable[[], Result[T, LinkshelfError]]) -> Result[T, LinkshelfError]:
    """Run a read-only use case body, reporting storage failures as UnexpectedError."""
    try:
        return operation()
    except InfrastructureError as e:
        logger.warning("query_failed", error=str(e), error_type=type(e).__name__)
        return Failure(UnexpectedError.create(e))
