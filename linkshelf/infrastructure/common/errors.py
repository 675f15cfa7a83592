"""Translation of database driver failures into application errors."""

import functools
from collections.abc import Callable
from typing import ParamSpec, TypeVar

import structlog
from sqlalchemy.exc import SQLAlchemyError

from linkshelf.exceptions import PersistenceError

logger = structlog.get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def translate_persistence_errors(fn: Callable[P, R]) -> Callable[P, R]:
    """Re-raise SQLAlchemy failures of a repository method as PersistenceError."""

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return fn(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.exception("persistence_operation_failed", operation=fn.__qualname__)
            raise PersistenceError(f"{fn.__qualname__} failed: {e}") from e

    return wrapper
