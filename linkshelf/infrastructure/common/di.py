from collections.abc import Iterator
from contextlib import contextmanager
from typing import TypeVar

from dependency_injector.providers import Provider
from sqlalchemy.orm import Session

from linkshelf.core import Container

T = TypeVar("T")


@contextmanager
def use_case_scope(container: Container, provider: Provider[T], db: Session) -> Iterator[T]:
    """
    Build a use case bound to one database session.

    The container's db dependency is overridden for the duration of the
    block and reset afterwards.
    """
    container.db.override(db)
    try:
        yield provider()
    finally:
        # Reset override after the caller is done
        container.db.reset_override()
