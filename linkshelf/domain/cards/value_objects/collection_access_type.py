from enum import StrEnum
from typing import Self

from linkshelf.domain.cards.exceptions import CollectionValidationError
from linkshelf.domain.common.result import Failure, Result, Success


class CollectionAccessType(StrEnum):
    """
    Who may change the card set of a collection.

    OPEN collections accept cards from any curator, CLOSED ones only from
    the author and invited collaborators.
    """

    OPEN = "OPEN"
    CLOSED = "CLOSED"

    @classmethod
    def parse(cls, value: "str | CollectionAccessType") -> Result[Self, CollectionValidationError]:
        if isinstance(value, cls):
            return Success(value)
        try:
            return Success(cls(str(value).strip().upper()))
        except ValueError:
            return Failure(
                CollectionValidationError("Invalid access type", field="access_type", value=value)
            )
