"""
Cards domain exceptions.

Aggregates return these wrapped in a Failure; value objects of the
cards module raise CardValidationError from their constructors.
"""

from linkshelf.domain.common.exceptions import AuthorizationError, DomainError, ValidationError


class CardValidationError(ValidationError):
    """Raised when card type, content or references are inconsistent."""


class CollectionValidationError(ValidationError):
    """Raised when collection name, description or access type is invalid."""


class CollectionAccessError(AuthorizationError):
    """Raised when a curator may not change a collection."""


class CardLibraryError(DomainError):
    """Raised when a library operation refers to a missing membership."""

    def __init__(self, message: str, card_id: object = None, curator_id: object = None) -> None:
        super().__init__(
            message,
            card_id=str(card_id) if card_id is not None else None,
            curator_id=str(curator_id) if curator_id is not None else None,
        )


class CollectionCardLinkError(DomainError):
    """Raised when a collection operation refers to a card that is not linked."""
