"""Value objects of the cards module."""

from .card_content import (
    CardContent,
    HighlightCardContent,
    NoteCardContent,
    RangeSelector,
    Selector,
    TextPositionSelector,
    TextQuoteSelector,
    UrlCardContent,
    card_content_from_dict,
)
from .card_link import CardLink
from .card_type import CardType
from .collection_access_type import CollectionAccessType
from .library_membership import LibraryMembership
from .url_metadata import UrlMetadata

__all__ = [
    "CardContent",
    "CardLink",
    "CardType",
    "CollectionAccessType",
    "HighlightCardContent",
    "LibraryMembership",
    "NoteCardContent",
    "RangeSelector",
    "Selector",
    "TextPositionSelector",
    "TextQuoteSelector",
    "UrlCardContent",
    "UrlMetadata",
    "card_content_from_dict",
]
