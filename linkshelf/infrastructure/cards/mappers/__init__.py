from .card_mapper import CardMapper, LibraryMembershipRow
from .collection_mapper import CardLinkRow, CollectionMapper

__all__ = ["CardLinkRow", "CardMapper", "CollectionMapper", "LibraryMembershipRow"]
