from .card_query_repository import CardQueryRepository
from .card_repository import CardRepository
from .collection_query_repository import CollectionQueryRepository
from .collection_repository import CollectionRepository
from .published_record_repository import PublishedRecordRepository

__all__ = [
    "CardQueryRepository",
    "CardRepository",
    "CollectionQueryRepository",
    "CollectionRepository",
    "PublishedRecordRepository",
]
