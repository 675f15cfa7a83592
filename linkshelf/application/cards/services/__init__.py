from .card_collection_service import CardCollectionService
from .card_library_service import CardLibraryService

__all__ = ["CardCollectionService", "CardLibraryService"]
