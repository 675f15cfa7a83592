from .get_collection_page_use_case import GetCollectionPageUseCase
from .get_collections_for_url_use_case import GetCollectionsForUrlUseCase
from .get_collections_use_case import GetCollectionsUseCase
from .get_libraries_for_card_use_case import GetLibrariesForCardUseCase
from .get_libraries_for_url_use_case import GetLibrariesForUrlUseCase
from .get_note_cards_for_url_use_case import GetNoteCardsForUrlUseCase
from .get_url_card_view_use_case import GetUrlCardViewUseCase
from .get_url_cards_use_case import GetUrlCardsUseCase
from .get_url_status_for_my_library_use_case import GetUrlStatusForMyLibraryUseCase

__all__ = [
    "GetCollectionPageUseCase",
    "GetCollectionsForUrlUseCase",
    "GetCollectionsUseCase",
    "GetLibrariesForCardUseCase",
    "GetLibrariesForUrlUseCase",
    "GetNoteCardsForUrlUseCase",
    "GetUrlCardViewUseCase",
    "GetUrlCardsUseCase",
    "GetUrlStatusForMyLibraryUseCase",
]
