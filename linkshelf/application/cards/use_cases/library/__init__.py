from .add_card_to_library_use_case import AddCardToLibraryUseCase
from .add_url_to_library_use_case import AddUrlToLibraryUseCase
from .remove_card_from_library_use_case import RemoveCardFromLibraryUseCase
from .update_note_card_use_case import UpdateNoteCardUseCase

__all__ = [
    "AddCardToLibraryUseCase",
    "AddUrlToLibraryUseCase",
    "RemoveCardFromLibraryUseCase",
    "UpdateNoteCardUseCase",
]
