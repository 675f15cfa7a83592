from .add_card_to_collection_use_case import AddCardToCollectionUseCase
from .collection_access_use_case import CollectionAccessUseCase
from .create_collection_use_case import CreateCollectionUseCase
from .delete_collection_use_case import DeleteCollectionUseCase
from .remove_card_from_collection_use_case import RemoveCardFromCollectionUseCase
from .update_collection_use_case import UpdateCollectionUseCase

__all__ = [
    "AddCardToCollectionUseCase",
    "CollectionAccessUseCase",
    "CreateCollectionUseCase",
    "DeleteCollectionUseCase",
    "RemoveCardFromCollectionUseCase",
    "UpdateCollectionUseCase",
]
