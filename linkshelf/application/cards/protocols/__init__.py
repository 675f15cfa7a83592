from .at_uri_resolution_service import AtUriResolutionServiceProtocol
from .card_library_query_service import CardLibraryQueryServiceProtocol
from .card_query_repository import CardQueryRepositoryProtocol
from .card_repository import CardRepositoryProtocol
from .collection_query_repository import CollectionQueryRepositoryProtocol
from .collection_repository import CollectionRepositoryProtocol
from .external_services import (
    CardPublisherProtocol,
    CollectionPublisherProtocol,
    IdentityResolutionServiceProtocol,
    MetadataServiceProtocol,
    Profile,
    ProfileServiceProtocol,
)

__all__ = [
    "AtUriResolutionServiceProtocol",
    "CardLibraryQueryServiceProtocol",
    "CardPublisherProtocol",
    "CardQueryRepositoryProtocol",
    "CardRepositoryProtocol",
    "CollectionPublisherProtocol",
    "CollectionQueryRepositoryProtocol",
    "CollectionRepositoryProtocol",
    "IdentityResolutionServiceProtocol",
    "MetadataServiceProtocol",
    "Profile",
    "ProfileServiceProtocol",
]
