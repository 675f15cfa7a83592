from .at_uri_resolution_service import AtUriResolutionService
from .card_library_query_service import CardLibraryQueryService

__all__ = ["AtUriResolutionService", "CardLibraryQueryService"]
