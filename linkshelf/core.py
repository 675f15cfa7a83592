from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from linkshelf.application.cards.services import CardCollectionService, CardLibraryService
from linkshelf.application.cards.use_cases.collections import (
    AddCardToCollectionUseCase,
    CollectionAccessUseCase,
    CreateCollectionUseCase,
    DeleteCollectionUseCase,
    RemoveCardFromCollectionUseCase,
    UpdateCollectionUseCase,
)
from linkshelf.application.cards.use_cases.library import (
    AddCardToLibraryUseCase,
    AddUrlToLibraryUseCase,
    RemoveCardFromLibraryUseCase,
    UpdateNoteCardUseCase,
)
from linkshelf.application.cards.use_cases.queries import (
    GetCollectionPageUseCase,
    GetCollectionsForUrlUseCase,
    GetCollectionsUseCase,
    GetLibrariesForCardUseCase,
    GetLibrariesForUrlUseCase,
    GetNoteCardsForUrlUseCase,
    GetUrlCardsUseCase,
    GetUrlCardViewUseCase,
    GetUrlStatusForMyLibraryUseCase,
)
from linkshelf.infrastructure.cards.repositories import (
    CardQueryRepository,
    CardRepository,
    CollectionQueryRepository,
    CollectionRepository,
)
from linkshelf.infrastructure.cards.services import AtUriResolutionService, CardLibraryQueryService
from linkshelf.infrastructure.common.unit_of_work import SqlAlchemyUnitOfWork


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    # Collaborators supplied by the host application
    identity_resolver = providers.Dependency()
    profile_service = providers.Dependency()
    card_publisher = providers.Dependency()
    collection_publisher = providers.Dependency()
    metadata_service = providers.Dependency()

    # Repositories and read services
    unit_of_work = providers.Factory(SqlAlchemyUnitOfWork, db=db)
    card_repository = providers.Factory(CardRepository, db=db)
    collection_repository = providers.Factory(CollectionRepository, db=db)
    card_query_repository = providers.Factory(CardQueryRepository, db=db)
    collection_query_repository = providers.Factory(CollectionQueryRepository, db=db)
    at_uri_resolution_service = providers.Factory(AtUriResolutionService, db=db)
    card_library_query_service = providers.Factory(CardLibraryQueryService, db=db)

    # Application services
    card_library_service = providers.Factory(
        CardLibraryService,
        card_repository=card_repository,
        card_publisher=card_publisher,
    )
    card_collection_service = providers.Factory(
        CardCollectionService,
        collection_repository=collection_repository,
        collection_publisher=collection_publisher,
    )

    # Library commands
    add_url_to_library_use_case = providers.Factory(
        AddUrlToLibraryUseCase,
        uow=unit_of_work,
        card_repository=card_repository,
        metadata_service=metadata_service,
        card_library_service=card_library_service,
        card_collection_service=card_collection_service,
    )
    add_card_to_library_use_case = providers.Factory(
        AddCardToLibraryUseCase,
        uow=unit_of_work,
        card_repository=card_repository,
        card_library_service=card_library_service,
        card_collection_service=card_collection_service,
    )
    remove_card_from_library_use_case = providers.Factory(
        RemoveCardFromLibraryUseCase,
        uow=unit_of_work,
        card_repository=card_repository,
        collection_repository=collection_repository,
        card_library_service=card_library_service,
        card_collection_service=card_collection_service,
    )
    update_note_card_use_case = providers.Factory(
        UpdateNoteCardUseCase,
        uow=unit_of_work,
        card_repository=card_repository,
    )

    # Collection commands
    create_collection_use_case = providers.Factory(
        CreateCollectionUseCase,
        uow=unit_of_work,
        collection_repository=collection_repository,
        collection_publisher=collection_publisher,
    )
    update_collection_use_case = providers.Factory(
        UpdateCollectionUseCase,
        uow=unit_of_work,
        collection_repository=collection_repository,
        collection_publisher=collection_publisher,
    )
    delete_collection_use_case = providers.Factory(
        DeleteCollectionUseCase,
        uow=unit_of_work,
        collection_repository=collection_repository,
        collection_publisher=collection_publisher,
    )
    add_card_to_collection_use_case = providers.Factory(
        AddCardToCollectionUseCase,
        uow=unit_of_work,
        card_repository=card_repository,
        card_collection_service=card_collection_service,
    )
    remove_card_from_collection_use_case = providers.Factory(
        RemoveCardFromCollectionUseCase,
        uow=unit_of_work,
        card_collection_service=card_collection_service,
    )
    collection_access_use_case = providers.Factory(
        CollectionAccessUseCase,
        uow=unit_of_work,
        collection_repository=collection_repository,
    )

    # Queries
    get_url_cards_use_case = providers.Factory(
        GetUrlCardsUseCase,
        card_query_repository=card_query_repository,
        identity_resolver=identity_resolver,
    )
    get_collection_page_use_case = providers.Factory(
        GetCollectionPageUseCase,
        collection_repository=collection_repository,
        card_query_repository=card_query_repository,
        profile_service=profile_service,
        at_uri_resolution_service=at_uri_resolution_service,
    )
    get_collections_use_case = providers.Factory(
        GetCollectionsUseCase,
        collection_query_repository=collection_query_repository,
        profile_service=profile_service,
        identity_resolver=identity_resolver,
    )
    get_collections_for_url_use_case = providers.Factory(
        GetCollectionsForUrlUseCase,
        collection_query_repository=collection_query_repository,
    )
    get_libraries_for_url_use_case = providers.Factory(
        GetLibrariesForUrlUseCase,
        card_query_repository=card_query_repository,
    )
    get_note_cards_for_url_use_case = providers.Factory(
        GetNoteCardsForUrlUseCase,
        card_query_repository=card_query_repository,
    )
    get_url_card_view_use_case = providers.Factory(
        GetUrlCardViewUseCase,
        card_query_repository=card_query_repository,
    )
    get_url_status_for_my_library_use_case = providers.Factory(
        GetUrlStatusForMyLibraryUseCase,
        card_repository=card_repository,
        collection_query_repository=collection_query_repository,
    )
    get_libraries_for_card_use_case = providers.Factory(
        GetLibrariesForCardUseCase,
        card_query_repository=card_query_repository,
    )


# Initialize container
container = Container()
