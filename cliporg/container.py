"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web.
"""

from dependency_injector import containers, providers
from sqlmodel import Session

from .adapters.file_system import FileSystemAdapter
from .adapters.media import FFmpegThumbnailGenerator, MediaInfoProbe
from .config import Settings
from .infrastructure.persistence.database import create_db_engine, init_db
from .infrastructure.persistence.repositories import (
    SQLModelCatalogStore,
    SQLModelSettingRepository,
)
from .services.path_normalizer import PathNormalizer
from .services.reconciler import Reconciler
from .services.reconciliation import ReconciliationService
from .services.root_folder import RootFolderService
from .services.scanner import FileScanner
from .services.sync_executor import SyncExecutor


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        service = container.reconciliation_service()
        preview = service.preview("/media/clips")
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Engine SQLite partage
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db, engine=engine)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(Session, engine)

    # Adapters - implementations concretes des ports
    file_system = providers.Singleton(FileSystemAdapter)
    metadata_probe = providers.Singleton(MediaInfoProbe)
    thumbnail_generator = providers.Singleton(
        FFmpegThumbnailGenerator,
        thumbnails_dir=config.provided.thumbnails_dir,
        ffmpeg_binary=config.provided.ffmpeg_binary,
        width=config.provided.thumbnail_width,
        height=config.provided.thumbnail_height,
        timeout_seconds=config.provided.thumbnail_timeout_seconds,
    )

    # Services sans etat - Singletons
    path_normalizer = providers.Singleton(
        PathNormalizer,
        case_insensitive=config.provided.case_insensitive_paths,
    )
    file_scanner = providers.Singleton(FileScanner, file_system=file_system)
    reconciler = providers.Singleton(Reconciler, normalizer=path_normalizer)

    # Repositories - Factory pour nouvelle instance avec session fraiche
    catalog_store = providers.Factory(
        SQLModelCatalogStore,
        session=session,
        normalizer=path_normalizer,
    )
    setting_repository = providers.Factory(
        SQLModelSettingRepository,
        session=session,
    )

    # Services dependant du catalogue - Factory (sessions fraiches)
    sync_executor = providers.Factory(
        SyncExecutor,
        catalog=catalog_store,
        metadata_probe=metadata_probe,
        thumbnail_generator=thumbnail_generator,
        file_system=file_system,
        normalizer=path_normalizer,
    )
    reconciliation_service = providers.Factory(
        ReconciliationService,
        scanner=file_scanner,
        reconciler=reconciler,
        catalog=catalog_store,
        executor=sync_executor,
    )
    root_folder_service = providers.Factory(
        RootFolderService,
        setting_repo=setting_repository,
        fallback=config.provided.root_folder,
    )
