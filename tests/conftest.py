"""
Fixtures pytest partagees pour les tests ClipOrg.

Ce module contient les fixtures communes utilisees dans les tests:
- Mocks des ports (IFileSystem, ICatalogStore, IMetadataProbe, IThumbnailGenerator)
- Base SQLite en memoire et catalogue SQLModel
- Arborescence de clips temporaire sur disque
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from sqlmodel import Session

from cliporg.config import Settings
from cliporg.core.entities.clip import CatalogEntry
from cliporg.core.ports.catalog import ICatalogStore
from cliporg.core.ports.file_system import IFileSystem
from cliporg.core.ports.media import IMetadataProbe, IThumbnailGenerator
from cliporg.core.value_objects import ProbeResult
from cliporg.infrastructure.persistence.database import create_db_engine, init_db
from cliporg.infrastructure.persistence.repositories import (
    SQLModelCatalogStore,
    SQLModelSettingRepository,
)
from cliporg.services.path_normalizer import PathNormalizer


@pytest.fixture
def normalizer() -> PathNormalizer:
    """Normaliseur insensible a la casse (configuration par defaut)."""
    return PathNormalizer(case_insensitive=True)


@pytest.fixture
def mock_file_system() -> MagicMock:
    """
    Mock de IFileSystem pour les tests.

    Le dossier racine existe, tous les fichiers existent et le parcours
    ne trouve rien par defaut. Configurer le mock dans chaque test.
    """
    mock = MagicMock(spec=IFileSystem)
    mock.is_directory.return_value = True
    mock.is_file.return_value = True
    mock.walk_video_files.return_value = iter([])
    return mock


@pytest.fixture
def mock_catalog() -> MagicMock:
    """
    Mock de ICatalogStore.

    create_entry attribue des IDs croissants a partir de 100.
    """
    mock = MagicMock(spec=ICatalogStore)
    mock.list_local_entries.return_value = []
    counter = {"next_id": 100}

    def _create(location_string: str, title: str, duration_seconds: int = 0) -> CatalogEntry:
        entry_id = counter["next_id"]
        counter["next_id"] += 1
        return CatalogEntry(
            id=entry_id,
            location_string=location_string,
            title=title,
            duration_seconds=duration_seconds,
        )

    mock.create_entry.side_effect = _create
    return mock


@pytest.fixture
def mock_probe() -> MagicMock:
    """Mock de IMetadataProbe : titre = nom du fichier, duree 60s."""
    mock = MagicMock(spec=IMetadataProbe)
    mock.probe.side_effect = lambda path: ProbeResult(title=Path(path).stem, duration_seconds=60)
    return mock


@pytest.fixture
def mock_thumbnailer(tmp_path: Path) -> MagicMock:
    """Mock de IThumbnailGenerator : retourne {tmp}/thumbs/{id}.jpg."""
    mock = MagicMock(spec=IThumbnailGenerator)
    mock.generate.side_effect = (
        lambda clip_id, video_path, duration_seconds=0: tmp_path / "thumbs" / f"{clip_id}.jpg"
    )
    return mock


@pytest.fixture
def engine():
    """Engine SQLite en memoire avec toutes les tables creees."""
    db_engine = create_db_engine("sqlite://")
    init_db(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def db_session(engine):
    """Session SQLModel sur la base en memoire."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def catalog_store(db_session, normalizer) -> SQLModelCatalogStore:
    """Catalogue SQLModel reel sur la base en memoire."""
    return SQLModelCatalogStore(db_session, normalizer)


@pytest.fixture
def setting_repo(db_session) -> SQLModelSettingRepository:
    """Repository de parametres sur la base en memoire."""
    return SQLModelSettingRepository(db_session)


@pytest.fixture
def clip_root(tmp_path: Path) -> Path:
    """
    Dossier racine de clips sur disque.

    Structure:
        clips/
          a.mp4
          drills/b.mov
          drills/notes.txt   (ignore : extension non video)
    """
    root = tmp_path / "clips"
    (root / "drills").mkdir(parents=True)
    (root / "a.mp4").write_bytes(b"\x00" * 10)
    (root / "drills" / "b.mov").write_bytes(b"\x00" * 20)
    (root / "drills" / "notes.txt").write_text("pas une video")
    return root


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test avec chemins temporaires."""
    return Settings(
        _env_file=None,
        root_folder=tmp_path / "clips",
        database_url="sqlite://",
        thumbnails_dir=tmp_path / "thumbs",
        log_file=tmp_path / "test.log",
    )
