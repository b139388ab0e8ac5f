"""
Tests d'integration de la reconciliation avec les vrais adaptateurs.

Ces tests utilisent le vrai systeme de fichiers (FileSystemAdapter), le
catalogue SQLModel sur SQLite en memoire et les vrais services. Seules la
sonde MediaInfo et la generation de miniatures (ffmpeg) sont mockees.
"""

from pathlib import Path

import pytest
from dependency_injector import providers
from sqlmodel import Session

from cliporg.adapters.file_system import FileSystemAdapter
from cliporg.container import Container
from cliporg.core.entities.reconciliation import ItemStatus, SyncOutcomeType
from cliporg.core.errors import RootNotFoundError
from cliporg.infrastructure.persistence.models import ClipModel
from cliporg.infrastructure.persistence.repositories import SQLModelCatalogStore
from cliporg.services.reconciler import Reconciler
from cliporg.services.reconciliation import ReconciliationService, SessionState
from cliporg.services.scanner import FileScanner
from cliporg.services.sync_executor import SyncExecutor

pytestmark = pytest.mark.integration


@pytest.fixture
def media_root(tmp_path: Path) -> Path:
    """Dossier racine contenant a.mp4 et b.mov."""
    root = tmp_path / "media"
    root.mkdir()
    (root / "a.mp4").write_bytes(b"\x00" * 10)
    (root / "b.mov").write_bytes(b"\x00" * 20)
    return root


@pytest.fixture
def service(catalog_store, mock_probe, mock_thumbnailer, normalizer) -> ReconciliationService:
    file_system = FileSystemAdapter()
    executor = SyncExecutor(
        catalog=catalog_store,
        metadata_probe=mock_probe,
        thumbnail_generator=mock_thumbnailer,
        file_system=file_system,
        normalizer=normalizer,
    )
    return ReconciliationService(
        scanner=FileScanner(file_system),
        reconciler=Reconciler(normalizer),
        catalog=catalog_store,
        executor=executor,
    )


def _statuses(preview) -> dict[str, str]:
    return {Path(item.file_path).name: item.status.value for item in preview.items}


class TestScenarios:
    """Scenarios de bout en bout."""

    def test_empty_catalog(self, service, media_root):
        """Catalogue vide, disque {a, b} : deux nouveaux."""
        preview = service.preview(str(media_root))

        assert preview.new_files_count == 2
        assert preview.missing_files_count == 0
        assert preview.matched_files_count == 0
        assert preview.total_scanned == 2

    def test_matched_new_and_missing(self, service, catalog_store, media_root):
        """Catalogue {a, c}, disque {a, b}."""
        catalog_store.create_entry(str(media_root / "a.mp4"), "a")
        catalog_store.create_entry(str(media_root / "c.mp4"), "c")

        preview = service.preview(str(media_root))

        assert _statuses(preview) == {"a.mp4": "matched", "b.mov": "new", "c.mp4": "missing"}

    def test_selective_apply_then_preview(self, service, catalog_store, media_root):
        """Ajout de b seul : b devient apparie, c reste manquant."""
        catalog_store.create_entry(str(media_root / "a.mp4"), "a")
        catalog_store.create_entry(str(media_root / "c.mp4"), "c")

        report = service.apply_selection(str(media_root), [str(media_root / "b.mov")], [])

        assert report.total_added == 1
        assert report.total_scanned == 2
        assert len(catalog_store.list_local_entries()) == 3
        assert _statuses(service.preview(str(media_root))) == {
            "a.mp4": "matched",
            "b.mov": "matched",
            "c.mp4": "missing",
        }

    def test_missing_root_mutates_nothing(self, service, catalog_store, tmp_path):
        catalog_store.create_entry(str(tmp_path / "x.mp4"), "x")

        with pytest.raises(RootNotFoundError):
            service.preview(str(tmp_path / "absent"))
        with pytest.raises(RootNotFoundError):
            service.full_sync(str(tmp_path / "absent"))

        assert len(catalog_store.list_local_entries()) == 1

    def test_concurrently_deleted_clip(self, service, catalog_store, engine, normalizer, media_root):
        """Clip supprime par une autre session entre preview et apply."""
        entry = catalog_store.create_entry(str(media_root / "gone.mp4"), "gone")
        preview = service.preview(str(media_root))
        [missing] = preview.missing_items

        with Session(engine) as other_session:
            SQLModelCatalogStore(other_session, normalizer).delete_entry(entry.id)

        report = service.apply_selection(str(media_root), [], [missing.catalog_id])

        assert report.total_removed == 0
        assert len(report.errors) == 1
        assert report.errors[0].error_message == f"Clip {entry.id} not found"

    def test_external_clip_is_not_removable(self, service, catalog_store, db_session, media_root):
        """Un clip hors reconciliation ne peut pas etre supprime par ID."""
        external = ClipModel(location_string="https://youtu.be/abc", storage_type="youtube")
        db_session.add(external)
        db_session.commit()

        report = service.apply_selection(str(media_root), [], [external.id])

        assert report.total_removed == 0
        assert report.errors[0].error_message == "Clip is not a local file"
        assert catalog_store.get_by_id(external.id) is not None

    def test_clip_with_file_on_disk_is_not_removable(self, service, catalog_store, media_root):
        """Un clip apparie garde son entree, meme si son ID est demande."""
        entry = catalog_store.create_entry(str(media_root / "a.mp4"), "a")

        report = service.apply_selection(str(media_root), [], [entry.id])

        assert report.total_removed == 0
        assert report.errors[0].error_message == "File still exists"
        assert report.errors[0].file_path == str(media_root / "a.mp4")
        assert catalog_store.get_by_id(entry.id) is not None

    def test_clip_outside_root_is_not_removable(self, service, catalog_store, tmp_path, media_root):
        entry = catalog_store.create_entry(str(tmp_path / "archive" / "old.mp4"), "old")

        report = service.apply_selection(str(media_root), [], [entry.id])

        assert report.errors[0].error_message == "File is outside the root folder"
        assert catalog_store.get_by_id(entry.id) is not None


class TestProperties:
    """Idempotence et aller-retour."""

    def test_applying_new_set_twice(self, service, catalog_store, media_root):
        """Le second apply signale des doublons, sans creer de clip."""
        files = [item.file_path for item in service.preview(str(media_root)).new_items]

        first = service.apply_selection(str(media_root), files, [])
        second = service.apply_selection(str(media_root), files, [])

        assert first.total_added == 2
        assert second.total_added == 0
        assert [o.outcome for o in second.outcomes] == [SyncOutcomeType.FAILED] * 2
        assert len(catalog_store.list_local_entries()) == 2

    def test_round_trip(self, service, media_root):
        """Un fichier ajoute puis rescanne est apparie."""
        service.full_sync(str(media_root))

        preview = service.preview(str(media_root))

        assert {item.status for item in preview.items} == {ItemStatus.MATCHED}

    def test_full_sync_converges(self, service, catalog_store, media_root):
        """Apres une synchro complete, il ne reste rien a faire."""
        catalog_store.create_entry(str(media_root / "c.mp4"), "c")

        report = service.full_sync(str(media_root))

        assert report.total_added == 2
        assert report.total_removed == 1
        second = service.full_sync(str(media_root))
        assert second.outcomes == []

    def test_differently_spelled_root(self, service, catalog_store, media_root):
        """La racine ecrite avec un separateur final donne le meme diff."""
        catalog_store.create_entry(str(media_root / "a.mp4"), "a")

        preview = service.preview(str(media_root) + "/")

        assert preview.matched_files_count == 1
        assert preview.new_files_count == 1

    def test_session_states(self, service, media_root):
        session = service.open_session(str(media_root))

        session.preview()
        session.apply([], [])

        assert session.state == SessionState.COMPLETED


class TestContainerWiring:
    """Services assembles par le Container DI."""

    @pytest.fixture
    def container(self, test_settings, mock_probe, mock_thumbnailer):
        container = Container()
        container.config.override(providers.Object(test_settings))
        container.metadata_probe.override(providers.Object(mock_probe))
        container.thumbnail_generator.override(providers.Object(mock_thumbnailer))
        container.database.init()
        yield container
        container.shutdown_resources()
        container.engine().dispose()

    def test_full_sync_through_container(self, container, clip_root):
        root_folder = container.root_folder_service().resolve("")
        assert root_folder == str(clip_root)

        report = container.reconciliation_service().full_sync(root_folder)

        assert report.total_added == 2
        preview = container.reconciliation_service().preview(root_folder)
        assert preview.matched_files_count == 2

    def test_persisted_root_folder_has_priority(self, container, media_root):
        container.root_folder_service().update(str(media_root))

        assert container.root_folder_service().resolve(None) == str(media_root)
