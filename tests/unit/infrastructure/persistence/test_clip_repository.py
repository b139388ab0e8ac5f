"""
Tests pour SQLModelCatalogStore sur une base SQLite en memoire.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, select

from cliporg.core.entities.clip import StorageType
from cliporg.core.errors import (
    CatalogError,
    CatalogUnavailableError,
    DuplicateEntryError,
    EntryNotFoundError,
)
from cliporg.infrastructure.persistence.database import create_db_engine, init_db
from cliporg.infrastructure.persistence.models import ClipModel, ClipTagLink, TagModel
from cliporg.infrastructure.persistence.repositories import SQLModelCatalogStore


class TestCreateEntry:
    """Creation de clips et unicite de la cle d'emplacement."""

    def test_create_assigns_id_and_key(self, catalog_store, db_session):
        entry = catalog_store.create_entry("/Clips/Drill.MP4", "Drill", 42)

        assert entry.id is not None
        assert entry.location_string == "/Clips/Drill.MP4"
        assert entry.storage_type == StorageType.LOCAL
        assert entry.title == "Drill"
        assert entry.duration_seconds == 42

        model = db_session.get(ClipModel, entry.id)
        assert model.location_key == "/clips/drill.mp4"

    def test_location_is_cleaned(self, catalog_store):
        entry = catalog_store.create_entry("/Clips//sub/./a.mp4/", "a")

        assert entry.location_string == "/Clips/sub/a.mp4"

    def test_duplicate_spelling_is_rejected(self, catalog_store):
        """Une autre ecriture du meme chemin est un doublon."""
        first = catalog_store.create_entry("/clips/a.mp4", "a")

        with pytest.raises(DuplicateEntryError) as exc_info:
            catalog_store.create_entry("\\CLIPS\\A.mp4", "a")

        assert exc_info.value.existing_id == first.id
        assert len(catalog_store.list_local_entries()) == 1

    def test_invalid_location(self, catalog_store):
        with pytest.raises(CatalogError, match="Invalid location"):
            catalog_store.create_entry("  ", "blank")

    def test_get_by_id_returns_storage_type(self, catalog_store, db_session):
        """Le garde de suppression s'appuie sur le type de stockage relu."""
        external = ClipModel(location_string="https://youtu.be/1", storage_type="youtube")
        db_session.add(external)
        db_session.commit()

        found = catalog_store.get_by_id(external.id)

        assert found is not None
        assert found.storage_type == StorageType.YOUTUBE
        assert catalog_store.get_by_id(9999) is None


class TestListLocalEntries:
    """Instantane des clips LOCAL."""

    def test_non_local_clips_are_excluded(self, catalog_store, db_session):
        catalog_store.create_entry("/clips/a.mp4", "a")
        # Deux clips externes sans cle : la contrainte d'unicite ne s'applique pas
        db_session.add(ClipModel(location_string="https://youtu.be/1", storage_type="youtube"))
        db_session.add(ClipModel(location_string="https://youtu.be/2", storage_type="youtube"))
        db_session.commit()

        entries = catalog_store.list_local_entries()

        assert [e.location_string for e in entries] == ["/clips/a.mp4"]

    def test_entries_carry_tags(self, catalog_store, db_session):
        entry = catalog_store.create_entry("/clips/a.mp4", "a")
        tag = TagModel(category="Drill", value="Passing")
        db_session.add(tag)
        db_session.commit()
        db_session.add(ClipTagLink(clip_id=entry.id, tag_id=tag.id))
        db_session.commit()

        [loaded] = catalog_store.list_local_entries()

        assert len(loaded.tags) == 1
        assert loaded.tags[0].category == "Drill"
        assert loaded.tags[0].value == "Passing"

    def test_ordered_by_id(self, catalog_store):
        ids = [catalog_store.create_entry(f"/clips/{name}.mp4", name).id for name in "cab"]

        assert [e.id for e in catalog_store.list_local_entries()] == sorted(ids)


class TestDeleteAndThumbnail:
    """Suppression et miniatures."""

    def test_delete_returns_removed_entry(self, catalog_store, db_session):
        entry = catalog_store.create_entry("/clips/a.mp4", "a")
        tag = TagModel(category="Player", value="Ana")
        db_session.add(tag)
        db_session.commit()
        db_session.add(ClipTagLink(clip_id=entry.id, tag_id=tag.id))
        db_session.commit()

        removed = catalog_store.delete_entry(entry.id)

        assert removed.id == entry.id
        assert catalog_store.get_by_id(entry.id) is None
        assert db_session.exec(select(ClipTagLink)).all() == []
        # Le tag lui-meme est conserve
        assert db_session.get(TagModel, tag.id) is not None

    def test_delete_unknown_raises(self, catalog_store):
        with pytest.raises(EntryNotFoundError) as exc_info:
            catalog_store.delete_entry(999)
        assert exc_info.value.entry_id == 999

    def test_recreate_after_delete(self, catalog_store):
        """La cle est liberee par la suppression."""
        entry = catalog_store.create_entry("/clips/a.mp4", "a")
        catalog_store.delete_entry(entry.id)

        again = catalog_store.create_entry("/clips/a.mp4", "a")

        assert again.id is not None

    def test_set_thumbnail(self, catalog_store):
        entry = catalog_store.create_entry("/clips/a.mp4", "a")

        catalog_store.set_thumbnail(entry.id, "/thumbs/1.jpg")

        assert catalog_store.get_by_id(entry.id).thumbnail_path == "/thumbs/1.jpg"

    def test_set_thumbnail_unknown_raises(self, catalog_store):
        with pytest.raises(EntryNotFoundError):
            catalog_store.set_thumbnail(999, "/thumbs/999.jpg")


class TestConcurrentSessions:
    """Deux sessions sur la meme base fichier."""

    @pytest.fixture
    def file_engine(self, tmp_path):
        engine = create_db_engine(f"sqlite:///{tmp_path / 'catalog.db'}")
        init_db(engine)
        yield engine
        engine.dispose()

    def test_second_delete_sees_first(self, file_engine, normalizer):
        """Un clip supprime par une autre session donne EntryNotFoundError."""
        with Session(file_engine) as first_session, Session(file_engine) as second_session:
            first = SQLModelCatalogStore(first_session, normalizer)
            second = SQLModelCatalogStore(second_session, normalizer)
            entry = first.create_entry("/clips/a.mp4", "a")
            assert second.get_by_id(entry.id) is not None

            first.delete_entry(entry.id)

            with pytest.raises(EntryNotFoundError):
                second.delete_entry(entry.id)

    def test_second_create_is_duplicate(self, file_engine, normalizer):
        with Session(file_engine) as first_session, Session(file_engine) as second_session:
            SQLModelCatalogStore(first_session, normalizer).create_entry("/clips/a.mp4", "a")

            with pytest.raises(DuplicateEntryError):
                SQLModelCatalogStore(second_session, normalizer).create_entry(
                    "/clips/A.mp4", "a"
                )


class TestUnavailable:
    """Perte de la base."""

    def test_operational_error_becomes_unavailable(self, normalizer):
        session = MagicMock()
        session.exec.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
        store = SQLModelCatalogStore(session, normalizer)

        with pytest.raises(CatalogUnavailableError, match="database is locked"):
            store.list_local_entries()

        session.rollback.assert_called_once()
