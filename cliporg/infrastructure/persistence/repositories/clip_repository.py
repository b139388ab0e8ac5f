"""
Implementation SQLModel du catalogue de clips.

Implemente ICatalogStore pour la persistance des clips dans la base SQLite
via SQLModel. L'unicite de la cle d'emplacement est verifiee explicitement
avant insertion, puis garantie par l'index unique sur location_key : une
insertion concurrente perdante recoit DuplicateEntryError.
"""

from collections import defaultdict
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlmodel import Session, col, select

from cliporg.core.entities.clip import CatalogEntry, StorageType, Tag
from cliporg.core.errors import (
    CatalogError,
    CatalogUnavailableError,
    DuplicateEntryError,
    EntryNotFoundError,
    InvalidPathError,
)
from cliporg.core.ports.catalog import ICatalogStore
from cliporg.infrastructure.persistence.models import ClipModel, ClipTagLink, TagModel
from cliporg.services.path_normalizer import PathNormalizer
from cliporg.utils.helpers import sanitize_path_for_logging


class SQLModelCatalogStore(ICatalogStore):
    """
    Repository SQLModel pour les clips.

    Implemente ICatalogStore avec conversion entre l'entite CatalogEntry
    (domaine) et ClipModel (persistance).
    """

    def __init__(self, session: Session, normalizer: PathNormalizer) -> None:
        """
        Initialise le repository.

        Args :
            session : Session SQLModel active pour les operations DB
            normalizer : Calcul de la cle canonique (meme instance que le reconciler)
        """
        self._session = session
        self._normalizer = normalizer

    @contextmanager
    def _guard(self) -> Iterator[None]:
        """Convertit une perte de connexion en CatalogUnavailableError."""
        try:
            yield
        except OperationalError as e:
            self._session.rollback()
            logger.error("Catalogue injoignable: {error}", error=str(e.orig or e))
            raise CatalogUnavailableError(f"Catalog is unavailable: {e.orig or e}") from e

    def _to_entity(self, model: ClipModel, tags: tuple[Tag, ...] = ()) -> CatalogEntry:
        """Convertit un modele DB en entite domaine."""
        try:
            storage_type = StorageType(model.storage_type)
        except ValueError:
            storage_type = StorageType.YOUTUBE
        return CatalogEntry(
            id=model.id,
            location_string=model.location_string,
            storage_type=storage_type,
            title=model.title or "",
            description=model.description or "",
            duration_seconds=model.duration_seconds or 0,
            thumbnail_path=model.thumbnail_path,
            tags=tags,
        )

    def _load_tags(self, clip_ids: list[int]) -> dict[int, tuple[Tag, ...]]:
        """Charge les tags d'un ensemble de clips en une requete."""
        if not clip_ids:
            return {}
        statement = (
            select(ClipTagLink.clip_id, TagModel)
            .join(TagModel, TagModel.id == ClipTagLink.tag_id)
            .where(col(ClipTagLink.clip_id).in_(clip_ids))
            .order_by(TagModel.category, TagModel.value)
        )
        tags: dict[int, list[Tag]] = defaultdict(list)
        for clip_id, tag in self._session.exec(statement).all():
            tags[clip_id].append(Tag(id=tag.id, category=tag.category, value=tag.value))
        return {clip_id: tuple(values) for clip_id, values in tags.items()}

    def list_local_entries(self) -> list[CatalogEntry]:
        """Liste les clips LOCAL, par ID croissant."""
        with self._guard():
            statement = (
                select(ClipModel)
                .where(ClipModel.storage_type == StorageType.LOCAL.value)
                .order_by(ClipModel.id)
                .execution_options(populate_existing=True)
            )
            models = self._session.exec(statement).all()
            tags = self._load_tags([m.id for m in models])
        return [self._to_entity(m, tags.get(m.id, ())) for m in models]

    def get_by_id(self, entry_id: int) -> Optional[CatalogEntry]:
        """Recupere un clip par son ID."""
        with self._guard():
            model = self._session.get(ClipModel, entry_id, populate_existing=True)
            if model is None:
                return None
            tags = self._load_tags([model.id])
        return self._to_entity(model, tags.get(model.id, ()))

    def create_entry(
        self, location_string: str, title: str, duration_seconds: int = 0
    ) -> CatalogEntry:
        """Cree un clip LOCAL, apres verification explicite d'unicite."""
        try:
            location = self._normalizer.clean(location_string)
            key = self._normalizer.normalize(location_string)
        except InvalidPathError as e:
            raise CatalogError(f"Invalid location: {e}") from e

        with self._guard():
            existing = self._session.exec(
                select(ClipModel).where(ClipModel.location_key == key)
            ).first()
            if existing is not None:
                raise DuplicateEntryError(key, existing_id=existing.id)

            model = ClipModel(
                location_string=location,
                location_key=key,
                storage_type=StorageType.LOCAL.value,
                title=title,
                duration_seconds=duration_seconds,
            )
            self._session.add(model)
            try:
                self._session.commit()
            except IntegrityError as e:
                # Insertion concurrente gagnee par une autre session
                self._session.rollback()
                logger.warning(
                    "Conflit d'unicite a l'insertion: {path}",
                    path=sanitize_path_for_logging(location),
                )
                raise DuplicateEntryError(key) from e
            self._session.refresh(model)
        return self._to_entity(model)

    def delete_entry(self, entry_id: int) -> CatalogEntry:
        """Supprime un clip et ses associations de tags."""
        with self._guard():
            # Relecture en base : une autre session a pu supprimer le clip
            model = self._session.get(ClipModel, entry_id, populate_existing=True)
            if model is None:
                raise EntryNotFoundError(entry_id)
            entity = self._to_entity(model)

            links = self._session.exec(
                select(ClipTagLink).where(ClipTagLink.clip_id == entry_id)
            ).all()
            for link in links:
                self._session.delete(link)
            self._session.delete(model)
            self._session.commit()
        return entity

    def set_thumbnail(self, entry_id: int, thumbnail_path: str) -> None:
        """Enregistre le chemin de la miniature d'un clip."""
        with self._guard():
            model = self._session.get(ClipModel, entry_id, populate_existing=True)
            if model is None:
                raise EntryNotFoundError(entry_id)
            model.thumbnail_path = thumbnail_path
            self._session.add(model)
            self._session.commit()
