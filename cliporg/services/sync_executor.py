"""
Application d'une selection de synchronisation au catalogue.

Cree les clips des nouveaux fichiers et supprime les clips manquants, en
collectant un resultat par element. Un echec unitaire (doublon, clip deja
supprime, fichier disparu) n'interrompt jamais le lot : seule la perte du
catalogue (CatalogUnavailableError) remonte.

La sonde de metadonnees et les miniatures sont des etapes best effort :
leurs echecs deviennent des avertissements rattaches au resultat ADDED ou
REMOVED.

Une suppression n'est appliquee qu'a un clip reellement manquant : LOCAL, sous
le dossier racine et dont le fichier a disparu du disque.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from cliporg.core.entities.clip import CatalogEntry, StorageType
from cliporg.core.entities.reconciliation import (
    SyncOutcome,
    SyncOutcomeType,
    SyncReport,
    SyncSelection,
)
from cliporg.core.errors import (
    CatalogError,
    DuplicateEntryError,
    EntryNotFoundError,
    InvalidPathError,
    ProbeError,
    ThumbnailError,
)
from cliporg.core.ports.catalog import ICatalogStore
from cliporg.core.ports.file_system import IFileSystem
from cliporg.core.ports.media import IMetadataProbe, IThumbnailGenerator
from cliporg.core.value_objects import Attempt, ProbeResult
from cliporg.services.cancellation import CancellationToken
from cliporg.services.path_normalizer import PathNormalizer
from cliporg.utils.helpers import (
    is_video_file,
    sanitize_for_logging,
    sanitize_path_for_logging,
)


class SyncExecutor:
    """
    Applique les ajouts et suppressions d'une selection, sequentiellement.

    Ordre: ajouts dans l'ordre fourni, puis suppressions dans l'ordre fourni.
    L'unicite de la cle d'emplacement est garantie par le catalogue, pas
    par une pre-validation : un re-apply d'une selection deja synchronisee
    produit des resultats FAILED, jamais de doublons.
    """

    def __init__(
        self,
        catalog: ICatalogStore,
        metadata_probe: IMetadataProbe,
        thumbnail_generator: IThumbnailGenerator,
        file_system: IFileSystem,
        normalizer: PathNormalizer,
    ) -> None:
        self._catalog = catalog
        self._metadata_probe = metadata_probe
        self._thumbnail_generator = thumbnail_generator
        self._file_system = file_system
        self._normalizer = normalizer

    def apply(
        self,
        selection: SyncSelection,
        cancel_token: Optional[CancellationToken] = None,
        total_scanned: int = 0,
    ) -> SyncReport:
        """
        Applique une selection.

        Args:
            selection: Chemins a ajouter et IDs de clips a supprimer
            cancel_token: Jeton verifie entre deux elements
            total_scanned: Nombre de fichiers du scan associe (reporte tel quel)

        Returns:
            SyncReport avec un SyncOutcome par element traite

        Raises:
            CatalogUnavailableError: le catalogue est injoignable
        """
        report = SyncReport(total_scanned=total_scanned)

        for raw_path in selection.files_to_add:
            if self._is_cancelled(cancel_token, report):
                return report
            report.outcomes.append(self._add(raw_path, selection.root_folder))

        for clip_id in selection.clip_ids_to_remove:
            if self._is_cancelled(cancel_token, report):
                return report
            report.outcomes.append(self._remove(clip_id, selection.root_folder))

        logger.info(
            "Synchronisation appliquee: {added} ajout(s), {removed} suppression(s), {errors} erreur(s)",
            added=report.total_added,
            removed=report.total_removed,
            errors=len(report.errors),
        )
        return report

    def _is_cancelled(
        self, cancel_token: Optional[CancellationToken], report: SyncReport
    ) -> bool:
        if cancel_token is None or not cancel_token.is_cancelled:
            return False
        report.cancelled = True
        logger.warning(
            "Synchronisation annulee apres {count} element(s)",
            count=report.processed_count,
        )
        return True

    # Ajouts

    def _add(self, raw_path: str, root_folder: str) -> SyncOutcome:
        """Cree le clip d'un nouveau fichier."""
        try:
            file_path = self._normalizer.clean(raw_path)
            within_root = self._normalizer.is_within(file_path, root_folder)
        except InvalidPathError as e:
            return self._failed(str(raw_path or ""), f"Invalid file path: {e}")

        if not within_root:
            return self._failed(file_path, "File is outside the root folder")
        if not is_video_file(file_path):
            return self._failed(file_path, "Unsupported video file extension")

        video_path = Path(file_path)
        if not self._file_system.is_file(video_path):
            return self._failed(file_path, "File does not exist")

        warnings: list[str] = []
        probe = self._probe(video_path)
        if probe.succeeded and probe.value is not None:
            title = probe.value.title
            duration = probe.value.duration_seconds
        else:
            title = video_path.stem
            duration = 0
            warnings.append(probe.warning or "Metadata probe failed")

        try:
            entry = self._catalog.create_entry(file_path, title, duration)
        except DuplicateEntryError as e:
            logger.info(
                "Clip deja present, ajout ignore: {path}",
                path=sanitize_path_for_logging(file_path),
            )
            return self._failed(file_path, str(e), title=title)
        except CatalogError as e:
            logger.error(
                "Erreur d'ajout du clip {path}: {error}",
                path=sanitize_path_for_logging(file_path),
                error=sanitize_for_logging(e),
            )
            return self._failed(file_path, f"Error adding clip: {e}", title=title)

        thumbnail = self._generate_thumbnail(entry.id, video_path, duration)
        if not thumbnail.succeeded:
            warnings.append(thumbnail.warning or "Thumbnail generation failed")

        logger.info(
            "Clip ajoute: {path} (id={clip_id})",
            path=sanitize_path_for_logging(file_path),
            clip_id=entry.id,
        )
        return SyncOutcome(
            file_path=file_path,
            outcome=SyncOutcomeType.ADDED,
            title=entry.title,
            catalog_id=entry.id,
            warnings=tuple(warnings),
        )

    def _probe(self, video_path: Path) -> Attempt[ProbeResult]:
        """Resout titre et duree (best effort)."""
        try:
            return Attempt.ok(self._metadata_probe.probe(video_path))
        except ProbeError as e:
            logger.warning(
                "Sonde de metadonnees en echec pour {path}: {error}",
                path=sanitize_path_for_logging(video_path),
                error=sanitize_for_logging(e),
            )
            return Attempt.failed(f"Metadata probe failed: {e}")

    def _generate_thumbnail(
        self, clip_id: int, video_path: Path, duration_seconds: int
    ) -> Attempt[Path]:
        """Genere la miniature et l'enregistre sur le clip (best effort)."""
        try:
            thumbnail_path = self._thumbnail_generator.generate(
                clip_id, video_path, duration_seconds
            )
        except ThumbnailError as e:
            logger.warning(
                "Miniature non generee pour le clip {clip_id}: {error}",
                clip_id=clip_id,
                error=sanitize_for_logging(e),
            )
            return Attempt.failed(f"Thumbnail generation failed: {e}")

        try:
            self._catalog.set_thumbnail(clip_id, str(thumbnail_path))
        except CatalogError as e:
            return Attempt.failed(f"Thumbnail could not be recorded: {e}")
        return Attempt.ok(thumbnail_path)

    # Suppressions

    def _remove(self, clip_id: int, root_folder: str) -> SyncOutcome:
        """
        Supprime un clip manquant et sa miniature.

        Le clip doit etre LOCAL, situe sous le dossier racine et son fichier
        doit avoir disparu du disque : un ID qui ne designe pas un clip
        manquant est refuse sans mutation.
        """
        entry = self._catalog.get_by_id(clip_id)
        if entry is None:
            return self._failed("", str(EntryNotFoundError(clip_id)), catalog_id=clip_id)

        rejection = self._check_missing(entry, root_folder)
        if rejection is not None:
            logger.warning(
                "Suppression refusee du clip {clip_id}: {reason}",
                clip_id=clip_id,
                reason=rejection,
            )
            return self._failed(
                entry.location_string, rejection, title=entry.title, catalog_id=clip_id
            )

        try:
            entry = self._catalog.delete_entry(clip_id)
        except CatalogError as e:
            logger.warning(
                "Suppression impossible du clip {clip_id}: {error}",
                clip_id=clip_id,
                error=sanitize_for_logging(e),
            )
            return self._failed(
                entry.location_string, str(e), title=entry.title, catalog_id=clip_id
            )

        warnings: list[str] = []
        if entry.thumbnail_path:
            deleted = self._delete_thumbnail(Path(entry.thumbnail_path))
            if not deleted.succeeded:
                warnings.append(deleted.warning or "Thumbnail deletion failed")

        logger.info(
            "Clip supprime: {path} (id={clip_id})",
            path=sanitize_path_for_logging(entry.location_string),
            clip_id=clip_id,
        )
        return SyncOutcome(
            file_path=entry.location_string,
            outcome=SyncOutcomeType.REMOVED,
            title=entry.title,
            catalog_id=entry.id,
            warnings=tuple(warnings),
        )

    def _check_missing(self, entry: CatalogEntry, root_folder: str) -> Optional[str]:
        """Retourne le motif de refus si le clip n'est pas un clip manquant."""
        if entry.storage_type != StorageType.LOCAL:
            return "Clip is not a local file"
        try:
            within_root = self._normalizer.is_within(entry.location_string, root_folder)
        except InvalidPathError as e:
            return f"Invalid file path: {e}"
        if not within_root:
            return "File is outside the root folder"
        if self._file_system.is_file(Path(entry.location_string)):
            return "File still exists"
        return None

    def _delete_thumbnail(self, thumbnail_path: Path) -> Attempt[None]:
        """Supprime la miniature stockee (best effort)."""
        try:
            self._thumbnail_generator.delete(thumbnail_path)
        except ThumbnailError as e:
            logger.warning(
                "Miniature non supprimee {path}: {error}",
                path=sanitize_path_for_logging(thumbnail_path),
                error=sanitize_for_logging(e),
            )
            return Attempt.failed(f"Thumbnail deletion failed: {e}")
        return Attempt.ok()

    @staticmethod
    def _failed(
        file_path: str,
        message: str,
        title: str = "",
        catalog_id: Optional[int] = None,
    ) -> SyncOutcome:
        return SyncOutcome(
            file_path=file_path,
            outcome=SyncOutcomeType.FAILED,
            title=title,
            catalog_id=catalog_id,
            error_message=message,
        )
