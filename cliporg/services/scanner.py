"""
Service de scan du dossier racine.

Parcourt recursivement le dossier racine et produit un ScannedFile par
fichier video trouve. Le scan est paresseux et a usage unique : une nouvelle
reconciliation demande un nouveau scan.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Optional

from loguru import logger

from cliporg.core.entities.reconciliation import ScannedFile, ScanWarning
from cliporg.core.errors import RootNotFoundError, ScanAlreadyConsumedError
from cliporg.core.ports.file_system import IFileSystem
from cliporg.services.cancellation import CancellationToken
from cliporg.utils.helpers import sanitize_for_logging, sanitize_path_for_logging


class ScanRun:
    """
    Sequence paresseuse, finie et non redemarrable des fichiers d'un scan.

    Les entrees illisibles sont collectees dans warnings au fil du parcours.
    Les compteurs ne sont definitifs qu'une fois la sequence epuisee.

    Attributes:
        root: Dossier racine scanne
        warnings: Entrees illisibles ignorees (ScanWarning)
        scanned_count: Nombre de fichiers video produits
        cancelled: True si le scan a ete interrompu par annulation
    """

    def __init__(
        self,
        root: Path,
        file_system: IFileSystem,
        cancel_token: Optional[CancellationToken] = None,
    ) -> None:
        self.root = root
        self.warnings: list[ScanWarning] = []
        self.scanned_count = 0
        self.cancelled = False
        self._file_system = file_system
        self._cancel_token = cancel_token
        self._consumed = False

    def __iter__(self) -> Iterator[ScannedFile]:
        if self._consumed:
            raise ScanAlreadyConsumedError(
                f"Scan of {self.root} was already consumed; start a new scan"
            )
        self._consumed = True
        return self._iterate()

    def _iterate(self) -> Iterator[ScannedFile]:
        for discovered in self._file_system.walk_video_files(self.root, self._record_warning):
            if self._cancel_token is not None and self._cancel_token.is_cancelled:
                self.cancelled = True
                logger.warning(
                    "Scan annule apres {count} fichier(s)", count=self.scanned_count
                )
                return

            self.scanned_count += 1
            yield ScannedFile(
                path=str(discovered.path),
                directory=str(discovered.path.parent),
                size_bytes=discovered.size_bytes,
                modified_at=discovered.modified_at,
            )

        logger.debug(
            "Scan termine: {count} fichier(s), {warnings} entree(s) ignoree(s)",
            count=self.scanned_count,
            warnings=len(self.warnings),
        )

    def _record_warning(self, path: str, message: str) -> None:
        """Enregistre une entree illisible sans interrompre le scan."""
        self.warnings.append(ScanWarning(path=path, message=message))
        logger.warning(
            "Entree ignoree pendant le scan: {path} ({message})",
            path=sanitize_path_for_logging(path),
            message=sanitize_for_logging(message),
        )


class FileScanner:
    """
    Service de scan des fichiers video sous un dossier racine.

    Coordonne le systeme de fichiers (IFileSystem) et verifie la
    precondition sur le dossier racine avant tout parcours.
    """

    def __init__(self, file_system: IFileSystem) -> None:
        """
        Args:
            file_system: Implementation de IFileSystem pour le parcours du disque
        """
        self._file_system = file_system

    def scan(
        self, root_folder: str | Path, cancel_token: Optional[CancellationToken] = None
    ) -> ScanRun:
        """
        Prepare le scan d'un dossier racine.

        La verification du dossier racine est immediate ; le parcours ne
        commence qu'a l'iteration du ScanRun retourne.

        Raises:
            RootNotFoundError: le dossier n'existe pas ou n'est pas un repertoire
        """
        root = Path(root_folder)
        if not self._file_system.is_directory(root):
            raise RootNotFoundError("Root folder does not exist", root_folder=str(root_folder))

        logger.info("Scan du dossier racine {root}", root=sanitize_path_for_logging(root))
        return ScanRun(root, self._file_system, cancel_token)
