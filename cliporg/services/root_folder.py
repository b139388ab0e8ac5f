"""
Resolution du dossier racine d'une reconciliation.

Une valeur vide demandee par l'appelant designe le dossier par defaut :
d'abord le parametre persiste VideoLibrary.RootFolder, sinon la
configuration (CLIPORG_ROOT_FOLDER). L'existence du dossier n'est pas
verifiee ici : c'est le scanner qui leve RootNotFoundError.
"""

import ntpath
import posixpath
from pathlib import Path
from typing import Optional

from loguru import logger

from cliporg.core.errors import InvalidRootError
from cliporg.core.ports.catalog import ISettingRepository
from cliporg.utils.constants import ROOT_FOLDER_SETTING_KEY
from cliporg.utils.helpers import sanitize_path_for_logging


def _is_absolute(path: str) -> bool:
    # Chemins POSIX et chemins Windows avec lecteur (C:\...) ou UNC
    return posixpath.isabs(path) or (ntpath.isabs(path) and bool(ntpath.splitdrive(path)[0]))


def resolve_root_folder(raw: Optional[str], default: Optional[str]) -> str:
    """
    Determine le dossier racine effectif.

    Args:
        raw: Dossier demande par l'appelant (vide ou None -> defaut)
        default: Dossier par defaut configure

    Returns:
        Le chemin du dossier racine, sans espaces de bord

    Raises:
        InvalidRootError: aucun dossier disponible, ou chemin relatif
    """
    candidate = (raw or "").strip() or (default or "").strip()
    if not candidate:
        raise InvalidRootError("Root folder path is required")
    if not _is_absolute(candidate):
        raise InvalidRootError(
            "Root folder path must be an absolute path", root_folder=candidate
        )
    return candidate


class RootFolderService:
    """Lecture et mise a jour du dossier racine par defaut."""

    def __init__(
        self, setting_repo: ISettingRepository, fallback: Optional[Path] = None
    ) -> None:
        self._setting_repo = setting_repo
        self._fallback = fallback

    def get_default(self) -> Optional[str]:
        """Dossier par defaut : parametre persiste, puis configuration."""
        stored = self._setting_repo.get(ROOT_FOLDER_SETTING_KEY)
        if stored and stored.strip():
            return stored.strip()
        if self._fallback is not None:
            return str(self._fallback)
        return None

    def resolve(self, raw: Optional[str]) -> str:
        """Resout le dossier d'une requete, avec repli sur le dossier par defaut."""
        return resolve_root_folder(raw, self.get_default())

    def update(self, raw: Optional[str]) -> str:
        """
        Persiste un nouveau dossier par defaut.

        Raises:
            InvalidRootError: chemin vide ou relatif
        """
        root_folder = resolve_root_folder(raw, None)
        self._setting_repo.set(ROOT_FOLDER_SETTING_KEY, root_folder)
        logger.info(
            "Dossier racine par defaut mis a jour: {path}",
            path=sanitize_path_for_logging(root_folder),
        )
        return root_folder
