"""
Hierarchie des erreurs du domaine ClipOrg.

Seules les erreurs de precondition (dossier racine invalide ou absent) et
la perte de connexion au catalogue sont fatales pour une session de
reconciliation. Les autres erreurs sont capturees par element et remontees
dans le rapport de synchronisation.
"""

from typing import Optional


class ClipOrgError(Exception):
    """Erreur de base de l'application."""


class RootFolderError(ClipOrgError):
    """Erreur sur le dossier racine d'une session (fatale)."""

    def __init__(self, message: str, root_folder: Optional[str] = None) -> None:
        self.root_folder = root_folder
        super().__init__(message)


class InvalidRootError(RootFolderError):
    """Dossier racine non renseigne ou chemin non absolu."""


class RootNotFoundError(RootFolderError):
    """Dossier racine inexistant ou qui n'est pas un repertoire."""


class InvalidPathError(ClipOrgError):
    """Chemin syntaxiquement invalide (vide, None, caractere NUL)."""


class ScanAlreadyConsumedError(ClipOrgError):
    """Un ScanRun a deja ete parcouru : il faut relancer un scan."""


class SessionStateError(ClipOrgError):
    """Operation demandee dans un etat de session qui ne la permet pas."""


class CatalogError(ClipOrgError):
    """Erreur remontee par le catalogue pour un element donne."""


class DuplicateEntryError(CatalogError):
    """
    Un clip existe deja pour cette cle d'emplacement.

    Attributes:
        location_key: Cle canonique en conflit
        existing_id: ID du clip deja present, si connu
    """

    def __init__(self, location_key: str, existing_id: Optional[int] = None) -> None:
        self.location_key = location_key
        self.existing_id = existing_id
        super().__init__("A clip with this file path already exists")


class EntryNotFoundError(CatalogError):
    """Le clip demande n'existe pas (ou plus) dans le catalogue."""

    def __init__(self, entry_id: int) -> None:
        self.entry_id = entry_id
        super().__init__(f"Clip {entry_id} not found")


class CatalogUnavailableError(ClipOrgError):
    """Le catalogue est injoignable : la session entiere echoue."""


class ProbeError(ClipOrgError):
    """Echec de l'extraction des metadonnees d'un fichier video."""


class ThumbnailError(ClipOrgError):
    """Echec de generation ou de suppression d'une miniature."""
