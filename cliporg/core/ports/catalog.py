"""
Interfaces ports pour le catalogue de clips.

Le catalogue est le seul collaborateur mutable partage entre les sessions.
Son contrat impose une verification explicite d'unicite sur la cle
d'emplacement : un doublon est signale par DuplicateEntryError, jamais par
une exception bas niveau de la base.
"""

from abc import ABC, abstractmethod
from typing import Optional

from cliporg.core.entities.clip import CatalogEntry


class ICatalogStore(ABC):
    """
    Interface de stockage des clips.

    Les implementations levent CatalogUnavailableError si le stockage
    est injoignable.
    """

    @abstractmethod
    def list_local_entries(self) -> list[CatalogEntry]:
        """Liste tous les clips de type LOCAL (instantane du catalogue)."""
        ...

    @abstractmethod
    def get_by_id(self, entry_id: int) -> Optional[CatalogEntry]:
        """Recupere un clip par son ID."""
        ...

    @abstractmethod
    def create_entry(
        self, location_string: str, title: str, duration_seconds: int = 0
    ) -> CatalogEntry:
        """
        Cree un clip LOCAL pour un fichier.

        Args :
            location_string : Chemin du fichier (casse preservee)
            title : Titre du clip
            duration_seconds : Duree en secondes

        Retourne :
            Le clip cree avec son ID

        Leve :
            DuplicateEntryError : si un clip existe deja pour la meme cle canonique
        """
        ...

    @abstractmethod
    def delete_entry(self, entry_id: int) -> CatalogEntry:
        """
        Supprime un clip.

        Retourne :
            Le clip supprime (pour nettoyer sa miniature)

        Leve :
            EntryNotFoundError : si le clip n'existe pas
        """
        ...

    @abstractmethod
    def set_thumbnail(self, entry_id: int, thumbnail_path: str) -> None:
        """Enregistre le chemin de la miniature d'un clip."""
        ...


class ISettingRepository(ABC):
    """Interface de stockage des parametres cle/valeur de l'application."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Recupere la valeur d'un parametre, None si absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Cree ou met a jour un parametre."""
        ...
