"""
Interfaces ports pour les collaborateurs media (metadonnees et miniatures).

Les deux collaborateurs sont "best effort" : leurs echecs degradent le
resultat (titre par defaut, pas de miniature) sans jamais faire echouer
l'ajout ou la suppression d'un clip.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from cliporg.core.value_objects.media_probe import ProbeResult


class IMetadataProbe(ABC):
    """Interface de resolution du titre et de la duree d'un fichier video."""

    @abstractmethod
    def probe(self, path: Path) -> ProbeResult:
        """
        Extrait le titre et la duree d'un fichier video.

        Leve :
            ProbeError : si le fichier ne peut pas etre analyse
        """
        ...


class IThumbnailGenerator(ABC):
    """Interface de generation et suppression des miniatures."""

    @abstractmethod
    def generate(
        self, clip_id: int, video_path: Path, duration_seconds: int = 0
    ) -> Path:
        """
        Genere la miniature d'un clip.

        La duree, si connue, sert a choisir l'instant de capture.

        Retourne :
            Chemin de la miniature creee

        Leve :
            ThumbnailError : si la generation echoue
        """
        ...

    @abstractmethod
    def delete(self, thumbnail_path: Path) -> None:
        """
        Supprime une miniature stockee (sans effet si elle n'existe pas).

        Leve :
            ThumbnailError : si la suppression echoue
        """
        ...
