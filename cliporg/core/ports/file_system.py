"""
Interfaces ports pour le systeme de fichiers.

Interface abstraite definissant les operations disque necessaires au scan
et a la synchronisation. L'adaptateur concret parcourt le vrai disque ; les
tests peuvent fournir un mock.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

# Callback appele pour chaque entree illisible : (chemin, message)
ErrorCallback = Callable[[str, str], None]


@dataclass(frozen=True)
class DiscoveredFile:
    """
    Fichier video trouve sur le disque avec ses metadonnees systeme.

    Attributs :
        path : Chemin du fichier
        size_bytes : Taille en octets
        modified_at : Date de derniere modification
    """

    path: Path
    size_bytes: int
    modified_at: datetime


class IFileSystem(ABC):
    """Interface pour les operations disque du scan et de la synchronisation."""

    @abstractmethod
    def is_directory(self, path: Path) -> bool:
        """Verifie si un chemin existe et est un repertoire."""
        ...

    @abstractmethod
    def is_file(self, path: Path) -> bool:
        """Verifie si un chemin existe et est un fichier regulier."""
        ...

    @abstractmethod
    def walk_video_files(
        self, directory: Path, on_error: ErrorCallback
    ) -> Iterator[DiscoveredFile]:
        """
        Parcourt recursivement un repertoire et liste les fichiers video.

        Le parcours est paresseux. Une entree illisible (permission refusee,
        fichier disparu pendant le scan) est signalee via on_error et ignoree :
        elle n'interrompt jamais le parcours.

        Args :
            directory : Repertoire racine du parcours
            on_error : Callback recevant (chemin, message) pour chaque entree ignoree

        Yields :
            DiscoveredFile pour chaque fichier video trouve
        """
        ...
