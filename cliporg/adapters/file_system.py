"""
Adaptateur pour les operations sur le systeme de fichiers.

Implementation concrete de IFileSystem : parcours recursif du disque avec
filtrage sur les extensions video supportees.
"""

import os
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from cliporg.core.ports.file_system import DiscoveredFile, ErrorCallback, IFileSystem
from cliporg.utils.helpers import is_video_file


class FileSystemAdapter(IFileSystem):
    """
    Implementation de IFileSystem pour le systeme de fichiers reel.

    Le parcours utilise os.walk pour pouvoir intercepter les repertoires
    illisibles (onerror) sans interrompre le scan.
    """

    def is_directory(self, path: Path) -> bool:
        """Verifie si un chemin existe et est un repertoire."""
        try:
            return path.is_dir()
        except OSError:
            return False

    def is_file(self, path: Path) -> bool:
        """Verifie si un chemin existe et est un fichier regulier."""
        try:
            return path.is_file()
        except OSError:
            return False

    def walk_video_files(
        self, directory: Path, on_error: ErrorCallback
    ) -> Iterator[DiscoveredFile]:
        """
        Liste les fichiers video d'un repertoire (recursif).

        Filtre:
        - Par extension (VIDEO_EXTENSIONS, insensible a la casse)
        - Exclut les symlinks (evite les doublons et les boucles)

        Yields:
            DiscoveredFile pour chaque fichier video lisible
        """

        def _on_walk_error(error: OSError) -> None:
            on_error(str(error.filename or directory), error.strerror or str(error))

        for dirpath, dirnames, filenames in os.walk(directory, onerror=_on_walk_error):
            # Ordre deterministe du parcours
            dirnames.sort()
            for filename in sorted(filenames):
                if not is_video_file(filename):
                    continue

                path = Path(dirpath) / filename
                try:
                    if path.is_symlink():
                        continue
                    stat = path.stat()
                except OSError as e:
                    on_error(str(path), e.strerror or str(e))
                    continue

                yield DiscoveredFile(
                    path=path,
                    size_bytes=stat.st_size,
                    modified_at=datetime.fromtimestamp(stat.st_mtime),
                )
