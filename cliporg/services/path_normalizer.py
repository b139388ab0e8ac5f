"""
Normalisation des chemins pour la comparaison disque / catalogue.

Le meme fichier physique doit toujours produire la meme cle, quelle que soit
la facon dont son chemin a ete ecrit (separateurs Windows, barres finales,
segments "." et "..", casse sur un systeme de fichiers insensible a la casse).

Deux formes sont produites :
- clean() : chemin nettoye, casse preservee (affichage, stockage, ouverture du fichier)
- normalize() : cle canonique de comparaison (clean + Unicode NFC + casefold optionnel)
"""

import posixpath
import unicodedata
from typing import Optional

from cliporg.core.errors import InvalidPathError


class PathNormalizer:
    """
    Calcule les cles canoniques des chemins.

    Utilise a l'identique pour les fichiers scannes et pour les chemins
    stockes dans le catalogue, afin que le diff ne produise jamais de faux
    ecarts dus au seul formatage.
    """

    def __init__(self, case_insensitive: bool = True) -> None:
        """
        Args:
            case_insensitive: Si True, la cle ignore la casse (comportement historique)
        """
        self._case_insensitive = case_insensitive

    @property
    def case_insensitive(self) -> bool:
        return self._case_insensitive

    def clean(self, raw_path: Optional[str]) -> str:
        """
        Nettoie un chemin en preservant sa casse.

        Leve:
            InvalidPathError: chemin None, vide, blanc ou contenant un caractere NUL
        """
        if raw_path is None:
            raise InvalidPathError("Path is required")
        if not isinstance(raw_path, str):
            raw_path = str(raw_path)
        if not raw_path.strip():
            raise InvalidPathError("Path is empty")
        if "\x00" in raw_path:
            raise InvalidPathError("Path contains a NUL character")

        # Separateurs Windows -> POSIX, puis resolution de "." / ".." / "//"
        path = posixpath.normpath(raw_path.strip().replace("\\", "/"))

        # "C:" seul designe le repertoire courant du lecteur : garder la racine
        if len(path) == 2 and path[1] == ":":
            path += "/"
        return path

    def normalize(self, raw_path: Optional[str]) -> str:
        """
        Calcule la cle canonique d'un chemin.

        Leve:
            InvalidPathError: chemin syntaxiquement invalide
        """
        key = unicodedata.normalize("NFC", self.clean(raw_path))
        if self._case_insensitive:
            key = key.casefold()
        return key

    def is_within(self, raw_path: str, raw_root: str) -> bool:
        """Indique si un chemin se trouve sous un dossier racine (comparaison par cle)."""
        key = self.normalize(raw_path)
        root_key = self.normalize(raw_root)
        if key == root_key:
            return False
        prefix = root_key if root_key.endswith("/") else root_key + "/"
        return key.startswith(prefix)
