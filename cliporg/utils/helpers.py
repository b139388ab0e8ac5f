"""
Fonctions utilitaires partagees dans le projet ClipOrg.

Ce module centralise l'assainissement des valeurs utilisateur avant journalisation :
- sanitize_for_logging : retire les caracteres de controle et tronque
- sanitize_path_for_logging : ne garde que les derniers segments d'un chemin
- is_video_file : filtre sur les extensions video supportees
"""

import re
import unicodedata
from pathlib import PurePath

from cliporg.utils.constants import LOG_MAX_LENGTH, LOG_PATH_SEGMENTS, VIDEO_EXTENSIONS

_WHITESPACE_RE = re.compile(r"\s+")


def is_video_file(path: str | PurePath) -> bool:
    """Verifie si l'extension d'un chemin fait partie des extensions video (insensible a la casse)."""
    return PurePath(str(path).replace("\\", "/")).suffix.lower() in VIDEO_EXTENSIONS


def sanitize_for_logging(value: object, max_length: int = LOG_MAX_LENGTH) -> str:
    """
    Assainit une valeur pour l'inclure dans un log.

    Remplace les caracteres de controle (retours ligne, tabulations, NUL...)
    par des espaces pour empecher l'injection de fausses lignes de log,
    fusionne les espaces et tronque au-dela de max_length.
    """
    if value is None:
        return ""
    text = str(value)
    if not text:
        return ""
    if max_length < 0:
        max_length = LOG_MAX_LENGTH
    if max_length == 0:
        return ""

    if len(text) > max_length:
        text = text[:max_length] + "..."

    cleaned = "".join(
        " " if unicodedata.category(char) in ("Cc", "Cf") else char
        for char in text
    )
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def sanitize_path_for_logging(path: object, segments: int = LOG_PATH_SEGMENTS) -> str:
    """
    Assainit un chemin pour les logs en ne gardant que ses derniers segments.

    Evite d'exposer l'arborescence complete (nom d'utilisateur, montage NAS)
    dans les fichiers de log.
    """
    text = sanitize_for_logging(path)
    if not text:
        return ""
    parts = PurePath(text.replace("\\", "/")).parts
    if len(parts) <= segments:
        return text
    return ".../" + "/".join(parts[-segments:])
