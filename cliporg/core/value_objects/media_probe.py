"""
Objet valeur pour les metadonnees resolues d'un fichier video.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProbeResult:
    """
    Metadonnees minimales necessaires a la creation d'un clip.

    Attributs :
        title : Titre a utiliser (tag de titre du conteneur ou nom du fichier)
        duration_seconds : Duree en secondes (0 si inconnue)
    """

    title: str
    duration_seconds: int = 0
