"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- ProbeResult : Titre et duree resolus pour un fichier video
- Attempt : Resultat d'une etape best effort (sonde, miniature)
"""

from cliporg.core.value_objects.attempt import Attempt
from cliporg.core.value_objects.media_probe import ProbeResult

__all__ = [
    "Attempt",
    "ProbeResult",
]
