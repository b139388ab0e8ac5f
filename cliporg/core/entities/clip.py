"""
Entites du catalogue de clips.

Projection en lecture seule des enregistrements du catalogue persistant.
Le sous-systeme de reconciliation ne modifie jamais ces entites en place :
toute ecriture passe par le contrat ICatalogStore.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class StorageType(str, Enum):
    """Type de stockage d'un clip."""

    LOCAL = "local"  # Fichier sur le disque, participe a la reconciliation
    YOUTUBE = "youtube"  # Media externe, exclu de la reconciliation


@dataclass(frozen=True)
class Tag:
    """
    Etiquette associee a un clip.

    Attributs :
        id : Identifiant en base
        category : Categorie libre (ex: "Drill", "Player")
        value : Valeur affichee
    """

    id: int
    category: str
    value: str


@dataclass(frozen=True)
class CatalogEntry:
    """
    Clip connu du catalogue.

    Attributs :
        id : Identifiant en base
        location_string : Chemin du fichier (casse preservee) ou identifiant externe
        storage_type : Type de stockage (seuls les clips LOCAL sont reconcilies)
        title : Titre affiche
        description : Description libre
        duration_seconds : Duree en secondes (0 si inconnue)
        thumbnail_path : Chemin de la miniature stockee, si generee
        tags : Etiquettes du clip
    """

    id: int
    location_string: str
    storage_type: StorageType = StorageType.LOCAL
    title: str = ""
    description: str = ""
    duration_seconds: int = 0
    thumbnail_path: Optional[str] = None
    tags: tuple[Tag, ...] = field(default_factory=tuple)

    @property
    def is_local(self) -> bool:
        """Indique si le clip correspond a un fichier local."""
        return self.storage_type == StorageType.LOCAL
