"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Ports catalogue :
- ICatalogStore : Lecture/ecriture des clips avec unicite de la cle d'emplacement
- ISettingRepository : Parametres persistes (dossier racine par defaut)

Ports systeme de fichiers :
- IFileSystem : Parcours du disque et verifications d'existence

Ports media :
- IMetadataProbe : Titre et duree d'un fichier video
- IThumbnailGenerator : Generation et suppression des miniatures
"""

from cliporg.core.ports.catalog import ICatalogStore, ISettingRepository
from cliporg.core.ports.file_system import DiscoveredFile, IFileSystem
from cliporg.core.ports.media import IMetadataProbe, IThumbnailGenerator

__all__ = [
    "ICatalogStore",
    "ISettingRepository",
    "DiscoveredFile",
    "IFileSystem",
    "IMetadataProbe",
    "IThumbnailGenerator",
]
