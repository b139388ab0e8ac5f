"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces definies
dans cliporg/core/ports/catalog.py, utilisant SQLModel pour la persistance
SQLite.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from cliporg.infrastructure.persistence.repositories.clip_repository import (
    SQLModelCatalogStore,
)
from cliporg.infrastructure.persistence.repositories.setting_repository import (
    SQLModelSettingRepository,
)

__all__ = [
    "SQLModelCatalogStore",
    "SQLModelSettingRepository",
]
