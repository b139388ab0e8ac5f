"""
Module de persistance SQLite pour ClipOrg.

- database.py : Configuration de l'engine SQLite, session factory, initialisation
- models.py : Modeles SQLModel representant les tables de la base de donnees
- repositories/ : Implementations des ports du catalogue et des parametres

Usage:
    from cliporg.infrastructure.persistence import create_db_engine, init_db

    engine = create_db_engine("sqlite:///cliporg.db")
    init_db(engine)  # Cree les tables si necessaire
"""

from cliporg.infrastructure.persistence.database import (
    create_db_engine,
    get_engine,
    init_db,
)
from cliporg.infrastructure.persistence.models import (
    ClipModel,
    ClipTagLink,
    SettingModel,
    TagModel,
)

__all__ = [
    "create_db_engine",
    "get_engine",
    "init_db",
    "ClipModel",
    "ClipTagLink",
    "SettingModel",
    "TagModel",
]
