"""
Configuration de la base de donnees SQLite pour ClipOrg.

Ce module fournit :
- Engine SQLite configure pour un usage multi-thread (routes web via asyncio.to_thread)
- Fonction d'initialisation des tables

La base de donnees est configuree via CLIPORG_DATABASE_URL (defaut: sqlite:///cliporg.db).
Une URL en memoire (sqlite://, sqlite:///:memory:) utilise une connexion unique
partagee, sans quoi chaque session verrait une base vide.
"""

from pathlib import Path
from typing import Optional

from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

# Engine global - initialise lors du premier appel a get_engine()
_engine: Optional[Engine] = None

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def create_db_engine(database_url: str) -> Engine:
    """
    Cree un engine SQLite pour une URL donnee.

    Cree le repertoire parent du fichier de base si necessaire.
    """
    if database_url in _MEMORY_URLS:
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if database_url.startswith("sqlite:///"):
        db_path = Path(database_url.replace("sqlite:///", "", 1))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    return create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )


def get_engine() -> Engine:
    """
    Retourne l'engine de l'application, en le creant si necessaire.

    Utilise la configuration de l'application pour l'URL de la BDD.
    """
    global _engine
    if _engine is None:
        from cliporg.config import Settings

        _engine = create_db_engine(Settings().database_url)
    return _engine


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Initialise la base de donnees en creant toutes les tables.

    Les modeles sont importes ici pour enregistrer leurs metadonnees dans
    SQLModel.metadata sans import circulaire. Les tables existantes ne
    sont pas modifiees.
    """
    from cliporg.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine or get_engine())
