"""
Modeles SQLModel pour la base de donnees ClipOrg.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- clips: Clips video (fichiers locaux ou videos YouTube)
- tags: Tags categorises (categorie + valeur)
- clip_tags: Association clips <-> tags
- settings: Parametres cle/valeur (dont le dossier racine par defaut)

location_string conserve le chemin tel qu'ecrit (casse preservee).
location_key contient la cle canonique et porte la contrainte d'unicite :
c'est elle qui empeche les doublons entre sessions concurrentes.
Les clips non locaux n'ont pas de cle (NULL, hors contrainte).
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class ClipModel(SQLModel, table=True):
    """Modele representant un clip dans la base de donnees."""

    __tablename__ = "clips"

    id: int | None = Field(default=None, primary_key=True)
    location_string: str
    location_key: Optional[str] = Field(default=None, unique=True, index=True)
    storage_type: str = Field(default="local", index=True)  # "local" ou "youtube"
    title: str = ""
    description: str = ""
    duration_seconds: int = 0
    thumbnail_path: Optional[str] = None
    created_at: datetime | None = Field(default_factory=datetime.utcnow)
    updated_at: datetime | None = Field(default_factory=datetime.utcnow)


class TagModel(SQLModel, table=True):
    """Modele representant un tag (ex: categorie "lieu", valeur "Paris")."""

    __tablename__ = "tags"

    id: int | None = Field(default=None, primary_key=True)
    category: str = Field(index=True)
    value: str


class ClipTagLink(SQLModel, table=True):
    """Table d'association entre clips et tags."""

    __tablename__ = "clip_tags"

    clip_id: int = Field(foreign_key="clips.id", primary_key=True)
    tag_id: int = Field(foreign_key="tags.id", primary_key=True)


class SettingModel(SQLModel, table=True):
    """Parametre cle/valeur de l'application."""

    __tablename__ = "settings"

    key: str = Field(primary_key=True)
    value: str = ""
    updated_at: datetime | None = Field(default_factory=datetime.utcnow)
