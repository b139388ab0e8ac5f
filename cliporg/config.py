"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe CLIPORG_,
et peut optionnellement être fournie via un fichier .env.

Le dossier racine configuré ici n'est qu'une valeur par défaut : chaque session
de réconciliation reçoit explicitement son dossier racine.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de cliporg/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe CLIPORG_.
    Exemple : CLIPORG_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="CLIPORG_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Dossier racine par défaut (surchargé par le paramètre persisté en base)
    root_folder: Optional[Path] = Field(default=None)

    # Base de données
    database_url: str = Field(default="sqlite:///cliporg.db")

    # Miniatures (ffmpeg)
    thumbnails_dir: Path = Field(default=Path("data/thumbnails"))
    ffmpeg_binary: str = Field(default="ffmpeg")
    thumbnail_width: int = Field(default=320, ge=16)
    thumbnail_height: int = Field(default=180, ge=16)
    thumbnail_timeout_seconds: int = Field(default=30, ge=1)

    # Comparaison des chemins insensible à la casse (comportement historique)
    case_insensitive_paths: bool = Field(default=True)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/cliporg.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("thumbnails_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("root_folder", mode="before")
    @classmethod
    def expand_root_folder(cls, v: str | Path | None) -> Path | None:
        """Étend ~ et traite une valeur vide comme absente."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return Path(v).expanduser()
