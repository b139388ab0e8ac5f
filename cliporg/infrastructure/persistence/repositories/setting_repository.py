"""
Implementation SQLModel du repository de parametres.

Stocke des paires cle/valeur dans la table settings (ex: VideoLibrary.RootFolder).
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from cliporg.core.errors import CatalogUnavailableError
from cliporg.core.ports.catalog import ISettingRepository
from cliporg.infrastructure.persistence.models import SettingModel


class SQLModelSettingRepository(ISettingRepository):
    """Repository SQLModel pour les parametres de l'application."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, key: str) -> Optional[str]:
        """Recupere la valeur d'un parametre, None si absent."""
        try:
            model = self._session.get(SettingModel, key)
        except OperationalError as e:
            raise CatalogUnavailableError(f"Catalog is unavailable: {e.orig or e}") from e
        return model.value if model else None

    def set(self, key: str, value: str) -> None:
        """Cree ou met a jour un parametre."""
        try:
            model = self._session.get(SettingModel, key)
            if model:
                model.value = value
                model.updated_at = datetime.utcnow()
            else:
                model = SettingModel(key=key, value=value)
            self._session.add(model)
            self._session.commit()
        except OperationalError as e:
            self._session.rollback()
            raise CatalogUnavailableError(f"Catalog is unavailable: {e.orig or e}") from e
