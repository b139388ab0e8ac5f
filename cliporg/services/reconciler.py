"""
Reconciliation entre les fichiers scannes et le catalogue.

Calcule le diff ensembliste entre le disque et le catalogue, et classe
chaque chemin en NEW, MISSING, MATCHED ou ERROR.

Le calcul est pur : aucune entree/sortie, aucune mutation du catalogue,
resultat deterministe pour des entrees donnees.
"""

from collections.abc import Iterable

from cliporg.core.entities.clip import CatalogEntry
from cliporg.core.entities.reconciliation import (
    ErrorItem,
    MatchedItem,
    MissingItem,
    NewItem,
    ReconciliationItem,
    ScannedFile,
)
from cliporg.core.errors import InvalidPathError
from cliporg.services.path_normalizer import PathNormalizer


class Reconciler:
    """
    Classe les chemins du disque et du catalogue.

    Regles:
    - cle presente seulement sur le disque -> NewItem
    - cle presente seulement dans le catalogue -> MissingItem
    - cle presente des deux cotes -> MatchedItem
    - cle non calculable -> ErrorItem, exclu des ajouts/suppressions
    - cle en double (catalogue ou disque) -> le premier gagne, chaque doublon devient un ErrorItem

    Seuls les clips LOCAL font partie de l'univers du diff ; les autres
    types de stockage sont ignores.

    Ordre du resultat: ordre du scan (NEW/MATCHED/ERROR des fichiers),
    puis ordre du catalogue (MISSING/ERROR des clips).
    """

    def __init__(self, normalizer: PathNormalizer) -> None:
        self._normalizer = normalizer

    def diff(
        self,
        scanned_files: Iterable[ScannedFile],
        catalog_entries: Iterable[CatalogEntry],
    ) -> list[ReconciliationItem]:
        """
        Calcule le diff disque / catalogue.

        Args:
            scanned_files: Fichiers trouves sur le disque (consommes une seule fois)
            catalog_entries: Instantane du catalogue

        Returns:
            Liste des elements classes
        """
        catalog_by_key, catalog_slots = self._index_catalog(catalog_entries)
        scanned_keys: set[str] = set()
        items: list[ReconciliationItem] = []

        # Passe 1 : fichiers du disque
        first_file_by_key: dict[str, ScannedFile] = {}
        for scanned in scanned_files:
            try:
                key = self._normalizer.normalize(scanned.path)
                display_path = self._normalizer.clean(scanned.path)
            except InvalidPathError as e:
                items.append(
                    ErrorItem(
                        file_path=scanned.path,
                        error_message=f"Invalid file path: {e}",
                    )
                )
                continue

            if key in first_file_by_key:
                items.append(
                    ErrorItem(
                        file_path=display_path,
                        error_message=(
                            "Duplicate file path: same location as "
                            f"{first_file_by_key[key].path}"
                        ),
                    )
                )
                continue

            first_file_by_key[key] = scanned
            scanned_keys.add(key)
            entry = catalog_by_key.get(key)
            if entry is None:
                items.append(
                    NewItem(
                        file_path=display_path,
                        directory=self._normalizer.clean(scanned.directory),
                        file_size_bytes=scanned.size_bytes,
                        modified_at=scanned.modified_at,
                    )
                )
            else:
                items.append(
                    MatchedItem(
                        file_path=display_path,
                        directory=self._normalizer.clean(scanned.directory),
                        file_size_bytes=scanned.size_bytes,
                        modified_at=scanned.modified_at,
                        catalog_id=entry.id,
                        title=entry.title,
                        description=entry.description,
                        tags=entry.tags,
                    )
                )

        # Passe 2 : clips du catalogue absents du disque, et anomalies
        for slot in catalog_slots:
            if isinstance(slot, ErrorItem):
                items.append(slot)
                continue
            if slot in scanned_keys:
                continue
            entry = catalog_by_key[slot]
            items.append(
                MissingItem(
                    file_path=self._normalizer.clean(entry.location_string),
                    catalog_id=entry.id,
                    title=entry.title,
                    description=entry.description,
                    tags=entry.tags,
                )
            )

        return items

    def _index_catalog(
        self, catalog_entries: Iterable[CatalogEntry]
    ) -> tuple[dict[str, CatalogEntry], list[str | ErrorItem]]:
        """
        Indexe les clips LOCAL par cle canonique.

        Returns:
            (cle -> premier clip, sequence ordonnee de cles ou d'ErrorItem)
        """
        by_key: dict[str, CatalogEntry] = {}
        slots: list[str | ErrorItem] = []

        for entry in catalog_entries:
            if not entry.is_local:
                continue

            try:
                key = self._normalizer.normalize(entry.location_string)
            except InvalidPathError as e:
                slots.append(
                    ErrorItem(
                        file_path=entry.location_string or f"clip:{entry.id}",
                        error_message=f"Clip {entry.id} has an invalid location: {e}",
                    )
                )
                continue

            first = by_key.get(key)
            if first is not None:
                slots.append(
                    ErrorItem(
                        file_path=self._normalizer.clean(entry.location_string),
                        error_message=(
                            f"Duplicate catalog entry: clip {entry.id} has the same "
                            f"location as clip {first.id}"
                        ),
                    )
                )
                continue

            by_key[key] = entry
            slots.append(key)

        return by_key, slots
