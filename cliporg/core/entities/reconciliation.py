"""
Entites transitoires de la reconciliation disque / catalogue.

Un ReconciliationItem est un type somme : une classe par statut, chacune
ne portant que les champs qui ont un sens pour ce statut. Un ErrorItem ne
peut donc pas porter de catalog_id, et un NewItem ne peut pas porter de
message d'erreur.

Ces objets ne vivent que le temps d'un appel (preview ou apply) et ne sont
jamais persistes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from cliporg.core.entities.clip import Tag


class ItemStatus(str, Enum):
    """Statut de reconciliation d'un chemin."""

    NEW = "new"  # Sur le disque, absent du catalogue
    MISSING = "missing"  # Dans le catalogue, absent du disque
    MATCHED = "matched"  # Present des deux cotes
    ERROR = "error"  # Cle non calculable ou doublon


@dataclass(frozen=True)
class ScannedFile:
    """
    Fichier video decouvert lors d'un scan.

    Attributs :
        path : Chemin du fichier tel que trouve sur le disque
        directory : Repertoire parent
        size_bytes : Taille en octets
        modified_at : Date de derniere modification
    """

    path: str
    directory: str
    size_bytes: int
    modified_at: datetime


@dataclass(frozen=True)
class ScanWarning:
    """Entree illisible ignoree pendant le scan (non fatale)."""

    path: str
    message: str


@dataclass(frozen=True)
class NewItem:
    """Fichier present sur le disque mais inconnu du catalogue."""

    file_path: str
    directory: str
    file_size_bytes: int
    modified_at: datetime

    @property
    def status(self) -> ItemStatus:
        return ItemStatus.NEW


@dataclass(frozen=True)
class MatchedItem:
    """Fichier present sur le disque et dans le catalogue."""

    file_path: str
    directory: str
    file_size_bytes: int
    modified_at: datetime
    catalog_id: int
    title: str
    description: str = ""
    tags: tuple[Tag, ...] = field(default_factory=tuple)

    @property
    def status(self) -> ItemStatus:
        return ItemStatus.MATCHED


@dataclass(frozen=True)
class MissingItem:
    """Clip du catalogue dont le fichier n'existe plus sous la racine."""

    file_path: str
    catalog_id: int
    title: str
    description: str = ""
    tags: tuple[Tag, ...] = field(default_factory=tuple)

    @property
    def status(self) -> ItemStatus:
        return ItemStatus.MISSING


@dataclass(frozen=True)
class ErrorItem:
    """Chemin ou clip exclu de la synchronisation (cle invalide, doublon)."""

    file_path: str
    error_message: str

    @property
    def status(self) -> ItemStatus:
        return ItemStatus.ERROR


ReconciliationItem = Union[NewItem, MatchedItem, MissingItem, ErrorItem]


@dataclass
class ReconciliationPreview:
    """
    Resultat d'une previsualisation (scan + diff, sans mutation).

    Attributes:
        items: Elements classes, dans l'ordre du scan puis du catalogue
        total_scanned: Nombre de fichiers video trouves sur le disque
        root_folder_path: Dossier racine effectivement scanne
        scan_warnings: Entrees illisibles ignorees pendant le scan
        cancelled: True si le scan a ete interrompu (diff partiel : les
            clips non atteints apparaissent a tort comme manquants)
    """

    items: list[ReconciliationItem]
    total_scanned: int
    root_folder_path: str
    scan_warnings: list[ScanWarning] = field(default_factory=list)
    cancelled: bool = False

    def _count(self, status: ItemStatus) -> int:
        return sum(1 for item in self.items if item.status == status)

    @property
    def new_files_count(self) -> int:
        return self._count(ItemStatus.NEW)

    @property
    def missing_files_count(self) -> int:
        return self._count(ItemStatus.MISSING)

    @property
    def matched_files_count(self) -> int:
        return self._count(ItemStatus.MATCHED)

    @property
    def error_count(self) -> int:
        return self._count(ItemStatus.ERROR)

    @property
    def new_items(self) -> list[NewItem]:
        """Filtre les nouveaux fichiers."""
        return [i for i in self.items if isinstance(i, NewItem)]

    @property
    def missing_items(self) -> list[MissingItem]:
        """Filtre les clips manquants."""
        return [i for i in self.items if isinstance(i, MissingItem)]


class SyncOutcomeType(str, Enum):
    """Issue d'une mutation tentee pendant l'apply."""

    ADDED = "added"
    REMOVED = "removed"
    FAILED = "failed"


@dataclass(frozen=True)
class SyncOutcome:
    """
    Resultat d'une mutation unitaire.

    Attributes:
        file_path: Chemin concerne
        outcome: ADDED, REMOVED ou FAILED
        title: Titre du clip (cree ou supprime)
        catalog_id: ID du clip cree ou supprime
        error_message: Message d'echec (FAILED uniquement)
        warnings: Echecs non bloquants (sonde, miniature) rattaches au succes
    """

    file_path: str
    outcome: SyncOutcomeType
    title: str = ""
    catalog_id: Optional[int] = None
    error_message: Optional[str] = None
    warnings: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SyncSelection:
    """Sous-ensemble du diff choisi par l'appelant."""

    root_folder: str
    files_to_add: list[str] = field(default_factory=list)
    clip_ids_to_remove: list[int] = field(default_factory=list)


@dataclass
class SyncReport:
    """
    Agregat des resultats d'un apply.

    Les outcomes sont dans l'ordre de traitement : ajouts dans l'ordre fourni,
    puis suppressions dans l'ordre fourni.
    """

    outcomes: list[SyncOutcome] = field(default_factory=list)
    total_scanned: int = 0
    cancelled: bool = False

    @property
    def added(self) -> list[SyncOutcome]:
        return [o for o in self.outcomes if o.outcome == SyncOutcomeType.ADDED]

    @property
    def removed(self) -> list[SyncOutcome]:
        return [o for o in self.outcomes if o.outcome == SyncOutcomeType.REMOVED]

    @property
    def errors(self) -> list[SyncOutcome]:
        return [o for o in self.outcomes if o.outcome == SyncOutcomeType.FAILED]

    @property
    def total_added(self) -> int:
        return len(self.added)

    @property
    def total_removed(self) -> int:
        return len(self.removed)

    @property
    def processed_count(self) -> int:
        """Nombre d'elements traites (utile apres une annulation)."""
        return len(self.outcomes)

    @property
    def warnings(self) -> list[str]:
        return [w for o in self.outcomes for w in o.warnings]
