"""
Entites metier du domaine ClipOrg.

Exports:
- CatalogEntry, Tag, StorageType : projection du catalogue persistant
- ScannedFile, ScanWarning : resultats du scan disque
- NewItem, MatchedItem, MissingItem, ErrorItem : variantes de ReconciliationItem
- ReconciliationPreview, SyncSelection, SyncOutcome, SyncReport : protocole preview/apply
"""

from cliporg.core.entities.clip import CatalogEntry, StorageType, Tag
from cliporg.core.entities.reconciliation import (
    ErrorItem,
    ItemStatus,
    MatchedItem,
    MissingItem,
    NewItem,
    ReconciliationItem,
    ReconciliationPreview,
    ScannedFile,
    ScanWarning,
    SyncOutcome,
    SyncOutcomeType,
    SyncReport,
    SyncSelection,
)

__all__ = [
    "CatalogEntry",
    "StorageType",
    "Tag",
    "ErrorItem",
    "ItemStatus",
    "MatchedItem",
    "MissingItem",
    "NewItem",
    "ReconciliationItem",
    "ReconciliationPreview",
    "ScannedFile",
    "ScanWarning",
    "SyncOutcome",
    "SyncOutcomeType",
    "SyncReport",
    "SyncSelection",
]
