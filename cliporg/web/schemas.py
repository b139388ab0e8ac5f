"""
Schemas JSON de l'API de synchronisation (camelCase).

Les elements de reconciliation sont serialises en variante etiquetee :
le champ "status" indique la variante, et seuls les champs propres a
cette variante sont presents (les champs None sont omis).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cliporg.core.entities.clip import Tag
from cliporg.core.entities.reconciliation import (
    ErrorItem,
    MatchedItem,
    MissingItem,
    NewItem,
    ReconciliationItem,
    ReconciliationPreview,
    SyncOutcome,
    SyncReport,
)


class CamelModel(BaseModel):
    """Base des schemas : alias camelCase, noms Python acceptes en entree."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Requetes


class SelectiveSyncRequest(CamelModel):
    root_folder_path: str = ""
    files_to_add: list[str] = Field(default_factory=list)
    clip_ids_to_remove: list[int] = Field(default_factory=list)


class FullSyncRequest(CamelModel):
    root_folder_path: Optional[str] = None


class RootFolderRequest(CamelModel):
    root_folder_path: str


# Reponses


class TagDto(CamelModel):
    id: int
    category: str
    value: str


class ReconciliationItemDto(CamelModel):
    status: str
    file_path: str
    directory: Optional[str] = None
    file_size_bytes: Optional[int] = None
    modified_at: Optional[datetime] = None
    catalog_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[list[TagDto]] = None
    error_message: Optional[str] = None


class ScanWarningDto(CamelModel):
    path: str
    message: str


class SyncPreviewResponse(CamelModel):
    items: list[ReconciliationItemDto]
    total_scanned: int
    new_files_count: int
    missing_files_count: int
    matched_files_count: int
    error_count: int
    root_folder_path: str
    scan_warnings: list[ScanWarningDto] = Field(default_factory=list)
    cancelled: bool = False


class SyncClipDto(CamelModel):
    clip_id: int
    file_path: str
    title: str
    warnings: list[str] = Field(default_factory=list)


class SyncErrorDto(CamelModel):
    file_path: str
    error_message: str
    clip_id: Optional[int] = None


class SyncResponse(CamelModel):
    added_clips: list[SyncClipDto]
    removed_clips: list[SyncClipDto]
    errors: list[SyncErrorDto]
    total_scanned: int
    total_added: int
    total_removed: int
    processed_count: int = 0
    cancelled: bool = False


class RootFolderResponse(CamelModel):
    root_folder_path: Optional[str] = None


# Conversions domaine -> DTO


def _tags(tags: tuple[Tag, ...]) -> list[TagDto]:
    return [TagDto(id=t.id, category=t.category, value=t.value) for t in tags]


def item_to_dto(item: ReconciliationItem) -> ReconciliationItemDto:
    """Convertit un element de reconciliation selon sa variante."""
    if isinstance(item, NewItem):
        return ReconciliationItemDto(
            status=item.status.value,
            file_path=item.file_path,
            directory=item.directory,
            file_size_bytes=item.file_size_bytes,
            modified_at=item.modified_at,
        )
    if isinstance(item, MatchedItem):
        return ReconciliationItemDto(
            status=item.status.value,
            file_path=item.file_path,
            directory=item.directory,
            file_size_bytes=item.file_size_bytes,
            modified_at=item.modified_at,
            catalog_id=item.catalog_id,
            title=item.title,
            description=item.description,
            tags=_tags(item.tags),
        )
    if isinstance(item, MissingItem):
        return ReconciliationItemDto(
            status=item.status.value,
            file_path=item.file_path,
            catalog_id=item.catalog_id,
            title=item.title,
            description=item.description,
            tags=_tags(item.tags),
        )
    if isinstance(item, ErrorItem):
        return ReconciliationItemDto(
            status=item.status.value,
            file_path=item.file_path,
            error_message=item.error_message,
        )
    raise TypeError(f"Unknown reconciliation item: {type(item).__name__}")


def preview_to_response(preview: ReconciliationPreview) -> SyncPreviewResponse:
    return SyncPreviewResponse(
        items=[item_to_dto(item) for item in preview.items],
        total_scanned=preview.total_scanned,
        new_files_count=preview.new_files_count,
        missing_files_count=preview.missing_files_count,
        matched_files_count=preview.matched_files_count,
        error_count=preview.error_count,
        root_folder_path=preview.root_folder_path,
        scan_warnings=[
            ScanWarningDto(path=w.path, message=w.message) for w in preview.scan_warnings
        ],
        cancelled=preview.cancelled,
    )


def _clip_dto(outcome: SyncOutcome) -> SyncClipDto:
    return SyncClipDto(
        clip_id=outcome.catalog_id,
        file_path=outcome.file_path,
        title=outcome.title,
        warnings=list(outcome.warnings),
    )


def report_to_response(report: SyncReport) -> SyncResponse:
    return SyncResponse(
        added_clips=[_clip_dto(o) for o in report.added],
        removed_clips=[_clip_dto(o) for o in report.removed],
        errors=[
            SyncErrorDto(
                file_path=o.file_path,
                error_message=o.error_message or "",
                clip_id=o.catalog_id,
            )
            for o in report.errors
        ],
        total_scanned=report.total_scanned,
        total_added=report.total_added,
        total_removed=report.total_removed,
        processed_count=report.processed_count,
        cancelled=report.cancelled,
    )
