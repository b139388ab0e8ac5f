"""
Routes de synchronisation du catalogue avec le disque.

- GET  /api/clips/sync-preview : diff disque / catalogue, sans mutation
- POST /api/clips/selective-sync : applique une selection issue d'une previsualisation
- POST /api/clips/sync : synchronisation complete (tous les nouveaux, tous les manquants)

Le travail bloquant (scan, sonde, ffmpeg, base) s'execute via asyncio.to_thread.
Les erreurs fatales (dossier racine, catalogue injoignable) sont converties
en reponses HTTP par les gestionnaires de cliporg.web.app.
"""

import asyncio

from fastapi import APIRouter, Query, Request

from ..schemas import (
    FullSyncRequest,
    SelectiveSyncRequest,
    SyncPreviewResponse,
    SyncResponse,
    preview_to_response,
    report_to_response,
)

router = APIRouter(prefix="/api/clips", tags=["sync"])


@router.get(
    "/sync-preview",
    response_model=SyncPreviewResponse,
    response_model_exclude_none=True,
    response_model_by_alias=True,
)
async def sync_preview(
    request: Request,
    root_folder_path: str = Query("", alias="rootFolderPath"),
):
    """Previsualise la reconciliation (chaine vide : dossier racine configure)."""
    container = request.app.state.container
    root_folder = await asyncio.to_thread(
        container.root_folder_service().resolve, root_folder_path
    )
    preview = await asyncio.to_thread(
        container.reconciliation_service().preview, root_folder
    )
    return preview_to_response(preview)


@router.post("/selective-sync", response_model=SyncResponse)
async def selective_sync(request: Request, body: SelectiveSyncRequest):
    """Ajoute et supprime les elements choisis par l'appelant."""
    container = request.app.state.container
    root_folder = await asyncio.to_thread(
        container.root_folder_service().resolve, body.root_folder_path
    )
    report = await asyncio.to_thread(
        container.reconciliation_service().apply_selection,
        root_folder,
        body.files_to_add,
        body.clip_ids_to_remove,
    )
    return report_to_response(report)


@router.post("/sync", response_model=SyncResponse)
async def full_sync(request: Request, body: FullSyncRequest | None = None):
    """Synchronisation complete sans selection."""
    container = request.app.state.container
    raw_root = body.root_folder_path if body else None
    root_folder = await asyncio.to_thread(
        container.root_folder_service().resolve, raw_root
    )
    report = await asyncio.to_thread(
        container.reconciliation_service().full_sync, root_folder
    )
    return report_to_response(report)
