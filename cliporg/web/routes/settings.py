"""
Route du dossier racine par defaut (parametre VideoLibrary.RootFolder).
"""

import asyncio

from fastapi import APIRouter, Request

from ..schemas import RootFolderRequest, RootFolderResponse

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("/root-folder", response_model=RootFolderResponse)
async def get_root_folder(request: Request):
    """Retourne le dossier racine par defaut (parametre persiste, sinon configuration)."""
    service = request.app.state.container.root_folder_service()
    root_folder = await asyncio.to_thread(service.get_default)
    return RootFolderResponse(root_folder_path=root_folder)


@router.put("/root-folder", response_model=RootFolderResponse)
async def update_root_folder(request: Request, body: RootFolderRequest):
    """Enregistre un nouveau dossier racine par defaut (chemin absolu)."""
    service = request.app.state.container.root_folder_service()
    root_folder = await asyncio.to_thread(service.update, body.root_folder_path)
    return RootFolderResponse(root_folder_path=root_folder)
