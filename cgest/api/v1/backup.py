"""
Backup / restore endpoints
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from cgest.api.deps import get_storage
from cgest.application.backup import BackupService
from cgest.infrastructure.storage.repository import Storage

router = APIRouter(prefix="/api/v1/backup", tags=["backup"])


@router.get("/")
def export_backup(storage: Storage = Depends(get_storage)):
    return BackupService(storage).export()


@router.post("/restore")
def restore_backup(backup: dict[str, Any] = Body(...), storage: Storage = Depends(get_storage)):
    """Restauração só é permitida no armazenamento local"""
    if not BackupService(storage).restore(backup):
        raise HTTPException(status_code=409, detail="Restauração indisponível neste armazenamento")
    return {"restored": True}
