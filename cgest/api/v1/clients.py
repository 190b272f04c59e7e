"""
Client API endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator

from cgest.api.deps import get_storage, get_today
from cgest.application.clients import (
    ClientNotFoundError, ClientReadService, ClientValidationError,
    CreateClientUseCase, DeleteClientUseCase, UpdateClientUseCase, get_client_or_raise,
)
from cgest.api.v1.schemas import ClientResponse, normalize_amount
from cgest.infrastructure.storage.repository import Storage

router = APIRouter(prefix="/api/v1/clients", tags=["clients"])


# === Request models ===

class CreateClientRequest(BaseModel):
    name: str
    type: str = "recurring"  # recurring (mensalista) | one-off (avulso)
    status: str = "active"
    monthly_value: Optional[str] = None
    due_day: Optional[int] = None
    drive_folder_url: str = ""

    @field_validator("monthly_value")
    @classmethod
    def validate_monthly_value(cls, v: Optional[str]) -> Optional[str]:
        """Valor da mensalidade: ponto ou vírgula, máx 2 casas"""
        return normalize_amount(v)


class UpdateClientRequest(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    monthly_value: Optional[str] = None
    due_day: Optional[int] = None
    drive_folder_url: Optional[str] = None

    @field_validator("monthly_value")
    @classmethod
    def validate_monthly_value(cls, v: Optional[str]) -> Optional[str]:
        return normalize_amount(v)


# === Endpoints ===

@router.post("/", response_model=ClientResponse)
def create_client(req: CreateClientRequest, storage: Storage = Depends(get_storage)):
    """Cadastrar cliente"""
    try:
        client = CreateClientUseCase(storage).execute(
            name=req.name,
            client_type=req.type,
            status=req.status,
            monthly_value=req.monthly_value,
            due_day=req.due_day,
            drive_folder_url=req.drive_folder_url,
        )
    except ClientValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ClientResponse.from_record(client)


@router.get("/", response_model=list[ClientResponse])
def list_clients(
    status: Optional[str] = None,
    storage: Storage = Depends(get_storage),
    today=Depends(get_today),
):
    """Lista de clientes com situação financeira (em dia / em atraso)"""
    items = ClientReadService(storage).list_clients(today, status_filter=status)
    return [ClientResponse.from_record(i["client"], i["financial_status"]) for i in items]


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(client_id: str, storage: Storage = Depends(get_storage)):
    try:
        return ClientResponse.from_record(get_client_or_raise(storage, client_id))
    except ClientNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{client_id}", response_model=ClientResponse)
def update_client(client_id: str, req: UpdateClientRequest, storage: Storage = Depends(get_storage)):
    try:
        client = UpdateClientUseCase(storage).execute(client_id, **req.model_dump(exclude_unset=True))
    except ClientNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ClientValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ClientResponse.from_record(client)


@router.delete("/{client_id}", status_code=204)
def delete_client(client_id: str, storage: Storage = Depends(get_storage)):
    try:
        DeleteClientUseCase(storage).execute(client_id)
    except ClientNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
