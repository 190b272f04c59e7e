"""
Project API endpoints
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator

from cgest.api.deps import get_storage, get_today
from cgest.api.v1.schemas import ProjectResponse, normalize_amount
from cgest.application.clients import ClientNotFoundError
from cgest.application.projects import (
    ChangeProjectPaymentStatusUseCase, ChangeProjectStatusUseCase, CreateProjectUseCase,
    DeleteProjectUseCase, ProjectValidationError,
)
from cgest.infrastructure.storage.repository import Storage

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


class CreateProjectRequest(BaseModel):
    client_id: str
    name: str
    budget: str = "0"
    description: str = ""
    status: str = "pending"
    payment_status: str = "pending"
    deadline: Optional[date] = None

    @field_validator("budget")
    @classmethod
    def validate_budget(cls, v: str) -> str:
        return normalize_amount(v)


class StatusRequest(BaseModel):
    status: str


@router.post("/", response_model=ProjectResponse)
def create_project(req: CreateProjectRequest, storage: Storage = Depends(get_storage), today=Depends(get_today)):
    try:
        project = CreateProjectUseCase(storage, today=lambda: today).execute(
            client_id=req.client_id,
            name=req.name,
            budget=req.budget,
            description=req.description,
            status=req.status,
            payment_status=req.payment_status,
            deadline=req.deadline,
        )
    except ClientNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ProjectValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ProjectResponse.from_record(project)


@router.get("/", response_model=list[ProjectResponse])
def list_projects(
    status: Optional[str] = None,
    payment_status: Optional[str] = None,
    storage: Storage = Depends(get_storage),
):
    """Projetos com filtro opcional por status e por status de pagamento"""
    projects = storage.projects.query(
        lambda p: (status is None or p.status == status)
        and (payment_status is None or p.payment_status == payment_status)
    )
    return [ProjectResponse.from_record(p) for p in projects]


@router.post("/{project_id}/status", response_model=ProjectResponse)
def change_status(project_id: str, req: StatusRequest, storage: Storage = Depends(get_storage)):
    try:
        project = ChangeProjectStatusUseCase(storage).execute(project_id, req.status)
    except ProjectValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ProjectResponse.from_record(project)


@router.post("/{project_id}/payment-status", response_model=ProjectResponse)
def change_payment_status(
    project_id: str,
    req: StatusRequest,
    storage: Storage = Depends(get_storage),
    today=Depends(get_today),
):
    try:
        project = ChangeProjectPaymentStatusUseCase(storage, today=lambda: today).execute(project_id, req.status)
    except ProjectValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ProjectResponse.from_record(project)


@router.delete("/{project_id}", status_code=204)
def delete_project(project_id: str, storage: Storage = Depends(get_storage)):
    try:
        DeleteProjectUseCase(storage).execute(project_id)
    except ProjectValidationError as e:
        raise HTTPException(status_code=404, detail=str(e))
