"""
Shared request/response models
"""
from datetime import date, datetime, time
from typing import Optional

from pydantic import BaseModel

from cgest.domain.client import Client
from cgest.domain.goal import Goal
from cgest.domain.payment import Payment
from cgest.domain.project import Project
from cgest.domain.task import Task
from cgest.utils.validation import validate_and_normalize_amount


def normalize_amount(v: Optional[str]) -> Optional[str]:
    """Validação e normalização do valor (ponto/vírgula, máx 2 casas)"""
    if v is None:
        return v
    return validate_and_normalize_amount(str(v), max_decimal_places=2)


class ClientResponse(BaseModel):
    id: str
    name: str
    type: str
    status: str
    monthly_value: Optional[str]
    due_day: Optional[int]
    drive_folder_url: str
    created_at: Optional[datetime]
    financial_status: Optional[str] = None

    @classmethod
    def from_record(cls, c: Client, financial_status: str | None = None) -> "ClientResponse":
        return cls(
            id=c.id,
            name=c.name,
            type=c.type,
            status=c.status,
            monthly_value=str(c.monthly_value) if c.monthly_value is not None else None,
            due_day=c.due_day,
            drive_folder_url=c.drive_folder_url,
            created_at=c.created_at,
            financial_status=financial_status,
        )


class PaymentResponse(BaseModel):
    id: str
    client_id: str
    value: str  # Decimal as string
    due_date: Optional[date]
    status: str
    paid_at: Optional[date]
    description: str
    receipt_url: Optional[str]

    @classmethod
    def from_record(cls, p: Payment) -> "PaymentResponse":
        return cls(
            id=p.id,
            client_id=p.client_id,
            value=str(p.value),
            due_date=p.due_date,
            status=p.status,
            paid_at=p.paid_at,
            description=p.description,
            receipt_url=p.receipt_url,
        )


class ProjectResponse(BaseModel):
    id: str
    client_id: str
    name: str
    description: str
    status: str
    payment_status: str
    paid_at: Optional[date]
    budget: str
    deadline: Optional[date]

    @classmethod
    def from_record(cls, p: Project) -> "ProjectResponse":
        return cls(
            id=p.id,
            client_id=p.client_id,
            name=p.name,
            description=p.description,
            status=p.status,
            payment_status=p.payment_status,
            paid_at=p.paid_at,
            budget=str(p.budget),
            deadline=p.deadline,
        )


class GoalResponse(BaseModel):
    id: str
    description: str
    target_value: str
    current_value: str
    deadline: Optional[date]
    progress: float

    @classmethod
    def from_record(cls, g: Goal) -> "GoalResponse":
        return cls(
            id=g.id,
            description=g.description,
            target_value=str(g.target_value),
            current_value=str(g.current_value),
            deadline=g.deadline,
            progress=float(g.progress()),
        )


class TaskResponse(BaseModel):
    id: str
    title: str
    is_completed: bool
    project_id: Optional[str]
    due_date: Optional[date]
    is_meeting: bool
    meeting_time: Optional[time]
    google_event_id: Optional[str]

    @classmethod
    def from_record(cls, t: Task) -> "TaskResponse":
        return cls(
            id=t.id,
            title=t.title,
            is_completed=t.is_completed,
            project_id=t.project_id,
            due_date=t.due_date,
            is_meeting=t.is_meeting,
            meeting_time=t.meeting_time,
            google_event_id=t.google_event_id,
        )
