"""
Task and agenda API endpoints
"""
from datetime import date, datetime, time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from cgest.api.deps import get_storage, get_today
from cgest.api.v1.schemas import TaskResponse
from cgest.application.agenda import CalendarEvent, build_meeting_event, merge_agenda
from cgest.application.tasks_usecases import (
    CreateTaskUseCase, DeleteTaskUseCase, LinkCalendarEventUseCase,
    TaskReadService, TaskValidationError, ToggleTaskUseCase,
)
from cgest.infrastructure.storage.repository import Storage

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


class CreateTaskRequest(BaseModel):
    title: str
    project_id: Optional[str] = None
    due_date: Optional[date] = None
    is_meeting: bool = False
    meeting_time: Optional[time] = None


class ToggleTaskRequest(BaseModel):
    is_completed: bool


class LinkEventRequest(BaseModel):
    google_event_id: Optional[str] = None


class CalendarEventIn(BaseModel):
    id: str
    summary: str
    day: date
    start_time: Optional[time] = None
    description: str = ""
    html_link: str = ""


class AgendaRequest(BaseModel):
    day: date
    events: list[CalendarEventIn] = []


class AgendaEntryResponse(BaseModel):
    kind: str
    id: str
    title: str
    day: date
    start_time: Optional[time]
    is_completed: bool


class EventDraftResponse(BaseModel):
    summary: str
    description: str
    start: datetime
    end: datetime


@router.post("/", response_model=TaskResponse)
def create_task(req: CreateTaskRequest, storage: Storage = Depends(get_storage)):
    try:
        task = CreateTaskUseCase(storage).execute(**req.model_dump())
    except TaskValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return TaskResponse.from_record(task)


@router.get("/", response_model=dict[str, list[TaskResponse]])
def list_tasks(storage: Storage = Depends(get_storage), today=Depends(get_today)):
    """Tarefas agrupadas: atrasadas, hoje, esta semana, futuras, sem prazo, concluídas"""
    groups = TaskReadService(storage).grouped(today)
    return {name: [TaskResponse.from_record(t) for t in tasks] for name, tasks in groups.items()}


@router.post("/{task_id}/toggle", response_model=TaskResponse)
def toggle_task(task_id: str, req: ToggleTaskRequest, storage: Storage = Depends(get_storage)):
    try:
        task = ToggleTaskUseCase(storage).execute(task_id, req.is_completed)
    except TaskValidationError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TaskResponse.from_record(task)


@router.post("/{task_id}/calendar-link", response_model=TaskResponse)
def link_calendar_event(task_id: str, req: LinkEventRequest, storage: Storage = Depends(get_storage)):
    try:
        task = LinkCalendarEventUseCase(storage).execute(task_id, req.google_event_id)
    except TaskValidationError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TaskResponse.from_record(task)


@router.get("/{task_id}/calendar-event", response_model=EventDraftResponse)
def meeting_event_draft(task_id: str, storage: Storage = Depends(get_storage)):
    """Rascunho do evento de 1h para sincronizar a reunião com a agenda"""
    task = storage.tasks.get(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Tarefa não encontrada")
    project = storage.projects.get(task.project_id) if task.project_id else None
    draft = build_meeting_event(task, project.name if project else None)
    if draft is None:
        raise HTTPException(status_code=400, detail="Tarefa não é uma reunião com data e horário")
    return EventDraftResponse(
        summary=draft.summary,
        description=draft.description,
        start=draft.start,
        end=draft.end,
    )


@router.delete("/{task_id}", status_code=204)
def delete_task(task_id: str, storage: Storage = Depends(get_storage)):
    try:
        DeleteTaskUseCase(storage).execute(task_id)
    except TaskValidationError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/agenda", response_model=list[AgendaEntryResponse])
def agenda(req: AgendaRequest, storage: Storage = Depends(get_storage)):
    """Agenda do dia: tarefas + eventos da agenda externa enviados pelo cliente"""
    events = [CalendarEvent(**e.model_dump()) for e in req.events]
    entries = merge_agenda(storage.tasks.list(), events, req.day)
    return [
        AgendaEntryResponse(
            kind=e.kind,
            id=e.id,
            title=e.title,
            day=e.day,
            start_time=e.start_time,
            is_completed=e.is_completed,
        )
        for e in entries
    ]
