"""
Agenda: meeting event drafts and the merged day view.

A integração OAuth com a agenda externa fica fora daqui: eventos chegam
como CalendarEvent já carregados, e o rascunho de evento é entregue a quem
fala com a API externa.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional

from cgest.domain.task import Task

MEETING_DURATION = timedelta(hours=1)
DEFAULT_EVENT_DESCRIPTION = "Tarefa criada via CGest"

ENTRY_KIND_TASK = "task"
ENTRY_KIND_EVENT = "event"


@dataclass(frozen=True)
class CalendarEvent:
    """Evento vindo da agenda externa. `start_time` None = dia inteiro."""
    id: str
    summary: str
    day: date
    start_time: Optional[time] = None
    description: str = ""
    html_link: str = ""


@dataclass(frozen=True)
class CalendarEventDraft:
    summary: str
    description: str
    start: datetime
    end: datetime


@dataclass(frozen=True)
class AgendaEntry:
    kind: str
    id: str
    title: str
    day: date
    start_time: Optional[time]
    is_completed: bool = False


def build_meeting_event(task: Task, project_name: str | None = None) -> Optional[CalendarEventDraft]:
    """
    One-hour event for a meeting task.

    Returns None unless the task is a meeting with both a date and a time.
    """
    if not task.is_meeting or task.due_date is None or task.meeting_time is None:
        return None
    start = datetime.combine(task.due_date, task.meeting_time)
    return CalendarEventDraft(
        summary=task.title,
        description=f"Projeto: {project_name}" if project_name else DEFAULT_EVENT_DESCRIPTION,
        start=start,
        end=start + MEETING_DURATION,
    )


def merge_agenda(tasks: Iterable[Task], events: Iterable[CalendarEvent], day: date) -> List[AgendaEntry]:
    """
    Tasks due on `day` plus external events of `day`.

    Eventos já ligados a uma tarefa (google_event_id) não aparecem duas
    vezes. Ordem: itens com horário por horário, depois os sem horário;
    empate mantém tarefas antes de eventos, na ordem de entrada.
    """
    day_tasks = [t for t in tasks if t.due_date == day]
    linked = {t.google_event_id for t in day_tasks if t.google_event_id}

    entries = [
        AgendaEntry(
            kind=ENTRY_KIND_TASK,
            id=t.id,
            title=t.title,
            day=day,
            start_time=t.meeting_time if t.is_meeting else None,
            is_completed=t.is_completed,
        )
        for t in day_tasks
    ]
    entries += [
        AgendaEntry(
            kind=ENTRY_KIND_EVENT,
            id=e.id,
            title=e.summary,
            day=day,
            start_time=e.start_time,
        )
        for e in events
        if e.day == day and e.id not in linked
    ]
    return sorted(entries, key=lambda e: (e.start_time is None, e.start_time or time.min))
