"""
Task use cases and task board read service
"""
import logging
from dataclasses import replace
from datetime import date, datetime, time, timezone
from typing import Dict, List

from cgest.domain.period import new_id
from cgest.domain.task import Task, TASK_GROUPS
from cgest.infrastructure.storage.repository import Storage

logger = logging.getLogger(__name__)


class TaskValidationError(ValueError):
    pass


def _get(storage: Storage, task_id: str) -> Task:
    task = storage.tasks.get(task_id)
    if task is None:
        raise TaskValidationError("Tarefa não encontrada")
    return task


class CreateTaskUseCase:
    def __init__(self, storage: Storage):
        self.storage = storage

    def execute(
        self,
        title: str,
        project_id: str | None = None,
        due_date: date | None = None,
        is_meeting: bool = False,
        meeting_time: time | None = None,
    ) -> Task:
        title = (title or "").strip()
        if not title:
            raise TaskValidationError("Título da tarefa não pode ser vazio")
        if project_id and self.storage.projects.get(project_id) is None:
            raise TaskValidationError("Projeto não encontrado")

        task = Task(
            id=new_id(),
            title=title,
            is_completed=False,
            project_id=project_id or None,
            due_date=due_date,
            created_at=datetime.now(timezone.utc),
            is_meeting=is_meeting,
            meeting_time=meeting_time if is_meeting else None,
        )
        self.storage.tasks.upsert(task)
        logger.info("Task %s created (meeting=%s)", task.id, is_meeting)
        return task


class ToggleTaskUseCase:
    def __init__(self, storage: Storage):
        self.storage = storage

    def execute(self, task_id: str, is_completed: bool) -> Task:
        task = replace(_get(self.storage, task_id), is_completed=is_completed)
        return self.storage.tasks.upsert(task)


class LinkCalendarEventUseCase:
    """Guarda o id do evento criado na agenda externa (para exclusão posterior)."""

    def __init__(self, storage: Storage):
        self.storage = storage

    def execute(self, task_id: str, google_event_id: str | None) -> Task:
        task = replace(_get(self.storage, task_id), google_event_id=google_event_id or None)
        return self.storage.tasks.upsert(task)


class DeleteTaskUseCase:
    def __init__(self, storage: Storage):
        self.storage = storage

    def execute(self, task_id: str) -> None:
        if not self.storage.tasks.delete(task_id):
            raise TaskValidationError("Tarefa não encontrada")


class TaskReadService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def grouped(self, today: date) -> Dict[str, List[Task]]:
        """Tasks by board group, groups in display order (empty groups kept)."""
        groups: Dict[str, List[Task]] = {group: [] for group in TASK_GROUPS}
        for task in self.storage.tasks.list():
            groups[task.group(today)].append(task)
        return groups

    def due_on(self, day: date) -> List[Task]:
        return self.storage.tasks.query(lambda t: t.due_date == day)
