"""
Task domain entity (to-do items and meetings)
"""
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from cgest.domain.period import OptionalDate

TASK_GROUP_OVERDUE = "overdue"
TASK_GROUP_TODAY = "today"
TASK_GROUP_THIS_WEEK = "this_week"
TASK_GROUP_FUTURE = "future"
TASK_GROUP_NO_DEADLINE = "no_deadline"
TASK_GROUP_COMPLETED = "completed"

# Ordem de exibição no quadro de tarefas
TASK_GROUPS = (
    TASK_GROUP_OVERDUE,
    TASK_GROUP_TODAY,
    TASK_GROUP_THIS_WEEK,
    TASK_GROUP_FUTURE,
    TASK_GROUP_NO_DEADLINE,
    TASK_GROUP_COMPLETED,
)


@dataclass
class Task:
    """
    Tarefa. `is_meeting` + `meeting_time` marcam uma reunião;
    `google_event_id` liga a tarefa ao evento criado na agenda externa.
    """
    id: str
    title: str
    is_completed: bool = False
    project_id: Optional[str] = None
    due_date: OptionalDate = None
    created_at: Optional[datetime] = None
    is_meeting: bool = False
    meeting_time: Optional[time] = None
    google_event_id: Optional[str] = None

    def group(self, today: date) -> str:
        if self.is_completed:
            return TASK_GROUP_COMPLETED
        if self.due_date is None:
            return TASK_GROUP_NO_DEADLINE
        days = (self.due_date - today).days
        if days < 0:
            return TASK_GROUP_OVERDUE
        if days == 0:
            return TASK_GROUP_TODAY
        if days <= 7:
            return TASK_GROUP_THIS_WEEK
        return TASK_GROUP_FUTURE
