"""
Record storage interface

Toda persistência passa por RecordStore: get / list / query / upsert / delete
por registro. O backend (SQL ou arquivos locais) é escolhido uma vez na
inicialização da aplicação e entregue explicitamente a quem precisa.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Protocol, TypeVar

from sqlalchemy.orm import Session

from cgest.config import Settings
from cgest.domain.client import Client
from cgest.domain.goal import Goal
from cgest.domain.payment import Payment
from cgest.domain.project import Project
from cgest.domain.task import Task
from cgest.domain.user import UserProfile

T = TypeVar("T")

BACKEND_SQL = "sql"
BACKEND_LOCAL = "local"
BACKENDS = (BACKEND_SQL, BACKEND_LOCAL)


class RecordStore(Protocol[T]):
    def get(self, record_id: str) -> Optional[T]:
        ...

    def list(self) -> List[T]:
        """All records in insertion order."""
        ...

    def query(self, predicate: Callable[[T], bool]) -> List[T]:
        ...

    def upsert(self, record: T) -> T:
        """Insert or replace one record (by id), persisted before return."""
        ...

    def delete(self, record_id: str) -> bool:
        ...


@dataclass
class Storage:
    """One RecordStore per collection, all bound to the same account."""
    backend: str
    account_id: int
    clients: RecordStore[Client]
    payments: RecordStore[Payment]
    projects: RecordStore[Project]
    goals: RecordStore[Goal]
    tasks: RecordStore[Task]
    profiles: RecordStore[UserProfile]

    def collections(self) -> dict:
        return {
            "clients": self.clients,
            "payments": self.payments,
            "projects": self.projects,
            "goals": self.goals,
            "tasks": self.tasks,
        }


def open_sql_storage(db: Session, account_id: int) -> Storage:
    from cgest.infrastructure.db.models import (
        ClientModel, PaymentModel, ProjectModel, GoalModel, TaskModel, UserProfileModel,
    )
    from cgest.infrastructure.storage.sql_store import SqlRecordStore

    return Storage(
        backend=BACKEND_SQL,
        account_id=account_id,
        clients=SqlRecordStore(db, ClientModel, Client, account_id),
        payments=SqlRecordStore(db, PaymentModel, Payment, account_id),
        projects=SqlRecordStore(db, ProjectModel, Project, account_id),
        goals=SqlRecordStore(db, GoalModel, Goal, account_id),
        tasks=SqlRecordStore(db, TaskModel, Task, account_id),
        profiles=SqlRecordStore(db, UserProfileModel, UserProfile, account_id),
    )


def open_local_storage(directory: str | Path, account_id: int) -> Storage:
    from cgest.infrastructure.storage.local_store import LocalRecordStore

    base = Path(directory) / str(account_id)
    return Storage(
        backend=BACKEND_LOCAL,
        account_id=account_id,
        clients=LocalRecordStore(base, "clients", Client),
        payments=LocalRecordStore(base, "payments", Payment),
        projects=LocalRecordStore(base, "projects", Project),
        goals=LocalRecordStore(base, "goals", Goal),
        tasks=LocalRecordStore(base, "tasks", Task),
        profiles=LocalRecordStore(base, "profiles", UserProfile),
    )


def open_storage(settings: Settings, account_id: int, db: Session | None = None) -> Storage:
    """
    Build the Storage for the configured backend.

    Raises:
        ValueError: unknown STORAGE_BACKEND, or SQL backend without a session
    """
    backend = settings.STORAGE_BACKEND
    if backend == BACKEND_SQL:
        if db is None:
            raise ValueError("SQL storage requires a database session")
        return open_sql_storage(db, account_id)
    if backend == BACKEND_LOCAL:
        return open_local_storage(settings.LOCAL_STORE_DIR, account_id)
    raise ValueError(f"Unknown storage backend: {backend}")
