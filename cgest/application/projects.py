"""
Projects use-cases.
"""
import logging
from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Callable

from cgest.application.clients import get_client_or_raise
from cgest.domain.payment import PAYMENT_STATUSES, PAYMENT_STATUS_PAID, PAYMENT_STATUS_PENDING
from cgest.domain.period import new_id
from cgest.domain.project import Project, PROJECT_STATUSES, PROJECT_STATUS_PENDING
from cgest.infrastructure.storage.repository import Storage

logger = logging.getLogger(__name__)


# ── Errors ──

class ProjectValidationError(ValueError):
    pass


def _get(storage: Storage, project_id: str) -> Project:
    project = storage.projects.get(project_id)
    if project is None:
        raise ProjectValidationError("Projeto não encontrado")
    return project


# ── Use Cases ──

class CreateProjectUseCase:
    def __init__(self, storage: Storage, today: Callable[[], date] = date.today):
        self.storage = storage
        self.today = today

    def execute(
        self,
        client_id: str,
        name: str,
        budget: Decimal = Decimal("0"),
        description: str = "",
        status: str = PROJECT_STATUS_PENDING,
        payment_status: str = PAYMENT_STATUS_PENDING,
        deadline: date | None = None,
    ) -> Project:
        name = (name or "").strip()
        if not name:
            raise ProjectValidationError("Nome do projeto não pode ser vazio")
        if status not in PROJECT_STATUSES:
            raise ProjectValidationError(f"Status inválido: {status}")
        if payment_status not in PAYMENT_STATUSES:
            raise ProjectValidationError(f"Status de pagamento inválido: {payment_status}")
        get_client_or_raise(self.storage, client_id)

        project = Project(
            id=new_id(),
            client_id=client_id,
            name=name,
            description=(description or "").strip(),
            status=status,
            payment_status=payment_status,
            paid_at=self.today() if payment_status == PAYMENT_STATUS_PAID else None,
            budget=Decimal(budget or 0),
            deadline=deadline,
            created_at=datetime.now(timezone.utc),
        )
        self.storage.projects.upsert(project)
        logger.info("Project %s created for client_id=%s", project.id, client_id)
        return project


class ChangeProjectStatusUseCase:
    def __init__(self, storage: Storage):
        self.storage = storage

    def execute(self, project_id: str, new_status: str) -> Project:
        if new_status not in PROJECT_STATUSES:
            raise ProjectValidationError(f"Status inválido: {new_status}")
        project = replace(_get(self.storage, project_id), status=new_status)
        return self.storage.projects.upsert(project)


class ChangeProjectPaymentStatusUseCase:
    """
    paid -> paid_at = hoje; pending -> paid_at limpo, para o projeto sair
    da receita do período.
    """

    def __init__(self, storage: Storage, today: Callable[[], date] = date.today):
        self.storage = storage
        self.today = today

    def execute(self, project_id: str, payment_status: str) -> Project:
        if payment_status not in PAYMENT_STATUSES:
            raise ProjectValidationError(f"Status de pagamento inválido: {payment_status}")
        project = _get(self.storage, project_id)
        paid_at = self.today() if payment_status == PAYMENT_STATUS_PAID else None
        project = replace(project, payment_status=payment_status, paid_at=paid_at)
        return self.storage.projects.upsert(project)


class DeleteProjectUseCase:
    def __init__(self, storage: Storage):
        self.storage = storage

    def execute(self, project_id: str) -> None:
        if not self.storage.projects.delete(project_id):
            raise ProjectValidationError("Projeto não encontrado")
