"""
Clients use-cases and read service.
"""
import logging
from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from cgest.application.overdue import compute_client_financial_status
from cgest.application.payments import PaymentLedger
from cgest.domain.client import (
    Client, CLIENT_TYPES, CLIENT_STATUSES, CLIENT_TYPE_RECURRING, CLIENT_STATUS_ACTIVE,
)
from cgest.domain.period import month_label, new_id
from cgest.infrastructure.storage.repository import Storage

logger = logging.getLogger(__name__)


# ── Errors ──

class ClientValidationError(ValueError):
    pass


class ClientNotFoundError(ClientValidationError):
    pass


def get_client_or_raise(storage: Storage, client_id: str) -> Client:
    client = storage.clients.get(client_id)
    if client is None:
        raise ClientNotFoundError("Cliente não encontrado")
    return client


def _validate(name: str, client_type: str, status: str, due_day: Optional[int]) -> str:
    name = (name or "").strip()
    if not name:
        raise ClientValidationError("Nome do cliente não pode ser vazio")
    if client_type not in CLIENT_TYPES:
        raise ClientValidationError(f"Tipo de cliente inválido: {client_type}")
    if status not in CLIENT_STATUSES:
        raise ClientValidationError(f"Status inválido: {status}")
    if due_day is not None and not 1 <= due_day <= 31:
        raise ClientValidationError("Dia de vencimento deve estar entre 1 e 31")
    return name


# ── Use Cases ──

class CreateClientUseCase:
    def __init__(self, storage: Storage):
        self.storage = storage

    def execute(
        self,
        name: str,
        client_type: str = CLIENT_TYPE_RECURRING,
        status: str = CLIENT_STATUS_ACTIVE,
        monthly_value: Decimal | None = None,
        due_day: int | None = None,
        drive_folder_url: str = "",
    ) -> Client:
        name = _validate(name, client_type, status, due_day)
        client = Client(
            id=new_id(),
            name=name,
            type=client_type,
            status=status,
            monthly_value=Decimal(monthly_value or 0),
            due_day=due_day or None,
            drive_folder_url=drive_folder_url or "",
            created_at=datetime.now(timezone.utc),
        )
        self.storage.clients.upsert(client)
        logger.info("Client %s created (%s)", client.id, client.type)
        return client


class UpdateClientUseCase:
    def __init__(self, storage: Storage):
        self.storage = storage

    def execute(self, client_id: str, **changes) -> Client:
        client = get_client_or_raise(self.storage, client_id)
        allowed = {"name", "type", "status", "monthly_value", "due_day", "drive_folder_url"}
        unknown = set(changes) - allowed
        if unknown:
            raise ClientValidationError(f"Campos não suportados: {', '.join(sorted(unknown))}")

        updated = replace(client, **changes)
        updated.name = _validate(updated.name, updated.type, updated.status, updated.due_day)
        if updated.monthly_value is not None:
            updated.monthly_value = Decimal(updated.monthly_value)
        self.storage.clients.upsert(updated)
        return updated


class DeleteClientUseCase:
    """Hard delete. Pagamentos e projetos do cliente não são removidos."""

    def __init__(self, storage: Storage):
        self.storage = storage

    def execute(self, client_id: str) -> None:
        if not self.storage.clients.delete(client_id):
            raise ClientNotFoundError("Cliente não encontrado")
        logger.info("Client %s deleted", client_id)


# ── Read Service ──

class ClientReadService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def list_clients(self, today: date, status_filter: str | None = None) -> List[Dict[str, Any]]:
        """Clients with their financial status ("ok" / "overdue" / "inactive")."""
        payments = self.storage.payments.list()
        result = []
        for client in self.storage.clients.list():
            if status_filter and client.status != status_filter:
                continue
            result.append({
                "client": client,
                "financial_status": compute_client_financial_status(client, payments, today),
            })
        return result

    def payment_grid(self, client_id: str, year: int) -> List[Dict[str, Any]]:
        """
        Twelve cells (Jan..Dez) with the client's payment for each month,
        using the same period match as the ledger.
        """
        get_client_or_raise(self.storage, client_id)
        ledger = PaymentLedger(self.storage)
        return [
            {
                "month": month,
                "label": month_label(month),
                "payment": ledger.find_for_period(client_id, year, month),
            }
            for month in range(1, 13)
        ]
