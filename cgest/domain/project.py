"""
Project domain entity
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from cgest.domain.payment import PAYMENT_STATUS_PAID, PAYMENT_STATUS_PENDING
from cgest.domain.period import OptionalDate, in_period

PROJECT_STATUS_PENDING = "pending"
PROJECT_STATUS_IN_PROGRESS = "in_progress"
PROJECT_STATUS_COMPLETED = "completed"
PROJECT_STATUS_CANCELLED = "cancelled"
PROJECT_STATUSES = (
    PROJECT_STATUS_PENDING,
    PROJECT_STATUS_IN_PROGRESS,
    PROJECT_STATUS_COMPLETED,
    PROJECT_STATUS_CANCELLED,
)


@dataclass
class Project:
    """
    Projeto de um cliente.

    O status de pagamento é independente do ciclo de vida e soma na receita
    exatamente como um Payment pago (orçamento = valor).
    """
    id: str
    client_id: str
    name: str
    description: str = ""
    status: str = PROJECT_STATUS_PENDING
    payment_status: str = PAYMENT_STATUS_PENDING
    paid_at: OptionalDate = None
    budget: Decimal = Decimal("0")
    deadline: OptionalDate = None
    created_at: Optional[datetime] = None

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PAYMENT_STATUS_PAID

    @property
    def is_payment_pending(self) -> bool:
        return self.payment_status == PAYMENT_STATUS_PENDING

    def paid_in(self, year: int, month: Optional[int] = None) -> bool:
        return self.is_paid and in_period(self.paid_at, year, month)
