"""
Client domain entity
"""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from cgest.domain.period import DEFAULT_DUE_DAY, day_in_month

CLIENT_TYPE_RECURRING = "recurring"  # mensalista
CLIENT_TYPE_ONE_OFF = "one-off"  # avulso
CLIENT_TYPES = (CLIENT_TYPE_RECURRING, CLIENT_TYPE_ONE_OFF)

CLIENT_STATUS_ACTIVE = "active"
CLIENT_STATUS_INACTIVE = "inactive"
CLIENT_STATUSES = (CLIENT_STATUS_ACTIVE, CLIENT_STATUS_INACTIVE)

# Situação financeira exibida na lista de clientes
FINANCIAL_STATUS_OK = "ok"
FINANCIAL_STATUS_OVERDUE = "overdue"
FINANCIAL_STATUS_INACTIVE = "inactive"


@dataclass
class Client:
    """
    Cliente do negócio.

    `monthly_value` e `due_day` só fazem sentido para clientes mensalistas.
    """
    id: str
    name: str
    type: str = CLIENT_TYPE_ONE_OFF
    status: str = CLIENT_STATUS_ACTIVE
    monthly_value: Optional[Decimal] = None
    due_day: Optional[int] = None
    drive_folder_url: str = ""
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == CLIENT_STATUS_ACTIVE

    @property
    def is_recurring(self) -> bool:
        return self.type == CLIENT_TYPE_RECURRING

    def billing_date(self, year: int, month: int) -> date:
        """Due date of the monthly fee for the given period (day 10 if unset)."""
        return day_in_month(year, month, self.due_day or DEFAULT_DUE_DAY)
