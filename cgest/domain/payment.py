"""
Payment domain entity
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from cgest.domain.period import LEGACY_DEFAULT_YEAR, OptionalDate, in_period

PAYMENT_STATUS_PAID = "paid"
PAYMENT_STATUS_PENDING = "pending"
PAYMENT_STATUSES = (PAYMENT_STATUS_PAID, PAYMENT_STATUS_PENDING)

# Campos aceitos numa atualização parcial (upsert)
UPSERT_FIELDS = ("value", "description", "status", "paid_at", "receipt_url")


@dataclass
class Payment:
    """
    Pagamento de um cliente.

    A unicidade não vem do id: o ledger trata (client_id, mês, ano) do
    `due_date` como chave natural.

    `year`/`month` explícitos existem em registros antigos; quando ausentes
    o período efetivo é derivado das datas (ver effective_period).
    """
    id: str
    client_id: str
    value: Decimal = Decimal("0")
    due_date: OptionalDate = None
    status: str = PAYMENT_STATUS_PENDING
    paid_at: OptionalDate = None
    description: str = ""
    receipt_url: Optional[str] = None
    year: Optional[int] = None
    month: Optional[int] = None

    @property
    def is_paid(self) -> bool:
        return self.status == PAYMENT_STATUS_PAID

    @property
    def is_pending(self) -> bool:
        return self.status == PAYMENT_STATUS_PENDING

    def effective_period(self) -> Tuple[int, Optional[int]]:
        """
        (year, month) attributed to this payment.

        Order: explicit fields, then due_date, then paid_at. A row with no
        explicit year and no dates belongs to LEGACY_DEFAULT_YEAR with an
        unknown month.
        """
        source = self.due_date or self.paid_at
        year = self.year
        month = self.month
        if year is None:
            year = source.year if source else LEGACY_DEFAULT_YEAR
        if month is None and source is not None:
            month = source.month
        return year, month

    def in_period(self, year: int, month: Optional[int] = None) -> bool:
        eff_year, eff_month = self.effective_period()
        if eff_year != year:
            return False
        return month is None or eff_month == month

    def due_in(self, year: int, month: int) -> bool:
        """Natural-key match used by the ledger: due_date month/year only."""
        return in_period(self.due_date, year, month)
