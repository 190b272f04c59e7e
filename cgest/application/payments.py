"""
Payment ledger - at most one payment per (client, month, year).

Registrar pagamento é idempotente por período: a chave natural é o
client_id + mês/ano do due_date, não o id sintético do registro.
"""
import logging
import threading
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from cgest.domain.client import Client
from cgest.domain.payment import (
    Payment, PAYMENT_STATUS_PAID, PAYMENT_STATUS_PENDING, PAYMENT_STATUSES, UPSERT_FIELDS,
)
from cgest.domain.period import month_label, new_id, validate_month
from cgest.infrastructure.storage.repository import Storage

logger = logging.getLogger(__name__)

# Serializa busca-por-período + escrita dentro do processo
_period_lock = threading.RLock()


class PaymentValidationError(ValueError):
    """Erro de validação de pagamento"""
    pass


class PaymentLedger:
    """
    Reconciler for client payments.

    Falhas do storage não são tratadas aqui: sobem para quem chamou.
    """

    def __init__(self, storage: Storage, today: Callable[[], date] = date.today):
        self.storage = storage
        self.today = today

    def find_for_period(self, client_id: str, year: int, month: int) -> Optional[Payment]:
        """
        First stored payment of the client whose due_date is in month/year.

        Duplicates for the same period are a data-integrity fault: they are
        logged and the first one in storage order wins.
        """
        validate_month(month)
        matches = self.storage.payments.query(
            lambda p: p.client_id == client_id and p.due_in(year, month)
        )
        if len(matches) > 1:
            logger.warning(
                "Ambiguous payment period: client_id=%s %d-%02d has %d payments (%s); using %s",
                client_id, year, month, len(matches),
                ", ".join(p.id for p in matches), matches[0].id,
            )
        return matches[0] if matches else None

    def upsert(
        self,
        client_id: str,
        due_date: date,
        changes: Optional[Dict[str, Any]] = None,
        payment_id: Optional[str] = None,
    ) -> Payment:
        """
        Record a payment for the client's billing period of `due_date`.

        Args:
            client_id: ID do cliente (não validado aqui)
            due_date: Data de vencimento; mês/ano definem o período
            changes: Campos parciais (value, description, status, paid_at, receipt_url)
            payment_id: Se informado e existir, é o registro a atualizar

        Returns:
            Registro criado ou atualizado, já persistido

        Raises:
            PaymentValidationError: campo desconhecido ou status inválido/nulo
        """
        changes = dict(changes or {})
        unknown = set(changes) - set(UPSERT_FIELDS)
        if unknown:
            raise PaymentValidationError(f"Campos não suportados: {', '.join(sorted(unknown))}")
        if changes.get("description", "") is None:
            changes["description"] = ""
        if "status" in changes and changes["status"] not in PAYMENT_STATUSES:
            raise PaymentValidationError(f"Status inválido: {changes['status']}")
        if "value" in changes:
            changes["value"] = Decimal(changes["value"] if changes["value"] is not None else 0)

        with _period_lock:
            return self._write(client_id, due_date, changes, payment_id)

    def _write(
        self,
        client_id: str,
        due_date: date,
        changes: Dict[str, Any],
        payment_id: Optional[str],
    ) -> Payment:
        existing = None
        if payment_id is not None:
            existing = self.storage.payments.get(payment_id)
        if existing is None:
            existing = self.find_for_period(client_id, due_date.year, due_date.month)

        if existing is not None:
            payment = replace(existing, **changes)
            logger.info("Payment %s updated (client_id=%s, due %s)", payment.id, client_id, payment.due_date)
        else:
            payment = replace(
                Payment(
                    id=new_id(),
                    client_id=client_id,
                    value=Decimal("0"),
                    due_date=due_date,
                    status=PAYMENT_STATUS_PENDING,
                    description="",
                ),
                **changes,
            )
            logger.info("Payment %s created (client_id=%s, due %s)", payment.id, client_id, due_date)

        return self.storage.payments.upsert(payment)

    def record_manual_payment(
        self,
        client: Client,
        year: int,
        month: int,
        value: Decimal,
        description: Optional[str] = None,
        receipt_url: Optional[str] = None,
    ) -> Payment:
        """
        Manual payment entry: always ends as `paid`.

        paid_at keeps the existing value, otherwise becomes today. A new
        record is due and paid on the client's billing date of that month.
        """
        with _period_lock:
            return self._record_manual(client, year, month, value, description, receipt_url)

    def _record_manual(self, client, year, month, value, description, receipt_url) -> Payment:
        existing = self.find_for_period(client.id, year, month)

        changes: Dict[str, Any] = {"value": value, "status": PAYMENT_STATUS_PAID}
        if receipt_url is not None:
            changes["receipt_url"] = receipt_url
        if description is not None:
            changes["description"] = description

        if existing is not None:
            changes["paid_at"] = existing.paid_at or self.today()
            return self.upsert(client.id, existing.due_date, changes, payment_id=existing.id)

        if not description:
            changes["description"] = f"Pagamento {month_label(month)}/{year}"
        billing_date = client.billing_date(year, month)
        changes["paid_at"] = billing_date
        return self.upsert(client.id, billing_date, changes)

    def toggle(self, client: Client, year: int, month: int) -> Payment:
        """
        Flip the period's payment between paid and pending.

        Sem registro no período: cria já pago, com a mensalidade do cliente
        e paid_at no dia de vencimento (dia 10 se não configurado).
        """
        with _period_lock:
            return self._toggle(client, year, month)

    def _toggle(self, client: Client, year: int, month: int) -> Payment:
        existing = self.find_for_period(client.id, year, month)

        if existing is not None:
            if existing.is_paid:
                changes = {"status": PAYMENT_STATUS_PENDING, "paid_at": None}
            else:
                changes = {"status": PAYMENT_STATUS_PAID, "paid_at": self.today()}
            return self.upsert(client.id, existing.due_date, changes, payment_id=existing.id)

        billing_date = client.billing_date(year, month)
        return self.upsert(
            client.id,
            billing_date,
            {
                "value": client.monthly_value or Decimal("0"),
                "status": PAYMENT_STATUS_PAID,
                "paid_at": billing_date,
                "description": f"Mensalidade {month_label(month)}/{year}",
            },
        )
