"""
Overdue detection: client financial status and dashboard alerts.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from cgest.domain.client import (
    Client, FINANCIAL_STATUS_INACTIVE, FINANCIAL_STATUS_OK, FINANCIAL_STATUS_OVERDUE,
)
from cgest.domain.payment import Payment
from cgest.domain.period import in_period
from cgest.domain.project import Project

ALERT_KIND_PAYMENT = "payment"
ALERT_KIND_PROJECT = "project"

UNKNOWN_CLIENT_NAME = "Cliente"


def compute_client_financial_status(
    client: Client,
    payments: Iterable[Payment],
    today: date,
) -> str:
    """
    "inactive" | "overdue" | "ok".

    Em atraso quando:
      (a) há pagamento pendente com vencimento antes de hoje, ou
      (b) cliente mensalista com dia de vencimento já passado no mês
          corrente e nenhum pagamento pago neste mês.
    """
    if not client.is_active:
        return FINANCIAL_STATUS_INACTIVE

    own = [p for p in payments if p.client_id == client.id]

    if any(p.is_pending and p.due_date is not None and p.due_date < today for p in own):
        return FINANCIAL_STATUS_OVERDUE

    if client.is_recurring and client.due_day and today.day > client.due_day:
        paid_this_month = any(p.is_paid and p.in_period(today.year, today.month) for p in own)
        if not paid_this_month:
            return FINANCIAL_STATUS_OVERDUE

    return FINANCIAL_STATUS_OK


@dataclass(frozen=True)
class OverdueAlert:
    id: str
    kind: str
    client_id: str
    client_name: str
    description: str
    amount: Decimal
    date: Optional[date]


def build_overdue_alerts(
    payments: Iterable[Payment],
    projects: Iterable[Project],
    clients: Iterable[Client],
    year: int,
    month: int,
    dismissed_ids: Iterable[str],
    today: date,
) -> List[OverdueAlert]:
    """
    Alerts for the selected month.

    - pagamentos pendentes vencidos (due_date < hoje) do período selecionado
    - projetos com pagamento pendente e prazo no período, ou sem prazo
      (estes aparecem em qualquer período)

    Ids dispensados pelo usuário ficam de fora. Ordenação crescente por
    data; sem data vai para o fim, mantendo a ordem de entrada.
    """
    dismissed = set(dismissed_ids)
    names = {c.id: c.name for c in clients}
    alerts: List[OverdueAlert] = []

    for p in payments:
        if not p.is_pending or p.due_date is None or p.due_date >= today:
            continue
        if not p.in_period(year, month):
            continue
        alerts.append(OverdueAlert(
            id=p.id,
            kind=ALERT_KIND_PAYMENT,
            client_id=p.client_id,
            client_name=names.get(p.client_id, UNKNOWN_CLIENT_NAME),
            description=p.description or "Pendente",
            amount=p.value,
            date=p.due_date,
        ))

    for p in projects:
        if not p.is_payment_pending:
            continue
        if p.deadline is not None and not in_period(p.deadline, year, month):
            continue
        alerts.append(OverdueAlert(
            id=p.id,
            kind=ALERT_KIND_PROJECT,
            client_id=p.client_id,
            client_name=names.get(p.client_id, UNKNOWN_CLIENT_NAME),
            description=f"Projeto: {p.name}",
            amount=p.budget,
            date=p.deadline,
        ))

    alerts = [a for a in alerts if a.id not in dismissed]
    return sorted(alerts, key=lambda a: (a.date is None, a.date or date.min))
